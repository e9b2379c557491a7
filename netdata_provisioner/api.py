"""RPC methods exposed to orchestrator operators."""

from __future__ import annotations

from collections.abc import Callable
import logging
from typing import TYPE_CHECKING, Any

from .helpers.types import ApiMethod
from .presets.const import DOMAIN

if TYPE_CHECKING:
    from .orchestrator import Orchestrator
    from .provisioner import NetDataProvisioner

_LOGGER = logging.getLogger(__name__)

HOST_PARAM = {"host": {"type": "string"}}
CAN_ADMINISTRATE_HOST = {"host": ["host", "host", "administrate"]}


def build_api_methods(provisioner: NetDataProvisioner) -> tuple[ApiMethod, ...]:
    """Return the static method table bound to provisioner."""

    async def is_configured_to_receive_streaming(params):
        return await provisioner.is_configured_to_receive_streaming()

    async def configure_xoa_to_receive_data(params):
        check = await provisioner.configure_xoa_to_receive_data()
        return check.ok

    async def get_local_api_key(params):
        return await provisioner.get_local_api_key()

    async def install_netdata(params):
        await provisioner.install_netdata()

    async def configure_host_to_stream_here(params):
        return await provisioner.configure_host_to_stream_here(params["host"])

    async def is_netdata_installed_on_host(params):
        return await provisioner.is_netdata_installed_on_host(params["host"])

    async def get_host_api_key(params):
        return await provisioner.get_host_api_key(params["host"])

    return (
        ApiMethod(
            name="isConfiguredToReceiveStreaming",
            description="Check if the XOA host has the expected stream configuration.",
            handler=is_configured_to_receive_streaming,
        ),
        ApiMethod(
            name="configureXoaToReceiveData",
            description="Install and configure NetData on XOA VM.",
            handler=configure_xoa_to_receive_data,
        ),
        ApiMethod(
            name="getLocalApiKey",
            description="Get the UUID of the XOA VM, used as the api key by all hosts.",
            handler=get_local_api_key,
        ),
        ApiMethod(
            name="configureHostToStreamHere",
            description="Call the XAPI methods to setup NetData on a given host and stream data to XOA",
            handler=configure_host_to_stream_here,
            params=HOST_PARAM,
            resolve=CAN_ADMINISTRATE_HOST,
        ),
        ApiMethod(
            name="isNetDataInstalledOnHost",
            description="Check if NetData service is installed on the given host machine.",
            handler=is_netdata_installed_on_host,
            params=HOST_PARAM,
            resolve=CAN_ADMINISTRATE_HOST,
        ),
        ApiMethod(
            name="getHostApiKey",
            description="Get the API Key that a given host is streaming with.",
            handler=get_host_api_key,
            params=HOST_PARAM,
            resolve=CAN_ADMINISTRATE_HOST,
        ),
        ApiMethod(
            name="installNetData",
            description="Install latest up-stream NetData package.",
            handler=install_netdata,
        ),
    )


def _as_registry_entry(method: ApiMethod) -> dict[str, Any]:
    """Flatten an ApiMethod into what the orchestrator registry accepts."""
    entry: dict[str, Any] = {
        "handler": method.handler,
        "description": method.description,
        "permission": method.permission,
    }
    if method.params is not None:
        entry["params"] = method.params
    if method.resolve is not None:
        entry["resolve"] = method.resolve
    return entry


def register_api_methods(
    orchestrator: Orchestrator, provisioner: NetDataProvisioner
) -> Callable[[], None]:
    """Register the method table under the plugin namespace.

    Returns:
        Callable removing the registered methods.

    """
    methods = build_api_methods(provisioner)
    unset = orchestrator.add_api_methods(
        {DOMAIN: {method.name: _as_registry_entry(method) for method in methods}}
    )
    _LOGGER.debug("Registered %d methods under %s", len(methods), DOMAIN)
    return unset
