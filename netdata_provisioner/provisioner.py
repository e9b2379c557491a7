"""Provision NetData on the appliance and stream metrics from every host to it."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from .exceptions import HostProvisioningError, NetDataError
from .helpers import network, service, stream
from .helpers.installer import NetDataInstaller
from .helpers.types import Configuration, HostOutcome, StatusCheck
from .presets.const import (
    HOST_CALL_PLUGIN,
    HOST_PLUGIN,
    PROC_GET_API_KEY,
    PROC_INSTALL,
    PROC_IS_INSTALLED,
    host_destination,
)

if TYPE_CHECKING:
    from .orchestrator import Host, Orchestrator

_LOGGER = logging.getLogger(__name__)


class NetDataProvisioner:
    """Runs every provisioning operation against one configuration.

    A new instance is built for each configuration; nothing here is mutated
    after construction.
    """

    def __init__(self, orchestrator: Orchestrator, config: Configuration) -> None:
        """Initialize provisioner."""
        self.orchestrator = orchestrator
        self.config = config
        self.installer = NetDataInstaller()

    async def _call_host_plugin(self, host: Host, procedure: str, params: dict) -> Any:
        """Call a procedure of the NetData plugin installed on host."""
        xapi = self.orchestrator.get_xapi(host)
        _LOGGER.debug("Calling %s on host %s", procedure, host.uuid)
        return await xapi.call(HOST_CALL_PLUGIN, host.xapi_ref, HOST_PLUGIN, procedure, params)

    # Appliance side

    async def get_netdata_status(self) -> StatusCheck:
        """Check the local NetData unit."""
        return await service.async_get_status()

    async def get_local_api_key(self) -> str:
        """Return the appliance unique id used as api key by all hosts."""
        return await stream.async_read_api_key()

    async def stream_configuration(self) -> str:
        """Render stream.conf for the current api key."""
        return stream.render_stream_config(await self.get_local_api_key())

    async def install_netdata(self) -> None:
        """Install latest up-stream NetData package."""
        await self.installer.install()

    async def configure_xoa_to_receive_data(self) -> StatusCheck:
        """Write stream.conf, enable and restart NetData, confirm it runs."""
        config_data = await self.stream_configuration()
        await stream.async_write_stream_config(config_data)
        await service.async_enable()
        await service.async_restart()
        return (await self.get_netdata_status()).raise_for_status()

    async def disable_netdata(self) -> StatusCheck:
        """Stop NetData and keep it from starting at boot."""
        await service.async_disable(now=True)
        check = await self.get_netdata_status()
        if check.status.active_state == "active":
            error = NetDataError("Cannot disable NetData")
            _LOGGER.error("%s Status: %s", error, check.status)
            raise error
        _LOGGER.info("NetData disabled.")
        return check

    async def is_configured_to_receive_streaming(self) -> bool:
        """Check the appliance has the expected stream configuration."""
        (await self.get_netdata_status()).raise_for_status()
        current_config = await stream.async_read_stream_config()
        expected_config = await self.stream_configuration()
        return current_config == expected_config

    async def get_routable_ip(self, host_address: str) -> str | None:
        """Return the local address a host can reach us on."""
        return await network.async_get_routable_ip(host_address)

    # Host side

    async def get_host_api_key(self, host: Host) -> Any:
        """Return the api key the host is streaming with."""
        return await self._call_host_plugin(host, PROC_GET_API_KEY, {})

    async def is_netdata_installed_on_host(self, host: Host) -> bool:
        """Probe host for NetData; any remote failure means no."""
        try:
            await self._call_host_plugin(host, PROC_IS_INSTALLED, {})
        except Exception as err:
            _LOGGER.error("NetData probe on %s failed: %s", host.uuid, err)
            return False
        return True

    async def configure_host_to_stream_here(self, host: Host) -> Any:
        """Install NetData on host and point its stream to the appliance."""
        routable_ip = await self.get_routable_ip(host.address)
        destination = host_destination(routable_ip, self.config.port)
        api_key = await self.get_local_api_key()
        return await self._call_host_plugin(
            host, PROC_INSTALL, {"api_key": api_key, "destination": destination}
        )

    # Fleet

    def resolve_hosts(self) -> list[Host]:
        """Resolve configured host ids into host objects."""
        return [self.orchestrator.get_object(host_id, "host") for host_id in self.config.hosts]

    async def _provision_host(self, host: Host, semaphore: asyncio.Semaphore) -> HostOutcome:
        """Configure one host and verify the installation."""
        async with semaphore:
            try:
                result = await self.configure_host_to_stream_here(host)
                success = await self.is_netdata_installed_on_host(host)
            except Exception as err:
                _LOGGER.exception("Provisioning of %s failed", host.uuid)
                return HostOutcome(host=host.uuid, success=False, error=err)

        if not success:
            _LOGGER.error("Installation on %s failed.", host.uuid)
            return HostOutcome(host=host.uuid, success=False, result=result)
        _LOGGER.info("NetData successfully installed on %s", host.uuid)
        return HostOutcome(host=host.uuid, success=True, result=result)

    async def provision_hosts(self) -> list[HostOutcome]:
        """Provision every configured host and collect per-host outcomes."""
        hosts = self.resolve_hosts()
        semaphore = asyncio.Semaphore(self.config.max_parallel_hosts)
        _LOGGER.debug(
            "Provisioning %d hosts, %d at a time", len(hosts), self.config.max_parallel_hosts
        )
        return list(
            await asyncio.gather(*(self._provision_host(host, semaphore) for host in hosts))
        )

    async def initialize(self) -> list[HostOutcome]:
        """Provision all hosts; raise if any of them failed."""
        outcomes = await self.provision_hosts()
        failed = [outcome.host for outcome in outcomes if not outcome.success]
        if failed:
            error = HostProvisioningError(failed, outcomes)
            _LOGGER.error("%s", error)
            raise error
        return outcomes
