"""Initialize NetData integration plugin."""

from __future__ import annotations

from collections.abc import Callable, Mapping
import logging
from typing import Any

from .api import register_api_methods
from .helpers.helpers import (
    CONFIGURATION_SCHEMA,
    load_configuration_file,
    validate_configuration,
)
from .helpers.types import Configuration
from .orchestrator import Orchestrator
from .provisioner import NetDataProvisioner

__version__ = "0.1.0"

__all__ = [
    "CONFIGURATION_SCHEMA",
    "NetDataPlugin",
    "NetDataProvisioner",
    "create_plugin",
]

_LOGGER = logging.getLogger(__name__)


class NetDataPlugin:
    """Plugin lifecycle: configure, load, unload.

    Each configuration gets its own NetDataProvisioner; the registered RPC
    methods stay bound to the provisioner they were registered with until
    they are swapped or removed.
    """

    def __init__(self, orchestrator: Orchestrator) -> None:
        """Initialize plugin for an orchestrator instance."""
        self.orchestrator = orchestrator
        self.provisioner: NetDataProvisioner | None = None
        self._unset_api_methods: Callable[[], None] | None = None

    @property
    def config(self) -> Configuration | None:
        """Return the active configuration."""
        return self.provisioner.config if self.provisioner else None

    async def configure(self, conf: Mapping[str, Any], loaded: bool = False) -> None:
        """Apply a new configuration, re-provisioning if already loaded."""
        provisioner = NetDataProvisioner(self.orchestrator, validate_configuration(conf))
        if not loaded:
            self.provisioner = provisioner
            return

        _LOGGER.info("Reloading configuration")
        await self._provision(provisioner)
        self._register(provisioner)

    async def configure_from_file(self, config_path: str, loaded: bool = False) -> None:
        """Apply configuration read from a YAML file."""
        config = load_configuration_file(config_path)
        await self.configure(
            {
                "endpoint": config.endpoint,
                "port": config.port,
                "hosts": list(config.hosts),
                "max_parallel_hosts": config.max_parallel_hosts,
                "disable_on_unload": config.disable_on_unload,
            },
            loaded=loaded,
        )

    async def _provision(self, provisioner: NetDataProvisioner) -> None:
        """Check appliance, configure receiver, provision every host."""
        (await provisioner.get_netdata_status()).raise_for_status()
        await provisioner.configure_xoa_to_receive_data()
        await provisioner.initialize()

    def _register(self, provisioner: NetDataProvisioner) -> None:
        """Register RPC methods bound to provisioner, removing the old ones first."""
        if self._unset_api_methods is not None:
            self._unset_api_methods()
            self._unset_api_methods = None
        self._unset_api_methods = register_api_methods(self.orchestrator, provisioner)
        self.provisioner = provisioner

    async def load(self) -> None:
        """Provision appliance and hosts, then expose RPC methods."""
        if self.provisioner is None:
            raise RuntimeError("Plugin must be configured before it is loaded")
        await self._provision(self.provisioner)
        self._register(self.provisioner)

    async def unload(self) -> None:
        """Remove RPC methods; optionally disable local NetData."""
        if self._unset_api_methods is not None:
            self._unset_api_methods()
            self._unset_api_methods = None
        if self.provisioner is not None and self.provisioner.config.disable_on_unload:
            await self.provisioner.disable_netdata()
        _LOGGER.info("NetData plugin unloaded.")


def create_plugin(orchestrator: Orchestrator) -> NetDataPlugin:
    """Build the plugin instance the orchestrator loads."""
    return NetDataPlugin(orchestrator)
