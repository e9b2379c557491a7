"""Interfaces of the orchestrator the plugin runs inside."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Protocol


class Host(Protocol):
    """Hypervisor host descriptor."""

    uuid: str
    address: str
    xapi_ref: str


class HostXapi(Protocol):
    """XAPI connection able to reach a host."""

    async def call(self, method: str, *args: Any) -> Any:
        """Invoke an XAPI method."""


class Orchestrator(Protocol):
    """The subset of the orchestrator server used by the plugin."""

    def get_object(self, object_id: str, object_type: str) -> Host:
        """Resolve an object id into an object of the given type."""

    def get_xapi(self, host: Host) -> HostXapi:
        """Return the XAPI connection for host."""

    def add_api_methods(self, methods: Mapping[str, Mapping[str, Any]]) -> Callable[[], None]:
        """Register namespaced RPC methods; return a callable removing them."""
