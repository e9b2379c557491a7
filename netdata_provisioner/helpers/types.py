"""Typed helpers for provisioner payloads (dataclasses, no TypedDict)."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from ..exceptions import NetDataServiceError


@dataclass(frozen=True, slots=True)
class Configuration:
    """Validated plugin configuration, immutable for one load cycle."""

    endpoint: str
    port: str
    hosts: tuple[str, ...]
    max_parallel_hosts: int = 10
    disable_on_unload: bool = False


@dataclass(frozen=True, slots=True)
class ServiceStatus:
    """State of the NetData unit as reported by systemd."""

    load_state: str | None = None
    active_state: str | None = None
    sub_state: str | None = None
    unit_file_state: str | None = None

    @property
    def running(self) -> bool:
        """Return True when the unit is loaded, active and running."""
        return (
            self.load_state == "loaded"
            and self.active_state == "active"
            and self.sub_state == "running"
        )


@dataclass(frozen=True, slots=True)
class StatusCheck:
    """Outcome of a status query: the raw status and an optional failure."""

    status: ServiceStatus
    error: NetDataServiceError | None = None

    @property
    def ok(self) -> bool:
        """Return True when no failure was detected."""
        return self.error is None

    def raise_for_status(self) -> StatusCheck:
        """Raise the carried failure, if any."""
        if self.error is not None:
            raise self.error
        return self


@dataclass(slots=True)
class HostOutcome:
    """Result of provisioning a single host."""

    host: str
    success: bool
    error: BaseException | None = None
    result: Any = None


@dataclass(frozen=True, slots=True)
class ApiMethod:
    """One entry of the RPC surface exposed to the orchestrator."""

    name: str
    description: str
    handler: Callable[[Mapping[str, Any]], Awaitable[Any]]
    permission: str = "admin"
    params: dict[str, Any] | None = None
    resolve: dict[str, list[str]] | None = field(default=None)
