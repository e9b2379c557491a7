"""Errors raised by the NetData provisioner."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .helpers.types import HostOutcome, ServiceStatus


class NetDataError(Exception):
    """Base class for all provisioner errors."""


class ConfigurationError(NetDataError):
    """Plugin configuration is missing a field or has a wrong type."""


class NetDataServiceError(NetDataError):
    """The local NetData service is not in a healthy state."""

    def __init__(self, message: str, data: ServiceStatus | None = None) -> None:
        """Keep the raw status as diagnostic payload."""
        super().__init__(message)
        self.data = data


class ServiceNotFoundError(NetDataServiceError):
    """systemd does not know the unit."""


class ServiceDisabledError(NetDataServiceError):
    """Unit exists but is not enabled at boot."""


class UnknownServiceStateError(NetDataServiceError):
    """Any other non-running state."""


class CommandError(NetDataError):
    """A local command exited with a non-zero status."""

    def __init__(self, command: list[str], returncode: int | None, stderr: str = "") -> None:
        """Initialize with the failed command line and its output."""
        super().__init__(
            f"Command {' '.join(command)!r} failed ({returncode}): {stderr.strip()}"
        )
        self.command = command
        self.returncode = returncode
        self.stderr = stderr


class HostProvisioningError(NetDataError):
    """One or more hosts failed to install or verify NetData."""

    def __init__(self, failed: list[str], outcomes: list[HostOutcome] | None = None) -> None:
        """Initialize with failing host uuids and every collected outcome."""
        super().__init__(f"Installation on {', '.join(failed)} failed.")
        self.failed = failed
        self.outcomes: list[Any] = list(outcomes or [])
