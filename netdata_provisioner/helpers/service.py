"""systemd helpers for the local NetData unit."""

import logging

from ..exceptions import (
    NetDataServiceError,
    ServiceDisabledError,
    ServiceNotFoundError,
    UnknownServiceStateError,
)
from ..presets.const import SERVICE_NAME
from .process import run_command
from .types import ServiceStatus, StatusCheck

_LOGGER = logging.getLogger(__name__)

_STATUS_PROPERTIES = ("LoadState", "ActiveState", "SubState", "UnitFileState")


def _status_command(unit: str) -> list[str]:
    """Compose `systemctl show` command."""
    command = ["systemctl", "show"]
    for prop in _STATUS_PROPERTIES:
        command.extend(["-p", prop])
    command.extend(["--value", unit])
    return command


def parse_status(stdout: str) -> ServiceStatus:
    """Split `systemctl show --value` output into a ServiceStatus.

    Missing trailing fields are left as None.
    """
    fields = stdout.split("\n")
    fields += [None] * (len(_STATUS_PROPERTIES) - len(fields))
    load, active, sub, enabled = fields[: len(_STATUS_PROPERTIES)]
    return ServiceStatus(
        load_state=load,
        active_state=active,
        sub_state=sub,
        unit_file_state=enabled,
    )


def classify_status(status: ServiceStatus) -> StatusCheck:
    """Map a raw status onto a StatusCheck, first matching rule wins."""
    error: NetDataServiceError | None
    if status.running:
        error = None
    elif status.load_state == "not-found":
        error = ServiceNotFoundError(
            "Could not find NetData service. Is it installed?", status
        )
    elif status.unit_file_state == "disabled":
        error = ServiceDisabledError(
            "Service is installed, but it will not run at boot.", status
        )
    else:
        error = UnknownServiceStateError("Unknown error.", status)
    return StatusCheck(status=status, error=error)


async def async_get_status(unit: str = SERVICE_NAME) -> StatusCheck:
    """Query systemd for the unit state and classify it."""
    result = await run_command(*_status_command(unit))
    check = classify_status(parse_status(result.stdout))
    if check.ok:
        _LOGGER.info("NetData is installed and active.")
    else:
        _LOGGER.error("%s Status: %s", check.error, check.status)
    return check


async def async_enable(unit: str = SERVICE_NAME) -> None:
    """Enable unit at boot."""
    await run_command("systemctl", "enable", unit)


async def async_disable(unit: str = SERVICE_NAME, now: bool = False) -> None:
    """Disable unit at boot; with now, stop it as well."""
    if now:
        await run_command("systemctl", "disable", "--now", unit)
    else:
        await run_command("systemctl", "disable", unit)


async def async_restart(unit: str = SERVICE_NAME) -> None:
    """Restart unit."""
    await run_command("systemctl", "restart", unit)
