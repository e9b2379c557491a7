"""Local process utils."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
import logging

from ..exceptions import CommandError

_LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class CompletedProcess:
    """Finished local command."""

    args: list[str]
    returncode: int | None
    stdout: str
    stderr: str


async def run_command(
    *args: str,
    stdin: bytes | None = None,
    timeout: float | None = None,
    check: bool = True,
) -> CompletedProcess:
    """Run a local command and collect its output.

    Args:
        args: Program and its arguments, passed without a shell.
        stdin: Optional bytes fed to the process.
        timeout: Hard timeout in seconds; None waits forever.
        check: Raise CommandError on non-zero exit.

    Returns:
        CompletedProcess with decoded stdout and stderr.

    Raises:
        CommandError: If the command fails and check is set.
        TimeoutError: If the command does not finish in time.

    """
    command = list(args)
    _LOGGER.debug("Executing local command | %s", " ".join(command))
    proc = await asyncio.create_subprocess_exec(
        *command,
        stdin=asyncio.subprocess.PIPE if stdin is not None else None,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    try:
        out, err = await asyncio.wait_for(proc.communicate(stdin), timeout)
    except TimeoutError:
        _LOGGER.warning("Command timed out: %s", " ".join(command))
        raise
    finally:
        if proc.returncode is None:
            proc.kill()
            await proc.wait()

    result = CompletedProcess(
        args=command,
        returncode=proc.returncode,
        stdout=out.decode(errors="replace") if out else "",
        stderr=err.decode(errors="replace") if err else "",
    )
    if result.returncode != 0:
        _LOGGER.error(
            "Command \n\t%s\nrun failed: %s | %s",
            " ".join(command),
            result.returncode,
            result.stderr,
        )
        if check:
            raise CommandError(command, result.returncode, result.stderr)
    return result
