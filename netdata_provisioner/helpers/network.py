"""Route lookup."""

import logging

from .process import run_command

_LOGGER = logging.getLogger(__name__)


def parse_source_ip(route: str) -> str | None:
    """Return the token after `src` in `ip route get` output, or None."""
    elements = route.split()
    try:
        return elements[elements.index("src") + 1]
    except (ValueError, IndexError):
        return None


async def async_get_routable_ip(address: str) -> str | None:
    """Find the local address used to reach the given destination."""
    result = await run_command("ip", "route", "get", address)
    source_ip = parse_source_ip(result.stdout)
    if source_ip is None:
        _LOGGER.warning("No source address in route to %s: %s", address, result.stdout)
    else:
        _LOGGER.debug("Route to %s goes out through %s", address, source_ip)
    return source_ip
