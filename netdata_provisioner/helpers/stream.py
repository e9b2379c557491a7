"""Stream receiver configuration on the appliance."""

import asyncio
import logging
from pathlib import Path

from ..presets.const import API_KEY_PATH, STREAM_CONF_PATH

_LOGGER = logging.getLogger(__name__)


async def async_read_api_key(path: str = API_KEY_PATH) -> str:
    """Return the unique id NetData assigned to this machine.

    Raises:
        OSError: If the file is absent (NetData never installed or started).

    """
    try:
        api_key = await asyncio.to_thread(Path(path).read_text, encoding="utf-8")
    except OSError as err:
        _LOGGER.error("Cannot read NetData unique id from %s: %s", path, err)
        raise
    _LOGGER.info("NetData receiver is identified by: %s", api_key)
    return api_key


def render_stream_config(api_key: str) -> str:
    """Build stream.conf accepting any source identified by api_key."""
    return (
        "\n"
        f"[{api_key}]\n"
        "        enabled = yes\n"
        "        allow from = *\n"
        "        default memory mode = ram\n"
    )


async def async_write_stream_config(content: str, path: str = STREAM_CONF_PATH) -> None:
    """Write stream.conf verbatim."""
    _LOGGER.debug("Writing stream configuration to %s", path)
    await asyncio.to_thread(Path(path).write_text, content, encoding="utf-8")


async def async_read_stream_config(path: str = STREAM_CONF_PATH) -> str | None:
    """Return current stream.conf contents or None if missing."""
    try:
        return await asyncio.to_thread(Path(path).read_text, encoding="utf-8")
    except FileNotFoundError:
        _LOGGER.debug("Stream configuration not found: %s", path)
        return None
