"""Install NetData on the appliance from the vendor APT repository."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import aiohttp

from ..presets.const import (
    APT_SOURCE_PATH,
    KEYRING_PATH,
    NETDATA_KEY,
    NETDATA_REPO,
    SERVICE_NAME,
)
from .process import run_command

_LOGGER = logging.getLogger(__name__)


class NetDataInstaller:
    """Add the vendor repository and install the package.

    Every step is repeated on each run; prior installation is not checked.
    """

    def __init__(
        self,
        key_url: str = NETDATA_KEY,
        repo_url: str = NETDATA_REPO,
        keyring_path: str = KEYRING_PATH,
        source_path: str = APT_SOURCE_PATH,
    ) -> None:
        """Initialize installer with repository locations."""
        self.key_url = key_url
        self.repo_url = repo_url
        self.keyring_path = keyring_path
        self.source_path = source_path

    async def _download_key(self, timeout: float = 60.0) -> bytes:
        """Fetch the repository signing key."""
        async with (
            aiohttp.ClientSession() as sess,
            sess.get(self.key_url, timeout=aiohttp.ClientTimeout(total=timeout)) as resp,
        ):
            if resp.status // 100 != 2:
                text = await resp.text()
                raise RuntimeError(f"Key download failed ({resp.status}): {text}")
            return await resp.read()

    async def import_key(self) -> None:
        """Import signing key into the dedicated keyring."""
        key = await self._download_key()
        _LOGGER.debug("Importing %d bytes of signing key into %s", len(key), self.keyring_path)
        await run_command("apt-key", "--keyring", self.keyring_path, "add", "-", stdin=key)

    async def distribution(self) -> str:
        """Return OS codename, e.g. "bookworm"."""
        result = await run_command("lsb_release", "-cs")
        return result.stdout.strip()

    def source_entry(self, distribution: str) -> str:
        """Compose APT source line."""
        return f"deb [signed-by={self.keyring_path}] {self.repo_url} {distribution} main"

    async def write_source(self, distribution: str) -> None:
        """Write APT source list entry."""
        await asyncio.to_thread(
            Path(self.source_path).write_text,
            self.source_entry(distribution),
            encoding="utf-8",
        )

    async def install(self) -> None:
        """Run the whole installation."""
        _LOGGER.info("Installing NetData from %s", self.repo_url)
        await self.import_key()
        distribution = await self.distribution()
        await self.write_source(distribution)
        await run_command("apt", "update")
        await run_command("apt", "install", "-y", SERVICE_NAME)
        _LOGGER.info("NetData package installed for %s", distribution)
