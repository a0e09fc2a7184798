"""Download-once provisioner for lombok.jar."""

import asyncio
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional
from urllib.parse import urlparse
from urllib.request import url2pathname

import httpx

from lombok_agent.core.path_utils import ensure_directory_exists, is_lsp_download_disabled

from .errors import (
    DownloadRequestError,
    DownloadStatusError,
    JarDownloadError,
    JarWriteError,
)
from .interface import JarProvisionerInterface

logger = logging.getLogger(__name__)

LOMBOK_URL = "https://projectlombok.org/downloads/lombok.jar"


def _path_exists(path: Path) -> bool:
    """Return True if path exists; stat failures count as missing."""
    try:
        return path.exists()
    except (OSError, ValueError):
        return False


def resolve_file_path(value: Any) -> Optional[Path]:
    """
    Coerce a jar location into a filesystem path.

    Accepts non-empty strings, path-like objects and ``file://`` URLs.
    Anything else (including URLs with another scheme and paths with an
    embedded NUL) yields None.
    """
    if isinstance(value, os.PathLike):
        path = Path(value)
    elif not isinstance(value, str) or not value:
        return None
    elif value.startswith("file:"):
        parsed = urlparse(value)
        if parsed.netloc not in ("", "localhost") or not parsed.path:
            return None
        path = Path(url2pathname(parsed.path))
    elif "://" in value:
        return None
    else:
        path = Path(value)
    if "\x00" in str(path):
        return None
    return path


class LombokJarProvisioner(JarProvisionerInterface):
    """
    Ensures lombok.jar exists locally, downloading it on a cache miss.

    The jar is fetched with a single GET, no retries. Every failure is logged
    and reported as None; nothing is raised to the caller. The body is written
    to a sibling ``.part`` file and moved into place so an interrupted write
    never looks like a cached jar.
    """

    def __init__(
        self,
        download_url: str = LOMBOK_URL,
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the provisioner.

        Args:
            download_url: Where to fetch lombok.jar from
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests inject a MockTransport)
        """
        self._download_url = download_url
        self._timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def download_url(self) -> str:
        return self._download_url

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client and release connections."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "LombokJarProvisioner":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def ensure(self, target: Any, download_disabled: bool = False) -> Optional[Path]:
        """
        Make sure lombok.jar exists at target.

        Args:
            target: Destination path (str, Path or file:// URL)
            download_disabled: If True, a missing jar is reported as unavailable
                               without creating directories or using the network

        Returns:
            Path of the jar, or None if it is unavailable
        """
        path = resolve_file_path(target)
        if path is None:
            logger.debug(f"Ignoring invalid jar location: {target!r}")
            return None

        if await asyncio.to_thread(_path_exists, path):
            return path

        if download_disabled:
            logger.debug(f"lombok.jar missing at {path} and downloads are disabled")
            return None

        try:
            await self._download(path)
        except JarDownloadError as e:
            logger.warning(f"Failed to provision lombok.jar at {path}: {e}")
            return None

        # A write can report success without leaving a file behind
        if not await asyncio.to_thread(_path_exists, path):
            logger.warning(f"lombok.jar still missing after download: {path}")
            return None

        return path

    async def _download(self, path: Path) -> None:
        """
        Fetch the jar and write it to path.

        Raises:
            DownloadRequestError: Connection failure, timeout or unreadable body
            DownloadStatusError: Non-success HTTP status
            JarWriteError: Directory creation or file write failed
        """
        if not await asyncio.to_thread(ensure_directory_exists, path.parent):
            raise JarWriteError(f"Cannot create directory {path.parent}")

        logger.info(f"Downloading lombok.jar from {self._download_url}")
        client = await self._get_client()
        try:
            response = await client.get(self._download_url)
        except httpx.TimeoutException as e:
            raise DownloadRequestError(f"Request timeout: {e}") from e
        except httpx.HTTPError as e:
            raise DownloadRequestError(f"Request error: {e}") from e

        if not response.is_success:
            raise DownloadStatusError(
                f"Download failed: {response.status_code} (url={self._download_url})",
                status_code=response.status_code,
            )

        body = response.content
        if not body:
            raise DownloadRequestError(f"Empty response body (url={self._download_url})")

        await asyncio.to_thread(_write_atomically, path, body)
        logger.info(f"Saved lombok.jar to {path} ({len(body)} bytes)")


def _write_atomically(path: Path, body: bytes) -> None:
    """Write body to a temporary sibling and move it over path."""
    partial = path.with_name(path.name + ".part")
    try:
        partial.write_bytes(body)
        os.replace(partial, path)
    except (OSError, ValueError) as e:
        try:
            partial.unlink(missing_ok=True)
        except (OSError, ValueError):
            logger.debug(f"Could not remove partial download: {partial}")
        raise JarWriteError(f"Cannot write {path}: {e}") from e


async def ensure_lombok_jar(
    target: Any,
    env: Optional[Mapping[str, Any]] = None,
    download_url: str = LOMBOK_URL,
) -> Optional[Path]:
    """
    Ensure lombok.jar exists at target, honouring OPENCODE_DISABLE_LSP_DOWNLOAD.

    Args:
        target: Destination path (str, Path or file:// URL)
        env: Environment mapping. Defaults to ``os.environ``.
        download_url: Where to fetch lombok.jar from

    Returns:
        Path of the jar, or None if it is unavailable
    """
    async with LombokJarProvisioner(download_url=download_url) as provisioner:
        return await provisioner.ensure(target, download_disabled=is_lsp_download_disabled(env))
