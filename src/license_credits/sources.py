"""Access to credit catalog documents.

A catalog may live on the local filesystem or behind an HTTP(S) URL. This
module turns any supported source into a binary stream for the parser and
wraps every read failure into a CatalogIOError naming the source.
"""

import asyncio
import io
import logging
from pathlib import Path
from typing import BinaryIO, Union
from urllib.parse import unquote, urlparse

import aiohttp

from license_credits.exceptions import CatalogIOError

logger = logging.getLogger(__name__)

Source = Union[str, Path, BinaryIO]

DEFAULT_TIMEOUT_SECONDS = 30.0


def describe_source(source: Source) -> str:
    """Return a human-readable identifier for a source.

    Args:
        source: Path, URI string or binary file object.

    Returns:
        The path or URI, or the ``name`` of a file object when available.
    """
    if isinstance(source, (str, Path)):
        return str(source)
    return str(getattr(source, "name", "<stream>"))


def is_remote(source: Source) -> bool:
    """Check whether a source must be fetched over HTTP(S)."""
    if not isinstance(source, str):
        return False
    return urlparse(source).scheme in ("http", "https")


def _local_path(source: Union[str, Path]) -> Path:
    if isinstance(source, Path):
        return source
    parsed = urlparse(source)
    if parsed.scheme == "file":
        return Path(unquote(parsed.path))
    return Path(source)


async def _fetch(url: str, timeout: float) -> bytes:
    """Download a remote catalog.

    Args:
        url: HTTP(S) URL of the catalog.
        timeout: Total timeout in seconds.

    Returns:
        Raw document bytes.

    Raises:
        aiohttp.ClientError: On connection failures or non-2xx status.
    """
    client_timeout = aiohttp.ClientTimeout(total=timeout)
    async with aiohttp.ClientSession(timeout=client_timeout) as session:
        async with session.get(url) as response:
            response.raise_for_status()
            return await response.read()


def _in_event_loop() -> bool:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True


def fetch_remote(url: str, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> bytes:
    """Synchronously download a remote catalog.

    Must not be called from a coroutine: the download runs in its own
    event loop.

    Args:
        url: HTTP(S) URL of the catalog.
        timeout: Total timeout in seconds.

    Returns:
        Raw document bytes.

    Raises:
        CatalogIOError: If the download fails or an event loop is already
            running in this thread.
    """
    if _in_event_loop():
        raise CatalogIOError(
            f"Failed to read credit catalog {url}: "
            "cannot download synchronously inside a running event loop"
        )

    logger.debug("Fetching credit catalog from %s", url)
    try:
        return asyncio.run(_fetch(url, timeout))
    except aiohttp.ClientResponseError as e:
        raise CatalogIOError(
            f"Failed to read credit catalog {url}: HTTP {e.status} {e.message}"
        ) from e
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        raise CatalogIOError(
            f"Failed to read credit catalog {url}: {e or type(e).__name__}"
        ) from e


def open_source(source: Source) -> BinaryIO:
    """Open a catalog source as a binary stream.

    File objects are returned unchanged; the caller owns them. Streams
    opened here must be closed by the caller.

    Args:
        source: Filesystem path, ``file://`` URI, ``http(s)://`` URL or
            binary file object.

    Returns:
        A readable binary stream positioned at the start of the document.

    Raises:
        CatalogIOError: If the source cannot be opened or downloaded.
    """
    if not isinstance(source, (str, Path)):
        return source

    if is_remote(source):
        return io.BytesIO(fetch_remote(str(source)))

    path = _local_path(source)
    logger.debug("Opening credit catalog %s", path)
    try:
        return open(path, "rb")
    except OSError as e:
        raise CatalogIOError(
            f"Failed to read credit catalog {source}: {e.strerror or e}"
        ) from e
