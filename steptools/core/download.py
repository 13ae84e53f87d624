"""
Streaming artifact download.

Downloads a single remote file to a local path:
- The payload is streamed in chunks, never held in memory as a whole
- Data is written to a temporary sibling of the destination and renamed
  into place only after the full body has been copied
- The response and file handle are released on every exit path

Nothing is retried or cached: a failed download raises to the caller.
"""

import logging
import uuid
from pathlib import Path
from typing import Optional, Union

import requests
from requests.exceptions import RequestException

from steptools.core.exceptions import CopyError, FileCreateError, NetworkError

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 8192


def download_file(
    url: str,
    destination: Union[str, Path],
    timeout: Optional[float] = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    session: Optional[requests.Session] = None,
) -> Path:
    """
    Download ``url`` to ``destination``, replacing any existing file.

    Args:
        url: URL to download from
        destination: Local file path to write
        timeout: Optional connect/read timeout in seconds (None waits forever)
        chunk_size: Size of the chunks streamed to disk
        session: Optional requests session to issue the request with

    Returns:
        Path to the downloaded file

    Raises:
        FileCreateError: If the local file cannot be created or is a
            directory (no request is made)
        NetworkError: If the server cannot be reached or answers with an error status
        CopyError: If streaming the body to disk fails
        ValueError: If URL or destination is empty

    Example:
        >>> from steptools.core.download import download_file
        >>> download_file("https://example.com/tool", Path("tools/tool"))
    """
    if not url:
        raise ValueError("URL cannot be empty")

    if not destination:
        raise ValueError("Destination path cannot be empty")

    destination = Path(destination)
    if destination.is_dir():
        raise FileCreateError(destination, "destination is a directory")

    # Temp file lives next to the destination so the final rename is atomic
    temp_path = destination.with_name(f".{destination.name}.{uuid.uuid4().hex}.tmp")
    try:
        out_file = open(temp_path, "xb")
    except OSError as e:
        raise FileCreateError(destination, e) from e

    response = None
    completed = False
    try:
        logger.info(f"Downloading from {url}")
        try:
            response = (session or requests).get(url, stream=True, timeout=timeout)
            response.raise_for_status()
        except RequestException as e:
            raise NetworkError(url, e) from e

        try:
            for chunk in response.iter_content(chunk_size=chunk_size):
                if chunk:
                    out_file.write(chunk)
            out_file.flush()
        except (RequestException, OSError) as e:
            raise CopyError(url, destination, e) from e

        completed = True
    finally:
        if response is not None:
            _close_quietly(response, f"({url}) body")
        _close_quietly(out_file, f"({temp_path})")
        if not completed:
            _remove_quietly(temp_path)

    try:
        temp_path.replace(destination)
    except OSError as e:
        _remove_quietly(temp_path)
        raise CopyError(url, destination, e) from e

    logger.info(f"Download complete: {destination}")
    return destination


def _close_quietly(resource, label: str) -> None:
    try:
        resource.close()
    except (OSError, RequestException) as e:
        logger.warning(f"Failed to close {label}: {e}")


def _remove_quietly(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning(f"Failed to remove partial download ({path}): {e}")


__all__ = ["download_file", "DEFAULT_CHUNK_SIZE"]
