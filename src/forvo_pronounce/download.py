"""Streaming MP3 download to local storage.

The response body is written chunk by chunk so large files never sit in
memory whole. Writes go straight to the destination file: a failure
mid-stream can leave a partial file behind, and nothing cleans it up.
"""

from pathlib import Path

import httpx
from loguru import logger

from .errors import TransferError
from .models import AUDIO_EXTENSION

log = logger.bind(stage="download")

CHUNK_SIZE = 8192


def download_mp3(
    url: str,
    directory: str | Path,
    word: str,
    client: httpx.Client | None = None,
    chunk_size: int = CHUNK_SIZE,
    timeout: float = 60.0,
) -> Path:
    """Download `url` to `<directory>/<word>.mp3` and return the resolved path.

    The status is checked before anything touches the filesystem, so a
    non-success response never creates the directory or the file.
    Missing directories (and their parents) are created on success.

    Raises TransferError on an empty URL, a non-success status, a transport
    failure (including a dropped connection mid-stream), or an OS error while
    creating the directory or writing the file.
    """
    if not url:
        raise TransferError("No audio URL to download")

    dest_dir = Path(directory)
    file_path = dest_dir / f"{word}{AUDIO_EXTENSION}"
    log.debug(f"download_mp3(url={url!r}, file_path={file_path})")

    stream = client.stream if client is not None else httpx.stream
    written = 0
    try:
        with stream("GET", url, timeout=timeout, follow_redirects=True) as resp:
            if not resp.is_success:
                log.warning(f"Audio download returned HTTP {resp.status_code}")
                raise TransferError(
                    f"Failed to download file: HTTP {resp.status_code}",
                    url=url,
                    status_code=resp.status_code,
                )

            dest_dir.mkdir(parents=True, exist_ok=True)
            with open(file_path, "wb") as fh:
                for chunk in resp.iter_bytes(chunk_size=chunk_size):
                    fh.write(chunk)
                    written += len(chunk)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        log.error(f"Transfer failed after {written} bytes: {e}")
        raise TransferError(f"Failed to download {url}: {e}", url=url) from e
    except OSError as e:
        log.error(f"Cannot write {file_path}: {e}")
        raise TransferError(f"Failed to write {file_path}: {e}", url=url) from e

    resolved = file_path.resolve()
    log.info(f"File downloaded successfully to {resolved} ({written:,} bytes)")
    return resolved
