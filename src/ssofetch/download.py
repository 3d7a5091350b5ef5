"""Artifact download and integrity verification.

This module provides:
- Streaming download of a presigned URL to a local file
- SHA256 computation and comparison against a pinned checksum
"""

import hashlib
import logging
from pathlib import Path
from typing import Optional

import requests
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    TextColumn,
    TransferSpeedColumn,
)

from ssofetch.config import is_placeholder
from ssofetch.exceptions import ChecksumMismatchError, DownloadError
from ssofetch.ui import console

logger = logging.getLogger(__name__)


def sha256_file(path: Path, chunk_size: int = 1024 * 64) -> str:
    """Return the hex SHA256 digest of a file."""
    digest = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(chunk_size), b""):
            digest.update(chunk)
    return digest.hexdigest()


def _discard(partial: Path) -> None:
    if partial.exists():
        partial.unlink()


def download_artifact(
    url: str,
    destination: Path,
    chunk_size: int = 1024 * 64,
    timeout: int = 60,
    show_progress: bool = True,
) -> Path:
    """Stream ``url`` into ``destination``.

    Data goes to a ``.part`` file beside ``destination`` that replaces it only
    once the transfer completes, so a failed download leaves any existing
    file untouched.

    Raises:
        DownloadError: For network, HTTP status and filesystem failures.
    """
    partial = destination.with_name(f".{destination.name}.part")
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        with requests.get(url, stream=True, timeout=timeout) as response:
            response.raise_for_status()
            total = int(response.headers.get("Content-Length", 0)) or None

            progress = Progress(
                TextColumn("[bold blue]{task.description}"),
                BarColumn(),
                DownloadColumn(),
                TransferSpeedColumn(),
                console=console,
                transient=True,
                disable=not show_progress,
            )
            with progress, open(partial, "wb") as f:
                task = progress.add_task(f"Downloading {destination.name}", total=total)
                for chunk in response.iter_content(chunk_size=chunk_size):
                    if chunk:
                        f.write(chunk)
                        progress.update(task, advance=len(chunk))
        partial.replace(destination)
    except requests.exceptions.HTTPError as e:
        _discard(partial)
        status = e.response.status_code if e.response is not None else "unknown"
        raise DownloadError(f"Download failed with HTTP status {status}") from e
    except requests.exceptions.RequestException as e:
        _discard(partial)
        raise DownloadError(f"Download failed: {e}") from e
    except OSError as e:
        _discard(partial)
        raise DownloadError(f"Could not write {destination}: {e}") from e

    logger.debug("Downloaded %s (%d bytes)", destination, destination.stat().st_size)
    return destination


def verify_checksum(path: Path, expected: Optional[str]) -> Optional[str]:
    """Compare a file's SHA256 with the pinned value.

    Returns the actual digest, or None when ``expected`` is a placeholder and
    the comparison was skipped.

    Raises:
        ChecksumMismatchError: If the digests differ.
    """
    if is_placeholder(expected):
        logger.debug("Checksum for %s is a placeholder; skipping verification", path.name)
        return None

    actual = sha256_file(path)
    if actual != expected.strip().lower():
        raise ChecksumMismatchError(expected, actual)
    return actual
