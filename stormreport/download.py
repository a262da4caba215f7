"""
Storm data downloader.

Fetches the NOAA storm dataset (and optionally a vocabulary file) into the
local data folder. A file already on disk is reused unless force=True.
Compressed downloads are kept as-is; pandas decompresses on read.
"""

import logging
from pathlib import Path
from urllib.parse import unquote, urlparse

import requests

logger = logging.getLogger(__name__)

TIMEOUT = 120  # seconds
CHUNK_SIZE = 1024 * 1024


def filename_from_url(url) -> str:
    """Last path segment of a URL, with %2F and friends decoded."""
    name = unquote(urlparse(url).path).rstrip("/").split("/")[-1]
    if not name:
        raise ValueError(f"Cannot derive a file name from URL: {url}")
    return name


def download_file(url, output_path, timeout=TIMEOUT):
    """
    Stream a URL to output_path.

    Writes to a .part file first so an interrupted download never leaves
    a truncated file behind under the final name.

    Raises:
        OSError: on any network or HTTP failure
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    part_path = output_path.with_name(output_path.name + ".part")

    logger.info(f"Downloading: {url}")
    try:
        with requests.get(url, timeout=timeout, stream=True) as response:
            response.raise_for_status()
            # content-length counts encoded bytes; iter_content yields decoded ones
            total_size = 0
            if not response.headers.get('content-encoding'):
                total_size = int(response.headers.get('content-length', 0))

            downloaded = 0
            with open(part_path, 'wb') as f:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    if chunk:
                        f.write(chunk)
                        downloaded += len(chunk)
    except requests.RequestException as e:
        part_path.unlink(missing_ok=True)
        raise OSError(f"Failed to download {url}: {e}") from e

    if total_size and downloaded != total_size:
        part_path.unlink(missing_ok=True)
        raise OSError(f"Incomplete download of {url}: {downloaded:,} of {total_size:,} bytes")

    part_path.replace(output_path)
    logger.info(f"Saved {downloaded / 1024 / 1024:.1f} MB to {output_path}")
    return output_path


def fetch_if_absent(url, data_dir, filename=None, force=False, timeout=TIMEOUT) -> Path:
    """
    Return the local copy of url under data_dir, downloading it if missing.

    Args:
        url: Remote file URL
        data_dir: Local cache folder
        filename: Local file name (default: derived from the URL)
        force: Download even if the file exists
        timeout: Request timeout in seconds

    Raises:
        OSError: if the download fails
    """
    output_path = Path(data_dir) / (filename or filename_from_url(url))

    if output_path.exists() and not force:
        size_mb = output_path.stat().st_size / 1024 / 1024
        logger.info(f"Using cached file: {output_path} ({size_mb:.1f} MB)")
        return output_path

    return download_file(url, output_path, timeout=timeout)
