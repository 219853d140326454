# distribution.py
from __future__ import annotations

import shutil
import tarfile
import urllib.error
import urllib.request
import uuid
from pathlib import Path
from typing import Optional

from . import settings


class DownloadError(Exception):
    """Raised when the release archive cannot be fetched."""

    def __init__(self, url: str, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


def download_url(version: str, *, mirror: str | None = None) -> str:
    """
    Release archive URL for a Hadoop version.

    The version is substituted as-is; an unknown version shows up later as
    a 404 from the mirror.
    """
    base = (mirror or settings.mirror()).rstrip("/")
    return f"{base}/hadoop-{version}/hadoop-{version}.tar.gz"


def download(url: str, dest: Path | None = None) -> Path:
    """
    Fetch `url` into a new file under the runner temp dir.

    Returns:
      Path of the downloaded archive.
    """
    if dest is None:
        dest = settings.temp_dir() / str(uuid.uuid4())
    dest.parent.mkdir(parents=True, exist_ok=True)

    req = urllib.request.Request(url, headers={"User-Agent": "setup-hdfs"})
    try:
        try:
            with urllib.request.urlopen(req) as response, dest.open("wb") as out:
                shutil.copyfileobj(response, out)
        except urllib.error.HTTPError as e:
            raise DownloadError(url, f"Unexpected HTTP response: {e.code} {e.reason}", status_code=e.code) from e
        except urllib.error.URLError as e:
            raise DownloadError(url, f"Network error: {e.reason}") from e
    except BaseException:
        # no partial archive is left behind in the runner temp dir
        dest.unlink(missing_ok=True)
        raise

    return dest


def extract_tar(archive: Path, dest: Path | None = None) -> Path:
    """Unpack a .tar.gz into a fresh directory and return that directory."""
    if dest is None:
        dest = settings.temp_dir() / str(uuid.uuid4())
    dest.mkdir(parents=True, exist_ok=True)

    with tarfile.open(str(archive), mode="r:gz") as tar:
        if hasattr(tarfile, "tar_filter"):
            tar.extractall(path=str(dest), filter="tar")
        else:
            tar.extractall(path=str(dest))
    return dest


def acquire(version: str) -> Path:
    """Download and unpack a release; returns the `hadoop-<version>` folder."""
    url = download_url(version)
    archive = download(url)
    try:
        folder = extract_tar(archive) / f"hadoop-{version}"
    finally:
        archive.unlink(missing_ok=True)

    if not folder.is_dir():
        raise FileNotFoundError(f"Archive {url} did not contain hadoop-{version}/")
    return folder
