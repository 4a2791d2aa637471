# prodmedia/domain/policies/url_rules.py
from __future__ import annotations

import re
from enum import StrEnum
from urllib.parse import unquote, urlsplit

DRIVE_HOST = "drive.google.com"
DRIVE_DOWNLOAD_URL = "https://drive.google.com/uc?export=download&id={file_id}"

# Share links look like https://drive.google.com/file/d/<FILE_ID>/view?usp=sharing
_DRIVE_FILE_ID = re.compile(r"/d/([^/?#]+)")

_YOUTUBE_MARKERS = ("youtube.com", "youtu.be")

FIREBASE_STORAGE_HOST = "firebasestorage.googleapis.com"
GCS_HOST = "storage.googleapis.com"


class VideoClassification(StrEnum):
    link_through = "link_through"
    downloadable = "downloadable"


def normalize_drive_url(url):
    """
    Rewrite a Google Drive share link into its direct-download form.
    Anything else (other hosts, no /d/<id> segment, empty or non-string input) passes through verbatim.
    """
    if not isinstance(url, str) or DRIVE_HOST not in url:
        return url
    m = _DRIVE_FILE_ID.search(url)
    if not m:
        return url
    return DRIVE_DOWNLOAD_URL.format(file_id=m.group(1))


def is_youtube_url(url) -> bool:
    # Plain case-sensitive substring match; not a URL parse
    if not isinstance(url, str):
        return False
    return any(marker in url for marker in _YOUTUBE_MARKERS)


def classify_video(url) -> VideoClassification:
    if is_youtube_url(url):
        return VideoClassification.link_through
    return VideoClassification.downloadable


def is_storage_url(url, bucket: str | None = None) -> bool:
    """
    True for references that already live in object storage: gs:// URIs and
    Firebase/GCS download URLs (optionally restricted to one bucket).
    """
    if not isinstance(url, str):
        return False
    u = url.strip()
    if u.startswith("gs://"):
        return bucket is None or u[len("gs://"):].split("/", 1)[0] == bucket
    found = _storage_bucket(u)
    if found is None:
        return False
    return bucket is None or found == bucket


def _storage_bucket(url: str) -> str | None:
    """Bucket named by a Firebase or GCS download URL, or None for anything else."""
    parts = urlsplit(url)
    segments = [unquote(s) for s in parts.path.split("/") if s]
    host = (parts.hostname or "").lower()
    if host == FIREBASE_STORAGE_HOST:
        # /v0/b/<bucket>/o/<object>
        if len(segments) >= 3 and segments[0] == "v0" and segments[1] == "b":
            return segments[2]
        return None
    if host == GCS_HOST:
        return segments[0] if segments else None
    return None
