# prodmedia/domain/errors.py
from __future__ import annotations

from typing import Optional

from prodmedia.domain.enums.asset_kind import AssetKind


class MediaPipelineError(RuntimeError):
    """Base class for errors raised inside the media-ingestion pipeline."""


class DownloadError(MediaPipelineError):
    """Upstream answered with a non-2xx status."""

    def __init__(self, status_code: int, kind: AssetKind = AssetKind.image, url: Optional[str] = None):
        self.status_code = int(status_code)
        self.kind = AssetKind(kind)
        self.url = url
        super().__init__(f"{self.kind.label} download failed: {self.status_code}")


class PayloadTooLargeError(MediaPipelineError):
    def __init__(self, limit: int, size: int, kind: AssetKind = AssetKind.video):
        self.limit = int(limit)
        self.size = int(size)
        self.kind = AssetKind(kind)
        super().__init__(
            f"{self.kind.label} exceeds size limit: {self.size} bytes > {self.limit} bytes"
        )


class UnsupportedImageError(MediaPipelineError):
    """Payload could not be decoded as an image."""


class RecordNotFoundError(MediaPipelineError):
    def __init__(self, product_id: str):
        self.product_id = product_id
        super().__init__(f"Product record not found: {product_id}")


def error_message(exc: BaseException) -> str:
    """Human-readable cause for a failed asset or record; never empty."""
    msg = str(exc).strip()
    return msg or type(exc).__name__
