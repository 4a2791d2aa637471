# prodmedia/domain/entities/asset_descriptor.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from prodmedia.domain.enums.asset_kind import AssetKind
from prodmedia.domain.enums.asset_status import AssetStatus
from prodmedia.domain.enums.asset_type import AssetType
from prodmedia.domain.enums.video_type import VideoType


@dataclass
class AssetDescriptor:
    """
    One image or video attached to a product, processed independently.

    Built fresh on every trigger from the product's source fields and never persisted
    on its own; only `as_document()` output lands on the product record.
    `path` is the ownership key in storage and must not change between retries.
    """
    source_url: str
    path: str
    role: str                      # "main" | "gallery_{i}" | "video"
    kind: AssetKind = AssetKind.image
    is_main: bool = False
    type: AssetType = AssetType.external
    status: AssetStatus = AssetStatus.pending

    # Results
    url: Optional[str] = None                            # single stored/link-through URL
    urls: Dict[str, str] = field(default_factory=dict)   # size-tag -> URL (multi-resolution)
    content_type: Optional[str] = None
    video_type: Optional[VideoType] = None
    error: Optional[str] = None

    def __post_init__(self):
        if not self.source_url or not self.source_url.strip():
            raise ValueError("source_url is required")
        if not self.path or not self.path.strip():
            raise ValueError("path is required")
        if not self.role:
            raise ValueError("role is required")
        if self.is_main and self.kind is not AssetKind.image:
            raise ValueError("only an image can be the main asset")

    # ---- state transitions: pending -> completed | failed ----
    def _require_pending(self) -> None:
        if self.status is not AssetStatus.pending:
            raise ValueError(f"asset {self.role} already {self.status}")

    def mark_completed(
        self,
        *,
        url: Optional[str] = None,
        urls: Optional[Dict[str, str]] = None,
        content_type: Optional[str] = None,
        video_type: Optional[VideoType] = None,
    ) -> "AssetDescriptor":
        self._require_pending()
        self.status = AssetStatus.completed
        self.url = url
        self.urls = dict(urls or {})
        self.content_type = content_type
        self.video_type = video_type
        self.error = None
        return self

    def mark_failed(self, message: str) -> "AssetDescriptor":
        self._require_pending()
        self.status = AssetStatus.failed
        self.error = message or "unknown error"
        return self

    @property
    def succeeded(self) -> bool:
        return self.status is AssetStatus.completed

    @property
    def failed(self) -> bool:
        return self.status is AssetStatus.failed

    def as_document(self) -> Dict[str, Any]:
        """camelCase per-asset result record, as stored in the product's imageUrls list."""
        doc: Dict[str, Any] = {
            "role": self.role,
            "sourceUrl": self.source_url,
            "path": self.path,
            "isMain": self.is_main,
            "type": self.type.value,
            "status": self.status.value,
        }
        if self.url is not None:
            doc["url"] = self.url
        if self.urls:
            doc["urls"] = dict(self.urls)
        if self.content_type:
            doc["contentType"] = self.content_type
        if self.error is not None:
            doc["error"] = self.error
        return doc
