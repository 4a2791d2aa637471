# prodmedia/domain/entities/product_media.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Tuple

from prodmedia.common.strings.splitters import non_blank
from prodmedia.domain.enums.processing_status import ProcessingStatus


@dataclass(frozen=True)
class SourceImages:
    main: Optional[str] = None
    # Original positions are kept (None for null/blank entries) so gallery_{index} paths stay stable
    gallery: Tuple[Optional[str], ...] = ()

    def gallery_entries(self) -> List[Tuple[int, str]]:
        """(original index, url) for every usable gallery entry."""
        return [(i, u.strip()) for i, u in enumerate(self.gallery) if non_blank(u)]


@dataclass(frozen=True)
class ProductMediaRecord:
    """
    The media-relevant subset of a product document, as seen at trigger time.
    Read-only: the pipeline never mutates the snapshot, it only emits an update mapping.
    """
    id: str
    source_images: SourceImages = field(default_factory=SourceImages)
    video_url: Optional[str] = None
    image_status: Optional[ProcessingStatus] = None             # store_as_is field: imageStatus
    image_processing_status: Optional[ProcessingStatus] = None  # multi_resolution field: imageProcessingStatus

    def __post_init__(self):
        if not self.id or not str(self.id).strip():
            raise ValueError("product id is required")

    @property
    def main_source(self) -> Optional[str]:
        m = self.source_images.main
        return m.strip() if non_blank(m) else None

    @property
    def video_source(self) -> Optional[str]:
        return self.video_url.strip() if non_blank(self.video_url) else None

    @property
    def has_media(self) -> bool:
        return bool(self.main_source or self.source_images.gallery_entries() or self.video_source)

    @classmethod
    def from_document(cls, product_id: str, doc: Mapping[str, Any] | None) -> "ProductMediaRecord":
        """
        Build from a Firestore document mapping. Tolerates missing/malformed fields:
        a non-mapping sourceImages means no images, a non-list gallery means empty.
        """
        doc = doc or {}
        raw_src = doc.get("sourceImages")
        src = raw_src if isinstance(raw_src, Mapping) else {}

        main = src.get("main")
        gallery_raw = src.get("gallery")
        gallery: Tuple[Optional[str], ...] = ()
        if isinstance(gallery_raw, (list, tuple)):
            gallery = tuple(g if isinstance(g, str) else None for g in gallery_raw)

        video = doc.get("videoUrl")
        return cls(
            id=str(product_id),
            source_images=SourceImages(
                main=main if isinstance(main, str) else None,
                gallery=gallery,
            ),
            video_url=video if isinstance(video, str) else None,
            image_status=ProcessingStatus.parse(doc.get("imageStatus")),
            image_processing_status=ProcessingStatus.parse(doc.get("imageProcessingStatus")),
        )
