from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from prodmedia.domain.entities.asset_descriptor import AssetDescriptor
from prodmedia.domain.enums.asset_kind import AssetKind
from prodmedia.domain.enums.asset_status import AssetStatus
from prodmedia.domain.enums.pipeline_variant import PipelineVariant
from prodmedia.domain.enums.processing_status import ProcessingStatus
from prodmedia.domain.policies.processing_gate import status_field


@dataclass
class Aggregate:
    status: ProcessingStatus
    updates: Dict[str, Any] = field(default_factory=dict)
    succeeded: int = 0
    failed: int = 0


def final_status(assets: Sequence[AssetDescriptor]) -> ProcessingStatus:
    """
    completed when nothing failed, completed_with_errors otherwise (including all-failed).
    `failed` is reserved for run-level errors and is never produced here.
    """
    if any(a.status is AssetStatus.pending for a in assets):
        raise ValueError("cannot aggregate while assets are still pending")
    if any(a.failed for a in assets):
        return ProcessingStatus.completed_with_errors
    return ProcessingStatus.completed


def main_image_url(
    assets: Sequence[AssetDescriptor],
    variant: PipelineVariant,
    main_rendition: str = "medium",
) -> Optional[str]:
    main = next((a for a in assets if a.is_main), None)
    if main is None or not main.succeeded:
        return None
    if PipelineVariant(variant) is PipelineVariant.multi_resolution and main.urls:
        return main.urls.get(main_rendition)
    return main.url


def aggregate(
    assets: Sequence[AssetDescriptor],
    variant: PipelineVariant,
    *,
    main_rendition: str = "medium",
) -> Aggregate:
    """
    Fold settled descriptors into the single update written back to the product.

    Fields: mainImageUrl, imageUrls, the variant's status field, videoUrl and videoType.
    A failed video leaves videoUrl untouched and adds videoError with its message.
    """
    variant = PipelineVariant(variant)
    status = final_status(assets)

    images: List[AssetDescriptor] = [a for a in assets if a.kind is AssetKind.image]
    video = next((a for a in assets if a.kind is AssetKind.video), None)

    updates: Dict[str, Any] = {
        "mainImageUrl": main_image_url(assets, variant, main_rendition),
        "imageUrls": [a.as_document() for a in images],
        status_field(variant): status.value,
    }

    if video is None:
        updates["videoUrl"] = None
        updates["videoType"] = None
    elif video.succeeded:
        updates["videoUrl"] = video.url
        updates["videoType"] = video.video_type.value if video.video_type else None
    else:
        # Source reference stays in videoUrl so a reset + re-trigger can retry it
        updates["videoType"] = None
        updates["videoError"] = video.error

    return Aggregate(
        status=status,
        updates=updates,
        succeeded=sum(1 for a in assets if a.succeeded),
        failed=sum(1 for a in assets if a.failed),
    )


def failure_updates(variant: PipelineVariant, reason: str) -> Dict[str, Any]:
    return {
        status_field(variant): ProcessingStatus.failed.value,
        "failureReason": reason,
    }
