from __future__ import annotations

from typing import List, Optional

from prodmedia.domain.entities.asset_descriptor import AssetDescriptor
from prodmedia.domain.entities.product_media import ProductMediaRecord
from prodmedia.domain.enums.asset_kind import AssetKind
from prodmedia.domain.enums.asset_type import AssetType
from prodmedia.domain.enums.pipeline_variant import PipelineVariant
from prodmedia.domain.enums.video_type import VideoType
from prodmedia.domain.policies import asset_paths
from prodmedia.domain.policies.url_rules import is_storage_url


def _image_asset_path(product_id: str, role: str, variant: PipelineVariant) -> str:
    if variant is PipelineVariant.multi_resolution:
        return asset_paths.image_dir(product_id, role)
    return asset_paths.image_path(product_id, role, "jpg")


def _classify(asset: AssetDescriptor, bucket: Optional[str]) -> AssetDescriptor:
    # References already in our bucket need no fetch; they resolve to themselves
    if is_storage_url(asset.source_url, bucket):
        asset.type = AssetType.storage
        asset.mark_completed(
            url=asset.source_url,
            video_type=VideoType.upload if asset.kind is AssetKind.video else None,
        )
    return asset


def plan_assets(
    record: ProductMediaRecord,
    variant: PipelineVariant,
    *,
    bucket: Optional[str] = None,
) -> List[AssetDescriptor]:
    """
    Descriptors for one run, in persisted order: main, gallery (original index order,
    null/blank entries skipped), then video.
    """
    variant = PipelineVariant(variant)
    pid = record.id
    out: List[AssetDescriptor] = []

    main = record.main_source
    if main:
        role = asset_paths.main_role()
        out.append(AssetDescriptor(
            source_url=main,
            path=_image_asset_path(pid, role, variant),
            role=role,
            kind=AssetKind.image,
            is_main=True,
        ))

    for index, url in record.source_images.gallery_entries():
        role = asset_paths.gallery_role(index)
        out.append(AssetDescriptor(
            source_url=url,
            path=_image_asset_path(pid, role, variant),
            role=role,
            kind=AssetKind.image,
        ))

    video = record.video_source
    if video:
        out.append(AssetDescriptor(
            source_url=video,
            path=asset_paths.video_path(pid),
            role=asset_paths.video_role(),
            kind=AssetKind.video,
        ))

    return [_classify(a, bucket) for a in out]
