from prodmedia.domain.enums.asset_kind import AssetKind
from prodmedia.domain.enums.asset_status import AssetStatus
from prodmedia.domain.enums.asset_type import AssetType
from prodmedia.domain.enums.pipeline_variant import PipelineVariant
from prodmedia.domain.enums.processing_status import ProcessingStatus
from prodmedia.domain.enums.size_tag import SizeTag
from prodmedia.domain.enums.video_type import VideoType
__all__ = [
    "AssetKind",
    "AssetStatus",
    "AssetType",
    "PipelineVariant",
    "ProcessingStatus",
    "SizeTag",
    "VideoType",
]
