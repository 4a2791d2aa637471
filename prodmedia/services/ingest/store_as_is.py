# prodmedia/services/ingest/store_as_is.py
from __future__ import annotations

from typing import Optional

from prodmedia.common.logging import get_logger
from prodmedia.common.settings import get_settings
from prodmedia.domain.entities.asset_descriptor import AssetDescriptor
from prodmedia.domain.enums.asset_kind import AssetKind
from prodmedia.domain.enums.asset_status import AssetStatus
from prodmedia.domain.enums.asset_type import AssetType
from prodmedia.domain.enums.video_type import VideoType
from prodmedia.domain.errors import PayloadTooLargeError, error_message
from prodmedia.domain.ports.fetcher import FetcherPort
from prodmedia.domain.ports.storage import StoragePort
from prodmedia.services.ingest.resolver import AssetResolver

logger = get_logger(__name__)

DEFAULT_CONTENT_TYPES = {
    AssetKind.image: "image/jpeg",
    AssetKind.video: "video/mp4",
}


class StoreAsIs:
    """
    Transform & Store, single-resolution: fetch the bytes and store them verbatim
    under the asset's deterministic path. Handles images and video.

    Never raises: any failure becomes a failed descriptor for that asset only.
    """

    def __init__(
        self,
        *,
        storage: StoragePort,
        fetcher: FetcherPort,
        resolver: Optional[AssetResolver] = None,
        max_video_bytes: Optional[int] = None,
        max_image_bytes: Optional[int] = None,
    ) -> None:
        limits = get_settings().limits
        self.storage = storage
        self.fetcher = fetcher
        self.resolver = resolver or AssetResolver()
        self.max_video_bytes = int(max_video_bytes or limits.max_video_bytes)
        self.max_image_bytes = int(max_image_bytes or limits.max_image_bytes)

    def _limit_for(self, kind: AssetKind) -> int:
        return self.max_video_bytes if kind is AssetKind.video else self.max_image_bytes

    def process(self, asset: AssetDescriptor) -> AssetDescriptor:
        if asset.type is not AssetType.external or asset.status is not AssetStatus.pending:
            return asset
        try:
            source = self.resolver.resolve(asset)
            if source.link_through:
                asset.type = AssetType.link_through
                return asset.mark_completed(url=asset.source_url, video_type=VideoType.youtube)

            limit = self._limit_for(asset.kind)
            fetched = self.fetcher.fetch(source.fetch_url, max_bytes=limit, kind=asset.kind)
            # Checked again here: the fetcher may not know the body size up front
            if fetched.size > limit:
                raise PayloadTooLargeError(limit, fetched.size, asset.kind)

            content_type = fetched.content_type or DEFAULT_CONTENT_TYPES[asset.kind]
            url = self.storage.put(asset.path, fetched.data, content_type)
            asset.mark_completed(
                url=url,
                content_type=content_type,
                video_type=VideoType.upload if asset.kind is AssetKind.video else None,
            )
        except Exception as ex:
            logger.warning("%s %s failed (%s): %s", asset.kind.value, asset.role, asset.source_url, ex)
            asset.mark_failed(error_message(ex))
        return asset
