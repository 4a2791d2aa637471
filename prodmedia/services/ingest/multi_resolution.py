# prodmedia/services/ingest/multi_resolution.py
from __future__ import annotations

from typing import Dict, Optional, Tuple

from prodmedia.common.concurrency.thread_manager import ThreadManager
from prodmedia.common.logging import get_logger
from prodmedia.common.settings import get_settings
from prodmedia.domain.entities.asset_descriptor import AssetDescriptor
from prodmedia.domain.enums.asset_kind import AssetKind
from prodmedia.domain.enums.asset_status import AssetStatus
from prodmedia.domain.enums.asset_type import AssetType
from prodmedia.domain.errors import error_message
from prodmedia.domain.policies.asset_paths import rendition_path
from prodmedia.domain.ports.fetcher import FetcherPort
from prodmedia.domain.ports.image_codec import ImageCodecPort
from prodmedia.domain.ports.storage import StoragePort
from prodmedia.services.ingest.resolver import AssetResolver

logger = get_logger(__name__)


class MultiResolution:
    """
    Transform & Store, multi-resolution (images only): download once, then render and
    upload one derivative per size tag concurrently, e.g.
        product-images/<id>/main/{large,medium,thumb}.webp

    Per-asset guard: only external assets still pending are touched.
    Never raises: any failure marks that asset failed, with no retry.
    """

    def __init__(
        self,
        *,
        storage: StoragePort,
        fetcher: FetcherPort,
        codec: ImageCodecPort,
        resolver: Optional[AssetResolver] = None,
        renditions: Optional[Dict[str, int]] = None,
        fmt: Optional[str] = None,
        quality: Optional[int] = None,
        main_rendition: Optional[str] = None,
        max_image_bytes: Optional[int] = None,
        workers: Optional[int] = None,
    ) -> None:
        cfg = get_settings()
        self.storage = storage
        self.fetcher = fetcher
        self.codec = codec
        self.resolver = resolver or AssetResolver()
        self.renditions: Dict[str, int] = dict(renditions or cfg.imaging.renditions)
        self.fmt = (fmt or cfg.imaging.format).lower()
        self.quality = int(quality or cfg.imaging.quality)
        self.main_rendition = main_rendition or cfg.imaging.main_rendition
        self.max_image_bytes = int(max_image_bytes or cfg.limits.max_image_bytes)
        self.workers = int(workers or cfg.concurrency.rendition_workers)
        if self.main_rendition not in self.renditions:
            raise ValueError(f"main rendition {self.main_rendition!r} not among {list(self.renditions)}")

    def process(self, asset: AssetDescriptor) -> AssetDescriptor:
        if asset.type is not AssetType.external or asset.status is not AssetStatus.pending:
            return asset
        if asset.kind is not AssetKind.image:
            raise ValueError("MultiResolution only handles images")
        try:
            source = self.resolver.resolve(asset)
            fetched = self.fetcher.fetch(source.fetch_url, max_bytes=self.max_image_bytes, kind=AssetKind.image)
            content_type = self.codec.content_type(self.fmt)

            def _render_and_put(job: Tuple[str, int]) -> Tuple[str, str]:
                tag, edge = job
                data = self.codec.render(fetched.data, edge, fmt=self.fmt, quality=self.quality)
                return tag, self.storage.put(rendition_path(asset.path, tag, self.fmt), data, content_type)

            with ThreadManager(
                name=f"renditions-{asset.role}",
                max_workers=max(1, min(self.workers, len(self.renditions))),
                log_exceptions=False,
            ) as tm:
                settled = tm.map_settled(_render_and_put, list(self.renditions.items()))

            failures = [s.error for s in settled if not s.ok]
            if failures:
                raise failures[0]

            urls = dict(s.value for s in settled)
            asset.mark_completed(url=urls[self.main_rendition], urls=urls, content_type=content_type)
        except Exception as ex:
            logger.warning("image %s failed (%s): %s", asset.role, asset.source_url, ex)
            asset.mark_failed(error_message(ex))
        return asset
