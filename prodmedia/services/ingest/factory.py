# prodmedia/services/ingest/factory.py
from __future__ import annotations

from typing import Optional

from prodmedia.common.settings import get_settings
from prodmedia.domain.enums.pipeline_variant import PipelineVariant
from prodmedia.domain.ports.fetcher import FetcherPort
from prodmedia.domain.ports.image_codec import ImageCodecPort
from prodmedia.domain.ports.records import ProductRecordPort
from prodmedia.domain.ports.storage import StoragePort
from prodmedia.services.ingest.dispatcher import MediaDispatcher
from prodmedia.services.ingest.multi_resolution import MultiResolution
from prodmedia.services.ingest.resolver import AssetResolver
from prodmedia.services.ingest.store_as_is import StoreAsIs


def default_storage() -> StoragePort:
    cfg = get_settings()
    if cfg.is_local_storage:
        from prodmedia.services.storage.local_storage import LocalStorage

        return LocalStorage(cfg.local_storage_root, cfg.local_public_base_url)
    from prodmedia.services.storage.firebase_storage import FirebaseStorage

    return FirebaseStorage(bucket_name=cfg.storage_bucket)


def default_records() -> ProductRecordPort:
    from prodmedia.services.records.firestore_repo import FirestoreProductRepo

    return FirestoreProductRepo()


def default_fetcher() -> FetcherPort:
    from prodmedia.services.fetch.http_fetcher import HttpxFetcher

    return HttpxFetcher()


def default_codec() -> ImageCodecPort:
    from prodmedia.services.imaging.pillow_codec import PillowImageCodec

    return PillowImageCodec()


def build_dispatcher(
    *,
    variant: Optional[PipelineVariant | str] = None,
    records: Optional[ProductRecordPort] = None,
    storage: Optional[StoragePort] = None,
    fetcher: Optional[FetcherPort] = None,
    codec: Optional[ImageCodecPort] = None,
) -> MediaDispatcher:
    """
    Wire a dispatcher for the configured (or given) variant. Any collaborator can be
    injected; the rest come from settings (Firestore, Firebase Storage, httpx, Pillow).
    """
    cfg = get_settings()
    variant = PipelineVariant(variant or cfg.pipeline_variant)
    records = records or default_records()
    storage = storage or default_storage()
    fetcher = fetcher or default_fetcher()
    resolver = AssetResolver()

    # Video is stored as-is in both variants; only the image strategy changes
    video_strategy = StoreAsIs(storage=storage, fetcher=fetcher, resolver=resolver)
    if variant is PipelineVariant.multi_resolution:
        image_strategy = MultiResolution(
            storage=storage,
            fetcher=fetcher,
            codec=codec or default_codec(),
            resolver=resolver,
        )
    else:
        image_strategy = video_strategy

    return MediaDispatcher(
        records=records,
        image_strategy=image_strategy,
        video_strategy=video_strategy,
        variant=variant,
        bucket=None if cfg.is_local_storage else cfg.storage_bucket,
    )
