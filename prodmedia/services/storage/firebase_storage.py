# prodmedia/services/storage/firebase_storage.py
from __future__ import annotations

from typing import Any, Optional

from prodmedia.common.logging import get_logger
from prodmedia.domain.policies.asset_paths import public_url
from prodmedia.domain.ports.storage import StoragePort

logger = get_logger(__name__)


class FirebaseStorage(StoragePort):
    """
    StoragePort backed by a Firebase Storage (GCS) bucket.
    Returned URLs are the unsigned firebasestorage.googleapis.com form, derived from
    (bucket, path) only; no signed URLs.
    """

    def __init__(self, bucket: Optional[Any] = None, *, bucket_name: Optional[str] = None) -> None:
        if bucket is None:
            from firebase_admin import storage
            from prodmedia.services.firebase_app import get_firebase_app

            bucket = storage.bucket(bucket_name, app=get_firebase_app())
        self._bucket = bucket

    @property
    def bucket_name(self) -> str:
        return self._bucket.name

    def put(self, path: str, data: bytes, content_type: str) -> str:
        blob = self._bucket.blob(path)
        # Single-request upload; same path overwrites (last write wins)
        blob.upload_from_string(data, content_type=content_type)
        logger.debug("uploaded gs://%s/%s (%d bytes, %s)", self.bucket_name, path, len(data), content_type)
        return self.public_url(path)

    def public_url(self, path: str) -> str:
        return public_url(self.bucket_name, path)
