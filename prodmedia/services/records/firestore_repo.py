# prodmedia/services/records/firestore_repo.py
from __future__ import annotations

from typing import Any, Collection, Dict, Mapping, Optional

from firebase_admin import firestore

from prodmedia.common.logging import get_logger
from prodmedia.common.settings import get_settings
from prodmedia.domain.errors import RecordNotFoundError
from prodmedia.domain.enums.processing_status import ProcessingStatus
from prodmedia.domain.ports.records import ProductRecordPort

logger = get_logger(__name__)


class FirestoreProductRepo(ProductRecordPort):
    """
    Product documents in Firestore. `commit` runs inside a transaction so the status
    check and the update are one atomic step (a concurrent re-trigger loses cleanly).
    """

    def __init__(self, client: Optional[Any] = None, *, collection: Optional[str] = None) -> None:
        if client is None:
            from prodmedia.services.firebase_app import get_firebase_app

            client = firestore.client(app=get_firebase_app())
        self._db = client
        self._col = client.collection(collection or get_settings().products_collection)

    def get(self, product_id: str) -> Optional[Dict[str, Any]]:
        snap = self._col.document(product_id).get()
        if not snap.exists:
            return None
        return snap.to_dict() or {}

    def commit(
        self,
        product_id: str,
        updates: Mapping[str, Any],
        *,
        status_field: str,
        expected: Collection[Optional[ProcessingStatus]],
    ) -> bool:
        ref = self._col.document(product_id)
        payload = dict(updates)

        @firestore.transactional
        def _apply(txn) -> bool:
            snap = ref.get(transaction=txn)
            if not snap.exists:
                raise RecordNotFoundError(product_id)
            current = (snap.to_dict() or {}).get(status_field)
            # Read the stored value the same way the processing gate does
            if ProcessingStatus.parse(current) not in expected:
                logger.info(
                    "commit skipped for %s: %s=%r not in %r", product_id, status_field, current, sorted(map(str, expected))
                )
                return False
            txn.update(ref, payload)
            return True

        return _apply(self._db.transaction())
