from __future__ import annotations

from typing import Any, Collection, Mapping, Optional, Protocol

from prodmedia.domain.enums.processing_status import ProcessingStatus


class ProductRecordPort(Protocol):
    def get(self, product_id: str) -> Optional[Mapping[str, Any]]: ...

    def commit(
        self,
        product_id: str,
        updates: Mapping[str, Any],
        *,
        status_field: str,
        expected: Collection[Optional[ProcessingStatus]],
    ) -> bool:
        """
        Compare-and-swap write: apply `updates` only if the record's current
        `status_field` value, read with ProcessingStatus.parse, is in `expected`
        (None = field absent or not a known status).
        Returns False, writing nothing, on a mismatch.
        Raises RecordNotFoundError if the record no longer exists.
        """
        ...
