from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

from prodmedia.domain.enums.asset_kind import AssetKind


@dataclass(frozen=True)
class FetchedContent:
    data: bytes
    content_type: Optional[str] = None
    status_code: int = 200
    final_url: Optional[str] = None

    @property
    def size(self) -> int:
        return len(self.data)


class FetcherPort(Protocol):
    def fetch(
        self,
        url: str,
        *,
        max_bytes: Optional[int] = None,
        kind: AssetKind = AssetKind.image,
    ) -> FetchedContent:
        """
        Download `url`. Raises DownloadError on non-2xx and PayloadTooLargeError
        when the body exceeds `max_bytes` (nothing is returned in that case).
        """
        ...
