# prodmedia/services/fetch/http_fetcher.py
from __future__ import annotations

from typing import Optional

import httpx

from prodmedia.common.logging import get_logger
from prodmedia.common.settings import get_settings
from prodmedia.domain.enums.asset_kind import AssetKind
from prodmedia.domain.errors import DownloadError, PayloadTooLargeError
from prodmedia.domain.ports.fetcher import FetchedContent, FetcherPort

logger = get_logger(__name__)


class HttpxFetcher(FetcherPort):
    """
    FetcherPort over httpx. One request per call, bounded timeout, no retries.
    Bodies are streamed so an oversized payload is abandoned as soon as the cap is crossed.
    Safe for use from ThreadManager (httpx.Client is thread-safe).
    """

    def __init__(
        self,
        *,
        timeout_sec: Optional[float] = None,
        user_agent: Optional[str] = None,
        follow_redirects: Optional[bool] = None,
        chunk_size: Optional[int] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        cfg = get_settings().fetch
        self.timeout_sec = float(timeout_sec or cfg.timeout_sec)
        self.chunk_size = int(chunk_size or cfg.chunk_size)
        self._client = httpx.Client(
            timeout=self.timeout_sec,
            headers={"User-Agent": user_agent or cfg.user_agent},
            follow_redirects=cfg.follow_redirects if follow_redirects is None else follow_redirects,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HttpxFetcher":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ---- Port API -------------------------------------------------------------
    def fetch(
        self,
        url: str,
        *,
        max_bytes: Optional[int] = None,
        kind: AssetKind = AssetKind.image,
    ) -> FetchedContent:
        with self._client.stream("GET", url) as resp:
            if not resp.is_success:
                raise DownloadError(resp.status_code, kind, url)

            declared = resp.headers.get("content-length")
            if max_bytes is not None and declared and declared.isdigit() and int(declared) > max_bytes:
                raise PayloadTooLargeError(max_bytes, int(declared), kind)

            buf = bytearray()
            for chunk in resp.iter_bytes(self.chunk_size):
                buf.extend(chunk)
                if max_bytes is not None and len(buf) > max_bytes:
                    raise PayloadTooLargeError(max_bytes, len(buf), kind)

            content_type = resp.headers.get("content-type") or None
            logger.debug("fetched %s (%d bytes, %s)", url, len(buf), content_type)
            return FetchedContent(
                data=bytes(buf),
                content_type=content_type,
                status_code=resp.status_code,
                final_url=str(resp.url),
            )
