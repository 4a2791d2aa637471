# tests/conftest.py
from __future__ import annotations

import threading
from typing import Any, Dict, List, Mapping, Optional, Tuple

import pytest

from prodmedia.common import settings as settings_mod
from prodmedia.domain.enums.asset_kind import AssetKind
from prodmedia.domain.enums.processing_status import ProcessingStatus
from prodmedia.domain.errors import DownloadError, RecordNotFoundError
from prodmedia.domain.policies.asset_paths import public_url
from prodmedia.domain.ports.fetcher import FetchedContent

TEST_BUCKET = "test-bucket"


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    """Each test sees settings built from its own environment."""
    monkeypatch.setenv("APP_ENV", "test")
    settings_mod.get_settings.cache_clear()
    yield
    settings_mod.get_settings.cache_clear()


# ----- In-memory collaborators ----------------------------------------------

class FakeStorage:
    def __init__(self, bucket: str = TEST_BUCKET, fail_paths: Optional[set] = None):
        self.bucket = bucket
        self.objects: Dict[str, Tuple[bytes, str]] = {}
        self.puts: List[str] = []
        self.fail_paths = set(fail_paths or ())
        self._lock = threading.Lock()

    def put(self, path: str, data: bytes, content_type: str) -> str:
        if path in self.fail_paths:
            raise RuntimeError(f"upload rejected: {path}")
        with self._lock:
            self.objects[path] = (bytes(data), content_type)
            self.puts.append(path)
        return self.public_url(path)

    def public_url(self, path: str) -> str:
        return public_url(self.bucket, path)


class FakeFetcher:
    """
    Scripted responses keyed by URL: (body, content_type) for 200, an int for a
    non-2xx status, or an Exception to raise. Unknown URLs answer 404.
    max_bytes is deliberately ignored so callers' own size checks are exercised.
    """

    def __init__(self, responses: Optional[Mapping[str, Any]] = None):
        self.responses: Dict[str, Any] = dict(responses or {})
        self.calls: List[str] = []
        self._lock = threading.Lock()

    def fetch(self, url: str, *, max_bytes: Optional[int] = None, kind: AssetKind = AssetKind.image) -> FetchedContent:
        with self._lock:
            self.calls.append(url)
        scripted = self.responses.get(url, 404)
        if isinstance(scripted, Exception):
            raise scripted
        if isinstance(scripted, int):
            raise DownloadError(scripted, kind, url)
        body, content_type = scripted
        return FetchedContent(data=body, content_type=content_type, final_url=url)


class FakeRecords:
    def __init__(self, docs: Optional[Dict[str, Dict[str, Any]]] = None):
        self.docs: Dict[str, Dict[str, Any]] = {k: dict(v) for k, v in (docs or {}).items()}
        self.writes: List[Tuple[str, Dict[str, Any]]] = []
        self.reject_next: Optional[Exception] = None
        self._lock = threading.Lock()

    def get(self, product_id: str) -> Optional[Dict[str, Any]]:
        doc = self.docs.get(product_id)
        return dict(doc) if doc is not None else None

    def commit(self, product_id, updates, *, status_field, expected) -> bool:
        with self._lock:
            if self.reject_next is not None:
                exc, self.reject_next = self.reject_next, None
                raise exc
            doc = self.docs.get(product_id)
            if doc is None:
                raise RecordNotFoundError(product_id)
            if ProcessingStatus.parse(doc.get(status_field)) not in expected:
                return False
            doc.update(dict(updates))
            self.writes.append((product_id, dict(updates)))
            return True


@pytest.fixture()
def storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture()
def fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture()
def records() -> FakeRecords:
    return FakeRecords()


@pytest.fixture()
def png_bytes():
    """Factory for in-memory PNGs of a given size."""
    import io
    from PIL import Image

    def _make(width: int = 1600, height: int = 900, mode: str = "RGB") -> bytes:
        img = Image.new(mode, (width, height), color=(200, 40, 40) if mode == "RGB" else (10, 20, 30, 128))
        buf = io.BytesIO()
        img.save(buf, format="PNG")
        return buf.getvalue()

    return _make
