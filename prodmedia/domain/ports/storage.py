from __future__ import annotations
from typing import Protocol


class StoragePort(Protocol):
    """Object store keyed by deterministic paths; a put to an existing path overwrites it."""

    def put(self, path: str, data: bytes, content_type: str) -> str: ...

    def public_url(self, path: str) -> str: ...
