from __future__ import annotations
from typing import Protocol


class ImageCodecPort(Protocol):
    def render(self, data: bytes, max_edge: int, *, fmt: str = "webp", quality: int = 80) -> bytes:
        """Fit inside max_edge x max_edge (never enlarging) and re-encode."""
        ...

    def content_type(self, fmt: str) -> str: ...
