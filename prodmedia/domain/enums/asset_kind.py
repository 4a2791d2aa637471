from __future__ import annotations
from enum import StrEnum


class AssetKind(StrEnum):
    image = "image"
    video = "video"

    @property
    def label(self) -> str:
        return self.value.capitalize()
