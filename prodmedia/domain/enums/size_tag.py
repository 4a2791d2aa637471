from __future__ import annotations
from enum import StrEnum


class SizeTag(StrEnum):
    large = "large"
    medium = "medium"
    thumb = "thumb"
