from __future__ import annotations
from enum import StrEnum


class VideoType(StrEnum):
    youtube = "youtube"
    upload = "upload"
