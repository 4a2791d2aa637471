from __future__ import annotations
from enum import StrEnum


class AssetStatus(StrEnum):
    pending = "pending"
    completed = "completed"
    failed = "failed"
