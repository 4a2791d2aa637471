from __future__ import annotations
from enum import StrEnum


class AssetType(StrEnum):
    external = "external"          # needs a fetch
    storage = "storage"            # already lives in our bucket
    link_through = "link_through"  # stored as-is, never fetched (YouTube)
