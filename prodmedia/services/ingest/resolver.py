# prodmedia/services/ingest/resolver.py
from __future__ import annotations

from dataclasses import dataclass

from prodmedia.domain.entities.asset_descriptor import AssetDescriptor
from prodmedia.domain.enums.asset_kind import AssetKind
from prodmedia.domain.policies.url_rules import (
    VideoClassification,
    classify_video,
    normalize_drive_url,
)


@dataclass(frozen=True)
class ResolvedSource:
    """Fetch strategy for one asset."""
    fetch_url: str
    link_through: bool = False


class AssetResolver:
    """
    Decides how an asset's source is obtained. No I/O:
    YouTube videos are link-through (never fetched), Drive share links are
    rewritten to direct downloads, everything else is fetched as-is.
    """

    def resolve(self, asset: AssetDescriptor) -> ResolvedSource:
        url = asset.source_url
        if asset.kind is AssetKind.video and classify_video(url) is VideoClassification.link_through:
            return ResolvedSource(fetch_url=url, link_through=True)
        return ResolvedSource(fetch_url=normalize_drive_url(url))
