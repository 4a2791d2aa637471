# prodmedia/services/api/routers/media.py
from __future__ import annotations

from fastapi import APIRouter

from prodmedia.common.settings import get_settings
from prodmedia.domain.policies.url_rules import is_youtube_url, normalize_drive_url
from prodmedia.services.schemas.processing import NormalizeRequest, NormalizeResponse

cfg = get_settings()
router = APIRouter(prefix=f"{cfg.api.prefix}/media", tags=["media"])


@router.post("/normalize", response_model=NormalizeResponse)
def normalize(req: NormalizeRequest) -> NormalizeResponse:
    return NormalizeResponse(
        url=req.url,
        normalized_url=normalize_drive_url(req.url),
        is_youtube=is_youtube_url(req.url),
    )
