# prodmedia/services/schemas/processing.py
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ProductCreatedEvent(BaseModel):
    """Creation snapshot as delivered by the trigger (Eventarc / functions bridge)."""
    model_config = ConfigDict(populate_by_name=True)

    product_id: str = Field(..., min_length=1, alias="productId", examples=["p0Xc3kq9"])
    document: Dict[str, Any] = Field(default_factory=dict, examples=[{
        "sourceImages": {"main": "https://host/a.jpg", "gallery": []},
        "videoUrl": None,
    }])


class AssetResultSchema(BaseModel):
    role: str = Field(..., examples=["main", "gallery_0", "video"])
    kind: str = Field(..., examples=["image", "video"])
    source_url: str
    path: str = Field(..., examples=["product-images/p0Xc3kq9/main.jpg"])
    is_main: bool
    type: str = Field(..., examples=["external", "storage", "link_through"])
    status: str = Field(..., examples=["completed", "failed"])
    url: Optional[str] = None
    urls: Dict[str, str] = Field(default_factory=dict)
    error: Optional[str] = None


class DispatchResponse(BaseModel):
    product_id: str
    variant: str
    skipped: bool
    skip_reason: str = ""
    status: Optional[str] = None
    written: bool
    conflict: bool = False
    failure_reason: Optional[str] = None
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    planned: int = 0
    succeeded: int = 0
    failed: int = 0
    assets: List[AssetResultSchema] = Field(default_factory=list)
    error_details: List[str] = Field(default_factory=list)


class NormalizeRequest(BaseModel):
    url: str = Field(..., examples=["https://drive.google.com/file/d/1AbC/view?usp=sharing"])


class NormalizeResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    url: str
    normalized_url: str = Field(..., serialization_alias="normalizedUrl")
    is_youtube: bool = Field(..., serialization_alias="isYouTube")
