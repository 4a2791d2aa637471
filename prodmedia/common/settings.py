# prodmedia/common/settings.py
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, AliasChoices, field_validator, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

from prodmedia.common.strings.splitters import csv_to_list
from prodmedia.domain.enums.size_tag import SizeTag


def _to_bool(v: str | bool | int | None, default: bool = False) -> bool:
    if isinstance(v, bool):
        return v
    if v is None:
        return default
    s = str(v).strip().lower()
    return s in {"1", "true", "yes", "y", "on"}


class APIConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8080
    prefix: str = "/api"

    cors_allow_origins: List[str] = Field(default_factory=lambda: ["http://localhost:3000"])
    cors_allow_methods: List[str] = Field(default_factory=lambda: ["GET", "POST", "OPTIONS"])
    cors_allow_headers: List[str] = Field(default_factory=lambda: ["*"])
    cors_allow_credentials: bool = False

    @field_validator("cors_allow_origins", "cors_allow_methods", "cors_allow_headers", mode="before")
    @classmethod
    def _split_csv(cls, v):
        return csv_to_list(v)


class FirebaseConfig(BaseModel):
    project_id: Optional[str] = None
    # Empty means application-default credentials (Cloud Functions / Cloud Run)
    credentials_path: Optional[Path] = Field(
        default=None,
        validation_alias=AliasChoices("GOOGLE_APPLICATION_CREDENTIALS", "credentials_path"),
    )
    storage_bucket: str = "emart-ecommerce.firebasestorage.app"


class FetchConfig(BaseModel):
    timeout_sec: float = 15.0
    user_agent: str = "prodmedia/0.1 (+media-ingest)"
    follow_redirects: bool = True
    chunk_size: int = 64 * 1024

    @field_validator("follow_redirects", mode="before")
    @classmethod
    def _boolify(cls, v):
        return _to_bool(v, default=True)


class LimitsConfig(BaseModel):
    max_video_bytes: int = 50 * 1024 * 1024
    max_image_bytes: int = 25 * 1024 * 1024


class ImagingConfig(BaseModel):
    # Ordered: large -> medium -> thumb
    renditions: Dict[str, int] = Field(
        default_factory=lambda: {SizeTag.large.value: 1200, SizeTag.medium.value: 600, SizeTag.thumb.value: 300}
    )
    format: str = "webp"
    quality: int = Field(80, ge=1, le=100)
    main_rendition: str = SizeTag.medium.value

    @field_validator("renditions")
    @classmethod
    def _positive_edges(cls, v: Dict[str, int]) -> Dict[str, int]:
        if not v:
            raise ValueError("at least one rendition is required")
        for tag, edge in v.items():
            if int(edge) <= 0:
                raise ValueError(f"rendition {tag!r} must have a positive edge length")
        return v


class ConcurrencyConfig(BaseModel):
    asset_workers: int = Field(8, ge=1, le=64)
    rendition_workers: int = Field(3, ge=1, le=16)


class Settings(BaseSettings):
    # -------- App / Env --------
    app_name: str = "prodmedia"
    app_env: str = "development"  # development|test|staging|production
    log_level: str = "INFO"

    # -------- Pipeline --------
    pipeline_variant: str = Field("store_as_is", description="store_as_is|multi_resolution")
    products_collection: str = "products"

    # -------- Storage backend --------
    storage_backend: str = Field("firebase", description="firebase|local")
    local_storage_root: Path = Path("/tmp/prodmedia/storage")
    local_public_base_url: str = "http://localhost:8080/media"

    # -------- Sub-configs --------
    api: APIConfig = APIConfig()
    firebase: FirebaseConfig = FirebaseConfig()
    fetch: FetchConfig = FetchConfig()
    limits: LimitsConfig = LimitsConfig()
    imaging: ImagingConfig = ImagingConfig()
    concurrency: ConcurrencyConfig = ConcurrencyConfig()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("pipeline_variant", "storage_backend", mode="before")
    @classmethod
    def _lower(cls, v):
        return str(v).strip().lower() if v is not None else v

    # ===== Convenience =====
    @computed_field  # type: ignore[misc]
    @property
    def storage_bucket(self) -> str:
        return self.firebase.storage_bucket

    @computed_field  # type: ignore[misc]
    @property
    def is_local_storage(self) -> bool:
        return self.storage_backend == "local"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Global settings accessor (cached). Use this everywhere you need config:
        from prodmedia.common.settings import get_settings
        cfg = get_settings()
    """
    s = Settings()  # pydantic_settings will read from .env automatically
    if s.is_local_storage and s.app_env in ("development", "test"):
        s.local_storage_root.mkdir(parents=True, exist_ok=True)
    return s
