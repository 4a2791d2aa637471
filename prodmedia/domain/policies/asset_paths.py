from __future__ import annotations

from urllib.parse import quote

IMAGES_ROOT = "product-images"
VIDEOS_ROOT = "product-videos"

FIREBASE_DOWNLOAD_URL = "https://firebasestorage.googleapis.com/v0/b/{bucket}/o/{path}?alt=media"

# encodeURIComponent leaves A-Z a-z 0-9 - _ . ! ~ * ' ( ) unescaped; quote() already keeps -_.~
_URI_COMPONENT_SAFE = "!*'()"


def main_role() -> str:
    return "main"


def gallery_role(index: int) -> str:
    if index < 0:
        raise ValueError("gallery index must be >= 0")
    return f"gallery_{index}"


def video_role() -> str:
    return "video"


def image_path(product_id: str, role: str, ext: str = "jpg") -> str:
    """
    Deterministic single-file location, e.g. product-images/<id>/main.jpg
    or product-images/<id>/gallery_2.jpg.
    """
    _require_id(product_id)
    return f"{IMAGES_ROOT}/{product_id}/{role}.{ext.lstrip('.')}"


def image_dir(product_id: str, role: str) -> str:
    """Per-asset directory for rendition sets, e.g. product-images/<id>/main."""
    _require_id(product_id)
    return f"{IMAGES_ROOT}/{product_id}/{role}"


def rendition_path(asset_path: str, size_tag: str, fmt: str = "webp") -> str:
    return f"{asset_path.rstrip('/')}/{size_tag}.{fmt.lstrip('.')}"


def video_path(product_id: str, ext: str = "mp4") -> str:
    _require_id(product_id)
    return f"{VIDEOS_ROOT}/{product_id}/video.{ext.lstrip('.')}"


def encode_uri_component(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


def public_url(bucket: str, path: str) -> str:
    """
    Public download URL computed from (bucket, path) alone, so re-uploading to the
    same path yields the same URL.
    """
    if not bucket:
        raise ValueError("bucket is required")
    return FIREBASE_DOWNLOAD_URL.format(bucket=bucket, path=encode_uri_component(path))


def _require_id(product_id: str) -> None:
    if not product_id or "/" in product_id:
        raise ValueError(f"invalid product id for a storage path: {product_id!r}")
