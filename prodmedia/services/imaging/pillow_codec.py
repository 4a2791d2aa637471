# prodmedia/services/imaging/pillow_codec.py
from __future__ import annotations

import io

from PIL import Image, ImageOps, UnidentifiedImageError

from prodmedia.domain.errors import UnsupportedImageError
from prodmedia.domain.ports.image_codec import ImageCodecPort

_CONTENT_TYPES = {
    "webp": "image/webp",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
}


class PillowImageCodec(ImageCodecPort):
    """Fit-inside resize + re-encode with Pillow. Stateless; safe to share across threads."""

    def render(self, data: bytes, max_edge: int, *, fmt: str = "webp", quality: int = 80) -> bytes:
        if max_edge <= 0:
            raise ValueError("max_edge must be > 0")
        try:
            with Image.open(io.BytesIO(data)) as src:
                img = ImageOps.exif_transpose(src)
                img.load()
        except (UnidentifiedImageError, OSError) as ex:
            raise UnsupportedImageError(f"cannot decode image: {ex}") from ex

        # thumbnail() keeps aspect ratio and never enlarges
        img.thumbnail((max_edge, max_edge), Image.Resampling.LANCZOS)
        out = io.BytesIO()
        self._pillow_save(img, out, fmt, quality)
        return out.getvalue()

    def content_type(self, fmt: str) -> str:
        return _CONTENT_TYPES.get(fmt.lower(), "application/octet-stream")

    def _pillow_save(self, img: Image.Image, out: io.BytesIO, fmt: str, quality: int) -> None:
        fmt = fmt.lower()
        if fmt == "webp":
            if img.mode not in ("RGB", "RGBA"):
                img = img.convert("RGBA" if "A" in img.getbands() else "RGB")
            img.save(out, format="WEBP", quality=int(quality), method=6)
        elif fmt in ("jpg", "jpeg"):
            img = img.convert("RGB")
            img.save(out, format="JPEG", quality=int(quality), optimize=True, progressive=True)
        elif fmt == "png":
            img.save(out, format="PNG", optimize=True)
        else:
            raise ValueError(f"Unsupported format: {fmt}")
