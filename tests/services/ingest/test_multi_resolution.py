import io
import threading

import pytest
from PIL import Image

from prodmedia.domain.entities.asset_descriptor import AssetDescriptor
from prodmedia.domain.enums import AssetKind, AssetStatus, AssetType
from prodmedia.services.imaging.pillow_codec import PillowImageCodec
from prodmedia.services.ingest.multi_resolution import MultiResolution


def _asset(url="https://host/a.png", role="main"):
    return AssetDescriptor(source_url=url, path=f"product-images/p1/{role}", role=role, is_main=role == "main")


def _strategy(storage, fetcher, **kw):
    return MultiResolution(storage=storage, fetcher=fetcher, codec=PillowImageCodec(), **kw)


def test_three_renditions_keyed_by_size_tag(storage, fetcher, png_bytes):
    fetcher.responses["https://host/a.png"] = (png_bytes(1600, 1000), "image/png")
    a = _strategy(storage, fetcher).process(_asset())

    assert a.status is AssetStatus.completed
    assert set(a.urls) == {"large", "medium", "thumb"}
    assert a.url == a.urls["medium"]
    assert sorted(storage.objects) == [
        "product-images/p1/main/large.webp",
        "product-images/p1/main/medium.webp",
        "product-images/p1/main/thumb.webp",
    ]
    for tag, edge in (("large", 1200), ("medium", 600), ("thumb", 300)):
        data, content_type = storage.objects[f"product-images/p1/main/{tag}.webp"]
        assert content_type == "image/webp"
        img = Image.open(io.BytesIO(data))
        assert img.format == "WEBP"
        assert max(img.size) == edge
    assert fetcher.calls == ["https://host/a.png"]  # downloaded once


def test_small_source_is_not_enlarged(storage, fetcher, png_bytes):
    fetcher.responses["https://host/a.png"] = (png_bytes(500, 250), "image/png")
    _strategy(storage, fetcher).process(_asset())
    sizes = {
        path.rsplit("/", 1)[1]: Image.open(io.BytesIO(data)).size
        for path, (data, _) in storage.objects.items()
    }
    assert sizes["large.webp"] == (500, 250)
    assert sizes["medium.webp"] == (500, 250)
    assert sizes["thumb.webp"][0] == 300


def test_uploads_run_concurrently(fetcher, png_bytes):
    barrier = threading.Barrier(3, timeout=5)

    class _BarrierStorage:
        def __init__(self):
            self.paths = []

        def put(self, path, data, content_type):
            barrier.wait()  # times out unless all three uploads are in flight together
            self.paths.append(path)
            return f"https://store/{path}"

        def public_url(self, path):
            return f"https://store/{path}"

    store = _BarrierStorage()
    fetcher.responses["https://host/a.png"] = (png_bytes(800, 800), "image/png")
    a = _strategy(store, fetcher).process(_asset())
    assert a.succeeded, a.error
    assert len(store.paths) == 3


def test_one_failed_rendition_fails_the_asset(storage, fetcher, png_bytes):
    fetcher.responses["https://host/a.png"] = (png_bytes(800, 800), "image/png")
    storage.fail_paths.add("product-images/p1/main/thumb.webp")
    a = _strategy(storage, fetcher).process(_asset())
    assert a.status is AssetStatus.failed
    assert "thumb.webp" in a.error
    assert a.urls == {}


def test_undecodable_payload_fails(storage, fetcher):
    fetcher.responses["https://host/a.png"] = (b"<html>", "text/html")
    a = _strategy(storage, fetcher).process(_asset())
    assert a.failed
    assert "cannot decode image" in a.error
    assert storage.puts == []


def test_download_error_fails(storage, fetcher):
    a = _strategy(storage, fetcher).process(_asset("https://host/404.png"))
    assert a.error == "Image download failed: 404"


@pytest.mark.parametrize("mutate", ["storage", "done"])
def test_guard_skips_non_external_or_non_pending(storage, fetcher, mutate):
    a = _asset()
    if mutate == "storage":
        a.type = AssetType.storage
    else:
        a.mark_failed("earlier")
    assert _strategy(storage, fetcher).process(a) is a
    assert fetcher.calls == []


def test_rejects_video(storage, fetcher):
    v = AssetDescriptor(source_url="https://cdn/clip.mp4", path="v", role="video", kind=AssetKind.video)
    with pytest.raises(ValueError):
        _strategy(storage, fetcher).process(v)


def test_main_rendition_must_exist(storage, fetcher):
    with pytest.raises(ValueError):
        _strategy(storage, fetcher, renditions={"large": 1200}, main_rendition="medium")
