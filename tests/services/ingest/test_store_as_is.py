from prodmedia.domain.entities.asset_descriptor import AssetDescriptor
from prodmedia.domain.enums import AssetKind, AssetStatus, AssetType, VideoType
from prodmedia.services.ingest.store_as_is import StoreAsIs


def _image(url="https://host/a.jpg", role="main"):
    return AssetDescriptor(source_url=url, path=f"product-images/p1/{role}.jpg", role=role, is_main=role == "main")


def _video(url="https://cdn/clip.mp4"):
    return AssetDescriptor(source_url=url, path="product-videos/p1/video.mp4", role="video", kind=AssetKind.video)


def test_image_stored_verbatim_with_upstream_content_type(storage, fetcher):
    fetcher.responses["https://host/a.jpg"] = (b"PNGDATA", "image/png")
    a = StoreAsIs(storage=storage, fetcher=fetcher).process(_image())

    assert a.status is AssetStatus.completed
    assert storage.objects["product-images/p1/main.jpg"] == (b"PNGDATA", "image/png")
    assert a.url == storage.public_url("product-images/p1/main.jpg")


def test_default_content_types(storage, fetcher):
    fetcher.responses["https://host/a.jpg"] = (b"x", None)
    fetcher.responses["https://cdn/clip.mp4"] = (b"v", None)
    s = StoreAsIs(storage=storage, fetcher=fetcher)
    s.process(_image())
    v = s.process(_video())

    assert storage.objects["product-images/p1/main.jpg"][1] == "image/jpeg"
    assert storage.objects["product-videos/p1/video.mp4"][1] == "video/mp4"
    assert v.video_type is VideoType.upload


def test_drive_link_fetched_in_download_form(storage, fetcher):
    direct = "https://drive.google.com/uc?export=download&id=F1"
    fetcher.responses[direct] = (b"img", "image/jpeg")
    a = StoreAsIs(storage=storage, fetcher=fetcher).process(
        _image("https://drive.google.com/file/d/F1/view?usp=sharing")
    )
    assert fetcher.calls == [direct]
    assert a.succeeded
    assert a.source_url == "https://drive.google.com/file/d/F1/view?usp=sharing"


def test_http_error_fails_only_that_asset(storage, fetcher):
    a = StoreAsIs(storage=storage, fetcher=fetcher).process(_image("https://host/missing.jpg"))
    assert a.status is AssetStatus.failed
    assert a.error == "Image download failed: 404"
    assert storage.puts == []


def test_video_over_cap_is_discarded(storage, fetcher):
    fetcher.responses["https://cdn/clip.mp4"] = (b"v" * 2048, "video/mp4")
    v = StoreAsIs(storage=storage, fetcher=fetcher, max_video_bytes=1024).process(_video())
    assert v.status is AssetStatus.failed
    assert "exceeds size limit" in v.error
    assert storage.puts == []


def test_youtube_is_never_fetched(storage, fetcher):
    v = StoreAsIs(storage=storage, fetcher=fetcher).process(_video("https://youtu.be/abc"))
    assert v.status is AssetStatus.completed
    assert v.type is AssetType.link_through
    assert v.url == "https://youtu.be/abc"
    assert v.video_type is VideoType.youtube
    assert fetcher.calls == []
    assert storage.puts == []


def test_upload_failure_is_captured(storage, fetcher):
    fetcher.responses["https://host/a.jpg"] = (b"x", "image/jpeg")
    storage.fail_paths.add("product-images/p1/main.jpg")
    a = StoreAsIs(storage=storage, fetcher=fetcher).process(_image())
    assert a.failed
    assert "upload rejected" in a.error


def test_exception_without_message_still_reports_cause(storage, fetcher):
    fetcher.responses["https://host/a.jpg"] = TimeoutError()
    a = StoreAsIs(storage=storage, fetcher=fetcher).process(_image())
    assert a.error == "TimeoutError"


def test_non_pending_assets_pass_through(storage, fetcher):
    a = _image().mark_completed(url="https://already/there")
    assert StoreAsIs(storage=storage, fetcher=fetcher).process(a) is a
    assert fetcher.calls == []
