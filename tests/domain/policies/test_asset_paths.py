import pytest

from prodmedia.domain.policies import asset_paths as ap


def test_single_file_paths():
    assert ap.image_path("p1", ap.main_role()) == "product-images/p1/main.jpg"
    assert ap.image_path("p1", ap.gallery_role(3)) == "product-images/p1/gallery_3.jpg"
    assert ap.video_path("p1") == "product-videos/p1/video.mp4"


def test_rendition_paths_nest_under_asset_dir():
    base = ap.image_dir("p1", "gallery_0")
    assert base == "product-images/p1/gallery_0"
    assert ap.rendition_path(base, "thumb") == "product-images/p1/gallery_0/thumb.webp"
    assert ap.rendition_path(base + "/", "large", ".webp") == "product-images/p1/gallery_0/large.webp"


@pytest.mark.parametrize("bad", ["", "a/b"])
def test_invalid_product_id_rejected(bad):
    with pytest.raises(ValueError):
        ap.image_path(bad, "main")


def test_negative_gallery_index_rejected():
    with pytest.raises(ValueError):
        ap.gallery_role(-1)


def test_public_url_is_deterministic_and_encoded():
    url = ap.public_url("bkt", "product-images/p1/main.jpg")
    assert url == "https://firebasestorage.googleapis.com/v0/b/bkt/o/product-images%2Fp1%2Fmain.jpg?alt=media"
    assert ap.public_url("bkt", "product-images/p1/main.jpg") == url


def test_encode_uri_component_matches_javascript():
    # encodeURIComponent("a b/(c)!*'~_.-") === "a%20b%2F(c)!*'~_.-"
    assert ap.encode_uri_component("a b/(c)!*'~_.-") == "a%20b%2F(c)!*'~_.-"
    assert ap.encode_uri_component("ü&=?") == "%C3%BC%26%3D%3F"


def test_public_url_requires_bucket():
    with pytest.raises(ValueError):
        ap.public_url("", "x")
