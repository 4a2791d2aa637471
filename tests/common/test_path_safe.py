import pytest
from pathlib import Path
from prodmedia.common.path.safe import resolve_root, safe_join


def test_resolve_root(tmp_path):
    p = resolve_root(tmp_path)
    assert isinstance(p, Path)
    assert p.exists()


def test_safe_join_inside(tmp_path):
    out = safe_join(tmp_path, "product-images/p1/main.jpg")
    assert out.parent == resolve_root(tmp_path) / "product-images" / "p1"


@pytest.mark.parametrize("key", ["../outside.txt", "a/../../outside.txt", "/etc/passwd", "  "])
def test_safe_join_rejects(tmp_path, key):
    with pytest.raises(ValueError):
        safe_join(tmp_path, key)
