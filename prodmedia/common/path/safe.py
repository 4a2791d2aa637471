# prodmedia/common/path/safe.py
from __future__ import annotations

from pathlib import Path, PurePosixPath


def resolve_root(root: Path | str) -> Path:
    """Resolve a storage root directory."""
    return Path(root).expanduser().resolve()


def safe_join(root: Path | str, rel: str) -> Path:
    """
    Join 'root' and a storage-style relative key ("a/b/c.jpg") safely.
    Raises ValueError for absolute keys or keys that escape the root.
    """
    key = PurePosixPath(rel)
    if key.is_absolute() or not rel.strip():
        raise ValueError(f"storage key must be relative and non-empty: {rel!r}")
    r = resolve_root(root)
    p = (r / Path(*key.parts)).resolve()
    try:
        p.relative_to(r)
    except ValueError as exc:
        raise ValueError(f"path {p} escapes root {r}") from exc
    return p
