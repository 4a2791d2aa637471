from __future__ import annotations

import os
import tempfile
from pathlib import Path

from prodmedia.common.path.safe import resolve_root, safe_join
from prodmedia.domain.policies.asset_paths import encode_uri_component
from prodmedia.domain.ports.storage import StoragePort


class LocalStorage(StoragePort):
    """
    Local filesystem implementation for StoragePort (development backend).
    Keys map to files below `root`; the content type is not persisted.
    """

    def __init__(self, root: Path | str, public_base_url: str) -> None:
        self.root = resolve_root(root)
        self.public_base_url = public_base_url.rstrip("/")

    def put(self, path: str, data: bytes, content_type: str) -> str:
        dst = safe_join(self.root, path)
        dst.parent.mkdir(parents=True, exist_ok=True)
        # Write beside the target then atomically replace, so readers never see a partial file
        tf = tempfile.NamedTemporaryFile("wb", delete=False, dir=str(dst.parent), suffix=".part")
        tmp = Path(tf.name)
        try:
            with tf:
                tf.write(data)
            os.replace(tmp, dst)
        finally:
            tmp.unlink(missing_ok=True)
        return self.public_url(path)

    def public_url(self, path: str) -> str:
        segments = [encode_uri_component(s) for s in path.split("/") if s]
        return f"{self.public_base_url}/{'/'.join(segments)}"

    def file_exists(self, path: str) -> bool:
        return safe_join(self.root, path).is_file()
