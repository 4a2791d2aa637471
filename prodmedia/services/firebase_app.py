# prodmedia/services/firebase_app.py
from __future__ import annotations

import threading
from typing import Optional

import firebase_admin
from firebase_admin import credentials

from prodmedia.common.logging import get_logger
from prodmedia.common.settings import get_settings

logger = get_logger(__name__)

_lock = threading.Lock()


def get_firebase_app() -> firebase_admin.App:
    """
    Return the default firebase_admin App, initializing it once from settings.
    A service-account file is used when configured, application-default credentials otherwise.
    """
    with _lock:
        try:
            return firebase_admin.get_app()
        except ValueError:
            pass

        cfg = get_settings().firebase
        cred: Optional[credentials.Base] = None
        if cfg.credentials_path:
            cred = credentials.Certificate(str(cfg.credentials_path))
        else:
            cred = credentials.ApplicationDefault()

        options = {"storageBucket": cfg.storage_bucket}
        if cfg.project_id:
            options["projectId"] = cfg.project_id
        logger.info("initializing firebase app (bucket=%s)", cfg.storage_bucket)
        return firebase_admin.initialize_app(cred, options)
