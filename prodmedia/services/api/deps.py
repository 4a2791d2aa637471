# prodmedia/services/api/deps.py
from __future__ import annotations

from functools import lru_cache

from prodmedia.services.ingest.dispatcher import MediaDispatcher
from prodmedia.services.ingest.factory import build_dispatcher


@lru_cache(maxsize=1)
def _dispatcher() -> MediaDispatcher:
    return build_dispatcher()


def get_dispatcher() -> MediaDispatcher:
    """
    Provide the configured MediaDispatcher via DI (built once per process).
    Tests override this dependency with a dispatcher wired to fakes.
    """
    return _dispatcher()
