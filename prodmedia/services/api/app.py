from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from prodmedia.common.settings import get_settings
from prodmedia.services.api.routers import health, media, triggers

cfg = get_settings()
dev = cfg.app_env.lower() == "development"


def create_app() -> FastAPI:
    app = FastAPI(
        title="Product Media API",
        version="0.1.0",
        docs_url=f"{cfg.api.prefix}/docs",
        openapi_url=f"{cfg.api.prefix}/openapi.json",
    )

    allow_origins = ["*"] if dev else cfg.api.cors_allow_origins
    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_methods=cfg.api.cors_allow_methods,
        allow_headers=cfg.api.cors_allow_headers,
        allow_credentials=cfg.api.cors_allow_credentials,
    )

    # Routers
    app.include_router(health.router)
    app.include_router(triggers.router)
    app.include_router(media.router)

    if cfg.is_local_storage:
        from fastapi.staticfiles import StaticFiles

        # Serves LocalStorage objects at local_public_base_url
        app.mount("/media", StaticFiles(directory=str(cfg.local_storage_root), check_dir=False), name="media")
    return app


app = create_app()
