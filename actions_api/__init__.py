import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings, get_settings
from .errors import register_exception_handlers
from .routers.pumpdotfun import router as pumpdotfun_router


def setup_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(
        title="pump.fun Actions API",
        description="Solana Actions for buying pump.fun tokens",
        version="v1",
        openapi_url="/doc",
        docs_url="/swagger-ui",
        redoc_url=None,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PUT", "OPTIONS"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    # <--Actions-->
    app.include_router(pumpdotfun_router)
    # </--Actions-->

    app.dependency_overrides[get_settings] = lambda: settings

    return app


__all__ = ["Settings", "create_app", "get_settings"]
