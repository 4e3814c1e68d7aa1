"""
Gym tracker API — application entry point.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from api.errors import register_exception_handlers
from api.middleware import register_middleware
from api.records import router as records_router
from auth.password import PasswordHasher
from auth.routes import router as auth_router
from auth.tokens import TokenService
from config.settings import Settings, load_settings
from database.session import build_engine, build_session_factory, create_tables

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
        stream=sys.stdout,
    )
    for _noisy in ("sqlalchemy.engine", "aiosqlite", "asyncio"):
        logging.getLogger(_noisy).setLevel(logging.WARNING)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Gym Tracker API",
        version="1.0.0",
        description="Authentication and training records for the gym tracker.",
    )

    app.state.settings = settings
    app.state.engine = build_engine(settings.database_url)
    app.state.session_factory = build_session_factory(app.state.engine)
    app.state.password_hasher = PasswordHasher(rounds=settings.password_hash_rounds)
    app.state.token_service = TokenService(
        settings.jwt_secret,
        ttl_seconds=settings.jwt_expiry_seconds,
        algorithm=settings.jwt_algorithm,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=["Content-Type", "Authorization"],
        max_age=600,
    )

    register_middleware(app)
    register_exception_handlers(app)

    # Routes
    app.include_router(auth_router, prefix="/auth")
    app.include_router(records_router)

    @app.get("/", response_class=PlainTextResponse)
    async def index() -> str:
        return "Gymapp Online"

    @app.on_event("startup")
    async def on_startup():
        if not app.state.token_service.configured:
            logger.warning("JWT_SECRET not set; login and profile requests will fail with 500.")
        if settings.create_tables_on_startup:
            await create_tables(app.state.engine)
        logger.info("Application ready to accept requests.")

    @app.on_event("shutdown")
    async def on_shutdown():
        await app.state.engine.dispose()

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=app.state.settings.host,
        port=app.state.settings.port,
        reload=app.state.settings.debug,
        log_level="debug" if app.state.settings.debug else "info",
    )
