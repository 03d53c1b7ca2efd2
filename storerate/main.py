from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storerate.api.errors import install_exception_handlers
from storerate.api.router import router as api_router
from storerate.core.config import Settings, get_settings
from storerate.core.db import Database
from storerate.core.security import PasswordHasher, TokenService

log = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the app and everything it owns (db pool, token service, hasher).

    The lifespan only tears down: the database engine is disposed on shutdown.
    """
    settings = settings or get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    db = Database.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        log.info("%s starting (env=%s)", settings.APP_NAME, settings.APP_ENV)
        try:
            yield
        finally:
            await db.dispose()
            log.info("%s stopped", settings.APP_NAME)

    app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
    app.state.settings = settings
    app.state.db = db
    app.state.tokens = TokenService(
        settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
        ttl_minutes=settings.JWT_ACCESS_TTL_MIN,
    )
    app.state.hasher = PasswordHasher(rounds=settings.BCRYPT_ROUNDS)

    origins = settings.cors_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # credentials cannot be combined with a wildcard origin
        allow_credentials=origins != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    install_exception_handlers(app)
    app.include_router(api_router, prefix=settings.API_PREFIX)
    return app


app = create_app()
