import logging
import sys
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .config import (
    ACCESS_TOKEN_EXPIRE_MINUTES,
    BCRYPT_ROUNDS,
    CORS_ORIGINS,
    DATABASE_URL,
    DEFAULT_SECRET_KEY,
    LOG_LEVEL,
    SECRET_KEY,
)
from .database import Database
from .errors import register_error_handlers
from .routers import auth, tasks, user_tasks
from .security import PasswordHasher, TokenService

logger = logging.getLogger(__name__)


def configure_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s  %(levelname)-8s  %(name)s: %(message)s",
        stream=sys.stdout,
    )
    for _noisy in ("sqlalchemy.engine", "sqlalchemy.pool", "multipart"):
        logging.getLogger(_noisy).setLevel(logging.WARNING)


def create_app(
    database: Optional[Database] = None,
    secret_key: str = SECRET_KEY,
    token_ttl: timedelta = timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES),
    bcrypt_rounds: int = BCRYPT_ROUNDS,
) -> FastAPI:
    """Build the API. Pass ``database`` to serve from an existing pool."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        db = database or Database(DATABASE_URL)
        db.open()
        app.state.database = db
        if secret_key == DEFAULT_SECRET_KEY:
            logger.warning("SECRET_KEY is not set; session tokens are signed with the default key")
        try:
            yield
        finally:
            db.close()

    app = FastAPI(
        title="Taskboard API",
        description="User registration, login and management of to-do tasks.",
        version=__version__,
        docs_url="/api-docs",
        lifespan=lifespan,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials="*" not in CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.password_hasher = PasswordHasher(rounds=bcrypt_rounds)
    app.state.token_service = TokenService(secret_key, ttl=token_ttl)

    register_error_handlers(app)

    app.include_router(auth.router, tags=["auth"])
    app.include_router(user_tasks.router, tags=["user tasks"])
    app.include_router(tasks.router, tags=["tasks"])

    @app.get("/")
    def read_root():
        return {"message": "Taskboard API"}

    @app.get("/health")
    def health_check():
        return {"status": "healthy"}

    return app


configure_logging()
app = create_app()
