"""QnA API — FastAPI application factory and server entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers keep every response in the {status, error?, data?} envelope
    - CORS configured from settings (permissive by default)
    - Settings, DatabaseSessionManager and QnaService built once and kept on app.state
    - Startup fails fast: bad config exits 1, unreachable store aborts the lifespan

Design Decisions:
    - create_app(settings, service=None): tests inject a service and skip the store
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - uvicorn.Server subclass only to log the shutdown signal; uvicorn itself
      stops accepting connections and drains in-flight requests
"""

import logging
import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

from qna import __version__
from qna.api.error_handlers import register_error_handlers
from qna.api.routes import answers, health, questions, users
from qna.config import Settings, get_settings
from qna.core.errors import QnaError
from qna.infrastructure.database import DatabaseSessionManager
from qna.infrastructure.observability import setup_logging
from qna.infrastructure.repository import QnaRepository
from qna.services.qna_service import QnaService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings: Settings = app.state.settings
    if app.state.service is None:
        db = DatabaseSessionManager(
            settings.resolved_database_url,
            pool_size=settings.postgres_pool_max_conns,
            max_lifetime=settings.postgres_pool_max_conn_lifetime,
            max_idle_time=settings.postgres_pool_max_conn_idle_time,
            sslmode=settings.postgres_sslmode,
        )
        try:
            if settings.database_create_schema:
                await db.create_schema()
            await db.ping()
        except QnaError as e:
            logger.critical(f"error initializing repository: {e}")
            await db.dispose()
            raise
        repository = QnaRepository(db)
        app.state.db = db
        app.state.service = QnaService(repository, repository)
    logger.info("QnA API started")
    yield
    logger.info("QnA API shutting down")
    if app.state.db is not None:
        await app.state.db.dispose()


def create_app(settings: Settings, service: QnaService | None = None) -> FastAPI:
    app = FastAPI(title="QnA API", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.service = service
    app.state.db = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(users.router)
    app.include_router(questions.router)
    app.include_router(answers.router)
    app.include_router(health.router)

    register_error_handlers(app)
    return app


class QnaServer(uvicorn.Server):
    """uvicorn server that logs which signal triggered the shutdown."""

    def handle_exit(self, sig, frame) -> None:
        logger.info(
            "Shutting down server...",
            extra={"signal": signal.Signals(sig).name},
        )
        super().handle_exit(sig, frame)


def run() -> None:
    """Console entry point: load config, set up logging, serve until signalled."""
    try:
        settings = get_settings()
    except ValidationError as e:
        setup_logging()
        logger.critical(f"failed to load configuration: {e}")
        sys.exit(1)

    setup_logging(settings.log_level, settings.log_format)
    app = create_app(settings)
    config = uvicorn.Config(
        app,
        host=settings.http_host,
        port=settings.http_port,
        timeout_keep_alive=int(settings.http_idle_timeout),
        log_config=None,
        access_log=False,
    )
    server = QnaServer(config)
    logger.info(
        "server is running",
        extra={"addr": f"{settings.http_host}:{settings.http_port}"},
    )
    server.run()
    if not server.started:
        logger.critical("failed to start server")
        sys.exit(1)
    logger.info("Shutting down gracefully...")


if __name__ == "__main__":
    run()
