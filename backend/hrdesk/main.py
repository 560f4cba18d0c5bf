"""
Application factory and server entrypoint.

Run with either of:

    hrdesk
    uvicorn backend.hrdesk.main:create_app --factory
"""
import logging
import sys
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import uvicorn
from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from .api import auth as auth_api
from .api import candidates as candidates_api
from .api import interviews as interviews_api
from .config import ConfigError, Settings, load_settings
from .database import init_db, make_engine, make_session_factory
from .utils.error_handlers import register_exception_handlers

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Refuse to serve anything if the database is unreachable.
    try:
        init_db(app.state.engine)
    except SQLAlchemyError:
        logger.exception("Database connection error")
        raise
    logger.info("Server running on %s", app.state.settings.port)
    yield
    app.state.engine.dispose()


health_router = APIRouter(tags=["Health"])


@health_router.get("/health")
def health_check():
    """Liveness probe."""
    return {"ok": True, "now": datetime.now(timezone.utc).isoformat()}


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or load_settings()

    app = FastAPI(title="HR Desk API", lifespan=lifespan)
    app.state.settings = settings
    app.state.engine = make_engine(settings.database_url)
    app.state.session_factory = make_session_factory(app.state.engine)

    app.include_router(health_router, prefix="/api")
    app.include_router(auth_api.router, prefix="/api")
    app.include_router(candidates_api.router, prefix="/api")
    app.include_router(interviews_api.router, prefix="/api")

    register_exception_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    return app


def serve() -> None:
    try:
        settings = load_settings()
    except ConfigError as e:
        logging.basicConfig(level=logging.ERROR)
        logger.error("Invalid configuration: %s", e)
        sys.exit(1)

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = create_app(settings)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    serve()
