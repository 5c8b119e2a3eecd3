"""
Stratego Game Service - FastAPI Application
Two remote players set up their armies and take turns moving through these endpoints
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.routes import game_error_handler, get_publisher, router
from src.core.config import get_settings
from src.core.exceptions import GameError
from src.db.database import SessionLocal, init_db
from src.db.sql_repository import SQLGameRepository
from src.services.stratego_service import StrategoService

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    """Create the tables and clear out games that expired while the service was down."""
    init_db()
    with SessionLocal() as db:
        service = StrategoService(SQLGameRepository(db), get_publisher())
        service.purge_expired_games()
    logger.info("Stratego service ready")
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="Stratego Game Service",
        description="Rules engine for two-player Stratego games",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(GameError, game_error_handler)
    app.include_router(router)

    @app.get("/health")
    def health_check() -> dict[str, str]:
        return {"status": "ok"}

    return app


app = create_app()

