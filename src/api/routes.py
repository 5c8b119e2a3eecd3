"""HTTP routes. Only translates between HTTP and the service, all game logic lives below this layer."""

from datetime import timedelta
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from src.api.identity import resolve_player_id
from src.api.models import (
    CreateGameRequest,
    GameCreatedResponse,
    GameResponse,
    JoinGameRequest,
    LegalMovesResponse,
    MoveRequest,
    MoveResponse,
)
from src.core.config import get_settings
from src.core.exceptions import GameError
from src.db.database import get_db
from src.db.sql_repository import SQLGameRepository
from src.services.notifications import LoggingPublisher, NotificationPublisher
from src.services.stratego_service import StrategoService

router = APIRouter(prefix="/games", tags=["games"])

_publisher = LoggingPublisher()


def get_publisher() -> NotificationPublisher:
    return _publisher


def get_service(
    db: Annotated[Session, Depends(get_db)],
    publisher: Annotated[NotificationPublisher, Depends(get_publisher)],
) -> StrategoService:
    return StrategoService(
        SQLGameRepository(db),
        publisher,
        game_ttl=timedelta(hours=get_settings().game_ttl_hours),
    )


Service = Annotated[StrategoService, Depends(get_service)]
PlayerID = Annotated[str, Depends(resolve_player_id)]


@router.post("", status_code=status.HTTP_201_CREATED)
def create_game(
    request: CreateGameRequest, service: Service, player_id: PlayerID
) -> GameCreatedResponse:
    return service.create_game(request, player_id)


@router.post("/{game_id}", status_code=status.HTTP_201_CREATED)
def join_game(
    game_id: UUID, request: JoinGameRequest, service: Service, player_id: PlayerID
) -> GameCreatedResponse:
    return service.join_game(game_id, request, player_id)


@router.post("/{game_id}/moves", status_code=status.HTTP_201_CREATED)
def make_move(
    game_id: UUID, request: MoveRequest, service: Service, player_id: PlayerID
) -> MoveResponse:
    return service.make_move(game_id, request, player_id)


@router.get("/{game_id}")
def get_game(game_id: UUID, service: Service, player_id: PlayerID) -> GameResponse:
    return service.get_game(game_id, player_id)


@router.get("/{game_id}/moves")
def legal_moves(
    game_id: UUID, service: Service, player_id: PlayerID
) -> LegalMovesResponse:
    return service.legal_moves(game_id, player_id)


def game_error_handler(_: Request, exc: Exception) -> JSONResponse:
    """Every GameError knows its own status code."""
    assert isinstance(exc, GameError)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())
