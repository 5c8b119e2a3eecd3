"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

import logging
from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID

from src.api.models import (
    CellResponse,
    CreateGameRequest,
    GameCreatedResponse,
    GameResponse,
    JoinGameRequest,
    LegalMovesResponse,
    MoveRequest,
    MoveResponse,
)
from src.core.exceptions import DeliveryError, GameError, GameNotFoundError
from src.core.models import GameModel
from src.db.repository import GameRepository
from src.services.notifications import NotificationPublisher
from src.stratego.game import DEFAULT_TTL, Game, utc_now
from src.stratego.moves import Move

logger = logging.getLogger(__name__)


class StrategoService:
    """Orchestration of layers for a Stratego game."""

    def __init__(
        self,
        repository: GameRepository,
        publisher: NotificationPublisher,
        game_ttl: timedelta = DEFAULT_TTL,
    ) -> None:
        self.repo = repository
        self.publisher = publisher
        self.game_ttl = game_ttl

    # -- API routes logic ---
    def create_game(
        self, request: CreateGameRequest, player_id: str
    ) -> GameCreatedResponse:
        """First player (the host) requested to create a new game."""

        # Use the starting positions to create a new Game, and convert into GameModel
        new_game = Game.new_game(
            player_id=player_id,
            placement=request.starting_positions,
            ttl=self.game_ttl,
        )

        # Store the GameModel in the repository
        _, game_id = self.repo.create_game(new_game.to_model())
        logger.info("Game %s created by host %s", game_id, player_id)
        return GameCreatedResponse(id=game_id)

    def join_game(
        self, game_id: UUID, request: JoinGameRequest, player_id: str
    ) -> GameCreatedResponse:
        """Second player (the guest) requested to join a game."""

        # Retrieve persisted GameModel from repository
        stored_model = self._fetch_game(game_id)

        # Create a new Game instance from the retrieved GameModel
        game = Game.from_model(stored_model)

        # Register the requested player and their army
        message = game.join(player_id, request.starting_positions)

        # store in repository (only if nobody joined in the meantime), then tell the host
        self._save(game_id, game, expected_version=stored_model.version)
        logger.info("Guest %s joined game %s", player_id, game_id)
        self._notify(game_id, message)

        return GameCreatedResponse(id=game_id)

    def make_move(
        self, game_id: UUID, request: MoveRequest, player_id: str
    ) -> MoveResponse:
        """Make a move attempt."""

        # Retrieve persisted GameModel from repository
        stored_model = self._fetch_game(game_id)

        # Create a new Game instance from the retrieved GameModel
        game = Game.from_model(stored_model)

        # Attempt the move
        move = Move(from_cell=request.from_cell, to_cell=request.to_cell)
        try:
            outcome = game.make_move(move, player_id)
        except GameError as e:
            logger.info("Move %s rejected in game %s: %s", move, game_id, e.message)
            raise

        # store in repository. A failed save means the move did not happen: nobody gets notified.
        self._save(game_id, game, expected_version=stored_model.version)
        logger.info(
            "Game %s: %s %s (status: %s)", game_id, player_id, outcome.result, game.status
        )

        message = outcome.to_message()
        if message is not None:
            self._notify(game_id, message)
        return MoveResponse()

    def get_game(self, game_id: UUID, player_id: str) -> GameResponse:
        """
        Retrieve current game state, as seen by the requesting player.
        ----
        Used by a frontend that (re)loads the game, or missed a notification.
        """
        game = Game.from_model(self._fetch_game(game_id))
        view = game.view_for(player_id)
        role = game.role_of(player_id)
        return GameResponse(
            game_id=game_id,
            status=game.status,
            role=str(role),
            turn=str(game.turn) if game.turn else None,
            winner=str(game.winner) if game.winner else None,
            board=[
                CellResponse(rank=cell.rank, owner=cell.owner, revealed=cell.revealed)
                for cell in view
            ],
        )

    def legal_moves(self, game_id: UUID, player_id: str) -> LegalMovesResponse:
        """retrieve set of legal moves."""
        game = Game.from_model(self._fetch_game(game_id))
        legal_moves = game.legal_moves(player_id)
        return LegalMovesResponse(
            game_id=game_id,
            role=str(game.role_of(player_id)),
            legal_moves=[
                MoveRequest(from_cell=move.from_cell, to_cell=move.to_cell)
                for move in legal_moves
            ],
        )

    def purge_expired_games(self, now: Optional[datetime] = None) -> int:
        """Remove games that passed their expiry time."""
        removed = self.repo.delete_expired(now or utc_now())
        if removed:
            logger.info("Removed %d expired game(s)", removed)
        return removed

    # -- Internal helpers --
    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails. An expired game is as good as gone."""
        game_model = self.repo.get_game(game_id)
        if game_model is None or utc_now() >= game_model.expires_at:
            raise GameNotFoundError(f"Game with {game_id=} not found.")
        return game_model

    def _save(self, game_id: UUID, game: Game, expected_version: int) -> None:
        saved = self.repo.update_game(game_id, game.to_model(), expected_version)
        if saved is None:
            raise GameNotFoundError(f"Game with {game_id=} not found.")

    def _notify(self, game_id: UUID, message: str) -> None:
        """Best effort: the game state is already saved, a failed delivery only gets logged."""
        try:
            self.publisher.publish(game_id, message)
        except DeliveryError as e:
            logger.warning("Could not deliver %r for game %s: %s", message, game_id, e)
