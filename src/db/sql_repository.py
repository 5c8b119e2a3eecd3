"""Implementation of (Game)Repository using SQLAlchemy"""

import logging
from dataclasses import asdict
from datetime import datetime, timezone
from uuid import UUID, uuid4

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.core.exceptions import ConflictError, StorageError
from src.core.models import GameModel, PieceModel
from src.db.schema import DBGame

logger = logging.getLogger(__name__)


class SQLGameRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists."""
        try:
            game_db = self._fetch_game(game_id)
        except SQLAlchemyError as e:
            raise StorageError(f"Could not read game {game_id}: {e}") from e
        if game_db:
            return self._to_model(game_db)
        return None

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new game and return the stored data + newly created game ID."""

        new_id = uuid4()
        game_db = DBGame(
            id=new_id,
            board=self._board_to_json(game.board),
            host_player_id=game.host_player_id,
            guest_player_id=game.guest_player_id,
            status=game.status,
            winner=game.winner,
            version=game.version,
            expires_at=game.expires_at,
        )
        try:
            self.db.add(game_db)
            self.db.commit()
            self.db.refresh(game_db)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageError(f"Could not store new game: {e}") from e
        return self._to_model(game_db), new_id

    def update_game(
        self, game_id: UUID, game: GameModel, expected_version: int
    ) -> GameModel | None:
        """
        Overwrite an existing record.
        ---

        The write is conditional: `UPDATE ... WHERE id = :id AND version = :expected_version`.
        If no row matched, either the game does not exist (return None) or someone else wrote first (ConflictError).
        """
        statement = (
            update(DBGame)
            .where(DBGame.id == game_id, DBGame.version == expected_version)
            .values(
                board=self._board_to_json(game.board),
                host_player_id=game.host_player_id,
                guest_player_id=game.guest_player_id,
                status=game.status,
                winner=game.winner,
                version=game.version,
                expires_at=game.expires_at,
            )
            .execution_options(synchronize_session=False)
        )
        try:
            result = self.db.execute(statement)
            if result.rowcount == 0:
                self.db.rollback()
                if self._fetch_game(game_id) is None:
                    return None
                logger.warning(
                    "Stale write rejected for game %s (expected version %s)",
                    game_id,
                    expected_version,
                )
                raise ConflictError(
                    f"Game {game_id} was changed by another request. Reload and try again."
                )
            self.db.commit()
            game_db = self._fetch_game(game_id)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageError(f"Could not update game {game_id}: {e}") from e

        # for the typechecker: the row was just updated
        assert game_db is not None
        self.db.refresh(game_db)
        return self._to_model(game_db)

    def delete_expired(self, now: datetime) -> int:
        """Remove the records of games that expired."""
        statement = (
            delete(DBGame)
            .where(DBGame.expires_at <= now)
            .execution_options(synchronize_session=False)
        )
        try:
            result = self.db.execute(statement)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageError(f"Could not remove expired games: {e}") from e
        return result.rowcount

    def _fetch_game(self, game_id: UUID) -> DBGame | None:
        query = select(DBGame).where(DBGame.id == game_id)
        return self.db.scalar(query)

    def _board_to_json(self, board: list[PieceModel]) -> list[dict]:
        return [asdict(piece) for piece in board]

    def _to_model(self, game_db: DBGame) -> GameModel:
        """Convert SQLAlchemy model to data transfer model."""
        # SQLite forgets the timezone, all stored times are UTC
        expires_at = game_db.expires_at
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)

        return GameModel(
            board=[PieceModel(**cell) for cell in game_db.board],
            host_player_id=game_db.host_player_id,
            guest_player_id=game_db.guest_player_id,
            status=game_db.status,
            expires_at=expires_at,
            version=game_db.version,
            winner=game_db.winner,
        )
