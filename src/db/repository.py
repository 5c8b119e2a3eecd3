"""Protocol repository (can implement later for SQL Alchemy / a key-value store etc.)"""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from src.core.models import GameModel


class GameRepository(Protocol):
    """Persistence layer orchestration"""

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists."""
        ...

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new game and return the stored data + newly created game ID."""
        ...

    def update_game(
        self, game_id: UUID, game: GameModel, expected_version: int
    ) -> GameModel | None:
        """
        Overwrite an existing record, only if nobody else changed it since it was read (version still equals `expected_version`).
        Raises ConflictError otherwise. Returns None if the record does not exist.
        """
        ...

    def delete_expired(self, now: datetime) -> int:
        """Remove the records of games that expired. Returns how many were removed."""
        ...
