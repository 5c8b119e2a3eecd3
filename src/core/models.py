"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

# Type aliases to make GameModel easier to read
PlayerID = str
RankName = str
OwnerName = str


@dataclass
class PieceModel:
    """Transport-safe representation of the contents of one cell."""

    rank: RankName
    owner: OwnerName
    revealed: bool = False


@dataclass
class GameModel:
    """Transport-safe representation of a Stratego game used between API, Service, DB, and Game layers.

    The board is a list of 100 cells, the list index being the cell index.
    """

    board: list[PieceModel]
    host_player_id: Optional[PlayerID]
    guest_player_id: Optional[PlayerID]
    status: str
    expires_at: datetime
    version: int = 0
    winner: Optional[OwnerName] = None
