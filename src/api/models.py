"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Status
from src.stratego.cells import NUM_CELLS

Cell = int
RankName = str


# --- REQUEST MODELS ---
class ArmyPlacementRequest(BaseModel):
    """Starting positions of a player's army: cell index --> rank name"""

    model_config = ConfigDict(populate_by_name=True)

    starting_positions: dict[Cell, RankName] = Field(alias="startingPositions")

    @field_validator("starting_positions")
    @classmethod
    def validate_cells(cls, value: dict[Cell, RankName]) -> dict[Cell, RankName]:
        off_board = sorted(cell for cell in value if not 0 <= cell < NUM_CELLS)
        if off_board:
            raise InvalidRequestError(f"Cells {off_board} are not on the board.")
        return value


class CreateGameRequest(ArmyPlacementRequest):
    pass


class JoinGameRequest(ArmyPlacementRequest):
    pass


class MoveRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_cell: Cell = Field(alias="from")
    to_cell: Cell = Field(alias="to")


# --- RESPONSE MODELS ---
class GameCreatedResponse(BaseModel):
    id: UUID


class MoveResponse(BaseModel):
    """Nothing to report: the result reaches both players through the notification."""


class CellResponse(BaseModel):
    rank: RankName
    owner: str
    revealed: bool


class GameResponse(BaseModel):
    game_id: UUID
    status: Status
    role: str
    turn: Optional[str]
    winner: Optional[str]
    board: list[CellResponse]


class LegalMovesResponse(BaseModel):
    game_id: UUID
    role: str
    legal_moves: list[MoveRequest]
