"""
Exceptions used across layers.

Every exception raised on purpose by this application inherits from GameError.
The API layer only needs `status_code` and `code` to turn any of them into a response.
"""

from typing import Any


class GameError(Exception):
    """Base exception for all Stratego errors."""

    status_code: int = 500
    code: str = "GAME_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        return {"detail": self.message, "code": self.code}


# --- INPUT ERRORS ---
class InvalidRequestError(GameError):
    status_code = 400
    code = "INVALID_REQUEST"


# --- SETUP VALIDATION ---
class SetupError(GameError):
    """The submitted army placement is rejected."""

    status_code = 400
    code = "INVALID_SETUP"


class MissingPieceError(SetupError):
    code = "MISSING_PIECE"

    def __init__(self, cell: int) -> None:
        super().__init__(f"piece {cell} is missing")
        self.cell = cell


class InvalidRankError(SetupError):
    code = "INVALID_RANK"

    def __init__(self, rank: str) -> None:
        super().__init__(f"piece {rank} is not valid")
        self.rank = rank


class InvalidArmyCompositionError(SetupError):
    code = "INVALID_ARMY_COMPOSITION"

    def __init__(self, counts: dict[str, int]) -> None:
        super().__init__(f"number of pieces ({counts}) is not valid")
        self.counts = counts


# --- MOVE VALIDATION ---
class IllegalMoveError(GameError):
    """The requested move breaks one of the movement rules."""

    status_code = 400
    code = "ILLEGAL_MOVE"


class OutOfBoundsError(IllegalMoveError):
    code = "OUT_OF_BOUNDS"


class NoPieceError(IllegalMoveError):
    code = "NO_PIECE"


class ImmovablePieceError(IllegalMoveError):
    code = "IMMOVABLE_PIECE"


class NotOwnerError(IllegalMoveError):
    code = "NOT_OWNER"


class MustMoveError(IllegalMoveError):
    code = "MUST_MOVE"


class IllegalDiagonalError(IllegalMoveError):
    code = "ILLEGAL_DIAGONAL"


class TooFarError(IllegalMoveError):
    code = "TOO_FAR"


class BlockedByWaterError(IllegalMoveError):
    code = "BLOCKED_BY_WATER"


class BlockedByPieceError(IllegalMoveError):
    code = "BLOCKED_BY_PIECE"


class DestinationOccupiedBySelfError(IllegalMoveError):
    code = "DESTINATION_OCCUPIED_BY_SELF"


# --- GAME STATE / TURN ORDER ---
class GameStateError(GameError):
    status_code = 409
    code = "INVALID_GAME_STATE"


class GameNotStartedError(GameStateError):
    code = "GAME_NOT_STARTED"


class GameAlreadyOverError(GameStateError):
    code = "GAME_ALREADY_OVER"


class NotYourTurnError(GameError):
    status_code = 409
    code = "NOT_YOUR_TURN"


# --- IDENTITY ---
class UnauthenticatedError(GameError):
    status_code = 401
    code = "UNAUTHENTICATED"


class NotAPlayerError(GameError):
    status_code = 403
    code = "NOT_A_PLAYER"


# --- COLLABORATORS ---
class RepositoryError(GameError):
    status_code = 500
    code = "REPOSITORY_ERROR"


class GameNotFoundError(RepositoryError):
    status_code = 404
    code = "GAME_NOT_FOUND"


class ConflictError(RepositoryError):
    """Stored game changed between reading and writing it."""

    status_code = 409
    code = "CONFLICT"


class StorageError(RepositoryError):
    code = "STORAGE_ERROR"


class DeliveryError(GameError):
    code = "DELIVERY_ERROR"
