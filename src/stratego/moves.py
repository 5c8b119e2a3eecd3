"""
Geometry/Base movement rules and the outcome of a move

Key idea: a move is validated against a snapshot of the board, without touching it.
Combat is delegated to src/stratego/combat.py, turn order is checked later by Game
"""

from copy import copy
from dataclasses import dataclass
from typing import Optional, Protocol

from src.core.exceptions import (
    BlockedByPieceError,
    BlockedByWaterError,
    DestinationOccupiedBySelfError,
    IllegalDiagonalError,
    IllegalMoveError,
    ImmovablePieceError,
    MustMoveError,
    NoPieceError,
    NotOwnerError,
    OutOfBoundsError,
    TooFarError,
)
from src.core.shared_types import Result
from src.stratego.cells import NUM_CELLS, column, is_on_board, is_water, path, row
from src.stratego.combat import resolve_combat
from src.stratego.pieces import Owner, Piece, Rank, is_movable


class Board(Protocol):
    """Just the parts the movement rules need"""

    def piece(self, cell: int) -> Piece: ...
    def locate_owner(self, owner: Owner) -> list[int]: ...


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made"""

    from_cell: int
    to_cell: int


@dataclass
class MoveOutcome:
    """Snapshot of the pieces involved, taken before the board gets updated."""

    move: Move
    result: Result
    moving_piece: Piece
    defending_piece: Piece

    def to_message(self) -> Optional[str]:
        """
        Message sent to both players after the move was applied.
        ---

        "<result> <from> <to>", and for a reveal the defender's rank is added at the end.
        A win does not produce a message, the game status tells the story.
        """
        if self.result == Result.WINS:
            return None
        message = f"{self.result} {self.move.from_cell} {self.move.to_cell}"
        if self.result == Result.REVEALS:
            message = f"{message} {self.defending_piece.rank}"
        return message


def validate_move(move: Move, player: Owner, board: Board) -> Result:
    """
    Check if the player may make this move, and what kind of move it is.
    ----

    Rules are checked in a fixed order, the first broken rule raises:

    1. both cells are on the board
    2. there is a piece to move ...
    3. ... that can move (no Bomb or Flag) ...
    4. ... and it belongs to the player
    5. the piece must actually go somewhere
    6. no diagonal moves
    7. only a Scout may move more than a single cell
    8. the path may not touch water
    9. the path may not jump over other pieces
    10. you cannot land on your own piece. Landing on an opponent's piece means combat.
    """
    from_cell, to_cell = move.from_cell, move.to_cell
    if not (is_on_board(from_cell) and is_on_board(to_cell)):
        raise OutOfBoundsError("piece is not on the board")

    moving_piece = board.piece(from_cell)
    if moving_piece.is_empty:
        raise NoPieceError("piece is not in this position")
    if not is_movable(moving_piece.rank):
        raise ImmovablePieceError(f"{moving_piece.rank} can not move")
    if moving_piece.owner != player:
        raise NotOwnerError(f"piece is not the {player}'s")
    if from_cell == to_cell:
        raise MustMoveError(f"{moving_piece.rank} must move")

    changes_row = row(from_cell) != row(to_cell)
    changes_column = column(from_cell) != column(to_cell)
    if changes_row and changes_column:
        raise IllegalDiagonalError("piece can not move diagonally")

    through = path(from_cell, to_cell)
    if len(through) > 2 and moving_piece.rank != Rank.SCOUT:
        raise TooFarError(f"{moving_piece.rank} can not move more than one space")

    if any(is_water(cell) for cell in through):
        raise BlockedByWaterError("piece can not move through water")
    if any(not board.piece(cell).is_empty for cell in through[1:-1]):
        raise BlockedByPieceError("piece can not move through other piece")

    target = board.piece(to_cell)
    if target.owner == player:
        raise DestinationOccupiedBySelfError(
            f"piece can not end on another piece owned by the {player}"
        )
    if target.owner == Owner.NONE:
        return Result.MOVES
    return resolve_combat(moving_piece.rank, target.rank)


def create_outcome(move: Move, player: Owner, board: Board) -> MoveOutcome:
    """Validate the move and take the snapshot used to update the board."""
    result = validate_move(move, player, board)
    return MoveOutcome(
        move=move,
        result=result,
        moving_piece=copy(board.piece(move.from_cell)),
        defending_piece=copy(board.piece(move.to_cell)),
    )


def _candidate_targets(from_cell: int) -> list[int]:
    """Every cell on the same row or column (legality is decided by validate_move)."""
    return [
        cell
        for cell in range(NUM_CELLS)
        if cell != from_cell
        and (row(cell) == row(from_cell) or column(cell) == column(from_cell))
    ]


def legal_moves(player: Owner, board: Board) -> list[Move]:
    """
    All moves the player could make on this board.

    ---
    Not needed to play (every move is validated on its own), but lets a frontend highlight where a piece may go.
    """
    moves: list[Move] = []
    for from_cell in board.locate_owner(player):
        for to_cell in _candidate_targets(from_cell):
            move = Move(from_cell, to_cell)
            try:
                validate_move(move, player, board)
            except IllegalMoveError:
                continue
            moves.append(move)
    return moves
