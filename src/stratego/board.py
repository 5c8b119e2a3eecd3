"""The Game board: which piece stands on each of the 100 cells, and the updates a move makes to it"""

from collections import Counter
from dataclasses import dataclass
from typing import Mapping, Self

from src.core.exceptions import GameStateError
from src.core.models import PieceModel
from src.core.shared_types import Result
from src.stratego.army import assigned_cells
from src.stratego.cells import NUM_CELLS
from src.stratego.moves import Move, MoveOutcome
from src.stratego.pieces import Owner, Piece, Rank


@dataclass
class Board:
    position: dict[int, Piece]

    @classmethod
    def empty(cls) -> Self:
        """Every cell holds an empty piece. A cell is never simply missing."""
        return cls({cell: Piece.empty() for cell in range(NUM_CELLS)})

    @classmethod
    def from_model(cls, cells: list[PieceModel]) -> Self:
        if len(cells) != NUM_CELLS:
            raise GameStateError(
                f"A board has {NUM_CELLS} cells, received {len(cells)}."
            )
        return cls({cell: Piece.from_model(model) for cell, model in enumerate(cells)})

    def to_model(self) -> list[PieceModel]:
        return [self.position[cell].to_model() for cell in range(NUM_CELLS)]

    def piece(self, cell: int) -> Piece:
        return self.position[cell]

    def place_piece(self, piece: Piece, cell: int) -> None:
        self.position[cell] = piece

    def clear(self, cell: int) -> None:
        self.position[cell] = Piece.empty()

    def place_army(self, placement: Mapping[int, str], owner: Owner) -> None:
        """Put a (validated) army on the player's half of the board. Nothing else on the board changes."""
        for cell in assigned_cells(owner):
            self.place_piece(Piece(Rank(placement[cell]), owner), cell)

    def locate_owner(self, owner: Owner) -> list[int]:
        return [cell for cell, piece in self.position.items() if piece.owner == owner]

    def count_ranks(self, owner: Owner) -> dict[Rank, int]:
        """Tally the pieces a player still has on the board"""
        return dict(
            Counter(
                piece.rank for piece in self.position.values() if piece.owner == owner
            )
        )

    def move_piece(self, move: Move) -> None:
        """The piece leaves its cell and takes over the target cell (keeps its revealed flag)"""
        piece_that_moved = self.piece(move.from_cell)
        self.clear(move.from_cell)
        self.place_piece(piece_that_moved, move.to_cell)

    def reveal(self, cell: int) -> None:
        self.position[cell].revealed = True

    def apply(self, outcome: MoveOutcome) -> None:
        """
        Update the position after a validated move
        ---

        * MOVES / ATTACKS: the piece ends up on the target cell
        * DEFENDS: the attacker is removed, the defender stays put
        * REVEALS: the scout is removed and the defender's rank becomes public
        * WINS: board left as is, the game is over anyway
        """
        move = outcome.move
        if outcome.result in (Result.MOVES, Result.ATTACKS):
            self.move_piece(move)
        elif outcome.result == Result.DEFENDS:
            self.clear(move.from_cell)
        elif outcome.result == Result.REVEALS:
            self.clear(move.from_cell)
            self.reveal(move.to_cell)
