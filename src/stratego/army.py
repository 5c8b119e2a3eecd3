"""Validation of the army a player places on their half of the board before the game starts."""

from collections import Counter
from typing import Mapping

from src.core.exceptions import (
    GameStateError,
    InvalidArmyCompositionError,
    InvalidRankError,
    MissingPieceError,
)
from src.stratego.pieces import ARMY_COMPOSITION, Owner, is_valid_rank

# Host sets up on the first four rows, guest on the last four. The two rows in between start out empty.
ASSIGNED_CELLS: dict[Owner, range] = {
    Owner.HOST: range(0, 40),
    Owner.GUEST: range(60, 100),
}


def assigned_cells(owner: Owner) -> range:
    if owner not in ASSIGNED_CELLS:
        raise GameStateError(f"No cells are assigned to {owner}.")
    return ASSIGNED_CELLS[owner]


def validate_army(placement: Mapping[int, str], owner: Owner) -> None:
    """
    Check a player's starting positions
    ----

    1. every cell of the player's half must be filled
    2. every piece must be one of the 12 ranks
    3. the number of pieces per rank must match the standard army

    First violation raises, no attempt is made to report all problems at once.
    Any arrangement within the half is fine.
    """
    cells = assigned_cells(owner)

    for cell in cells:
        if cell not in placement:
            raise MissingPieceError(cell)

    counts: Counter[str] = Counter()
    for cell in cells:
        rank = placement[cell]
        if not is_valid_rank(rank):
            raise InvalidRankError(rank)
        counts[rank] += 1

    if any(counts[rank] != expected for rank, expected in ARMY_COMPOSITION.items()):
        raise InvalidArmyCompositionError(
            {str(rank): count for rank, count in counts.items()}
        )
