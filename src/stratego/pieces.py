"""Defines the ranks of Stratego pieces and who owns them"""

from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType
from typing import Mapping, Self

from src.core.models import PieceModel


class Rank(StrEnum):
    EMPTY = "empty"
    SPY = "spy"
    SCOUT = "scout"
    MINER = "miner"
    SERGEANT = "sergeant"
    LIEUTENANT = "lieutenant"
    CAPTAIN = "captain"
    MAJOR = "major"
    COLONEL = "colonel"
    GENERAL = "general"
    MARSHAL = "marshal"
    BOMB = "bomb"
    FLAG = "flag"


class Owner(StrEnum):
    NONE = "none"
    HOST = "host"
    GUEST = "guest"

    @property
    def opponent(self) -> "Owner":
        if self == Owner.HOST:
            return Owner.GUEST
        if self == Owner.GUEST:
            return Owner.HOST
        return Owner.NONE


# The army each player brings to the board (40 pieces)
ARMY_COMPOSITION: Mapping[Rank, int] = MappingProxyType(
    {
        Rank.SPY: 1,
        Rank.SCOUT: 8,
        Rank.MINER: 5,
        Rank.SERGEANT: 4,
        Rank.LIEUTENANT: 4,
        Rank.CAPTAIN: 4,
        Rank.MAJOR: 3,
        Rank.COLONEL: 2,
        Rank.GENERAL: 1,
        Rank.MARSHAL: 1,
        Rank.BOMB: 6,
        Rank.FLAG: 1,
    }
)

ARMY_SIZE = sum(ARMY_COMPOSITION.values())

IMMOVABLE_RANKS: frozenset[Rank] = frozenset({Rank.BOMB, Rank.FLAG})


def is_valid_rank(rank: str) -> bool:
    """Empty is only used internally to mark a free cell, a player can never submit it."""
    return rank in ARMY_COMPOSITION


def is_movable(rank: Rank) -> bool:
    return rank != Rank.EMPTY and rank not in IMMOVABLE_RANKS


@dataclass
class Piece:
    rank: Rank
    owner: Owner
    revealed: bool = False

    @classmethod
    def empty(cls) -> Self:
        return cls(Rank.EMPTY, Owner.NONE)

    @property
    def is_empty(self) -> bool:
        return self.rank == Rank.EMPTY

    @classmethod
    def from_model(cls, model: PieceModel) -> Self:
        return cls(Rank(model.rank), Owner(model.owner), model.revealed)

    def to_model(self) -> PieceModel:
        return PieceModel(
            rank=self.rank.value, owner=self.owner.value, revealed=self.revealed
        )
