"""
Combat rules: what happens when a piece moves onto a cell held by the opponent.

Each rank defeats a fixed set of ranks (its beats-set). Higher ranks beat everything the ranks below them beat.
Two exceptions keep the game interesting: the Spy takes down the Marshal, and only a Miner can defuse a Bomb.
"""

from types import MappingProxyType
from typing import Mapping

from src.core.shared_types import Result
from src.stratego.pieces import Rank

_RANKS_BY_STRENGTH: tuple[Rank, ...] = (
    Rank.SPY,
    Rank.SCOUT,
    Rank.MINER,
    Rank.SERGEANT,
    Rank.LIEUTENANT,
    Rank.CAPTAIN,
    Rank.MAJOR,
    Rank.COLONEL,
    Rank.GENERAL,
    Rank.MARSHAL,
)


def _build_beats_table() -> Mapping[Rank, frozenset[Rank]]:
    """Every rank beats all weaker ranks (Scout also beats the Spy) and the Flag."""
    table: dict[Rank, frozenset[Rank]] = {}
    for strength, rank in enumerate(_RANKS_BY_STRENGTH):
        table[rank] = frozenset(_RANKS_BY_STRENGTH[:strength]) | {Rank.FLAG}
    table[Rank.SPY] = frozenset({Rank.MARSHAL, Rank.FLAG})
    table[Rank.MINER] = table[Rank.MINER] | {Rank.BOMB}
    return MappingProxyType(table)


# Bomb and Flag never attack, so they have no entry
BEATS: Mapping[Rank, frozenset[Rank]] = _build_beats_table()


def beats(attacker: Rank, defender: Rank) -> bool:
    return defender in BEATS.get(attacker, frozenset())


def resolve_combat(attacker: Rank, defender: Rank) -> Result:
    """
    Outcome of the attacker moving onto the defender's cell
    ----

    1. Flag captured --> the attacker WINS the game
    2. Attacker beats the defender --> ATTACKS (defender removed, attacker takes the cell)
    3. A Scout that loses its attack REVEALS the defender
    4. Anything else --> DEFENDS (attacker removed)

    NOTE equal ranks are not special-cased: Spy vs Spy ends with the attacker removed.
    """
    if defender == Rank.FLAG and beats(attacker, defender):
        return Result.WINS
    if beats(attacker, defender):
        return Result.ATTACKS
    if attacker == Rank.SCOUT:
        return Result.REVEALS
    return Result.DEFENDS
