"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    SETUP = "setup"
    HOST_MOVE = "host"
    GUEST_MOVE = "guest"
    DONE = "done"


class Result(StrEnum):
    """Outcome of a request, as it is sent out to the players in the notification message."""

    STARTED = "started"
    MOVES = "moves"
    ATTACKS = "attacks"
    DEFENDS = "defends"
    REVEALS = "reveals"
    WINS = "wins"
