"""Sending the result of a request to both players (best effort: the game state never depends on it)."""

import logging
from typing import Protocol
from uuid import UUID

from src.core.exceptions import DeliveryError

logger = logging.getLogger(__name__)


def topic(game_id: UUID) -> str:
    return f"games/{game_id}/moves"


class NotificationPublisher(Protocol):
    def publish(self, game_id: UUID, message: str) -> None:
        """Deliver the message to everyone following the game. Raises DeliveryError on failure."""
        ...


class LoggingPublisher:
    """Default publisher: writes the messages to the log (swap in a real message broker client in production)."""

    def publish(self, game_id: UUID, message: str) -> None:
        logger.info("publish %s: %s", topic(game_id), message)


class InMemoryPublisher:
    """Keeps every message per topic. Handy for a single-process deployment and for tests."""

    def __init__(self) -> None:
        self.messages: dict[str, list[str]] = {}

    def publish(self, game_id: UUID, message: str) -> None:
        if not message:
            raise DeliveryError(f"Refusing to publish an empty message for game {game_id}")
        self.messages.setdefault(topic(game_id), []).append(message)
