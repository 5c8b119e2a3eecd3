"""Settings read from the environment (once)."""

import os
from dataclasses import dataclass
from functools import lru_cache


def _as_bool(value: str) -> bool:
    return value.lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    database_url: str
    game_ttl_hours: int
    player_id_header: str
    log_level: str
    cors_origins: list[str]
    sql_echo: bool


@lru_cache
def get_settings() -> Settings:
    return Settings(
        database_url=os.getenv("STRATEGO_DATABASE_URL", "sqlite:///./stratego.db"),
        game_ttl_hours=int(os.getenv("STRATEGO_GAME_TTL_HOURS", "24")),
        player_id_header=os.getenv("STRATEGO_PLAYER_ID_HEADER", "X-Player-ID"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        cors_origins=os.getenv("CORS_ORIGINS", "*").split(","),
        sql_echo=_as_bool(os.getenv("STRATEGO_SQL_ECHO", "0")),
    )
