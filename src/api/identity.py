"""Who is making the request? The player id is handed to us by the gateway in front of this service, as a header."""

from fastapi import Request

from src.core.config import get_settings
from src.core.exceptions import UnauthenticatedError


def resolve_player_id(request: Request) -> str:
    header = get_settings().player_id_header
    player_id = request.headers.get(header, "").strip()
    if not player_id:
        raise UnauthenticatedError(f"Missing {header} header.")
    return player_id
