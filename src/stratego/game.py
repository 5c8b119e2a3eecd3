"""
The Game class will be the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating all the business logic required to play a turn of the board game -->
passes this information to the service layer, which can then pass it onwards to the API layer.

Lifecycle: SETUP (host placed their army) --> HOST_MOVE <--> GUEST_MOVE --> DONE (flag captured)
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Mapping, Optional, Self

from src.core.exceptions import (
    GameAlreadyOverError,
    GameNotStartedError,
    GameStateError,
    InvalidRequestError,
    NotAPlayerError,
    NotYourTurnError,
)
from src.core.models import GameModel, PieceModel
from src.core.shared_types import Result, Status
from src.stratego.army import assigned_cells, validate_army
from src.stratego.board import Board
from src.stratego.moves import Move, MoveOutcome, create_outcome, legal_moves
from src.stratego.pieces import Owner

DEFAULT_TTL = timedelta(hours=24)

# Rank shown for opponent pieces that have not been revealed yet
HIDDEN_RANK = "unknown"

# Whose turn it is for each status during play
TURN_STATUS: dict[Owner, Status] = {
    Owner.HOST: Status.HOST_MOVE,
    Owner.GUEST: Status.GUEST_MOVE,
}


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board
    host_player_id: Optional[str]
    guest_player_id: Optional[str]
    status: Status
    expires_at: datetime
    version: int = 0
    winner: Optional[Owner] = None

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Define how to construct a Game from the information the Service layer actually has"""

        # Validation
        if model.status not in {status.value for status in Status}:
            raise GameStateError(
                f"Invalid status code: {model.status!r}. \nPick one from {','.join([status.value for status in Status])}"
            )

        return cls(
            board=Board.from_model(model.board),
            host_player_id=model.host_player_id,
            guest_player_id=model.guest_player_id,
            status=Status(model.status),
            expires_at=model.expires_at,
            version=model.version,
            winner=Owner(model.winner) if model.winner else None,
        )

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""

        return GameModel(
            board=self.board.to_model(),
            host_player_id=self.host_player_id,
            guest_player_id=self.guest_player_id,
            status=self.status.value,
            expires_at=self.expires_at,
            version=self.version,
            winner=self.winner.value if self.winner else None,
        )

    @classmethod
    def new_game(
        cls,
        player_id: str,
        placement: Mapping[int, str],
        now: Optional[datetime] = None,
        ttl: timedelta = DEFAULT_TTL,
    ) -> Self:
        """The host creates a game by placing their army. Cells outside the host's half stay empty."""
        _validate_placement(placement, Owner.HOST)

        board = Board.empty()
        board.place_army(placement, Owner.HOST)
        return cls(
            board=board,
            host_player_id=player_id,
            guest_player_id=None,
            status=Status.SETUP,
            expires_at=(now or utc_now()) + ttl,
        )

    def join(self, player_id: str, placement: Mapping[int, str]) -> str:
        """
        Registering the 2nd player to an open game
        ---

        The guest's army is put on the board and the host gets the first move.
        Returns the message announcing the start of the game.
        """
        if self.status != Status.SETUP or self.guest_player_id is not None:
            raise GameStateError(
                f"Cannot join this game. Game is not accepting new players. status: {self.status}"
            )
        if player_id == self.host_player_id:
            raise GameStateError("Cannot join this game. You are already its host.")

        _validate_placement(placement, Owner.GUEST)

        no_mans_land = range(
            assigned_cells(Owner.HOST).stop, assigned_cells(Owner.GUEST).start
        )
        for cell in no_mans_land:
            self.board.clear(cell)
        self.board.place_army(placement, Owner.GUEST)

        self.guest_player_id = player_id
        self._change_status(Status.HOST_MOVE)
        self.version += 1
        return str(Result.STARTED)

    def make_move(self, move: Move, player_id: str) -> MoveOutcome:
        """
        Attempt to make a move
        -----

        1. make sure the game is (still) in progress
        2. find out which side the player is playing
        3. make sure it is their turn
        4. check the move (and resolve combat)
        5. update the board
        6. update game status: capturing the flag ends the game, otherwise the turn passes
        """
        player = self._assert_can_act(player_id)

        outcome = create_outcome(move, player, self.board)

        self.board.apply(outcome)

        if outcome.result == Result.WINS:
            self.winner = player
            self._change_status(Status.DONE)
        else:
            self._change_status(TURN_STATUS[player.opponent])
        self.version += 1
        return outcome

    def legal_moves(self, player_id: str) -> list[Move]:
        """Moves the player may make right now. Only available while it is their turn."""
        player = self._assert_can_act(player_id)
        return legal_moves(player, self.board)

    def role_of(self, player_id: str) -> Optional[Owner]:
        """Which side the player is on. Looked up in the stored ids, never guessed from whose turn it is."""
        if self.host_player_id is not None and player_id == self.host_player_id:
            return Owner.HOST
        if self.guest_player_id is not None and player_id == self.guest_player_id:
            return Owner.GUEST
        return None

    @property
    def turn(self) -> Optional[Owner]:
        return next(
            (owner for owner, status in TURN_STATUS.items() if status == self.status),
            None,
        )

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return (now or utc_now()) >= self.expires_at

    def view_for(self, player_id: str) -> list[PieceModel]:
        """
        The board as one of the players gets to see it.

        ---
        Ranks of opponent pieces stay hidden until revealed in combat. Once the game is over, everything is shown.
        """
        player = self._get_player(player_id)
        view: list[PieceModel] = []
        for piece_model in self.board.to_model():
            hidden = (
                self.status != Status.DONE
                and piece_model.owner == player.opponent
                and not piece_model.revealed
            )
            if hidden:
                piece_model.rank = HIDDEN_RANK
            view.append(piece_model)
        return view

    # -- PRIVATE HELPERS ---
    def _get_player(self, player_id: str) -> Owner:
        player = self.role_of(player_id)
        if player is None:
            raise NotAPlayerError("user is not a player of this game")
        return player

    def _assert_can_act(self, player_id: str) -> Owner:
        """Game must be running, the user must be one of its players and it must be their turn."""
        if self.status == Status.DONE:
            raise GameAlreadyOverError(f"Game is over. winner: {self.winner}")
        if (
            self.status == Status.SETUP
            or self.host_player_id is None
            or self.guest_player_id is None
        ):
            raise GameNotStartedError("game has not started")

        player = self._get_player(player_id)
        if TURN_STATUS[player] != self.status:
            raise NotYourTurnError(f"it is not the {player}'s turn")
        return player

    def _change_status(self, new_status: Status) -> None:
        self.status = new_status


def _validate_placement(placement: Mapping[int, str], owner: Owner) -> None:
    """Run the army checks, then make sure nothing was placed outside the player's own half."""
    validate_army(placement, owner)
    cells = assigned_cells(owner)
    outside = sorted(cell for cell in placement if cell not in cells)
    if outside:
        raise InvalidRequestError(
            f"The {owner} can only place pieces on cells {cells.start}-{cells.stop - 1}, got {outside}."
        )
