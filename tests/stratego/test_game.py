"""Unit tests for /src/stratego/game.py"""

from datetime import datetime, timedelta, timezone

import pytest
from conftest import GUEST_ID, HOST_ID, army_placement, in_progress_game

from src.core.exceptions import (
    GameAlreadyOverError,
    GameNotStartedError,
    GameStateError,
    IllegalMoveError,
    InvalidRequestError,
    MissingPieceError,
    NotAPlayerError,
    NotYourTurnError,
    TooFarError,
)
from src.core.models import GameModel
from src.core.shared_types import Result, Status
from src.stratego.board import Board
from src.stratego.game import HIDDEN_RANK, Game
from src.stratego.moves import Move
from src.stratego.pieces import Owner, Piece, Rank


@pytest.fixture
def new_game(host_army: dict[int, str]) -> Game:
    return Game.new_game(player_id=HOST_ID, placement=host_army)


@pytest.fixture
def started_game(new_game: Game, guest_army: dict[int, str]) -> Game:
    new_game.join(GUEST_ID, guest_army)
    return new_game


@pytest.fixture
def skirmish_board() -> Board:
    """
    A few pieces in the middle of the board
    ---

    * host Scout on 31, guest General on 61 (column 1 empty in between)
    * host Major on 34, guest Flag on 44
    * host Miner on 38, guest Bomb on 48
    * guest Sergeant on 65, guest Lieutenant on 68
    """
    board = Board.empty()
    board.place_piece(Piece(Rank.SCOUT, Owner.HOST), 31)
    board.place_piece(Piece(Rank.GENERAL, Owner.GUEST), 61)
    board.place_piece(Piece(Rank.MAJOR, Owner.HOST), 34)
    board.place_piece(Piece(Rank.FLAG, Owner.GUEST), 44)
    board.place_piece(Piece(Rank.MINER, Owner.HOST), 38)
    board.place_piece(Piece(Rank.BOMB, Owner.GUEST), 48)
    board.place_piece(Piece(Rank.SERGEANT, Owner.GUEST), 65)
    board.place_piece(Piece(Rank.LIEUTENANT, Owner.GUEST), 68)
    return board


# -- CREATION LOGIC --
def test_new_game(new_game: Game, host_army: dict[int, str]) -> None:
    """Only the host half is populated, the game waits for its guest"""
    assert new_game.status == Status.SETUP
    assert new_game.host_player_id == HOST_ID
    assert new_game.guest_player_id is None
    assert new_game.version == 0
    assert new_game.board.locate_owner(Owner.HOST) == list(range(40))
    assert new_game.board.locate_owner(Owner.NONE) == list(range(40, 100))
    assert all(
        new_game.board.piece(cell).rank == rank for cell, rank in host_army.items()
    )


def test_new_game_expires(host_army: dict[int, str]) -> None:
    now = datetime(2024, 1, 1, tzinfo=timezone.utc)
    game = Game.new_game(HOST_ID, host_army, now=now, ttl=timedelta(hours=2))
    assert game.expires_at == now + timedelta(hours=2)
    assert not game.is_expired(now + timedelta(hours=1))
    assert game.is_expired(now + timedelta(hours=2))


def test_new_game_with_invalid_army(host_army: dict[int, str]) -> None:
    del host_army[0]
    with pytest.raises(MissingPieceError):
        Game.new_game(HOST_ID, host_army)


def test_new_game_with_pieces_outside_own_half(host_army: dict[int, str]) -> None:
    host_army[45] = "spy"
    with pytest.raises(InvalidRequestError):
        Game.new_game(HOST_ID, host_army)


def test_game_creation_from_model_roundtrip(started_game: Game) -> None:
    model = started_game.to_model()
    assert Game.from_model(model) == started_game
    assert Game.from_model(model).to_model() == model


def test_invalid_status_name(new_game: Game) -> None:
    """Try creating a game with a non-existing status name"""
    model = new_game.to_model()
    model.status = "not_existing"
    with pytest.raises(GameStateError):
        _ = Game.from_model(model)


def test_model_keeps_unset_guest_as_none(new_game: Game) -> None:
    model = new_game.to_model()
    assert isinstance(model, GameModel)
    assert model.guest_player_id is None
    assert model.status == "setup"


# -- JOINING --
def test_join(new_game: Game, guest_army: dict[int, str]) -> None:
    message = new_game.join(GUEST_ID, guest_army)

    assert message == "started"
    assert new_game.guest_player_id == GUEST_ID
    assert new_game.status == Status.HOST_MOVE
    assert new_game.version == 1
    assert new_game.board.locate_owner(Owner.GUEST) == list(range(60, 100))
    assert new_game.board.locate_owner(Owner.NONE) == list(range(40, 60))


def test_cannot_join_twice(started_game: Game, guest_army: dict[int, str]) -> None:
    with pytest.raises(GameStateError):
        started_game.join("someone-else", guest_army)
    assert started_game.guest_player_id == GUEST_ID


def test_host_cannot_join_own_game(new_game: Game, guest_army: dict[int, str]) -> None:
    with pytest.raises(GameStateError):
        new_game.join(HOST_ID, guest_army)


def test_join_with_host_half(new_game: Game, host_army: dict[int, str]) -> None:
    """The guest army goes on cells 60-99"""
    with pytest.raises(MissingPieceError):
        new_game.join(GUEST_ID, host_army)
    assert new_game.status == Status.SETUP
    assert new_game.guest_player_id is None


# -- TURN / STATUS --
def test_cannot_move_before_guest_joined(new_game: Game) -> None:
    with pytest.raises(GameNotStartedError):
        new_game.make_move(Move(30, 40), HOST_ID)


def test_not_a_player(started_game: Game) -> None:
    with pytest.raises(NotAPlayerError):
        started_game.make_move(Move(30, 40), "intruder")


def test_guest_cannot_move_first(started_game: Game) -> None:
    with pytest.raises(NotYourTurnError):
        started_game.make_move(Move(60, 50), GUEST_ID)


def test_turns_alternate(started_game: Game) -> None:
    """
    Standard army placement (see conftest): colonel on 30 for the host, spy on 60 for the guest.
    Both players shuffle them back and forth.
    """
    moves = [
        (Move(30, 40), HOST_ID, Status.GUEST_MOVE),
        (Move(60, 50), GUEST_ID, Status.HOST_MOVE),
        (Move(40, 30), HOST_ID, Status.GUEST_MOVE),
        (Move(50, 60), GUEST_ID, Status.HOST_MOVE),
    ]
    for move, player_id, expected_status in moves:
        outcome = started_game.make_move(move, player_id)
        assert outcome.result == Result.MOVES
        assert started_game.status == expected_status
    assert started_game.version == 5


def test_same_player_cannot_move_twice(started_game: Game) -> None:
    started_game.make_move(Move(30, 40), HOST_ID)
    with pytest.raises(NotYourTurnError):
        started_game.make_move(Move(40, 50), HOST_ID)


def test_illegal_move_changes_nothing(started_game: Game) -> None:
    before = started_game.to_model()
    with pytest.raises(IllegalMoveError):
        started_game.make_move(Move(30, 50), HOST_ID)
    assert started_game.to_model() == before


def test_role_is_taken_from_identity_not_from_turn(started_game: Game) -> None:
    """During the host's turn the guest is still the guest"""
    assert started_game.role_of(HOST_ID) == Owner.HOST
    assert started_game.role_of(GUEST_ID) == Owner.GUEST
    assert started_game.role_of("intruder") is None
    assert started_game.turn == Owner.HOST


def test_no_role_before_join(new_game: Game) -> None:
    assert new_game.role_of(GUEST_ID) is None
    assert new_game.turn is None


# -- COMBAT ON THE BOARD --
def test_scout_reveals_general(skirmish_board: Board) -> None:
    game = in_progress_game(skirmish_board)
    outcome = game.make_move(Move(31, 61), HOST_ID)

    assert outcome.result == Result.REVEALS
    assert outcome.to_message() == "reveals 31 61 general"
    assert game.board.piece(31) == Piece.empty()
    assert game.board.piece(61) == Piece(Rank.GENERAL, Owner.GUEST, revealed=True)
    assert game.status == Status.GUEST_MOVE


def test_miner_defuses_bomb(skirmish_board: Board) -> None:
    game = in_progress_game(skirmish_board)
    outcome = game.make_move(Move(38, 48), HOST_ID)

    assert outcome.result == Result.ATTACKS
    assert game.board.piece(38) == Piece.empty()
    assert game.board.piece(48) == Piece(Rank.MINER, Owner.HOST)


def test_equal_ranks_attacker_loses(skirmish_board: Board) -> None:
    skirmish_board.place_piece(Piece(Rank.GENERAL, Owner.HOST), 51)
    game = in_progress_game(skirmish_board, status=Status.GUEST_MOVE)
    outcome = game.make_move(Move(61, 51), GUEST_ID)

    assert outcome.result == Result.DEFENDS
    assert game.board.piece(61) == Piece.empty()
    assert game.board.piece(51) == Piece(Rank.GENERAL, Owner.HOST)
    assert game.status == Status.HOST_MOVE


def test_capturing_the_flag_ends_the_game(skirmish_board: Board) -> None:
    game = in_progress_game(skirmish_board)
    outcome = game.make_move(Move(34, 44), HOST_ID)

    assert outcome.result == Result.WINS
    assert outcome.to_message() is None
    assert game.status == Status.DONE
    assert game.winner == Owner.HOST
    assert game.board.piece(44) == Piece(Rank.FLAG, Owner.GUEST)
    assert game.turn is None


@pytest.mark.parametrize("player_id", [HOST_ID, GUEST_ID])
def test_no_moves_after_the_game_is_over(skirmish_board: Board, player_id: str) -> None:
    game = in_progress_game(skirmish_board)
    game.make_move(Move(34, 44), HOST_ID)

    with pytest.raises(GameAlreadyOverError):
        game.make_move(Move(65, 55), player_id)


def test_winner_survives_model_roundtrip(skirmish_board: Board) -> None:
    game = in_progress_game(skirmish_board)
    game.make_move(Move(34, 44), HOST_ID)
    model = game.to_model()
    assert model.winner == "host"
    assert Game.from_model(model).winner == Owner.HOST


# -- LEGAL MOVES / VIEW --
def test_legal_moves_at_the_start(started_game: Game) -> None:
    """Only row 3 can move: forward into the middle rows (never into the lakes)."""
    moves = started_game.legal_moves(HOST_ID)
    assert {move.from_cell for move in moves} <= set(range(30, 40))
    assert all(move.to_cell in range(40, 60) for move in moves)
    assert not any(move.to_cell in (42, 43, 46, 47) for move in moves)


def test_legal_moves_only_on_your_turn(started_game: Game) -> None:
    with pytest.raises(NotYourTurnError):
        started_game.legal_moves(GUEST_ID)


def test_opponent_ranks_are_hidden(skirmish_board: Board) -> None:
    game = in_progress_game(skirmish_board)
    game.make_move(Move(31, 61), HOST_ID)

    host_view = game.view_for(HOST_ID)
    assert host_view[34].rank == "major"
    assert host_view[61].rank == "general"  # revealed by the scout
    assert host_view[65].rank == HIDDEN_RANK
    assert host_view[65].owner == "guest"
    assert host_view[50].rank == "empty"

    guest_view = game.view_for(GUEST_ID)
    assert guest_view[34].rank == HIDDEN_RANK
    assert guest_view[65].rank == "sergeant"


def test_everything_visible_after_the_game(skirmish_board: Board) -> None:
    game = in_progress_game(skirmish_board)
    game.make_move(Move(34, 44), HOST_ID)
    assert HIDDEN_RANK not in {cell.rank for cell in game.view_for(GUEST_ID)}


def test_view_only_for_players(started_game: Game) -> None:
    with pytest.raises(NotAPlayerError):
        started_game.view_for("intruder")


def test_view_does_not_change_board(started_game: Game) -> None:
    started_game.view_for(HOST_ID)
    assert started_game.board.piece(60).rank != HIDDEN_RANK


def test_too_far_in_a_real_game() -> None:
    """The colonel on 30 may only step into the middle rows, not run"""
    game = Game.new_game(HOST_ID, army_placement(Owner.HOST))
    game.join(GUEST_ID, army_placement(Owner.GUEST))
    assert game.board.piece(30).rank == Rank.COLONEL
    with pytest.raises(TooFarError):
        game.make_move(Move(30, 50), HOST_ID)
