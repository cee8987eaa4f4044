import pathlib
import sys
from dataclasses import replace

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from santorini.board import Board
from santorini.errors import InvalidMove
from santorini.game import Game
from santorini.move import PartialKind, PartialTurn, Turn
from santorini.position import Position, PositionSet
from santorini.tiles import Construction, Player


def _cells(*coords):
    return PositionSet.from_positions(Position.at(r, c) for r, c in coords)


def _p(row, col):
    return Position.at(row, col)


def _climbing_board():
    """Player 1 on the second level at (2, 2) next to a free third level at (2, 3)."""
    return replace(
        Board(),
        player1_workers=_cells((2, 2), (0, 0)),
        player2_workers=_cells((4, 4), (4, 0)),
        second_floor=_cells((2, 2)),
        third_floor=_cells((2, 3)),
    )


def _setup_done_game():
    game = Game()
    for cell in (_p(1, 2), _p(3, 2), _p(0, 0), _p(4, 4)):
        game.register_selection(cell)
    return game


def test_setup_selection_flow():
    game = Game()
    assert game.partial_turn == PartialTurn.nothing_setup()
    assert len(game.selectable) == 25
    assert game.next_action() == "Player 1: Place your first worker!"

    game.register_selection(_p(1, 2))
    assert game.partial_turn == PartialTurn.partial_setup(_p(1, 2))
    assert _p(1, 2) not in game.selectable
    assert len(game.selectable) == 24
    assert game.selected() == [_p(1, 2)]
    assert game.next_action() == "Player 1: Place your second worker!"

    game.register_selection(_p(3, 2))
    assert game.board.workers(Player.PLAYER1) == _cells((1, 2), (3, 2))
    assert game.board.next_player is Player.PLAYER2
    assert game.partial_turn.kind is PartialKind.NOTHING_SETUP
    assert len(game.selectable) == 23

    game.register_selection(_p(0, 0))
    game.register_selection(_p(4, 4))
    assert game.board.setup_done()
    assert game.partial_turn == PartialTurn.nothing()
    assert game.selectable == frozenset({_p(1, 2), _p(3, 2)})
    assert game.next_action() == "Player 1: Pick a worker!"
    assert game.winner() is None


def test_main_phase_selection_flow():
    game = _setup_done_game()

    game.register_selection(_p(1, 2))
    assert game.partial_turn == PartialTurn.selection(_p(1, 2))
    assert game.selectable == frozenset(
        _cells((0, 1), (0, 2), (0, 3), (1, 1), (1, 3), (2, 1), (2, 2), (2, 3))
    )
    assert game.next_action() == "Player 1: Move your worker!"

    game.register_selection(_p(2, 2))
    assert game.partial_turn == PartialTurn.move(_p(1, 2), _p(2, 2))
    assert game.selected() == [_p(1, 2), _p(2, 2)]
    # the vacated cell is offered, the cell under the other worker is not
    assert _p(1, 2) in game.selectable
    assert _p(3, 2) not in game.selectable
    assert len(game.selectable) == 7
    assert game.next_action() == "Player 1: Build!"

    game.register_selection(_p(2, 3))
    assert game.board.workers(Player.PLAYER1) == _cells((2, 2), (3, 2))
    assert game.board.construction_at(_p(2, 3)) is Construction.FIRST_LEVEL
    assert game.board.next_player is Player.PLAYER2
    assert game.partial_turn == PartialTurn.nothing()
    assert game.selectable == frozenset({_p(0, 0), _p(4, 4)})


def test_cancel_returns_to_the_start_of_the_turn():
    game = Game()
    game.register_selection(_p(1, 2))
    game.cancel()
    assert game.partial_turn == PartialTurn.nothing_setup()
    assert len(game.selectable) == 25

    game = _setup_done_game()
    before = game.selectable
    game.register_selection(_p(1, 2))
    game.register_selection(_p(2, 2))
    game.cancel()
    assert game.partial_turn == PartialTurn.nothing()
    assert game.selectable == before
    assert game.board.workers(Player.PLAYER1) == _cells((1, 2), (3, 2))


def test_non_selectable_pick_raises_and_changes_nothing():
    game = _setup_done_game()
    board, partial, selectable = game.board, game.partial_turn, game.selectable

    with pytest.raises(InvalidMove):
        game.register_selection(_p(0, 0))  # opponent's worker

    assert game.board is board
    assert game.partial_turn == partial
    assert game.selectable == selectable


def test_moving_onto_the_third_level_wins():
    game = Game(_climbing_board())
    assert game.winner() is None

    game.register_selection(_p(2, 2))
    assert _p(2, 3) in game.selectable
    game.register_selection(_p(2, 3))

    assert game.partial_turn.kind is PartialKind.MOVE
    assert game.selectable == frozenset()
    assert game.winner() is Player.PLAYER1


def test_player_without_moves_loses():
    board = replace(
        Board(),
        player1_workers=_cells((0, 0), (0, 1)),
        player2_workers=_cells((4, 3), (4, 4)),
        dome=_cells((0, 2), (1, 0), (1, 1), (1, 2)),
    )
    game = Game(board)

    assert game.selectable == frozenset()
    assert game.winner() is Player.PLAYER2


def test_play_runs_setup_turns():
    game = Game()
    game.play(Turn.setup(_p(1, 2), _p(3, 2)))
    assert game.partial_turn == PartialTurn.nothing_setup()
    game.play(Turn.setup(_p(0, 0), _p(4, 4)))

    assert game.board.setup_done()
    assert game.partial_turn == PartialTurn.nothing()
    assert game.selectable == frozenset({_p(1, 2), _p(3, 2)})


def test_play_rejects_illegal_turns():
    game = _setup_done_game()
    board = game.board

    with pytest.raises(InvalidMove):
        game.play(Turn.move_build(_p(1, 2), _p(3, 3), _p(3, 4)))
    assert game.board is board


def test_final_move_through_play_wins():
    game = Game(_climbing_board())
    game.play(Turn.final_move(_p(2, 2), _p(2, 3)))

    assert game.board.next_player is Player.PLAYER2
    assert game.winner() is Player.PLAYER1


def test_game_resumes_from_a_board_in_setup():
    board = Board().place_worker(_p(1, 2), _p(3, 2))
    game = Game(board)

    assert game.partial_turn == PartialTurn.nothing_setup()
    assert game.next_action() == "Player 2: Place your first worker!"
    assert _p(1, 2) not in game.selectable
