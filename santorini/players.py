from __future__ import annotations

import logging
import random
from enum import Enum
from typing import Callable, Optional, Protocol

from .board import Board
from .errors import InvalidMove
from .move import Turn

LOG = logging.getLogger(__name__)

Evaluator = Callable[[Board], int]


class PlayerKind(str, Enum):
    HUMAN = "human"
    RANDOM = "random"
    GREEDY = "greedy"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    PlayerKind.HUMAN: "Human",
    PlayerKind.RANDOM: "Random",
    PlayerKind.GREEDY: "Greedy hill climber",
}


class Strategy(Protocol):
    def decide(self, board: Board) -> Turn:
        ...


def elevation(board: Board) -> int:
    """Score the player who just moved by how high their workers stand."""
    workers = board.workers(board.next_player.other())
    return (
        len(board.first_floor & workers)
        + 2 * len(board.second_floor & workers)
        + 3 * len(board.third_floor & workers)
    )


def _legal_turns(board: Board) -> list[Turn]:
    turns = board.possible_move()
    if not turns:
        raise InvalidMove(f"{board.next_player} has no legal move")
    return turns


class RandomPlayer:
    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()

    def decide(self, board: Board) -> Turn:
        return self.rng.choice(_legal_turns(board))


class GreedyPlayer:
    """One-ply maximizer: plays the last generated turn whose resulting board scores highest."""

    def __init__(self, evaluate: Evaluator = elevation) -> None:
        self.evaluate = evaluate

    def decide(self, board: Board) -> Turn:
        turns = _legal_turns(board)
        # ties go to the last generated turn
        best = max(reversed(turns), key=lambda turn: self.evaluate(board.action(turn)))
        LOG.debug("%s greedy pick %s among %d turns", board.next_player, best, len(turns))
        return best


def make_player(kind: PlayerKind, seed: Optional[int] = None) -> Optional[Strategy]:
    """Build the strategy for ``kind``; humans get None and play through a front end."""
    if kind is PlayerKind.HUMAN:
        return None
    if kind is PlayerKind.RANDOM:
        return RandomPlayer(random.Random(seed))
    return GreedyPlayer()
