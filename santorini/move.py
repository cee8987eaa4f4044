from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .position import Position


class TurnKind(str, Enum):
    SETUP = "SETUP"
    MOVE_BUILD = "MOVE_BUILD"
    FINAL_MOVE = "FINAL_MOVE"


@dataclass(frozen=True)
class Turn:
    """A complete turn.

    For SETUP, ``start`` and ``end`` are the two cells receiving workers. For
    MOVE_BUILD and FINAL_MOVE a worker goes from ``start`` to ``end``; only
    MOVE_BUILD carries a ``build`` cell.
    """

    kind: TurnKind
    start: Position
    end: Position
    build: Optional[Position] = None

    @staticmethod
    def setup(first: Position, second: Position) -> "Turn":
        return Turn(TurnKind.SETUP, first, second)

    @staticmethod
    def move_build(start: Position, end: Position, build: Position) -> "Turn":
        return Turn(TurnKind.MOVE_BUILD, start, end, build)

    @staticmethod
    def final_move(start: Position, end: Position) -> "Turn":
        return Turn(TurnKind.FINAL_MOVE, start, end)


class PartialKind(str, Enum):
    NOTHING_SETUP = "NOTHING_SETUP"
    PARTIAL_SETUP = "PARTIAL_SETUP"
    NOTHING = "NOTHING"
    SELECTION = "SELECTION"
    MOVE = "MOVE"


@dataclass(frozen=True)
class PartialTurn:
    kind: PartialKind
    first: Optional[Position] = None
    second: Optional[Position] = None

    @staticmethod
    def nothing_setup() -> "PartialTurn":
        return PartialTurn(PartialKind.NOTHING_SETUP)

    @staticmethod
    def partial_setup(first: Position) -> "PartialTurn":
        return PartialTurn(PartialKind.PARTIAL_SETUP, first)

    @staticmethod
    def nothing() -> "PartialTurn":
        return PartialTurn(PartialKind.NOTHING)

    @staticmethod
    def selection(worker: Position) -> "PartialTurn":
        return PartialTurn(PartialKind.SELECTION, worker)

    @staticmethod
    def move(worker: Position, destination: Position) -> "PartialTurn":
        return PartialTurn(PartialKind.MOVE, worker, destination)

    @staticmethod
    def initial(in_setup: bool) -> "PartialTurn":
        return PartialTurn.nothing_setup() if in_setup else PartialTurn.nothing()

    def is_setup(self) -> bool:
        return self.kind in (PartialKind.NOTHING_SETUP, PartialKind.PARTIAL_SETUP)

    def selected(self) -> Tuple[Position, ...]:
        return tuple(p for p in (self.first, self.second) if p is not None)
