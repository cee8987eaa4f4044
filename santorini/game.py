"""
Turn assembly for interactive front ends.

A Game turns single-cell picks into full turns. After each pick it narrows the
set of cells the next pick may use, so a front end only has to highlight
``selectable`` and forward clicks or key presses to ``register_selection``.
"""

from __future__ import annotations

import logging
from typing import FrozenSet, List, Optional, Tuple

from .board import Board, new_board
from .errors import InvalidMove
from .move import PartialKind, PartialTurn, Turn, TurnKind
from .position import Position
from .rules import Ruleset
from .tiles import Construction, Player

LOG = logging.getLogger(__name__)

_PROMPTS = {
    PartialKind.NOTHING: "Pick a worker!",
    PartialKind.SELECTION: "Move your worker!",
    PartialKind.MOVE: "Build!",
    PartialKind.NOTHING_SETUP: "Place your first worker!",
    PartialKind.PARTIAL_SETUP: "Place your second worker!",
}


class Game:
    def __init__(self, board: Optional[Board] = None, ruleset: Optional[Ruleset] = None) -> None:
        self._board = board if board is not None else new_board(ruleset)
        self._partial = PartialTurn.initial(self._board.in_setup())
        self._selectable: FrozenSet[Position] = frozenset()
        self._reset_selectable()

    @property
    def board(self) -> Board:
        return self._board

    @property
    def partial_turn(self) -> PartialTurn:
        return self._partial

    @property
    def selectable(self) -> FrozenSet[Position]:
        return self._selectable

    def selected(self) -> List[Position]:
        return list(self._partial.selected())

    def next_action(self) -> str:
        return f"{self._board.next_player}: {_PROMPTS[self._partial.kind]}"

    def _main_turns(self) -> List[Turn]:
        return [turn for turn in self._board.possible_move() if turn.kind is not TurnKind.SETUP]

    def _free_cells(self, excluded: Tuple[Position, ...] = ()) -> FrozenSet[Position]:
        return frozenset(
            position
            for position, tile in self._board.tiles()
            if tile.player is None and position not in excluded
        )

    def _reset_selectable(self) -> None:
        partial = self._partial
        kind = partial.kind
        if kind is PartialKind.NOTHING_SETUP:
            cells = self._free_cells()
        elif kind is PartialKind.PARTIAL_SETUP:
            cells = self._free_cells(excluded=(partial.first,))
        elif kind is PartialKind.NOTHING:
            cells = frozenset(turn.start for turn in self._main_turns())
        elif kind is PartialKind.SELECTION:
            cells = frozenset(turn.end for turn in self._main_turns() if turn.start == partial.first)
        elif self._board.construction_at(partial.second) is Construction.THIRD_LEVEL:
            # Reaching the third level wins outright; there is nothing to build.
            cells = frozenset()
        else:
            cells = frozenset(
                turn.build
                for turn in self._main_turns()
                if turn.kind is TurnKind.MOVE_BUILD
                and turn.start == partial.first
                and turn.end == partial.second
            )
        self._selectable = cells

    def _restart(self) -> None:
        self._partial = PartialTurn.initial(self._board.in_setup())

    def register_selection(self, selection: Position) -> None:
        """Advance the partial turn by one pick.

        Raises InvalidMove for a cell outside ``selectable``; the game is left
        unchanged in that case.
        """
        if selection not in self._selectable:
            raise InvalidMove(f"{selection!r} is not selectable")

        partial = self._partial
        kind = partial.kind
        if kind is PartialKind.NOTHING_SETUP:
            self._partial = PartialTurn.partial_setup(selection)
        elif kind is PartialKind.PARTIAL_SETUP:
            self._board = self._board.place_worker(partial.first, selection)
            self._restart()
        elif kind is PartialKind.NOTHING:
            self._partial = PartialTurn.selection(selection)
        elif kind is PartialKind.SELECTION:
            self._partial = PartialTurn.move(partial.first, selection)
        else:
            self._board = self._board.action(Turn.move_build(partial.first, partial.second, selection))
            self._partial = PartialTurn.nothing()
        LOG.debug("selection %r: %s -> %s", selection, kind.value, self._partial.kind.value)
        self._reset_selectable()

    def cancel(self) -> None:
        self._partial = PartialTurn.initial(self._partial.is_setup())
        self._reset_selectable()

    def play(self, turn: Turn) -> None:
        """Apply a complete turn, as AI players do, and restart turn assembly."""
        self._board = self._board.action(turn)
        self._restart()
        self._reset_selectable()

    def winner(self) -> Optional[Player]:
        partial = self._partial
        if partial.kind is PartialKind.MOVE:
            if self._board.construction_at(partial.second) is Construction.THIRD_LEVEL:
                return self._board.next_player
        elif partial.kind is PartialKind.NOTHING:
            previous = self._board.next_player.other()
            # A final move applied through play() leaves the mover on the third level.
            on_top = self._board.workers(previous) & self._board.third_floor
            if on_top or not self._selectable:
                return previous
        return None
