from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Dict, Iterator, List, Optional, Tuple

from .errors import InvalidMove
from .move import Turn, TurnKind
from .position import ALL_POSITIONS, Position, PositionSet
from .rules import Ruleset
from .tiles import Construction, Player, Tile

LOG = logging.getLogger(__name__)

_LEVEL_FIELDS: Dict[Construction, str] = {
    Construction.FIRST_LEVEL: "first_floor",
    Construction.SECOND_LEVEL: "second_floor",
    Construction.THIRD_LEVEL: "third_floor",
    Construction.DOME: "dome",
}

_WORKER_FIELDS: Dict[Player, str] = {
    Player.PLAYER1: "player1_workers",
    Player.PLAYER2: "player2_workers",
}


@dataclass(frozen=True)
class Board:
    """Immutable game position.

    Every transition returns a new Board; the receiver is never modified, so
    older boards stay valid for search and comparison.
    """

    player1_workers: PositionSet = PositionSet()
    player2_workers: PositionSet = PositionSet()
    first_floor: PositionSet = PositionSet()
    second_floor: PositionSet = PositionSet()
    third_floor: PositionSet = PositionSet()
    dome: PositionSet = PositionSet()
    next_player: Player = Player.PLAYER1
    ruleset: Ruleset = Ruleset()

    # --- Queries ---------------------------------------------------------------

    def current_player(self) -> Player:
        return self.next_player

    def workers(self, player: Player) -> PositionSet:
        return getattr(self, _WORKER_FIELDS[player])

    def all_workers(self) -> PositionSet:
        return self.player1_workers.union(self.player2_workers)

    def level_set(self, construction: Construction) -> PositionSet:
        if construction is Construction.GROUND_LEVEL:
            built = self.first_floor | self.second_floor | self.third_floor | self.dome
            return ALL_POSITIONS.difference(built)
        return getattr(self, _LEVEL_FIELDS[construction])

    def construction_at(self, position: Position) -> Construction:
        if self.dome.contains(position):
            return Construction.DOME
        if self.third_floor.contains(position):
            return Construction.THIRD_LEVEL
        if self.second_floor.contains(position):
            return Construction.SECOND_LEVEL
        if self.first_floor.contains(position):
            return Construction.FIRST_LEVEL
        return Construction.GROUND_LEVEL

    def player_at(self, position: Position) -> Optional[Player]:
        if self.player1_workers.contains(position):
            return Player.PLAYER1
        if self.player2_workers.contains(position):
            return Player.PLAYER2
        return None

    def get_tile(self, position: Position) -> Tile:
        return Tile(construction=self.construction_at(position), player=self.player_at(position))

    def tiles(self) -> Iterator[Tuple[Position, Tile]]:
        """All 25 cells in row-major order."""
        for position in reversed(ALL_POSITIONS):
            yield position, self.get_tile(position)

    def in_setup(self) -> bool:
        """True while the player to move has not placed any worker yet."""
        return self.workers(self.next_player).is_empty()

    def setup_done(self) -> bool:
        return len(self.all_workers()) == 4

    # --- Transitions -----------------------------------------------------------

    def _can_step(self, height: Construction, target: Construction) -> bool:
        if self.ruleset.enforce_climb_limit:
            return height.can_move(target)
        return target is not Construction.DOME

    def _with_workers(self, player: Player, workers: PositionSet) -> "Board":
        return replace(self, **{_WORKER_FIELDS[player]: workers})

    def place_worker(self, p1: Position, p2: Position) -> "Board":
        player = self.next_player
        if self.all_workers().contains(p1) or self.all_workers().contains(p2):
            raise InvalidMove("cell already holds a worker")
        if not self.workers(player).is_empty():
            raise InvalidMove(f"{player} has already placed workers")
        if p1 == p2 and not self.ruleset.allow_stacked_setup:
            raise InvalidMove("both workers cannot share a cell")
        board = self._with_workers(player, PositionSet.from_positions((p1, p2)))
        LOG.debug("%s placed workers at %r and %r", player, p1, p2)
        return replace(board, next_player=player.other())

    def _build(self, position: Position) -> "Board":
        current = self.construction_at(position)
        raised = current.build()
        changes = {_LEVEL_FIELDS[raised]: self.level_set(raised).add(position)}
        if current is not Construction.GROUND_LEVEL:
            changes[_LEVEL_FIELDS[current]] = self.level_set(current).remove(position)
        return replace(self, **changes)

    def action(self, turn: Turn) -> "Board":
        """Apply ``turn`` for the player to move and return the resulting board.

        Raises InvalidMove when the turn breaks a rule; the receiver is left
        untouched either way.
        """
        player = self.next_player
        if turn.kind is TurnKind.SETUP:
            if not self.workers(player).is_empty():
                raise InvalidMove(f"{player} has already placed workers")
            return self.place_worker(turn.start, turn.end)

        if turn.kind is TurnKind.FINAL_MOVE and turn.build is not None:
            raise InvalidMove("a final move has no build step")
        start, end, build = turn.start, turn.end, turn.build

        if not Position.are_neighbors(start, end):
            raise InvalidMove("start and end are not neighbors")
        own = self.workers(player)
        if not own.contains(start):
            raise InvalidMove(f"{player} has no worker at {start!r}")
        if self.all_workers().contains(end):
            raise InvalidMove("destination already holds a worker")
        if self.dome.contains(end):
            raise InvalidMove("destination is domed")
        if not self.third_floor.contains(end) and build is None:
            raise InvalidMove("a build is required below the third level")
        height, target = self.construction_at(start), self.construction_at(end)
        if not self._can_step(height, target):
            raise InvalidMove(f"cannot climb from {height.name} to {target.name}")

        board = self._with_workers(player, own.remove(start).add(end))
        if build is not None:
            if not Position.are_neighbors(end, build):
                raise InvalidMove("build must neighbor the destination")
            if board.all_workers().contains(build):
                raise InvalidMove("cannot build under a worker")
            board = board._build(build)

        LOG.debug("%s played %s %r -> %r build %r", player, turn.kind.value, start, end, build)
        return replace(board, next_player=player.other())

    def is_legal_move(self, turn: Turn) -> Tuple[bool, str]:
        try:
            self.action(turn)
        except InvalidMove as exc:
            return False, exc.reason
        return True, ""

    # --- Enumeration -----------------------------------------------------------

    def possible_move(self) -> List[Turn]:
        """Every legal turn for the player to move, recomputed on each call."""
        player = self.next_player
        own = self.workers(player)
        if own.is_empty():
            free = ALL_POSITIONS.difference(self.workers(player.other()))
            stacked = self.ruleset.allow_stacked_setup
            return [Turn.setup(p1, p2) for p1 in free for p2 in free if stacked or p1 != p2]

        occupied = self.all_workers()
        turns: List[Turn] = []
        for start in own:
            height = self.construction_at(start)
            for end in start.get_neighbors().difference(occupied):
                if not self._can_step(height, self.construction_at(end)):
                    continue
                if self.third_floor.contains(end):
                    turns.append(Turn.final_move(start, end))
                    continue
                # The vacated start cell is always buildable.
                builds = end.get_neighbors().difference(self.dome).difference(occupied).add(start)
                for build in builds:
                    turns.append(Turn.move_build(start, end, build))
        return turns


def new_board(ruleset: Ruleset | None = None) -> Board:
    return Board(ruleset=ruleset or Ruleset())
