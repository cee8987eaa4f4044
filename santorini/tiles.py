from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional

from .errors import InvalidMove


class Player(Enum):
    PLAYER1 = 1
    PLAYER2 = 2

    def other(self) -> "Player":
        return Player.PLAYER2 if self is Player.PLAYER1 else Player.PLAYER1

    def __str__(self) -> str:
        return f"Player {self.value}"


class Construction(IntEnum):
    GROUND_LEVEL = 0
    FIRST_LEVEL = 1
    SECOND_LEVEL = 2
    THIRD_LEVEL = 3
    DOME = 4

    def build(self) -> "Construction":
        if self is Construction.DOME:
            raise InvalidMove("cannot build on a dome")
        return Construction(self + 1)

    def can_move(self, target: "Construction") -> bool:
        """Whether a worker standing at this height may step onto ``target``.

        Domes are never enterable. Third level is only reachable from second
        level, which is the winning climb. Otherwise a worker climbs at most one
        level and may drop any number of levels.
        """
        if target is Construction.DOME:
            return False
        if target is Construction.THIRD_LEVEL:
            return self is Construction.SECOND_LEVEL
        return target - self <= 1

    @property
    def tag(self) -> str:
        return _TAGS[self]


_TAGS = {
    Construction.GROUND_LEVEL: "GF",
    Construction.FIRST_LEVEL: "1F",
    Construction.SECOND_LEVEL: "2F",
    Construction.THIRD_LEVEL: "3F",
    Construction.DOME: "DD",
}


@dataclass(frozen=True)
class Tile:
    construction: Construction = Construction.GROUND_LEVEL
    player: Optional[Player] = None
