"""Santorini core engine package."""

from .errors import InvalidMove
from .position import ALL_POSITIONS, Position, PositionSet
from .tiles import Construction, Player, Tile
from .rules import Ruleset
from .move import PartialKind, PartialTurn, Turn, TurnKind
from .board import Board, new_board
from .game import Game
from .players import GreedyPlayer, PlayerKind, RandomPlayer, elevation, make_player

__all__ = [
    "InvalidMove",
    "ALL_POSITIONS",
    "Position",
    "PositionSet",
    "Construction",
    "Player",
    "Tile",
    "Ruleset",
    "PartialKind",
    "PartialTurn",
    "Turn",
    "TurnKind",
    "Board",
    "new_board",
    "Game",
    "GreedyPlayer",
    "PlayerKind",
    "RandomPlayer",
    "elevation",
    "make_player",
]
