from __future__ import annotations

import argparse
import logging
import sys
from typing import Collection, Dict, Iterable, List, Optional, Tuple

from .board import Board
from .errors import InvalidMove
from .game import Game
from .move import Turn, TurnKind
from .players import PlayerKind, Strategy, make_player
from .position import Position
from .rules import Ruleset
from .tiles import Player

LOG = logging.getLogger(__name__)


def _cell(position: Position) -> str:
    return f"({position.row()}, {position.col()})"


def format_cells(cells: Iterable[Position]) -> str:
    return " ".join(_cell(p) for p in sorted(cells))


def describe_turn(turn: Turn) -> str:
    if turn.kind is TurnKind.SETUP:
        return f"places workers on {_cell(turn.start)} and {_cell(turn.end)}"
    if turn.kind is TurnKind.FINAL_MOVE:
        return f"moves {_cell(turn.start)} -> {_cell(turn.end)} onto the third level"
    return f"moves {_cell(turn.start)} -> {_cell(turn.end)}, builds on {_cell(turn.build)}"


def render_board(
    board: Board,
    selected: Collection[Position] = (),
    selectable: Collection[Position] = (),
    cursor: Optional[Position] = None,
) -> str:
    """Text view of the board: one ``P1 2F`` style cell per tile.

    Selected cells are wrapped in brackets, selectable ones in parentheses and
    the cursor is marked with ``>``.
    """
    lines: List[str] = ["    " + " ".join(f"    {c}   " for c in range(5))]
    row: List[str] = []
    for position, tile in board.tiles():
        who = f"P{tile.player.value}" if tile.player is not None else "  "
        body = f"{who} {tile.construction.tag}"
        if position in selected:
            body = f"[{body}]"
        elif position in selectable:
            body = f"({body})"
        else:
            body = f" {body} "
        mark = ">" if position == cursor else " "
        row.append(mark + body)
        if position.col() == 4:
            lines.append(f" {position.row()}  " + " ".join(row))
            row = []
    return "\n".join(lines)


def parse_cell(text: str) -> Optional[Position]:
    sep = "," if "," in text else None
    parts = [t for t in text.split(sep) if t.strip()]
    if len(parts) != 2:
        return None
    try:
        return Position.at(int(parts[0]), int(parts[1]))
    except ValueError:
        return None


def run_match(
    player1: Strategy,
    player2: Strategy,
    max_turns: int = 200,
    ruleset: Optional[Ruleset] = None,
) -> Tuple[Game, Optional[Player]]:
    """Play two strategies against each other without any input."""
    game = Game(ruleset=ruleset)
    strategies = {Player.PLAYER1: player1, Player.PLAYER2: player2}
    for _ in range(max_turns):
        winner = game.winner()
        if winner is not None:
            return game, winner
        game.play(strategies[game.board.next_player].decide(game.board))
    return game, game.winner()


def _human_step(game: Game) -> bool:
    print(render_board(game.board, game.selected(), game.selectable))
    print(game.next_action())
    print("Selectable:", format_cells(game.selectable))
    while True:
        try:
            text = input("Cell as 'row col' (c to cancel, q to quit): ").strip().lower()
        except EOFError:
            return False
        if text in {"q", "quit", "exit"}:
            return False
        if text in {"c", "cancel"}:
            game.cancel()
            return True
        cell = parse_cell(text)
        if cell is None:
            print("Could not parse. Try again.")
            continue
        try:
            game.register_selection(cell)
        except InvalidMove as exc:
            print(f"Illegal pick: {exc}. Try again.")
            continue
        return True


def play(strategies: Dict[Player, Optional[Strategy]], max_turns: int, ruleset: Ruleset) -> Optional[Player]:
    game = Game(ruleset=ruleset)
    turns = 0
    while turns < max_turns:
        winner = game.winner()
        if winner is not None:
            break
        board = game.board
        strategy = strategies[board.next_player]
        if strategy is None:
            if not _human_step(game):
                print("Game interrupted")
                return None
        else:
            turn = strategy.decide(board)
            game.play(turn)
            print(f"{board.next_player} {describe_turn(turn)}")
        if game.board is not board:
            turns += 1
    print(render_board(game.board))
    return game.winner()


def main(argv: Optional[List[str]] = None) -> int:
    kinds = [kind.value for kind in PlayerKind]
    parser = argparse.ArgumentParser(description="Play Santorini in the terminal.")
    parser.add_argument("--p1", choices=kinds, default=PlayerKind.HUMAN.value, help="Player 1 type.")
    parser.add_argument("--p2", choices=kinds, default=PlayerKind.GREEDY.value, help="Player 2 type.")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for the random player.")
    parser.add_argument("--max-turns", type=int, default=200, help="Stop after this many turns.")
    parser.add_argument("--stacked-setup", action="store_true", help="Allow both workers on one setup cell.")
    parser.add_argument("--no-climb-limit", action="store_true", help="Accept turns that climb more than one level.")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING))

    ruleset = Ruleset(allow_stacked_setup=args.stacked_setup, enforce_climb_limit=not args.no_climb_limit)
    strategies = {
        Player.PLAYER1: make_player(PlayerKind(args.p1), seed=args.seed),
        Player.PLAYER2: make_player(PlayerKind(args.p2), seed=None if args.seed is None else args.seed + 1),
    }
    LOG.info("starting game: %s vs %s", args.p1, args.p2)
    winner = play(strategies, args.max_turns, ruleset)
    if winner is not None:
        print(f"{winner} won!")
    else:
        print("No winner")
    LOG.info("game over, winner: %s", winner)
    return 0


if __name__ == "__main__":
    sys.exit(main())
