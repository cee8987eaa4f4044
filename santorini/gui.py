"""
Pygame front end.

Interaction model:
- Player types are picked from a two-column menu (Up/Down, Enter) unless both
  were given on the command line.
- Move the cursor with the arrows or h/j/k/l, select with Enter or Space, or
  click a cell. Esc cancels the partial turn, Q quits, F12 saves a screenshot
  to $SANTORINI_GUI_SCREENSHOT_PATH.
- Green borders mark selectable cells, thick borders mark cells already picked.
"""

from __future__ import annotations

import argparse
import logging
import os
import pathlib
import random
import traceback
from typing import Dict, List, Optional, Tuple

import pygame

from .game import Game
from .players import PlayerKind, Strategy, make_player
from .position import SIZE, Position
from .rules import Ruleset
from .tiles import Construction, Player, Tile

LOG = logging.getLogger(__name__)

SCREENSHOT_ENV = "SANTORINI_GUI_SCREENSHOT_PATH"
AI_DELAY_MS = 400

# --- Theme --------------------------------------------------------------------

BG = (22, 27, 34)
PANEL = (30, 36, 46)
PANEL_LINE = (54, 63, 77)
TEXT = (220, 226, 235)
SUB = (164, 174, 187)
ACCENT = (88, 138, 255)
SELECTABLE = (66, 171, 119)
BLOCKED = (220, 80, 80)

LEVEL_COLORS = {
    Construction.GROUND_LEVEL: (58, 66, 80),
    Construction.FIRST_LEVEL: (96, 106, 122),
    Construction.SECOND_LEVEL: (138, 148, 162),
    Construction.THIRD_LEVEL: (186, 194, 204),
    Construction.DOME: (50, 90, 170),
}

PLAYER_COLORS = {
    Player.PLAYER1: (221, 164, 66),
    Player.PLAYER2: (86, 148, 227),
}


# --- Pure helpers -------------------------------------------------------------

def tile_label(tile: Tile) -> str:
    who = f"P{tile.player.value}" if tile.player is not None else "  "
    return f"{who} {tile.construction.tag}"


def cell_at(origin: Tuple[int, int], cell_size: int, point: Tuple[int, int]) -> Optional[Position]:
    """Map a pixel to the board cell under it, or None outside the grid."""
    x, y = point[0] - origin[0], point[1] - origin[1]
    if x < 0 or y < 0:
        return None
    row, col = y // cell_size, x // cell_size
    if row >= SIZE or col >= SIZE:
        return None
    return Position.at(row, col)


def resolve_screenshot_path() -> Optional[pathlib.Path]:
    value = os.environ.get(SCREENSHOT_ENV)
    return pathlib.Path(value) if value else None


class PlayerMenu:
    """Two-step choice of player types, Player 1 first."""

    def __init__(self) -> None:
        self.options: List[PlayerKind] = list(PlayerKind)
        self.index = 0
        self.choices: List[PlayerKind] = []

    @property
    def done(self) -> bool:
        return len(self.choices) == 2

    def up(self) -> None:
        self.index = max(0, self.index - 1)

    def down(self) -> None:
        self.index = min(len(self.options) - 1, self.index + 1)

    def confirm(self) -> None:
        if not self.done:
            self.choices.append(self.options[self.index])
            self.index = 0


# --- Drawing ------------------------------------------------------------------

def _board_geometry(size: Tuple[int, int]) -> Tuple[Tuple[int, int], int]:
    width, height = size
    header_h = 56
    cell = max(40, min(width - 40, height - header_h - 40) // SIZE)
    origin = ((width - cell * SIZE) // 2, header_h + (height - header_h - cell * SIZE) // 2)
    return origin, cell


def draw_header(surface, text: str, font) -> None:
    rect = pygame.Rect(10, 10, surface.get_width() - 20, 40)
    pygame.draw.rect(surface, PANEL, rect, border_radius=10)
    pygame.draw.rect(surface, PANEL_LINE, rect, width=2, border_radius=10)
    label = font.render(text, True, TEXT)
    surface.blit(label, label.get_rect(midleft=(rect.x + 12, rect.centery)))


def draw_board(surface, game: Game, cursor: Position, font) -> None:
    origin, cell = _board_geometry(surface.get_size())
    selected = game.selected()
    for position, tile in game.board.tiles():
        rect = pygame.Rect(origin[0] + position.col() * cell, origin[1] + position.row() * cell, cell, cell)
        inner = rect.inflate(-6, -6)
        pygame.draw.rect(surface, LEVEL_COLORS[tile.construction], inner, border_radius=8)
        border = SELECTABLE if position in game.selectable else BLOCKED
        width = 5 if position in selected else 2
        pygame.draw.rect(surface, border, inner, width=width, border_radius=8)
        if tile.player is not None:
            pygame.draw.circle(surface, PLAYER_COLORS[tile.player], inner.center, cell // 5)
        label = font.render(tile_label(tile), True, TEXT)
        surface.blit(label, label.get_rect(midbottom=(inner.centerx, inner.bottom - 4)))
        if position == cursor:
            pygame.draw.rect(surface, ACCENT, rect, width=3, border_radius=10)


def draw_menu(surface, menu: PlayerMenu, font) -> None:
    width, height = surface.get_size()
    for column in range(2):
        rect = pygame.Rect(20 + column * (width // 2), 70, width // 2 - 40, height - 100)
        pygame.draw.rect(surface, PANEL, rect, border_radius=10)
        pygame.draw.rect(surface, PANEL_LINE, rect, width=2, border_radius=10)
        surface.blit(font.render(f"Player {column + 1}", True, SUB), (rect.x + 12, rect.y + 10))
        if column < len(menu.choices):
            highlighted = menu.options.index(menu.choices[column])
        elif column == len(menu.choices):
            highlighted = menu.index
        else:
            highlighted = None
        for i, kind in enumerate(menu.options):
            prefix = ">> " if i == highlighted else "   "
            color = ACCENT if i == highlighted else TEXT
            surface.blit(font.render(prefix + kind.label, True, color), (rect.x + 12, rect.y + 46 + i * 30))


# --- GUI entry ----------------------------------------------------------------

_CURSOR_KEYS = {
    pygame.K_UP: Position.up,
    pygame.K_k: Position.up,
    pygame.K_DOWN: Position.down,
    pygame.K_j: Position.down,
    pygame.K_LEFT: Position.left,
    pygame.K_h: Position.left,
    pygame.K_RIGHT: Position.right,
    pygame.K_l: Position.right,
}


def launch_gui(
    kinds: Optional[Tuple[PlayerKind, PlayerKind]] = None,
    seed: Optional[int] = None,
    ruleset: Optional[Ruleset] = None,
) -> Optional[Player]:  # pragma: no cover
    pygame.init()
    pygame.display.set_caption("Santorini")
    screen = pygame.display.set_mode((720, 780), pygame.RESIZABLE)
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("arial", 18)

    menu = PlayerMenu()
    if kinds is not None:
        menu.choices = list(kinds)
    game = Game(ruleset=ruleset)
    rng = random.Random(seed)
    strategies: Dict[Player, Optional[Strategy]] = {}
    cursor = Position.at(0, 0)
    winner: Optional[Player] = None
    last_ai_ms = 0

    def select(position: Position) -> None:
        if position in game.selectable:
            game.register_selection(position)

    def run_loop() -> None:
        nonlocal screen, cursor, winner, last_ai_ms, strategies
        running = True
        while running:
            screen.fill(BG)
            if not menu.done:
                draw_header(screen, "Choose player types (Up/Down, Enter)", font)
                draw_menu(screen, menu, font)
            else:
                if not strategies:
                    strategies = {
                        Player.PLAYER1: make_player(menu.choices[0], seed=rng.randrange(2**32)),
                        Player.PLAYER2: make_player(menu.choices[1], seed=rng.randrange(2**32)),
                    }
                    LOG.info("starting game: %s vs %s", menu.choices[0].value, menu.choices[1].value)
                header = f"{winner} won! (Q to quit)" if winner is not None else game.next_action()
                draw_header(screen, header, font)
                draw_board(screen, game, cursor, font)

                if winner is None:
                    winner = game.winner()
                    if winner is not None:
                        LOG.info("game over, winner: %s", winner)
                strategy = strategies[game.board.next_player]
                now = pygame.time.get_ticks()
                if winner is None and strategy is not None and now - last_ai_ms >= AI_DELAY_MS:
                    game.play(strategy.decide(game.board))
                    last_ai_ms = now

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.VIDEORESIZE:
                    screen = pygame.display.set_mode(event.size, pygame.RESIZABLE)
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_q:
                        running = False
                    elif event.key == pygame.K_F12:
                        path = resolve_screenshot_path()
                        if path is not None:
                            pygame.image.save(screen, str(path))
                    elif not menu.done:
                        if event.key in (pygame.K_UP, pygame.K_k):
                            menu.up()
                        elif event.key in (pygame.K_DOWN, pygame.K_j):
                            menu.down()
                        elif event.key in (pygame.K_RETURN, pygame.K_SPACE):
                            menu.confirm()
                    elif winner is None:
                        if event.key in _CURSOR_KEYS:
                            cursor = _CURSOR_KEYS[event.key](cursor)
                        elif event.key in (pygame.K_RETURN, pygame.K_SPACE):
                            select(cursor)
                        elif event.key == pygame.K_ESCAPE:
                            game.cancel()
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    if menu.done and winner is None:
                        origin, cell = _board_geometry(screen.get_size())
                        position = cell_at(origin, cell, event.pos)
                        if position is not None:
                            cursor = position
                            select(position)

            pygame.display.flip()
            clock.tick(60)

    try:
        run_loop()
    except Exception:
        LOG.error("GUI crashed:\n%s", traceback.format_exc())
        raise
    finally:
        pygame.quit()
    return winner


def main(argv: Optional[List[str]] = None) -> int:  # pragma: no cover
    kinds = [kind.value for kind in PlayerKind]
    parser = argparse.ArgumentParser(description="Play Santorini in a pygame window.")
    parser.add_argument("--p1", choices=kinds, default=None, help="Player 1 type (skips the menu with --p2).")
    parser.add_argument("--p2", choices=kinds, default=None, help="Player 2 type (skips the menu with --p1).")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--stacked-setup", action="store_true")
    parser.add_argument("--no-climb-limit", action="store_true")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING))

    chosen = None
    if args.p1 is not None and args.p2 is not None:
        chosen = (PlayerKind(args.p1), PlayerKind(args.p2))
    ruleset = Ruleset(allow_stacked_setup=args.stacked_setup, enforce_climb_limit=not args.no_climb_limit)
    winner = launch_gui(chosen, seed=args.seed, ruleset=ruleset)
    print(f"{winner} won!" if winner is not None else "Game interrupted")
    return 0


if __name__ == "__main__":  # allows standalone execution
    main()
