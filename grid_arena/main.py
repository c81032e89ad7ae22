#!/usr/bin/env python3
"""
GRID ARENA - Terminal Arena Shooter
====================================
Clear a walled arena of enemies before they wear you down.

Controls:
    ARROWS  - Move one cell
    wasd    - Shoot up / left / down / right
    qezc    - Shoot diagonally
    x       - Quit
"""

import argparse
import random
import sys
import time
from typing import List, Optional

try:
    from blessed import Terminal
except ImportError:
    print("ERROR: 'blessed' library required. Install with: pip install blessed")
    sys.exit(1)

from loguru import logger

from .config import (
    MAP_WIDTH, MAP_HEIGHT, FRAME_DELAY,
    COLOR_WALL, COLOR_FLOOR, COLOR_STATUS, COLOR_WIN_MESSAGE
)
from .engine import GameRenderer
from .game import GameSession, PHASE_PLAYING, PHASE_WON, PHASE_LOST
from .player import InputHandler
from .systems import render_arena, render_system


# =============================================================================
# CONSTANTS
# =============================================================================

MIN_WIDTH = MAP_WIDTH
MIN_HEIGHT = MAP_HEIGHT + 1  # Map plus status line

WIN_MESSAGE = 'You Win!'
PLAY_AGAIN_MESSAGE = "Press 'y' to play again or 'q' to quit"
LOSE_MESSAGE = 'You Lose!'


# =============================================================================
# RENDERING
# =============================================================================

def render_play_screen(session: GameSession, renderer: GameRenderer):
    """Map, entities, and the status line just below the map."""
    render_arena(session.arena, renderer, COLOR_WALL, COLOR_FLOOR)
    render_system(session.world, renderer)
    renderer.put_string(0, session.arena.height, session.status_text(), COLOR_STATUS)


def render_win_screen(renderer: GameRenderer):
    mid = renderer.height // 2
    renderer.put_centered(mid - 1, WIN_MESSAGE, COLOR_WIN_MESSAGE, bold=True)
    renderer.put_centered(mid + 1, PLAY_AGAIN_MESSAGE, COLOR_STATUS)


def render(session: GameSession, renderer: GameRenderer) -> str:
    """Build one frame and return the terminal output for it."""
    renderer.begin_frame()
    if session.phase == PHASE_WON:
        render_win_screen(renderer)
    else:
        render_play_screen(session, renderer)
    return renderer.end_frame()


# =============================================================================
# INPUT
# =============================================================================

def handle_input(term, session: GameSession, input_handler: InputHandler):
    """Poll at most one key without blocking and route it by phase."""
    key = term.inkey(timeout=0)
    if not key:
        return

    if session.phase == PHASE_WON:
        key_str = str(key) if not key.is_sequence else ''
        if key_str == 'y':
            session.restart()
        elif key_str == 'q':
            session.quit()
        return

    if session.phase == PHASE_PLAYING:
        input_handler.process_key(key)
        session.queue_action(input_handler.consume_action())


# =============================================================================
# SETUP
# =============================================================================

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Terminal grid arena shooter")
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for a reproducible arena and enemy behavior",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Write a debug log here (nothing is logged to the screen)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"],
        help="Minimum level written to --log-file",
    )
    return parser.parse_args(argv)


def configure_logging(log_file: Optional[str], level: str = "INFO"):
    """
    Route loguru output away from the terminal.

    The default stderr sink would draw over the full-screen display,
    so it is always removed; a file sink is added only on request.
    """
    logger.remove()
    if log_file:
        logger.add(log_file, level=level)


# =============================================================================
# MAIN LOOP
# =============================================================================

def main(argv: Optional[List[str]] = None):
    """Entry point. Sets up the terminal and runs the paced frame loop."""
    args = parse_args(argv)
    configure_logging(args.log_file, args.log_level)

    term = Terminal()

    if term.width < MIN_WIDTH or term.height < MIN_HEIGHT:
        print(
            f'Terminal too small: {term.width}x{term.height}. '
            f'Minimum: {MIN_WIDTH}x{MIN_HEIGHT}'
        )
        sys.exit(1)

    session = GameSession(rng=random.Random(args.seed))
    session.start_game()

    with term.fullscreen(), term.cbreak(), term.hidden_cursor():
        renderer = GameRenderer(term)
        input_handler = InputHandler()

        # Initial clear (only time we clear the whole screen)
        print(term.home + term.clear, end='', flush=True)

        while session.running:
            handle_input(term, session, input_handler)
            session.update()
            print(render(session, renderer), end='', flush=True)
            time.sleep(FRAME_DELAY)

        # Restore terminal
        print(term.normal, end='', flush=True)

    if session.phase == PHASE_LOST:
        print(LOSE_MESSAGE)


if __name__ == '__main__':
    main()
