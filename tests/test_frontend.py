"""Terminal front end tests: key mapping, input routing, rendering, setup."""

from __future__ import annotations

import sys

import pytest
from blessed.keyboard import Keystroke
from loguru import logger

from grid_arena.config import (
    MAP_HEIGHT, PLAYER_CHAR, ENEMY_CHAR, WALL_CHAR, ARROW_CHAR, ENEMY_ARROW_CHAR
)
from grid_arena.enemies import create_enemy
from grid_arena.engine import GameRenderer
from grid_arena.game import PHASE_PLAYING, PHASE_WON, PHASE_EXITED
from grid_arena.main import (
    handle_input, render, parse_args, configure_logging,
    WIN_MESSAGE, PLAY_AGAIN_MESSAGE
)
from grid_arena.player import (
    InputHandler, Action, ACTION_MOVE, ACTION_SHOOT, ACTION_QUIT
)
from grid_arena.projectiles import spawn_projectile

from tests.conftest import StubTerminal, arrow, clear_enemies


pytestmark = pytest.mark.unit


def _row(renderer, y):
    return ''.join(cell.char for cell in renderer.buffer.front[y])


class TestInputHandler:
    @pytest.mark.parametrize("name,expected", [
        ('KEY_UP', Action(ACTION_MOVE, 0, -1)),
        ('KEY_DOWN', Action(ACTION_MOVE, 0, 1)),
        ('KEY_LEFT', Action(ACTION_MOVE, -1, 0)),
        ('KEY_RIGHT', Action(ACTION_MOVE, 1, 0)),
    ])
    def test_arrows_move(self, name, expected):
        handler = InputHandler()
        handler.process_key(arrow(name))
        assert handler.consume_action() == expected

    @pytest.mark.parametrize("char,direction", [
        ('w', (0, -1)), ('s', (0, 1)), ('a', (-1, 0)), ('d', (1, 0)),
        ('q', (-1, -1)), ('e', (1, -1)), ('z', (-1, 1)), ('c', (1, 1)),
    ])
    def test_shoot_keys(self, char, direction):
        handler = InputHandler()
        handler.process_key(Keystroke(char))
        assert handler.consume_action() == Action(ACTION_SHOOT, *direction)

    @pytest.mark.parametrize("char", ['W', 'D', 'Q', 'C', 'X'])
    def test_uppercase_is_not_bound(self, char):
        handler = InputHandler()
        handler.process_key(Keystroke(char))
        assert handler.consume_action() is None

    def test_x_quits(self):
        handler = InputHandler()
        handler.process_key(Keystroke('x'))
        assert handler.consume_action().kind == ACTION_QUIT

    def test_unbound_and_empty_keys(self):
        handler = InputHandler()
        handler.process_key(Keystroke('p'))
        handler.process_key(Keystroke(''))
        handler.process_key(None)
        assert handler.consume_action() is None

    def test_consume_clears(self):
        handler = InputHandler()
        handler.process_key(Keystroke('w'))
        handler.consume_action()
        assert handler.consume_action() is None


class TestHandleInput:
    def test_no_key_queues_nothing(self, session, clock):
        pos = session.player_position
        start = (pos.x, pos.y)
        handle_input(StubTerminal(), session, InputHandler())
        assert session._pending_action is None
        assert (pos.x, pos.y) == start

    def test_key_becomes_queued_action(self, session):
        handle_input(StubTerminal(keys=[Keystroke('w')]), session, InputHandler())
        assert session._pending_action == Action(ACTION_SHOOT, 0, -1)

    def test_one_key_per_frame(self, session):
        term = StubTerminal(keys=[Keystroke('w'), Keystroke('s')])
        handle_input(term, session, InputHandler())
        assert session._pending_action == Action(ACTION_SHOOT, 0, -1)

    def test_win_screen_restart(self, session, clock):
        clear_enemies(session.world)
        session.update(clock.advance(0.05))
        assert session.phase == PHASE_WON
        handle_input(StubTerminal(keys=[Keystroke('y')]), session, InputHandler())
        assert session.phase == PHASE_PLAYING
        assert session.enemy_count == 10

    def test_win_screen_quit(self, session, clock):
        clear_enemies(session.world)
        session.update(clock.advance(0.05))
        handle_input(StubTerminal(keys=[Keystroke('q')]), session, InputHandler())
        assert session.phase == PHASE_EXITED

    def test_win_screen_ignores_game_keys(self, session, clock):
        clear_enemies(session.world)
        session.update(clock.advance(0.05))
        handle_input(StubTerminal(keys=[Keystroke('x')]), session, InputHandler())
        assert session.phase == PHASE_WON

    @pytest.mark.parametrize("char", ['Y', 'Q'])
    def test_win_screen_ignores_uppercase(self, session, clock, char):
        clear_enemies(session.world)
        session.update(clock.advance(0.05))
        world = session.world
        handle_input(StubTerminal(keys=[Keystroke(char)]), session, InputHandler())
        assert session.phase == PHASE_WON
        assert session.world is world

    def test_uppercase_shot_queues_nothing(self, session):
        handle_input(StubTerminal(keys=[Keystroke('W')]), session, InputHandler())
        assert session._pending_action is None


class TestRender:
    def test_play_screen(self, session):
        renderer = GameRenderer(StubTerminal())
        render(session, renderer)

        assert _row(renderer, 0) == WALL_CHAR * 40
        assert _row(renderer, MAP_HEIGHT).startswith(session.status_text())

        pos = session.player_position
        assert renderer.buffer.front[int(pos.y)][int(pos.x)].char == PLAYER_CHAR
        chars = ''.join(_row(renderer, y) for y in range(MAP_HEIGHT))
        assert ENEMY_CHAR in chars

    @pytest.mark.parametrize("is_enemy,glyph", [
        (False, ARROW_CHAR), (True, ENEMY_ARROW_CHAR),
    ])
    def test_projectile_covers_player(self, session, is_enemy, glyph):
        pos = session.player_position
        spawn_projectile(session.world, pos.x + 0.5, pos.y + 0.5, 1, 0,
                         is_enemy=is_enemy)
        renderer = GameRenderer(StubTerminal())
        render(session, renderer)
        assert renderer.buffer.front[int(pos.y)][int(pos.x)].char == glyph

    def test_enemy_covers_player(self, session):
        pos = session.player_position
        clear_enemies(session.world)
        create_enemy(session.world, pos.x, pos.y, session.last_update, 1000.0)
        renderer = GameRenderer(StubTerminal())
        render(session, renderer)
        assert renderer.buffer.front[int(pos.y)][int(pos.x)].char == ENEMY_CHAR

    def test_unchanged_frame_emits_nothing_new(self, session):
        term = StubTerminal()
        term.move_xy = lambda x, y: f'<{x},{y}>'
        renderer = GameRenderer(term)
        assert render(session, renderer) != ''
        assert render(session, renderer) == ''

    def test_win_screen(self, session, clock):
        clear_enemies(session.world)
        session.update(clock.advance(0.05))
        renderer = GameRenderer(StubTerminal())
        render(session, renderer)

        mid = renderer.height // 2
        assert _row(renderer, mid - 1).strip() == WIN_MESSAGE
        assert _row(renderer, mid + 1).strip() == PLAY_AGAIN_MESSAGE
        assert renderer.buffer.front[mid - 1][(40 - len(WIN_MESSAGE)) // 2].bold


class TestSetup:
    def test_default_args(self):
        args = parse_args([])
        assert args.seed is None
        assert args.log_file is None
        assert args.log_level == "INFO"

    def test_seed_arg(self):
        assert parse_args(["--seed", "7"]).seed == 7

    def test_log_file_sink(self, tmp_path, rng, clock):
        from grid_arena.game import GameSession

        log_path = tmp_path / "arena.log"
        try:
            configure_logging(str(log_path), "DEBUG")
            session = GameSession(rng=rng, clock=clock)
            session.start_game()
            logger.remove()
            text = log_path.read_text()
        finally:
            logger.remove()
            logger.add(sys.stderr)

        assert "session started with 10 enemies" in text
        assert "spawned 10 enemies" in text
