"""
core/game.py — Screen state machine for Hexa.

Game is the presentation layer: it owns the top-level screen enum, turns
pygame input into engine calls, and draws whatever the engine's snapshot
says. All game rules live in core/engine.py; Game only keeps the purely
visual per-cell flags (correct highlight, shake, frozen).

States:
    MENU      — title screen with PLAY / STATS buttons
    PLAYING   — active session
    GAMEOVER  — final score over the last board
    STATS     — cross-session statistics

Transitions:
    MENU      → PLAYING   : player clicks PLAY
    MENU      → STATS     : player clicks STATS
    PLAYING   → GAMEOVER  : the engine ends the session (time ran out)
    PLAYING   → MENU      : player presses Esc (session ends and is recorded)
    GAMEOVER  → MENU      : player clicks MENU
    STATS     → MENU      : player clicks BACK or presses Esc

game.py does NOT call pygame.display.flip() or manage the window.
That is main.py's responsibility.
"""

from __future__ import annotations
import logging
import math
import random
from enum import Enum, auto

import pygame

from core.config import GameConfig
from core.engine import SessionEngine
from core.session import PowerUp, Signal, SessionSnapshot
from core.stats import StatsRecorder, derive_display
from core.storage import JsonStore
from core.theme import load_theme, save_theme, next_theme, theme_colors
from renderer import ui
from renderer.hexboard import HexLayout, draw_board, draw_pattern_indicator
from settings import (
    COLOR, SCREEN_W, SCREEN_H, HEADER_H, INDICATOR_H, POWER_UP_BTN_H,
    HEX_RADIUS, INDICATOR_RADIUS, SHAKE_DURATION_S,
)

logger = logging.getLogger(__name__)


class GameState(Enum):
    """Top-level screen states."""
    MENU     = auto()
    PLAYING  = auto()
    GAMEOVER = auto()
    STATS    = auto()


class Game:
    """Connects input, the session engine, the stats recorder and rendering.

    Attributes:
        state:         Current GameState.
        engine:        The session engine (one per Game).
        recorder:      Stats recorder fed by the engine on every session end.
        theme:         Active theme index.
        config:        Configuration passed to every new session.
        _store:        Key-value store shared by stats and theme.
        _board:        Layout of the clickable board.
        _indicator:    Layout of the pattern indicator strip.
        _selected:     Cell shown as a correct pick until the next pattern.
        _shake_cell:   Cell currently shaking after a wrong pick.
        _shake_timer:  Seconds of shake left.
        _frozen:       Cells drawn frozen. Cleared by THAW and new patterns.
        _pattern_id:   Pattern the visual flags belong to.
        _time:         Accumulated seconds, drives the shake wobble.
    """

    def __init__(
        self,
        store: JsonStore,
        config: GameConfig | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """Load stats and theme, and build the engine. Call start_menu() next."""
        self._store = store
        self.config: GameConfig = config if config is not None else GameConfig()
        self.recorder = StatsRecorder(store)
        self.recorder.load()
        self.theme: int = load_theme(store)
        self.engine = SessionEngine(recorder=self.recorder, rng=rng)
        self.state: GameState = GameState.MENU

        board_top = HEADER_H + INDICATOR_H
        board_bottom = SCREEN_H - POWER_UP_BTN_H - 32
        self._board = HexLayout(SCREEN_W / 2, (board_top + board_bottom) / 2,
                                HEX_RADIUS, count=self.config.board_size)
        self._indicator = HexLayout(SCREEN_W / 2, HEADER_H + INDICATOR_H / 2,
                                    INDICATOR_RADIUS, gap=2, count=self.config.board_size)

        self._selected:    int | None = None
        self._shake_cell:  int | None = None
        self._shake_timer: float      = 0.0
        self._frozen:      set[int]   = set()
        self._pattern_id:  int        = 0
        self._time:        float      = 0.0

    # ── State transitions ─────────────────────────────────────────────────────

    def start_menu(self) -> None:
        self.state = GameState.MENU

    def start_game(self) -> None:
        """Start a fresh session and switch to PLAYING."""
        snapshot = self.engine.start(self.config)
        self._reset_cell_flags(snapshot)
        self.state = GameState.PLAYING

    def show_stats(self) -> None:
        self.state = GameState.STATS

    def quit_session(self) -> None:
        """End the running session (it is recorded) and go back to the menu."""
        self.engine.end()
        self.start_menu()

    def cycle_theme(self) -> None:
        self.theme = next_theme(self.theme)
        save_theme(self._store, self.theme)
        logger.debug("Theme switched to %d", self.theme)

    # ── Per-frame update ──────────────────────────────────────────────────────

    def update(self, dt: float) -> None:
        """Advance the engine and the visual timers by dt seconds."""
        self._time += dt
        if self.state is not GameState.PLAYING:
            return

        if self._shake_timer > 0.0:
            self._shake_timer = max(0.0, self._shake_timer - dt)
            if self._shake_timer == 0.0:
                self._shake_cell = None

        outcome = self.engine.update(dt)
        self._sync_pattern(self.engine.snapshot())
        if outcome is not None:
            logger.info("Game over, final score %d", outcome.score)
            self.state = GameState.GAMEOVER

    # ── Input ─────────────────────────────────────────────────────────────────

    def handle_event(self, event: pygame.event.Event) -> None:
        """Route a single pygame event to the current screen's handler.

        Args:
            event: A pygame event with pos in game coordinates.
        """
        if self.state is GameState.MENU:
            self._handle_menu_event(event)

        elif self.state is GameState.PLAYING:
            self._handle_playing_event(event)

        elif self.state is GameState.GAMEOVER:
            if _is_click(event) and ui.game_over_button_rect().collidepoint(event.pos):
                self.start_menu()

        elif self.state is GameState.STATS:
            if _is_click(event) and ui.back_button_rect().collidepoint(event.pos):
                self.start_menu()
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                self.start_menu()

    def _handle_menu_event(self, event: pygame.event.Event) -> None:
        if _is_click(event):
            rects = ui.menu_rects()
            if rects["play"].collidepoint(event.pos):
                self.start_game()
            elif rects["stats"].collidepoint(event.pos):
                self.show_stats()
        elif event.type == pygame.KEYDOWN and event.key == pygame.K_t:
            self.cycle_theme()

    def _handle_playing_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            self.quit_session()
            return
        if not _is_click(event):
            return

        for kind, rect in ui.power_up_rects().items():
            if rect.collidepoint(event.pos):
                self._use_power_up(kind)
                return

        cell = self._board.hit_test(*event.pos)
        if cell is not None:
            self._select(cell)

    def _select(self, cell: int) -> None:
        snapshot, signal = self.engine.select(cell)
        if signal is Signal.CORRECT:
            self._selected = cell
        elif signal is Signal.INCORRECT:
            self._shake_cell = cell
            self._shake_timer = SHAKE_DURATION_S
        if not snapshot.running:
            self.state = GameState.GAMEOVER

    def _use_power_up(self, kind: PowerUp) -> None:
        before = self.engine.snapshot().power_up_count(kind)
        snapshot = self.engine.use_power_up(kind)
        if kind is PowerUp.THAW and snapshot.power_up_count(kind) < before:
            self._frozen.clear()
        self._sync_pattern(snapshot)

    # ── Visual flags ──────────────────────────────────────────────────────────

    def _sync_pattern(self, snapshot: SessionSnapshot) -> None:
        if snapshot.pattern_id != self._pattern_id:
            self._reset_cell_flags(snapshot)

    def _reset_cell_flags(self, snapshot: SessionSnapshot) -> None:
        self._pattern_id = snapshot.pattern_id
        self._selected = None
        self._frozen.clear()

    def _shake_offset(self) -> float:
        if self._shake_timer <= 0.0:
            return 0.0
        fade = self._shake_timer / SHAKE_DURATION_S
        return 6.0 * fade * math.sin(self._time * 60.0)

    # ── Rendering ─────────────────────────────────────────────────────────────

    def render(self, surface: pygame.Surface) -> None:
        """Draw the current screen onto the game surface."""
        surface.fill(COLOR["background"])

        if self.state is GameState.MENU:
            swatch = list(theme_colors(self.theme).values())
            ui.draw_menu(surface, swatch)

        elif self.state in (GameState.PLAYING, GameState.GAMEOVER):
            self._render_playing(surface)
            if self.state is GameState.GAMEOVER:
                ui.draw_game_over(surface, self.engine.state.score)

        elif self.state is GameState.STATS:
            ui.draw_stats(surface, derive_display(self.recorder.aggregate))

    def _render_playing(self, surface: pygame.Surface) -> None:
        snapshot = self.engine.snapshot()
        palette = theme_colors(self.theme)
        colors = [palette.get(name, COLOR["tile"]) for name in snapshot.board]

        ui.draw_header(surface, snapshot.time_remaining, snapshot.score)
        draw_pattern_indicator(surface, self._indicator, snapshot.target)
        draw_board(
            surface, self._board, colors,
            selected=self._selected,
            shaken=self._shake_cell,
            shake_offset=self._shake_offset(),
            frozen=frozenset(self._frozen),
        )
        ui.draw_power_ups(surface, snapshot.power_ups)


def _is_click(event: pygame.event.Event) -> bool:
    return event.type == pygame.MOUSEBUTTONDOWN and getattr(event, "button", 0) == 1
