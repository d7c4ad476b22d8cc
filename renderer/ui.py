"""
renderer/ui.py — Screen chrome rendering for Hexa.

Draws every non-board element:
    - Header bar (time left + score)
    - Power-up buttons with remaining counts
    - Main menu, statistics screen, game over overlay

All functions are stateless — they take explicit data arguments and draw
to the provided surface. Every clickable element also has a *_rect(s)()
function, so game.py can hit-test input without rendering a frame.

Coordinate system: native 360x640 game space.
"""

from __future__ import annotations
import pygame
from typing import Mapping

from core.session import PowerUp
from core.stats import StatsDisplay
from settings import (
    SCREEN_W, SCREEN_H,
    HEADER_H, POWER_UP_BTN_H, POWER_UP_BTN_GAP, MENU_BTN_W, MENU_BTN_H,
    COLOR, TITLE,
    FONT_FAMILY, FONT_SIZE_XL, FONT_SIZE_LG, FONT_SIZE_MD, FONT_SIZE_SM,
)
from utils.color import RGBColor

_POWER_UP_LABELS = {
    PowerUp.TIME: "+TIME",
    PowerUp.SKIP: "SKIP",
    PowerUp.THAW: "THAW",
}

# ── Font cache ────────────────────────────────────────────────────────────────
_fonts: dict[int, pygame.font.Font] = {}


def _font(size: int) -> pygame.font.Font:
    if size not in _fonts:
        _fonts[size] = pygame.font.SysFont(FONT_FAMILY, size)
    return _fonts[size]


def _button(surface: pygame.Surface, rect: pygame.Rect, label: str,
            fill: RGBColor, text_color: RGBColor, size: int = FONT_SIZE_LG) -> None:
    pygame.draw.rect(surface, fill, rect, border_radius=8)
    pygame.draw.rect(surface, COLOR["tile_border"], rect, 1, border_radius=8)
    text = _font(size).render(label, True, text_color)
    surface.blit(text, (rect.centerx - text.get_width() // 2,
                        rect.centery - text.get_height() // 2))


def _centred(surface: pygame.Surface, text: str, size: int, color: RGBColor, y: int) -> None:
    rendered = _font(size).render(text, True, color)
    surface.blit(rendered, (SCREEN_W // 2 - rendered.get_width() // 2, y))


# ── Header ────────────────────────────────────────────────────────────────────

def draw_header(surface: pygame.Surface, time_remaining: int, score: int) -> None:
    """Draw the top bar: seconds left on the left, score on the right.

    Negative time never shows; the session has already ended by then.
    """
    pygame.draw.rect(surface, COLOR["chrome"], (0, 0, SCREEN_W, HEADER_H))

    label_font = _font(FONT_SIZE_SM)
    value_font = _font(FONT_SIZE_XL)

    surface.blit(label_font.render("TIME", True, COLOR["tile"]), (16, 12))
    time_color = COLOR["fail"] if time_remaining <= 5 else COLOR["text_light"]
    surface.blit(value_font.render(str(max(0, time_remaining)), True, time_color), (16, 30))

    score_label = label_font.render("SCORE", True, COLOR["tile"])
    score_value = value_font.render(str(score), True, COLOR["text_light"])
    surface.blit(score_label, (SCREEN_W - score_label.get_width() - 16, 12))
    surface.blit(score_value, (SCREEN_W - score_value.get_width() - 16, 30))


# ── Power-ups ─────────────────────────────────────────────────────────────────

def power_up_rects() -> dict[PowerUp, pygame.Rect]:
    """Return the button rect of every power-up, left to right."""
    kinds = list(PowerUp)
    margin = 16
    btn_w = (SCREEN_W - 2 * margin - (len(kinds) - 1) * POWER_UP_BTN_GAP) // len(kinds)
    y = SCREEN_H - POWER_UP_BTN_H - margin
    return {
        kind: pygame.Rect(margin + i * (btn_w + POWER_UP_BTN_GAP), y, btn_w, POWER_UP_BTN_H)
        for i, kind in enumerate(kinds)
    }


def draw_power_ups(surface: pygame.Surface, counts: Mapping[PowerUp, int]) -> None:
    """Draw one button per power-up along the bottom edge.

    Buttons with no uses left are drawn greyed out; game.py still forwards
    their clicks, the engine ignores them.
    """
    for kind, rect in power_up_rects().items():
        count = counts.get(kind, 0)
        if count > 0:
            _button(surface, rect, _POWER_UP_LABELS[kind], COLOR["tile"], COLOR["text"], FONT_SIZE_MD)
        else:
            _button(surface, rect, _POWER_UP_LABELS[kind], COLOR["disabled"], COLOR["chrome"], FONT_SIZE_MD)
        badge = _font(FONT_SIZE_SM).render(str(count), True, COLOR["chrome"])
        surface.blit(badge, (rect.right - badge.get_width() - 6, rect.top + 4))


# ── Menu ──────────────────────────────────────────────────────────────────────

def menu_rects() -> dict[str, pygame.Rect]:
    """Return the menu button rects keyed "play" and "stats"."""
    x = SCREEN_W // 2 - MENU_BTN_W // 2
    return {
        "play":  pygame.Rect(x, 290, MENU_BTN_W, MENU_BTN_H),
        "stats": pygame.Rect(x, 290 + MENU_BTN_H + 16, MENU_BTN_W, MENU_BTN_H),
    }


def draw_menu(surface: pygame.Surface, theme_swatch: list[RGBColor]) -> None:
    """Draw the main menu.

    Args:
        surface:      Native game surface.
        theme_swatch: Colors of the active theme, shown as a strip.
    """
    _centred(surface, TITLE.upper(), 42, COLOR["text"], 150)
    _centred(surface, "Match the highlighted hex", FONT_SIZE_MD, COLOR["chrome"], 210)
    _centred(surface, "Tap the board hex lit in the small flower.", FONT_SIZE_SM, COLOR["chrome"], 236)
    _centred(surface, "Hit +2s, miss -2s. Play until time runs out.", FONT_SIZE_SM, COLOR["chrome"], 254)

    rects = menu_rects()
    _button(surface, rects["play"], "PLAY", COLOR["highlight"], COLOR["text_light"])
    _button(surface, rects["stats"], "STATS", COLOR["tile"], COLOR["text"])

    sw = 28
    x0 = SCREEN_W // 2 - (len(theme_swatch) * sw) // 2
    for i, color in enumerate(theme_swatch):
        pygame.draw.rect(surface, color, (x0 + i * sw, 470, sw, sw))
    _centred(surface, "T: change theme", FONT_SIZE_SM, COLOR["chrome"], 506)


# ── Statistics ────────────────────────────────────────────────────────────────

def back_button_rect() -> pygame.Rect:
    return pygame.Rect(SCREEN_W // 2 - MENU_BTN_W // 2, SCREEN_H - 100, MENU_BTN_W, MENU_BTN_H)


def draw_stats(surface: pygame.Surface, stats: StatsDisplay) -> None:
    """Draw the statistics cards and the BACK button."""
    _centred(surface, "STATISTICS", FONT_SIZE_XL, COLOR["text"], 60)

    cards = [
        ("Games Played", str(stats.games_played)),
        ("High Score",   str(stats.high_score)),
        ("Total Score",  str(stats.total_score)),
        ("Win Rate",     f"{stats.win_rate_percent}%"),
        ("Best Time",    stats.best_time_formatted),
        ("Streak",       str(stats.current_streak)),
    ]
    card_w, card_h, gap = 150, 80, 12
    x0 = (SCREEN_W - 2 * card_w - gap) // 2
    for i, (label, value) in enumerate(cards):
        col, row = i % 2, i // 2
        rect = pygame.Rect(x0 + col * (card_w + gap), 130 + row * (card_h + gap), card_w, card_h)
        pygame.draw.rect(surface, COLOR["tile"], rect, border_radius=8)
        pygame.draw.rect(surface, COLOR["tile_border"], rect, 1, border_radius=8)
        val = _font(FONT_SIZE_XL).render(value, True, COLOR["highlight"])
        lab = _font(FONT_SIZE_SM).render(label, True, COLOR["chrome"])
        surface.blit(val, (rect.centerx - val.get_width() // 2, rect.top + 14))
        surface.blit(lab, (rect.centerx - lab.get_width() // 2, rect.bottom - 22))

    back = back_button_rect()
    _button(surface, back, "BACK", COLOR["tile"], COLOR["text"])


# ── Game over ─────────────────────────────────────────────────────────────────

def game_over_button_rect() -> pygame.Rect:
    return pygame.Rect(SCREEN_W // 2 - MENU_BTN_W // 2, 320, MENU_BTN_W, MENU_BTN_H)


def draw_game_over(surface: pygame.Surface, score: int) -> None:
    """Dim the board, show the final score and the MENU button."""
    overlay = pygame.Surface((SCREEN_W, SCREEN_H), pygame.SRCALPHA)
    overlay.fill((33, 33, 33, 200))
    surface.blit(overlay, (0, 0))

    _centred(surface, "GAME OVER", FONT_SIZE_XL, COLOR["fail"], 190)
    _centred(surface, f"Final Score: {score}", FONT_SIZE_LG, COLOR["tile"], 240)

    _button(surface, game_over_button_rect(), "MENU", COLOR["highlight"], COLOR["text_light"])
