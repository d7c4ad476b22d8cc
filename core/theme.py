"""
core/theme.py — Theme preference for Hexa.

A theme maps each palette color name to a concrete RGB color. The chosen
theme index is stored under THEME_KEY next to the stats record and
re-read at startup. Like the stats, a storage fault never stops the game:
reads fall back to DEFAULT_THEME and failed writes are logged.
"""

from __future__ import annotations
import logging

from core.storage import JsonStore, StorageError
from settings import THEMES, DEFAULT_THEME, PALETTE, THEME_KEY
from utils.color import RGBColor, from_hex

logger = logging.getLogger(__name__)


def theme_colors(index: int) -> dict[str, RGBColor]:
    """Return palette name → RGB for a theme, using the default if unknown."""
    hexes = THEMES[index] if 0 <= index < len(THEMES) else THEMES[DEFAULT_THEME]
    return {name: from_hex(code) for name, code in zip(PALETTE, hexes)}


def load_theme(store: JsonStore) -> int:
    try:
        raw = store.get(THEME_KEY)
    except StorageError as exc:
        logger.warning("Could not load theme, using default: %s", exc)
        return DEFAULT_THEME
    if raw is None:
        return DEFAULT_THEME
    try:
        index = int(raw)
    except (TypeError, ValueError):
        logger.warning("Ignoring invalid theme %r", raw)
        return DEFAULT_THEME
    if not 0 <= index < len(THEMES):
        logger.warning("Ignoring out-of-range theme %d", index)
        return DEFAULT_THEME
    return index


def save_theme(store: JsonStore, index: int) -> None:
    try:
        store.set(THEME_KEY, index)
    except StorageError as exc:
        logger.error("Could not save theme: %s", exc)


def next_theme(index: int) -> int:
    return (index + 1) % len(THEMES)
