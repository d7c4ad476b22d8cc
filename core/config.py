"""
core/config.py — Session configuration and data-dir lookup for Hexa.

GameConfig is what the presentation layer passes to SessionEngine.start().
Every field defaults to the constants in settings.py, so GameConfig() is
the standard game; tests build shorter or smaller sessions by overriding
single fields:

    GameConfig(initial_time=1)
    GameConfig(initial_power_ups={PowerUp.SKIP: 0})
"""

from __future__ import annotations
import os
from dataclasses import dataclass, field
from pathlib import Path

from core.session import PowerUp
from settings import (
    BOARD_SIZE, INITIAL_TIME_S, PALETTE, INITIAL_POWER_UPS,
    DATA_DIR_ENV, DATA_DIR_DEFAULT, STORE_FILENAME,
)


def _default_power_ups() -> dict[PowerUp, int]:
    return {PowerUp(kind): count for kind, count in INITIAL_POWER_UPS.items()}


@dataclass(frozen=True)
class GameConfig:
    """Parameters for one session.

    Attributes:
        board_size:        Number of cells on the board.
        initial_time:      Starting countdown in whole seconds.
        palette:           Color identifiers cells are drawn from.
        initial_power_ups: Starting uses per power-up kind. Missing kinds
                           start at zero.
    """
    board_size:        int                = BOARD_SIZE
    initial_time:      int                = INITIAL_TIME_S
    palette:           tuple[str, ...]    = PALETTE
    initial_power_ups: dict[PowerUp, int] = field(default_factory=_default_power_ups)

    def __post_init__(self) -> None:
        if self.board_size <= 0:
            raise ValueError(f"board_size must be positive, got {self.board_size}")
        if not self.palette:
            raise ValueError("palette must contain at least one color")
        for kind, count in self.initial_power_ups.items():
            if count < 0:
                raise ValueError(f"initial count for {kind} must be >= 0, got {count}")

    def power_up_counts(self) -> dict[PowerUp, int]:
        """Return a fresh per-session copy with every kind present."""
        counts = {kind: 0 for kind in PowerUp}
        for kind, count in self.initial_power_ups.items():
            counts[PowerUp(kind)] = count
        return counts


def data_dir() -> Path:
    """Return the directory the key-value store lives in.

    Honors the HEXA_DATA_DIR environment variable, falling back to ~/.hexa.
    """
    raw = os.getenv(DATA_DIR_ENV, "").strip() or DATA_DIR_DEFAULT
    return Path(raw).expanduser()


def store_path() -> Path:
    """Return the full path of the JSON store file."""
    return data_dir() / STORE_FILENAME
