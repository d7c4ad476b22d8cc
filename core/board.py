"""
core/board.py — Random pattern generator for Hexa.

A pattern is one round's worth of board data: the target index shown on
the pattern indicator and the palette color of every cell. The generator
applies two independent uniform draws per round:

    1. Target — one index from [0, board_size).
    2. Colors — one palette entry per cell, each drawn on its own.

The colors do not encode the target; a cell matches because of its
position alone. engine.py calls generate() once per round and copies the
result into SessionState.

Design note:
    The generator takes an injectable random.Random so tests can seed it.
    Without one it creates its own unseeded instance.
"""

from __future__ import annotations
import random
from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class Board:
    """One generated pattern.

    Attributes:
        target: Index of the matching cell.
        colors: Palette color name per cell, len == board size.
    """
    target: int
    colors: tuple[str, ...]


class PatternGenerator:
    """Uniform random target and color selection.

    Attributes:
        board_size: Number of cells per board.
        palette:    Color identifiers to draw from.
        _rng:       Random source. Defaults to a fresh unseeded instance.
    """

    def __init__(
        self,
        board_size: int,
        palette: Sequence[str],
        rng: random.Random | None = None,
    ) -> None:
        self.board_size = board_size
        self.palette = tuple(palette)
        self._rng = rng if rng is not None else random.Random()

    def generate(self) -> Board:
        """Return a fresh board. Never fails for a valid configuration.

        Returns:
            A Board with target in [0, board_size) and board_size colors.
        """
        target = self._rng.randrange(self.board_size)
        colors = tuple(self._rng.choice(self.palette) for _ in range(self.board_size))
        return Board(target=target, colors=colors)
