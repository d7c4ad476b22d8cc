"""
core/session.py — Session state types for Hexa.

SessionState holds every mutable value of one play session:
    - Time remaining and elapsed ticks
    - Score
    - Current target index and board colors
    - Remaining power-up uses
    - Lifecycle status (IDLE → RUNNING → ENDED)

SessionState does NOT own the clock, the pattern generator, or any
rendering. It is a plain data container; core/engine.py is its only
writer and hands out frozen SessionSnapshot copies to everyone else.

Usage:
    state = SessionState(time_remaining=18, power_ups={PowerUp.TIME: 5})
    snap  = state.snapshot()
    snap.time_remaining   # read-only view for the presentation layer
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, auto
from types import MappingProxyType
from typing import Mapping


class Status(Enum):
    """Session lifecycle. ENDED is terminal."""
    IDLE    = auto()
    RUNNING = auto()
    ENDED   = auto()


class PowerUp(str, Enum):
    """Consumable power-up kinds. Values double as config / UI keys."""
    TIME = "time"
    SKIP = "skip"
    THAW = "thaw"


class Signal(Enum):
    """Feedback emitted by a selection."""
    CORRECT   = auto()
    INCORRECT = auto()


@dataclass(frozen=True)
class SessionOutcome:
    """Final result of a session, handed to the stats recorder.

    Attributes:
        score:        Final score.
        won:          True when the session scored anything at all.
        elapsed_time: Optional duration in seconds used for best-time tracking.
    """
    score:        int
    won:          bool
    elapsed_time: int | None = None


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only copy of SessionState taken after each mutating call."""
    status:         Status
    time_remaining: int
    score:          int
    target:         int
    board:          tuple[str, ...]
    power_ups:      Mapping[PowerUp, int]
    pattern_id:     int
    elapsed:        int

    @property
    def running(self) -> bool:
        return self.status is Status.RUNNING

    def power_up_count(self, kind: PowerUp) -> int:
        return self.power_ups.get(kind, 0)


@dataclass
class SessionState:
    """Mutable game state for one session.

    Attributes:
        time_remaining: Seconds left. May dip below zero for an instant
                        before the end check runs.
        score:          Cumulative score. Only ever increases.
        target:         Index of the cell the player must pick.
        board:          Palette color name per cell.
        power_ups:      Remaining uses per PowerUp kind.
        status:         Lifecycle status.
        pattern_id:     Bumped on every regeneration so the presentation can
                        drop per-cell flags belonging to the old pattern.
        elapsed:        Clock ticks processed this session.
    """
    time_remaining: int                  = 0
    score:          int                  = 0
    target:         int                  = 0
    board:          list[str]            = field(default_factory=list)
    power_ups:      dict[PowerUp, int]   = field(default_factory=dict)
    status:         Status               = Status.IDLE
    pattern_id:     int                  = 0
    elapsed:        int                  = 0

    def snapshot(self) -> SessionSnapshot:
        """Return a frozen copy safe to hand to observers."""
        return SessionSnapshot(
            status=self.status,
            time_remaining=self.time_remaining,
            score=self.score,
            target=self.target,
            board=tuple(self.board),
            power_ups=MappingProxyType(dict(self.power_ups)),
            pattern_id=self.pattern_id,
            elapsed=self.elapsed,
        )
