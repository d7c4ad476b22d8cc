"""
core/stats.py — Cross-session statistics for Hexa.

StatsAggregate is the flat record shown on the statistics screen. It is
loaded once at startup, folded with each finished session's outcome, and
written back immediately after every fold.

Fold rules (fold_outcome):
    games_played += 1, total_score += score, high_score = max(...)
    won  → wins += 1, current_streak += 1, best_time may improve
    lost → current_streak = 0

The persisted field names are camelCase and must stay stable across
versions; to_record() / from_record() are the only places that know them.

Usage:
    recorder = StatsRecorder(store)
    recorder.load()
    recorder.record(SessionOutcome(score=30, won=True))
    display = derive_display(recorder.aggregate)
"""

from __future__ import annotations
import logging
import math
from dataclasses import dataclass, replace
from typing import Any, Mapping

from core.session import SessionOutcome
from core.storage import JsonStore, StorageError
from settings import STATS_KEY, BEST_TIME_PLACEHOLDER

logger = logging.getLogger(__name__)

_FIELDS = {
    "games_played":   "gamesPlayed",
    "high_score":     "highScore",
    "total_score":    "totalScore",
    "wins":           "wins",
    "best_time":      "bestTime",
    "current_streak": "currentStreak",
}


@dataclass(frozen=True)
class StatsAggregate:
    """Cumulative statistics across every recorded session."""
    games_played:   int        = 0
    wins:           int        = 0
    total_score:    int        = 0
    high_score:     int        = 0
    current_streak: int        = 0
    best_time:      int | None = None

    def to_record(self) -> dict[str, Any]:
        return {key: getattr(self, attr) for attr, key in _FIELDS.items()}

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> StatsAggregate:
        """Build an aggregate from a persisted record.

        Missing or mistyped fields fall back to their defaults, and wins
        never exceeds games_played.
        """
        values: dict[str, Any] = {}
        for attr, key in _FIELDS.items():
            raw = record.get(key)
            if attr == "best_time":
                values[attr] = raw if _is_count(raw) and raw > 0 else None
            elif _is_count(raw):
                values[attr] = raw
            elif raw is not None:
                logger.warning("Ignoring invalid stats field %s=%r", key, raw)
        games, wins = values.get("games_played", 0), values.get("wins", 0)
        if wins > games:
            logger.warning("Clamping wins=%d to gamesPlayed=%d", wins, games)
            values["wins"] = games
        return cls(**values)


@dataclass(frozen=True)
class StatsDisplay:
    """Stats formatted for the statistics screen."""
    games_played:        int
    high_score:          int
    total_score:         int
    win_rate_percent:    int
    best_time_formatted: str
    current_streak:      int


def _is_count(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def fold_outcome(aggregate: StatsAggregate, outcome: SessionOutcome) -> StatsAggregate:
    """Return the aggregate with one more finished session folded in."""
    changes: dict[str, Any] = {
        "games_played": aggregate.games_played + 1,
        "total_score":  aggregate.total_score + outcome.score,
        "high_score":   max(aggregate.high_score, outcome.score),
    }
    if outcome.won:
        changes["wins"] = aggregate.wins + 1
        changes["current_streak"] = aggregate.current_streak + 1
        elapsed = outcome.elapsed_time
        if elapsed and (not aggregate.best_time or elapsed < aggregate.best_time):
            changes["best_time"] = elapsed
    else:
        changes["current_streak"] = 0
    return replace(aggregate, **changes)


def format_time(seconds: int) -> str:
    """Render whole seconds as zero-padded mm:ss."""
    mins, secs = divmod(seconds, 60)
    return f"{mins:02d}:{secs:02d}"


def derive_display(aggregate: StatsAggregate) -> StatsDisplay:
    """Compute the values shown on the statistics screen.

    Win rate rounds half up, and is 0 before the first game.
    """
    if aggregate.games_played > 0:
        win_rate = math.floor(aggregate.wins / aggregate.games_played * 100 + 0.5)
    else:
        win_rate = 0
    best = format_time(aggregate.best_time) if aggregate.best_time else BEST_TIME_PLACEHOLDER
    return StatsDisplay(
        games_played=aggregate.games_played,
        high_score=aggregate.high_score,
        total_score=aggregate.total_score,
        win_rate_percent=win_rate,
        best_time_formatted=best,
        current_streak=aggregate.current_streak,
    )


class StatsRecorder:
    """Owns the live aggregate and keeps the store in sync with it.

    Attributes:
        aggregate: Current aggregate. Zero-valued until load() is called.
        _store:    Key-value store the aggregate is persisted in.
    """

    def __init__(self, store: JsonStore) -> None:
        self._store = store
        self.aggregate: StatsAggregate = StatsAggregate()

    def load(self) -> StatsAggregate:
        """Load the persisted aggregate, or zero defaults if unavailable."""
        try:
            record = self._store.get(STATS_KEY)
        except StorageError as exc:
            logger.warning("Could not load stats, using defaults: %s", exc)
            record = None
        if isinstance(record, Mapping):
            self.aggregate = StatsAggregate.from_record(record)
        else:
            if record is not None:
                logger.warning("Ignoring malformed stats record %r", record)
            self.aggregate = StatsAggregate()
        return self.aggregate

    def record(self, outcome: SessionOutcome) -> StatsAggregate:
        """Fold outcome into the aggregate and persist it.

        A failed write is logged; the in-memory aggregate still advances.
        """
        self.aggregate = fold_outcome(self.aggregate, outcome)
        logger.info(
            "Recorded session score=%d won=%s (games=%d, streak=%d)",
            outcome.score, outcome.won,
            self.aggregate.games_played, self.aggregate.current_streak,
        )
        try:
            self._store.set(STATS_KEY, self.aggregate.to_record())
        except StorageError as exc:
            logger.error("Could not save stats: %s", exc)
        return self.aggregate
