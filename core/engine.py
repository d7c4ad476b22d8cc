"""
core/engine.py — Session state machine for Hexa.

SessionEngine is the only writer of SessionState. It owns the per-session
subsystems:
    - PatternGenerator (target + board colors per round)
    - TickClock        (1 Hz countdown, exactly one per engine)
    - Continuation     (delayed regeneration after a correct match)

States (core.session.Status):
    IDLE     — no session started yet
    RUNNING  — clock counting, input accepted
    ENDED    — terminal; every event is a no-op until the next start()

Transitions:
    IDLE/ENDED/RUNNING → RUNNING : start()
    RUNNING            → ENDED   : time reaches zero (tick or mismatch), end()

Events arrive one at a time through the public methods or through
dispatch(), which maps a command object onto them and reports what changed.
Invalid input (out-of-range cell, depleted power-up, events after the end)
is silently ignored.

When a session ends the engine hands a SessionOutcome to the stats recorder
exactly once, and stops both the clock and any pending regeneration.

Usage:
    engine = SessionEngine(recorder=recorder)
    engine.start(GameConfig())

    # each frame:
    outcome = engine.update(dt)

    # on input:
    snapshot, signal = engine.select(cell_index)
    engine.use_power_up(PowerUp.SKIP)
"""

from __future__ import annotations
import logging
import random
from dataclasses import dataclass
from typing import Union

from core.board import PatternGenerator
from core.clock import TickClock, Continuation
from core.config import GameConfig
from core.session import (
    SessionState, SessionSnapshot, SessionOutcome, Status, PowerUp, Signal,
)
from core.stats import StatsRecorder
from settings import (
    MATCH_SCORE, MATCH_BONUS_S, MISS_PENALTY_S, TIME_POWER_UP_S,
    REGENERATE_DELAY_S, TICK_INTERVAL_S,
)

logger = logging.getLogger(__name__)


# ── Commands ──────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Start:
    config: GameConfig | None = None


@dataclass(frozen=True)
class Select:
    cell: int


@dataclass(frozen=True)
class UsePowerUp:
    kind: PowerUp


@dataclass(frozen=True)
class Tick:
    pass


@dataclass(frozen=True)
class Advance:
    dt: float


@dataclass(frozen=True)
class End:
    pass


Command = Union[Start, Select, UsePowerUp, Tick, Advance, End]


@dataclass(frozen=True)
class StepResult:
    """What one dispatched command did.

    Attributes:
        snapshot: Session state after the command.
        signal:   Selection feedback, only set by Select.
        outcome:  Set when this command ended the session.
    """
    snapshot: SessionSnapshot
    signal:   Signal | None         = None
    outcome:  SessionOutcome | None = None


# ── Engine ────────────────────────────────────────────────────────────────────

class SessionEngine:
    """Owns one SessionState at a time and applies every game event to it.

    Attributes:
        state:        The live (or last finished) session.
        config:       Configuration of the current session.
        last_outcome: Outcome of the most recently ended session, or None.
        _recorder:    Stats recorder that receives each outcome, optional.
        _rng:         Random source shared by every session's generator.
        _generator:   Pattern generator for the current session.
        _clock:       The one tick clock. Restarted by start(), stopped by end().
        _pending:     Delayed regeneration scheduled by a correct match.
    """

    def __init__(
        self,
        recorder: StatsRecorder | None = None,
        rng: random.Random | None = None,
        tick_interval: float = TICK_INTERVAL_S,
    ) -> None:
        self.state:        SessionState          = SessionState()
        self.config:       GameConfig            = GameConfig()
        self.last_outcome: SessionOutcome | None = None
        self._recorder  = recorder
        self._rng       = rng if rng is not None else random.Random()
        self._generator = PatternGenerator(self.config.board_size, self.config.palette, self._rng)
        self._clock     = TickClock(tick_interval)
        self._pending   = Continuation()

    # ── Reads ─────────────────────────────────────────────────────────────────

    def snapshot(self) -> SessionSnapshot:
        return self.state.snapshot()

    @property
    def running(self) -> bool:
        return self.state.status is Status.RUNNING

    @property
    def clock_running(self) -> bool:
        return self._clock.running

    @property
    def regeneration_pending(self) -> bool:
        return self._pending.pending

    # ── Lifecycle ─────────────────────────────────────────────────────────────

    def start(self, config: GameConfig | None = None) -> SessionSnapshot:
        """Begin a fresh session, replacing any session still in progress.

        The previous session's clock and pending regeneration are stopped
        before the new state is built, so exactly one clock ever runs. The
        replaced session is not recorded.

        Args:
            config: Session parameters. Defaults to GameConfig().

        Returns:
            Snapshot of the new RUNNING session with its first pattern.
        """
        self._clock.stop()
        self._pending.cancel()
        if self.running:
            logger.debug("Discarding running session (score=%d)", self.state.score)

        self.config = config if config is not None else GameConfig()
        self._generator = PatternGenerator(self.config.board_size, self.config.palette, self._rng)
        self.state = SessionState(
            time_remaining=self.config.initial_time,
            power_ups=self.config.power_up_counts(),
            status=Status.RUNNING,
        )
        self.last_outcome = None
        self.generate_pattern()
        self._clock.start()
        logger.debug(
            "Session started: board=%d time=%d power_ups=%s",
            self.config.board_size, self.state.time_remaining,
            {kind.value: n for kind, n in self.state.power_ups.items()},
        )
        return self.snapshot()

    def end(self) -> SessionOutcome | None:
        """Finish the running session and record it.

        Idempotent: on a session that is not RUNNING nothing happens.

        Returns:
            The new outcome, or None if there was nothing to end.
        """
        if not self.running:
            return None
        self.state.status = Status.ENDED
        self._clock.stop()
        self._pending.cancel()

        score = self.state.score
        outcome = SessionOutcome(score=score, won=score > 0)
        self.last_outcome = outcome
        logger.debug(
            "Session ended: score=%d time_remaining=%d elapsed=%d",
            score, self.state.time_remaining, self.state.elapsed,
        )
        if self._recorder is not None:
            self._recorder.record(outcome)
        return outcome

    # ── Rounds ────────────────────────────────────────────────────────────────

    def generate_pattern(self) -> None:
        """Draw a new target and board colors for the current session."""
        board = self._generator.generate()
        self.state.target = board.target
        self.state.board = list(board.colors)
        self.state.pattern_id += 1
        logger.debug("Pattern %d: target=%d", self.state.pattern_id, board.target)

    def _regenerate_if_running(self) -> None:
        if self.running:
            self.generate_pattern()

    # ── Events ────────────────────────────────────────────────────────────────

    def select(self, cell: int) -> tuple[SessionSnapshot, Signal | None]:
        """Apply the player's pick of one cell.

        A match scores, adds bonus time and schedules the next pattern after
        a short delay so the picked cell can be shown as correct. A mismatch
        costs time and may end the session on the spot.

        Args:
            cell: Index of the picked cell.

        Returns:
            (snapshot, signal). signal is None when the pick was ignored.
        """
        if not self.running or not 0 <= cell < self.config.board_size:
            return self.snapshot(), None

        if cell == self.state.target:
            self.state.score += MATCH_SCORE
            self.state.time_remaining += MATCH_BONUS_S
            self._pending.schedule(REGENERATE_DELAY_S, self._regenerate_if_running)
            return self.snapshot(), Signal.CORRECT

        self.state.time_remaining -= MISS_PENALTY_S
        if self.state.time_remaining <= 0:
            self.end()
        return self.snapshot(), Signal.INCORRECT

    def tick(self) -> SessionSnapshot:
        """Count down one second. Ends the session when time runs out."""
        if not self.running:
            return self.snapshot()
        self.state.time_remaining -= 1
        self.state.elapsed += 1
        if self.state.time_remaining <= 0:
            self.end()
        return self.snapshot()

    def use_power_up(self, kind: PowerUp | str) -> SessionSnapshot:
        """Spend one use of a power-up. Ignored when none are left.

        TIME adds ten seconds, SKIP regenerates the pattern immediately,
        THAW only consumes the use: frozen cells are a presentation flag.
        """
        try:
            kind = PowerUp(kind)
        except ValueError:
            logger.debug("Ignoring unknown power-up %r", kind)
            return self.snapshot()
        if not self.running or self.state.power_ups.get(kind, 0) <= 0:
            return self.snapshot()

        self.state.power_ups[kind] -= 1
        if kind is PowerUp.TIME:
            self.state.time_remaining += TIME_POWER_UP_S
        elif kind is PowerUp.SKIP:
            self.generate_pattern()
        logger.debug("Used %s power-up, %d left", kind.value, self.state.power_ups[kind])
        return self.snapshot()

    def update(self, dt: float) -> SessionOutcome | None:
        """Advance real time by dt seconds.

        Runs a due regeneration, then one tick() per whole elapsed second.

        Returns:
            The outcome if the session ended during this update.
        """
        if not self.running:
            return None
        self._pending.update(dt)
        for _ in range(self._clock.update(dt)):
            self.tick()
            if not self.running:
                return self.last_outcome
        return None

    # ── Dispatch ──────────────────────────────────────────────────────────────

    def dispatch(self, command: Command) -> StepResult:
        """Apply one command object and describe its effect.

        Raises:
            TypeError: If command is not one of the engine's command types.
        """
        was_running = self.running
        signal: Signal | None = None

        if isinstance(command, Start):
            self.start(command.config)
            was_running = True
        elif isinstance(command, Select):
            _, signal = self.select(command.cell)
        elif isinstance(command, UsePowerUp):
            self.use_power_up(command.kind)
        elif isinstance(command, Tick):
            self.tick()
        elif isinstance(command, Advance):
            self.update(command.dt)
        elif isinstance(command, End):
            self.end()
        else:
            raise TypeError(f"unknown command {command!r}")

        outcome = self.last_outcome if was_running and not self.running else None
        return StepResult(snapshot=self.snapshot(), signal=signal, outcome=outcome)
