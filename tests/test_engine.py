import random

import pytest

from core.config import GameConfig
from core.engine import (
    SessionEngine, Start, Select, UsePowerUp, Tick, Advance, End,
)
from core.session import PowerUp, Signal, Status
from settings import PALETTE, REGENERATE_DELAY_S


def _wrong_cell(engine: SessionEngine) -> int:
    return (engine.state.target + 1) % engine.config.board_size


def test_engine_starts_idle(engine):
    assert engine.state.status is Status.IDLE
    assert not engine.clock_running


def test_start_builds_running_session(engine):
    snap = engine.start(GameConfig())
    assert snap.status is Status.RUNNING
    assert snap.score == 0
    assert snap.time_remaining == 18
    assert 0 <= snap.target < 7
    assert len(snap.board) == 7
    assert all(color in PALETTE for color in snap.board)
    assert dict(snap.power_ups) == {PowerUp.TIME: 5, PowerUp.SKIP: 5, PowerUp.THAW: 0}
    assert snap.pattern_id == 1
    assert engine.clock_running


def test_snapshot_is_read_only(engine):
    snap = engine.start()
    with pytest.raises(TypeError):
        snap.power_ups[PowerUp.TIME] = 99
    assert isinstance(snap.board, tuple)


def test_correct_pick_scores_and_adds_time(engine):
    engine.start(GameConfig(initial_time=18))
    snap, signal = engine.select(engine.state.target)
    assert signal is Signal.CORRECT
    assert snap.score == 10
    assert snap.time_remaining == 20
    assert engine.regeneration_pending
    # Pattern stays visible until the delay has passed.
    assert snap.pattern_id == 1


def test_correct_pick_regenerates_after_delay(engine):
    engine.start()
    engine.select(engine.state.target)
    engine.update(REGENERATE_DELAY_S / 2)
    assert engine.state.pattern_id == 1
    engine.update(REGENERATE_DELAY_S / 2)
    assert engine.state.pattern_id == 2
    assert not engine.regeneration_pending
    assert 0 <= engine.state.target < 7


def test_wrong_pick_costs_time(engine):
    engine.start()
    snap, signal = engine.select(_wrong_cell(engine))
    assert signal is Signal.INCORRECT
    assert snap.time_remaining == 16
    assert snap.score == 0
    assert snap.status is Status.RUNNING


def test_wrong_pick_can_end_session_with_negative_time(engine, recorder):
    engine.start(GameConfig(initial_time=1))
    snap, signal = engine.select(_wrong_cell(engine))
    assert signal is Signal.INCORRECT
    assert snap.status is Status.ENDED
    assert snap.time_remaining == -1
    assert recorder.aggregate.games_played == 1
    assert not engine.clock_running


@pytest.mark.parametrize("cell", [-1, 7, 100])
def test_out_of_range_pick_is_ignored(engine, cell):
    before = engine.start()
    after, signal = engine.select(cell)
    assert signal is None
    assert after == before


def test_tick_counts_down(engine):
    engine.start()
    snap = engine.tick()
    assert snap.time_remaining == 17
    assert snap.elapsed == 1


def test_timeout_ends_and_records_loss(engine, recorder):
    engine.start(GameConfig(initial_time=1))
    snap = engine.tick()
    assert snap.status is Status.ENDED
    assert snap.time_remaining <= 0
    assert engine.last_outcome.score == 0
    assert engine.last_outcome.won is False
    assert recorder.aggregate.games_played == 1
    assert recorder.aggregate.current_streak == 0


def test_tick_after_end_is_suppressed(engine, recorder):
    engine.start(GameConfig(initial_time=1))
    engine.tick()
    snap = engine.tick()
    assert snap.time_remaining == 0
    assert recorder.aggregate.games_played == 1


def test_end_is_idempotent(engine, recorder):
    engine.start()
    engine.select(engine.state.target)
    first = engine.end()
    second = engine.end()
    assert first.score == 10 and first.won
    assert second is None
    assert recorder.aggregate.games_played == 1
    assert recorder.aggregate.wins == 1


def test_end_cancels_pending_regeneration(engine):
    engine.start()
    engine.select(engine.state.target)
    engine.end()
    assert not engine.regeneration_pending
    engine.update(1.0)
    assert engine.state.pattern_id == 1


def test_events_after_end_are_ignored(engine):
    engine.start(GameConfig(initial_time=1))
    engine.tick()
    before = engine.snapshot()
    assert engine.select(before.target) == (before, None)
    assert engine.use_power_up(PowerUp.TIME) == before


def test_time_power_up(engine):
    engine.start()
    snap = engine.use_power_up(PowerUp.TIME)
    assert snap.time_remaining == 28
    assert snap.power_up_count(PowerUp.TIME) == 4


def test_power_up_accepts_plain_names(engine):
    engine.start()
    snap = engine.use_power_up("skip")
    assert snap.power_up_count(PowerUp.SKIP) == 4


def test_unknown_power_up_is_ignored(engine):
    before = engine.start()
    assert engine.use_power_up("freeze") == before
    result = engine.dispatch(UsePowerUp("freeze"))
    assert result.snapshot == before
    assert result.outcome is None


def test_skip_power_up_regenerates_now(engine):
    engine.start()
    snap = engine.use_power_up(PowerUp.SKIP)
    assert snap.pattern_id == 2
    assert snap.power_up_count(PowerUp.SKIP) == 4
    assert snap.time_remaining == 18


def test_skip_without_uses_changes_nothing(engine):
    before = engine.start(GameConfig(initial_power_ups={PowerUp.SKIP: 0}))
    after = engine.use_power_up(PowerUp.SKIP)
    assert after.board == before.board
    assert after.target == before.target
    assert after.pattern_id == before.pattern_id
    assert after.power_up_count(PowerUp.SKIP) == 0


def test_thaw_only_consumes_a_use(engine):
    engine.start(GameConfig(initial_power_ups={PowerUp.THAW: 1}))
    before = engine.snapshot()
    after = engine.use_power_up(PowerUp.THAW)
    assert after.power_up_count(PowerUp.THAW) == 0
    assert after.time_remaining == before.time_remaining
    assert after.pattern_id == before.pattern_id
    assert engine.use_power_up(PowerUp.THAW) == after


def test_restart_replaces_session_without_recording(engine, recorder):
    engine.start()
    engine.select(engine.state.target)
    snap = engine.start(GameConfig(initial_time=30))
    assert snap.score == 0
    assert snap.time_remaining == 30
    assert not engine.regeneration_pending
    assert engine.clock_running
    assert recorder.aggregate.games_played == 0


def test_update_drives_clock(engine):
    engine.start()
    engine.update(0.5)
    assert engine.state.time_remaining == 18
    engine.update(0.5)
    assert engine.state.time_remaining == 17
    engine.update(2.0)
    assert engine.state.time_remaining == 15


def test_update_stops_ticking_at_end(engine):
    engine.start(GameConfig(initial_time=3))
    outcome = engine.update(10.0)
    assert outcome is not None
    assert outcome.won is False
    assert engine.state.time_remaining == 0
    assert engine.update(1.0) is None


def test_dispatch_reports_signal_and_outcome(engine):
    result = engine.dispatch(Start(GameConfig(initial_time=2)))
    assert result.snapshot.running and result.outcome is None

    result = engine.dispatch(Select(engine.state.target))
    assert result.signal is Signal.CORRECT

    result = engine.dispatch(UsePowerUp(PowerUp.TIME))
    assert result.snapshot.time_remaining == 14

    result = engine.dispatch(Tick())
    assert result.snapshot.time_remaining == 13

    result = engine.dispatch(Advance(1.0))
    assert result.snapshot.time_remaining == 12

    result = engine.dispatch(End())
    assert result.outcome is not None and result.outcome.score == 10
    assert engine.dispatch(End()).outcome is None


def test_dispatch_rejects_unknown_commands(engine):
    with pytest.raises(TypeError):
        engine.dispatch("select")


def test_time_changes_only_through_known_events(engine):
    rng = random.Random(7)
    engine.start(GameConfig(initial_time=500))
    for _ in range(300):
        action = rng.choice(["tick", "hit", "miss", "time", "skip", "advance"])
        time_before = engine.state.time_remaining
        elapsed_before = engine.state.elapsed
        if action == "tick":
            engine.tick()
            delta = -1
        elif action == "hit":
            engine.select(engine.state.target)
            delta = 2
        elif action == "miss":
            engine.select(_wrong_cell(engine))
            delta = -2
        elif action == "time":
            delta = 10 if engine.state.power_ups[PowerUp.TIME] > 0 else 0
            engine.use_power_up(PowerUp.TIME)
        elif action == "skip":
            engine.use_power_up(PowerUp.SKIP)
            delta = 0
        else:
            engine.update(0.3)
            delta = -(engine.state.elapsed - elapsed_before)
        assert engine.state.time_remaining == time_before + delta
    assert engine.running


def test_config_rejects_bad_values():
    with pytest.raises(ValueError):
        GameConfig(board_size=0)
    with pytest.raises(ValueError):
        GameConfig(palette=())
    with pytest.raises(ValueError):
        GameConfig(initial_power_ups={PowerUp.TIME: -1})
