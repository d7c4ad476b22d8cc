import json
from pathlib import Path

import pytest

from core.session import SessionOutcome
from core.stats import (
    StatsAggregate, StatsRecorder, derive_display, fold_outcome, format_time,
)
from core.storage import JsonStore
from settings import STATS_KEY


def test_fold_win_and_loss():
    agg = fold_outcome(StatsAggregate(), SessionOutcome(score=30, won=True))
    assert (agg.games_played, agg.wins, agg.total_score, agg.high_score, agg.current_streak) == (1, 1, 30, 30, 1)

    agg = fold_outcome(agg, SessionOutcome(score=0, won=False))
    assert (agg.games_played, agg.wins, agg.total_score, agg.high_score, agg.current_streak) == (2, 1, 30, 30, 0)


def test_ten_sessions_aggregate():
    scores = [0, 10, 0, 20, 50, 0, 30, 10, 0, 40]
    agg = StatsAggregate()
    for score in scores:
        agg = fold_outcome(agg, SessionOutcome(score=score, won=score > 0))
    assert agg.games_played == 10
    assert agg.high_score == max(scores)
    assert agg.wins == sum(1 for s in scores if s > 0)
    assert agg.total_score == sum(scores)
    assert agg.current_streak == 1
    assert agg.wins <= agg.games_played


def test_best_time_only_improves_on_strictly_smaller_win():
    agg = fold_outcome(StatsAggregate(), SessionOutcome(score=10, won=True, elapsed_time=40))
    assert agg.best_time == 40
    agg = fold_outcome(agg, SessionOutcome(score=10, won=True, elapsed_time=40))
    assert agg.best_time == 40
    agg = fold_outcome(agg, SessionOutcome(score=10, won=True, elapsed_time=55))
    assert agg.best_time == 40
    agg = fold_outcome(agg, SessionOutcome(score=0, won=False, elapsed_time=5))
    assert agg.best_time == 40
    agg = fold_outcome(agg, SessionOutcome(score=10, won=True, elapsed_time=25))
    assert agg.best_time == 25


def test_win_without_time_keeps_best_time_unset():
    agg = fold_outcome(StatsAggregate(), SessionOutcome(score=10, won=True))
    assert agg.best_time is None


def test_display_on_fresh_aggregate():
    display = derive_display(StatsAggregate())
    assert display.win_rate_percent == 0
    assert display.best_time_formatted == "--:--"
    assert display.games_played == 0


@pytest.mark.parametrize("wins, games, percent", [
    (1, 8, 13),     # 12.5 rounds half up
    (2, 3, 67),
    (1, 3, 33),
    (5, 5, 100),
])
def test_display_win_rate(wins, games, percent):
    display = derive_display(StatsAggregate(games_played=games, wins=wins))
    assert display.win_rate_percent == percent


@pytest.mark.parametrize("seconds, text", [(5, "00:05"), (75, "01:15"), (600, "10:00")])
def test_format_time(seconds, text):
    assert format_time(seconds) == text


def test_display_formats_best_time():
    display = derive_display(StatsAggregate(games_played=1, wins=1, best_time=83))
    assert display.best_time_formatted == "01:23"


def test_record_persists_with_stable_field_names(recorder, store_path: Path):
    recorder.record(SessionOutcome(score=20, won=True))
    saved = json.loads(store_path.read_text(encoding="utf-8"))[STATS_KEY]
    assert saved == {
        "gamesPlayed": 1,
        "highScore": 20,
        "totalScore": 20,
        "wins": 1,
        "bestTime": None,
        "currentStreak": 1,
    }

    reloaded = StatsRecorder(JsonStore(store_path)).load()
    assert reloaded == recorder.aggregate


def test_load_without_record_gives_defaults(recorder):
    assert recorder.aggregate == StatsAggregate()


def test_load_corrupt_store_gives_defaults(store_path: Path):
    store_path.write_text("{not json", encoding="utf-8")
    assert StatsRecorder(JsonStore(store_path)).load() == StatsAggregate()


def test_load_ignores_bad_fields(store_path: Path):
    store_path.write_text(json.dumps({STATS_KEY: {
        "gamesPlayed": 4, "wins": "many", "highScore": -3, "bestTime": 12,
    }}), encoding="utf-8")
    agg = StatsRecorder(JsonStore(store_path)).load()
    assert agg.games_played == 4
    assert agg.wins == 0
    assert agg.high_score == 0
    assert agg.best_time == 12


def test_load_clamps_wins_to_games_played(store_path: Path):
    store_path.write_text(json.dumps({STATS_KEY: {"gamesPlayed": 2, "wins": 5}}), encoding="utf-8")
    agg = StatsRecorder(JsonStore(store_path)).load()
    assert agg.wins == 2
    assert derive_display(agg).win_rate_percent == 100


def test_load_non_mapping_record_gives_defaults(store_path: Path):
    store_path.write_text(json.dumps({STATS_KEY: [1, 2, 3]}), encoding="utf-8")
    assert StatsRecorder(JsonStore(store_path)).load() == StatsAggregate()


def test_record_survives_unwritable_store(tmp_path: Path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    recorder = StatsRecorder(JsonStore(blocker / "hexa.json"))
    assert recorder.load() == StatsAggregate()

    agg = recorder.record(SessionOutcome(score=10, won=True))
    assert agg.games_played == 1
    assert recorder.aggregate.wins == 1
