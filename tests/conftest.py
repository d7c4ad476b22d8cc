import os
import random
from pathlib import Path

import pytest

# Headless pygame for the presentation tests.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from core.engine import SessionEngine
from core.stats import StatsRecorder
from core.storage import JsonStore


@pytest.fixture
def store_path(tmp_path: Path) -> Path:
    return tmp_path / "hexa.json"


@pytest.fixture
def store(store_path: Path) -> JsonStore:
    return JsonStore(store_path)


@pytest.fixture
def recorder(store: JsonStore) -> StatsRecorder:
    rec = StatsRecorder(store)
    rec.load()
    return rec


@pytest.fixture
def engine(recorder: StatsRecorder) -> SessionEngine:
    return SessionEngine(recorder=recorder, rng=random.Random(1234))
