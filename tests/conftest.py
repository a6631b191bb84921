import sys
import pytest
from pathlib import Path
from typing import Generator, List

from cramdeck.constants import HOUR_MS
from cramdeck.db import DeckStore
from cramdeck.models import BasicCard, Card, ClozeCard, SchedulingState


# Fixed reference time: 2024-01-01 10:00:00 UTC in ms.
T0 = 1_704_103_200_000


class FakeClock:
    """Controllable ms clock for deterministic scheduling."""

    def __init__(self, now: float = T0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


# each test runs on cwd to its temp dir
@pytest.fixture(autouse=True)
def go_to_tmpdir(request):
    """
    Temporarily change the working directory to the test's tmpdir so no
    stray .env or database file is picked up or written elsewhere.
    """
    tmpdir = request.getfixturevalue("tmpdir")
    sys.path.insert(0, str(tmpdir))
    with tmpdir.as_cwd():
        yield


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


# --- Store Fixtures ---
@pytest.fixture
def db_path_file(tmp_path: Path) -> Path:
    return tmp_path / "test_cramdeck.db"


@pytest.fixture(params=["memory", "file"])
def store(request, db_path_file: Path) -> Generator[DeckStore, None, None]:
    """
    Provide an open DeckStore, either in-memory or file-backed, closed on
    teardown.
    """
    if request.param == "memory":
        deck_store = DeckStore(":memory:")
    else:
        deck_store = DeckStore(db_path_file)
    with deck_store:
        yield deck_store


# --- Card Fixtures ---
@pytest.fixture
def basic_card() -> BasicCard:
    return BasicCard(
        id=1,
        front="Oxidation",
        back="Loss of electrons",
        srs=SchedulingState.fresh(T0),
    )


@pytest.fixture
def cloze_card() -> ClozeCard:
    return ClozeCard(
        id=2,
        text="pH of neutral solution is {{c1::7}} at {{c2::25°C}}",
        srs=SchedulingState.fresh(T0),
    )


@pytest.fixture
def mixed_deck() -> List[Card]:
    """Three cards with staggered due times: #2 earliest, #3 not yet due."""
    return [
        BasicCard(
            id=1, front="A", back="a", srs=SchedulingState(due=T0 - HOUR_MS)
        ),
        ClozeCard(
            id=2,
            text="{{c1::B}} is second",
            srs=SchedulingState(due=T0 - 2 * HOUR_MS),
        ),
        BasicCard(
            id=3, front="C", back="c", srs=SchedulingState(due=T0 + HOUR_MS)
        ),
    ]
