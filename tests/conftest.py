"""Global test fixtures and utilities for silverville tests"""
import pytest
import random
from typing import Callable, Dict, List, Optional, Tuple

from silverville.gamification.ledger import ProgressionLedger
from silverville.gamification.quiz_bank import QuizBank
from silverville.gamification.cafe_rounds import CafeRoundGenerator
from silverville.models.session import SensorStatus


# ============================================================================
# Capability Fakes
# ============================================================================

class FakeSensor:
    """Scripted pedometer: tests push cumulative readings with emit()"""

    def __init__(self, reading: int = 0, available: bool = True, error: Optional[str] = None):
        self.reading = reading
        self.available = available
        self.error = error
        self.subscribers: Dict[int, Callable[[int], None]] = {}
        self._next_handle = 0

    async def initialize(self) -> SensorStatus:
        return SensorStatus(available=self.available, error=self.error)

    def current_reading(self) -> int:
        return self.reading

    def subscribe(self, on_tick):
        self._next_handle += 1
        self.subscribers[self._next_handle] = on_tick
        return self._next_handle

    def unsubscribe(self, handle) -> None:
        self.subscribers.pop(handle, None)

    def emit(self, reading: int) -> None:
        self.reading = reading
        for on_tick in list(self.subscribers.values()):
            on_tick(reading)


class FakeSpeech:
    """
    Speech engine that never finishes on its own

    Tests complete utterances with finish() / fail(). Callbacks captured
    before a stop() can still be fired through `stale` to simulate late
    deliveries.
    """

    def __init__(self):
        self.spoken: List[str] = []
        self.current: Optional[Tuple[Callable[[], None], Callable[[], None]]] = None
        self.stale: List[Tuple[Callable[[], None], Callable[[], None]]] = []
        self.stop_count = 0

    def speak(self, text, on_done, on_error) -> None:
        self.spoken.append(text)
        self.current = (on_done, on_error)

    def stop(self) -> None:
        self.stop_count += 1
        if self.current is not None:
            self.stale.append(self.current)
            self.current = None

    def finish(self) -> None:
        on_done, _ = self.current
        self.current = None
        on_done()

    def fail(self) -> None:
        _, on_error = self.current
        self.current = None
        on_error()

    @property
    def last(self) -> Optional[str]:
        return self.spoken[-1] if self.spoken else None


# ============================================================================
# Core Fixtures
# ============================================================================

@pytest.fixture
def rng():
    """Seeded random source for reproducible draws"""
    return random.Random(42)


@pytest.fixture
def ledger():
    """Fresh progression ledger with the default 5000-step goal"""
    return ProgressionLedger(walk_goal=5000)


@pytest.fixture
def fake_sensor():
    return FakeSensor()


@pytest.fixture
def make_sensor():
    """Factory for sensors with custom availability"""
    return FakeSensor


@pytest.fixture
def fake_speech():
    return FakeSpeech()


@pytest.fixture
def quiz_bank(rng):
    return QuizBank(rng=rng)


@pytest.fixture
def round_generator(rng):
    return CafeRoundGenerator(rng)
