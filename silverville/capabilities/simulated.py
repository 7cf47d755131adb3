"""Software stand-ins for the pedometer and speech engine"""

from typing import Callable, Dict, Optional
import asyncio
import itertools
import logging

from silverville import config
from silverville.capabilities.base import TickCallback
from silverville.exceptions import CapabilityUnavailableError
from silverville.models.session import SensorStatus

logger = logging.getLogger(__name__)


class SimulatedPedometer:
    """
    Pedometer that walks on command

    Used by the demo entry point. Constructed with available=False it
    behaves like a device without a step counter.
    """

    def __init__(self, start_reading: int = 0, available: bool = True):
        self._reading = start_reading
        self._available = available
        self._subscribers: Dict[int, TickCallback] = {}
        self._handles = itertools.count(1)

    async def initialize(self) -> SensorStatus:
        if not self._available:
            return SensorStatus(
                available=False,
                has_permission=True,
                error="This device does not support step counting.",
            )
        return SensorStatus(available=True)

    def _require_available(self) -> None:
        if not self._available:
            raise CapabilityUnavailableError("Step counting is not supported", capability="Pedometer")

    def current_reading(self) -> int:
        self._require_available()
        return self._reading

    def subscribe(self, on_tick: TickCallback) -> int:
        self._require_available()
        handle = next(self._handles)
        self._subscribers[handle] = on_tick
        return handle

    def unsubscribe(self, handle: int) -> None:
        self._subscribers.pop(handle, None)

    def step(self, count: int) -> None:
        """Advance the reading and notify subscribers in subscription order"""
        self._reading += count
        for on_tick in list(self._subscribers.values()):
            on_tick(self._reading)

    async def walk(self, steps_per_tick: int, ticks: int, interval: float = 0.0) -> None:
        for _ in range(ticks):
            self.step(steps_per_tick)
            await asyncio.sleep(interval)


class LoggingSpeech:
    """Speech engine that logs the utterance and reports completion on the next loop turn"""

    def __init__(self, language: Optional[str] = None, rate: Optional[float] = None):
        self.language = language or config.SPEECH_LANGUAGE
        self.rate = rate or config.SPEECH_RATE
        self._pending: Optional[asyncio.Handle] = None

    def speak(self, text: str, on_done: Callable[[], None], on_error: Callable[[], None]) -> None:
        self.stop()
        logger.info(f"[SPEECH {self.language} x{self.rate}] {text}")
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            on_done()
            return
        self._pending = loop.call_soon(on_done)

    def stop(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
