"""
Capability interfaces

The orchestrators never talk to hardware directly. A pedometer or a
text-to-speech engine is passed in as an object satisfying one of these
protocols, which lets tests drive sessions with scripted fakes.
"""

from typing import Any, Callable, Protocol

from silverville.models.session import SensorStatus

TickCallback = Callable[[int], None]


class SensorCapability(Protocol):
    """Cumulative step counter"""

    async def initialize(self) -> SensorStatus:
        """Request permission and probe availability; reports problems instead of raising"""
        ...

    def current_reading(self) -> int:
        """Latest cumulative step reading"""
        ...

    def subscribe(self, on_tick: TickCallback) -> Any:
        """Deliver every new cumulative reading to on_tick; returns a handle"""
        ...

    def unsubscribe(self, handle: Any) -> None:
        ...


class SpeechCapability(Protocol):
    """
    Text-to-speech playback

    speak() must eventually call exactly one of on_done / on_error, unless
    stop() is called first.
    """

    def speak(self, text: str, on_done: Callable[[], None], on_error: Callable[[], None]) -> None:
        ...

    def stop(self) -> None:
        ...
