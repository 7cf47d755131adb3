"""
Shared plumbing for event-driven sessions

Both sessions speak prompts and auto-advance after a fixed delay. Every
speech callback and timer carries the session epoch (bumped on start/stop)
and an utterance token, so callbacks that arrive after cancellation or after
a newer utterance started are dropped instead of applied.
"""

from typing import Optional, Tuple
import asyncio
import logging

from silverville.capabilities.base import SpeechCapability
from silverville.models.session import SpeechEvent

logger = logging.getLogger(__name__)


class BaseSession:
    """Speech and timer handling shared by the walk and cafe sessions"""

    def __init__(self, speech: SpeechCapability, auto_advance_delay: float):
        self.speech = speech
        self.auto_advance_delay = auto_advance_delay
        self._epoch = 0
        self._utterance = 0
        self._timer: Optional[asyncio.Task] = None

    # ==========================================
    # Speech
    # ==========================================

    def _speak(self, text: str) -> None:
        """Replace any current utterance with text"""
        self._utterance += 1
        token = (self._epoch, self._utterance)
        self.speech.stop()
        self.speech.speak(
            text,
            on_done=lambda: self._speech_finished(SpeechEvent.DONE, token),
            on_error=lambda: self._speech_finished(SpeechEvent.ERROR, token),
        )

    def _speech_finished(self, event: SpeechEvent, token: Tuple[int, int]) -> None:
        if token != (self._epoch, self._utterance):
            logger.debug(f"Ignoring stale speech {event.value} callback")
            return
        self.handle_speech_event(event)

    def handle_speech_event(self, event: SpeechEvent) -> None:
        """Apply a speech completion; playback errors count as completion"""
        raise NotImplementedError

    # ==========================================
    # Auto-advance timer
    # ==========================================

    def _schedule_timeout(self) -> None:
        """Call on_timeout() after the auto-advance delay, if an event loop is running"""
        self._cancel_timer()
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop; caller drives on_timeout()")
            return
        self._timer = loop.create_task(self._auto_advance(self._epoch))

    async def _auto_advance(self, epoch: int) -> None:
        await asyncio.sleep(self.auto_advance_delay)
        if epoch != self._epoch:
            return
        self._timer = None
        try:
            self.on_timeout()
        except Exception as e:
            logger.error(f"Auto-advance failed in {type(self).__name__}: {e}", exc_info=True)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def on_timeout(self) -> None:
        raise NotImplementedError

    # ==========================================
    # Cancellation
    # ==========================================

    def _cancel_pending(self) -> None:
        """Invalidate outstanding callbacks, stop speech and the timer"""
        self._epoch += 1
        self.speech.stop()
        self._cancel_timer()

    @property
    def timer_pending(self) -> bool:
        return self._timer is not None and not self._timer.done()
