"""
One speech engine shared by several sessions

A walk quiz can fire while a cafe round is still being read out. Both
sessions talk through the same engine, so each gets its own voice from a
SpeechQueue. Utterances play one at a time in request order, and a voice's
stop() only cancels what that voice asked for. A session never loses a
completion callback because another session spoke.
"""

from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Optional
import logging

from silverville.capabilities.base import SpeechCapability

logger = logging.getLogger(__name__)


@dataclass
class _Utterance:
    voice: "QueuedVoice"
    text: str
    on_done: Callable[[], None]
    on_error: Callable[[], None]


class SpeechQueue:
    """Serializes utterances from several voices onto one engine"""

    def __init__(self, speech: SpeechCapability):
        self.speech = speech
        self._pending: Deque[_Utterance] = deque()
        self._current: Optional[_Utterance] = None

    def voice(self, name: str) -> "QueuedVoice":
        return QueuedVoice(self, name)

    @property
    def busy(self) -> bool:
        return self._current is not None

    def _enqueue(self, utterance: _Utterance) -> None:
        self._pending.append(utterance)
        if self._current is not None:
            logger.debug(
                f"[SPEECH] {utterance.voice.name} waits for {self._current.voice.name} to finish"
            )
        self._play_next()

    def _play_next(self) -> None:
        if self._current is not None or not self._pending:
            return
        utterance = self._pending.popleft()
        self._current = utterance
        self.speech.speak(
            utterance.text,
            on_done=lambda: self._finished(utterance, utterance.on_done),
            on_error=lambda: self._finished(utterance, utterance.on_error),
        )

    def _finished(self, utterance: _Utterance, callback: Callable[[], None]) -> None:
        if utterance is not self._current:
            return
        self._current = None
        try:
            callback()
        finally:
            self._play_next()

    def _stop(self, voice: "QueuedVoice") -> None:
        self._pending = deque(u for u in self._pending if u.voice is not voice)
        if self._current is not None and self._current.voice is voice:
            self._current = None
            self.speech.stop()
            self._play_next()


class QueuedVoice:
    """SpeechCapability view of a SpeechQueue for one session"""

    def __init__(self, queue: SpeechQueue, name: str):
        self.queue = queue
        self.name = name

    def speak(self, text: str, on_done: Callable[[], None], on_error: Callable[[], None]) -> None:
        self.queue._enqueue(_Utterance(self, text, on_done, on_error))

    def stop(self) -> None:
        self.queue._stop(self)
