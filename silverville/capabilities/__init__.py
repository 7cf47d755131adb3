"""Device capability interfaces consumed by the session orchestrators"""

from silverville.capabilities.base import SensorCapability, SpeechCapability, TickCallback
from silverville.capabilities.simulated import LoggingSpeech, SimulatedPedometer
from silverville.capabilities.speech_queue import QueuedVoice, SpeechQueue

__all__ = [
    "SensorCapability",
    "SpeechCapability",
    "TickCallback",
    "LoggingSpeech",
    "SimulatedPedometer",
    "QueuedVoice",
    "SpeechQueue",
]
