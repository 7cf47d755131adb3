"""
Service Container - Dependency Injection Container

Holds the one progression ledger and the capabilities, and lazily builds the
services and sessions that share them.
"""

from dataclasses import dataclass, field
from typing import Optional
import logging
import random

from silverville.gamification.ledger import ProgressionLedger

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """
    Simple dependency injection container for services.

    Services are lazy-loaded on first access via properties.
    Capabilities (sensor, speech) and the optional remote client are injected.
    """

    # Injected dependencies
    ledger: ProgressionLedger
    sensor: object  # SensorCapability
    speech: object  # SpeechCapability
    remote_client: Optional[object] = None  # RemoteClient, None when remote services are off
    rng: random.Random = field(default_factory=random.Random)

    # Services (lazy-loaded via properties)
    _speech_queue: Optional[object] = field(default=None, init=False, repr=False)
    _diet_service: Optional[object] = field(default=None, init=False, repr=False)
    _quiz_bank: Optional[object] = field(default=None, init=False, repr=False)
    _walk_session: Optional[object] = field(default=None, init=False, repr=False)
    _cafe_session: Optional[object] = field(default=None, init=False, repr=False)

    @property
    def speech_queue(self):
        """Get the SpeechQueue the sessions share the speech engine through (lazy-loaded)"""
        if self._speech_queue is None:
            from silverville.capabilities.speech_queue import SpeechQueue
            self._speech_queue = SpeechQueue(self.speech)
        return self._speech_queue

    @property
    def diet_service(self):
        """Get DietService instance (lazy-loaded)"""
        if self._diet_service is None:
            from silverville.services.diet_service import DietService
            self._diet_service = DietService(self.ledger, self.remote_client, self.rng)
            logger.debug("DietService instantiated")
        return self._diet_service

    @property
    def quiz_bank(self):
        """Get QuizBank instance with the built-in catalog (lazy-loaded)"""
        if self._quiz_bank is None:
            from silverville.gamification.quiz_bank import QuizBank
            self._quiz_bank = QuizBank(rng=self.rng)
            logger.debug("QuizBank instantiated")
        return self._quiz_bank

    async def load_remote_quizzes(self):
        """Replace the quiz bank with the remote catalog when one is reachable"""
        from silverville.gamification.quiz_bank import QuizBank
        self._quiz_bank = await QuizBank.from_remote(self.remote_client, rng=self.rng)
        self._walk_session = None
        return self._quiz_bank

    @property
    def walk_session(self):
        """Get WalkSession instance (lazy-loaded)"""
        if self._walk_session is None:
            from silverville.sessions.walk_session import WalkSession
            self._walk_session = WalkSession(
                self.ledger, self.sensor, self.speech_queue.voice("walk"), quiz_bank=self.quiz_bank
            )
            logger.debug("WalkSession instantiated")
        return self._walk_session

    @property
    def cafe_session(self):
        """Get CafeSession instance (lazy-loaded)"""
        if self._cafe_session is None:
            from silverville.gamification.cafe_rounds import CafeRoundGenerator
            from silverville.sessions.cafe_session import CafeSession
            self._cafe_session = CafeSession(
                self.ledger, self.speech_queue.voice("cafe"), generator=CafeRoundGenerator(self.rng)
            )
            logger.debug("CafeSession instantiated")
        return self._cafe_session


# Global container instance (initialized in main.py)
_container: Optional[ServiceContainer] = None


def get_container() -> ServiceContainer:
    """
    Get the global service container.

    Raises:
        RuntimeError: If container not initialized (call init_container first)
    """
    if _container is None:
        raise RuntimeError(
            "Service container not initialized. "
            "Call init_container() in main.py before using services."
        )
    return _container


def init_container(
    ledger: ProgressionLedger,
    sensor: object,
    speech: object,
    remote_client: Optional[object] = None,
    rng: Optional[random.Random] = None
) -> ServiceContainer:
    """
    Initialize the global service container.

    Should be called once in main.py after the capabilities are set up.
    """
    global _container

    _container = ServiceContainer(
        ledger=ledger,
        sensor=sensor,
        speech=speech,
        remote_client=remote_client,
        rng=rng or random.Random(),
    )

    logger.info("Service container initialized")
    return _container
