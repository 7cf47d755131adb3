"""
Barista cafe session

A working-memory game played over several rounds. In each round a customer
orders out loud, a second customer interrupts with small talk, and only then
does the player pick the ordered drink from the menu cards.

States:
    ready -> ordering -> distracted -> choosing -> feedback -> (next round | result)

ordering and distracted advance when their utterance finishes; a speech
error advances them the same way so the game never stalls.
"""

from typing import Any, Callable, Dict, List, Optional
import logging

from silverville import config
from silverville.capabilities.base import SpeechCapability
from silverville.exceptions import ValidationError
from silverville.gamification.cafe_rounds import CafeRoundGenerator
from silverville.gamification.ledger import ProgressionLedger
from silverville.gamification.rewards import cafe_reward
from silverville.models.cafe import CafeRound
from silverville.models.session import CafePhase, CafeSelectionOutcome, SpeechEvent
from silverville.sessions.base import BaseSession

logger = logging.getLogger(__name__)


def star_rating(correct_count: int, total_rounds: int) -> int:
    """0-3 stars for a finished session"""
    if total_rounds <= 0:
        return 0
    ratio = correct_count / total_rounds
    if ratio >= 0.8:
        return 3
    if ratio >= 0.5:
        return 2
    if ratio > 0:
        return 1
    return 0


class CafeSession(BaseSession):
    """State machine for one barista session"""

    def __init__(
        self,
        ledger: ProgressionLedger,
        speech: SpeechCapability,
        generator: Optional[CafeRoundGenerator] = None,
        total_rounds: Optional[int] = None,
        feedback_delay: Optional[float] = None,
        on_result: Optional[Callable[[Dict[str, Any]], None]] = None,
    ):
        super().__init__(
            speech,
            config.CAFE_FEEDBACK_DELAY_SECONDS if feedback_delay is None else feedback_delay,
        )
        self.ledger = ledger
        self.generator = generator or CafeRoundGenerator()
        self.total_rounds = config.CAFE_TOTAL_ROUNDS if total_rounds is None else total_rounds
        if self.total_rounds <= 0:
            raise ValidationError(
                "A cafe session needs at least one round", field="total_rounds", value=self.total_rounds
            )
        self.on_result = on_result

        self.phase = CafePhase.READY
        self.rounds: List[CafeRound] = []
        self.round_index = 0
        self.correct_count = 0
        self.last_selection: Optional[CafeSelectionOutcome] = None
        self.result: Optional[Dict[str, Any]] = None

    @property
    def current_round(self) -> Optional[CafeRound]:
        if not self.rounds or self.round_index >= len(self.rounds):
            return None
        return self.rounds[self.round_index]

    def start(self, rounds: Optional[List[CafeRound]] = None) -> bool:
        """
        Begin a session from ready or after a finished one

        Args:
            rounds: Prepared rounds (e.g. fetched remotely); generated locally when omitted
        """
        if self.phase not in (CafePhase.READY, CafePhase.RESULT):
            logger.warning(f"Cannot start a cafe session from phase {self.phase.value}")
            return False

        self._cancel_pending()
        self.rounds = list(rounds) if rounds else self.generator.generate_rounds(self.total_rounds)
        self.round_index = 0
        self.correct_count = 0
        self.last_selection = None
        self.result = None
        self.ledger.reset_cafe_session()

        logger.info(f"Cafe session started with {len(self.rounds)} rounds")
        self._begin_round()
        return True

    def stop(self) -> None:
        """Leave the cafe; nothing further is awarded"""
        self._cancel_pending()
        self.phase = CafePhase.READY
        self.rounds = []
        self.round_index = 0

    def _begin_round(self) -> None:
        self.phase = CafePhase.ORDERING
        self.last_selection = None
        self._speak(self.current_round.order_text)

    def handle_speech_event(self, event: SpeechEvent) -> None:
        if event is SpeechEvent.ERROR:
            logger.warning(f"Speech playback failed during {self.phase.value}; advancing")

        if self.phase is CafePhase.ORDERING:
            self.phase = CafePhase.DISTRACTED
            self._speak(f"Another customer chimes in: {self.current_round.distractor_text}")
        elif self.phase is CafePhase.DISTRACTED:
            self.phase = CafePhase.CHOOSING

    def select(self, item_id: str) -> Optional[CafeSelectionOutcome]:
        """Grade the player's pick for the current round"""
        if self.phase is not CafePhase.CHOOSING:
            logger.warning(f"Selection '{item_id}' ignored in phase {self.phase.value}")
            return None

        current = self.current_round
        is_correct = item_id == current.correct_item.id
        points = 0

        self.phase = CafePhase.FEEDBACK
        if is_correct:
            points = config.CAFE_POINTS_PER_CORRECT
            self.correct_count += 1
            self.ledger.add_cafe_score(points)
            self._speak("Ding-dong! Perfect order!")
        else:
            self.ledger.reset_cafe_session()
            self._speak(f"So close! The order was {current.correct_item.name}.")

        self.last_selection = CafeSelectionOutcome(
            is_correct=is_correct,
            correct_item_id=current.correct_item.id,
            round_index=self.round_index,
            points_awarded=points,
        )
        self._schedule_timeout()
        return self.last_selection

    def on_timeout(self) -> None:
        """Leave feedback for the next round, or finish after the last one"""
        if self.phase is not CafePhase.FEEDBACK:
            return
        self._cancel_timer()

        if self.round_index + 1 < len(self.rounds):
            self.round_index += 1
            self._begin_round()
        else:
            self._finish()

    def _finish(self) -> None:
        self.phase = CafePhase.RESULT
        exp = cafe_reward(self.correct_count)
        level = self.ledger.add_village_exp(exp)

        self.result = {
            "correct_count": self.correct_count,
            "total_rounds": len(self.rounds),
            "stars": star_rating(self.correct_count, len(self.rounds)),
            "exp_awarded": exp,
            "leveled_up": level["leveled_up"],
            "new_level": level["new_level"],
        }
        logger.info(
            f"Cafe session finished: {self.correct_count}/{len(self.rounds)} correct, +{exp} EXP"
        )
        if self.on_result:
            self.on_result(self.result)
