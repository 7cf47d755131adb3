"""
Dual-task walk session

Walk while answering spoken quizzes:
- A quiz is read aloud at every QUIZ_INTERVAL steps of the session
- The player answers on a four-choice card
- After a short result display the session returns to step tracking
- Reaching the walk goal grants landscape items once per session

States:
    idle -> walking -> quiz -> result -> walking ... -> complete

Without a usable pedometer the session runs in manual mode, where steps
are entered through record_manual_steps().
"""

from typing import Any, Callable, Dict, Optional
import logging

from silverville import config
from silverville.capabilities.base import SensorCapability, SpeechCapability
from silverville.exceptions import CapabilityUnavailableError
from silverville.gamification.ledger import ProgressionLedger
from silverville.gamification.milestones import MilestoneScheduler
from silverville.gamification.quiz_bank import QuizBank
from silverville.gamification.rewards import quiz_reward, walk_progress, walk_reward
from silverville.models.quiz import QuizItem, QuizRecord
from silverville.models.session import (
    QuizAnswerOutcome,
    SensorStatus,
    SpeechEvent,
    TickOutcome,
    WalkPhase,
)
from silverville.sessions.base import BaseSession

logger = logging.getLogger(__name__)

ACTIVE_PHASES = (WalkPhase.WALKING, WalkPhase.QUIZ, WalkPhase.RESULT)


class WalkSession(BaseSession):
    """State machine for one walking session"""

    def __init__(
        self,
        ledger: ProgressionLedger,
        sensor: SensorCapability,
        speech: SpeechCapability,
        quiz_bank: Optional[QuizBank] = None,
        goal: Optional[int] = None,
        quiz_interval: Optional[int] = None,
        result_delay: Optional[float] = None,
        on_quiz: Optional[Callable[[int, QuizItem], None]] = None,
        on_goal_reached: Optional[Callable[[int], None]] = None,
    ):
        super().__init__(
            speech,
            config.QUIZ_RESULT_DELAY_SECONDS if result_delay is None else result_delay,
        )
        self.ledger = ledger
        self.sensor = sensor
        self.quiz_bank = quiz_bank or QuizBank()
        self.goal = ledger.walk_goal if goal is None else goal
        self.scheduler = MilestoneScheduler(quiz_interval)
        self.on_quiz = on_quiz
        self.on_goal_reached = on_goal_reached

        self.phase = WalkPhase.IDLE
        self.sensor_status: Optional[SensorStatus] = None
        self.manual_mode = False

        # Per-session state
        self.start_step_snapshot = 0
        self.session_steps = 0
        self.reward_granted = False
        self.current_quiz: Optional[QuizItem] = None
        self._steps_before_session = 0
        self._manual_reading = 0
        self._subscription: Any = None

    @property
    def last_fired_milestone(self) -> int:
        return self.scheduler.last_fired

    async def initialize(self) -> SensorStatus:
        """Probe the pedometer; an unusable one switches the session to manual mode"""
        try:
            status = await self.sensor.initialize()
        except Exception as e:
            logger.error(f"Pedometer initialization failed: {e}", exc_info=True)
            status = SensorStatus(
                available=False,
                has_permission=False,
                error=f"Pedometer initialization error: {e}",
            )

        self.sensor_status = status
        self.manual_mode = not status.available
        if self.manual_mode:
            logger.warning(f"Pedometer unavailable ({status.error}); using manual step entry")
        return status

    # ==========================================
    # Lifecycle
    # ==========================================

    def start(self) -> bool:
        """Begin a session; valid from idle or complete"""
        if self.phase not in (WalkPhase.IDLE, WalkPhase.COMPLETE):
            logger.warning(f"Cannot start a walk from phase {self.phase.value}")
            return False

        self._cancel_pending()
        self.scheduler.reset()
        self.reward_granted = False
        self.session_steps = 0
        self.current_quiz = None
        self._steps_before_session = self.ledger.steps

        if not self.manual_mode:
            try:
                self.start_step_snapshot = self.sensor.current_reading()
                self._subscription = self.sensor.subscribe(self._on_sensor_tick)
            except CapabilityUnavailableError as e:
                logger.warning(f"Pedometer unusable at start ({e.message}); using manual step entry")
                self.sensor_status = SensorStatus(available=False, error=e.user_message)
                self.manual_mode = True

        if self.manual_mode:
            self._manual_reading = 0
            self.start_step_snapshot = 0

        self.phase = WalkPhase.WALKING
        logger.info(
            f"Walk started at reading {self.start_step_snapshot} "
            f"(goal {self.goal}, {'manual' if self.manual_mode else 'pedometer'} mode)"
        )
        return True

    def stop(self) -> None:
        """Abandon the session without penalty"""
        if self.phase is WalkPhase.IDLE:
            return
        self._teardown()
        self.current_quiz = None
        self.phase = WalkPhase.IDLE
        logger.info(f"Walk stopped at {self.session_steps} session steps")

    def finish(self) -> Dict[str, Any]:
        """
        End the walk

        Returns:
            {
                'session_steps': int,
                'goal_reached': bool,
                'quizzes_answered': int  # answered today
            }
        """
        if self.phase in ACTIVE_PHASES:
            self._teardown()
            self.current_quiz = None
            self.phase = WalkPhase.COMPLETE if self.reward_granted else WalkPhase.IDLE

        return {
            "session_steps": self.session_steps,
            "goal_reached": self.reward_granted,
            "quizzes_answered": len(self.ledger.quiz_history),
        }

    async def report(self, remote_client) -> bool:
        """Send the session's step total to the remote record service"""
        if remote_client is None:
            return False
        try:
            await remote_client.complete_walk(self.session_steps)
            return True
        except Exception as e:
            logger.warning(f"Could not record walk remotely: {e}")
            return False

    def _teardown(self) -> None:
        if self._subscription is not None:
            self.sensor.unsubscribe(self._subscription)
            self._subscription = None
        self._cancel_pending()

    # ==========================================
    # Step updates
    # ==========================================

    def _on_sensor_tick(self, reading: int) -> None:
        self.handle_tick(reading)

    def record_manual_steps(self, count: int) -> Optional[TickOutcome]:
        """Add manually entered steps when no pedometer is available"""
        if not self.manual_mode:
            logger.warning("Manual step entry ignored while the pedometer is active")
            return None
        if count < 0:
            return None
        self._manual_reading += count
        return self.handle_tick(self._manual_reading)

    def handle_tick(self, reading: int) -> Optional[TickOutcome]:
        """Process one cumulative sensor reading"""
        if self.phase not in ACTIVE_PHASES:
            logger.debug(f"Dropping step reading {reading} in phase {self.phase.value}")
            return None

        # Stale or re-delivered readings never move the session backwards
        self.session_steps = max(self.session_steps, reading - self.start_step_snapshot, 0)
        self.ledger.set_steps(self._steps_before_session + self.session_steps)

        milestone = None
        quiz = None
        if self.phase is WalkPhase.WALKING:
            milestone, quiz = self._check_milestone()

        goal_reached, items = self._check_goal()

        return TickOutcome(
            session_steps=self.session_steps,
            progress=walk_progress(self.session_steps, self.goal),
            milestone=milestone,
            quiz=quiz,
            goal_reached=goal_reached,
            landscape_items_awarded=items,
        )

    def _check_milestone(self):
        milestone = self.scheduler.observe(self.session_steps)
        if milestone is None:
            return None, None

        quiz = self.quiz_bank.next()
        self.current_quiz = quiz
        self.phase = WalkPhase.QUIZ
        logger.info(f"Milestone {milestone} reached; quiz {quiz.id}")

        self._speak(f"You've walked {milestone:,} steps! Quiz time. {quiz.prompt}")
        if self.on_quiz:
            self.on_quiz(milestone, quiz)
        return milestone, quiz

    def _check_goal(self):
        if self.reward_granted or self.session_steps < self.goal:
            return False, 0

        self.reward_granted = True
        # Reaching the goal always earns at least one item
        items = max(1, walk_reward(self.session_steps))
        self.ledger.add_landscape_items(items)
        logger.info(f"Walk goal {self.goal} reached at {self.session_steps} steps; +{items} landscape items")

        if self.on_goal_reached:
            self.on_goal_reached(items)
        return True, items

    # ==========================================
    # Quiz
    # ==========================================

    def select_answer(self, choice: str) -> Optional[QuizAnswerOutcome]:
        """Grade the player's choice for the open quiz"""
        if self.phase is not WalkPhase.QUIZ or self.current_quiz is None:
            logger.warning(f"Answer '{choice}' ignored in phase {self.phase.value}")
            return None

        quiz = self.current_quiz
        is_correct = quiz.is_correct(choice)
        self.ledger.add_quiz_record(
            QuizRecord(prompt=quiz.prompt, chosen_answer=choice, is_correct=is_correct)
        )

        exp = quiz_reward(is_correct)
        if exp:
            self.ledger.add_village_exp(exp)

        self.phase = WalkPhase.RESULT
        if is_correct:
            self._speak("Correct! Very well done!")
        else:
            self._speak(f"Not quite. The answer is {quiz.correct_choice}.")
        self._schedule_timeout()

        return QuizAnswerOutcome(
            is_correct=is_correct,
            correct_choice=quiz.correct_choice,
            explanation=quiz.explanation,
            exp_awarded=exp,
        )

    def on_timeout(self) -> Optional[int]:
        """
        Close the result card and resume step tracking

        A boundary crossed while the quiz was open fires immediately.

        Returns:
            The milestone fired on resume, if any
        """
        if self.phase is not WalkPhase.RESULT:
            return None
        self._cancel_timer()
        self.current_quiz = None
        self.phase = WalkPhase.WALKING
        milestone, _ = self._check_milestone()
        return milestone

    def handle_speech_event(self, event: SpeechEvent) -> None:
        # Walk transitions are driven by steps, answers and timers, not speech
        if event is SpeechEvent.ERROR:
            logger.warning(f"Speech playback failed during {self.phase.value}; continuing")
