"""Session state models shared by the walk and cafe orchestrators"""
from enum import Enum
from typing import Optional

from pydantic import BaseModel

from silverville.models.quiz import QuizItem


class SpeechEvent(str, Enum):
    """Outcome reported by the speech capability for one utterance"""
    DONE = "done"
    ERROR = "error"


class WalkPhase(str, Enum):
    IDLE = "idle"
    WALKING = "walking"
    QUIZ = "quiz"
    RESULT = "result"
    COMPLETE = "complete"


class CafePhase(str, Enum):
    READY = "ready"
    ORDERING = "ordering"
    DISTRACTED = "distracted"
    CHOOSING = "choosing"
    FEEDBACK = "feedback"
    RESULT = "result"


class SensorStatus(BaseModel):
    """Result of initializing the step sensor"""
    available: bool
    has_permission: bool = True
    error: Optional[str] = None


class TickOutcome(BaseModel):
    """What a single step update changed in the walk session"""
    session_steps: int
    progress: int
    milestone: Optional[int] = None
    quiz: Optional[QuizItem] = None
    goal_reached: bool = False
    landscape_items_awarded: int = 0


class QuizAnswerOutcome(BaseModel):
    """Grading result for a walk quiz answer"""
    is_correct: bool
    correct_choice: str
    explanation: Optional[str] = None
    exp_awarded: int = 0


class CafeSelectionOutcome(BaseModel):
    """Grading result for one cafe round"""
    is_correct: bool
    correct_item_id: str
    round_index: int
    points_awarded: int = 0
