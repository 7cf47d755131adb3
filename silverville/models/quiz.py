"""Pydantic models for walk quizzes"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class QuizItem(BaseModel):
    """A four-choice cognitive quiz read aloud during a walk"""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    prompt: str = Field(min_length=1)
    choices: tuple[str, str, str, str]
    correct_choice: str
    explanation: Optional[str] = None

    @field_validator('choices')
    @classmethod
    def distinct_choices(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Choices must be distinct so exact-match grading is unambiguous"""
        if len(set(v)) != len(v):
            raise ValueError("Quiz choices must be distinct")
        return v

    @model_validator(mode='after')
    def answer_is_a_choice(self) -> 'QuizItem':
        if self.correct_choice not in self.choices:
            raise ValueError(
                f"Correct choice '{self.correct_choice}' is not one of {list(self.choices)}"
            )
        return self

    def is_correct(self, choice: str) -> bool:
        return choice == self.correct_choice


class QuizRecord(BaseModel):
    """One answered quiz in today's history"""

    model_config = ConfigDict(frozen=True)

    prompt: str
    chosen_answer: str
    is_correct: bool
    timestamp: datetime = Field(default_factory=datetime.now)
