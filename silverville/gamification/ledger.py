"""
Progression Ledger

The single mutable game-state aggregate. Every component that reads or
writes game state goes through one ledger instance; all mutation happens in
the methods below, each of which leaves the invariants intact:

- fertilizer and landscape items never go negative (spending clamps at 0)
- village_level always equals level_for(village_exp)
- village_exp only grows, except on reset_all()
- quiz history timestamps never go backwards
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
import logging

from pydantic import BaseModel

from silverville import config
from silverville.exceptions import ValidationError
from silverville.gamification.level_engine import level_for, level_progress
from silverville.gamification.rewards import composite_score, walk_progress
from silverville.gamification.village import buildings_for_level
from silverville.models.quiz import QuizRecord
from silverville.models.village import Building, Resident

logger = logging.getLogger(__name__)


class LedgerSnapshot(BaseModel):
    """Read-only copy of the ledger for UI and persistence collaborators"""
    steps: int
    walk_goal: int
    quiz_history: List[QuizRecord]
    diet_score: float
    last_foods: List[str]
    fertilizer: int
    landscape_items: int
    village_exp: int
    village_level: int
    residents: List[Resident]
    buildings: List[Building]
    cafe_score: int
    cafe_streak: int
    streak_days: int
    health_score: int


def _require_non_negative(name: str, value: float) -> None:
    if value < 0:
        raise ValidationError(f"{name} cannot be negative", field=name, value=value)


class ProgressionLedger:
    """Today's steps, diet, resources, village and mini-game state"""

    def __init__(self, walk_goal: Optional[int] = None):
        walk_goal = config.WALK_GOAL if walk_goal is None else walk_goal
        if walk_goal <= 0:
            raise ValidationError("Walk goal must be positive", field="walk_goal", value=walk_goal)
        self.walk_goal = walk_goal

        # Walking
        self._steps = 0
        self._quiz_history: List[QuizRecord] = []

        # Diet
        self._diet_score = 0.0
        self._last_foods: List[str] = []

        # Resources
        self._fertilizer = 0
        self._landscape_items = 0

        # Village
        self._village_exp = 0
        self._village_level = 1
        self._residents: List[Resident] = []
        self._buildings: List[Building] = []

        # Cafe mini-game
        self._cafe_score = 0
        self._cafe_streak = 0

        self._streak_days = 0

    # ==========================================
    # Read access
    # ==========================================

    @property
    def steps(self) -> int:
        return self._steps

    @property
    def quiz_history(self) -> List[QuizRecord]:
        return list(self._quiz_history)

    @property
    def diet_score(self) -> float:
        return self._diet_score

    @property
    def last_foods(self) -> List[str]:
        return list(self._last_foods)

    @property
    def fertilizer(self) -> int:
        return self._fertilizer

    @property
    def landscape_items(self) -> int:
        return self._landscape_items

    @property
    def village_exp(self) -> int:
        return self._village_exp

    @property
    def village_level(self) -> int:
        return self._village_level

    @property
    def residents(self) -> List[Resident]:
        return list(self._residents)

    @property
    def buildings(self) -> List[Building]:
        return list(self._buildings)

    @property
    def cafe_score(self) -> int:
        return self._cafe_score

    @property
    def cafe_streak(self) -> int:
        return self._cafe_streak

    @property
    def streak_days(self) -> int:
        return self._streak_days

    # ==========================================
    # Walking
    # ==========================================

    def set_steps(self, steps: int) -> None:
        """Update today's step count"""
        _require_non_negative("steps", steps)
        self._steps = steps

    def add_quiz_record(self, record: QuizRecord) -> QuizRecord:
        """
        Append an answered quiz to today's history

        A record stamped earlier than the previous entry is re-stamped with
        the previous timestamp so history stays ordered.
        """
        if self._quiz_history and record.timestamp < self._quiz_history[-1].timestamp:
            logger.warning(
                f"Quiz record timestamp {record.timestamp.isoformat()} precedes last entry; clamping"
            )
            record = record.model_copy(update={"timestamp": self._quiz_history[-1].timestamp})
        self._quiz_history.append(record)
        return record

    # ==========================================
    # Diet
    # ==========================================

    def set_diet_score(self, score: float, foods: List[str]) -> None:
        """Record today's MIND diet score and the foods it was computed from"""
        if not 0 <= score <= 10:
            raise ValidationError("Diet score must be between 0 and 10", field="diet_score", value=score)
        self._diet_score = score
        self._last_foods = list(foods)

    # ==========================================
    # Resources
    # ==========================================

    def add_fertilizer(self, amount: int) -> int:
        _require_non_negative("fertilizer", amount)
        self._fertilizer += amount
        if amount:
            logger.info(f"Granted {amount} fertilizer (total {self._fertilizer})")
        return self._fertilizer

    def use_fertilizer(self, amount: int) -> int:
        """Spend fertilizer; overspending leaves zero rather than going negative"""
        _require_non_negative("fertilizer", amount)
        if amount > self._fertilizer:
            logger.info(f"Requested {amount} fertilizer but only {self._fertilizer} available; clamping")
        self._fertilizer = max(0, self._fertilizer - amount)
        return self._fertilizer

    def add_landscape_items(self, amount: int) -> int:
        _require_non_negative("landscape_items", amount)
        self._landscape_items += amount
        if amount:
            logger.info(f"Granted {amount} landscape items (total {self._landscape_items})")
        return self._landscape_items

    # ==========================================
    # Village
    # ==========================================

    def add_resident(self, resident: Resident) -> None:
        """An animal resident moves in"""
        self._residents.append(resident)
        logger.info(f"{resident.display_name} {resident.icon} moved into the village")

    def unlock_building(self, building: Building) -> bool:
        """
        Unlock a building

        Returns:
            False if the building was already unlocked
        """
        if any(b.id == building.id for b in self._buildings):
            return False
        self._buildings.append(building)
        return True

    def available_buildings(self) -> List[Building]:
        """Catalog buildings the current village level has reached"""
        return buildings_for_level(self._village_level)

    def add_village_exp(self, amount: int) -> Dict[str, Any]:
        """
        Add village EXP and recompute the level

        Returns:
            {
                'exp_awarded': int,
                'new_total_exp': int,
                'leveled_up': bool,
                'old_level': int,
                'new_level': int
            }
        """
        _require_non_negative("village_exp", amount)
        old_level = self._village_level
        self._village_exp += amount
        self._village_level = level_for(self._village_exp)
        leveled_up = self._village_level > old_level

        if leveled_up:
            logger.info(f"Village leveled up from {old_level} to {self._village_level}!")

        return {
            "exp_awarded": amount,
            "new_total_exp": self._village_exp,
            "leveled_up": leveled_up,
            "old_level": old_level,
            "new_level": self._village_level,
        }

    def level_progress(self) -> Dict[str, Optional[int]]:
        return level_progress(self._village_exp)

    # ==========================================
    # Cafe
    # ==========================================

    def add_cafe_score(self, points: int) -> None:
        """Credit a correct cafe order and extend the in-session streak"""
        _require_non_negative("cafe_score", points)
        self._cafe_score += points
        self._cafe_streak += 1

    def reset_cafe_session(self) -> None:
        self._cafe_streak = 0

    # ==========================================
    # Streaks and resets
    # ==========================================

    def increment_streak(self) -> int:
        self._streak_days += 1
        return self._streak_days

    def break_streak(self) -> None:
        if self._streak_days:
            logger.info(f"Daily mission streak of {self._streak_days} days ended")
        self._streak_days = 0

    def reset_daily_stats(self) -> None:
        """Start a new day: clear today's counters, keep the village"""
        self._steps = 0
        self._quiz_history = []
        self._diet_score = 0.0
        self._last_foods = []
        self._cafe_score = 0
        self._cafe_streak = 0
        logger.info("Daily stats reset")

    def reset_all(self) -> None:
        """Full reset, the only way village EXP can decrease"""
        walk_goal = self.walk_goal
        self.__init__(walk_goal=walk_goal)
        logger.warning("Progression ledger fully reset")

    # ==========================================
    # Derived values
    # ==========================================

    def walk_goal_reached(self) -> bool:
        return self._steps >= self.walk_goal

    def walk_progress(self) -> int:
        return walk_progress(self._steps, self.walk_goal)

    def health_score(self) -> int:
        """Composite 0-100 daily health score"""
        return composite_score(self._steps, self.walk_goal, self._diet_score, self._cafe_score)

    def snapshot(self) -> LedgerSnapshot:
        return LedgerSnapshot(
            steps=self._steps,
            walk_goal=self.walk_goal,
            quiz_history=list(self._quiz_history),
            diet_score=self._diet_score,
            last_foods=list(self._last_foods),
            fertilizer=self._fertilizer,
            landscape_items=self._landscape_items,
            village_exp=self._village_exp,
            village_level=self._village_level,
            residents=list(self._residents),
            buildings=list(self._buildings),
            cafe_score=self._cafe_score,
            cafe_streak=self._cafe_streak,
            streak_days=self._streak_days,
            health_score=self.health_score(),
        )
