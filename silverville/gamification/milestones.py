"""
Step Milestone Scheduling

Emits a quiz milestone each time the walk crosses a multiple of the quiz
interval. Each boundary fires at most once per session, no matter how often
the same (or a higher) step count is observed before the next boundary.

A single update that jumps across several boundaries fires only the highest
one; the skipped quizzes are dropped rather than queued.
"""

from typing import Optional
import logging

from silverville import config
from silverville.exceptions import ValidationError

logger = logging.getLogger(__name__)


class MilestoneScheduler:
    """Tracks the highest step boundary already announced"""

    def __init__(self, interval: Optional[int] = None):
        interval = config.QUIZ_INTERVAL if interval is None else interval
        if interval <= 0:
            raise ValidationError("Milestone interval must be positive", field="interval", value=interval)
        self.interval = interval
        self.last_fired = 0

    def observe(self, current_steps: int) -> Optional[int]:
        """
        Feed the current session step count

        Returns:
            The newly crossed boundary, or None if nothing new was crossed
        """
        candidate = (current_steps // self.interval) * self.interval
        if candidate > self.last_fired and candidate > 0:
            skipped = (candidate - self.last_fired) // self.interval - 1
            if skipped > 0:
                logger.info(
                    f"Step burst crossed {skipped + 1} milestones at once; "
                    f"firing only {candidate}"
                )
            self.last_fired = candidate
            return candidate
        return None

    def reset(self) -> None:
        self.last_fired = 0
