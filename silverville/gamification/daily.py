"""
Daily Mission Tracking

Missions for a day:
- diet: a meal was scored
- walk: the walk goal was reached
- cafe: at least one cafe order was answered correctly

Closing a day with every mission done extends the streak; any missed
mission ends it. The day's counters are then cleared.
"""

from typing import Dict, Any
import logging

from silverville.gamification.ledger import ProgressionLedger

logger = logging.getLogger(__name__)


def daily_missions(ledger: ProgressionLedger) -> Dict[str, bool]:
    """Today's mission completion status"""
    return {
        "diet": bool(ledger.last_foods) or ledger.diet_score > 0,
        "walk": ledger.walk_goal_reached(),
        "cafe": ledger.cafe_score > 0,
    }


def close_day(ledger: ProgressionLedger) -> Dict[str, Any]:
    """
    Settle today's missions into the streak, then reset daily stats

    Returns:
        {
            'missions': dict,
            'all_done': bool,
            'streak_days': int,
            'health_score': int  # score of the day being closed
        }
    """
    missions = daily_missions(ledger)
    all_done = all(missions.values())
    health_score = ledger.health_score()

    if all_done:
        streak = ledger.increment_streak()
        logger.info(f"All daily missions complete. Streak: {streak} days 🔥")
    else:
        missed = [name for name, done in missions.items() if not done]
        logger.info(f"Day closed with missed missions: {', '.join(missed)}")
        ledger.break_streak()

    ledger.reset_daily_stats()

    return {
        "missions": missions,
        "all_done": all_done,
        "streak_days": ledger.streak_days,
        "health_score": health_score,
    }
