"""
Gamification system for SilverVille

This module implements the village progression engine:
- Step milestones and walk quizzes
- Reward calculation (fertilizer, landscape items, village EXP)
- Village leveling
- The progression ledger (single source of game state)
- Daily missions and streaks
"""

from silverville.gamification.level_engine import level_for, level_progress
from silverville.gamification.rewards import (
    diet_reward,
    walk_reward,
    composite_score,
    mind_score,
)
from silverville.gamification.milestones import MilestoneScheduler
from silverville.gamification.quiz_bank import QuizBank
from silverville.gamification.ledger import ProgressionLedger
from silverville.gamification.daily import close_day, daily_missions

__all__ = [
    "level_for",
    "level_progress",
    "diet_reward",
    "walk_reward",
    "composite_score",
    "mind_score",
    "MilestoneScheduler",
    "QuizBank",
    "ProgressionLedger",
    "close_day",
    "daily_missions",
]
