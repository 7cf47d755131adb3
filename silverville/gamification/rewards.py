"""
Reward Calculation

Pure mappings from domain scores to resource grants. Step functions are
inclusive at the lower boundary and evaluated from the highest threshold down.

Rewards:
- Diet (MIND score 0-10) -> magic fertilizer
- Walking (steps) -> landscape items
- Walk quiz (correct answer) -> village EXP
- Cafe session (correct orders) -> village EXP

MIND = Mediterranean-DASH Intervention for Neurodegenerative Delay.
"""

import math
from typing import Dict, Iterable, List, Optional, Tuple

from silverville import config

# (minimum score, fertilizer)
DIET_REWARD_TIERS: List[Tuple[float, int]] = [
    (8, 5),  # excellent
    (6, 3),  # good
    (4, 2),  # fair
    (2, 1),  # basic
]

# (minimum steps, landscape items)
WALK_REWARD_TIERS: List[Tuple[int, int]] = [
    (10000, 3),
    (7000, 2),
    (5000, 1),
]

WALK_WEIGHT = 40
DIET_WEIGHT = 40
CAFE_WEIGHT = 20

# Brain-healthy foods and their contribution to the MIND score
MIND_FOOD_SCORES: Dict[str, float] = {
    # Leafy greens
    "spinach": 1.0,
    "kale": 1.0,
    "broccoli": 1.0,
    "lettuce": 0.8,
    "napa cabbage": 0.7,
    "water parsley": 0.8,
    "crown daisy": 0.8,
    # Berries
    "blueberry": 0.9,
    "strawberry": 0.8,
    "raspberry": 0.8,
    # Nuts
    "walnut": 0.9,
    "almond": 0.8,
    "nuts": 0.7,
    # Fish (omega-3)
    "salmon": 1.0,
    "mackerel": 1.0,
    "tuna": 0.9,
    "fish": 0.9,
    # Beans and tofu
    "tofu": 0.9,
    "beans": 0.8,
    "fermented soybean paste": 0.9,
    # Whole grains
    "brown rice": 0.8,
    "whole wheat": 0.7,
    "olive oil": 1.0,
    # Poultry
    "chicken breast": 0.5,
    "chicken": 0.5,
}

# Foods that count against brain health
MIND_PENALTY_FOODS: Dict[str, float] = {
    "butter": -0.5,
    "cheese": -0.3,
    "fast food": -1.0,
    "fried food": -0.8,
    "sausage": -0.7,
    "instant noodles": -0.6,
    "snacks": -0.5,
}


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def mind_score(foods: Iterable[str]) -> float:
    """
    Score detected foods on the 0-10 MIND scale

    Every occurrence counts, unknown foods contribute nothing, and the
    sum is clamped to [0, 10] then rounded to one decimal.
    """
    total = 0.0
    for food in foods:
        key = food.strip().lower()
        total += MIND_FOOD_SCORES.get(key, 0.0)
        total += MIND_PENALTY_FOODS.get(key, 0.0)
    return max(0.0, min(10.0, _round_half_up(total * 10) / 10))


def diet_reward(score: float) -> int:
    """MIND score -> fertilizer"""
    for minimum, fertilizer in DIET_REWARD_TIERS:
        if score >= minimum:
            return fertilizer
    return 0


def walk_reward(steps: int) -> int:
    """Step count -> landscape items"""
    for minimum, items in WALK_REWARD_TIERS:
        if steps >= minimum:
            return items
    return 0


def quiz_reward(is_correct: bool) -> int:
    return config.QUIZ_CORRECT_EXP if is_correct else 0


def cafe_reward(correct_count: int) -> int:
    """Village EXP for a finished cafe session"""
    return max(0, correct_count) * config.CAFE_EXP_PER_CORRECT


def mind_feedback(score: float) -> str:
    """User-facing message for a MIND score"""
    if score >= 8:
        return "🌟 Wonderful! Today's meal is top-tier for brain health!"
    if score >= 6:
        return "👍 Great! A little more greens or fish would make it even better."
    if score >= 4:
        return "😊 Not bad! Try adding nuts or blueberries."
    return "💚 Try more leafy greens, fish and nuts today."


def walk_progress(steps: int, goal: int) -> int:
    """Walk goal progress as a whole percentage capped at 100"""
    if goal <= 0:
        return 100
    return min(_round_half_up(steps / goal * 100), 100)


def composite_score(
    walk_steps: int,
    walk_goal: int,
    diet_score: float,
    cafe_score: int,
    cafe_score_max: Optional[int] = None
) -> int:
    """
    Blend walking, diet and mini-game performance into one 0-100 score

    Weights: walking 40, diet 40, cafe 20.
    """
    if cafe_score_max is None:
        cafe_score_max = config.CAFE_SCORE_MAX

    walk_ratio = min(walk_steps / walk_goal, 1) if walk_goal > 0 else 1
    diet_ratio = diet_score / 10
    cafe_ratio = min(cafe_score / cafe_score_max, 1)

    score = _round_half_up(walk_ratio * WALK_WEIGHT + diet_ratio * DIET_WEIGHT + cafe_ratio * CAFE_WEIGHT)
    return max(0, min(100, score))
