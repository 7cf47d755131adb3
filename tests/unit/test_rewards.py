"""Unit tests for reward calculation and the composite health score"""
import pytest

from silverville import config
from silverville.gamification.rewards import (
    cafe_reward,
    composite_score,
    diet_reward,
    mind_feedback,
    mind_score,
    quiz_reward,
    walk_progress,
    walk_reward,
)


# ============================================================================
# Step Tables
# ============================================================================

@pytest.mark.parametrize("score,fertilizer", [
    (10, 5),
    (8, 5),
    (7.9, 3),
    (6, 3),
    (5.5, 2),
    (4, 2),
    (3.9, 1),
    (2, 1),
    (1.9, 0),
    (0, 0),
])
def test_diet_reward(score, fertilizer):
    assert diet_reward(score) == fertilizer


@pytest.mark.parametrize("steps,items", [
    (0, 0),
    (4999, 0),
    (5000, 1),
    (6999, 1),
    (7000, 2),
    (9999, 2),
    (10000, 3),
    (25000, 3),
])
def test_walk_reward(steps, items):
    assert walk_reward(steps) == items


def test_rewards_are_deterministic():
    """Same input, same output"""
    assert diet_reward(6.4) == diet_reward(6.4)
    assert walk_reward(7200) == walk_reward(7200)


def test_quiz_reward():
    assert quiz_reward(True) == config.QUIZ_CORRECT_EXP
    assert quiz_reward(False) == 0


def test_cafe_reward():
    assert cafe_reward(3) == 3 * config.CAFE_EXP_PER_CORRECT
    assert cafe_reward(0) == 0
    assert cafe_reward(-1) == 0


# ============================================================================
# MIND Score
# ============================================================================

def test_mind_score_sums_known_foods():
    """spinach 1.0 + salmon 1.0 + tofu 0.9 + brown rice 0.8"""
    assert mind_score(["spinach", "salmon", "tofu", "brown rice"]) == 3.7


def test_mind_score_normalizes_names():
    assert mind_score(["  Spinach ", "SALMON"]) == 2.0


def test_mind_score_ignores_unknown_foods():
    assert mind_score(["pizza", "walnut"]) == 0.9


def test_mind_score_counts_duplicates():
    assert mind_score(["salmon", "salmon"]) == 2.0


def test_mind_score_clamps_to_range():
    """Penalties never push below zero, plenty never above ten"""
    assert mind_score(["fast food", "sausage"]) == 0.0
    assert mind_score(["spinach"] * 15) == 10.0


def test_mind_feedback_tiers():
    assert "Wonderful" in mind_feedback(8.5)
    assert "Great" in mind_feedback(6)
    assert "Not bad" in mind_feedback(4)
    assert "leafy greens" in mind_feedback(1)


# ============================================================================
# Progress and Composite Score
# ============================================================================

def test_walk_progress_caps_at_100():
    assert walk_progress(2500, 5000) == 50
    assert walk_progress(5000, 5000) == 100
    assert walk_progress(12000, 5000) == 100


def test_walk_progress_rounds_half_up():
    assert walk_progress(1, 8) == 13


def test_composite_score_example():
    """3000/5000 steps, diet 8, cafe 20/30: 24 + 32 + 13.33 -> 69"""
    assert composite_score(3000, 5000, 8, 20, 30) == 69


def test_composite_score_reference_day():
    """Full walk, diet 7, cafe 10/30: 40 + 28 + 6.67 = 74.67 -> 75"""
    assert composite_score(5000, 5000, 7, 10, 30) == 75


def test_composite_score_caps_components():
    assert composite_score(20000, 5000, 10, 90, 30) == 100
    assert composite_score(0, 5000, 0, 0, 30) == 0


def test_composite_score_uses_configured_cafe_max():
    assert composite_score(0, 5000, 0, config.CAFE_SCORE_MAX) == 20


def test_composite_score_in_range():
    for steps in (0, 1234, 5000, 9000):
        for diet in (0, 3.3, 10):
            for cafe in (0, 10, 40):
                assert 0 <= composite_score(steps, 5000, diet, cafe, 30) <= 100
