"""Unit tests for the progression ledger"""
import pytest
from datetime import datetime, timedelta

from silverville.exceptions import ValidationError
from silverville.gamification.ledger import ProgressionLedger
from silverville.gamification.level_engine import level_for
from silverville.gamification.village import BUILDINGS
from silverville.models.quiz import QuizRecord
from silverville.models.village import Resident


# ============================================================================
# Resources
# ============================================================================

def test_fertilizer_grant_and_spend(ledger):
    assert ledger.add_fertilizer(5) == 5
    assert ledger.use_fertilizer(3) == 2


def test_fertilizer_overspend_clamps_to_zero(ledger):
    ledger.add_fertilizer(2)
    assert ledger.use_fertilizer(10) == 0
    assert ledger.fertilizer == 0


@pytest.mark.parametrize("method", ["add_fertilizer", "use_fertilizer", "add_landscape_items", "add_village_exp"])
def test_negative_amounts_rejected(ledger, method):
    with pytest.raises(ValidationError):
        getattr(ledger, method)(-1)


def test_landscape_items_accumulate(ledger):
    ledger.add_landscape_items(1)
    assert ledger.add_landscape_items(2) == 3


def test_resources_never_negative(ledger):
    """Arbitrary spend sequences keep counters at or above zero"""
    for amount in [3, 0, 7, 1, 12]:
        ledger.add_fertilizer(amount // 2)
        ledger.use_fertilizer(amount)
        assert ledger.fertilizer >= 0


# ============================================================================
# Village EXP and Level
# ============================================================================

def test_level_tracks_exp(ledger):
    result = ledger.add_village_exp(120)

    assert result == {
        "exp_awarded": 120,
        "new_total_exp": 120,
        "leveled_up": True,
        "old_level": 1,
        "new_level": 2,
    }
    assert ledger.village_level == level_for(ledger.village_exp)


def test_level_never_decreases_with_grants(ledger):
    previous = ledger.village_level
    for amount in [0, 5, 95, 40, 800, 10000]:
        ledger.add_village_exp(amount)
        assert ledger.village_level >= previous
        assert ledger.village_level == level_for(ledger.village_exp)
        previous = ledger.village_level


def test_no_level_up_within_level(ledger):
    ledger.add_village_exp(10)
    result = ledger.add_village_exp(10)
    assert result["leveled_up"] is False
    assert result["new_level"] == 1


def test_level_progress_delegates(ledger):
    ledger.add_village_exp(150)
    assert ledger.level_progress()["exp_to_next_level"] == 100


# ============================================================================
# Village Contents
# ============================================================================

def test_unlock_building_ignores_duplicates(ledger):
    town_hall = BUILDINGS[0]
    assert ledger.unlock_building(town_hall) is True
    assert ledger.unlock_building(town_hall) is False
    assert len(ledger.buildings) == 1


def test_available_buildings_follow_level(ledger):
    assert [b.id for b in ledger.available_buildings()] == ["town_hall"]
    ledger.add_village_exp(250)
    assert [b.id for b in ledger.available_buildings()] == ["town_hall", "cafe", "farm"]


def test_add_resident(ledger):
    ledger.add_resident(Resident(id="r1", display_name="Dubu", icon="🐻"))
    assert [r.display_name for r in ledger.residents] == ["Dubu"]


def test_read_access_returns_copies(ledger):
    ledger.residents.append("intruder")
    assert ledger.residents == []


# ============================================================================
# Walking and Diet
# ============================================================================

def test_quiz_history_keeps_order(ledger):
    now = datetime.now()
    ledger.add_quiz_record(QuizRecord(prompt="a", chosen_answer="x", is_correct=True, timestamp=now))
    stored = ledger.add_quiz_record(
        QuizRecord(prompt="b", chosen_answer="y", is_correct=False, timestamp=now - timedelta(minutes=5))
    )

    assert stored.timestamp == now
    timestamps = [r.timestamp for r in ledger.quiz_history]
    assert timestamps == sorted(timestamps)


def test_set_diet_score_validates_range(ledger):
    ledger.set_diet_score(7.5, ["salmon"])
    assert ledger.diet_score == 7.5
    assert ledger.last_foods == ["salmon"]

    with pytest.raises(ValidationError):
        ledger.set_diet_score(11, [])


def test_walk_goal_progress(ledger):
    ledger.set_steps(2500)
    assert ledger.walk_progress() == 50
    assert not ledger.walk_goal_reached()
    ledger.set_steps(5000)
    assert ledger.walk_goal_reached()


def test_invalid_walk_goal():
    with pytest.raises(ValidationError):
        ProgressionLedger(walk_goal=0)


# ============================================================================
# Cafe and Health Score
# ============================================================================

def test_cafe_score_and_streak(ledger):
    ledger.add_cafe_score(10)
    ledger.add_cafe_score(10)
    assert ledger.cafe_score == 20
    assert ledger.cafe_streak == 2

    ledger.reset_cafe_session()
    assert ledger.cafe_streak == 0
    assert ledger.cafe_score == 20


def test_health_score(ledger):
    """3000/5000 steps, diet 8, cafe 20 of 30 -> 69"""
    ledger.set_steps(3000)
    ledger.set_diet_score(8, ["salmon"])
    ledger.add_cafe_score(10)
    ledger.add_cafe_score(10)
    assert ledger.health_score() == 69


# ============================================================================
# Resets and Snapshot
# ============================================================================

def test_reset_daily_stats_keeps_village(ledger):
    ledger.set_steps(4000)
    ledger.set_diet_score(6, ["tofu"])
    ledger.add_cafe_score(10)
    ledger.add_village_exp(300)
    ledger.add_fertilizer(4)

    ledger.reset_daily_stats()

    assert ledger.steps == 0
    assert ledger.diet_score == 0
    assert ledger.cafe_score == 0
    assert ledger.quiz_history == []
    assert ledger.village_exp == 300
    assert ledger.fertilizer == 4


def test_reset_all(ledger):
    ledger.add_village_exp(1000)
    ledger.increment_streak()

    ledger.reset_all()

    assert ledger.village_exp == 0
    assert ledger.village_level == 1
    assert ledger.streak_days == 0
    assert ledger.walk_goal == 5000


def test_snapshot_reflects_state(ledger):
    ledger.set_steps(1000)
    ledger.add_fertilizer(3)

    snapshot = ledger.snapshot()

    assert snapshot.steps == 1000
    assert snapshot.fertilizer == 3
    assert snapshot.village_level == 1
    assert snapshot.health_score == ledger.health_score()
