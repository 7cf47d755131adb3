"""Tests for Pydantic model validation"""
import pytest
from pydantic import ValidationError

from silverville.models.cafe import CafeRound, Customer, MenuItem
from silverville.models.diet import DietAnalysis
from silverville.models.quiz import QuizRecord
from silverville.models.village import Building, BuildingKind

LATTE = MenuItem(id="cafe_latte", name="Cafe Latte", icon="🥛☕")
TEA = MenuItem(id="green_tea_latte", name="Green Tea Latte", icon="🍵")
CUSTOMER = Customer(name="Dubu", icon="🐻", personality="easygoing")


class TestCafeRound:
    def test_valid_round(self):
        cafe_round = CafeRound(
            customer=CUSTOMER,
            correct_item=LATTE,
            order_text="One Cafe Latte, please.",
            distractor_text="Lovely weather!",
            choices=[TEA, LATTE],
        )
        assert cafe_round.correct_item.id == "cafe_latte"

    def test_correct_item_must_be_offered(self):
        with pytest.raises(ValidationError, match="missing from choices"):
            CafeRound(
                customer=CUSTOMER,
                correct_item=LATTE,
                order_text="",
                distractor_text="",
                choices=[TEA, MenuItem(id="cappuccino", name="Cappuccino", icon="☕")],
            )

    def test_choices_must_be_distinct(self):
        with pytest.raises(ValidationError):
            CafeRound(
                customer=CUSTOMER,
                correct_item=LATTE,
                order_text="",
                distractor_text="",
                choices=[LATTE, LATTE],
            )

    def test_round_is_immutable(self):
        cafe_round = CafeRound(
            customer=CUSTOMER, correct_item=LATTE, order_text="", distractor_text="", choices=[TEA, LATTE]
        )
        with pytest.raises(ValidationError):
            cafe_round.order_text = "changed"


class TestDietAnalysis:
    def test_score_bounds(self):
        with pytest.raises(ValidationError):
            DietAnalysis(mind_score=10.5, fertilizer=5, feedback="")
        with pytest.raises(ValidationError):
            DietAnalysis(mind_score=5, fertilizer=-1, feedback="")

    def test_each_analysis_has_unique_id(self):
        a = DietAnalysis(mind_score=5, fertilizer=2, feedback="")
        b = DietAnalysis(mind_score=5, fertilizer=2, feedback="")
        assert a.id != b.id


class TestVillageModels:
    def test_building_unlock_level_range(self):
        with pytest.raises(ValidationError):
            Building(id="castle", kind=BuildingKind.HOUSE, name="Castle", icon="🏰", unlock_level=11)

    def test_quiz_record_defaults_timestamp(self):
        record = QuizRecord(prompt="?", chosen_answer="A", is_correct=False)
        assert record.timestamp is not None
