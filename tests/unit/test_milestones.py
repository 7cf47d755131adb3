"""Unit tests for step milestone scheduling"""
import pytest

from silverville.exceptions import ValidationError
from silverville.gamification.milestones import MilestoneScheduler


def test_fires_on_boundary():
    scheduler = MilestoneScheduler(interval=1000)
    assert scheduler.observe(999) is None
    assert scheduler.observe(1000) == 1000
    assert scheduler.last_fired == 1000


def test_each_boundary_fires_once():
    """Repeated or lower observations never re-fire a boundary"""
    scheduler = MilestoneScheduler(interval=1000)
    assert scheduler.observe(1200) == 1000
    assert scheduler.observe(1200) is None
    assert scheduler.observe(1999) is None
    assert scheduler.observe(1100) is None
    assert scheduler.observe(2000) == 2000


def test_next_boundary_after_last_fired():
    scheduler = MilestoneScheduler(interval=1000)
    scheduler.observe(1000)
    assert scheduler.last_fired == 1000

    assert scheduler.observe(2600) == 2000
    assert scheduler.last_fired == 2000


def test_same_reading_twice_fires_once():
    scheduler = MilestoneScheduler(interval=1000)
    assert scheduler.observe(1000) == 1000
    assert scheduler.observe(1000) is None


def test_zero_steps_never_fires():
    scheduler = MilestoneScheduler(interval=1000)
    assert scheduler.observe(0) is None


def test_burst_fires_only_highest_boundary():
    """A jump across several boundaries emits the highest one only"""
    scheduler = MilestoneScheduler(interval=1000)
    assert scheduler.observe(3500) == 3000
    assert scheduler.observe(3999) is None
    assert scheduler.observe(4000) == 4000


def test_strictly_increasing_sequence():
    """Fired values are strictly increasing multiples of the interval"""
    scheduler = MilestoneScheduler(interval=1000)
    fired = []
    for steps in [100, 1000, 1000, 1500, 2100, 2100, 5200, 5900, 6000]:
        milestone = scheduler.observe(steps)
        if milestone is not None:
            fired.append(milestone)

    assert fired == [1000, 2000, 5000, 6000]
    assert all(m % 1000 == 0 for m in fired)
    assert fired == sorted(set(fired))


def test_reset_starts_new_session():
    scheduler = MilestoneScheduler(interval=1000)
    scheduler.observe(2000)
    scheduler.reset()
    assert scheduler.last_fired == 0
    assert scheduler.observe(1000) == 1000


def test_custom_interval():
    scheduler = MilestoneScheduler(interval=250)
    assert scheduler.observe(260) == 250
    assert scheduler.observe(500) == 500


@pytest.mark.parametrize("interval", [0, -100])
def test_invalid_interval(interval):
    with pytest.raises(ValidationError):
        MilestoneScheduler(interval=interval)
