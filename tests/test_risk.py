import pytest

from wheel_core import PrizeRange, SimulationMode, break_probabilities, short_term_risk
from wheel_core.risk import worst_case_slot_count

PRIZE_X = PrizeRange(id="x", name="Prize X", unit_cost=50.0, slot_count=1)


def risk(earnings, ranges=(PRIZE_X,), price=25.0, default=10.0, slots=25, **kwargs):
    return short_term_risk(earnings, None, price, list(ranges), default, slots, **kwargs)


@pytest.mark.parametrize("earnings", [0.0, -0.01, -500.0])
@pytest.mark.parametrize("mode", list(SimulationMode))
def test_risk_is_certain_without_positive_earnings(earnings, mode):
    assert risk(earnings, mode=mode) == 1.0


def test_no_risk_when_every_outcome_is_profitable():
    cheap = PrizeRange(id="c", name="Cheap", unit_cost=20.0, slot_count=3)
    assert risk(100.0, ranges=[cheap], price=25.0, default=5.0) == 0.0


def test_normal_mode_needs_consecutive_worst_hits():
    # worst spin loses 25, so 30 earnings survive one hit but not two
    assert risk(30.0) == pytest.approx((1 / 25) ** 2)
    assert risk(25.0) == pytest.approx(1 / 25)


def test_normal_mode_counts_commission():
    # 20% commission turns the worst spin into a 30 loss
    assert risk(30.0, commission_percent=20.0) == pytest.approx(1 / 25)


def test_expensive_default_prize_uses_default_slots():
    assert worst_case_slot_count([PRIZE_X], 100.0, 25) == (100.0, 24)
    assert risk(50.0, default=100.0) == pytest.approx(24 / 25)


def test_first_range_wins_cost_ties():
    twin = PrizeRange(id="t", name="Twin", unit_cost=50.0, slot_count=4)
    assert worst_case_slot_count([PRIZE_X, twin], 10.0, 25) == (50.0, 1)
    assert worst_case_slot_count([twin, PRIZE_X], 10.0, 25) == (50.0, 4)


def test_break_mode_scales_expected_cost():
    # expected break cost: 25 / 1 * (25 - 10) = 375
    mode = SimulationMode.REMOVE_HIT_SLOTS
    assert risk(1000.0, mode=mode) == pytest.approx(375 / 1000 * 0.5)
    assert risk(300.0, mode=mode) == 0.75
    assert risk(1000.0, mode=mode, commission_percent=20.0) == pytest.approx(300 / 1000 * 0.5)


def test_break_mode_without_stop_prizes_has_no_risk():
    loose = PrizeRange(id="l", name="Loose", unit_cost=50.0, slot_count=2, stop_when_hit=False)
    assert risk(100.0, ranges=[loose], mode=SimulationMode.REMOVE_HIT_SLOTS) == 0.0


def test_break_mode_with_default_above_price_has_no_risk():
    assert risk(100.0, default=30.0, mode=SimulationMode.REMOVE_HIT_SLOTS) == 0.0


def test_break_probabilities():
    probabilities = break_probabilities(3, 2, 4, 25)
    assert probabilities.worst_break_probability == 0.25
    assert probabilities.best_break_probability == 0.25
    assert probabilities.worst_break_spin_probability == pytest.approx(25.0**-3)
    assert probabilities.best_break_spin_probability == pytest.approx(25.0**-2)


def test_break_probabilities_before_any_break():
    probabilities = break_probabilities(0, 0, 0, 25)
    assert probabilities.worst_break_probability == 0.0
    assert probabilities.best_break_spin_probability == 0.0
