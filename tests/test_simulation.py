import pytest

from wheel_core import (
    BreakOutcome,
    NoStopCondition,
    PrizeRange,
    SlotSpaceExhausted,
    WheelConfig,
    run_break,
    run_breaks,
    spin_batch,
    spin_once,
)
from wheel_core.simulation import is_better_break, is_worse_break


def test_spin_once_prices_the_drawn_slot(single_prize_config, scripted):
    outcome = spin_once(single_prize_config, scripted(randint_values=[1]), history_length=7)
    assert outcome.attempt_index == 8
    assert outcome.slot == 1
    assert outcome.prize_name == "Prize X"
    assert outcome.profit == -25.0
    assert outcome.cost == 25.0


def test_spin_batch_totals(default_config, rng):
    batch = spin_batch(default_config, 300, rng)
    assert len(batch.outcomes) == 300
    assert batch.total_cost == 300 * default_config.price_per_spin
    assert batch.total_profit == pytest.approx(sum(o.profit for o in batch.outcomes))
    assert [o.attempt_index for o in batch.outcomes] == list(range(1, 301))


def test_spin_batch_rejects_negative_count(default_config, rng):
    with pytest.raises(ValueError):
        spin_batch(default_config, -1, rng)


def test_spin_batch_reports_progress_in_chunks(default_config, rng):
    calls = []
    spin_batch(default_config, 2500, rng, progress=lambda done, total: calls.append((done, total)))
    assert calls == [(1000, 2500), (2000, 2500), (2500, 2500)]


def test_break_ends_on_first_draw_of_stop_slot(single_prize_config, scripted):
    # slot 25, slot 24, then slot 1
    outcome, spins = run_break(single_prize_config, scripted(randrange_values=[24, 23, 0]))
    assert [spin.slot for spin in spins] == [25, 24, 1]
    assert outcome.spin_count == 3
    assert outcome.total_profit == pytest.approx(15.0 + 15.0 - 25.0)
    assert [spin.attempt_index for spin in spins] == [1, 2, 3]


def test_non_stopping_prize_does_not_end_break(mixed_config, scripted):
    # Bonus on slots 2 and 3, then the jackpot on slot 1
    outcome, spins = run_break(mixed_config, scripted(randrange_values=[1, 2, 0]))
    assert [spin.prize_name for spin in spins] == ["Bonus", "Bonus", "Jackpot"]
    assert outcome.spin_count == 3
    assert outcome.total_profit == pytest.approx(5.0 + 5.0 - 80.0)


def test_break_never_repeats_a_slot(default_config, rng):
    for _ in range(200):
        outcome, spins = run_break(default_config, rng)
        slots = [spin.slot for spin in spins]
        assert len(slots) == len(set(slots))
        assert len(slots) <= default_config.total_slots
        assert outcome.spin_count == len(spins)
        drawn_stops = {slot for slot in slots if slot <= default_config.required_slots}
        assert len(drawn_stops) == default_config.required_slots


def test_run_breaks_without_stop_prize_fails_fast(no_stop_config, rng):
    with pytest.raises(NoStopCondition):
        run_breaks(no_stop_config, 10, rng)
    with pytest.raises(NoStopCondition):
        run_break(no_stop_config, rng)


def test_overallocated_stop_ranges_are_rejected(rng):
    config = WheelConfig(
        total_slots=2,
        price_per_spin=5.0,
        default_prize=1.0,
        prizes=(PrizeRange(id="a", name="A", unit_cost=3.0, slot_count=3),),
    )
    with pytest.raises(SlotSpaceExhausted):
        run_break(config, rng)


def test_run_breaks_tracks_best_and_worst(single_prize_config, scripted):
    # First break hits slot 1 at once; second draws slot 6 then slot 1
    batch = run_breaks(single_prize_config, 2, scripted(randrange_values=[0, 5, 0]))
    first, second = batch.breaks
    assert (first.spin_count, first.total_profit) == (1, -25.0)
    assert (second.spin_count, second.total_profit) == (2, -10.0)
    assert batch.best_break is second
    assert batch.worst_break is first
    assert batch.total_spins == 3
    assert batch.total_cost == 75.0
    assert [o.attempt_index for o in batch.outcomes] == [1, 2, 3]
    assert batch.prize_counts == {"Prize X": 2, "Default Prize": 1}


def test_run_breaks_keeps_only_recent_spins(default_config, rng):
    batch = run_breaks(default_config, 50, rng, history_limit=20)
    assert len(batch.outcomes) == min(20, batch.total_spins)
    assert batch.outcomes[-1].attempt_index == batch.total_spins
    assert sum(batch.prize_counts.values()) == batch.total_spins


def test_best_break_uses_profit_per_spin():
    slow = BreakOutcome(spin_count=3, total_profit=30.0)
    fast = BreakOutcome(spin_count=2, total_profit=30.0)
    assert is_better_break(fast, slow)
    assert not is_worse_break(fast, slow)
    assert is_worse_break(slow, fast)


def test_ties_keep_the_current_record():
    current = BreakOutcome(spin_count=2, total_profit=20.0)
    challenger = BreakOutcome(spin_count=4, total_profit=40.0)
    assert not is_better_break(challenger, current)
    assert not is_worse_break(challenger, current)
    assert is_better_break(challenger, None)
    assert is_worse_break(challenger, None)
