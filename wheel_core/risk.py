"""Heuristic risk and probability estimates derived from house statistics.

These numbers are approximations kept for comparability with earlier
releases of the simulator. They are not exact distributions.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Optional

from .data import BREAK_RISK_SCALE, HIGH_BREAK_RISK
from .models import BreakProbabilities, HouseStats, PrizeRange, SimulationMode
from .profit import compute_profit


def worst_case_slot_count(
    ranges: Sequence[PrizeRange],
    default_prize: float,
    total_slots: int,
) -> tuple[float, int]:
    """Return the highest prize cost and the slot count that pays it.

    The first range in list order with the highest cost supplies the slot
    count. When the default prize is strictly the most expensive, the
    unallocated default slots are used instead.
    """

    worst_cost = default_prize
    for prize in ranges:
        if prize.unit_cost > worst_cost:
            worst_cost = prize.unit_cost
    for prize in ranges:
        if prize.unit_cost == worst_cost:
            return worst_cost, prize.slot_count
    allocated = sum(prize.slot_count for prize in ranges)
    return worst_cost, max(total_slots - allocated, 0)


def short_term_risk(
    stats: HouseStats | float,
    avg_profit_per_spin: Optional[float],
    price_per_spin: float,
    ranges: Sequence[PrizeRange],
    default_prize: float,
    total_slots: int,
    mode: SimulationMode = SimulationMode.NORMAL,
    commission_percent: float = 0.0,
) -> float:
    """Estimate the chance that the next spin or break leaves earnings negative.

    Parameters
    ----------
    stats:
        Current house statistics, or the total earnings directly.
    avg_profit_per_spin:
        Average profit so far. Accepted for interface compatibility; the
        estimate does not depend on it.
    price_per_spin:
        Spin price paid by the player.
    ranges:
        Ordered prize ranges.
    default_prize:
        Cost of the default prize.
    total_slots:
        Wheel size.
    mode:
        ``NORMAL`` scores the next spin, ``REMOVE_HIT_SLOTS`` the next break.
    commission_percent:
        Platform commission on ``[0, 100]``.

    Returns
    -------
    float
        ``1.0`` when earnings are already at or below zero, ``0.0`` when no
        single outcome can lose money, otherwise a value in ``[0, 1]``.
    """

    earnings = stats.total_earnings if isinstance(stats, HouseStats) else float(stats)
    if earnings <= 0:
        return 1.0

    if mode == SimulationMode.NORMAL:
        worst_cost, worst_slots = worst_case_slot_count(ranges, default_prize, total_slots)
        worst_profit = compute_profit(price_per_spin, worst_cost, commission_percent).profit
        if worst_profit >= 0:
            return 0.0
        hits_to_negative = math.ceil(earnings / abs(worst_profit))
        probability_of_worst = worst_slots / total_slots
        return probability_of_worst**hits_to_negative

    stop_ranges = [prize for prize in ranges if prize.stop_when_hit]
    if not stop_ranges:
        return 0.0

    expected_break_cost = 0.0
    for prize in stop_ranges:
        expected_break_cost += (total_slots / prize.slot_count) * (price_per_spin - default_prize)
    expected_break_cost *= 1 - commission_percent / 100

    if expected_break_cost <= 0:
        return 0.0
    if expected_break_cost >= earnings:
        return HIGH_BREAK_RISK
    return (expected_break_cost / earnings) * BREAK_RISK_SCALE


def break_probabilities(
    worst_break_spins: int,
    best_break_spins: int,
    total_breaks: int,
    total_slots: int,
) -> BreakProbabilities:
    """Return recurrence and sequence probabilities for the best and worst breaks.

    The empirical values are ``1 / total_breaks`` (zero before any break is
    observed). The sequence values are the chance of drawing one particular
    sequence of ``spins`` slots independently, ``(1 / total_slots) ** spins``.
    """

    empirical = 1.0 / total_breaks if total_breaks > 0 else 0.0
    per_slot = 1.0 / total_slots if total_slots > 0 else 0.0
    worst_sequence = per_slot**worst_break_spins if worst_break_spins > 0 else 0.0
    best_sequence = per_slot**best_break_spins if best_break_spins > 0 else 0.0
    return BreakProbabilities(
        worst_break_probability=empirical,
        best_break_probability=empirical,
        worst_break_spin_probability=worst_sequence,
        best_break_spin_probability=best_sequence,
    )
