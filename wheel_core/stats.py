"""Running house statistics. Every fold returns a new ``HouseStats``."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import replace
from typing import Optional

from .models import BreakBatch, BreakOutcome, HouseStats, SpinOutcome
from .risk import break_probabilities
from .simulation import is_better_break, is_worse_break


def initial_house_stats() -> HouseStats:
    """Return empty statistics for a new or cleared session."""

    return HouseStats()


def _merge_counts(base: Mapping[str, int], extra: Mapping[str, int]) -> dict[str, int]:
    merged = dict(base)
    for name, amount in extra.items():
        merged[name] = merged.get(name, 0) + amount
    return merged


def fold_spin(stats: HouseStats, outcome: SpinOutcome) -> HouseStats:
    """Add one spin to the totals; break records are carried over untouched."""

    return replace(
        stats,
        total_earnings=stats.total_earnings + outcome.profit,
        total_spins=stats.total_spins + 1,
        prize_distribution=_merge_counts(stats.prize_distribution, {outcome.prize_name: 1}),
    )


def fold_spins(stats: HouseStats, outcomes: Iterable[SpinOutcome]) -> HouseStats:
    """Fold a batch of spins in one pass."""

    earnings = stats.total_earnings
    spins = stats.total_spins
    distribution = dict(stats.prize_distribution)
    for outcome in outcomes:
        earnings += outcome.profit
        spins += 1
        distribution[outcome.prize_name] = distribution.get(outcome.prize_name, 0) + 1
    return replace(
        stats,
        total_earnings=earnings,
        total_spins=spins,
        prize_distribution=distribution,
    )


def merge_break_records(
    best: Optional[BreakOutcome],
    worst: Optional[BreakOutcome],
    candidates: Iterable[BreakOutcome],
) -> tuple[Optional[BreakOutcome], Optional[BreakOutcome]]:
    """Return updated best and worst breaks after considering ``candidates``."""

    for candidate in candidates:
        if is_better_break(candidate, best):
            best = candidate
        if is_worse_break(candidate, worst):
            worst = candidate
    return best, worst


def fold_breaks(
    stats: HouseStats,
    batch: BreakBatch,
    run_count: int,
    total_slots: int,
) -> HouseStats:
    """Fold a ``run_breaks`` result into the totals.

    Parameters
    ----------
    stats:
        Statistics before the run.
    batch:
        Result returned by ``simulation.run_breaks``.
    run_count:
        Number of breaks requested; added to ``total_breaks``.
    total_slots:
        Wheel size, used for the sequence probabilities.
    """

    if run_count < 0:
        raise ValueError("Break count cannot be negative.")

    best, worst = merge_break_records(stats.best_break, stats.worst_break, batch.breaks)
    total_breaks = stats.total_breaks + run_count
    probabilities = break_probabilities(
        worst.spin_count if worst is not None else 0,
        best.spin_count if best is not None else 0,
        total_breaks,
        total_slots,
    )
    return replace(
        stats,
        total_earnings=stats.total_earnings + batch.total_profit,
        total_spins=stats.total_spins + batch.total_spins,
        total_breaks=total_breaks,
        prize_distribution=_merge_counts(stats.prize_distribution, batch.prize_counts),
        best_break=best,
        worst_break=worst,
        probabilities=probabilities,
    )
