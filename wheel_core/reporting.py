"""Tabular views of history and statistics for display and export."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Final

import numpy as np
import pandas as pd

from .models import BreakOutcome, HouseStats, SpinOutcome

HISTORY_COLUMNS: Final[list[str]] = ["attempt", "slot", "prize", "unit_cost", "cost", "profit"]
HISTOGRAM_COLUMNS: Final[list[str]] = ["bin_start", "bin_end", "count", "probability"]


def history_frame(outcomes: Sequence[SpinOutcome]) -> pd.DataFrame:
    """Return one row per spin with a running cumulative profit column."""

    frame = pd.DataFrame(
        [
            (o.attempt_index, o.slot, o.prize_name, o.unit_cost, o.cost, o.profit)
            for o in outcomes
        ],
        columns=HISTORY_COLUMNS,
    )
    frame["cumulative_profit"] = frame["profit"].cumsum()
    return frame


def prize_distribution_frame(stats: HouseStats) -> pd.DataFrame:
    """Return hit counts and shares per prize, most frequent first."""

    frame = pd.DataFrame(
        sorted(stats.prize_distribution.items(), key=lambda item: (-item[1], item[0])),
        columns=["prize", "hits"],
    )
    total = frame["hits"].sum()
    frame["share"] = frame["hits"] / total if total > 0 else 0.0
    return frame


def break_frame(breaks: Sequence[BreakOutcome]) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "spins": [b.spin_count for b in breaks],
            "profit": [b.total_profit for b in breaks],
            "profit_per_spin": [b.profit_per_spin for b in breaks],
        }
    )


def break_profit_histogram(breaks: Sequence[BreakOutcome], bins: int = 20) -> pd.DataFrame:
    """Bucket breaks by profit per spin.

    Parameters
    ----------
    breaks:
        Break summaries from ``run_breaks``.
    bins:
        Number of equal-width buckets between the smallest and largest value.
    """

    if not breaks:
        return pd.DataFrame(columns=HISTOGRAM_COLUMNS)
    if bins < 1:
        raise ValueError("Histogram needs at least one bin.")

    values = pd.Series([b.profit_per_spin for b in breaks], dtype=float)
    low, high = float(values.min()), float(values.max())
    if np.isclose(low, high):
        low, high = low - 0.5, high + 0.5
    edges = np.linspace(low, high, bins + 1, dtype=float)
    categories = pd.cut(values, bins=edges, include_lowest=True, right=True)
    counts = categories.value_counts(sort=False).reindex(categories.cat.categories, fill_value=0)
    return pd.DataFrame(
        {
            "bin_start": [interval.left for interval in counts.index],
            "bin_end": [interval.right for interval in counts.index],
            "count": counts.values,
            "probability": counts.values / len(values),
        }
    )


def summarize_breaks(breaks: Sequence[BreakOutcome]) -> dict[str, float]:
    """Return spin-count and profit statistics over a set of breaks."""

    if not breaks:
        return {}
    spins = np.array([b.spin_count for b in breaks], dtype=float)
    per_spin = np.array([b.profit_per_spin for b in breaks], dtype=float)
    profits = np.array([b.total_profit for b in breaks], dtype=float)
    return {
        "breaks": float(len(breaks)),
        "mean_spins": float(spins.mean()),
        "median_spins": float(np.median(spins)),
        "p95_spins": float(np.percentile(spins, 95)),
        "mean_profit": float(profits.mean()),
        "mean_profit_per_spin": float(per_spin.mean()),
        "losing_share": float((profits < 0).mean()),
    }
