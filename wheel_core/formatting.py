"""Display formatting for money, probabilities, and counts."""

from __future__ import annotations

from typing import Optional


def format_currency(amount: float) -> str:
    """Return ``amount`` as US dollars, e.g. ``$1,234.50`` or ``-$25.00``."""

    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def format_probability(probability: Optional[float]) -> str:
    """Return a percentage with two decimals, or ``N/A`` when unknown."""

    if probability is None:
        return "N/A"
    return f"{probability * 100:.2f}%"


def format_probability_as_odds(probability: Optional[float]) -> str:
    """Return ``1 in N`` odds, or ``N/A`` for an unknown or zero probability."""

    if probability is None or probability == 0:
        return "N/A"
    odds = round(1 / probability)
    return f"1 in {odds:,}"


def format_large_number(value: float) -> str:
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,}"
