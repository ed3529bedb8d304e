"""House profit helpers for a single spin."""

from __future__ import annotations

from .errors import InvalidCommission
from .models import ProfitResult


def validate_commission(commission_percent: float) -> None:
    """Raise ``InvalidCommission`` unless the percent lies in ``[0, 100]``."""

    if not 0.0 <= commission_percent <= 100.0:
        raise InvalidCommission(commission_percent)


def clamp_commission(commission_percent: float) -> float:
    """Clamp a user-entered commission percentage to ``[0, 100]``."""

    return min(max(float(commission_percent), 0.0), 100.0)


def compute_profit(
    price_per_spin: float,
    prize_cost: float,
    commission_percent: float = 0.0,
) -> ProfitResult:
    """Return the house profit for one spin.

    Parameters
    ----------
    price_per_spin:
        Amount the player pays for the spin.
    prize_cost:
        Cost to the house of the prize that came up.
    commission_percent:
        Platform commission taken from the spin price, on ``[0, 100]``.
        Callers clamp this value; it is not clamped here.

    Raises
    ------
    InvalidCommission
        If ``commission_percent`` lies outside ``[0, 100]``.
    """

    validate_commission(commission_percent)
    commission_amount = price_per_spin * commission_percent / 100
    profit = price_per_spin - commission_amount - prize_cost
    return ProfitResult(profit=profit, commission_amount=commission_amount)
