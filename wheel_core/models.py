"""Dataclasses shared across the resolver, simulation, and statistics modules."""

from __future__ import annotations

from collections import Counter
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Optional


class SimulationMode(str, Enum):
    """How slots are drawn: independent spins or breaks without replacement."""

    NORMAL = "normal"
    REMOVE_HIT_SLOTS = "removeHitSlots"


@dataclass(frozen=True)
class PrizeRange:
    """Named prize occupying ``slot_count`` contiguous slots of the wheel."""

    id: str
    name: str
    unit_cost: float
    slot_count: int
    stop_when_hit: bool = True


@dataclass(frozen=True)
class WheelConfig:
    """Complete wheel setup used by every engine entry point."""

    total_slots: int
    price_per_spin: float
    default_prize: float
    prizes: tuple[PrizeRange, ...] = ()
    commission_percent: float = 0.0

    @property
    def allocated_slots(self) -> int:
        """Return the number of slots claimed by named prizes."""

        return sum(prize.slot_count for prize in self.prizes)

    @property
    def remaining_slots(self) -> int:
        """Return the number of slots that pay the default prize."""

        return max(self.total_slots - self.allocated_slots, 0)

    @property
    def stop_ranges(self) -> tuple[PrizeRange, ...]:
        return tuple(prize for prize in self.prizes if prize.stop_when_hit)

    @property
    def required_slots(self) -> int:
        """Return the slot count that must be drawn before a break ends."""

        return sum(prize.slot_count for prize in self.stop_ranges)


@dataclass(frozen=True)
class PrizeHit:
    """Prize that owns a particular slot."""

    prize_name: str
    unit_cost: float
    is_special: bool
    prize_index: Optional[int] = None


@dataclass(frozen=True)
class ProfitResult:
    """House profit for one spin after the platform commission."""

    profit: float
    commission_amount: float


@dataclass(frozen=True)
class SpinOutcome:
    """One recorded spin, as stored in the session history."""

    attempt_index: int
    slot: int
    unit_cost: float
    prize_name: str
    profit: float
    cost: float = 0.0


@dataclass(frozen=True)
class BreakOutcome:
    """Summary of one complete break cycle."""

    spin_count: int
    total_profit: float

    @property
    def profit_per_spin(self) -> float:
        return self.total_profit / self.spin_count


@dataclass(frozen=True)
class BreakProbabilities:
    """Empirical recurrence and theoretical sequence probabilities."""

    worst_break_probability: float = 0.0
    best_break_probability: float = 0.0
    worst_break_spin_probability: float = 0.0
    best_break_spin_probability: float = 0.0


@dataclass(frozen=True)
class HouseStats:
    """Running totals from the house's perspective."""

    total_earnings: float = 0.0
    total_spins: int = 0
    total_breaks: int = 0
    prize_distribution: Mapping[str, int] = field(default_factory=dict)
    best_break: Optional[BreakOutcome] = None
    worst_break: Optional[BreakOutcome] = None
    short_term_risk: float = 0.0
    probabilities: BreakProbabilities = field(default_factory=BreakProbabilities)

    def __post_init__(self) -> None:
        # read-only; folds always build a fresh mapping
        object.__setattr__(
            self, "prize_distribution", MappingProxyType(dict(self.prize_distribution))
        )

    @property
    def average_profit_per_spin(self) -> Optional[float]:
        if self.total_spins <= 0:
            return None
        return self.total_earnings / self.total_spins


@dataclass(frozen=True)
class SimulationSnapshot:
    """Result panel for the most recent spin, batch, or break run."""

    target_hit_attempt: int
    total_cost: float
    final_slot: int
    final_prize: float
    final_profit: float
    final_prize_name: str


@dataclass
class SpinBatch:
    """Outcomes of ``spin_batch`` together with the amount wagered."""

    outcomes: list[SpinOutcome]
    total_cost: float

    @property
    def total_profit(self) -> float:
        return sum(outcome.profit for outcome in self.outcomes)


@dataclass
class BreakBatch:
    """Aggregated result of ``run_breaks``.

    ``outcomes`` only keeps the most recent spins (see ``HISTORY_LIMIT``);
    ``total_spins``, ``total_profit`` and ``prize_counts`` cover every spin.
    """

    breaks: list[BreakOutcome]
    outcomes: list[SpinOutcome]
    total_spins: int
    total_profit: float
    total_cost: float
    prize_counts: Counter[str] = field(default_factory=Counter)
    best_break: Optional[BreakOutcome] = None
    worst_break: Optional[BreakOutcome] = None
