"""Slot-to-prize resolution for an ordered list of prize ranges."""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Sequence
from itertools import accumulate
from typing import Optional

from .data import DEFAULT_PRIZE_NAME
from .errors import InvalidSlot
from .models import PrizeHit, PrizeRange, WheelConfig


def resolve_slot(
    slot: int,
    ranges: Sequence[PrizeRange],
    default_prize: float,
    total_slots: Optional[int] = None,
) -> PrizeHit:
    """Return the prize that owns ``slot``.

    Ranges are checked in list order; range ``i`` owns the slots
    ``(consumed, consumed + slot_count]`` where ``consumed`` is the number of
    slots taken by the ranges before it. Slots past the last range pay the
    default prize.

    Parameters
    ----------
    slot:
        1-based slot number that was drawn.
    ranges:
        Ordered prize ranges.
    default_prize:
        Cost of the default prize for unallocated slots.
    total_slots:
        Wheel size. When given, slots above it are rejected.

    Raises
    ------
    InvalidSlot
        If ``slot`` is below 1 or above ``total_slots``.
    """

    if slot < 1 or (total_slots is not None and slot > total_slots):
        raise InvalidSlot(slot, total_slots)

    slots_consumed = 0
    for index, prize in enumerate(ranges):
        upper_bound = slots_consumed + prize.slot_count
        if slots_consumed < slot <= upper_bound:
            return PrizeHit(
                prize_name=prize.name,
                unit_cost=prize.unit_cost,
                is_special=True,
                prize_index=index,
            )
        slots_consumed = upper_bound

    return PrizeHit(prize_name=DEFAULT_PRIZE_NAME, unit_cost=default_prize, is_special=False)


class PrizeLayout:
    """Pre-computed slot boundaries for repeated lookups on one configuration."""

    def __init__(self, config: WheelConfig) -> None:
        self.total_slots = config.total_slots
        self.ranges = config.prizes
        self.default_prize = config.default_prize
        self._upper_bounds = tuple(accumulate(prize.slot_count for prize in self.ranges))
        self._hits = tuple(
            PrizeHit(
                prize_name=prize.name,
                unit_cost=prize.unit_cost,
                is_special=True,
                prize_index=index,
            )
            for index, prize in enumerate(self.ranges)
        )
        self._default_hit = PrizeHit(
            prize_name=DEFAULT_PRIZE_NAME,
            unit_cost=self.default_prize,
            is_special=False,
        )

    @property
    def allocated_slots(self) -> int:
        return self._upper_bounds[-1] if self._upper_bounds else 0

    def resolve(self, slot: int) -> PrizeHit:
        """Return the prize owning ``slot``; same result as ``resolve_slot``."""

        if not 1 <= slot <= self.total_slots:
            raise InvalidSlot(slot, self.total_slots)
        index = bisect_left(self._upper_bounds, slot)
        if index >= len(self._hits):
            return self._default_hit
        return self._hits[index]

    def slots_for(self, prize_index: int) -> range:
        """Return the slot numbers owned by the range at ``prize_index``."""

        upper = self._upper_bounds[prize_index]
        lower = upper - self.ranges[prize_index].slot_count
        return range(lower + 1, upper + 1)

    def default_slots(self) -> range:
        """Return the slot numbers that pay the default prize."""

        return range(self.allocated_slots + 1, self.total_slots + 1)
