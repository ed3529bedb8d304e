"""Validated construction and editing of wheel configurations.

Every edit returns a new ``WheelConfig``; the input is never modified. Slot
capacity is checked whenever prizes or the wheel size change, so engines can
assume ``allocated_slots <= total_slots``.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import replace
from itertools import count
from typing import Any, Optional

from .data import (
    DEFAULT_COMMISSION_PERCENT,
    DEFAULT_PRICE_PER_SPIN,
    DEFAULT_PRIZE_ROWS,
    DEFAULT_PRIZE_VALUE,
    DEFAULT_TOTAL_SLOTS,
    normalize_config_payload,
)
from .errors import ConfigCapacityExceeded, ConfigValidationError, PrizeNotFound
from .models import PrizeRange, WheelConfig
from .profit import validate_commission

_PRIZE_FIELDS = {"name", "unit_cost", "slot_count", "stop_when_hit"}
_id_sequence = count(1)


def validate_positive_number(value: float, field_name: str) -> None:
    """Raise ``ConfigValidationError`` unless ``value`` is a number above zero."""

    if value is None or isinstance(value, bool) or math.isnan(value) or value <= 0:
        raise ConfigValidationError(f"{field_name} must be a positive number")


def validate_non_negative_number(value: float, field_name: str) -> None:
    if value is None or isinstance(value, bool) or math.isnan(value) or value < 0:
        raise ConfigValidationError(f"{field_name} cannot be negative")


def validate_not_empty(value: Optional[str], field_name: str) -> None:
    if not value or not value.strip():
        raise ConfigValidationError(f"{field_name} cannot be empty")


def validate_slots(slots: int, available_slots: int) -> None:
    """Raise ``ConfigCapacityExceeded`` when ``slots`` exceeds ``available_slots``."""

    if slots > available_slots:
        raise ConfigCapacityExceeded(slots, available_slots)


def validate_prize(prize: PrizeRange) -> None:
    validate_not_empty(prize.name, "Prize name")
    validate_non_negative_number(prize.unit_cost, "Prize value")
    validate_positive_number(prize.slot_count, "Number of slots")
    if int(prize.slot_count) != prize.slot_count:
        raise ConfigValidationError("Number of slots must be a whole number")


def validate_config(config: WheelConfig) -> WheelConfig:
    """Check every field and the slot capacity invariant.

    Returns ``config``, with a whole-number float ``total_slots`` turned into
    an ``int``.

    Raises
    ------
    ConfigValidationError
        If a field is missing, negative, fractional where a
        whole number is needed, or a prize id is repeated.
    ConfigCapacityExceeded
        If the prizes need more slots than ``total_slots``.
    InvalidCommission
        If the commission percentage lies outside ``[0, 100]``.
    """

    validate_positive_number(config.total_slots, "Total slots")
    if int(config.total_slots) != config.total_slots:
        raise ConfigValidationError("Total slots must be a whole number")
    validate_non_negative_number(config.price_per_spin, "Price per spin")
    validate_non_negative_number(config.default_prize, "Default prize")
    validate_commission(config.commission_percent)

    seen_ids: set[str] = set()
    for prize in config.prizes:
        validate_prize(prize)
        if prize.id in seen_ids:
            raise ConfigValidationError(f"Duplicate prize id '{prize.id}'")
        seen_ids.add(prize.id)

    validate_slots(config.allocated_slots, config.total_slots)
    if not isinstance(config.total_slots, int):
        config = replace(config, total_slots=int(config.total_slots))
    return config


def default_prizes() -> tuple[PrizeRange, ...]:
    """Return the prize ranges a new wheel starts with."""

    return tuple(
        PrizeRange(id=prize_id, name=name, unit_cost=cost, slot_count=slots, stop_when_hit=stop)
        for prize_id, name, cost, slots, stop in DEFAULT_PRIZE_ROWS
    )


def make_config(
    total_slots: int = DEFAULT_TOTAL_SLOTS,
    price_per_spin: float = DEFAULT_PRICE_PER_SPIN,
    default_prize: float = DEFAULT_PRIZE_VALUE,
    prizes: Optional[Iterable[PrizeRange]] = None,
    commission_percent: float = DEFAULT_COMMISSION_PERCENT,
) -> WheelConfig:
    """Build and validate a configuration, using the default prizes when omitted."""

    config = WheelConfig(
        total_slots=total_slots,
        price_per_spin=price_per_spin,
        default_prize=default_prize,
        prizes=default_prizes() if prizes is None else tuple(prizes),
        commission_percent=commission_percent,
    )
    return validate_config(config)


def with_parameters(config: WheelConfig, **changes: Any) -> WheelConfig:
    """Return ``config`` with wheel-level fields replaced and re-validated.

    Shrinking ``total_slots`` below the allocated prize slots is rejected.
    """

    allowed = {"total_slots", "price_per_spin", "default_prize", "commission_percent"}
    unknown = set(changes) - allowed
    if unknown:
        raise ConfigValidationError(f"Unknown configuration field(s): {sorted(unknown)}")
    return validate_config(replace(config, **changes))


def _find_prize(config: WheelConfig, prize_id: str) -> int:
    for index, prize in enumerate(config.prizes):
        if prize.id == prize_id:
            return index
    raise PrizeNotFound(prize_id)


def new_prize_id(config: WheelConfig) -> str:
    """Return a prize id not used by ``config``."""

    taken = {prize.id for prize in config.prizes}
    while True:
        candidate = f"prize_{next(_id_sequence)}"
        if candidate not in taken:
            return candidate


def add_prize(
    config: WheelConfig,
    name: str,
    unit_cost: float,
    slot_count: int,
    stop_when_hit: bool = True,
    prize_id: Optional[str] = None,
) -> WheelConfig:
    """Append a prize range after the existing ones.

    Raises
    ------
    ConfigValidationError
        If the name is empty, the cost negative, or the slot count not positive.
    ConfigCapacityExceeded
        If the new range does not fit into the unallocated slots.
    """

    validate_not_empty(name, "Prize name")
    validate_positive_number(slot_count, "Number of slots")
    validate_non_negative_number(unit_cost, "Prize value")
    validate_slots(config.allocated_slots + slot_count, config.total_slots)

    prize = PrizeRange(
        id=prize_id or new_prize_id(config),
        name=name.strip(),
        unit_cost=float(unit_cost),
        slot_count=int(slot_count),
        stop_when_hit=stop_when_hit,
    )
    return validate_config(replace(config, prizes=config.prizes + (prize,)))


def update_prize(config: WheelConfig, prize_id: str, **changes: Any) -> WheelConfig:
    """Replace fields of one prize range, keeping its position in the order."""

    unknown = set(changes) - _PRIZE_FIELDS
    if unknown:
        raise ConfigValidationError(f"Unknown prize field(s): {sorted(unknown)}")

    index = _find_prize(config, prize_id)
    current = config.prizes[index]
    updated = replace(current, **changes)
    validate_prize(updated)
    other_slots = config.allocated_slots - current.slot_count
    validate_slots(other_slots + updated.slot_count, config.total_slots)

    prizes = config.prizes[:index] + (updated,) + config.prizes[index + 1 :]
    return validate_config(replace(config, prizes=prizes))


def remove_prize(config: WheelConfig, prize_id: str) -> WheelConfig:
    index = _find_prize(config, prize_id)
    return replace(config, prizes=config.prizes[:index] + config.prizes[index + 1 :])


def toggle_stop_when_hit(config: WheelConfig, prize_id: str) -> WheelConfig:
    index = _find_prize(config, prize_id)
    current = config.prizes[index]
    return update_prize(config, prize_id, stop_when_hit=not current.stop_when_hit)


def move_prize(config: WheelConfig, prize_id: str, new_index: int) -> WheelConfig:
    """Move a prize range to ``new_index``; this changes which slots it owns."""

    index = _find_prize(config, prize_id)
    prizes = list(config.prizes)
    prize = prizes.pop(index)
    new_index = min(max(new_index, 0), len(prizes))
    prizes.insert(new_index, prize)
    return replace(config, prizes=tuple(prizes))


def reset_prizes(config: WheelConfig) -> WheelConfig:
    """Restore the default prize ranges, keeping the wheel-level parameters."""

    return validate_config(replace(config, prizes=default_prizes()))


def config_from_payload(raw: Mapping[str, Any]) -> WheelConfig:
    """Build a validated configuration from a stored camelCase payload."""

    payload = normalize_config_payload(raw)
    prizes = tuple(
        PrizeRange(
            id=row["id"],
            name=row["name"],
            unit_cost=row["unitCost"],
            slot_count=row["slots"],
            stop_when_hit=row["stopWhenHit"],
        )
        for row in payload["prizeConfigs"]
    )
    return validate_config(
        WheelConfig(
            total_slots=payload["totalSlots"],
            price_per_spin=payload["pricePerSpin"],
            default_prize=payload["defaultPrize"],
            prizes=prizes,
            commission_percent=payload["commissionPercent"],
        )
    )


def config_to_payload(config: WheelConfig) -> dict[str, Any]:
    """Serialise ``config`` to the camelCase layout used by saved files."""

    return {
        "totalSlots": config.total_slots,
        "pricePerSpin": config.price_per_spin,
        "defaultPrize": config.default_prize,
        "commissionPercent": config.commission_percent,
        "prizeConfigs": [
            {
                "id": prize.id,
                "name": prize.name,
                "unitCost": prize.unit_cost,
                "slots": prize.slot_count,
                "stopWhenHit": prize.stop_when_hit,
            }
            for prize in config.prizes
        ],
    }
