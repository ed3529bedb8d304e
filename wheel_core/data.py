"""Domain constants, defaults, and helpers for raw configuration payloads."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, Final

DEFAULT_PRIZE_NAME: Final[str] = "Default Prize"

DEFAULT_TOTAL_SLOTS: Final[int] = 25
DEFAULT_PRICE_PER_SPIN: Final[float] = 25.0
DEFAULT_PRIZE_VALUE: Final[float] = 10.0
DEFAULT_COMMISSION_PERCENT: Final[float] = 0.0

# Each entry: (id, name, unit cost, slot count, stop when hit)
DEFAULT_PRIZE_ROWS: Final[list[tuple[str, str, float, int, bool]]] = [
    ("prize1", "Prize X", 50.0, 1, True),
    ("prize2", "Prize Z", 30.0, 3, True),
]

HISTORY_LIMIT: Final[int] = 500
PROGRESS_CHUNK: Final[int] = 1000

HIGH_BREAK_RISK: Final[float] = 0.75  # reported when one break could wipe out earnings
BREAK_RISK_SCALE: Final[float] = 0.5

RawPrizeMapping = Mapping[str, Any]
RawConfigMapping = Mapping[str, Any]

# ---- Saved configuration file ----------------------------------------------

CONFIGURATIONS_FILENAME: Final[str] = "saved_configurations.json"
CONFIGURATIONS_JSON_PATH: Final[Path] = Path(__file__).with_name(CONFIGURATIONS_FILENAME)


def _coerce_int(value: object, fallback: int) -> int:
    try:
        return int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return fallback


def _coerce_float(value: object, fallback: float) -> float:
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return fallback


def normalize_prize_rows(raw_prizes: Iterable[RawPrizeMapping] | None) -> list[dict[str, Any]]:
    """Coerce stored prize entries into the canonical camelCase layout.

    Older saves store the prize cost under ``value`` instead of ``unitCost``;
    both are accepted. Missing ids and names are filled from the position in
    the list, and ``stopWhenHit`` defaults to ``True``.
    """

    if raw_prizes is None:
        return []

    rows: list[dict[str, Any]] = []
    for index, prize in enumerate(raw_prizes):
        if not isinstance(prize, Mapping):
            continue
        cost = prize.get("unitCost")
        if cost is None:
            cost = prize.get("value")
        slots = prize.get("slots")
        if slots is None:
            slots = prize.get("slotCount")
        stop_flag = prize.get("stopWhenHit")
        rows.append(
            {
                "id": str(prize.get("id") or f"prize_{index}"),
                "name": str(prize.get("name") or f"Prize {index + 1}"),
                "unitCost": _coerce_float(cost, 0.0),
                "slots": _coerce_int(slots, 0),
                "stopWhenHit": True if stop_flag is None else bool(stop_flag),
            }
        )
    return rows


def normalize_config_payload(raw: RawConfigMapping) -> dict[str, Any]:
    """Return a stored configuration payload with defaults filled in."""

    return {
        "totalSlots": _coerce_int(raw.get("totalSlots"), DEFAULT_TOTAL_SLOTS),
        "pricePerSpin": _coerce_float(raw.get("pricePerSpin"), DEFAULT_PRICE_PER_SPIN),
        "defaultPrize": _coerce_float(raw.get("defaultPrize"), DEFAULT_PRIZE_VALUE),
        "commissionPercent": _coerce_float(
            raw.get("commissionPercent"), DEFAULT_COMMISSION_PERCENT
        ),
        "prizeConfigs": normalize_prize_rows(raw.get("prizeConfigs")),
    }
