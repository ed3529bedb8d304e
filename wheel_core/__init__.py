"""Simulation and statistics engine for the prize wheel economics simulator."""

from __future__ import annotations

from .api import SimulationSummary, create_session, load_session, simulate
from .configuration import (
    add_prize,
    config_from_payload,
    config_to_payload,
    default_prizes,
    make_config,
    move_prize,
    remove_prize,
    reset_prizes,
    toggle_stop_when_hit,
    update_prize,
    validate_config,
    with_parameters,
)
from .data import DEFAULT_PRIZE_NAME, HISTORY_LIMIT
from .errors import (
    ConfigCapacityExceeded,
    ConfigValidationError,
    ConfigurationNotFound,
    InvalidCommission,
    InvalidSlot,
    NoStopCondition,
    PrizeNotFound,
    SlotSpaceExhausted,
    WheelError,
)
from .formatting import (
    format_currency,
    format_large_number,
    format_probability,
    format_probability_as_odds,
)
from .models import (
    BreakBatch,
    BreakOutcome,
    BreakProbabilities,
    HouseStats,
    PrizeHit,
    PrizeRange,
    ProfitResult,
    SimulationMode,
    SimulationSnapshot,
    SpinBatch,
    SpinOutcome,
    WheelConfig,
)
from .profit import clamp_commission, compute_profit
from .reporting import (
    break_frame,
    break_profit_histogram,
    history_frame,
    prize_distribution_frame,
    summarize_breaks,
)
from .resolver import PrizeLayout, resolve_slot
from .risk import break_probabilities, short_term_risk
from .session import WheelSession
from .simulation import run_break, run_breaks, spin_batch, spin_once
from .stats import fold_breaks, fold_spin, fold_spins, initial_house_stats
from .store import ConfigurationStore

__all__ = [
    "BreakBatch",
    "BreakOutcome",
    "BreakProbabilities",
    "ConfigCapacityExceeded",
    "ConfigValidationError",
    "ConfigurationNotFound",
    "ConfigurationStore",
    "DEFAULT_PRIZE_NAME",
    "HISTORY_LIMIT",
    "HouseStats",
    "InvalidCommission",
    "InvalidSlot",
    "NoStopCondition",
    "PrizeHit",
    "PrizeLayout",
    "PrizeNotFound",
    "PrizeRange",
    "ProfitResult",
    "SimulationMode",
    "SimulationSnapshot",
    "SimulationSummary",
    "SlotSpaceExhausted",
    "SpinBatch",
    "SpinOutcome",
    "WheelConfig",
    "WheelError",
    "WheelSession",
    "add_prize",
    "break_frame",
    "break_probabilities",
    "break_profit_histogram",
    "clamp_commission",
    "compute_profit",
    "config_from_payload",
    "config_to_payload",
    "create_session",
    "default_prizes",
    "fold_breaks",
    "fold_spin",
    "fold_spins",
    "format_currency",
    "format_large_number",
    "format_probability",
    "format_probability_as_odds",
    "history_frame",
    "initial_house_stats",
    "load_session",
    "make_config",
    "move_prize",
    "prize_distribution_frame",
    "remove_prize",
    "reset_prizes",
    "resolve_slot",
    "run_break",
    "run_breaks",
    "short_term_risk",
    "simulate",
    "spin_batch",
    "spin_once",
    "summarize_breaks",
    "toggle_stop_when_hit",
    "update_prize",
    "validate_config",
    "with_parameters",
]
