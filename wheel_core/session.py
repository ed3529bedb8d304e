"""Simulation session owning one configuration, its statistics, and history."""

from __future__ import annotations

import logging
import random
from collections import deque
from dataclasses import replace
from typing import Optional

from .configuration import validate_config
from .data import HISTORY_LIMIT
from .models import (
    BreakBatch,
    HouseStats,
    SimulationMode,
    SimulationSnapshot,
    SpinBatch,
    SpinOutcome,
    WheelConfig,
)
from .risk import short_term_risk
from .simulation import ProgressFn, check_break_preconditions, run_breaks, spin_batch, spin_once
from .stats import fold_breaks, fold_spin, fold_spins, initial_house_stats

logger = logging.getLogger(__name__)


class WheelSession:
    """Stateful front door used by the UI.

    The engine functions are pure; this class threads the latest
    ``HouseStats`` value and the bounded history between calls. Inputs are
    validated before anything is computed, and stats, history, and snapshot
    are replaced together once a call has succeeded.
    """

    def __init__(
        self,
        config: WheelConfig,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        history_limit: int = HISTORY_LIMIT,
    ) -> None:
        self._config = validate_config(config)
        self._rng = rng if rng is not None else random.Random(seed)
        self._history_limit = history_limit
        self._history: deque[SpinOutcome] = deque(maxlen=history_limit)
        self._attempts = 0
        self._stats = initial_house_stats()
        self._snapshot: Optional[SimulationSnapshot] = None
        self._mode = SimulationMode.NORMAL

    @property
    def config(self) -> WheelConfig:
        return self._config

    @property
    def stats(self) -> HouseStats:
        return self._stats

    @property
    def history(self) -> list[SpinOutcome]:
        """Return the retained spins, oldest first."""

        return list(self._history)

    @property
    def snapshot(self) -> Optional[SimulationSnapshot]:
        return self._snapshot

    @property
    def mode(self) -> SimulationMode:
        return self._mode

    @property
    def attempts(self) -> int:
        """Return the number of spins recorded since the last clear."""

        return self._attempts

    def update_config(self, config: WheelConfig) -> None:
        """Swap in a new configuration; statistics are kept."""

        self._config = validate_config(config)
        self._stats = self._with_risk(self._stats, self._mode)
        logger.debug("Configuration updated: %d slots, %d prizes", config.total_slots, len(config.prizes))

    def _with_risk(self, stats: HouseStats, mode: SimulationMode) -> HouseStats:
        # nothing spun yet: keep the initial zero risk
        if stats.total_spins == 0:
            return stats
        config = self._config
        risk = short_term_risk(
            stats,
            stats.average_profit_per_spin,
            config.price_per_spin,
            config.prizes,
            config.default_prize,
            config.total_slots,
            mode=mode,
            commission_percent=config.commission_percent,
        )
        return replace(stats, short_term_risk=risk)

    def _commit(
        self,
        stats: HouseStats,
        outcomes: list[SpinOutcome],
        attempts: int,
        snapshot: Optional[SimulationSnapshot],
        mode: SimulationMode,
    ) -> None:
        self._stats = stats
        self._history.extend(outcomes)
        self._attempts += attempts
        if snapshot is not None:
            self._snapshot = snapshot
        self._mode = mode

    def spin_once(self) -> SpinOutcome:
        """Spin once in Normal Mode and record the outcome."""

        outcome = spin_once(self._config, self._rng, history_length=self._attempts)
        stats = self._with_risk(fold_spin(self._stats, outcome), SimulationMode.NORMAL)
        snapshot = SimulationSnapshot(
            target_hit_attempt=outcome.attempt_index,
            total_cost=outcome.cost,
            final_slot=outcome.slot,
            final_prize=outcome.unit_cost,
            final_profit=outcome.profit,
            final_prize_name=outcome.prize_name,
        )
        self._commit(stats, [outcome], 1, snapshot, SimulationMode.NORMAL)
        return outcome

    def spin_batch(self, spins: int, progress: Optional[ProgressFn] = None) -> SpinBatch:
        """Spin ``spins`` times in Normal Mode and record every outcome."""

        batch = spin_batch(
            self._config, spins, self._rng, history_length=self._attempts, progress=progress
        )
        stats = self._with_risk(fold_spins(self._stats, batch.outcomes), SimulationMode.NORMAL)
        snapshot = None
        if batch.outcomes:
            last = batch.outcomes[-1]
            snapshot = SimulationSnapshot(
                target_hit_attempt=last.attempt_index,
                total_cost=batch.total_cost,
                final_slot=last.slot,
                final_prize=last.unit_cost,
                final_profit=batch.total_profit,
                final_prize_name=last.prize_name,
            )
        self._commit(stats, batch.outcomes, len(batch.outcomes), snapshot, SimulationMode.NORMAL)
        logger.info(
            "Spun %d times: profit %.2f, earnings now %.2f",
            spins,
            batch.total_profit,
            stats.total_earnings,
        )
        return batch

    def run_breaks(self, count: int, progress: Optional[ProgressFn] = None) -> BreakBatch:
        """Run ``count`` breaks in Remove-Hit-Slots mode.

        Raises
        ------
        NoStopCondition
            If no prize ends a break; nothing is recorded.
        """

        check_break_preconditions(self._config)
        batch = run_breaks(
            self._config,
            count,
            self._rng,
            history_length=self._attempts,
            history_limit=self._history_limit,
            progress=progress,
        )
        stats = fold_breaks(self._stats, batch, count, self._config.total_slots)
        stats = self._with_risk(stats, SimulationMode.REMOVE_HIT_SLOTS)
        snapshot = None
        if batch.outcomes:
            last = batch.outcomes[-1]
            snapshot = SimulationSnapshot(
                target_hit_attempt=last.attempt_index,
                total_cost=batch.total_cost,
                final_slot=last.slot,
                final_prize=last.unit_cost,
                final_profit=batch.total_profit,
                final_prize_name=last.prize_name,
            )
        self._commit(
            stats, batch.outcomes, batch.total_spins, snapshot, SimulationMode.REMOVE_HIT_SLOTS
        )
        logger.info(
            "Ran %d breaks over %d spins: profit %.2f, earnings now %.2f",
            count,
            batch.total_spins,
            batch.total_profit,
            stats.total_earnings,
        )
        return batch

    def clear_history(self) -> None:
        """Forget all spins and reset statistics to their initial values."""

        self._history.clear()
        self._attempts = 0
        self._stats = initial_house_stats()
        self._snapshot = None
        self._mode = SimulationMode.NORMAL
        logger.debug("Session history cleared")
