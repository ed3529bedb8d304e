"""High-level entry points used by the UI and callers."""

from __future__ import annotations

import random
from dataclasses import dataclass
from time import perf_counter
from typing import Optional

from .configuration import make_config
from .models import BreakOutcome, HouseStats, SimulationMode, WheelConfig
from .session import WheelSession
from .simulation import ProgressFn
from .store import ConfigurationStore


def create_session(
    config: Optional[WheelConfig] = None,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> WheelSession:
    """Return a session for ``config``, or for the default wheel when omitted."""

    return WheelSession(config if config is not None else make_config(), rng=rng, seed=seed)


def load_session(
    store: ConfigurationStore,
    config_id: int,
    seed: Optional[int] = None,
) -> WheelSession:
    """Return a fresh session for a saved configuration."""

    return WheelSession(store.load_configuration(config_id), seed=seed)


@dataclass
class SimulationSummary:
    """Bundle returned by ``simulate`` for one batch on a fresh session."""

    config: WheelConfig
    mode: SimulationMode
    runs: int
    stats: HouseStats
    breaks: list[BreakOutcome]
    compute_seconds: float

    @property
    def average_profit_per_spin(self) -> Optional[float]:
        return self.stats.average_profit_per_spin

    @property
    def house_edge(self) -> Optional[float]:
        """Return the share of the amount wagered that the house keeps."""

        wagered = self.stats.total_spins * self.config.price_per_spin
        if wagered <= 0:
            return None
        return self.stats.total_earnings / wagered


def simulate(
    config: WheelConfig,
    mode: SimulationMode = SimulationMode.NORMAL,
    runs: int = 1000,
    seed: int = 42,
    progress: Optional[ProgressFn] = None,
) -> SimulationSummary:
    """Run ``runs`` spins (Normal Mode) or breaks on a new seeded session.

    Parameters
    ----------
    config:
        Wheel configuration to simulate.
    mode:
        ``NORMAL`` spins with replacement; ``REMOVE_HIT_SLOTS`` runs breaks.
    runs:
        Number of spins or breaks.
    seed:
        Seed forwarded to the session's ``random.Random``.
    progress:
        Optional ``progress(done, total)`` callback.

    Returns
    -------
    SimulationSummary
        Final statistics, per-break summaries, and wall-clock time.
    """

    session = WheelSession(config, seed=seed)
    start = perf_counter()
    breaks: list[BreakOutcome] = []
    if mode == SimulationMode.REMOVE_HIT_SLOTS:
        breaks = session.run_breaks(runs, progress=progress).breaks
    else:
        session.spin_batch(runs, progress=progress)
    compute_seconds = perf_counter() - start

    return SimulationSummary(
        config=config,
        mode=mode,
        runs=runs,
        stats=session.stats,
        breaks=breaks,
        compute_seconds=compute_seconds,
    )
