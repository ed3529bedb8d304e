"""Monte Carlo helpers for Normal Mode spins and Remove-Hit-Slots breaks."""

from __future__ import annotations

import random
from collections import Counter, deque
from collections.abc import Callable
from typing import Optional

from .data import HISTORY_LIMIT, PROGRESS_CHUNK
from .errors import NoStopCondition, SlotSpaceExhausted
from .models import BreakBatch, BreakOutcome, PrizeHit, SpinBatch, SpinOutcome, WheelConfig
from .profit import compute_profit, validate_commission
from .resolver import PrizeLayout

ProgressFn = Callable[[int, int], None]


def _report(progress: Optional[ProgressFn], done: int, total: int) -> None:
    if progress is not None and (done % PROGRESS_CHUNK == 0 or done == total):
        progress(done, total)


def _outcome(
    config: WheelConfig,
    attempt_index: int,
    slot: int,
    hit: PrizeHit,
) -> SpinOutcome:
    result = compute_profit(config.price_per_spin, hit.unit_cost, config.commission_percent)
    return SpinOutcome(
        attempt_index=attempt_index,
        slot=slot,
        unit_cost=hit.unit_cost,
        prize_name=hit.prize_name,
        profit=result.profit,
        cost=config.price_per_spin,
    )


def spin_once(
    config: WheelConfig,
    rng: random.Random,
    history_length: int = 0,
    layout: Optional[PrizeLayout] = None,
) -> SpinOutcome:
    """Draw one slot uniformly from the whole wheel and price the result.

    Parameters
    ----------
    config:
        Wheel configuration to spin.
    rng:
        Random source; pass a seeded ``random.Random`` for reproducible runs.
    history_length:
        Number of spins already recorded; the outcome's ``attempt_index`` is
        one more than this.
    layout:
        Optional pre-built layout for ``config``.
    """

    layout = layout or PrizeLayout(config)
    slot = rng.randint(1, config.total_slots)
    return _outcome(config, history_length + 1, slot, layout.resolve(slot))


def spin_batch(
    config: WheelConfig,
    spins: int,
    rng: random.Random,
    history_length: int = 0,
    progress: Optional[ProgressFn] = None,
) -> SpinBatch:
    """Run ``spins`` independent Normal Mode spins; slots may repeat."""

    if spins < 0:
        raise ValueError("Number of spins cannot be negative.")
    validate_commission(config.commission_percent)
    layout = PrizeLayout(config)
    outcomes: list[SpinOutcome] = []
    for done in range(1, spins + 1):
        outcomes.append(spin_once(config, rng, history_length + done - 1, layout))
        _report(progress, done, spins)
    return SpinBatch(outcomes=outcomes, total_cost=spins * config.price_per_spin)


def check_break_preconditions(config: WheelConfig) -> None:
    """Raise before drawing when a break could never finish.

    Raises
    ------
    NoStopCondition
        If no prize range is flagged ``stop_when_hit``.
    SlotSpaceExhausted
        If the stop ranges claim more slots than the wheel has.
    """

    if not config.stop_ranges:
        raise NoStopCondition()
    if config.required_slots > config.total_slots:
        raise SlotSpaceExhausted(config.total_slots, config.required_slots)
    validate_commission(config.commission_percent)


def run_break(
    config: WheelConfig,
    rng: random.Random,
    layout: Optional[PrizeLayout] = None,
    first_attempt: int = 1,
) -> tuple[BreakOutcome, list[SpinOutcome]]:
    """Draw without replacement until every stop-when-hit slot has come up.

    Returns the break summary and the spins it took, in draw order.
    """

    check_break_preconditions(config)
    layout = layout or PrizeLayout(config)
    available = list(range(1, config.total_slots + 1))
    remaining_required = config.required_slots
    spins: list[SpinOutcome] = []
    total_profit = 0.0

    while remaining_required > 0:
        if not available:
            raise SlotSpaceExhausted(config.total_slots, remaining_required)
        pick = rng.randrange(len(available))
        slot = available[pick]
        available[pick] = available[-1]
        available.pop()

        hit = layout.resolve(slot)
        outcome = _outcome(config, first_attempt + len(spins), slot, hit)
        spins.append(outcome)
        total_profit += outcome.profit
        if hit.is_special and hit.prize_index is not None:
            if config.prizes[hit.prize_index].stop_when_hit:
                remaining_required -= 1

    return BreakOutcome(spin_count=len(spins), total_profit=total_profit), spins


def is_better_break(candidate: BreakOutcome, current: Optional[BreakOutcome]) -> bool:
    """Return True when ``candidate`` beats ``current`` on profit per spin."""

    return current is None or candidate.profit_per_spin > current.profit_per_spin


def is_worse_break(candidate: BreakOutcome, current: Optional[BreakOutcome]) -> bool:
    """Return True when ``candidate`` is strictly less profitable per spin."""

    return current is None or candidate.profit_per_spin < current.profit_per_spin


def run_breaks(
    config: WheelConfig,
    count: int,
    rng: random.Random,
    history_length: int = 0,
    history_limit: int = HISTORY_LIMIT,
    progress: Optional[ProgressFn] = None,
) -> BreakBatch:
    """Run ``count`` independent breaks back to back.

    Each break starts with the full wheel. Only the last ``history_limit``
    spins are kept in ``outcomes``; totals cover every spin. Best and worst
    breaks are chosen by strict comparison, so ties keep the first one seen.
    """

    if count < 0:
        raise ValueError("Number of breaks cannot be negative.")
    check_break_preconditions(config)
    layout = PrizeLayout(config)

    breaks: list[BreakOutcome] = []
    recent: deque[SpinOutcome] = deque(maxlen=history_limit)
    prize_counts: Counter[str] = Counter()
    total_spins = 0
    total_profit = 0.0
    best: Optional[BreakOutcome] = None
    worst: Optional[BreakOutcome] = None

    for done in range(1, count + 1):
        outcome, spins = run_break(
            config, rng, layout, first_attempt=history_length + total_spins + 1
        )
        breaks.append(outcome)
        recent.extend(spins)
        prize_counts.update(spin.prize_name for spin in spins)
        total_spins += outcome.spin_count
        total_profit += outcome.total_profit
        if is_better_break(outcome, best):
            best = outcome
        if is_worse_break(outcome, worst):
            worst = outcome
        _report(progress, done, count)

    return BreakBatch(
        breaks=breaks,
        outcomes=list(recent),
        total_spins=total_spins,
        total_profit=total_profit,
        total_cost=total_spins * config.price_per_spin,
        prize_counts=prize_counts,
        best_break=best,
        worst_break=worst,
    )
