import random

import pytest

from wheel_core import PrizeRange, make_config


class ScriptedRandom:
    """Stand-in for ``random.Random`` that replays fixed draws."""

    def __init__(self, randrange_values=(), randint_values=()):
        self._randrange = list(randrange_values)
        self._randint = list(randint_values)

    def randrange(self, stop):
        value = self._randrange.pop(0)
        assert 0 <= value < stop, "scripted index outside the live slot list"
        return value

    def randint(self, low, high):
        value = self._randint.pop(0)
        assert low <= value <= high, "scripted slot outside the wheel"
        return value


@pytest.fixture
def single_prize_config():
    """25 slots, Prize X on slot 1, default prize 10, spin price 25."""
    return make_config(
        total_slots=25,
        price_per_spin=25.0,
        default_prize=10.0,
        prizes=[PrizeRange(id="x", name="Prize X", unit_cost=50.0, slot_count=1)],
    )


@pytest.fixture
def default_config():
    """The wheel a new session starts with."""
    return make_config()


@pytest.fixture
def mixed_config():
    """One stopping prize on slot 1 and a non-stopping prize on slots 2-3."""
    return make_config(
        total_slots=10,
        price_per_spin=20.0,
        default_prize=5.0,
        prizes=[
            PrizeRange(id="jackpot", name="Jackpot", unit_cost=100.0, slot_count=1),
            PrizeRange(
                id="bonus", name="Bonus", unit_cost=15.0, slot_count=2, stop_when_hit=False
            ),
        ],
    )


@pytest.fixture
def no_stop_config():
    return make_config(
        total_slots=10,
        price_per_spin=20.0,
        default_prize=5.0,
        prizes=[
            PrizeRange(id="a", name="A", unit_cost=40.0, slot_count=2, stop_when_hit=False),
        ],
    )


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def scripted():
    return ScriptedRandom
