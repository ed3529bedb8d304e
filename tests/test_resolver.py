from collections import Counter

import pytest

from wheel_core import DEFAULT_PRIZE_NAME, InvalidSlot, PrizeLayout, PrizeRange, make_config, resolve_slot


def test_example_wheel_resolution(single_prize_config):
    hit = resolve_slot(1, single_prize_config.prizes, 10.0, 25)
    assert hit.prize_name == "Prize X"
    assert hit.unit_cost == 50.0
    assert hit.is_special

    default = resolve_slot(2, single_prize_config.prizes, 10.0, 25)
    assert default.prize_name == DEFAULT_PRIZE_NAME
    assert default.unit_cost == 10.0
    assert not default.is_special
    assert default.prize_index is None


def test_every_slot_maps_to_exactly_one_range(default_config):
    layout = PrizeLayout(default_config)
    owners = Counter(
        layout.resolve(slot).prize_index for slot in range(1, default_config.total_slots + 1)
    )

    for index, prize in enumerate(default_config.prizes):
        assert owners[index] == prize.slot_count
    assert owners[None] == default_config.remaining_slots


def test_ranges_are_contiguous_in_list_order(default_config):
    # Prize X owns slot 1, Prize Z slots 2-4
    layout = PrizeLayout(default_config)
    assert list(layout.slots_for(0)) == [1]
    assert list(layout.slots_for(1)) == [2, 3, 4]
    assert list(layout.default_slots()) == list(range(5, 26))


def test_layout_agrees_with_linear_walk():
    config = make_config(
        total_slots=12,
        price_per_spin=5.0,
        default_prize=1.0,
        prizes=[
            PrizeRange(id="a", name="A", unit_cost=3.0, slot_count=2),
            PrizeRange(id="b", name="B", unit_cost=4.0, slot_count=5),
            PrizeRange(id="c", name="C", unit_cost=9.0, slot_count=1),
        ],
    )
    layout = PrizeLayout(config)
    for slot in range(1, 13):
        assert layout.resolve(slot) == resolve_slot(
            slot, config.prizes, config.default_prize, config.total_slots
        )


@pytest.mark.parametrize("slot", [0, -3, 26])
def test_out_of_range_slot_is_rejected(single_prize_config, slot):
    with pytest.raises(InvalidSlot):
        PrizeLayout(single_prize_config).resolve(slot)
    with pytest.raises(InvalidSlot):
        resolve_slot(slot, single_prize_config.prizes, 10.0, 25)


def test_fully_allocated_wheel_has_no_default_slots():
    config = make_config(
        total_slots=3,
        price_per_spin=5.0,
        default_prize=1.0,
        prizes=[PrizeRange(id="a", name="A", unit_cost=3.0, slot_count=3)],
    )
    layout = PrizeLayout(config)
    assert len(layout.default_slots()) == 0
    assert all(layout.resolve(slot).prize_name == "A" for slot in (1, 2, 3))
