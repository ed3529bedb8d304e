import pytest

from wheel_core import (
    ConfigCapacityExceeded,
    ConfigValidationError,
    InvalidCommission,
    PrizeLayout,
    PrizeNotFound,
    PrizeRange,
    add_prize,
    config_from_payload,
    config_to_payload,
    make_config,
    move_prize,
    remove_prize,
    reset_prizes,
    toggle_stop_when_hit,
    update_prize,
    with_parameters,
)


def test_default_wheel(default_config):
    assert default_config.total_slots == 25
    assert default_config.price_per_spin == 25.0
    assert default_config.default_prize == 10.0
    assert [(p.name, p.unit_cost, p.slot_count) for p in default_config.prizes] == [
        ("Prize X", 50.0, 1),
        ("Prize Z", 30.0, 3),
    ]
    assert all(p.stop_when_hit for p in default_config.prizes)
    assert default_config.remaining_slots == 21


def test_add_prize_appends_and_keeps_input(default_config):
    updated = add_prize(default_config, "  Gold  ", 80.0, 2, stop_when_hit=False)
    assert len(default_config.prizes) == 2
    added = updated.prizes[-1]
    assert added.name == "Gold"
    assert added.slot_count == 2
    assert not added.stop_when_hit
    assert added.id not in {p.id for p in default_config.prizes}


def test_add_prize_beyond_capacity_is_rejected(default_config):
    with pytest.raises(ConfigCapacityExceeded) as excinfo:
        add_prize(default_config, "Huge", 1.0, 22)
    assert "25 slots" in str(excinfo.value)


@pytest.mark.parametrize(
    "name, cost, slots",
    [("", 10.0, 1), ("   ", 10.0, 1), ("A", -1.0, 1), ("A", 10.0, 0)],
)
def test_add_prize_rejects_bad_fields(default_config, name, cost, slots):
    with pytest.raises(ConfigValidationError):
        add_prize(default_config, name, cost, slots)


def test_shrinking_wheel_below_allocation_is_rejected(default_config):
    with pytest.raises(ConfigCapacityExceeded):
        with_parameters(default_config, total_slots=3)
    assert with_parameters(default_config, total_slots=4).total_slots == 4


def test_with_parameters_validates_commission(default_config):
    with pytest.raises(InvalidCommission):
        with_parameters(default_config, commission_percent=120.0)
    with pytest.raises(ConfigValidationError):
        with_parameters(default_config, prizes=())


def test_update_prize_keeps_position(default_config):
    updated = update_prize(default_config, "prize1", unit_cost=75.0, slot_count=2)
    assert updated.prizes[0].id == "prize1"
    assert updated.prizes[0].unit_cost == 75.0
    assert updated.prizes[0].slot_count == 2


def test_update_prize_capacity(default_config):
    with pytest.raises(ConfigCapacityExceeded):
        update_prize(default_config, "prize2", slot_count=25)
    with pytest.raises(ConfigValidationError):
        update_prize(default_config, "prize2", slot_count=1.5)


def test_missing_prize_id(default_config):
    with pytest.raises(PrizeNotFound) as excinfo:
        remove_prize(default_config, "nope")
    assert str(excinfo.value) == "Prize configuration with ID nope not found"


def test_remove_and_toggle(default_config):
    assert [p.id for p in remove_prize(default_config, "prize1").prizes] == ["prize2"]
    toggled = toggle_stop_when_hit(default_config, "prize2")
    assert not toggled.prizes[1].stop_when_hit
    assert toggled.required_slots == 1


def test_move_prize_changes_slot_ownership(default_config):
    moved = move_prize(default_config, "prize2", 0)
    layout = PrizeLayout(moved)
    assert layout.resolve(1).prize_name == "Prize Z"
    assert layout.resolve(4).prize_name == "Prize X"
    assert move_prize(default_config, "prize1", 99).prizes[-1].id == "prize1"


def test_reset_prizes_keeps_wheel_parameters(default_config):
    custom = with_parameters(remove_prize(default_config, "prize1"), price_per_spin=40.0)
    restored = reset_prizes(custom)
    assert restored.price_per_spin == 40.0
    assert restored.prizes == default_config.prizes


def test_duplicate_prize_ids_are_rejected():
    twin = PrizeRange(id="same", name="A", unit_cost=1.0, slot_count=1)
    with pytest.raises(ConfigValidationError):
        make_config(prizes=[twin, twin])


def test_payload_round_trip(default_config):
    assert config_from_payload(config_to_payload(default_config)) == default_config


def test_payload_accepts_legacy_value_key():
    config = config_from_payload(
        {
            "totalSlots": 10,
            "pricePerSpin": 5,
            "defaultPrize": 1,
            "prizeConfigs": [{"name": "Old", "value": 7, "slots": 2}],
        }
    )
    prize = config.prizes[0]
    assert prize.unit_cost == 7.0
    assert prize.stop_when_hit
    assert prize.id == "prize_0"
    assert config.commission_percent == 0.0


def test_payload_over_capacity_is_rejected():
    with pytest.raises(ConfigCapacityExceeded):
        config_from_payload(
            {"totalSlots": 2, "prizeConfigs": [{"name": "A", "unitCost": 1, "slots": 3}]}
        )


@pytest.mark.parametrize("total_slots", [25.5, 0.5])
def test_fractional_wheel_size_is_rejected(total_slots):
    with pytest.raises(ConfigValidationError):
        make_config(total_slots=total_slots, prizes=[])


def test_fractional_wheel_size_rejected_on_edit(default_config):
    with pytest.raises(ConfigValidationError):
        with_parameters(default_config, total_slots=30.5)
    assert with_parameters(default_config, total_slots=30.0).total_slots == 30
