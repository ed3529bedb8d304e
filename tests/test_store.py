import json

import pytest

from wheel_core import ConfigurationNotFound, ConfigurationStore, ConfigValidationError, with_parameters


@pytest.fixture
def store(tmp_path):
    return ConfigurationStore(tmp_path / "configs.json")


def test_empty_store_lists_nothing(store):
    assert store.list_configurations() == []
    assert not store.delete_configuration(1)


def test_save_and_load(store, default_config):
    config_id = store.save_configuration(default_config, "Starter", "two prizes")
    assert config_id == 1
    assert store.load_configuration(config_id) == default_config

    meta = store.describe_configuration(config_id)
    assert meta["name"] == "Starter"
    assert meta["description"] == "two prizes"
    assert meta["isPublic"] is False
    assert meta["createdAt"] == meta["updatedAt"]


def test_list_is_newest_first(store, default_config):
    store.save_configuration(default_config, "First")
    store.save_configuration(with_parameters(default_config, total_slots=40), "Second", is_public=True)
    summaries = store.list_configurations()
    assert [s["name"] for s in summaries] == ["Second", "First"]
    assert summaries[0]["totalSlots"] == 40
    assert summaries[0]["prizeCount"] == 2
    assert summaries[0]["isPublic"] is True


def test_delete_does_not_reuse_ids(store, default_config):
    first = store.save_configuration(default_config, "First")
    assert store.delete_configuration(first)
    assert not store.delete_configuration(first)
    assert store.save_configuration(default_config, "Again") == first + 1
    with pytest.raises(ConfigurationNotFound):
        store.load_configuration(first)


def test_blank_name_is_rejected(store, default_config):
    with pytest.raises(ConfigValidationError):
        store.save_configuration(default_config, "  ")


def test_legacy_value_key_is_loaded(tmp_path):
    path = tmp_path / "legacy.json"
    path.write_text(
        json.dumps(
            {
                "nextId": 4,
                "configurations": [
                    {
                        "id": 3,
                        "name": "Legacy",
                        "totalSlots": 20,
                        "pricePerSpin": 10,
                        "defaultPrize": 2,
                        "prizeConfigs": [{"id": "p", "name": "Old", "value": 12, "slots": 2}],
                    }
                ],
            }
        ),
        encoding="utf-8",
    )
    config = ConfigurationStore(path).load_configuration(3)
    assert config.prizes[0].unit_cost == 12.0
    assert config.prizes[0].stop_when_hit


def test_corrupt_file_is_treated_as_empty(tmp_path, default_config):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    store = ConfigurationStore(path)
    assert store.list_configurations() == []
    assert store.save_configuration(default_config, "Fresh") == 1


def test_entries_with_bad_ids_are_skipped(tmp_path):
    path = tmp_path / "odd.json"
    path.write_text(
        json.dumps({"nextId": "x", "configurations": [{"id": "abc"}, {"id": 2, "name": "Ok"}]}),
        encoding="utf-8",
    )
    summaries = ConfigurationStore(path).list_configurations()
    assert [s["id"] for s in summaries] == [2]
