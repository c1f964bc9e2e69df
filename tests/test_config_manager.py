import json

import pytest
import yaml

from unitime import ConfigManager, InvalidInputError


def test_defaults_without_files(config_manager):
    settings = config_manager.get_timestamp_config()
    assert settings == {
        "skew_policy": "raise",
        "epoch_seconds_precision": "double",
        "string_separator": ":",
    }


def test_reading_does_not_create_config_dir(config_manager):
    config_manager.load_config("timestamp")
    assert not config_manager.config_dir.exists()


def test_json_file_is_merged_over_defaults(config_manager):
    config_manager.config_dir.mkdir(parents=True)
    (config_manager.config_dir / "timestamp.json").write_text(
        json.dumps({"skew_policy": "clamp"}), encoding="utf-8"
    )

    assert config_manager.get("timestamp", "skew_policy") == "clamp"
    assert config_manager.get("timestamp", "epoch_seconds_precision") == "double"


def test_yaml_file_is_loaded(config_manager):
    config_manager.config_dir.mkdir(parents=True)
    (config_manager.config_dir / "timestamp.yaml").write_text(
        "epoch_seconds_precision: single\n", encoding="utf-8"
    )

    assert config_manager.get_timestamp_config()["epoch_seconds_precision"] == "single"


def test_broken_file_falls_back_to_defaults(config_manager, caplog):
    config_manager.config_dir.mkdir(parents=True)
    (config_manager.config_dir / "timestamp.json").write_text("{not json", encoding="utf-8")

    with caplog.at_level("ERROR", logger="unitime.core.config_manager"):
        assert config_manager.get("timestamp", "skew_policy") == "raise"
    assert "Error loading config" in caplog.text


def test_required_missing_config_raises(config_manager):
    with pytest.raises(FileNotFoundError):
        config_manager.load_config("nonexistent", required=True)


def test_env_override(config_manager, monkeypatch):
    monkeypatch.setenv("UNITIME_TIMESTAMP_SKEW_POLICY", "CLAMP")
    assert config_manager.get_timestamp_config()["skew_policy"] == "clamp"


def test_env_override_nested_and_typed(config_manager, monkeypatch):
    monkeypatch.setenv("UNITIME_EXTRA_LIMITS__MAX_HOURS", "48")
    monkeypatch.setenv("UNITIME_EXTRA_ENABLED", "yes")
    monkeypatch.setenv("UNITIME_EXTRA_RATIO", "0.5")

    assert config_manager.get("extra", "limits.max_hours") == 48
    assert config_manager.get("extra", "enabled") is True
    assert config_manager.get("extra", "ratio") == 0.5


def test_get_missing_key_returns_default(config_manager):
    assert config_manager.get("timestamp", "no.such.key", default="x") == "x"


def test_invalid_precision_is_rejected(config_manager):
    config_manager.save_config("timestamp", {"epoch_seconds_precision": "half"})
    with pytest.raises(InvalidInputError):
        config_manager.get_timestamp_config()


def test_save_yaml_and_reload(config_manager):
    path = config_manager.save_config("timestamp", {"string_separator": "-"}, format="yaml")

    assert path.suffix == ".yaml"
    assert yaml.safe_load(path.read_text(encoding="utf-8")) == {"string_separator": "-"}
    assert config_manager.get("timestamp", "string_separator") == "-"


def test_create_default_configs_writes_once(config_manager):
    config_manager.create_default_configs()
    path = config_manager.config_dir / "timestamp.json"
    assert json.loads(path.read_text(encoding="utf-8"))["skew_policy"] == "raise"

    path.write_text(json.dumps({"skew_policy": "clamp"}), encoding="utf-8")
    config_manager.create_default_configs()
    assert json.loads(path.read_text(encoding="utf-8")) == {"skew_policy": "clamp"}


def test_default_config_dir_is_next_to_package():
    manager = ConfigManager()
    assert manager.config_dir.name == "config"


def test_nested_env_override_leaves_defaults_untouched(config_manager, monkeypatch):
    config_manager._defaults["timestamp"]["limits"] = {"max_hours": 24}
    monkeypatch.setenv("UNITIME_TIMESTAMP_LIMITS__MAX_HOURS", "48")

    assert config_manager.get("timestamp", "limits.max_hours") == 48
    assert config_manager._defaults["timestamp"]["limits"] == {"max_hours": 24}
