import json
import logging

from passforge.config import (
    DEFAULTS,
    accounts_path,
    config_path,
    default_generation_config,
    load_config,
    save_config,
)
from passforge.generator import GenerationConfig
from passforge.logging_config import setup_logging


def test_defaults_when_missing(tmp_path, monkeypatch):
    monkeypatch.setenv("PASSFORGE_HOME", str(tmp_path))
    assert load_config() == DEFAULTS
    assert default_generation_config() == GenerationConfig()
    assert accounts_path() == str(tmp_path / "accounts.json")


def test_saved_values_merge_over_defaults(tmp_path, monkeypatch):
    monkeypatch.setenv("PASSFORGE_HOME", str(tmp_path))
    save_config({"length": 24, "exclude_similar": True})
    cfg = load_config()
    assert cfg["length"] == 24
    assert cfg["include_special"] is True
    assert default_generation_config(cfg) == GenerationConfig(length=24, exclude_similar=True)


def test_unreadable_config_falls_back(tmp_path, monkeypatch):
    monkeypatch.setenv("PASSFORGE_HOME", str(tmp_path))
    with open(config_path(), "w", encoding="utf-8") as f:
        f.write("{not json")
    assert load_config() == DEFAULTS


def test_accounts_path_override(tmp_path):
    custom = str(tmp_path / "elsewhere.json")
    assert accounts_path({"accounts_path": custom}) == custom


def test_config_file_is_json(tmp_path):
    p = str(tmp_path / "nested" / "config.json")
    save_config({"log_level": "DEBUG"}, p)
    with open(p, encoding="utf-8") as f:
        assert json.load(f) == {"log_level": "DEBUG"}
    assert load_config(p)["log_level"] == "DEBUG"


def test_setup_logging_accepts_level_names():
    setup_logging("debug")
    assert logging.getLogger().level == logging.DEBUG
    setup_logging("not-a-level")
    assert logging.getLogger().level == logging.WARNING
