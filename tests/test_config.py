import sys
import importlib
import random
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parent.parent))

import pytest
from pydantic import ValidationError

from ordered_collection import config


def test_defaults():
    settings = config.load_settings()
    assert settings.log_level == "WARNING"
    assert settings.log_json is False
    assert settings.shuffle_seed is None
    assert settings.error_alert_threshold == 0


def test_values_from_environment(monkeypatch):
    monkeypatch.setenv("COLLECTION_LOG_LEVEL", "debug")
    monkeypatch.setenv("COLLECTION_LOG_JSON", "yes")
    monkeypatch.setenv("COLLECTION_SHUFFLE_SEED", "7")
    monkeypatch.setenv("COLLECTION_ERROR_ALERT_THRESHOLD", "3")
    settings = config.load_settings()
    assert settings.log_level == "DEBUG"
    assert settings.log_json is True
    assert settings.shuffle_seed == 7
    assert settings.error_alert_threshold == 3


def test_invalid_flag_value(monkeypatch):
    monkeypatch.setenv("COLLECTION_LOG_JSON", "maybe")
    with pytest.raises(ValueError):
        config.load_settings()


def test_invalid_log_level(monkeypatch):
    monkeypatch.setenv("COLLECTION_LOG_LEVEL", "LOUD")
    with pytest.raises(ValidationError):
        config.load_settings()


def test_negative_threshold_rejected(monkeypatch):
    monkeypatch.setenv("COLLECTION_ERROR_ALERT_THRESHOLD", "-1")
    with pytest.raises(ValidationError):
        config.load_settings()


def test_default_rng_seeded_from_environment(monkeypatch):
    monkeypatch.setenv("COLLECTION_SHUFFLE_SEED", "123")
    importlib.reload(config)
    first = config.default_rng()
    assert config.default_rng() is first
    assert first.random() == random.Random(123).random()

    config.reset_default_rng()
    assert config.default_rng() is not first
    config.reset_default_rng()


def test_shuffle_uses_process_wide_generator(monkeypatch):
    from ordered_collection.collection import Collection

    monkeypatch.setattr(config, "_rng", random.Random(5))
    collection = Collection(range(9))
    collection.shuffle()

    expected = list(range(9))
    random.Random(5).shuffle(expected)
    assert collection.to_array() == expected


def test_shuffle_ignores_unrelated_bad_settings(monkeypatch):
    from ordered_collection.collection import Collection

    config.reset_default_rng()
    monkeypatch.setenv("COLLECTION_LOG_JSON", "maybe")
    monkeypatch.setenv("COLLECTION_LOG_LEVEL", "LOUD")
    monkeypatch.setenv("COLLECTION_SHUFFLE_SEED", "9")
    collection = Collection(range(9))
    collection.shuffle()

    expected = list(range(9))
    random.Random(9).shuffle(expected)
    assert collection.to_array() == expected
    config.reset_default_rng()


def test_invalid_shuffle_seed_rejected(monkeypatch):
    monkeypatch.setenv("COLLECTION_SHUFFLE_SEED", "abc")
    with pytest.raises(ValidationError):
        config.load_shuffle_seed()
