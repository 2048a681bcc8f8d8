"""Tests for the config loader and app config models."""

import json
from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

import practempo.core.config.loader as config_loader
from practempo.core.config.models import AppConfig, ScheduleConfig


@pytest.fixture
def sample_config_data():
    """Sample configuration data for testing."""
    return {
        "logging": {"level": "debug", "format": "%(message)s"},
        "schedule": {"max_total_duration_seconds": 3600, "warmup_period_seconds": 5},
        "storage": {"path": "state/schedule.json"},
    }


def test_detect_format():
    """Test format detection from the file extension."""
    assert config_loader.detect_format("config.json") == "json"
    assert config_loader.detect_format(Path("config.yaml")) == "yaml"
    assert config_loader.detect_format("config.YML") == "yaml"

    with pytest.raises(ValueError) as exc_info:
        config_loader.detect_format("config.toml")
    assert "Unsupported config format" in str(exc_info.value)


def test_load_config_json(tmp_path, sample_config_data):
    """Test loading JSON config."""
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps(sample_config_data))

    config = config_loader.load_config(config_file)

    assert config["schedule"]["max_total_duration_seconds"] == 3600


def test_load_config_yaml(tmp_path, sample_config_data):
    """Test loading YAML config."""
    config_file = tmp_path / "config.yaml"
    config_file.write_text(yaml.safe_dump(sample_config_data))

    assert config_loader.load_config(config_file) == sample_config_data


def test_load_config_empty_yaml(tmp_path):
    """An empty YAML file is an empty mapping."""
    config_file = tmp_path / "config.yml"
    config_file.write_text("")

    assert config_loader.load_config(config_file) == {}


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        config_loader.load_config(tmp_path / "missing.json")


@pytest.mark.parametrize(
    ("filename", "content"),
    [
        ("bad.json", "{not json"),
        ("bad.yaml", "key: [unclosed"),
        ("list.yaml", "- a\n- b\n"),
    ],
)
def test_load_config_invalid_content(tmp_path, filename, content):
    """Malformed content and non-mapping roots are ValueErrors."""
    config_file = tmp_path / filename
    config_file.write_text(content)

    with pytest.raises(ValueError):
        config_loader.load_config(config_file)


def test_load_app_config(tmp_path, sample_config_data):
    """Test loading and validating the app config."""
    config_file = tmp_path / "practempo.yaml"
    config_file.write_text(yaml.safe_dump(sample_config_data))

    config = config_loader.load_app_config(config_file)

    assert config.logging.level == "DEBUG"
    assert config.schedule.max_total_duration_seconds == 3600
    assert config.schedule.warmup_period_seconds == 5
    assert config.schedule.default_category == "Guitar"
    assert config.storage.path == Path("state/schedule.json")


def test_load_app_config_defaults_when_missing(tmp_path):
    """No path, or a path that does not exist, yields defaults."""
    assert config_loader.load_app_config(None) == AppConfig()
    assert config_loader.load_app_config(tmp_path / "nope.yaml") == AppConfig()


def test_app_config_rejects_unknown_keys(tmp_path):
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({"schedule": {"max_minutes": 10}}))

    with pytest.raises(ValidationError):
        config_loader.load_app_config(config_file)


def test_schedule_config_defaults():
    config = ScheduleConfig()
    assert config.max_total_duration_seconds == 10800
    assert config.default_interval_duration == "3:00"
    assert config.warmup_period_seconds == 0


@pytest.mark.parametrize(
    "overrides",
    [
        {"max_total_duration_seconds": 0},
        {"warmup_period_seconds": -1},
        {"default_interval_duration": "3:75"},
        {"default_category": ""},
    ],
)
def test_schedule_config_validation(overrides):
    with pytest.raises(ValidationError):
        ScheduleConfig(**overrides)
