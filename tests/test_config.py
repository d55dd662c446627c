"""Tests for configuration module."""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from schema_bridge.config import Config, OutputConfig, TranslatorConfig
from schema_bridge.models.nodes import DEFAULT_MAX_DEPTH


def test_config_defaults():
    """Test default configuration values."""
    config = Config()

    assert config.logging.level == "WARNING"
    assert config.logging.format == "console"
    assert config.logging.file is None

    assert config.translator.max_depth == DEFAULT_MAX_DEPTH == 64

    assert config.output.indent == 2
    assert config.output.ensure_ascii is False


def test_config_from_env(monkeypatch):
    """Test loading configuration from environment variables, including nested ones."""
    monkeypatch.setenv("SCHEMA_BRIDGE_LOGGING__LEVEL", "DEBUG")
    monkeypatch.setenv("SCHEMA_BRIDGE_LOGGING__FORMAT", "json")
    monkeypatch.setenv("SCHEMA_BRIDGE_TRANSLATOR__MAX_DEPTH", "12")
    monkeypatch.setenv("SCHEMA_BRIDGE_OUTPUT__INDENT", "4")
    monkeypatch.setenv("SCHEMA_BRIDGE_OUTPUT__ENSURE_ASCII", "true")

    config = Config()

    assert config.logging.level == "DEBUG"
    assert config.logging.format == "json"
    assert config.translator.max_depth == 12
    assert config.output.indent == 4
    assert config.output.ensure_ascii is True


def test_config_from_file(tmp_path: Path):
    """Test loading configuration strictly from a JSON file."""
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({
        "logging": {"level": "INFO", "file": str(tmp_path / "bridge.log")},
        "translator": {"max_depth": 8},
        "unknown_section": {"ignored": True},
    }))

    config = Config.from_file(config_file)

    assert config.logging.level == "INFO"
    assert config.logging.file == tmp_path / "bridge.log"
    assert config.translator.max_depth == 8
    assert config.output.indent == 2 # Untouched sections keep defaults


@pytest.mark.parametrize("model, kwargs", [
    (TranslatorConfig, {"max_depth": 0}),
    (TranslatorConfig, {"max_depth": 201}),
    (OutputConfig, {"indent": -1}),
    (OutputConfig, {"indent": 9}),
])
def test_config_bounds(model, kwargs):
    with pytest.raises(ValidationError):
        model(**kwargs)


def test_invalid_env_value_rejected(monkeypatch):
    monkeypatch.setenv("SCHEMA_BRIDGE_TRANSLATOR__MAX_DEPTH", "0")
    with pytest.raises(ValidationError):
        Config()
