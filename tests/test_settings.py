"""Tests for engine settings loading and validation."""

from pathlib import Path

import pytest
import yaml

from manuscript.core.settings import EngineSettings, load_settings

DEFAULT_CONFIG = Path(__file__).resolve().parent.parent / "configs" / "default.yaml"


def test_load_default_config_matches_model_defaults():
    assert load_settings(DEFAULT_CONFIG) == EngineSettings()


def test_load_without_path_returns_defaults():
    settings = load_settings(None)
    assert settings.enhancement_model == "qwen3:8b"
    assert settings.max_enhancement_chars == 6000


def test_override_from_yaml(tmp_path):
    path = tmp_path / "engine.yaml"
    path.write_text(yaml.safe_dump({"enhancement_model": "llama3.1:8b", "scanned_chars_per_page": 40}))
    settings = load_settings(path)
    assert settings.enhancement_model == "llama3.1:8b"
    assert settings.scanned_chars_per_page == 40
    assert settings.min_enhancement_chars == 100


def test_empty_yaml_uses_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_settings(path) == EngineSettings()


# ── Validation Errors ────────────────────────────────────────────────


def test_thresholds_out_of_order():
    with pytest.raises(Exception):
        EngineSettings(min_enhancement_chars=300, section_content_chars=200)


def test_max_chars_too_small():
    with pytest.raises(Exception):
        EngineSettings(max_enhancement_chars=10)


def test_negative_keyword_length():
    with pytest.raises(Exception):
        EngineSettings(max_keyword_length=0)
