"""Tests for configuration defaults and env overrides."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from core import config
from core.config import AppSettings, get_user_cache_dir


def test_default_settings(monkeypatch):
    monkeypatch.delenv("SPIN_AI_MODELS_CACHE_DIR", raising=False)
    settings = AppSettings()
    assert settings.cache_dir is None
    assert settings.http_timeout_seconds == 30.0
    assert settings.chunk_size == 1024 * 1024


def test_env_override(monkeypatch, tmp_path):
    monkeypatch.setenv("SPIN_AI_MODELS_CACHE_DIR", str(tmp_path / "shared"))
    monkeypatch.setenv("SPIN_AI_MODELS_HTTP_TIMEOUT_SECONDS", "5")
    settings = AppSettings()
    assert settings.resolved_cache_dir() == tmp_path / "shared"
    assert settings.http_timeout_seconds == 5.0


def test_default_cache_dir_uses_xdg(monkeypatch, tmp_path):
    monkeypatch.setattr(config.sys, "platform", "linux")
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path))
    monkeypatch.delenv("SPIN_AI_MODELS_CACHE_DIR", raising=False)
    assert get_user_cache_dir() == tmp_path
    assert AppSettings().resolved_cache_dir() == tmp_path / "spin" / "ai-models"


def test_default_cache_dir_without_xdg(monkeypatch):
    monkeypatch.setattr(config.sys, "platform", "linux")
    monkeypatch.delenv("XDG_CACHE_HOME", raising=False)
    assert get_user_cache_dir() == Path.home() / ".cache"


def test_default_cache_dir_macos(monkeypatch):
    monkeypatch.setattr(config.sys, "platform", "darwin")
    assert get_user_cache_dir() == Path.home() / "Library" / "Caches"


def test_log_level_is_normalized(monkeypatch):
    monkeypatch.setenv("SPIN_AI_MODELS_LOG_LEVEL", "info")
    assert AppSettings().log_level == "INFO"


def test_unknown_log_level_is_rejected(monkeypatch):
    monkeypatch.setenv("SPIN_AI_MODELS_LOG_LEVEL", "LOUD")
    with pytest.raises(ValidationError):
        AppSettings()
