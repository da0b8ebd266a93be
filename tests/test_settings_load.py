#!filepath: tests/test_settings_load.py
from __future__ import annotations

from pathlib import Path

import pytest

from azkar_app.repository import build_repository
from azkar_app.settings import AppConfig, Settings, SettingsError, load_app_config
from azkar_app.utils.project_paths import ProjectPaths

ROOT = Path(__file__).resolve().parents[1]


def test_load_app_config_smoke() -> None:
    """Load the default config and check the expected sections."""
    cfg = load_app_config(ProjectPaths(root=ROOT))
    assert isinstance(cfg, AppConfig)
    assert cfg.cache.key == "azkar_cache_v6"
    assert cfg.cache.ttl_hours == 24
    assert [s.name for s in cfg.sources] == ["seen_arabic", "osamayy"]


def test_profile_overlay_and_env_overrides(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    configs = tmp_path / "configs"
    configs.mkdir()
    (configs / "default.yaml").write_text(
        "cache:\n  key: k\n  ttl_hours: 24\nhttp:\n  timeout_seconds: 5\n",
        encoding="utf-8",
    )
    (configs / "config.staging.yaml").write_text(
        "cache:\n  ttl_hours: 1\n", encoding="utf-8"
    )
    monkeypatch.setenv("APP_ENV", "staging")
    monkeypatch.setenv("AZKAR_SOURCE_URLS", '["https://a.invalid/x.json", "https://b.invalid/y.json"]')
    monkeypatch.setenv("AZKAR_CACHE_DIR", str(tmp_path / "snap"))

    cfg = load_app_config(ProjectPaths(root=tmp_path))
    assert cfg.app_env == "staging"
    assert cfg.cache.key == "k"
    assert cfg.cache.ttl_hours == 1
    assert cfg.http.timeout_seconds == 5
    assert [s.url for s in cfg.sources] == ["https://a.invalid/x.json", "https://b.invalid/y.json"]

    settings = Settings(app=cfg, paths=ProjectPaths(root=tmp_path))
    assert settings.cache_dir == (tmp_path / "snap").resolve()

    repo = build_repository(settings)
    assert [s.name for s in repo.sources] == ["env_1", "env_2"]
    assert repo.ttl_seconds == 3600.0


def test_missing_default_config_raises(tmp_path: Path) -> None:
    with pytest.raises(SettingsError):
        load_app_config(ProjectPaths(root=tmp_path))


def test_invalid_values_raise(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("AZKAR_CACHE_TTL_HOURS", raising=False)
    configs = tmp_path / "configs"
    configs.mkdir()
    (configs / "default.yaml").write_text("cache:\n  ttl_hours: -3\n", encoding="utf-8")
    with pytest.raises(SettingsError):
        load_app_config(ProjectPaths(root=tmp_path))


def test_default_sources_when_none_configured(tmp_path: Path) -> None:
    settings = Settings(app=AppConfig(), paths=ProjectPaths(root=tmp_path))
    repo = build_repository(settings)
    assert [s.name for s in repo.sources] == ["seen_arabic", "osamayy"]
    assert repo.baseline
