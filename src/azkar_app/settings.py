#!filepath: src/azkar_app/settings.py
from __future__ import annotations

import json
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError

from azkar_app.utils.logger import get_logger
from azkar_app.utils.project_paths import ProjectPaths

logger = get_logger(__name__)

try:
    from dotenv import load_dotenv
except Exception:
    load_dotenv = None

try:
    import yaml
except Exception:
    yaml = None


class SettingsError(RuntimeError):
    """Failed to load or validate settings."""


class PathsConfig(BaseModel):
    """Filesystem paths, relative ones resolve against the project root."""

    cache_dir: str = "data/cache"

    model_config = {"extra": "allow"}


class CacheConfig(BaseModel):
    """Snapshot cache policy."""

    key: str = "azkar_cache_v6"
    ttl_hours: float = Field(default=24.0, gt=0)

    model_config = {"extra": "allow"}


class HttpConfig(BaseModel):
    """HTTP client options."""

    timeout_seconds: int = Field(default=20, ge=1)
    connect_timeout_seconds: int = Field(default=10, ge=1)
    user_agent: str = "AzkarCompanion/0.4"

    model_config = {"extra": "allow"}


class SourceConfig(BaseModel):
    """One remote content source."""

    name: str
    url: str


class QuranConfig(BaseModel):
    """Quran API endpoints."""

    base_url: str = "https://api.quran.com/api/v4"
    audio_base_url: str = "https://server8.mp3quran.net/afs"

    model_config = {"extra": "allow"}


class AppConfig(BaseModel):
    """Main config."""

    paths: PathsConfig = PathsConfig()
    cache: CacheConfig = CacheConfig()
    http: HttpConfig = HttpConfig()
    sources: List[SourceConfig] = Field(default_factory=list)
    quran: QuranConfig = QuranConfig()
    app_env: str = "production"

    model_config = {"extra": "allow"}


@dataclass(frozen=True, slots=True)
class Settings:
    """Unified settings.

    Attributes:
        app: Validated app config.
        paths: Project paths.
    """

    app: AppConfig
    paths: ProjectPaths

    @property
    def cache_dir(self) -> Path:
        """Snapshot cache directory."""
        return self.paths.resolve_relative(self.app.paths.cache_dir)


def load_app_config(paths: Optional[ProjectPaths] = None) -> AppConfig:
    """Load, merge and validate the app config.

    Args:
        paths: Resolved paths.

    Returns:
        AppConfig: Validated config.

    Raises:
        SettingsError: On any failure.
    """
    if load_dotenv is not None:
        load_dotenv(override=False)

    resolved_paths = paths or ProjectPaths.discover()
    env_name = str(os.getenv("APP_ENV", "production") or "production").strip()

    default_path = (resolved_paths.configs_dir / "default.yaml").resolve()
    profile_path = (resolved_paths.configs_dir / f"config.{env_name}.yaml").resolve()

    base = _read_yaml_mapping(default_path, required=True)
    overlay = _read_yaml_mapping(profile_path, required=False)

    merged = _deep_merge(base, overlay)
    merged["app_env"] = env_name

    _override_from_env(merged)

    try:
        model = AppConfig.model_validate(merged)
    except ValidationError as e:
        raise SettingsError(f"Config validation failed: {e}") from e

    logger.debug(
        f"Loaded app config, env={env_name}, default={default_path}, profile_exists={profile_path.exists()}"
    )
    return model


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings.

    Returns:
        Settings: Loaded settings.
    """
    paths = ProjectPaths.discover()
    return Settings(app=load_app_config(paths), paths=paths)


def reload_settings() -> Settings:
    """Reload settings.

    Returns:
        Settings: Reloaded settings.
    """
    get_settings.cache_clear()
    return get_settings()


def _read_yaml_mapping(path: Path, required: bool) -> Dict[str, Any]:
    if not path.exists():
        if required:
            raise SettingsError(f"Missing config file: {path}")
        return {}

    if yaml is None:
        raise SettingsError("YAML support missing, install PyYAML")

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf8"))
    except Exception as e:
        raise SettingsError(f"Invalid YAML at {path}: {e}") from e

    if raw is None:
        return {}

    if not isinstance(raw, dict):
        raise SettingsError(f"Top level YAML must be a mapping at {path}")

    return raw


def _deep_merge(a: Mapping[str, Any], b: Mapping[str, Any]) -> Dict[str, Any]:
    out: Dict[str, Any] = {k: v for k, v in a.items()}
    for k, v in b.items():
        if k in out and isinstance(out[k], dict) and isinstance(v, dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def _parse_env_list(raw: str) -> list[str]:
    s = str(raw or "").strip()
    if not s:
        return []
    if s.startswith("["):
        try:
            parsed = json.loads(s)
        except json.JSONDecodeError:
            parsed = None
        if isinstance(parsed, list):
            return [str(x).strip() for x in parsed if str(x).strip()]
    return [p.strip() for p in s.split(",") if p.strip()]


def _override_from_env(merged: Dict[str, Any]) -> None:
    urls = _parse_env_list(os.getenv("AZKAR_SOURCE_URLS", ""))
    if urls:
        logger.warning("Env override active for AZKAR_SOURCE_URLS")
        merged["sources"] = [
            {"name": f"env_{i + 1}", "url": u} for i, u in enumerate(urls)
        ]

    cache_dir = str(os.getenv("AZKAR_CACHE_DIR", "") or "").strip()
    if cache_dir:
        paths = merged.get("paths") if isinstance(merged.get("paths"), dict) else {}
        paths["cache_dir"] = cache_dir
        merged["paths"] = paths

    ttl = str(os.getenv("AZKAR_CACHE_TTL_HOURS", "") or "").strip()
    if ttl:
        cache = merged.get("cache") if isinstance(merged.get("cache"), dict) else {}
        cache["ttl_hours"] = ttl
        merged["cache"] = cache
