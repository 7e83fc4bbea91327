"""Env var + .env config loading with pydantic-settings."""

from __future__ import annotations

from pathlib import Path

import structlog
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = structlog.get_logger()

_PRESETS_PATH = Path(__file__).parent / "policy_presets.yaml"


class CSPSettings(BaseSettings):
    """CSP header settings, overridable via ``CSP_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CSP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "info"
    log_json: bool = True

    # Policy presets
    presets_file: str = str(_PRESETS_PATH)
    preset: str = "balanced"

    # Defaults for presets that do not pin these flags
    auto_self: bool = True
    report_only: bool = False

    # "full" (every fetch directive) or "minimal" (default/script/style only)
    vocabulary: str = "full"


_settings: CSPSettings | None = None


def get_settings() -> CSPSettings:
    """Get or create the singleton settings instance."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def load_settings() -> CSPSettings:
    """Load settings from env vars (env vars override model defaults)."""
    global _settings
    _settings = CSPSettings()
    logger.info("config_loaded", preset=_settings.preset, report_only=_settings.report_only)
    return _settings
