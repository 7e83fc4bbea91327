"""Named policy presets loaded from YAML."""

from __future__ import annotations

from pathlib import Path

import structlog
import yaml

from cspolicy.config.loader import CSPSettings, get_settings
from cspolicy.directives import FETCH_DIRECTIVES, MINIMAL_DIRECTIVES
from cspolicy.models.policy_config import PolicyConfig
from cspolicy.policy import Policy

logger = structlog.get_logger()

_FALLBACK_PRESET = "balanced"

_VOCABULARIES = {
    "full": FETCH_DIRECTIVES,
    "minimal": MINIMAL_DIRECTIVES,
}

# Cache loaded presets, keyed by file path
_presets: dict[str, dict[str, PolicyConfig]] = {}


def load_presets(path: str | Path) -> dict[str, PolicyConfig]:
    """Load policy presets from YAML, caching after first load per path."""
    key = str(path)
    if key in _presets:
        return _presets[key]
    preset_path = Path(path)
    if not preset_path.exists():
        logger.error("csp_presets_not_found", path=key)
        _presets[key] = {}
        return _presets[key]
    with open(preset_path) as f:
        raw = yaml.safe_load(f) or {}
    _presets[key] = {name: PolicyConfig.model_validate(body or {}) for name, body in raw.items()}
    logger.info("csp_presets_loaded", path=key, presets=sorted(_presets[key]))
    return _presets[key]


def reset_presets_cache() -> None:
    """Reset the presets cache (for testing)."""
    _presets.clear()


def build_policy(name: str | None = None, settings: CSPSettings | None = None) -> Policy:
    """Build the Policy for preset ``name`` (default: the configured preset).

    Unknown preset names fall back to ``balanced``, and to an empty policy
    when that is missing too.
    """
    settings = settings or get_settings()
    preset_name = name or settings.preset
    presets = load_presets(settings.presets_file)

    config = presets.get(preset_name)
    if config is None:
        logger.warning("csp_preset_unknown", preset=preset_name, fallback=_FALLBACK_PRESET)
        config = presets.get(_FALLBACK_PRESET, PolicyConfig())

    vocabulary = _VOCABULARIES.get(settings.vocabulary)
    if vocabulary is None:
        logger.warning("csp_vocabulary_unknown", vocabulary=settings.vocabulary)
        vocabulary = FETCH_DIRECTIVES

    return config.to_policy(
        auto_self=settings.auto_self,
        report_only=settings.report_only,
        vocabulary=vocabulary,
    )
