"""
YAML → typed config loader.

Loads analytics constants from analytics.yaml (bundled with the package) and
optionally merges user overrides from ~/.lift-progress/analytics.yaml.

Usage:
    from lift_progress.core.engine.config_loader import load_status_thresholds
    thresholds = load_status_thresholds()

Missing sections or keys fall back to the Python defaults in config.py.
If a YAML file exists but cannot be read or parsed, a warning is emitted
and the file is ignored.
"""

from __future__ import annotations

import importlib.resources
import os
import warnings
from pathlib import Path
from typing import Any

import yaml

from ..config import (
    STATUS_AHEAD_DELTA,
    STATUS_AT_RISK_DELTA,
    STATUS_BEHIND_DELTA,
    TREND_RELATIVE_SLOPE_THRESHOLD,
    StatusThresholds,
)

# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a single YAML file; warn and return {} if it can't be used."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as e:
        warnings.warn(f"Ignoring config file {path}: {e}", stacklevel=2)
        return {}
    return data if isinstance(data, dict) else {}


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (non-destructive to base)."""
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def get_bundled_yaml_path() -> Path | None:
    """Return the path to the bundled analytics.yaml, or None if not found."""
    ref = importlib.resources.files("lift_progress").joinpath("analytics.yaml")
    with importlib.resources.as_file(ref) as p:
        return p if p.exists() else None


def get_user_yaml_path() -> Path | None:
    """Return ~/.lift-progress/analytics.yaml if it exists, else None."""
    home = Path(os.environ.get("HOME", "~")).expanduser()
    p = home / ".lift-progress" / "analytics.yaml"
    return p if p.exists() else None


def load_model_config(user_path: Path | None = None) -> dict[str, Any]:
    """
    Load and merge analytics configuration from YAML sources.

    Load order (later overrides earlier):
    1. Bundled src/lift_progress/analytics.yaml
    2. User override (``user_path`` or ~/.lift-progress/analytics.yaml)

    Returns:
        Merged dict of config sections.  Empty dict if no YAML available.
    """
    config: dict[str, Any] = {}

    bundled = get_bundled_yaml_path()
    if bundled is not None:
        config = _deep_merge(config, _load_yaml_file(bundled))

    user = user_path if user_path is not None else get_user_yaml_path()
    if user is not None and user.exists():
        user_cfg = _load_yaml_file(user)
        if user_cfg:
            config = _deep_merge(config, user_cfg)

    return config


def load_status_thresholds(config: dict[str, Any] | None = None) -> StatusThresholds:
    """
    Build StatusThresholds from the ``status_thresholds`` section.

    Args:
        config: Already-loaded config; loaded from YAML when None

    Returns:
        StatusThresholds

    Raises:
        ValueError: If the configured cutoffs are not ordered
    """
    if config is None:
        config = load_model_config()
    section = config.get("status_thresholds") or {}
    return StatusThresholds(
        ahead=float(section.get("AHEAD_DELTA", STATUS_AHEAD_DELTA)),
        behind=float(section.get("BEHIND_DELTA", STATUS_BEHIND_DELTA)),
        at_risk=float(section.get("AT_RISK_DELTA", STATUS_AT_RISK_DELTA)),
    )


def load_trend_threshold(config: dict[str, Any] | None = None) -> float:
    """Relative slope threshold from the ``trend`` section."""
    if config is None:
        config = load_model_config()
    section = config.get("trend") or {}
    return float(section.get("RELATIVE_SLOPE_THRESHOLD", TREND_RELATIVE_SLOPE_THRESHOLD))
