"""Capture config resolution shared by the framework adapters."""

from __future__ import annotations

import os
from pathlib import Path

from capturegate.policy import EMPTY_CAPTURE_CONFIG, CaptureConfig, load_capture_config

CAPTURE_CONFIG_ENV_VAR = "CAPTUREGATE_CONFIG"

_LOADED_CONFIGS: dict[str, CaptureConfig] = {}


def capture_config_path(path: str | Path | None = None) -> Path | None:
    """Explicit ``path`` if given, else ``CAPTUREGATE_CONFIG``, else None."""
    if path is not None and str(path).strip():
        return Path(path)
    env_value = os.getenv(CAPTURE_CONFIG_ENV_VAR, "").strip()
    if env_value:
        return Path(env_value)
    return None


def resolve_capture_config(path: str | Path | None = None) -> CaptureConfig:
    """Load the capture config for this process.

    Each config file is read at most once per process (one pytest-xdist worker,
    one Robot run); later calls for the same file return the cached snapshot.
    Without an explicit path or ``CAPTUREGATE_CONFIG`` nothing is disabled.
    """
    config_path = capture_config_path(path)
    if config_path is None:
        return EMPTY_CAPTURE_CONFIG

    key = str(config_path.absolute())
    config = _LOADED_CONFIGS.get(key)
    if config is None:
        config = load_capture_config(config_path)
        _LOADED_CONFIGS[key] = config
    return config


def reset_capture_config_cache() -> None:
    """Forget loaded config files (for tests)."""
    _LOADED_CONFIGS.clear()
