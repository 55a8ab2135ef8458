"""JSON capture config loading with a fail-open default."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping
import warnings

from capturegate.policy.exceptions import (
    CaptureConfigError,
    CaptureConfigNotFoundError,
    CaptureConfigParseError,
)
from capturegate.policy.models import (
    DISABLE_RECORDING_KEY,
    DISABLE_SCREENSHOTS_KEY,
    EMPTY_CAPTURE_CONFIG,
    RECORD_VIDEO_KEY,
    CaptureConfig,
)


def capture_config_from_mapping(config: Mapping[str, Any]) -> CaptureConfig:
    """Create a capture config from an already decoded mapping.

    Keys other than ``recordVideo``, ``disable_screenshots`` and
    ``disable_screen_recording`` are ignored so the file can be shared with
    other tooling.
    """
    record_video = config.get(RECORD_VIDEO_KEY)
    if record_video is not None and not isinstance(record_video, bool):
        raise CaptureConfigParseError(
            f"capture config key '{RECORD_VIDEO_KEY}' must be a boolean."
        )

    return CaptureConfig(
        record_video=record_video,
        disabled_screenshot_names=_read_name_set(config, key=DISABLE_SCREENSHOTS_KEY),
        disabled_recording_names=_read_name_set(config, key=DISABLE_RECORDING_KEY),
    )


def read_capture_config(path: str | Path) -> CaptureConfig:
    """Load capture config from a JSON file, raising on any failure."""
    config_path = Path(path)
    try:
        text = config_path.read_text(encoding="utf-8")
    except FileNotFoundError as error:
        raise CaptureConfigNotFoundError(
            f"Capture config file not found ({config_path})."
        ) from error
    except UnicodeDecodeError as error:
        raise CaptureConfigParseError(
            f"Capture config is not valid UTF-8 ({config_path}): {error}"
        ) from error
    except OSError as error:
        raise CaptureConfigNotFoundError(
            f"Capture config file is unreadable ({config_path}): {error}"
        ) from error

    try:
        raw = json.loads(text)
    except json.JSONDecodeError as error:
        raise CaptureConfigParseError(
            f"Invalid capture config JSON ({config_path}): {error}"
        ) from error

    if not isinstance(raw, dict):
        raise CaptureConfigParseError(
            f"Capture config must be a JSON object ({config_path})."
        )

    try:
        return capture_config_from_mapping(raw)
    except CaptureConfigParseError as error:
        raise CaptureConfigParseError(f"{error} ({config_path})") from error


def load_capture_config(path: str | Path) -> CaptureConfig:
    """Load capture config, falling back to an empty config on failure.

    A missing or malformed file never blocks a test run: every capture stays
    enabled and a ``RuntimeWarning`` is emitted instead.
    """
    try:
        return read_capture_config(path)
    except CaptureConfigError as error:
        warnings.warn(
            f"Capture config ignored, all capture enabled: {error}",
            RuntimeWarning,
            stacklevel=2,
        )
        return EMPTY_CAPTURE_CONFIG


def _read_name_set(config: Mapping[str, Any], *, key: str) -> frozenset[str]:
    if key not in config:
        return frozenset()
    value = config[key]
    if not isinstance(value, list):
        raise CaptureConfigParseError(
            f"capture config key '{key}' must be a JSON array of strings."
        )
    for item in value:
        if not isinstance(item, str):
            raise CaptureConfigParseError(
                f"capture config key '{key}' must be a JSON array of strings."
            )
    return frozenset(value)
