"""Stable public API surface for capture-gate.

This module is the supported import path for library users.
"""

from __future__ import annotations

from capturegate.gate import CaptureDiagnostic, CaptureGate, CaptureOutcome
from capturegate.policy import (
    EMPTY_CAPTURE_CONFIG,
    CaptureConfig,
    CaptureConfigError,
    CaptureConfigNotFoundError,
    CaptureConfigParseError,
    CaptureKind,
    load_capture_config,
    read_capture_config,
    should_record,
    should_suppress,
)
from capturegate.runtime import (
    CAPTURE_CONFIG_ENV_VAR,
    capture_config_path,
    reset_capture_config_cache,
    resolve_capture_config,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "CaptureKind",
    "CaptureConfig",
    "EMPTY_CAPTURE_CONFIG",
    "CaptureConfigError",
    "CaptureConfigNotFoundError",
    "CaptureConfigParseError",
    "load_capture_config",
    "read_capture_config",
    "should_suppress",
    "should_record",
    "CaptureGate",
    "CaptureOutcome",
    "CaptureDiagnostic",
    "CAPTURE_CONFIG_ENV_VAR",
    "capture_config_path",
    "resolve_capture_config",
    "reset_capture_config_cache",
]
