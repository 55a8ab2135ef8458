"""Capture policy: config snapshot, loading and suppression rules."""

from capturegate.policy.exceptions import (
    CaptureConfigError,
    CaptureConfigNotFoundError,
    CaptureConfigParseError,
)
from capturegate.policy.loader import (
    capture_config_from_mapping,
    load_capture_config,
    read_capture_config,
)
from capturegate.policy.models import (
    CAPTURE_KINDS,
    EMPTY_CAPTURE_CONFIG,
    CaptureConfig,
    CaptureKind,
)
from capturegate.policy.rules import should_record, should_suppress

__all__ = [
    "CaptureConfigError",
    "CaptureConfigNotFoundError",
    "CaptureConfigParseError",
    "CAPTURE_KINDS",
    "EMPTY_CAPTURE_CONFIG",
    "CaptureConfig",
    "CaptureKind",
    "capture_config_from_mapping",
    "read_capture_config",
    "load_capture_config",
    "should_suppress",
    "should_record",
]
