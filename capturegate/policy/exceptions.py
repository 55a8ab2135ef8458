"""Capture policy exceptions."""


class CaptureConfigError(Exception):
    """Base class for capture configuration errors."""


class CaptureConfigNotFoundError(CaptureConfigError):
    """Raised when the capture config file is missing or unreadable."""


class CaptureConfigParseError(CaptureConfigError, ValueError):
    """Raised when the capture config file is not a valid config document."""
