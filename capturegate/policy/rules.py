"""Suppression rules evaluated against a capture config snapshot."""

from __future__ import annotations

from capturegate.policy.models import CaptureConfig, CaptureKind


def should_suppress(name: str, kind: CaptureKind, config: CaptureConfig) -> bool:
    """Return True when ``name`` is listed as disabled for ``kind``.

    Matching is exact and case-sensitive. Unknown names are never suppressed.
    """
    return name in config.disabled_names(kind)


def should_record(name: str, config: CaptureConfig, *, default: bool = False) -> bool:
    """Effective recording decision for ``name``.

    ``config.record_video`` switches recording on or off globally; when the key
    was absent from the config file, ``default`` (the framework's own default)
    applies. A name listed under ``disable_screen_recording`` is never recorded.
    """
    enabled = default if config.record_video is None else config.record_video
    if not enabled:
        return False
    return not should_suppress(name, "recording", config)
