"""Immutable capture configuration snapshot."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

CaptureKind = Literal["screenshot", "recording"]

CAPTURE_KINDS: tuple[CaptureKind, ...] = ("screenshot", "recording")

RECORD_VIDEO_KEY = "recordVideo"
DISABLE_SCREENSHOTS_KEY = "disable_screenshots"
DISABLE_RECORDING_KEY = "disable_screen_recording"


@dataclass(frozen=True, slots=True)
class CaptureConfig:
    """Names whose screenshots or recordings are disabled for a test run."""

    record_video: bool | None = None
    disabled_screenshot_names: frozenset[str] = field(default_factory=frozenset)
    disabled_recording_names: frozenset[str] = field(default_factory=frozenset)

    def disabled_names(self, kind: CaptureKind) -> frozenset[str]:
        if kind == "screenshot":
            return self.disabled_screenshot_names
        if kind == "recording":
            return self.disabled_recording_names
        raise ValueError(
            f"Unsupported capture kind: {kind!r}. Supported values: screenshot, recording."
        )

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            DISABLE_SCREENSHOTS_KEY: sorted(self.disabled_screenshot_names),
            DISABLE_RECORDING_KEY: sorted(self.disabled_recording_names),
        }
        if self.record_video is not None:
            payload[RECORD_VIDEO_KEY] = self.record_video
        return payload


EMPTY_CAPTURE_CONFIG = CaptureConfig()
