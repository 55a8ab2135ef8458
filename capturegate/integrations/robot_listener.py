"""Robot Framework listener gating screenshots and suite recordings.

Usage::

    robot --listener capturegate.integrations.robot_listener.CaptureListener:capture.json tests/

Screenshots are matched against the test name, recordings against the suite
name. The keywords default to SeleniumLibrary/Browser's ``Capture Page
Screenshot`` and ScreenCapLibrary's ``Start Video Recording`` /
``Stop Video Recording``.
"""

from __future__ import annotations

from typing import Any, Callable

from capturegate.gate import CaptureGate, CaptureOutcome
from capturegate.policy import CaptureConfig
from capturegate.runtime import resolve_capture_config

KeywordRunner = Callable[[str], Any]

DEFAULT_SCREENSHOT_KEYWORD = "Capture Page Screenshot"
DEFAULT_START_RECORDING_KEYWORD = "Start Video Recording"
DEFAULT_STOP_RECORDING_KEYWORD = "Stop Video Recording"


class CaptureListener:
    """Listener API v3 adapter for :class:`CaptureGate`."""

    ROBOT_LISTENER_API_VERSION = 3

    def __init__(
        self,
        config_path: str | None = None,
        record_video_default: str | bool = False,
        screenshot_keyword: str = DEFAULT_SCREENSHOT_KEYWORD,
        start_recording_keyword: str = DEFAULT_START_RECORDING_KEYWORD,
        stop_recording_keyword: str = DEFAULT_STOP_RECORDING_KEYWORD,
        *,
        config: CaptureConfig | None = None,
        keyword_runner: KeywordRunner | None = None,
    ) -> None:
        if config is None:
            config = resolve_capture_config(config_path)
        self.gate = CaptureGate(
            config=config,
            record_video_default=_parse_bool(record_video_default),
        )
        self.screenshot_keyword = screenshot_keyword
        self.start_recording_keyword = start_recording_keyword
        self.stop_recording_keyword = stop_recording_keyword
        self._run_keyword = keyword_runner or _run_builtin_keyword
        self._recording_suites: list[str] = []

    def start_suite(self, data: Any, result: Any) -> None:
        name = data.name
        outcome = self.gate.run(
            name,
            "recording",
            lambda: self._run_keyword(self.start_recording_keyword),
        )
        if outcome.captured:
            self._recording_suites.append(name)

    def end_suite(self, data: Any, result: Any) -> None:
        name = data.name
        if name not in self._recording_suites:
            return
        self._recording_suites.remove(name)
        self.gate.run(
            name,
            "recording",
            lambda: self._run_keyword(self.stop_recording_keyword),
        )

    def end_test(self, data: Any, result: Any) -> CaptureOutcome:
        return self.gate.run(
            data.name,
            "screenshot",
            lambda: self._run_keyword(self.screenshot_keyword),
        )


def _run_builtin_keyword(name: str) -> Any:
    from robot.libraries.BuiltIn import BuiltIn

    return BuiltIn().run_keyword(name)


def _parse_bool(value: str | bool) -> bool:
    if isinstance(value, bool):
        return value
    normalized = value.strip().lower()
    if normalized in {"true", "yes", "on", "1"}:
        return True
    if normalized in {"false", "no", "off", "0", ""}:
        return False
    raise ValueError(f"Expected a boolean listener argument, got {value!r}.")
