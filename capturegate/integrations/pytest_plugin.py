"""pytest plugin gating Playwright screenshots and video recordings.

Enable it from a ``conftest.py``::

    pytest_plugins = ["capturegate.integrations.pytest_plugin"]

Tests then request ``capture_page`` (a Playwright page whose context records
video unless disabled, and which is screenshotted at teardown unless disabled),
or combine ``capture_screenshot`` and ``capture_context_args`` with their own
fixtures. Both capture kinds are matched against the pytest node name.
"""

from __future__ import annotations

from pathlib import Path
import re
from typing import Any, Callable, Iterator

import pytest
from playwright.sync_api import Browser, BrowserContext, Page

from capturegate.gate import CaptureGate
from capturegate.policy import CaptureConfig, should_record
from capturegate.runtime import resolve_capture_config

SCREENSHOT_MODES = ("always", "on-failure", "off")
DEFAULT_OUTPUT_DIR = "test-results/captures"

_GATE_KEY = pytest.StashKey[CaptureGate]()
_REPORTS_KEY = pytest.StashKey[dict[str, pytest.TestReport]]()
_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("capturegate", "screenshot and video capture gating")
    group.addoption(
        "--capturegate-config",
        action="store",
        default=None,
        metavar="PATH",
        help="JSON file listing tests whose screenshots/recordings are disabled.",
    )
    group.addoption(
        "--capturegate-output",
        action="store",
        default=None,
        metavar="DIR",
        help=f"Directory for screenshots and videos (default: {DEFAULT_OUTPUT_DIR}).",
    )
    group.addoption(
        "--capturegate-screenshots",
        action="store",
        default=None,
        choices=SCREENSHOT_MODES,
        help="When to take teardown screenshots (default: always).",
    )
    parser.addini("capturegate_config", "Capture config JSON path.", default="")
    parser.addini("capturegate_output", "Capture output directory.", default=DEFAULT_OUTPUT_DIR)
    parser.addini("capturegate_screenshots", "Teardown screenshot mode.", default="always")


def pytest_configure(config: pytest.Config) -> None:
    _screenshot_mode(config)
    capture_config = resolve_capture_config(_resolve_config_path(config))
    config.stash[_GATE_KEY] = CaptureGate(config=capture_config)


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item: pytest.Item, call: pytest.CallInfo[None]) -> Iterator[None]:
    outcome = yield
    report = outcome.get_result()
    item.stash.setdefault(_REPORTS_KEY, {})[report.when] = report


@pytest.fixture(scope="session")
def capture_gate(pytestconfig: pytest.Config) -> CaptureGate:
    return pytestconfig.stash[_GATE_KEY]


@pytest.fixture(scope="session")
def capture_config(capture_gate: CaptureGate) -> CaptureConfig:
    return capture_gate.config


@pytest.fixture(scope="session")
def capture_output_dir(pytestconfig: pytest.Config) -> Path:
    value = pytestconfig.getoption("capturegate_output")
    if value:
        return Path(value).absolute()
    return _relative_to_ini(pytestconfig, pytestconfig.getini("capturegate_output"))


@pytest.fixture
def capture_screenshot(
    request: pytest.FixtureRequest,
    capture_gate: CaptureGate,
    capture_output_dir: Path,
) -> Iterator[Callable[[Page], Page]]:
    """Register pages to screenshot when the test finishes."""
    pages: list[Page] = []

    def register(page: Page) -> Page:
        pages.append(page)
        return page

    yield register

    mode = _screenshot_mode(request.config)
    if mode == "off" or not pages:
        return
    if mode == "on-failure" and not _test_failed(request.node):
        return

    name = request.node.name
    for index, page in enumerate(pages):
        path = screenshot_path(capture_output_dir, name, index=index)
        capture_gate.run(
            name,
            "screenshot",
            lambda page=page, path=path: _take_screenshot(page, path),
        )


@pytest.fixture
def capture_context_args(
    request: pytest.FixtureRequest,
    browser_context_args: dict[str, Any],
    capture_gate: CaptureGate,
    capture_output_dir: Path,
) -> dict[str, Any]:
    """``browser_context_args`` with video recording switched per test.

    Without ``recordVideo`` in the capture config, pytest-playwright's own
    ``--video`` setting (a ``record_video_dir`` in ``browser_context_args``)
    decides whether recording is on.
    """
    name = request.node.name
    args = dict(browser_context_args)
    framework_records = "record_video_dir" in browser_context_args
    if not should_record(name, capture_gate.config, default=framework_records):
        args.pop("record_video_dir", None)
        args.pop("record_video_size", None)
    elif not framework_records:
        args["record_video_dir"] = str(capture_output_dir / "videos" / safe_filename(name))
    return args


@pytest.fixture
def capture_context(
    browser: Browser,
    capture_context_args: dict[str, Any],
) -> Iterator[BrowserContext]:
    context = browser.new_context(**capture_context_args)
    yield context
    context.close()


@pytest.fixture
def capture_page(
    capture_context: BrowserContext,
    capture_screenshot: Callable[[Page], Page],
) -> Page:
    # Closed together with its context, after the teardown screenshot.
    return capture_screenshot(capture_context.new_page())


def safe_filename(name: str) -> str:
    return _UNSAFE_FILENAME_CHARS.sub("_", name).strip("._") or "capture"


def screenshot_path(output_dir: Path, name: str, *, index: int = 0) -> Path:
    suffix = "" if index == 0 else f"-{index}"
    return output_dir / "screenshots" / f"{safe_filename(name)}{suffix}.png"


def _take_screenshot(page: Page, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    page.screenshot(path=str(path), full_page=True)
    return path


def _test_failed(item: pytest.Item) -> bool:
    reports = item.stash.get(_REPORTS_KEY, {})
    return any(report.failed for report in reports.values())


def _screenshot_mode(config: pytest.Config) -> str:
    mode = config.getoption("capturegate_screenshots") or config.getini("capturegate_screenshots")
    if mode not in SCREENSHOT_MODES:
        raise pytest.UsageError(
            f"Unsupported capturegate_screenshots value: {mode!r}. "
            f"Supported values: {', '.join(SCREENSHOT_MODES)}."
        )
    return mode


def _resolve_config_path(config: pytest.Config) -> Path | None:
    value = config.getoption("capturegate_config")
    if value:
        return Path(value)
    ini_value = config.getini("capturegate_config")
    if ini_value:
        return _relative_to_ini(config, ini_value)
    return None


def _relative_to_ini(config: pytest.Config, value: str) -> Path:
    path = Path(value)
    if path.is_absolute():
        return path
    base = config.inipath.parent if config.inipath is not None else config.rootpath
    return base / path
