import json
from pathlib import Path
from typing import Iterator

import pytest

from capturegate.policy import EMPTY_CAPTURE_CONFIG
from capturegate.runtime import (
    CAPTURE_CONFIG_ENV_VAR,
    capture_config_path,
    reset_capture_config_cache,
    resolve_capture_config,
)


@pytest.fixture(autouse=True)
def _clean_runtime(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.delenv(CAPTURE_CONFIG_ENV_VAR, raising=False)
    reset_capture_config_cache()
    yield
    reset_capture_config_cache()


def _write_config(path: Path, payload: dict) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_nothing_configured_resolves_to_empty_config() -> None:
    assert capture_config_path() is None
    assert resolve_capture_config() is EMPTY_CAPTURE_CONFIG
    assert resolve_capture_config("  ") is EMPTY_CAPTURE_CONFIG


def test_explicit_path_wins_over_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    env_path = _write_config(tmp_path / "env.json", {"disable_screenshots": ["env"]})
    explicit_path = _write_config(tmp_path / "explicit.json", {"disable_screenshots": ["explicit"]})
    monkeypatch.setenv(CAPTURE_CONFIG_ENV_VAR, str(env_path))

    assert capture_config_path(explicit_path) == explicit_path
    assert resolve_capture_config(explicit_path).disabled_screenshot_names == frozenset(
        {"explicit"}
    )
    assert resolve_capture_config().disabled_screenshot_names == frozenset({"env"})


def test_each_file_is_read_once_per_process(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path / "capture.json", {"disable_screenshots": ["A"]})

    first = resolve_capture_config(config_path)
    _write_config(config_path, {"disable_screenshots": ["changed"]})
    second = resolve_capture_config(str(config_path))

    assert first is second
    assert second.disabled_screenshot_names == frozenset({"A"})

    reset_capture_config_cache()
    assert resolve_capture_config(config_path).disabled_screenshot_names == frozenset(
        {"changed"}
    )


def test_env_config_is_cached(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_path = _write_config(tmp_path / "capture.json", {"disable_screen_recording": ["B"]})
    monkeypatch.setenv(CAPTURE_CONFIG_ENV_VAR, str(config_path))

    assert resolve_capture_config() is resolve_capture_config(config_path)


def test_missing_env_config_fails_open(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(CAPTURE_CONFIG_ENV_VAR, str(tmp_path / "missing.json"))

    with pytest.warns(RuntimeWarning, match="Capture config ignored"):
        config = resolve_capture_config()

    assert config == EMPTY_CAPTURE_CONFIG
