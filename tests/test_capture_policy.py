import pytest

from capturegate.policy import (
    CaptureConfig,
    capture_config_from_mapping,
    should_record,
    should_suppress,
)


@pytest.fixture
def scenario_config() -> CaptureConfig:
    return capture_config_from_mapping(
        {"disable_screenshots": ["A"], "disable_screen_recording": ["B"]}
    )


def test_scenario_membership(scenario_config: CaptureConfig) -> None:
    assert should_suppress("A", "screenshot", scenario_config) is True
    assert should_suppress("A", "recording", scenario_config) is False
    assert should_suppress("B", "recording", scenario_config) is True
    assert should_suppress("B", "screenshot", scenario_config) is False
    assert should_suppress("C", "screenshot", scenario_config) is False
    assert should_suppress("C", "recording", scenario_config) is False


def test_matching_is_exact_and_case_sensitive() -> None:
    config = capture_config_from_mapping({"disable_screenshots": ["Verify Login"]})

    assert should_suppress("Verify Login", "screenshot", config) is True
    assert should_suppress("verify login", "screenshot", config) is False
    assert should_suppress("Verify Login ", "screenshot", config) is False
    assert should_suppress("Verify", "screenshot", config) is False


def test_empty_config_never_suppresses() -> None:
    config = CaptureConfig()

    assert should_suppress("anything", "screenshot", config) is False
    assert should_suppress("anything", "recording", config) is False


def test_unsupported_kind_is_rejected() -> None:
    with pytest.raises(ValueError, match="Unsupported capture kind"):
        should_suppress("A", "trace", CaptureConfig())  # type: ignore[arg-type]


@pytest.mark.parametrize(
    ("record_video", "default", "expected"),
    [
        (None, False, False),
        (None, True, True),
        (True, False, True),
        (False, True, False),
    ],
)
def test_should_record_follows_record_video_flag(
    record_video: bool | None,
    default: bool,
    expected: bool,
) -> None:
    config = CaptureConfig(record_video=record_video)

    assert should_record("Suite", config, default=default) is expected


def test_should_record_respects_disabled_names() -> None:
    config = capture_config_from_mapping(
        {"recordVideo": True, "disable_screen_recording": ["Slow Suite"]}
    )

    assert should_record("Slow Suite", config) is False
    assert should_record("Fast Suite", config) is True
