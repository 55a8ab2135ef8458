"""Collaborator interface used by test-framework hooks."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Literal
import warnings

from capturegate.policy import (
    CAPTURE_KINDS,
    EMPTY_CAPTURE_CONFIG,
    CaptureConfig,
    CaptureKind,
    should_record,
    should_suppress,
)

CaptureStatus = Literal["captured", "suppressed", "failed"]


@dataclass(frozen=True, slots=True)
class CaptureDiagnostic:
    name: str
    kind: CaptureKind
    error_type: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {
            "name": self.name,
            "kind": self.kind,
            "error_type": self.error_type,
            "message": self.message,
        }


@dataclass(frozen=True, slots=True)
class CaptureOutcome:
    name: str
    kind: CaptureKind
    status: CaptureStatus
    value: Any = None

    @property
    def captured(self) -> bool:
        return self.status == "captured"


@dataclass(slots=True)
class CaptureGate:
    """Decides per name whether a capture runs and isolates capture failures."""

    config: CaptureConfig = EMPTY_CAPTURE_CONFIG
    record_video_default: bool = False
    diagnostics: list[CaptureDiagnostic] = field(default_factory=list)

    def is_suppressed(self, name: str, kind: CaptureKind) -> bool:
        return should_suppress(name, kind, self.config)

    def allows(self, name: str, kind: CaptureKind) -> bool:
        if kind == "recording":
            return should_record(name, self.config, default=self.record_video_default)
        return not self.is_suppressed(name, kind)

    def predicate(self, kind: CaptureKind) -> Callable[[str], bool]:
        """Return a ``name -> allowed`` function for one capture kind."""
        _validate_kind(kind)

        def _allowed(name: str) -> bool:
            return self.allows(name, kind)

        return _allowed

    def run(self, name: str, kind: CaptureKind, action: Callable[[], Any]) -> CaptureOutcome:
        """Run ``action`` unless capture is disabled for ``name``.

        Exceptions raised by ``action`` are recorded as diagnostics and reported
        as ``RuntimeWarning``; they never propagate to the caller.
        """
        if not self.allows(name, kind):
            return CaptureOutcome(name=name, kind=kind, status="suppressed")

        try:
            value = action()
        except Exception as error:
            diagnostic = CaptureDiagnostic(
                name=name,
                kind=kind,
                error_type=error.__class__.__name__,
                message=str(error),
            )
            self.diagnostics.append(diagnostic)
            warnings.warn(
                (
                    f"Capture failure: name={diagnostic.name!r} kind={diagnostic.kind} "
                    f"error={diagnostic.error_type}: {diagnostic.message}"
                ),
                RuntimeWarning,
                stacklevel=2,
            )
            return CaptureOutcome(name=name, kind=kind, status="failed")

        return CaptureOutcome(name=name, kind=kind, status="captured", value=value)

    def clear_diagnostics(self) -> None:
        self.diagnostics.clear()


def _validate_kind(kind: str) -> None:
    if kind not in CAPTURE_KINDS:
        raise ValueError(
            f"Unsupported capture kind: {kind!r}. Supported values: screenshot, recording."
        )
