"""Custom exceptions for podcut."""

from typing import Any


class PodcutError(Exception):
    """Base exception for podcut.

    Every error carries a ``details`` mapping with the offending
    segments, regions or values so callers can log it as-is.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details: dict[str, Any] = details or {}


class InvalidTranscript(PodcutError):
    """Transcript is missing, empty or malformed."""

    pass


class InvalidCutPlan(PodcutError):
    """Cut plan breaks the ordering, bounds or gapless invariants."""

    pass


class FrameAccuracyExceeded(PodcutError):
    """A computed boundary is outside the one-frame tolerance."""

    pass


class DegenerateInput(PodcutError):
    """Input leaves nothing to render (no keep segments, empty timeline)."""

    pass


class InvalidCueList(PodcutError):
    """Cue list handed to the remapper is not ordered."""

    pass
