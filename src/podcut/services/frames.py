"""Frame-accuracy checks shared by the compiler, render timeline and remapper."""

import math
from collections.abc import Iterable

from podcut.errors import FrameAccuracyExceeded, InvalidCutPlan, PodcutError


def _check_fps(fps: float) -> None:
    if not (math.isfinite(fps) and fps > 0):
        raise ValueError(f"fps must be a positive number, got {fps!r}")


def to_frame_time(seconds: float, fps: float) -> float:
    """Round seconds to the nearest frame boundary (halves round up)."""
    _check_fps(fps)
    return math.floor(seconds * fps + 0.5) / fps


def frame_tolerance(fps: float) -> float:
    """One frame, in seconds."""
    _check_fps(fps)
    return 1.0 / fps


def frame_error(value: float, fps: float) -> float:
    """Distance between a value and its frame-rounded counterpart."""
    return abs(value - to_frame_time(value, fps))


def check_frame_accuracy(
    value: float,
    fps: float,
    *,
    reference: float | None = None,
    label: str = "value",
) -> float:
    """Check that ``value`` is within one frame of ``reference``.

    The reference defaults to the frame-rounded value itself.

    Returns:
        The measured error in seconds

    Raises:
        FrameAccuracyExceeded: If the error exceeds one frame or the value is not finite
    """
    tolerance = frame_tolerance(fps)
    if not math.isfinite(value):
        raise FrameAccuracyExceeded(
            f"Frame accuracy exceeded: {label} is not finite ({value!r})",
            {"label": label, "value": value, "fps": fps},
        )

    target = to_frame_time(value, fps) if reference is None else reference
    error = abs(value - target)
    if error > tolerance:
        raise FrameAccuracyExceeded(
            f"Frame accuracy exceeded: {label} error={error:.6f}s "
            f"(tolerance={tolerance:.6f}s)",
            {
                "label": label,
                "value": value,
                "reference": target,
                "error": error,
                "tolerance": tolerance,
                "fps": fps,
            },
        )
    return error


def check_not_after(value: float, limit: float, fps: float, *, label: str = "value") -> None:
    """Check that ``value`` does not pass ``limit`` by more than one frame.

    Raises:
        FrameAccuracyExceeded: If it does
    """
    tolerance = frame_tolerance(fps)
    if value - limit > tolerance:
        raise FrameAccuracyExceeded(
            f"Frame accuracy exceeded: {label}={value:.6f}s passes limit {limit:.6f}s",
            {"label": label, "value": value, "limit": limit, "tolerance": tolerance, "fps": fps},
        )


def check_monotonic(
    values: Iterable[float],
    *,
    label: str = "values",
    error_cls: type[PodcutError] = InvalidCutPlan,
) -> None:
    """Check that values never decrease.

    Raises:
        error_cls: At the first offending position
    """
    previous: float | None = None
    for index, value in enumerate(values):
        if previous is not None and value < previous:
            raise error_cls(
                f"{label} are not monotonic at position {index}: {value} after {previous}",
                {"label": label, "index": index, "value": value, "previous": previous},
            )
        previous = value
