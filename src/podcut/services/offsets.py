"""Placement of keep segments on the final timeline.

The render timeline and the remapper both place keeps through
``place_keeps`` so that fold offsets and remapped cue times come from the
same running total.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from podcut.errors import InvalidCutPlan
from podcut.models.config import TransitionConfig
from podcut.models.timeline import CutPlanSegment


@dataclass(frozen=True)
class KeepPlacement:
    """Where a keep segment lands on the final timeline."""

    index: int
    segment: CutPlanSegment
    offset: float
    """Final-timeline time at which this keep starts."""
    window_end: float
    """Final-timeline time at which the next keep starts (or the render ends)."""
    overlap_after: float

    @property
    def duration(self) -> float:
        return self.segment.duration

    def project(self, original: float) -> float:
        """Map an original time inside this keep onto the final timeline."""
        return min(original - self.segment.start + self.offset, self.window_end)


def select_keeps(segments: Sequence[CutPlanSegment]) -> list[CutPlanSegment]:
    """Return keep segments, checking they are ordered and disjoint.

    Raises:
        InvalidCutPlan: If keeps overlap or are out of order
    """
    keeps = [seg for seg in segments if seg.is_keep]
    for index in range(1, len(keeps)):
        if keeps[index].start < keeps[index - 1].end:
            raise InvalidCutPlan(
                f"Keep segment {index} overlaps or precedes keep segment {index - 1}",
                {
                    "index": index,
                    "previous": keeps[index - 1].model_dump(),
                    "segment": keeps[index].model_dump(),
                },
            )
    return keeps


def effective_overlap(config: TransitionConfig, keep_count: int) -> float:
    """Overlap per join, or 0 when the render is a plain concatenation."""
    if not config.enabled or keep_count < 2:
        return 0.0
    return config.overlap_sec


def place_keeps(keeps: Sequence[CutPlanSegment], overlap_sec: float) -> list[KeepPlacement]:
    """Thread the cumulative offset through the keep segments.

    Each keep starts where the emitted timeline currently ends; every keep
    but the last gives ``overlap_sec`` back to the following crossfade.
    The offset is carried forward incrementally, never recomputed.

    Raises:
        InvalidCutPlan: If a keep is shorter than the transition overlap
    """
    placements: list[KeepPlacement] = []
    offset = 0.0
    last = len(keeps) - 1

    for index, keep in enumerate(keeps):
        if overlap_sec > 0 and keep.duration < overlap_sec:
            raise InvalidCutPlan(
                f"Keep segment {index} ({keep.duration:.3f}s) is shorter than "
                f"the transition overlap ({overlap_sec:.3f}s)",
                {"index": index, "segment": keep.model_dump(), "overlap_sec": overlap_sec},
            )

        overlap = overlap_sec if index < last else 0.0
        next_offset = offset + keep.duration - overlap
        placements.append(
            KeepPlacement(
                index=index,
                segment=keep,
                offset=offset,
                window_end=next_offset,
                overlap_after=overlap,
            )
        )
        offset = next_offset

    return placements


def emitted_duration(placements: Sequence[KeepPlacement]) -> float:
    """Length of the final timeline after all placements."""
    return placements[-1].window_end if placements else 0.0
