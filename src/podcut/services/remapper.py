"""Timestamp remapper: original-timeline cues to final-timeline cues.

Cues are placed with the same keep placements the render timeline uses, so
a caption lands exactly where the renderer put its audio, crossfades
included.
"""

import logging
from bisect import bisect_left, bisect_right
from collections.abc import Sequence
from typing import Any

from podcut.errors import DegenerateInput, InvalidCueList
from podcut.models.captions import Cue, TimelineMapping
from podcut.models.config import TransitionConfig
from podcut.models.timeline import CutPlanSegment
from podcut.models.transcript import Transcript, TranscriptSegment
from podcut.services.frames import (
    check_frame_accuracy,
    check_monotonic,
    check_not_after,
    to_frame_time,
)
from podcut.services.offsets import effective_overlap, emitted_duration, place_keeps, select_keeps

logger = logging.getLogger(__name__)


def _coerce_cue(index: int, item: Any) -> Cue:
    if isinstance(item, Cue):
        return item
    try:
        if isinstance(item, dict):
            return Cue.model_validate(item)
        start, end, *rest = item
        return Cue(start=start, end=end, payload=rest[0] if rest else None)
    except (TypeError, ValueError) as exc:
        raise InvalidCueList(
            f"Cue {index} is invalid: {exc}",
            {"index": index, "cue": repr(item)},
        ) from exc


def _dropped(index: int, cue: Cue) -> TimelineMapping:
    return TimelineMapping(
        index=index,
        original_start=cue.start,
        original_end=cue.end,
        dropped=True,
        payload=cue.payload,
    )


def remap_cues(
    cues: Sequence[Cue | tuple | dict],
    segments: Sequence[CutPlanSegment],
    config: TransitionConfig,
    *,
    allow_empty: bool = False,
) -> list[TimelineMapping]:
    """Map cues from the original timeline onto the final render.

    A cue start inside a cut moves forward to the next keep; a cue end
    inside a cut moves back to the previous keep. Cues left with nothing to
    show are marked ``dropped``. A cue spanning a cut becomes one
    continuous cue, since the cut no longer exists on the final timeline.

    Args:
        cues: Cues ordered by start; ``Cue`` objects, dicts or
            ``(start, end[, payload])`` tuples
        segments: The same cut plan segments the render timeline used
        config: The same transition settings the render timeline used
        allow_empty: Drop every cue instead of raising when nothing is kept

    Returns:
        One mapping per input cue, in input order

    Raises:
        InvalidCueList: If cues are malformed, inverted or not ordered by start
        DegenerateInput: If there are no keep segments and ``allow_empty`` is False
        InvalidCutPlan: If keeps overlap or are shorter than the overlap
        FrameAccuracyExceeded: If a mapped time leaves the frame grid or the render
    """
    items = [_coerce_cue(index, item) for index, item in enumerate(cues)]
    check_monotonic((cue.start for cue in items), label="cue starts", error_cls=InvalidCueList)

    keeps = select_keeps(segments)
    if not keeps:
        if not allow_empty:
            raise DegenerateInput(
                "No keep segments in cut plan",
                {"segment_count": len(segments), "cue_count": len(items)},
            )
        return [_dropped(index, cue) for index, cue in enumerate(items)]

    fps = config.fps
    frame = config.frame_duration_sec
    placements = place_keeps(keeps, effective_overlap(config, len(keeps)))
    limit = to_frame_time(emitted_duration(placements), fps)

    starts = [keep.start for keep in keeps]
    ends = [keep.end for keep in keeps]
    mappings: list[TimelineMapping] = []

    for index, cue in enumerate(items):
        # first keep ending after the cue start, last keep starting before its end
        first = bisect_right(ends, cue.start)
        last = bisect_left(starts, cue.end) - 1
        if first >= len(keeps) or last < first:
            mappings.append(_dropped(index, cue))
            continue

        lo = max(cue.start, keeps[first].start)
        hi = min(cue.end, keeps[last].end)
        if first == last and hi <= lo:
            mappings.append(_dropped(index, cue))
            continue

        projected_start = placements[first].project(lo)
        final_start = to_frame_time(projected_start, fps)
        final_end = to_frame_time(placements[last].project(hi), fps)
        if final_end <= final_start:
            # collapsed under a crossfade or below one frame
            final_end = min(to_frame_time(final_start + frame, fps), limit)
            if final_end <= final_start:
                mappings.append(_dropped(index, cue))
                continue

        check_frame_accuracy(
            final_start, fps, reference=projected_start, label=f"cue {index} start"
        )
        check_frame_accuracy(final_end, fps, label=f"cue {index} end")
        check_not_after(final_end, limit, fps, label=f"cue {index} end")

        mappings.append(
            TimelineMapping(
                index=index,
                original_start=cue.start,
                original_end=cue.end,
                final_start=final_start,
                final_end=final_end,
                payload=cue.payload,
            )
        )

    check_monotonic(
        (m.final_start for m in mappings if not m.dropped),
        label="remapped cue starts",
        error_cls=InvalidCueList,
    )
    dropped = sum(1 for m in mappings if m.dropped)
    logger.info(f"Remapped {len(mappings) - dropped} cues, dropped {dropped}")
    return mappings


def remap_transcript(
    transcript: Transcript | Sequence[TranscriptSegment],
    segments: Sequence[CutPlanSegment],
    config: TransitionConfig,
    *,
    allow_empty: bool = False,
) -> list[TimelineMapping]:
    """Remap transcript segments as cues, carrying their text as payload."""
    source = transcript.segments if isinstance(transcript, Transcript) else transcript
    cues = [Cue(start=seg.start, end=seg.end, payload=seg.text) for seg in source]
    return remap_cues(cues, segments, config, allow_empty=allow_empty)
