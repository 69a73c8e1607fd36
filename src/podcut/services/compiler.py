"""Timeline compiler: disjoint cut regions to a gapless keep/cut plan."""

import logging
import math
from collections.abc import Sequence

from podcut.errors import DegenerateInput, InvalidCutPlan
from podcut.models.timeline import CutPlanSegment, CutRegion, SegmentType
from podcut.services.frames import check_frame_accuracy

logger = logging.getLogger(__name__)


def compile_timeline(
    regions: Sequence[CutRegion],
    total_duration_sec: float,
    *,
    fps: float | None = None,
) -> list[CutPlanSegment]:
    """Build the ordered keep/cut segments covering ``[0, total_duration_sec]``.

    Args:
        regions: Sorted, disjoint cut regions inside the timeline
        total_duration_sec: Length of the original timeline
        fps: When given, every boundary is checked for frame accuracy

    Returns:
        Gapless plan segments; keeps have reason ``content``

    Raises:
        DegenerateInput: If the timeline has no length
        InvalidCutPlan: If regions overlap, are unsorted or leave the timeline
    """
    if not (math.isfinite(total_duration_sec) and total_duration_sec > 0):
        raise DegenerateInput(
            f"Timeline has no length: total_duration_sec={total_duration_sec!r}",
            {"total_duration_sec": total_duration_sec},
        )

    segments: list[CutPlanSegment] = []
    t = 0.0

    for index, region in enumerate(regions):
        if region.start < t:
            raise InvalidCutPlan(
                f"Cut region {index} starts at {region.start} before {t}",
                {"index": index, "region": region.model_dump(), "position": t},
            )
        if region.end > total_duration_sec:
            raise InvalidCutPlan(
                f"Cut region {index} ends at {region.end} after the timeline end "
                f"{total_duration_sec}",
                {
                    "index": index,
                    "region": region.model_dump(),
                    "total_duration_sec": total_duration_sec,
                },
            )

        if t < region.start:
            segments.append(
                CutPlanSegment(type=SegmentType.KEEP, start=t, end=region.start, reason="content")
            )
        segments.append(
            CutPlanSegment(
                type=SegmentType.CUT, start=region.start, end=region.end, reason=region.reason
            )
        )
        t = region.end

    if t < total_duration_sec:
        segments.append(
            CutPlanSegment(type=SegmentType.KEEP, start=t, end=total_duration_sec, reason="content")
        )

    validate_plan_segments(segments, total_duration_sec, fps=fps)
    logger.debug(
        f"Compiled {len(segments)} segments over {total_duration_sec:.2f}s "
        f"from {len(regions)} cut regions"
    )
    return segments


def validate_plan_segments(
    segments: Sequence[CutPlanSegment],
    total_duration_sec: float | None = None,
    *,
    fps: float | None = None,
) -> None:
    """Check that plan segments partition ``[0, total]`` exactly.

    Segments must start at 0, follow each other without gaps or overlaps
    and, when ``total_duration_sec`` is given, end exactly there.

    Raises:
        InvalidCutPlan: On the first violation
        FrameAccuracyExceeded: If ``fps`` is given and a boundary is off-frame
    """
    if not segments:
        raise InvalidCutPlan("Cut plan has no segments", {"total_duration_sec": total_duration_sec})

    if segments[0].start != 0:
        raise InvalidCutPlan(
            f"Cut plan starts at {segments[0].start}, not 0",
            {"index": 0, "segment": segments[0].model_dump()},
        )

    for index in range(1, len(segments)):
        prev, seg = segments[index - 1], segments[index]
        if seg.start != prev.end:
            kind = "overlaps" if seg.start < prev.end else "leaves a gap after"
            raise InvalidCutPlan(
                f"Segment {index} {kind} segment {index - 1} "
                f"({prev.start}-{prev.end} then {seg.start}-{seg.end})",
                {"index": index, "previous": prev.model_dump(), "segment": seg.model_dump()},
            )

    if total_duration_sec is not None and segments[-1].end != total_duration_sec:
        raise InvalidCutPlan(
            f"Cut plan ends at {segments[-1].end}, not at {total_duration_sec}",
            {"segment": segments[-1].model_dump(), "total_duration_sec": total_duration_sec},
        )

    if fps is not None:
        for index, seg in enumerate(segments):
            check_frame_accuracy(seg.start, fps, label=f"segment {index} start")
            check_frame_accuracy(seg.end, fps, label=f"segment {index} end")
