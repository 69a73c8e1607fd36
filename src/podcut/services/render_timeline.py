"""Render timeline builder.

Turns the keep segments of a cut plan into the numbers the render step
needs: expected output duration, join list and an abstract trim/fold graph.
Filter-graph text and process execution belong to the caller.
"""

import logging
from collections.abc import Sequence

from podcut.errors import DegenerateInput, FrameAccuracyExceeded
from podcut.models.config import TransitionConfig
from podcut.models.render import FoldNode, Join, RenderTimelinePlan, TrimNode
from podcut.models.timeline import CutPlanSegment
from podcut.services.frames import check_frame_accuracy, frame_tolerance, to_frame_time
from podcut.services.offsets import effective_overlap, emitted_duration, place_keeps, select_keeps

logger = logging.getLogger(__name__)

# Crossfaded renders drift more than plain cuts; allow 2% or 5 s.
TRANSITION_TOLERANCE_RATIO = 0.02
TRANSITION_TOLERANCE_SEC = 5.0


def build_render_timeline(
    segments: Sequence[CutPlanSegment],
    config: TransitionConfig,
    *,
    allow_empty: bool = False,
) -> RenderTimelinePlan:
    """Compute the render plan for a cut plan.

    Without transitions (or with fewer than two keeps) the render is a plain
    trim-and-concatenate and has no joins. With transitions every pair of
    adjacent keeps is crossfaded; each fold starts at the running output
    length minus one overlap.

    Args:
        segments: Cut plan segments; only keeps are used
        config: Transition settings and target fps
        allow_empty: Return an empty plan instead of raising when nothing is kept

    Returns:
        RenderTimelinePlan with expected duration, joins, trims and folds

    Raises:
        DegenerateInput: If there are no keep segments and ``allow_empty`` is False
        InvalidCutPlan: If keeps overlap or are shorter than the overlap
        FrameAccuracyExceeded: If a fold offset or the duration drifts more than
            one frame from the keep durations less their overlaps
    """
    keeps = select_keeps(segments)
    fade_ms = config.effective_audio_fade_ms

    if not keeps:
        if not allow_empty:
            raise DegenerateInput(
                "No keep segments in cut plan",
                {"segment_count": len(segments)},
            )
        logger.warning("Render timeline requested for a plan with no keep segments")
        return RenderTimelinePlan(
            expected_duration_sec=0.0,
            frame_aligned_duration_sec=0.0,
            fps=config.fps,
            transition_duration_ms=config.duration_ms,
            audio_fade_ms=fade_ms,
        )

    overlap = effective_overlap(config, len(keeps))
    placements = place_keeps(keeps, overlap)

    trims = [
        TrimNode(
            index=p.index,
            start=p.segment.start,
            end=p.segment.end,
            video_label=f"v{p.index}",
            audio_label=f"a{p.index}",
        )
        for p in placements
    ]

    joins: list[Join] = []
    folds: list[FoldNode] = []
    video_out, audio_out = trims[0].video_label, trims[0].audio_label

    if overlap > 0:
        kept_sec = 0.0
        for placement in placements[1:]:
            prior = placements[placement.index - 1]
            kept_sec += prior.duration
            join = Join(
                index=prior.index,
                prior_keep_end=prior.segment.end,
                next_keep_start=placement.segment.start,
                overlap_sec=overlap,
            )
            # running offset vs. keeps so far minus one overlap per join
            check_frame_accuracy(
                placement.offset,
                config.fps,
                reference=kept_sec - overlap * placement.index,
                label=f"fold {join.index} offset",
            )
            trim = trims[placement.index]
            fold = FoldNode(
                join_index=join.index,
                video_inputs=(video_out, trim.video_label),
                audio_inputs=(audio_out, trim.audio_label),
                video_output=f"vx{placement.index}",
                audio_output=f"ax{placement.index}",
                offset_sec=placement.offset,
                overlap_sec=overlap,
                audio_fade_sec=fade_ms / 1000.0,
            )
            joins.append(join)
            folds.append(fold)
            video_out, audio_out = fold.video_output, fold.audio_output
    elif len(trims) > 1:
        video_out, audio_out = "vout", "aout"

    expected = emitted_duration(placements)
    plan = RenderTimelinePlan(
        expected_duration_sec=expected,
        frame_aligned_duration_sec=to_frame_time(expected, config.fps),
        fps=config.fps,
        transitions_applied=overlap > 0,
        transition_duration_ms=config.duration_ms,
        audio_fade_ms=fade_ms,
        keep_segments=list(keeps),
        joins=joins,
        trims=trims,
        folds=folds,
        video_output=video_out,
        audio_output=audio_out,
    )
    check_frame_accuracy(
        expected,
        config.fps,
        reference=sum(p.duration for p in placements) - plan.total_overlap_sec,
        label="expected_duration_sec",
    )
    logger.info(
        f"Render timeline: {len(keeps)} keeps, {len(joins)} joins, "
        f"expected {expected:.3f}s"
    )
    return plan


def rendered_duration_tolerance(plan: RenderTimelinePlan) -> float:
    """Allowed difference between the expected and the measured render duration."""
    frame = frame_tolerance(plan.fps)
    if not plan.transitions_applied:
        return frame
    return max(
        plan.expected_duration_sec * TRANSITION_TOLERANCE_RATIO,
        TRANSITION_TOLERANCE_SEC,
        frame,
    )


def verify_rendered_duration(plan: RenderTimelinePlan, actual_duration_sec: float) -> float:
    """Compare a measured render duration with the plan.

    Returns:
        The absolute difference in seconds

    Raises:
        FrameAccuracyExceeded: If the difference is outside tolerance
    """
    tolerance = rendered_duration_tolerance(plan)
    difference = abs(actual_duration_sec - plan.expected_duration_sec)
    if difference > tolerance:
        raise FrameAccuracyExceeded(
            f"Output duration mismatch: expected {plan.expected_duration_sec:.3f}s, "
            f"got {actual_duration_sec:.3f}s (diff: {difference:.3f}s, "
            f"tolerance: ±{tolerance:.3f}s)",
            {
                "expected_duration_sec": plan.expected_duration_sec,
                "actual_duration_sec": actual_duration_sec,
                "difference_sec": difference,
                "tolerance_sec": tolerance,
                "fps": plan.fps,
                "transitions_applied": plan.transitions_applied,
                "joins": plan.join_count,
            },
        )
    return difference
