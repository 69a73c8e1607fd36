"""Cut planner: transcript to cut plan.

Runs detection, merging, filtering and compilation with a single
PlannerConfig. Merging and filtering work on unrounded times; boundaries
are snapped to two decimals just before compilation. The result depends on
nothing but its inputs; the caller records processing time if it wants to.
"""

import logging
from collections.abc import Sequence
from typing import Any

from podcut.errors import InvalidTranscript
from podcut.models.config import PlannerConfig
from podcut.models.timeline import CutPlan, CutPlanMetadata, CutRegion, snap_seconds
from podcut.models.transcript import Transcript, TranscriptSegment
from podcut.services.compiler import compile_timeline
from podcut.services.regions import detect_regions, filter_short_regions, merge_regions

logger = logging.getLogger(__name__)


def _as_transcript(transcript: Transcript | Sequence[TranscriptSegment] | dict[str, Any]) -> Transcript:
    if isinstance(transcript, Transcript):
        result = transcript
    elif isinstance(transcript, dict):
        result = Transcript.from_dict(transcript)
    else:
        result = Transcript(segments=list(transcript))

    if not result.segments:
        raise InvalidTranscript("Invalid transcript: segments array is empty")
    return result


def clip_regions(regions: Sequence[CutRegion], total_duration_sec: float) -> list[CutRegion]:
    """Clamp regions to ``[0, total]``.

    Filler padding can push a region past either end of the timeline.
    Regions that vanish after clamping are dropped. Boundaries keep their
    full precision so merging and filtering see the real gaps.
    """
    clipped: list[CutRegion] = []
    for region in regions:
        start = max(0.0, region.start)
        end = min(region.end, total_duration_sec)
        if end <= start:
            logger.debug(f"Dropping region outside timeline: {region.reason} {region.start}-{region.end}")
            continue
        if start == region.start and end == region.end:
            clipped.append(region)
        else:
            clipped.append(CutRegion(start=start, end=end, reason=region.reason))
    return clipped


def snap_regions(regions: Sequence[CutRegion]) -> list[CutRegion]:
    """Snap sorted, disjoint regions to plan precision.

    Runs after merging and filtering. A region that snaps to zero length is
    dropped; one whose start snaps before the previous end starts there
    instead.
    """
    snapped: list[CutRegion] = []
    previous_end = 0.0
    for region in regions:
        start = max(snap_seconds(region.start), previous_end)
        end = snap_seconds(region.end)
        if end <= start:
            logger.debug(f"Dropping region that snaps to zero length: {region.reason}")
            continue
        snapped.append(CutRegion(start=start, end=end, reason=region.reason))
        previous_end = end
    return snapped


def plan_cuts(
    transcript: Transcript | Sequence[TranscriptSegment] | dict[str, Any],
    config: PlannerConfig | None = None,
    *,
    total_duration_sec: float | None = None,
    source: str | None = None,
    output: str | None = None,
) -> CutPlan:
    """Build a cut plan from transcript timing.

    Args:
        transcript: Transcript model, segment list or raw transcript JSON
        config: Planner thresholds (defaults when omitted)
        total_duration_sec: Length of the source media; defaults to the
            end of the last transcript segment
        source: Transcript location recorded in the plan
        output: Plan location recorded in the plan

    Returns:
        CutPlan whose segments cover the whole timeline

    Raises:
        InvalidTranscript: If the transcript has no segments or is malformed
        DegenerateInput: If the timeline has no length
        InvalidCutPlan: If the compiled plan breaks an invariant
    """
    config = config or PlannerConfig()
    transcript = _as_transcript(transcript)

    total = snap_seconds(
        transcript.duration_sec if total_duration_sec is None else total_duration_sec
    )

    detected = detect_regions(transcript.segments, config)
    clipped = clip_regions(detected, total)
    merged = merge_regions(clipped, config.merge_threshold_ms)
    kept = filter_short_regions(merged, config.min_cut_duration_sec)
    cuts = snap_regions(kept)
    segments = compile_timeline(cuts, total, fps=config.target_fps)

    logger.info(
        f"Planned {len(segments)} segments: {len(detected)} detected, "
        f"{len(merged)} merged, {len(cuts)} cut"
    )

    return CutPlan(
        source=source,
        output=output,
        cuts=segments,
        metadata=CutPlanMetadata(processing_time_ms=0, parameters=config.to_parameters()),
    )
