"""Data models for podcut."""

from podcut.models.captions import Cue, TimelineMapping
from podcut.models.config import DEFAULT_FILLER_WORDS, PlannerConfig, TransitionConfig
from podcut.models.render import (
    FoldNode,
    Join,
    KeepSpan,
    RenderTimelinePlan,
    RenderTimelineRequest,
    TrimNode,
)
from podcut.models.timeline import (
    CutPlan,
    CutPlanMetadata,
    CutPlanSegment,
    CutRegion,
    SegmentType,
)
from podcut.models.transcript import Transcript, TranscriptSegment, Word

__all__ = [
    # Transcript
    "Word",
    "TranscriptSegment",
    "Transcript",
    # Timeline
    "CutRegion",
    "SegmentType",
    "CutPlanSegment",
    "CutPlanMetadata",
    "CutPlan",
    # Config
    "DEFAULT_FILLER_WORDS",
    "PlannerConfig",
    "TransitionConfig",
    # Render
    "Join",
    "TrimNode",
    "FoldNode",
    "KeepSpan",
    "RenderTimelinePlan",
    "RenderTimelineRequest",
    # Captions
    "Cue",
    "TimelineMapping",
]
