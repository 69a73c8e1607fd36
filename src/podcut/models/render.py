"""Render timeline data models.

A render plan is always derived from a cut plan plus a TransitionConfig and
is never stored on its own.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from podcut.models.timeline import CutPlanSegment


class Join(BaseModel):
    """Boundary between two adjacent keep segments in the final render."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=0, description="Join number, 0 for the first boundary")
    prior_keep_end: float = Field(..., description="Original end of the earlier keep")
    next_keep_start: float = Field(..., description="Original start of the later keep")
    overlap_sec: float = Field(default=0.0, ge=0.0, description="Crossfade overlap")


class TrimNode(BaseModel):
    """Cut one keep segment out of the source streams."""

    model_config = ConfigDict(frozen=True)

    index: int
    start: float
    end: float
    video_label: str
    audio_label: str

    @property
    def duration(self) -> float:
        return self.end - self.start


class FoldNode(BaseModel):
    """Crossfade the stream emitted so far with the next trimmed keep."""

    model_config = ConfigDict(frozen=True)

    join_index: int
    video_inputs: tuple[str, str]
    audio_inputs: tuple[str, str]
    video_output: str
    audio_output: str
    offset_sec: float = Field(..., description="Where the crossfade starts on the output")
    overlap_sec: float
    audio_fade_sec: float


class RenderTimelinePlan(BaseModel):
    """Expected duration and trim/fold structure of the final render."""

    expected_duration_sec: float = Field(..., ge=0.0)
    frame_aligned_duration_sec: float = Field(..., ge=0.0)
    fps: float = Field(..., gt=0)
    transitions_applied: bool = False
    transition_duration_ms: int = 300
    audio_fade_ms: int = 300
    keep_segments: list[CutPlanSegment] = Field(default_factory=list)
    joins: list[Join] = Field(default_factory=list)
    trims: list[TrimNode] = Field(default_factory=list)
    folds: list[FoldNode] = Field(default_factory=list)
    video_output: str | None = None
    audio_output: str | None = None

    @property
    def join_count(self) -> int:
        return len(self.joins)

    @property
    def needs_concat(self) -> bool:
        """Several keeps joined by plain concatenation."""
        return not self.transitions_applied and len(self.trims) > 1

    @property
    def total_overlap_sec(self) -> float:
        return sum(join.overlap_sec for join in self.joins)

    def to_request(self) -> "RenderTimelineRequest":
        """Numeric request handed to the render subprocess."""
        return RenderTimelineRequest(
            keeps=[KeepSpan(start=seg.start, end=seg.end) for seg in self.keep_segments],
            duration_ms=self.transition_duration_ms,
            audio_fade_ms=self.audio_fade_ms,
            fps=self.fps,
            transitions=self.transitions_applied,
        )


class KeepSpan(BaseModel):
    """Plain start/end pair for the render request."""

    start: float
    end: float


class RenderTimelineRequest(BaseModel):
    """Shape consumed by the render-subprocess collaborator."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    keeps: list[KeepSpan] = Field(default_factory=list)
    duration_ms: int
    audio_fade_ms: int
    fps: float
    transitions: bool = False
