"""Engine parameters. Always passed explicitly; never read from the environment here."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_FILLER_WORDS: tuple[str, ...] = ("um", "uh", "like", "you know", "so", "actually")


class PlannerConfig(BaseModel):
    """Thresholds for region detection, merging and filtering."""

    model_config = ConfigDict(frozen=True)

    min_pause_ms: float = Field(
        default=1500, ge=0, description="Minimum gap between segments treated as silence"
    )
    filler_words: tuple[str, ...] = Field(
        default=DEFAULT_FILLER_WORDS, description="Normalized filler words or phrases"
    )
    filler_padding_sec: float = Field(
        default=0.3, ge=0, description="Padding added around each filler word"
    )
    min_cut_duration_sec: float = Field(
        default=0.5, ge=0, description="Merged regions shorter than this are dropped"
    )
    merge_threshold_ms: float = Field(
        default=500, ge=0, description="Regions closer than this are merged"
    )
    target_fps: float = Field(default=30.0, gt=0, description="Frame rate for accuracy checks")
    deterministic: bool = Field(default=True)

    @field_validator("filler_words", mode="before")
    @classmethod
    def normalize_filler_words(cls, value: Any) -> tuple[str, ...]:
        """Lowercase, collapse whitespace and drop duplicates, keeping order."""
        if isinstance(value, str):
            value = value.split(",")
        normalized: list[str] = []
        for item in value:
            word = " ".join(str(item).lower().split())
            if word and word not in normalized:
                normalized.append(word)
        return tuple(normalized)

    def to_parameters(self) -> dict[str, Any]:
        """Parameters recorded in cut plan metadata."""
        return {
            "minPauseMs": self.min_pause_ms,
            "fillerWords": list(self.filler_words),
            "fillerPaddingSec": self.filler_padding_sec,
            "minCutDurationSec": self.min_cut_duration_sec,
            "mergeThresholdMs": self.merge_threshold_ms,
            "targetFps": self.target_fps,
            "deterministic": self.deterministic,
        }


class TransitionConfig(BaseModel):
    """Crossfade settings shared by the render timeline and the remapper."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = Field(default=False, description="Crossfade between keep segments")
    duration_ms: int = Field(default=300, gt=0, le=5000, description="Video crossfade length")
    audio_fade_ms: int | None = Field(
        default=None, gt=0, le=5000, description="Audio crossfade length (default: duration_ms)"
    )
    fps: float = Field(default=30.0, gt=0, description="Target frame rate")

    @property
    def overlap_sec(self) -> float:
        """Overlap consumed by each join when transitions are enabled."""
        return self.duration_ms / 1000.0 if self.enabled else 0.0

    @property
    def effective_audio_fade_ms(self) -> int:
        return self.audio_fade_ms if self.audio_fade_ms is not None else self.duration_ms

    @property
    def frame_duration_sec(self) -> float:
        return 1.0 / self.fps
