"""Caption cue models for timestamp remapping."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Cue(BaseModel):
    """An interval on the original timeline, usually a caption."""

    model_config = ConfigDict(frozen=True)

    start: float = Field(..., ge=0.0, description="Start time in seconds")
    end: float = Field(..., ge=0.0, description="End time in seconds")
    payload: Any = Field(default=None, description="Opaque data carried through the remap")

    @model_validator(mode="after")
    def validate_range(self) -> "Cue":
        """Ensure end is not before start."""
        if self.end < self.start:
            raise ValueError("cue end must not be before start")
        return self


class TimelineMapping(BaseModel):
    """Where one input cue lands on the final timeline."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=0, description="Position of the cue in the input list")
    original_start: float
    original_end: float
    final_start: float | None = None
    final_end: float | None = None
    dropped: bool = False
    payload: Any = None

    @property
    def final_duration(self) -> float:
        if self.dropped or self.final_start is None or self.final_end is None:
            return 0.0
        return self.final_end - self.final_start
