"""Cut regions and the cut plan document."""

import json
import re
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_serializer,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from podcut.errors import InvalidCutPlan

CUT_PLAN_SCHEMA_VERSION = "1.0.0"

# Decimal places used for plan times, both in memory and on disk.
TIME_PRECISION = 2

_CLOCK_RE = re.compile(r"^(?:(\d+):)?(\d+):(\d+(?:\.\d+)?)$")


def parse_timestamp(value: Any) -> float:
    """Parse a plan time into seconds.

    Accepts numbers and strings in ``SS.SS``, ``mm:ss(.sss)`` or
    ``hh:mm:ss(.sss)`` form.

    Raises:
        ValueError: If the value cannot be parsed
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid timestamp type: {type(value).__name__}")
    if isinstance(value, (int, float)):
        return float(value)
    if not isinstance(value, str):
        raise ValueError(f"Invalid timestamp type: {type(value).__name__}")

    text = value.strip()
    try:
        return float(text)
    except ValueError:
        pass

    match = _CLOCK_RE.match(text)
    if match is None:
        raise ValueError(f"Unable to parse timestamp: {value!r}")

    hours, minutes, seconds = match.groups()
    return int(hours or 0) * 3600 + int(minutes) * 60 + float(seconds)


def format_seconds(value: float) -> str:
    """Format seconds as the fixed-point string used in plan documents."""
    return f"{value:.{TIME_PRECISION}f}"


def snap_seconds(value: float) -> float:
    """Round seconds to plan precision so they survive a save/load unchanged."""
    return round(value, TIME_PRECISION)


class CutRegion(BaseModel):
    """A candidate span to remove from the original timeline."""

    model_config = ConfigDict(frozen=True)

    start: float = Field(..., ge=0.0, description="Start time in seconds")
    end: float = Field(..., ge=0.0, description="End time in seconds")
    reason: str = Field(..., min_length=1, description="Why the span is removed")

    @model_validator(mode="after")
    def validate_range(self) -> "CutRegion":
        """Ensure end is after start."""
        if self.end <= self.start:
            raise ValueError("end must be greater than start")
        return self

    @property
    def duration(self) -> float:
        """Return duration in seconds."""
        return self.end - self.start

    @property
    def duration_ms(self) -> float:
        """Return duration in milliseconds."""
        return self.duration * 1000.0


class SegmentType(str, Enum):
    """Whether a plan segment survives into the final render."""

    KEEP = "keep"
    CUT = "cut"


class CutPlanSegment(BaseModel):
    """One contiguous span of the cut plan."""

    model_config = ConfigDict(frozen=True)

    type: SegmentType = Field(..., description="keep or cut")
    start: float = Field(..., ge=0.0, description="Start time in seconds")
    end: float = Field(..., ge=0.0, description="End time in seconds")
    reason: str = Field(default="content", description="Reason for this segment")
    confidence: float = Field(
        default=1.0, ge=0.0, le=1.0, description="Confidence of the decision"
    )

    @field_validator("start", "end", mode="before")
    @classmethod
    def parse_time(cls, value: Any) -> float:
        return parse_timestamp(value)

    @model_validator(mode="after")
    def validate_range(self) -> "CutPlanSegment":
        """Ensure end is after start."""
        if self.end <= self.start:
            raise ValueError("end must be greater than start")
        return self

    @field_serializer("start", "end", when_used="json")
    def serialize_time(self, value: float) -> str:
        return format_seconds(value)

    @property
    def duration(self) -> float:
        """Return duration in seconds."""
        return self.end - self.start

    @property
    def is_keep(self) -> bool:
        """Check if this segment survives into the render."""
        return self.type == SegmentType.KEEP


class CutPlanMetadata(BaseModel):
    """Parameters and timing recorded alongside a cut plan."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    processing_time_ms: int = Field(default=0, ge=0)
    parameters: dict[str, Any] = Field(default_factory=dict)


class CutPlan(BaseModel):
    """The cut plan document: the single source of truth for an edit."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    schema_version: str = Field(default=CUT_PLAN_SCHEMA_VERSION)
    source: str | None = Field(default=None, description="Transcript the plan was built from")
    output: str | None = Field(default=None, description="Where the plan is stored")
    cuts: list[CutPlanSegment] = Field(
        default_factory=list, description="Ordered keep/cut segments"
    )
    metadata: CutPlanMetadata = Field(default_factory=CutPlanMetadata)

    @property
    def keep_segments(self) -> list[CutPlanSegment]:
        return [seg for seg in self.cuts if seg.is_keep]

    @property
    def cut_segments(self) -> list[CutPlanSegment]:
        return [seg for seg in self.cuts if not seg.is_keep]

    @property
    def total_duration_sec(self) -> float:
        """End of the last segment, or 0 for an empty plan."""
        return self.cuts[-1].end if self.cuts else 0.0

    @property
    def kept_duration_sec(self) -> float:
        return sum(seg.duration for seg in self.keep_segments)

    @property
    def removed_duration_sec(self) -> float:
        return sum(seg.duration for seg in self.cut_segments)

    def to_document(self) -> dict[str, Any]:
        """Return the JSON-ready document with camelCase keys and fixed-point times."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_dict(cls, data: Any) -> "CutPlan":
        """Validate a cut plan document.

        Raises:
            InvalidCutPlan: If the document does not match the schema
        """
        if not isinstance(data, dict) or not isinstance(data.get("cuts"), list):
            raise InvalidCutPlan(
                "Invalid cut plan: missing cuts array",
                {"has_cuts": isinstance(data, dict) and "cuts" in data},
            )
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise InvalidCutPlan(
                f"Invalid cut plan: {exc.error_count()} validation error(s)",
                {"errors": exc.errors(include_url=False, include_context=False)},
            ) from exc

    # --- Serialization ---

    def save(self, path: Path) -> Path:
        """Save the plan document to a JSON file.

        Args:
            path: Output file path

        Returns:
            Path to saved file
        """
        path = Path(path)
        if not path.suffix:
            path = path.with_suffix(".json")

        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_document(), f, ensure_ascii=False, indent=2)

        return path

    @classmethod
    def load(cls, path: Path) -> "CutPlan":
        """Load a plan document from a JSON file."""
        with open(path, encoding="utf-8") as f:
            data = json.load(f)

        return cls.from_dict(data)
