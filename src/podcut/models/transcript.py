"""Transcript data models (read-only input from the transcription step)."""

from typing import Any

from pydantic import AliasChoices, BaseModel, Field, ValidationError, model_validator

from podcut.errors import InvalidTranscript


class Word(BaseModel):
    """A single recognized word with timing in seconds."""

    start: float = Field(..., ge=0.0, description="Start time in seconds")
    end: float = Field(..., ge=0.0, description="End time in seconds")
    text: str = Field(
        default="",
        validation_alias=AliasChoices("text", "word"),
        description="Recognized word as emitted by the recognizer",
    )

    @model_validator(mode="after")
    def validate_range(self) -> "Word":
        """Ensure end is not before start."""
        if self.end < self.start:
            raise ValueError("word end must not be before start")
        return self


class TranscriptSegment(BaseModel):
    """A single segment of transcription with timing."""

    start: float = Field(..., ge=0.0, description="Start time in seconds")
    end: float = Field(..., ge=0.0, description="End time in seconds")
    text: str = Field(default="", description="Transcribed text")
    words: list[Word] = Field(
        default_factory=list, description="Word timings, ordered by start"
    )

    @model_validator(mode="after")
    def validate_timing(self) -> "TranscriptSegment":
        """Ensure the segment range is sane and words are monotonic."""
        if self.end < self.start:
            raise ValueError("segment end must not be before start")
        for prev, word in zip(self.words, self.words[1:]):
            if word.start < prev.start:
                raise ValueError(
                    f"words are not monotonic: {word.text!r} at {word.start} "
                    f"starts before {prev.text!r} at {prev.start}"
                )
        return self

    @property
    def duration(self) -> float:
        """Return duration in seconds."""
        return self.end - self.start


class Transcript(BaseModel):
    """Complete transcription result."""

    language: str | None = Field(default=None, description="Detected/specified language")
    segments: list[TranscriptSegment] = Field(
        default_factory=list, description="Transcription segments with timing"
    )

    @model_validator(mode="after")
    def validate_order(self) -> "Transcript":
        """Segments must be ordered by start time."""
        for i in range(len(self.segments) - 1):
            if self.segments[i + 1].start < self.segments[i].start:
                raise ValueError(f"segment {i + 1} starts before segment {i}")
        return self

    @property
    def duration_sec(self) -> float:
        """End of the last segment, or 0 for an empty transcript."""
        if not self.segments:
            return 0.0
        return self.segments[-1].end

    @property
    def full_text(self) -> str:
        """Return full transcription as a single string."""
        return " ".join(seg.text for seg in self.segments)

    @classmethod
    def from_dict(cls, data: Any) -> "Transcript":
        """Validate raw transcript JSON.

        Raises:
            InvalidTranscript: If the segment list is missing, empty or malformed
        """
        if not isinstance(data, dict) or not isinstance(data.get("segments"), list):
            raise InvalidTranscript(
                "Invalid transcript: missing segments array",
                {"has_segments": isinstance(data, dict) and "segments" in data},
            )
        if not data["segments"]:
            raise InvalidTranscript("Invalid transcript: segments array is empty")

        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise InvalidTranscript(
                f"Invalid transcript: {exc.error_count()} validation error(s)",
                {"errors": exc.errors(include_url=False, include_context=False)},
            ) from exc
