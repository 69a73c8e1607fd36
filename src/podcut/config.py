"""Configuration management for podcut.

Only the CLI reads settings; the engine takes explicit config objects.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from podcut.models.config import DEFAULT_FILLER_WORDS, PlannerConfig, TransitionConfig


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Planner
    planner_min_pause_ms: float = 1500
    planner_filler_words: str = ",".join(DEFAULT_FILLER_WORDS)
    planner_filler_padding_sec: float = 0.3
    planner_min_cut_duration_sec: float = 0.5
    planner_merge_threshold_ms: float = 500
    deterministic: bool = True

    # Transitions
    transitions_enabled: bool = False
    transitions_duration_ms: int = Field(default=300, gt=0, le=5000)
    transitions_audio_fade_ms: int | None = None

    # Render
    render_fps: float = Field(default=30.0, gt=0)

    def planner_config(self) -> PlannerConfig:
        """Build the planner config from settings."""
        return PlannerConfig(
            min_pause_ms=self.planner_min_pause_ms,
            filler_words=self.planner_filler_words,
            filler_padding_sec=self.planner_filler_padding_sec,
            min_cut_duration_sec=self.planner_min_cut_duration_sec,
            merge_threshold_ms=self.planner_merge_threshold_ms,
            target_fps=self.render_fps,
            deterministic=self.deterministic,
        )

    def transition_config(
        self,
        *,
        enabled: bool | None = None,
        duration_ms: int | None = None,
        fps: float | None = None,
    ) -> TransitionConfig:
        """Build the transition config, with optional per-call overrides."""
        return TransitionConfig(
            enabled=self.transitions_enabled if enabled is None else enabled,
            duration_ms=duration_ms or self.transitions_duration_ms,
            audio_fade_ms=self.transitions_audio_fade_ms,
            fps=fps or self.render_fps,
        )


def get_settings() -> Settings:
    """Load settings from the environment and ``.env``."""
    return Settings()
