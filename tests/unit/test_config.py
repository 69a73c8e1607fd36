"""Tests for environment settings."""

import pytest

from podcut.config import Settings

_ENV_NAMES = [
    "PLANNER_MIN_PAUSE_MS",
    "PLANNER_FILLER_WORDS",
    "PLANNER_FILLER_PADDING_SEC",
    "PLANNER_MIN_CUT_DURATION_SEC",
    "PLANNER_MERGE_THRESHOLD_MS",
    "DETERMINISTIC",
    "TRANSITIONS_ENABLED",
    "TRANSITIONS_DURATION_MS",
    "TRANSITIONS_AUDIO_FADE_MS",
    "RENDER_FPS",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in _ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestSettings:
    def test_defaults(self, clean_env) -> None:
        settings = Settings(_env_file=None)
        planner = settings.planner_config()
        transitions = settings.transition_config()

        assert planner.min_pause_ms == 1500
        assert planner.filler_words == ("um", "uh", "like", "you know", "so", "actually")
        assert planner.target_fps == 30.0
        assert not transitions.enabled
        assert transitions.duration_ms == 300
        assert transitions.effective_audio_fade_ms == 300

    def test_from_environment(self, clean_env) -> None:
        clean_env.setenv("PLANNER_MIN_PAUSE_MS", "2000")
        clean_env.setenv("PLANNER_FILLER_WORDS", "Um, you  know")
        clean_env.setenv("TRANSITIONS_ENABLED", "true")
        clean_env.setenv("TRANSITIONS_DURATION_MS", "400")
        clean_env.setenv("TRANSITIONS_AUDIO_FADE_MS", "250")
        clean_env.setenv("RENDER_FPS", "25")

        settings = Settings(_env_file=None)
        planner = settings.planner_config()
        transitions = settings.transition_config()

        assert planner.min_pause_ms == 2000
        assert planner.filler_words == ("um", "you know")
        assert planner.target_fps == 25.0
        assert transitions.enabled
        assert transitions.overlap_sec == 0.4
        assert transitions.effective_audio_fade_ms == 250
        assert transitions.fps == 25.0

    def test_env_file(self, clean_env, tmp_path) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("planner_merge_threshold_ms=250\n", encoding="utf-8")
        settings = Settings(_env_file=env_file)
        assert settings.planner_config().merge_threshold_ms == 250

    def test_overrides(self, clean_env) -> None:
        settings = Settings(_env_file=None)
        transitions = settings.transition_config(enabled=True, duration_ms=500, fps=60)
        assert transitions.enabled
        assert transitions.duration_ms == 500
        assert transitions.fps == 60

    def test_invalid_duration(self, clean_env) -> None:
        clean_env.setenv("TRANSITIONS_DURATION_MS", "0")
        with pytest.raises(ValueError):
            Settings(_env_file=None)
