"""Tests for the cut planner."""

import json

import pytest

from podcut.errors import DegenerateInput, InvalidTranscript
from podcut.models import CutRegion, PlannerConfig, Transcript, TranscriptSegment, Word
from podcut.services.planner import clip_regions, plan_cuts, snap_regions


def _make_transcript(*segments: tuple[float, float, str], words=None) -> Transcript:
    result = []
    for index, (start, end, text) in enumerate(segments):
        seg_words = (words or {}).get(index, [])
        result.append(
            TranscriptSegment(
                start=start,
                end=end,
                text=text,
                words=[Word(start=s, end=e, text=t) for s, e, t in seg_words],
            )
        )
    return Transcript(language="en", segments=result)


def _spans(plan) -> list[tuple[str, float, float]]:
    return [(seg.type.value, seg.start, seg.end) for seg in plan.cuts]


class TestPlanCuts:
    def test_single_long_pause(self) -> None:
        transcript = _make_transcript((0.0, 5.0, "welcome to the show"), (7.0, 10.0, "let's start"))
        plan = plan_cuts(transcript, PlannerConfig(min_pause_ms=1500))

        assert _spans(plan) == [
            ("keep", 0.0, 5.0),
            ("cut", 5.0, 7.0),
            ("keep", 7.0, 10.0),
        ]
        assert plan.cuts[1].reason == "silence_2000ms"

    def test_no_cuts(self) -> None:
        transcript = _make_transcript((0.0, 4.0, "one"), (4.5, 8.0, "two"))
        plan = plan_cuts(transcript)
        assert _spans(plan) == [("keep", 0.0, 8.0)]

    def test_filler_words(self) -> None:
        transcript = _make_transcript(
            (0.0, 4.0, "Um, hello you know right"),
            words={
                0: [
                    (0.5, 0.8, "Um,"),
                    (1.0, 1.5, "hello"),
                    (2.0, 2.2, "you"),
                    (2.2, 2.5, "know"),
                    (3.0, 3.5, "right"),
                ]
            },
        )
        plan = plan_cuts(transcript)
        assert _spans(plan) == [
            ("keep", 0.0, 0.2),
            ("cut", 0.2, 1.1),
            ("keep", 1.1, 1.7),
            ("cut", 1.7, 2.8),
            ("keep", 2.8, 4.0),
        ]
        assert plan.cuts[1].reason == "filler_word_um"
        assert plan.cuts[3].reason == "filler_word_you know"

    def test_padding_clipped_to_total(self) -> None:
        transcript = _make_transcript((0.0, 2.0, "okay um"), words={0: [(1.6, 2.0, "um")]})
        plan = plan_cuts(transcript)
        assert _spans(plan) == [("keep", 0.0, 1.3), ("cut", 1.3, 2.0)]

    def test_merge_uses_unrounded_gaps(self) -> None:
        # the gap between the pauses is 500.8 ms, just over the merge threshold
        transcript = _make_transcript((0.0, 0.5, "a"), (2.0051, 2.5059, "b"), (4.1, 6.0, "c"))
        plan = plan_cuts(transcript)

        assert len(plan.cut_segments) == 2
        assert _spans(plan) == [
            ("keep", 0.0, 0.5),
            ("cut", 0.5, 2.01),
            ("keep", 2.01, 2.51),
            ("cut", 2.51, 4.1),
            ("keep", 4.1, 6.0),
        ]
        assert [seg.reason for seg in plan.cut_segments] == ["silence_1505ms", "silence_1594ms"]

    def test_filter_uses_unrounded_durations(self) -> None:
        # a 0.496 s filler rounds to 0.50 s but is still shorter than the minimum
        transcript = _make_transcript(
            (0.0, 4.0, "well um okay"), words={0: [(1.0, 1.496, "um")]}
        )
        plan = plan_cuts(transcript, PlannerConfig(filler_padding_sec=0.0))
        assert plan.cut_segments == []

    def test_merged_reasons(self) -> None:
        transcript = _make_transcript(
            (0.0, 3.0, "so"),
            (5.0, 8.0, "next"),
            words={0: [(2.6, 2.9, "so")]},
        )
        plan = plan_cuts(transcript)
        assert _spans(plan) == [("keep", 0.0, 2.3), ("cut", 2.3, 5.0), ("keep", 5.0, 8.0)]
        assert plan.cuts[1].reason == "filler_word_so+silence_2000ms"

    def test_explicit_total_duration(self) -> None:
        transcript = _make_transcript((0.0, 5.0, "a"))
        plan = plan_cuts(transcript, total_duration_sec=6.0)
        assert plan.total_duration_sec == 6.0

    def test_accepts_raw_document(self) -> None:
        plan = plan_cuts(
            {"segments": [{"start": 0, "end": 5, "text": "a"}, {"start": 7, "end": 9, "text": "b"}]},
            source="episode.json",
        )
        assert plan.source == "episode.json"
        assert len(plan.cut_segments) == 1

    def test_metadata(self) -> None:
        config = PlannerConfig(min_pause_ms=1000)
        plan = plan_cuts(_make_transcript((0.0, 5.0, "a")), config)
        assert plan.metadata.processing_time_ms == 0
        assert plan.metadata.parameters == config.to_parameters()

    def test_idempotent(self) -> None:
        transcript = _make_transcript(
            (0.0, 3.0, "um so"),
            (5.0, 8.0, "like actually"),
            (10.5, 12.0, "end"),
            words={
                0: [(0.5, 0.7, "um"), (1.0, 1.2, "so")],
                1: [(5.5, 5.8, "like"), (6.5, 7.0, "actually")],
            },
        )
        first = plan_cuts(transcript)
        second = plan_cuts(transcript)
        assert json.dumps(first.to_document()) == json.dumps(second.to_document())

    def test_empty_transcript(self) -> None:
        with pytest.raises(InvalidTranscript):
            plan_cuts(Transcript(segments=[]))

    def test_empty_document(self) -> None:
        with pytest.raises(InvalidTranscript):
            plan_cuts({"segments": []})

    def test_zero_length_timeline(self) -> None:
        with pytest.raises(DegenerateInput):
            plan_cuts(_make_transcript((0.0, 0.0, "")))


class TestClipRegions:
    def test_clamps_without_rounding(self) -> None:
        regions = [
            CutRegion(start=0.2345, end=1.2345, reason="filler_word_um"),
            CutRegion(start=9.5051, end=10.3, reason="filler_word_uh"),
        ]
        assert clip_regions(regions, 10.0) == [
            CutRegion(start=0.2345, end=1.2345, reason="filler_word_um"),
            CutRegion(start=9.5051, end=10.0, reason="filler_word_uh"),
        ]

    def test_drops_outside(self) -> None:
        regions = [CutRegion(start=10.0, end=10.5, reason="x")]
        assert clip_regions(regions, 10.0) == []


class TestSnapRegions:
    def test_snaps_to_two_decimals(self) -> None:
        regions = [CutRegion(start=0.5, end=2.0051, reason="silence_1505ms")]
        assert snap_regions(regions) == [CutRegion(start=0.5, end=2.01, reason="silence_1505ms")]

    def test_drops_zero_length(self) -> None:
        regions = [
            CutRegion(start=1.0, end=2.0, reason="a"),
            CutRegion(start=3.001, end=3.004, reason="b"),
        ]
        assert snap_regions(regions) == [CutRegion(start=1.0, end=2.0, reason="a")]

    def test_touching_after_snap(self) -> None:
        regions = [
            CutRegion(start=1.0, end=2.004, reason="a"),
            CutRegion(start=2.0045, end=3.0, reason="b"),
        ]
        snapped = snap_regions(regions)
        assert [(r.start, r.end) for r in snapped] == [(1.0, 2.0), (2.0, 3.0)]
