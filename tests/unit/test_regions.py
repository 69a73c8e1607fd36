"""Tests for region detection, merging and filtering."""

import pytest

from podcut.models import CutRegion, PlannerConfig, TranscriptSegment, Word
from podcut.services.regions import (
    detect_filler_words,
    detect_regions,
    detect_silence,
    filter_short_regions,
    merge_regions,
    normalize_word,
)


def _make_segment(start: float, end: float, text: str = "", words=None) -> TranscriptSegment:
    return TranscriptSegment(
        start=start,
        end=end,
        text=text,
        words=[Word(start=s, end=e, text=t) for s, e, t in (words or [])],
    )


class TestNormalizeWord:
    def test_strips_punctuation(self) -> None:
        assert normalize_word("Um,") == "um"
        assert normalize_word("...so?") == "so"

    def test_keeps_apostrophes_and_hyphens(self) -> None:
        assert normalize_word("Don't") == "don't"
        assert normalize_word("well-known") == "well-known"

    def test_strips_underscores(self) -> None:
        assert normalize_word("_uh_") == "uh"


class TestDetectSilence:
    def test_gap_over_threshold(self) -> None:
        segments = [_make_segment(0.0, 5.0, "hello"), _make_segment(7.0, 10.0, "again")]
        regions = detect_silence(segments, PlannerConfig(min_pause_ms=1500))
        assert regions == [CutRegion(start=5.0, end=7.0, reason="silence_2000ms")]

    def test_gap_under_threshold(self) -> None:
        segments = [_make_segment(0.0, 5.0), _make_segment(6.0, 10.0)]
        assert detect_silence(segments, PlannerConfig(min_pause_ms=1500)) == []

    def test_gap_exactly_at_threshold(self) -> None:
        segments = [_make_segment(0.0, 1.0), _make_segment(2.5, 3.0)]
        regions = detect_silence(segments, PlannerConfig(min_pause_ms=1500))
        assert len(regions) == 1
        assert regions[0].reason == "silence_1500ms"

    def test_zero_threshold_ignores_touching_segments(self) -> None:
        segments = [_make_segment(0.0, 1.0), _make_segment(1.0, 2.0)]
        assert detect_silence(segments, PlannerConfig(min_pause_ms=0)) == []

    def test_overlapping_segments(self) -> None:
        segments = [_make_segment(0.0, 3.0), _make_segment(2.0, 4.0)]
        assert detect_silence(segments, PlannerConfig(min_pause_ms=0)) == []


class TestDetectFillerWords:
    def test_single_word(self) -> None:
        segments = [_make_segment(0.0, 3.0, words=[(1.0, 1.2, "Um,"), (1.5, 2.0, "hello")])]
        regions = detect_filler_words(segments, PlannerConfig())
        assert len(regions) == 1
        assert regions[0].reason == "filler_word_um"
        assert regions[0].start == pytest.approx(0.7)
        assert regions[0].end == pytest.approx(1.5)

    def test_phrase(self) -> None:
        segments = [
            _make_segment(
                0.0,
                4.0,
                words=[(1.0, 1.2, "You"), (1.2, 1.5, "know,"), (2.0, 2.5, "right")],
            )
        ]
        regions = detect_filler_words(segments, PlannerConfig(filler_padding_sec=0.0))
        assert regions == [CutRegion(start=1.0, end=1.5, reason="filler_word_you know")]

    def test_padding_clamped_at_zero(self) -> None:
        segments = [_make_segment(0.0, 1.0, words=[(0.1, 0.3, "uh")])]
        regions = detect_filler_words(segments, PlannerConfig())
        assert regions[0].start == 0.0
        assert regions[0].end == pytest.approx(0.6)

    def test_no_words(self) -> None:
        segments = [_make_segment(0.0, 1.0, "um um um")]
        assert detect_filler_words(segments, PlannerConfig()) == []

    def test_custom_filler_list(self) -> None:
        segments = [_make_segment(0.0, 2.0, words=[(0.5, 0.7, "um"), (1.0, 1.2, "basically")])]
        regions = detect_filler_words(segments, PlannerConfig(filler_words=["basically"]))
        assert [r.reason for r in regions] == ["filler_word_basically"]


class TestDetectRegions:
    def test_silence_before_fillers(self) -> None:
        segments = [
            _make_segment(0.0, 2.0, words=[(1.0, 1.2, "so")]),
            _make_segment(4.0, 5.0),
        ]
        regions = detect_regions(segments, PlannerConfig())
        assert [r.reason for r in regions] == ["silence_2000ms", "filler_word_so"]


class TestMergeRegions:
    def test_merges_within_threshold(self) -> None:
        regions = [
            CutRegion(start=0.0, end=2.0, reason="r1"),
            CutRegion(start=2.3, end=4.0, reason="r2"),
        ]
        assert merge_regions(regions, 500) == [CutRegion(start=0.0, end=4.0, reason="r1+r2")]

    def test_keeps_separate_beyond_threshold(self) -> None:
        regions = [
            CutRegion(start=0.0, end=2.0, reason="r1"),
            CutRegion(start=2.3, end=4.0, reason="r2"),
        ]
        assert merge_regions(regions, 100) == regions

    def test_sorts_input(self) -> None:
        regions = [
            CutRegion(start=6.0, end=7.0, reason="late"),
            CutRegion(start=0.0, end=1.0, reason="early"),
        ]
        merged = merge_regions(regions, 0)
        assert [r.reason for r in merged] == ["early", "late"]

    def test_equal_starts_keep_input_order(self) -> None:
        silence = CutRegion(start=5.0, end=7.0, reason="silence_2000ms")
        filler = CutRegion(start=5.0, end=6.0, reason="filler_word_um")

        assert merge_regions([silence, filler], 500) == [
            CutRegion(start=5.0, end=7.0, reason="silence_2000ms+filler_word_um")
        ]
        assert merge_regions([filler, silence], 500) == [
            CutRegion(start=5.0, end=7.0, reason="filler_word_um+silence_2000ms")
        ]

    def test_contained_region(self) -> None:
        regions = [
            CutRegion(start=1.0, end=5.0, reason="outer"),
            CutRegion(start=2.0, end=3.0, reason="inner"),
        ]
        assert merge_regions(regions, 0) == [CutRegion(start=1.0, end=5.0, reason="outer+inner")]

    def test_chain(self) -> None:
        regions = [
            CutRegion(start=0.0, end=1.0, reason="a"),
            CutRegion(start=1.2, end=2.0, reason="b"),
            CutRegion(start=2.4, end=3.0, reason="c"),
        ]
        assert merge_regions(regions, 500) == [CutRegion(start=0.0, end=3.0, reason="a+b+c")]

    def test_empty(self) -> None:
        assert merge_regions([], 500) == []


class TestFilterShortRegions:
    def test_drops_short(self) -> None:
        regions = [
            CutRegion(start=0.0, end=0.3, reason="short"),
            CutRegion(start=1.0, end=1.5, reason="exact"),
            CutRegion(start=2.0, end=4.0, reason="long"),
        ]
        kept = filter_short_regions(regions, 0.5)
        assert [r.reason for r in kept] == ["exact", "long"]
