"""Cut region detection, merging and filtering.

Regions are detected from transcript timing only: gaps between segments
(silence) and filler words in word-level timing. Detection never merges;
the merger folds overlapping or nearby regions afterwards.
"""

import logging
import math
import re
from collections.abc import Sequence

from podcut.models.config import PlannerConfig
from podcut.models.timeline import CutRegion
from podcut.models.transcript import TranscriptSegment

logger = logging.getLogger(__name__)

# Everything except letters, digits, apostrophes and hyphens
_STRIP_RE = re.compile(r"[^\w'-]|_")


def normalize_word(text: str) -> str:
    """Lowercase a word and strip punctuation around and inside it."""
    return _STRIP_RE.sub("", text.lower())


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def detect_silence(
    segments: Sequence[TranscriptSegment],
    config: PlannerConfig,
) -> list[CutRegion]:
    """Detect pauses between consecutive transcript segments.

    Args:
        segments: Transcript segments ordered by start time
        config: Planner configuration (uses ``min_pause_ms``)

    Returns:
        One region per gap of at least ``min_pause_ms``
    """
    regions: list[CutRegion] = []
    for current, following in zip(segments, segments[1:]):
        pause_ms = (following.start - current.end) * 1000
        if pause_ms >= config.min_pause_ms and following.start > current.end:
            regions.append(
                CutRegion(
                    start=current.end,
                    end=following.start,
                    reason=f"silence_{_round_half_up(pause_ms)}ms",
                )
            )
    return regions


def detect_filler_words(
    segments: Sequence[TranscriptSegment],
    config: PlannerConfig,
) -> list[CutRegion]:
    """Detect filler words and phrases in word-level timing.

    Multi-word fillers ("you know") match consecutive words of the same
    segment and produce one region over the whole phrase.

    Args:
        segments: Transcript segments with ``words``
        config: Planner configuration (uses ``filler_words`` and ``filler_padding_sec``)

    Returns:
        One padded region per match, in transcript order
    """
    phrases = [tuple(filler.split()) for filler in config.filler_words]
    pad = config.filler_padding_sec
    regions: list[CutRegion] = []

    for segment in segments:
        tokens = [normalize_word(word.text) for word in segment.words]
        for i in range(len(tokens)):
            for phrase in phrases:
                if tuple(tokens[i : i + len(phrase)]) != phrase:
                    continue
                first = segment.words[i]
                last = segment.words[i + len(phrase) - 1]
                start = max(0.0, first.start - pad)
                end = last.end + pad
                if end <= start:
                    continue
                regions.append(
                    CutRegion(start=start, end=end, reason=f"filler_word_{' '.join(phrase)}")
                )

    return regions


def detect_regions(
    segments: Sequence[TranscriptSegment],
    config: PlannerConfig,
) -> list[CutRegion]:
    """Run every detector; silence regions first, then filler regions."""
    silences = detect_silence(segments, config)
    fillers = detect_filler_words(segments, config)
    logger.debug(f"Detected {len(silences)} silence and {len(fillers)} filler regions")
    return silences + fillers


def merge_regions(regions: Sequence[CutRegion], merge_threshold_ms: float) -> list[CutRegion]:
    """Merge overlapping or nearby regions.

    Regions are stably sorted by start, then folded left to right: a region
    starting no more than ``merge_threshold_ms`` after the current one ends
    is absorbed, extending the end and joining reasons with ``+``.

    Args:
        regions: Regions in any order (not modified)
        merge_threshold_ms: Largest gap that still merges

    Returns:
        Sorted, disjoint regions
    """
    if not regions:
        return []

    ordered = sorted(regions, key=lambda r: r.start)
    merged: list[CutRegion] = []
    current = ordered[0]

    for region in ordered[1:]:
        gap_ms = (region.start - current.end) * 1000
        if gap_ms <= merge_threshold_ms:
            current = CutRegion(
                start=current.start,
                end=max(current.end, region.end),
                reason=f"{current.reason}+{region.reason}",
            )
        else:
            merged.append(current)
            current = region

    merged.append(current)
    return merged


def filter_short_regions(regions: Sequence[CutRegion], min_duration_sec: float) -> list[CutRegion]:
    """Drop regions shorter than ``min_duration_sec``, preserving order."""
    return [r for r in regions if r.duration >= min_duration_sec]
