"""Services module for podcut.

Pure computation over transcript and plan models; no I/O.
"""

from podcut.services.compiler import compile_timeline, validate_plan_segments
from podcut.services.frames import (
    check_frame_accuracy,
    check_monotonic,
    check_not_after,
    frame_tolerance,
    to_frame_time,
)
from podcut.services.offsets import KeepPlacement, place_keeps, select_keeps
from podcut.services.planner import plan_cuts
from podcut.services.regions import (
    detect_filler_words,
    detect_regions,
    detect_silence,
    filter_short_regions,
    merge_regions,
)
from podcut.services.remapper import remap_cues, remap_transcript
from podcut.services.render_timeline import (
    build_render_timeline,
    rendered_duration_tolerance,
    verify_rendered_duration,
)

__all__ = [
    # Regions
    "detect_silence",
    "detect_filler_words",
    "detect_regions",
    "merge_regions",
    "filter_short_regions",
    # Compiler
    "compile_timeline",
    "validate_plan_segments",
    "plan_cuts",
    # Render / remap
    "KeepPlacement",
    "select_keeps",
    "place_keeps",
    "build_render_timeline",
    "rendered_duration_tolerance",
    "verify_rendered_duration",
    "remap_cues",
    "remap_transcript",
    # Frames
    "to_frame_time",
    "frame_tolerance",
    "check_frame_accuracy",
    "check_not_after",
    "check_monotonic",
]
