"""ffmpeg filter_complex export of a render timeline.

Only builds text. Running ffmpeg and probing its output belong to the
render step.
"""

from dataclasses import dataclass, field

from podcut.errors import DegenerateInput
from podcut.export.base import PlanExporter
from podcut.models.render import FoldNode, RenderTimelinePlan, TrimNode


def _fmt(seconds: float) -> str:
    return f"{seconds:.2f}"


@dataclass
class FilterGraph:
    """A filter_complex string plus the stream labels to map."""

    filters: list[str] = field(default_factory=list)
    video_output: str = "v0"
    audio_output: str = "a0"

    @property
    def filter_complex(self) -> str:
        return ";".join(self.filters)

    def map_args(self) -> list[str]:
        """``-map`` arguments selecting the final streams."""
        return ["-map", f"[{self.video_output}]", "-map", f"[{self.audio_output}]"]

    def ffmpeg_args(self, input_path: str, output_path: str) -> list[str]:
        """Full ffmpeg argument list for a single-input render."""
        return [
            "ffmpeg", "-y", "-i", input_path,
            "-filter_complex", self.filter_complex,
            *self.map_args(),
            output_path,
        ]


def build_trim_filters(trim: TrimNode, *, use_duration: bool = False) -> list[str]:
    """Video and audio trim filters for one keep.

    ``use_duration`` trims by length instead of end time; ffmpeg's trim end
    is exclusive, which can lose the final frame of the last keep.
    """
    start = _fmt(trim.start)
    if use_duration:
        bound = f"duration={_fmt(trim.duration)}"
    else:
        bound = f"end={_fmt(trim.end)}"
    return [
        f"[0:v]trim=start={start}:{bound},setpts=PTS-STARTPTS[{trim.video_label}]",
        f"[0:a]atrim=start={start}:{bound},asetpts=PTS-STARTPTS[{trim.audio_label}]",
    ]


def build_fold_filters(fold: FoldNode) -> list[str]:
    """xfade and acrossfade filters for one join."""
    v_prev, v_next = fold.video_inputs
    a_prev, a_next = fold.audio_inputs
    return [
        f"[{v_prev}][{v_next}]xfade=duration={_fmt(fold.overlap_sec)}"
        f":offset={_fmt(fold.offset_sec)}[{fold.video_output}]",
        f"[{a_prev}][{a_next}]acrossfade=d={_fmt(fold.audio_fade_sec)}[{fold.audio_output}]",
    ]


def build_filter_graph(plan: RenderTimelinePlan) -> FilterGraph:
    """Translate a render timeline into an ffmpeg filter graph.

    Raises:
        DegenerateInput: If the plan has no keep segments
    """
    if not plan.trims:
        raise DegenerateInput("Render timeline has no keep segments to trim")

    graph = FilterGraph(
        video_output=plan.video_output or plan.trims[0].video_label,
        audio_output=plan.audio_output or plan.trims[0].audio_label,
    )

    last = len(plan.trims) - 1
    for trim in plan.trims:
        use_duration = plan.needs_concat and trim.index == last
        graph.filters.extend(build_trim_filters(trim, use_duration=use_duration))

    if plan.needs_concat:
        count = len(plan.trims)
        video_labels = "".join(f"[{trim.video_label}]" for trim in plan.trims)
        audio_labels = "".join(f"[{trim.audio_label}]" for trim in plan.trims)
        graph.filters.append(f"{video_labels}concat=n={count}:v=1:a=0[{graph.video_output}]")
        graph.filters.append(f"{audio_labels}concat=n={count}:v=0:a=1[{graph.audio_output}]")
    else:
        for fold in plan.folds:
            graph.filters.extend(build_fold_filters(fold))

    return graph


class FFmpegFilterExporter(PlanExporter[RenderTimelinePlan]):
    """Exports a render timeline as an ffmpeg filter_complex script."""

    @property
    def format_name(self) -> str:
        return "ffmpeg filtergraph"

    @property
    def file_extension(self) -> str:
        return ".txt"

    def render(self, plan: RenderTimelinePlan) -> str:
        # one filter per line; ffmpeg's -filter_complex_script accepts this
        return ";\n".join(build_filter_graph(plan).filters) + "\n"
