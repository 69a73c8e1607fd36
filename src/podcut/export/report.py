"""Cut plan report generator.

Generates a human-readable summary of what a cut plan removes and why.
"""

import re
from pathlib import Path
from typing import Any

from podcut.export.base import PlanExporter
from podcut.models.timeline import CutPlan, CutPlanSegment

_SILENCE_RE = re.compile(r"^silence_\d+ms$")

_CATEGORY_LABELS = {
    "silence": "Silence",
    "filler_word": "Filler word",
    "content": "Content",
}


def _sec_to_timestamp(seconds: float) -> str:
    """Convert seconds to HH:MM:SS.mmm format."""
    ms = int(round(seconds * 1000))
    hours = ms // 3600000
    minutes = (ms % 3600000) // 60000
    secs = (ms % 60000) // 1000
    millis = ms % 1000

    if hours > 0:
        return f"{hours:02d}:{minutes:02d}:{secs:02d}.{millis:03d}"
    return f"{minutes:02d}:{secs:02d}.{millis:03d}"


def reason_category(reason: str) -> str:
    """Collapse a segment reason to its kind.

    ``silence_2000ms`` becomes ``silence``, ``filler_word_um`` becomes
    ``filler_word``; merged reasons keep each distinct kind once, in order.
    """
    kinds: list[str] = []
    for part in reason.split("+"):
        if _SILENCE_RE.match(part):
            kind = "silence"
        elif part.startswith("filler_word_"):
            kind = "filler_word"
        else:
            kind = part
        if kind not in kinds:
            kinds.append(kind)
    return "+".join(kinds)


def _category_label(category: str) -> str:
    return " + ".join(_CATEGORY_LABELS.get(kind, kind) for kind in category.split("+"))


def _group_cuts(plan: CutPlan) -> dict[str, list[CutPlanSegment]]:
    by_category: dict[str, list[CutPlanSegment]] = {}
    for segment in plan.cut_segments:
        by_category.setdefault(reason_category(segment.reason), []).append(segment)
    return by_category


def generate_plan_report(plan: CutPlan, include_keeps: bool = False) -> str:
    """Generate a cut plan report in Markdown format.

    Args:
        plan: Cut plan to describe
        include_keeps: If True, also list the kept segments

    Returns:
        Markdown formatted report string
    """
    total = plan.total_duration_sec
    lines = [
        "# Cut Plan Report",
        "",
        f"**Source**: {plan.source or '-'}",
        f"**Schema**: {plan.schema_version}",
        f"**Original duration**: {_sec_to_timestamp(total)}",
        f"**Kept**: {_sec_to_timestamp(plan.kept_duration_sec)}",
        f"**Removed**: {_sec_to_timestamp(plan.removed_duration_sec)}"
        + (f" ({plan.removed_duration_sec / total:.1%})" if total > 0 else ""),
        "",
    ]

    by_category = _group_cuts(plan)
    if not by_category:
        lines.append("No cuts in this plan.")
    else:
        lines.append("## Summary")
        lines.append("")
        lines.append("| Reason | Count | Total time |")
        lines.append("|--------|-------|------------|")

        total_count = 0
        total_removed = 0.0
        for category, segments in by_category.items():
            duration = sum(seg.duration for seg in segments)
            lines.append(
                f"| {_category_label(category)} | {len(segments)} | {_sec_to_timestamp(duration)} |"
            )
            total_count += len(segments)
            total_removed += duration

        lines.append(
            f"| **Total** | **{total_count}** | **{_sec_to_timestamp(total_removed)}** |"
        )
        lines.append("")

        lines.append("## Cuts")
        lines.append("")
        for i, segment in enumerate(plan.cut_segments, 1):
            lines.append(
                f"{i}. {_sec_to_timestamp(segment.start)} - {_sec_to_timestamp(segment.end)} "
                f"({_sec_to_timestamp(segment.duration)}) `{segment.reason}`"
            )
        lines.append("")

    if include_keeps:
        lines.append("## Kept segments")
        lines.append("")
        for i, segment in enumerate(plan.keep_segments, 1):
            lines.append(
                f"{i}. {_sec_to_timestamp(segment.start)} - {_sec_to_timestamp(segment.end)} "
                f"({_sec_to_timestamp(segment.duration)})"
            )
        lines.append("")

    return "\n".join(lines)


def generate_plan_report_json(plan: CutPlan) -> dict[str, Any]:
    """Generate a cut plan report as structured JSON."""
    by_category = _group_cuts(plan)

    summary = {}
    for category, segments in by_category.items():
        summary[category] = {
            "count": len(segments),
            "duration_sec": round(sum(seg.duration for seg in segments), 3),
        }

    return {
        "source": plan.source,
        "summary": {
            "total_duration_sec": plan.total_duration_sec,
            "kept_duration_sec": round(plan.kept_duration_sec, 3),
            "removed_duration_sec": round(plan.removed_duration_sec, 3),
            "cut_count": len(plan.cut_segments),
            "by_reason": summary,
        },
        "cuts": [
            {"start": seg.start, "end": seg.end, "reason": seg.reason}
            for seg in plan.cut_segments
        ],
    }


class ReportExporter(PlanExporter[CutPlan]):
    """Exports a cut plan as a Markdown report."""

    def __init__(self, include_keeps: bool = False) -> None:
        self.include_keeps = include_keeps

    @property
    def format_name(self) -> str:
        return "Markdown report"

    @property
    def file_extension(self) -> str:
        return ".md"

    def render(self, plan: CutPlan) -> str:
        return generate_plan_report(plan, include_keeps=self.include_keeps)


async def save_report(plan: CutPlan, output_path: Path, format: str = "markdown") -> Path:
    """Save a cut plan report to file.

    Args:
        plan: Cut plan to describe
        output_path: Output file path
        format: "markdown" or "json"

    Returns:
        Path to saved report file
    """
    import json

    output_path = Path(output_path)

    if format == "json":
        if not output_path.suffix:
            output_path = output_path.with_suffix(".json")
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(generate_plan_report_json(plan), f, ensure_ascii=False, indent=2)
        return output_path

    return await ReportExporter().export(plan, output_path)
