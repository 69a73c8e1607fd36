"""Plan exporters."""

from podcut.export.base import PlanExporter
from podcut.export.ffmpeg import FFmpegFilterExporter, FilterGraph, build_filter_graph
from podcut.export.report import (
    ReportExporter,
    generate_plan_report,
    generate_plan_report_json,
    save_report,
)

__all__ = [
    "PlanExporter",
    "FFmpegFilterExporter",
    "FilterGraph",
    "build_filter_graph",
    "ReportExporter",
    "generate_plan_report",
    "generate_plan_report_json",
    "save_report",
]
