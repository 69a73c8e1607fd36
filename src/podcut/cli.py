"""podcut command-line interface with subcommands.

Usage:
    podcut plan <transcript.json> [-o cut_plan.json] [--total-duration SEC]
    podcut render-timeline <cut_plan.json> [--transitions] [--fps N] [--duration-ms N] [-o plan.json] [--filtergraph]
    podcut remap <cut_plan.json> <cues.json> [--transitions] [--fps N] [-o remapped.json]
    podcut report <cut_plan.json> [-o report.md] [--json] [--include-keeps]
"""

import argparse
import asyncio
import json
import logging
import sys
import time
from pathlib import Path
from typing import Any

from podcut.config import Settings, get_settings
from podcut.errors import PodcutError
from podcut.export.ffmpeg import FFmpegFilterExporter, build_filter_graph
from podcut.export.report import (
    ReportExporter,
    generate_plan_report,
    generate_plan_report_json,
    save_report,
)
from podcut.models.config import TransitionConfig
from podcut.models.timeline import CutPlan, CutPlanMetadata
from podcut.models.transcript import Transcript
from podcut.services.planner import plan_cuts
from podcut.services.remapper import remap_cues, remap_transcript
from podcut.services.render_timeline import build_render_timeline

logger = logging.getLogger(__name__)


class CLIError(Exception):
    """Invalid command-line input (missing file, unreadable JSON)."""


def _require_file(path_str: str, label: str) -> Path:
    path = Path(path_str).resolve()
    if not path.exists():
        raise CLIError(f"{label} not found: {path}")
    return path


def _read_json(path: Path) -> Any:
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as exc:
        raise CLIError(f"Invalid JSON in {path}: {exc}") from exc


def _write_json(data: Any, output: str | None) -> None:
    text = json.dumps(data, ensure_ascii=False, indent=2)
    if output:
        path = Path(output)
        path.write_text(text + "\n", encoding="utf-8")
        print(f"Wrote {path}", file=sys.stderr)
    else:
        print(text)


def _transition_config(settings: Settings, args: argparse.Namespace) -> TransitionConfig:
    return settings.transition_config(
        enabled=True if args.transitions else None,
        duration_ms=args.duration_ms,
        fps=args.fps,
    )


# --- Plan subcommand ---

async def cmd_plan(args: argparse.Namespace, settings: Settings) -> None:
    """Build a cut plan from a transcript."""
    transcript_path = _require_file(args.input, "Transcript")
    data = _read_json(transcript_path)

    started = time.perf_counter()
    plan = plan_cuts(
        Transcript.from_dict(data),
        settings.planner_config(),
        total_duration_sec=args.total_duration,
        source=str(transcript_path),
        output=args.output,
    )
    elapsed_ms = int((time.perf_counter() - started) * 1000)
    plan = plan.model_copy(
        update={
            "metadata": CutPlanMetadata(
                processing_time_ms=elapsed_ms,
                parameters=plan.metadata.parameters,
            )
        }
    )

    print(
        f"Planned {len(plan.cut_segments)} cuts, removing "
        f"{plan.removed_duration_sec:.2f}s of {plan.total_duration_sec:.2f}s",
        file=sys.stderr,
    )
    if args.output:
        saved = plan.save(Path(args.output))
        print(f"Wrote {saved}", file=sys.stderr)
    else:
        _write_json(plan.to_document(), None)


# --- Render timeline subcommand ---

async def cmd_render_timeline(args: argparse.Namespace, settings: Settings) -> None:
    """Compute expected duration and joins for a cut plan."""
    plan = CutPlan.load(_require_file(args.input, "Cut plan"))
    config = _transition_config(settings, args)
    render_plan = build_render_timeline(plan.cuts, config)

    if args.filtergraph:
        if args.output:
            saved = await FFmpegFilterExporter().export(render_plan, Path(args.output))
            print(f"Wrote {saved}", file=sys.stderr)
        else:
            graph = build_filter_graph(render_plan)
            print(graph.filter_complex)
            print(" ".join(graph.map_args()), file=sys.stderr)
        return

    _write_json(render_plan.model_dump(mode="json"), args.output)


# --- Remap subcommand ---

def _parse_cue(item: Any) -> Any:
    # caption files carry their text as "text"
    if isinstance(item, dict) and "payload" not in item and "text" in item:
        return {"start": item.get("start"), "end": item.get("end"), "payload": item["text"]}
    return item


async def cmd_remap(args: argparse.Namespace, settings: Settings) -> None:
    """Remap caption cues onto the final timeline."""
    plan = CutPlan.load(_require_file(args.plan, "Cut plan"))
    data = _read_json(_require_file(args.cues, "Cue list"))
    config = _transition_config(settings, args)

    if isinstance(data, dict) and "segments" in data:
        mappings = remap_transcript(Transcript.from_dict(data), plan.cuts, config)
    else:
        items = data.get("cues") if isinstance(data, dict) else data
        if not isinstance(items, list):
            raise CLIError("Cue list must be a JSON array or an object with a 'cues' array")
        mappings = remap_cues([_parse_cue(item) for item in items], plan.cuts, config)

    dropped = sum(1 for m in mappings if m.dropped)
    print(f"Remapped {len(mappings) - dropped} cues, dropped {dropped}", file=sys.stderr)
    _write_json({"mappings": [m.model_dump(mode="json") for m in mappings]}, args.output)


# --- Report subcommand ---

async def cmd_report(args: argparse.Namespace, settings: Settings) -> None:
    """Write a Markdown or JSON report of a cut plan."""
    plan = CutPlan.load(_require_file(args.input, "Cut plan"))

    if args.output:
        if args.json:
            saved = await save_report(plan, Path(args.output), format="json")
        else:
            saved = await ReportExporter(include_keeps=args.include_keeps).export(
                plan, Path(args.output)
            )
        print(f"Wrote {saved}", file=sys.stderr)
    elif args.json:
        _write_json(generate_plan_report_json(plan), None)
    else:
        print(generate_plan_report(plan, include_keeps=args.include_keeps))


# --- Main CLI ---

_COMMANDS = {
    "plan": cmd_plan,
    "render-timeline": cmd_render_timeline,
    "remap": cmd_remap,
    "report": cmd_report,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="podcut",
        description="podcut - edit timeline engine for podcast cuts",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- plan ---
    p_plan = subparsers.add_parser("plan", help="Build a cut plan from a transcript")
    p_plan.add_argument("input", type=str, help="Transcript JSON file")
    p_plan.add_argument("-o", "--output", type=str, help="Output cut plan JSON path")
    p_plan.add_argument(
        "--total-duration", type=float, help="Source duration in seconds (default: last segment end)"
    )

    # --- render-timeline ---
    p_render = subparsers.add_parser("render-timeline", help="Expected duration and joins")
    p_render.add_argument("input", type=str, help="Cut plan JSON file")
    p_render.add_argument("--transitions", action="store_true", help="Crossfade between keeps")
    p_render.add_argument("--fps", type=float, help="Target frame rate (default: RENDER_FPS)")
    p_render.add_argument("--duration-ms", type=int, help="Crossfade length in ms")
    p_render.add_argument("-o", "--output", type=str, help="Output path")
    p_render.add_argument("--filtergraph", action="store_true", help="Emit ffmpeg filter_complex")

    # --- remap ---
    p_remap = subparsers.add_parser("remap", help="Remap caption cues to the final timeline")
    p_remap.add_argument("plan", type=str, help="Cut plan JSON file")
    p_remap.add_argument("cues", type=str, help="Cue list or transcript JSON file")
    p_remap.add_argument("--transitions", action="store_true", help="Crossfade between keeps")
    p_remap.add_argument("--fps", type=float, help="Target frame rate (default: RENDER_FPS)")
    p_remap.add_argument("--duration-ms", type=int, help="Crossfade length in ms")
    p_remap.add_argument("-o", "--output", type=str, help="Output JSON path")

    # --- report ---
    p_report = subparsers.add_parser("report", help="Summarize a cut plan")
    p_report.add_argument("input", type=str, help="Cut plan JSON file")
    p_report.add_argument("-o", "--output", type=str, help="Output report path")
    p_report.add_argument("--json", action="store_true", help="JSON instead of Markdown")
    p_report.add_argument("--include-keeps", action="store_true", help="Also list kept segments")

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        asyncio.run(_COMMANDS[args.command](args, get_settings()))
    except PodcutError as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        if exc.details:
            logger.debug(f"Error details: {exc.details}")
        return 1
    except (CLIError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
