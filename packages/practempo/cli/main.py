"""Command-line interface for PracTempo.

Converts schedules between the text DSL and JSON, builds them to check that
they would run, prints their group outline and lists the registered feature
types.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

from rich.console import Console
from rich.table import Table

from practempo.core.categories import build_default_registry
from practempo.core.config.loader import configure_logging, load_app_config
from practempo.core.config.models import AppConfig
from practempo.core.errors import ScheduleBuildError, ScheduleFormatError
from practempo.core.features.registry import FeatureRegistry
from practempo.core.features.schema import ArgSpec, ConfigurationSchema
from practempo.core.schedule.builder import Schedule, ScheduleBuilder
from practempo.core.schedule.editor import ScheduleEditor
from practempo.core.schedule.grouping import build_outline
from practempo.core.schedule.models import GroupRow, ScheduleDocument
from practempo.core.serialization.convert import (
    ScheduleFormat,
    detect_schedule_format,
    generate_schedule,
    parse_schedule,
)
from practempo.core.serialization.json_format import generate_schedule_json
from practempo.core.storage.store import FileScheduleStore
from practempo.core.utils.durations import format_duration

console = Console()
logger = logging.getLogger(__name__)

INDENT = "  "


def _read_document(
    path: Path, registry: FeatureRegistry, app_config: AppConfig
) -> ScheduleDocument:
    content = path.read_text(encoding="utf-8")
    return parse_schedule(
        content,
        detect_schedule_format(path),
        registry,
        default_category=app_config.schedule.default_category,
    )


def _stored_document(registry: FeatureRegistry, app_config: AppConfig) -> ScheduleDocument:
    """Restore the last saved schedule, or the default one when there is none."""
    store = FileScheduleStore(app_config.storage.path)
    editor = ScheduleEditor(registry, app_config.schedule)
    if editor.restore(store):
        console.print(f"Using stored schedule from {store.path}")
    else:
        console.print("[yellow]No usable stored schedule; using the default schedule[/yellow]")
    return editor.to_document()


def _target_format(source: ScheduleFormat, requested: str | None) -> ScheduleFormat:
    """Explicit ``--to`` wins; otherwise convert to the other format."""
    if requested:
        return ScheduleFormat(requested)
    return ScheduleFormat.TEXT if source == ScheduleFormat.JSON else ScheduleFormat.JSON


def format_outline(document: ScheduleDocument) -> list[str]:
    """Render rows as indented outline lines."""
    lines = []
    for entry in build_outline(document.items):
        row = entry.row
        if isinstance(row, GroupRow):
            text = f"{'#' * row.level} {row.name}"
        else:
            feature = f" [{row.feature_type_name}]" if row.feature_type_name else ""
            text = f"{row.duration}  {row.display_label()}{feature}"
        lines.append(f"{INDENT * entry.indent}{text}")
    return lines


def format_arg(arg: ArgSpec) -> str:
    """One-line summary of a schema argument."""
    flags = []
    if arg.required:
        flags.append("required")
    if arg.is_variadic:
        flags.append("variadic")
    if arg.is_toggle_selector:
        flags.append("toggle")
    summary = f"{arg.name}: {arg.type.value}"
    if flags:
        summary += f" ({', '.join(flags)})"
    if arg.is_nested_block and arg.nested_schema:
        summary += " {" + ", ".join(n.name for n in arg.nested_schema) + "}"
    return summary


def format_schema(schema: ConfigurationSchema | None) -> str:
    if schema is None:
        return "(no schema)"
    return "\n".join(format_arg(a) for a in schema.args) or "(no arguments)"


def _schedule_table(schedule: Schedule) -> Table:
    table = Table(title=schedule.name or "Schedule")
    table.add_column("#", justify="right")
    table.add_column("Duration", justify="right")
    table.add_column("Label")
    table.add_column("Feature")
    for i, interval in enumerate(schedule, start=1):
        feature = interval.feature.header_text if interval.feature else ""
        table.add_row(str(i), format_duration(interval.duration_seconds), interval.label, feature)
    return table


def cmd_convert(args: argparse.Namespace, registry: FeatureRegistry, app_config: AppConfig) -> int:
    """Convert a schedule between text and JSON."""
    source = Path(args.input)
    document = _read_document(source, registry, app_config)
    target = _target_format(detect_schedule_format(source), args.to)
    output = generate_schedule(document, target)

    if args.output:
        Path(args.output).write_text(output + "\n", encoding="utf-8")
        console.print(f"[green]Wrote {target.value} schedule to[/green] {args.output}")
    else:
        # Plain print keeps the output pipeable
        print(output)
    return 0


def cmd_build(args: argparse.Namespace, registry: FeatureRegistry, app_config: AppConfig) -> int:
    """Build a schedule and print its intervals."""
    if args.input:
        document = _read_document(Path(args.input), registry, app_config)
    else:
        document = _stored_document(registry, app_config)
    try:
        schedule = ScheduleBuilder(registry, app_config.schedule).build(document)
    except ScheduleBuildError as e:
        console.print(f"[red]ERROR: {e}[/red]")
        return 1

    console.print(_schedule_table(schedule))
    console.print(
        f"[bold]Total:[/bold] {schedule.total_duration} ({len(schedule)} intervals)"
    )

    if args.save:
        store = FileScheduleStore(app_config.storage.path)
        store.save(generate_schedule_json(document))
        console.print(f"[green]Saved schedule to[/green] {store.path}")
    return 0


def cmd_outline(args: argparse.Namespace, registry: FeatureRegistry, app_config: AppConfig) -> int:
    """Print the rows of a schedule indented by group level."""
    document = _read_document(Path(args.input), registry, app_config)
    for line in format_outline(document):
        console.print(line, markup=False, highlight=False)
    return 0


def cmd_features(args: argparse.Namespace, registry: FeatureRegistry, app_config: AppConfig) -> int:
    """List categories and their feature types."""
    categories = registry.get_available_categories()
    if args.category:
        categories = [c for c in categories if c.name == args.category]
        if not categories:
            console.print(f"[red]ERROR: Unknown category: {args.category}[/red]")
            return 1

    for category in categories:
        table = Table(title=f"{category.display_name} ({category.name})")
        table.add_column("Feature type")
        table.add_column("Display name")
        table.add_column("Arguments")
        for descriptor in category.feature_types.values():
            table.add_row(
                descriptor.type_name, descriptor.display_name, format_schema(descriptor.schema)
            )
        console.print(table)
    return 0


COMMANDS = {
    "convert": cmd_convert,
    "build": cmd_build,
    "outline": cmd_outline,
    "features": cmd_features,
}


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for CLI."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config",
        default=None,
        help="Path to app config (JSON or YAML); defaults are used when omitted",
    )

    p = argparse.ArgumentParser(
        prog="practempo",
        description="PracTempo - timed practice schedules",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    convert = sub.add_parser("convert", parents=[common], help="Convert between text and JSON")
    convert.add_argument("input", help="Schedule file (.json for JSON, text otherwise)")
    convert.add_argument("-o", "--output", default=None, help="Output file (default: stdout)")
    convert.add_argument(
        "--to",
        choices=[f.value for f in ScheduleFormat],
        default=None,
        help="Target format (default: the other format)",
    )

    build = sub.add_parser("build", parents=[common], help="Build a schedule")
    build.add_argument(
        "input",
        nargs="?",
        default=None,
        help="Schedule file (default: the last saved schedule)",
    )
    build.add_argument(
        "--save",
        action="store_true",
        help="Persist the schedule JSON to the configured storage path",
    )

    outline = sub.add_parser("outline", parents=[common], help="Print the group outline")
    outline.add_argument("input", help="Schedule file")

    features = sub.add_parser("features", parents=[common], help="List feature types")
    features.add_argument("category", nargs="?", default=None, help="Only this category")

    return p


def run(argv: list[str] | None = None) -> int:
    """Parse arguments and dispatch; returns the exit code."""
    args = build_arg_parser().parse_args(argv)

    try:
        app_config = load_app_config(args.config)
    except ValueError as e:
        console.print(f"[red]ERROR: Could not load config: {e}[/red]")
        return 1
    configure_logging(app_config)

    registry = build_default_registry()
    try:
        return COMMANDS[args.cmd](args, registry, app_config)
    except FileNotFoundError as e:
        console.print(f"[red]ERROR: File not found: {e.filename}[/red]")
        return 1
    except ScheduleFormatError as e:
        console.print(f"[red]ERROR: {e}[/red]")
        return 1


def main() -> None:
    """Main entry point for CLI."""
    sys.exit(run())
