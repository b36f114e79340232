"""
CU open-data export - CLI entry point

Usage:
    python -m cuexport extract --data-dir data/raw --output-dir output
    python -m cuexport sort --output-dir output --dry-run
    python -m cuexport run --data-dir data/raw --output-dir output --date 20260205
"""
from __future__ import annotations
import argparse
import logging
import sys
from pathlib import Path

from pandera.errors import SchemaError, SchemaErrors
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from . import config
from .config import LANGUAGES
from .pipeline import make_outputs
from .queries import QUERY_KINDS
from .sorting import DEFAULT_RULE_TABLE, SortReport, SortSettings, load_rules, sort_outputs
from .validators import MissingColumnsError

console = Console()


def print_header(title: str, subtitle: str = ""):
    console.print(Panel(f"[bold blue]{title}[/bold blue]\n[italic]{subtitle}[/italic]", expand=False))

def print_error(msg: str):
    console.print(f"[bold red]ERROR:[/bold red] {msg}")

def print_warning(msg: str):
    console.print(f"[bold yellow]WARNING:[/bold yellow] {msg}")

def print_success(msg: str):
    console.print(f"[bold green]SUCCESS:[/bold green] {msg}")


def print_plan_table(report: SortReport, root: Path):
    """Plan preview: one row per CSV, with the outcome once executed."""
    outcomes = {o.entry.source: o for o in report.outcomes}
    table = Table(title="Sort Plan")
    table.add_column("File", style="cyan")
    table.add_column("Destination", style="blue")
    table.add_column("Exists")
    table.add_column("Outcome", style="magenta")
    for entry in report.plan:
        dst = str(entry.destination.relative_to(root)) if entry.destination is not None else "-"
        exists = "" if entry.exists is None else ("yes" if entry.exists else "no")
        outcome = outcomes.get(entry.source)
        if outcome is None:
            result = entry.reason if entry.destination is None else "would move"
        else:
            result = outcome.status if outcome.reason is None else f"{outcome.status} ({outcome.reason})"
        table.add_row(entry.source.name, dst, exists, result)
    console.print(table)


# =============================================================================
# Commands
# =============================================================================

def cmd_extract(args: argparse.Namespace) -> int:
    print_header("EXTRACT", f"{args.data_dir} -> {args.output_dir}")
    try:
        written = make_outputs(args.data_dir, args.output_dir, kinds=args.kind, languages=args.language)
    except (FileNotFoundError, MissingColumnsError, SchemaError, SchemaErrors, ValueError) as e:
        print_error(str(e))
        return 1
    print_success(f"{len(written)} CSV file(s) written to {args.output_dir}")
    return 0


def cmd_sort(args: argparse.Namespace) -> int:
    print_header("SORT", f"{args.output_dir}")
    try:
        rules = load_rules(args.rules) if args.rules else list(DEFAULT_RULE_TABLE)
        settings = SortSettings(
            output_root=args.output_dir,
            rules=rules,
            dry_run=args.dry_run,
            overwrite=args.overwrite,
            today=args.date,
        )
        report = sort_outputs(settings)
    except (FileNotFoundError, ValueError) as e:
        print_error(str(e))
        return 1

    print_plan_table(report, args.output_dir)
    if report.dry_run:
        print_warning("This was a DRY-RUN. No files were moved.")
        return 0
    console.print(f"Moved: {report.moved}  Skipped: {report.skipped}  Failed: {report.failed}")
    if report.failed:
        print_error(f"{report.failed} file(s) could not be moved")
        return 1
    print_success("Sorting complete")
    return 0


def cmd_run(args: argparse.Namespace) -> int:
    code = cmd_extract(args)
    if code != 0:
        return code
    return cmd_sort(args)


# =============================================================================
# Main
# =============================================================================

def _add_extract_args(p: argparse.ArgumentParser):
    p.add_argument("--data-dir", type=Path, default=config.RAW,
                   help=f"Folder with the view exports (default: {config.RAW})")
    p.add_argument("--kind", choices=QUERY_KINDS, action="append",
                   help="Query kind to run; repeat for several (default: all)")
    p.add_argument("--language", choices=LANGUAGES, action="append",
                   help="Output language; repeat for several (default: all)")

def _add_sort_args(p: argparse.ArgumentParser):
    p.add_argument("--rules", type=Path,
                   help="CSV rule table (keyword,label[,regex]); row order is priority")
    p.add_argument("--dry-run", action="store_true",
                   help="Show the plan without moving files")
    p.add_argument("--overwrite", action="store_true",
                   help="Replace files already present in the destination")
    p.add_argument("--date", type=str, metavar="YYYYMMDD",
                   help="Date suffix for destination folders (default: today)")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="cuexport",
        description="Export Pacific salmon CU status, sites and boundaries to CSV and sort them for Open Data",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- EXTRACT command ---
    extract_parser = subparsers.add_parser("extract", help="Write one CSV per CU query")
    extract_parser.add_argument("--output-dir", type=Path, default=config.OUTPUT,
                                help=f"Folder for the CSV files (default: {config.OUTPUT})")
    _add_extract_args(extract_parser)
    extract_parser.set_defaults(func=cmd_extract)

    # --- SORT command ---
    sort_parser = subparsers.add_parser("sort", help="Move output CSVs into dated subfolders")
    sort_parser.add_argument("--output-dir", type=Path, default=config.OUTPUT,
                             help=f"Folder holding the CSV files (default: {config.OUTPUT})")
    _add_sort_args(sort_parser)
    sort_parser.set_defaults(func=cmd_sort)

    # --- RUN command (extract then sort) ---
    run_parser = subparsers.add_parser("run", help="Extract, then sort")
    run_parser.add_argument("--output-dir", type=Path, default=config.OUTPUT,
                            help=f"Folder for the CSV files (default: {config.OUTPUT})")
    _add_extract_args(run_parser)
    _add_sort_args(run_parser)
    run_parser.set_defaults(func=cmd_run)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )
    try:
        return args.func(args)
    except KeyboardInterrupt:
        print_error("Operation cancelled by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
