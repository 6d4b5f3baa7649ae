"""
Output formatting module for jarsearch.

This module handles the rendering of search results: plain text, JSON, rich
console tables for results, statistics and the archive listing, and the CSV
export used to hand results to spreadsheets and other tools.

Key Functions:
    format_result: Main entry point for formatting results in any supported format
    to_json_bytes: Fast JSON serialization using orjson
    format_text: Plain text listing of matches
    render_results: Rich console listing (full or mini layout)
    render_stats: Rich statistics table
    render_archive_listing: Rich table of JAR entry counts and sizes
    export_csv / read_csv: CSV record format ``location,line,content,category``

Example:
    Basic formatting:
        >>> from jarsearch.utils.formatter import format_result
        >>> from jarsearch.core.types import OutputFormat
        >>>
        >>> print(format_result(result, OutputFormat.TEXT))
        >>> print(format_result(result, OutputFormat.JSON))

    Exporting:
        >>> export_csv(result.items, Path("matches.csv"))
        >>> read_csv(Path("matches.csv")) == result.items
        True
"""

from __future__ import annotations

import csv
from collections.abc import Iterable, Sequence
from dataclasses import asdict
from pathlib import Path
from typing import Any

import orjson
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from ..core.types import ArchiveSummary, FileCategory, Match, OutputFormat, RunStatistics, SearchResult

CSV_HEADER = ("location", "line", "content", "category")

# Long archive names are shortened in the listing table
_MAX_NAME_WIDTH = 47


def _stats_payload(stats: RunStatistics) -> dict[str, Any]:
    payload = asdict(stats)
    payload["category_counts"] = {
        (cat.value if isinstance(cat, FileCategory) else str(cat)): count
        for cat, count in stats.category_counts.items()
    }
    return payload


def to_json_bytes(result: SearchResult) -> bytes:
    """
    Convert search results to JSON bytes using orjson.

    Args:
        result: SearchResult object containing matches and statistics

    Returns:
        JSON-encoded bytes with pretty formatting (indented)
    """
    payload = {
        "items": [
            {
                "location": m.location,
                "line": m.line,
                "content": m.content,
                "category": m.category,
            }
            for m in result.items
        ],
        "stats": _stats_payload(result.stats),
    }
    return orjson.dumps(payload, option=orjson.OPT_INDENT_2)


def format_text(result: SearchResult, mini: bool = False) -> str:
    """
    Format search results as plain text, one numbered match per entry.

    In full mode a match with a line number spans two lines (location and
    line, then category and content); name and binary-string matches fit on
    one. In mini mode only the locations are listed.
    """
    if not result.items:
        return "No matches found"

    noun = "unique files with matches" if mini else "matches"
    out: list[str] = [f"Found {len(result.items)} {noun}", "-" * 80]
    for i, m in enumerate(result.items, start=1):
        if mini:
            out.append(f"{i:>3}. {m.location}")
        elif m.line is not None:
            out.append(f"{i:>3}. {m.location} line:{m.line}")
            out.append(f"     {m.category}: {m.content}")
        else:
            out.append(f"{i:>3}. {m.location} {m.category}: {m.content}")
    return "\n".join(out)


def render_results(result: SearchResult, console: Console | None = None, mini: bool = False) -> None:
    """Render the match list to the console with rich styling."""
    if console is None:
        console = Console()
    if not result.items:
        console.print("[yellow]RESULT[/yellow] No matches found")
        return

    noun = "unique files with matches" if mini else "matches"
    console.print()
    console.print(f"[bold green]RESULTS[/bold green] Found {len(result.items)} {noun}")
    console.print("─" * 80, style="cyan")
    for i, m in enumerate(result.items, start=1):
        line = Text(f"{i:>3}. ")
        line.append(m.location, style="green")
        if mini:
            console.print(line)
        elif m.line is not None:
            line.append(" line:", style="cyan")
            line.append(str(m.line), style="yellow")
            console.print(line)
            detail = Text("     ")
            detail.append(m.category, style="magenta")
            detail.append(f": {m.content}")
            console.print(detail)
        else:
            line.append(f" {m.category}", style="magenta")
            line.append(f": {m.content}")
            console.print(line)


def render_stats(
    result: SearchResult,
    console: Console | None = None,
    *,
    mini: bool = False,
    workers: int | None = None,
    exclusions: Sequence[str] = (),
) -> None:
    """Render the run statistics table."""
    if console is None:
        console = Console()
    s = result.stats

    table = Table(title="SEARCH STATISTICS", show_header=False, box=None, padding=(0, 2))
    table.add_column("name", style="cyan")
    table.add_column("value", justify="right")

    table.add_row("JAR files scanned:", str(s.archives))
    table.add_row("ZIP files scanned:", str(s.zip_containers))
    table.add_row("Class files found:", str(s.class_entries))
    table.add_row("Java files found:", str(s.source_files))
    table.add_row("Other files found:", str(s.other_files))
    table.add_row("Total files processed:", str(s.files_processed))
    if mini:
        table.add_row("Unique files w/ matches:", f"[green]{len(result.items)}[/green]")
        table.add_row("Total matches found:", f"[yellow]{s.matches_found}[/yellow]")
    else:
        table.add_row("Matches found:", f"[green]{len(result.items)}[/green]")
    if s.units_skipped:
        table.add_row("Units skipped:", f"[red]{s.units_skipped}[/red]")
    if s.entries_skipped:
        table.add_row("Entries skipped:", f"[red]{s.entries_skipped}[/red]")
    table.add_row("Elapsed time:", f"[yellow]{s.elapsed_seconds:.2f}s[/yellow]")
    if s.elapsed_ms > 0:
        table.add_row("Files/second:", f"[magenta]{s.files_per_second:.2f}[/magenta]")
        table.add_row("Classes/second:", f"[magenta]{s.classes_per_second:.2f}[/magenta]")
    if workers is not None:
        table.add_row("Parallel jobs:", str(workers))
    table.add_row("Mode:", "[magenta]Mini (unique files)[/magenta]" if mini else "Full")
    if exclusions:
        table.add_row("Exclusions:", f"[red]{len(exclusions)}[/red]")
        for pattern in exclusions:
            table.add_row(Text(f"  {pattern}", style="red"), "")

    console.print()
    console.print(table)


def _display_name(path: Path) -> str:
    name = path.name
    if len(name) > _MAX_NAME_WIDTH:
        return name[: _MAX_NAME_WIDTH - 3] + "..."
    return name


def render_archive_listing(
    summaries: Sequence[ArchiveSummary], root: Path | str, console: Console | None = None
) -> None:
    """Render the JAR analysis report: per-archive entry counts and sizes, plus totals."""
    if console is None:
        console = Console()
    console.print("[bold]JAR Analysis Report[/bold]")
    if not summaries:
        console.print(f"[red]ERROR[/red] No JAR files found in {escape(str(root))}")
        return

    console.print(f"[blue]INFO[/blue] Found {len(summaries)} JAR files")
    table = Table(show_footer=True)
    table.add_column("JAR File", footer="TOTAL")
    table.add_column("Classes", justify="right", footer=str(sum(s.class_entries for s in summaries)))
    table.add_column("Java", justify="right", footer=str(sum(s.source_entries for s in summaries)))
    table.add_column("Files", justify="right", footer=str(sum(s.file_entries for s in summaries)))
    total_mb = sum(s.size_bytes for s in summaries) / (1024.0 * 1024.0)
    table.add_column("Size (MB)", justify="right", footer=f"{total_mb:.2f}")

    for s in summaries:
        table.add_row(
            _display_name(s.path),
            str(s.class_entries),
            str(s.source_entries),
            str(s.file_entries),
            f"{s.size_mb:.2f}",
        )
    console.print(table)


def format_result(result: SearchResult, fmt: OutputFormat, mini: bool = False) -> str:
    """Format search results according to the specified output format."""
    if fmt == OutputFormat.JSON:
        return to_json_bytes(result).decode("utf-8")
    return format_text(result, mini=mini)


def export_csv(matches: Iterable[Match], path: Path | str) -> int:
    """
    Write matches as CSV records with a ``location,line,content,category`` header.

    An absent line number is written as an empty field. The file is
    overwritten if it exists.

    Returns:
        Number of records written (header excluded)

    Raises:
        OSError: if the file cannot be written
    """
    count = 0
    with open(path, "w", encoding="utf-8", newline="") as fh:
        writer = csv.writer(fh)
        writer.writerow(CSV_HEADER)
        for m in matches:
            writer.writerow([m.location, "" if m.line is None else m.line, m.content, m.category])
            count += 1
    return count


def read_csv(path: Path | str) -> list[Match]:
    """Read a file written by :func:`export_csv` back into Match objects."""
    with open(path, encoding="utf-8", newline="") as fh:
        reader = csv.reader(fh)
        header = next(reader, None)
        if header is None:
            return []
        if tuple(header) != CSV_HEADER:
            raise ValueError(f"Unexpected CSV header: {header!r}")
        return [
            Match(location, int(line) if line else None, content, category)
            for location, line, content, category in reader
        ]
