"""
Command-line interface for jarsearch.

Main Commands:
    find: Run one search in one of the five modes
    list: Print the JAR analysis report (entry counts and sizes)

Example Usage:
    Exact class lookup:
        $ jarsearch find -c StringUtils -d /opt/app/lib

    Search everything, one line per file, skipping backups:
        $ jarsearch find -m "jdbc:oracle" -d /opt/app --mini -e /backup/

    Content search restricted to non-class entries, exported to CSV:
        $ jarsearch find -s "password\\s*=" --types other --export hits.csv

For more information, run: jarsearch find --help
"""

from __future__ import annotations

import sys
from pathlib import Path

import click
from rich.console import Console

from ..core.api import JarSearch
from ..core.config import SearchConfig
from ..core.types import EntryKind, OutputFormat, Query, SearchMode
from ..utils.error_handling import ConfigurationError, PatternError
from ..utils.formatter import (
    export_csv,
    format_result,
    render_archive_listing,
    render_results,
    render_stats,
)
from ..utils.logging_config import LogFormat, LogLevel, configure_logging

# option name -> mode, in the order they are checked
_MODE_OPTIONS = (
    ("exact_class", SearchMode.EXACT_CLASS),
    ("class_contains", SearchMode.CLASS_SUBSTRING),
    ("package", SearchMode.PACKAGE),
    ("search", SearchMode.CONTENT),
    ("master", SearchMode.MASTER),
)


def _setup_logging(verbose: bool, log_file: str | None, log_format: str) -> None:
    try:
        configure_logging(
            level=LogLevel.DEBUG if verbose else LogLevel.WARNING,
            format_type=LogFormat(log_format),
            log_file=Path(log_file) if log_file else None,
            enable_file=bool(log_file),
            enable_console=True,
        )
    except (ValueError, OSError) as e:
        click.echo(f"Error configuring logging: {e}", err=True)
        sys.exit(1)


@click.group()
def cli() -> None:
    """jarsearch - parallel search inside JAR/WAR/EAR/ZIP archives and loose files"""
    pass


@cli.command("find")
@click.option("-c", "--class", "exact_class", metavar="CLASS_NAME", help="Search for an exact class name")
@click.option("-C", "--class-contains", metavar="SUBSTRING", help="Search for a substring in class names")
@click.option("-p", "--package", metavar="PACKAGE", help="Search by package name")
@click.option("-s", "--search", metavar="PATTERN", help="Search entry contents of JAR files (regex)")
@click.option(
    "-m",
    "--master",
    metavar="PATTERN",
    help="Master search: JAR, ZIP, WAR, EAR, Java and text files (regex)",
)
@click.option("-d", "--dir", "directory", default=".", show_default=True, help="Directory to search in")
@click.option(
    "-e",
    "--exclude",
    multiple=True,
    metavar="PATH",
    help="Exclude paths containing this string (repeatable)",
)
@click.option("--mini", is_flag=True, default=False, help="Show only unique file names (one per file)")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable verbose (debug) output")
@click.option(
    "--min-size",
    type=click.IntRange(min=0),
    default=0,
    show_default=True,
    metavar="BYTES",
    help="Minimum file size to process",
)
@click.option("-j", "--jobs", type=click.IntRange(min=1), default=None, help="Number of parallel jobs")
@click.option(
    "--types",
    multiple=True,
    type=click.Choice([k.value for k in EntryKind]),
    help="Entry types searched in content mode (repeatable, default: all)",
)
@click.option("--export", "export_file", metavar="FILE", help="Export results to a CSV file")
@click.option(
    "--format",
    "fmt",
    type=click.Choice([f.value for f in OutputFormat]),
    default=OutputFormat.TEXT.value,
    show_default=True,
    help="Output format",
)
@click.option("--log-file", help="Log file path")
@click.option(
    "--log-format",
    type=click.Choice([f.value for f in LogFormat]),
    default=LogFormat.SIMPLE.value,
    help="Log format",
)
@click.option("--show-errors", is_flag=True, default=False, help="Show a report of skipped files")
def find_cmd(
    exact_class: str | None,
    class_contains: str | None,
    package: str | None,
    search: str | None,
    master: str | None,
    directory: str,
    exclude: tuple[str, ...],
    mini: bool,
    verbose: bool,
    min_size: int,
    jobs: int | None,
    types: tuple[str, ...],
    export_file: str | None,
    fmt: str,
    log_file: str | None,
    log_format: str,
    show_errors: bool,
) -> None:
    values = {
        "exact_class": exact_class,
        "class_contains": class_contains,
        "package": package,
        "search": search,
        "master": master,
    }
    selected = [(mode, values[name]) for name, mode in _MODE_OPTIONS if values[name] is not None]
    if len(selected) > 1:
        raise click.UsageError("Options -c, -C, -p, -s and -m are mutually exclusive")
    if not selected:
        click.echo("Error: No search operation specified. Use --help for options.", err=True)
        sys.exit(2)
    mode, pattern = selected[0]
    if types and mode != SearchMode.CONTENT:
        raise click.UsageError("Option --types can only be used with -s/--search")

    _setup_logging(verbose, log_file, log_format)

    output_format = OutputFormat(fmt)
    cfg = SearchConfig(
        root=directory,
        exclude=list(exclude),
        min_size=min_size,
        workers=jobs or 0,
        mini=mini,
        output_format=output_format,
    )
    engine = JarSearch(cfg)
    kinds = frozenset(EntryKind(t) for t in types) if types else None

    try:
        result = engine.run(Query(mode=mode, pattern=pattern, entry_kinds=kinds))
    except PatternError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(2)
    except ConfigurationError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(2)

    if output_format == OutputFormat.JSON:
        sys.stdout.write(format_result(result, output_format))
        sys.stdout.write("\n")
    else:
        console = Console()
        if sys.stdout.isatty():
            render_results(result, console, mini=mini)
        else:
            sys.stdout.write(format_result(result, output_format, mini=mini))
            sys.stdout.write("\n")
        render_stats(
            result,
            console,
            mini=mini,
            workers=cfg.resolve_workers(),
            exclusions=cfg.exclude,
        )

    if export_file:
        try:
            count = export_csv(result.items, export_file)
        except OSError as e:
            click.echo(f"Error exporting results: {e}", err=True)
            sys.exit(1)
        click.echo(f"Exported {count} results to {export_file}", err=True)

    if show_errors and engine.has_errors():
        click.echo("\n" + "=" * 50, err=True)
        click.echo("ERROR REPORT", err=True)
        click.echo("=" * 50, err=True)
        click.echo(engine.get_error_report(), err=True)


@cli.command("list")
@click.option("-d", "--dir", "directory", default=".", show_default=True, help="Directory to search in")
@click.option("-e", "--exclude", multiple=True, metavar="PATH", help="Exclude paths containing this string")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable verbose (debug) output")
def list_cmd(directory: str, exclude: tuple[str, ...], verbose: bool) -> None:
    """List JAR files with their class, Java and file entry counts."""
    _setup_logging(verbose, None, LogFormat.SIMPLE.value)
    engine = JarSearch(SearchConfig(root=directory, exclude=list(exclude)))
    render_archive_listing(engine.list_archives(), directory, Console())


def main() -> None:
    cli(prog_name="jarsearch")


if __name__ == "__main__":
    main()
