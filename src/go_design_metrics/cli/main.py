"""go-design-metrics command line."""

import sys
from pathlib import Path

import typer
from loguru import logger

from .. import __version__
from ..analysis.reporters import ConsoleProgressReporter, ReportFormat, render_report
from ..config.defaults import PATTERN_ALL
from ..config.settings import AnalyzerOptions
from ..core.analyzer import ModuleAnalyzer
from ..core.exceptions import GoDesignMetricsError
from .output import print_error, print_info, print_success

app = typer.Typer(
    help="📐 Package design metrics (Ca, Ce, I, A, D) for Go modules",
    add_completion=False,
)


def configure_logging(verbose: bool) -> None:
    """Send loguru output to stderr, DEBUG with --verbose, WARNING otherwise."""
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"go-design-metrics {__version__}")
        raise typer.Exit()


@app.command()
def main(
    module_path: Path = typer.Argument(
        Path("."),
        help="Go module root directory (containing go.mod)",
        file_okay=False,
        dir_okay=True,
    ),
    report_format: ReportFormat = typer.Option(
        ReportFormat.TEXT,
        "--format",
        "-f",
        help="Output format",
        case_sensitive=False,
    ),
    pattern: str = typer.Option(
        PATTERN_ALL,
        "--pattern",
        "-p",
        help="Package pattern ('./...', '.', or a sub-path such as 'pkg/api')",
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the report to a file instead of stdout",
        dir_okay=False,
    ),
    progress: bool = typer.Option(
        False, "--progress", help="Show a progress bar during analysis"
    ),
    batch_size: int | None = typer.Option(
        None, "--batch-size", help="Number of packages to load in each batch"
    ),
    workers: int | None = typer.Option(
        None, "--workers", "-w", help="Analyzer workers (default: CPU count, max 8)"
    ),
    loader: str | None = typer.Option(
        None, "--loader", help="Package loader: 'source' or 'go-list'"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug logging"
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """📐 Analyze a Go module and report Martin's package metrics.

    [bold cyan]Examples:[/bold cyan]

    [green]Analyze the module in the current directory:[/green]
        $ go-design-metrics

    [green]Only packages under pkg/, as JSON:[/green]
        $ go-design-metrics ./myproject --pattern pkg --format json
    """
    configure_logging(verbose)

    try:
        options = AnalyzerOptions.from_env(
            pattern=pattern,
            batch_size=batch_size,
            max_workers=workers,
            loader=loader,
        )
        absolute_path = module_path.resolve()

        reporter = None
        if progress:
            reporter = ConsoleProgressReporter()
        else:
            print_info(f"Analyzing Go module at: {absolute_path}")

        metrics = ModuleAnalyzer(absolute_path, options, reporter).analyze()

        if not progress:
            print_info(f"Generating {report_format.value} report...")
        report = render_report(metrics, report_format.value)
    except GoDesignMetricsError as e:
        logger.error(f"Analysis failed: {e}")
        print_error(f"Failed to analyze module: {e}")
        raise typer.Exit(1)

    if output is not None:
        try:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(report, encoding="utf-8")
        except OSError as e:
            logger.error(f"Cannot write report to {output}: {e}")
            print_error(f"Failed to write report: {e}")
            raise typer.Exit(1) from e
        print_success(f"Report written to {output}")
    else:
        sys.stdout.write(report)


if __name__ == "__main__":
    app()
