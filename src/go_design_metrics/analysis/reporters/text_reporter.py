"""Plain-text table report of module metrics."""

from __future__ import annotations

import io

from rich.console import Console
from rich.table import Table

from ...core.models import ModuleMetrics

NUMERIC_COLUMNS = ("Ca", "Ce", "I", "Na", "Nc", "A", "D")


def build_metrics_table(metrics: ModuleMetrics) -> Table:
    """Build a rich table with one row per package, sorted by name."""
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("PACKAGE", no_wrap=True)
    for column in NUMERIC_COLUMNS:
        table.add_column(column, justify="right")

    for pkg in metrics.sorted_packages():
        table.add_row(
            pkg.name,
            str(pkg.ca),
            str(pkg.ce),
            f"{pkg.instability:.2f}",
            str(pkg.na),
            str(pkg.nc),
            f"{pkg.abstractness:.2f}",
            f"{pkg.distance:.2f}",
        )
    return table


def render_text(metrics: ModuleMetrics, width: int = 160) -> str:
    """Render metrics as an aligned plain-text table.

    Args:
        metrics: Module metrics to render
        width: Maximum line width of the table

    Returns:
        Report text without color codes
    """
    buffer = io.StringIO()
    console = Console(
        file=buffer,
        width=width,
        color_system=None,
        force_terminal=False,
        highlight=False,
    )
    console.print(f"MODULE: {metrics.path}")
    console.print()
    console.print(build_metrics_table(metrics))
    return buffer.getvalue()
