"""CSV report of module metrics."""

from __future__ import annotations

import csv
import io

from ...core.models import ModuleMetrics

CSV_HEADER = ["Package", "Ca", "Ce", "I", "Na", "Nc", "A", "D"]


def render_csv(metrics: ModuleMetrics) -> str:
    """Render metrics as CSV, one row per package sorted by name."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)

    for pkg in metrics.sorted_packages():
        writer.writerow(
            [
                pkg.name,
                pkg.ca,
                pkg.ce,
                f"{pkg.instability:.2f}",
                pkg.na,
                pkg.nc,
                f"{pkg.abstractness:.2f}",
                f"{pkg.distance:.2f}",
            ]
        )
    return buffer.getvalue()
