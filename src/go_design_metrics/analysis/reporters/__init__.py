"""Reporters for module metrics."""

from enum import StrEnum

from ...core.exceptions import ConfigError
from ...core.models import ModuleMetrics
from .csv_reporter import render_csv
from .json_reporter import render_json
from .progress import ConsoleProgressReporter
from .text_reporter import render_text


class ReportFormat(StrEnum):
    TEXT = "text"
    CSV = "csv"
    JSON = "json"


_RENDERERS = {
    ReportFormat.TEXT: render_text,
    ReportFormat.CSV: render_csv,
    ReportFormat.JSON: render_json,
}


def render_report(metrics: ModuleMetrics, report_format: str) -> str:
    """Render metrics in the given format.

    Raises:
        ConfigError: If the format is not supported
    """
    try:
        renderer = _RENDERERS[ReportFormat(report_format)]
    except ValueError:
        raise ConfigError(
            f"unsupported format: {report_format}",
            context={"format": report_format},
        ) from None
    return renderer(metrics)


__all__ = [
    "ConsoleProgressReporter",
    "ReportFormat",
    "render_csv",
    "render_json",
    "render_report",
    "render_text",
]
