"""JSON report of module metrics."""

from __future__ import annotations

import orjson

from ...core.models import ModuleMetrics


def render_json(metrics: ModuleMetrics) -> str:
    """Render metrics as indented JSON.

    Returns:
        JSON string: {"module": ..., "packages": [...]} with packages sorted
        by name
    """
    return orjson.dumps(metrics.to_dict(), option=orjson.OPT_INDENT_2).decode() + "\n"
