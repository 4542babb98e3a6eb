"""Allow `python -m go_design_metrics`."""

from .cli.main import app

app(prog_name="go-design-metrics")
