"""Command-line interface for go-design-metrics."""
