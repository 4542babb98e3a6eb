"""Configuration for go-design-metrics."""
