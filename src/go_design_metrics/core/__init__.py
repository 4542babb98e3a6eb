"""Core analysis pipeline for go-design-metrics."""

from .exceptions import (
    AnalysisError,
    ConfigError,
    DiscoveryError,
    GDMError,
    GoDesignMetricsError,
    LoadError,
    ParsingError,
)

__all__ = [
    "AnalysisError",
    "ConfigError",
    "DiscoveryError",
    "GDMError",
    "GoDesignMetricsError",
    "LoadError",
    "ParsingError",
]
