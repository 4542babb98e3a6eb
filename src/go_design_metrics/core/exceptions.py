"""Typed exception hierarchy for go-design-metrics.

Hierarchy
---------
GoDesignMetricsError (base)
├── DiscoveryError   – the search root cannot be walked
├── LoadError        – a package batch failed to resolve
├── AnalysisError    – per-package analysis failures
│   └── ParsingError – a Go source file failed to parse
└── ConfigError      – invalid options / unknown loader

Every error raised by the pipeline carries ``context["phase"]`` plus the path
that identifies the failure (``path``, ``batch_start``, ``package`` or
``file``) so a failed run can be diagnosed without re-running it.
"""

from typing import Any


class GoDesignMetricsError(Exception):
    """Base exception for go-design-metrics."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.context = context or {}

    @property
    def phase(self) -> str | None:
        """Pipeline phase the error was raised in, if known."""
        return self.context.get("phase")


# Convenience alias
GDMError = GoDesignMetricsError


class DiscoveryError(GoDesignMetricsError):
    """Package discovery failed (unreadable or missing search root)."""

    pass


class LoadError(GoDesignMetricsError):
    """A batch of packages could not be resolved by the package loader."""

    pass


class AnalysisError(GoDesignMetricsError):
    """Analysis of a resolved package failed."""

    pass


class ParsingError(AnalysisError):
    """Go source parsing errors (subset of analysis errors)."""

    pass


class ConfigError(GoDesignMetricsError):
    """Configuration / validation errors."""

    pass
