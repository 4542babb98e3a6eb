"""go-design-metrics - Martin package-design metrics for Go modules."""

__version__ = "0.3.0"

from .core.exceptions import GoDesignMetricsError

__all__ = ["GoDesignMetricsError", "__version__"]
