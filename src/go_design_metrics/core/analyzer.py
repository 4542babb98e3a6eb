"""Module analysis: discovery, batch loading, concurrent analysis, metrics."""

from __future__ import annotations

from pathlib import Path

from loguru import logger

from ..config.defaults import DISCOVERY_PACKAGES_PER_STEP
from ..config.settings import AnalyzerOptions
from ..loaders import LoaderConfig, PackageLoader, get_package_loader
from .batch_loader import BatchLoader
from .discovery import discover_packages
from .graph import Aggregator, DependencyGraph
from .metrics import calculate_metrics
from .models import ModuleMetrics, PackageDescriptor, ResolvedPackage
from .module_info import read_module_name
from .progress import (
    DISCOVERY,
    PROGRESS_TOTAL,
    MonotonicProgress,
    NullProgressReporter,
    Phase,
    ProgressReporter,
    ProgressState,
)
from .worker import AnalyzerPool


class ModuleAnalyzer:
    """Runs the full metrics analysis for one Go module.

    A ModuleAnalyzer is meant for a single run: its ProgressState, the
    progress it reports and the graph it builds belong to that run only.
    """

    def __init__(
        self,
        module_path: Path,
        options: AnalyzerOptions | None = None,
        progress_reporter: ProgressReporter | None = None,
        loader: PackageLoader | None = None,
    ) -> None:
        """Initialize the analyzer.

        Args:
            module_path: Module root directory
            options: Analyzer options (pattern, batch size, workers, loader)
            progress_reporter: Optional progress sink
            loader: Package loader; defaults to the one named in options
        """
        self.module_path = Path(module_path)
        self.options = options or AnalyzerOptions()
        self.module_name = read_module_name(self.module_path)
        self.loader = loader or get_package_loader(self.options.loader)
        self.progress = MonotonicProgress(progress_reporter or NullProgressReporter())
        self.state = ProgressState(Phase.DISCOVERY)

    def _enter_phase(self, phase: Phase, total: int) -> None:
        self.state.phase = phase
        self.state.current = 0
        self.state.total = total

    def _report(self, description: str) -> None:
        self.progress.update(self.state.value, description)

    def analyze(self) -> ModuleMetrics:
        """Perform the full analysis.

        Returns:
            Metrics for every module-local package matching the pattern

        Raises:
            GoDesignMetricsError: On the first fatal error of any phase; no
                partial metrics are returned
        """
        if not self.module_name:
            logger.warning(
                f"Could not determine module name for {self.module_path}; "
                "falling back to dot-based standard library detection"
            )

        self.progress.set_total(PROGRESS_TOTAL)
        try:
            descriptors = self.find_packages()
            packages = self.load_packages(descriptors)
            graph = self.parse_packages(packages)

            self._report("Calculating metrics")
            metrics = calculate_metrics(graph, str(self.module_path), self.module_name)
        finally:
            self.progress.complete()

        logger.debug(
            f"Calculated metrics for {len(metrics.packages)} packages "
            f"in {self.module_name or self.module_path}"
        )
        return metrics

    def find_packages(self) -> list[PackageDescriptor]:
        """Discovery phase (0-10)."""
        self._enter_phase(
            Phase.DISCOVERY, DISCOVERY.span * DISCOVERY_PACKAGES_PER_STEP
        )
        self._report("Discovering packages")

        def _on_found(found: int) -> None:
            self.state.current = found
            self._report(f"Discovered {found} packages")

        descriptors = discover_packages(
            self.module_path, self.module_name, self.options.pattern, _on_found
        )
        self.state.current = self.state.total
        self._report(f"Found {len(descriptors)} packages")
        return descriptors

    def load_packages(
        self, descriptors: list[PackageDescriptor]
    ) -> list[ResolvedPackage]:
        """Loading phase (10-80)."""
        self._enter_phase(Phase.LOADING, len(descriptors))
        batch_loader = BatchLoader(
            loader=self.loader,
            config=LoaderConfig(
                module_root=self.module_path, module_name=self.module_name
            ),
            batch_size=self.options.batch_size,
            progress_reporter=self.progress,
            total_packages=len(descriptors),
            progress_state=self.state,
        )
        return batch_loader.load_packages(descriptors)

    def parse_packages(self, packages: list[ResolvedPackage]) -> DependencyGraph:
        """Analysis phase (80-100): concurrent workers, single aggregator."""
        total = len(packages)
        self._enter_phase(Phase.ANALYSIS, total)
        self._report(f"Analyzing {total} packages")

        def _on_result(processed: int) -> None:
            self.state.current = processed
            self._report(f"Analyzed {processed} of {total} packages")

        pool = AnalyzerPool(self.module_name, self.options.workers)
        aggregator = Aggregator()
        results = pool.imap(packages)
        try:
            return aggregator.consume(results, on_result=_on_result)
        finally:
            results.close()


def analyze_module(
    module_path: Path,
    pattern: str | None = None,
    options: AnalyzerOptions | None = None,
    progress_reporter: ProgressReporter | None = None,
) -> ModuleMetrics:
    """Analyze a Go module and return its package metrics.

    Args:
        module_path: Module root directory
        pattern: Package pattern, overriding `options.pattern` when given
        options: Analyzer options
        progress_reporter: Optional progress sink
    """
    options = options or AnalyzerOptions()
    if pattern is not None:
        options = options.model_copy(update={"pattern": pattern})

    analyzer = ModuleAnalyzer(module_path, options, progress_reporter)
    return analyzer.analyze()
