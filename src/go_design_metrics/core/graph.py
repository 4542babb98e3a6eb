"""Dependency graph and the single-threaded aggregator that builds it."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from loguru import logger

from .models import AnalysisResult, TypeCounts


@dataclass
class DependencyGraph:
    """Forward and reverse package dependencies plus per-package type counts.

    Invariant: B is in forward[A] exactly when A is in reverse[B]. The node
    set is the keys of `forward`; reverse may also hold dependencies that are
    not nodes themselves (module-local packages outside the analyzed pattern).
    """

    forward: dict[str, list[str]] = field(default_factory=dict)
    reverse: dict[str, list[str]] = field(default_factory=dict)
    types: dict[str, TypeCounts] = field(default_factory=dict)

    @property
    def nodes(self) -> list[str]:
        return list(self.forward)

    def add_package(
        self, package_id: str, dependencies: Iterable[str], counts: TypeCounts
    ) -> None:
        """Record a package node with its outgoing edges and type counts."""
        deps = list(dependencies)
        self.forward[package_id] = deps
        for dep in deps:
            self.reverse.setdefault(dep, []).append(package_id)
        self.types[package_id] = counts

    def dependents(self, package_id: str) -> list[str]:
        return self.reverse.get(package_id, [])

    def dependencies(self, package_id: str) -> list[str]:
        return self.forward.get(package_id, [])


class Aggregator:
    """Folds analysis results into a DependencyGraph.

    The aggregator is the only writer of the graph and runs on the consuming
    thread, so results need no locking no matter which worker produced them.
    """

    def __init__(self, graph: DependencyGraph | None = None) -> None:
        self.graph = graph or DependencyGraph()
        self.processed = 0
        self.skipped = 0

    def add(self, result: AnalysisResult) -> None:
        """Fold a single result into the graph.

        Raises:
            Exception: The result's error, if it carries one
        """
        self.processed += 1
        if result.failed:
            raise result.error

        if result.skipped:
            self.skipped += 1
            return

        self.graph.add_package(
            result.package_id,
            result.dependencies,
            TypeCounts(
                abstract_count=result.abstract_count,
                total_type_count=result.total_type_count,
            ),
        )

    def consume(
        self,
        results: Iterable[AnalysisResult],
        on_result: Callable[[int], None] | None = None,
    ) -> DependencyGraph:
        """Consume results until the stream ends.

        Args:
            results: Analysis results in any order
            on_result: Optional callback(processed) after each result

        Returns:
            The aggregated dependency graph

        Raises:
            Exception: The first error carried by a result; aggregation stops
        """
        for result in results:
            self.add(result)
            if on_result is not None:
                on_result(self.processed)

        logger.debug(
            f"Aggregated {self.processed} results: {len(self.graph.forward)} "
            f"packages, {self.skipped} skipped"
        )
        return self.graph
