"""Data models for the package metrics pipeline.

The pipeline moves values through these types, each produced exactly once:

    PackageDescriptor --(loader)--> ResolvedPackage --(worker)--> AnalysisResult
        --(aggregator)--> DependencyGraph --(calculator)--> ModuleMetrics
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..parsers.go import GoSourceFile


@dataclass(frozen=True)
class PackageDescriptor:
    """A package directory found by discovery, before it is loaded.

    Attributes:
        import_path: Full import path (e.g. "github.com/org/mod/pkg/analyzer")
        directory: Absolute filesystem path of the package directory
        has_source_files: Whether the directory holds non-test .go files
    """

    import_path: str
    directory: Path
    has_source_files: bool = True


@dataclass
class ResolvedPackage:
    """A package resolved by a package loader.

    Owned by the loader; the pipeline only reads it.

    Attributes:
        id: Package identifier (import path, possibly annotated by the loader)
        name: Package clause name ("main", "analyzer", ...)
        directory: Package directory, when the loader knows it
        go_files: Non-test Go source files of the package
        imports: Imported package paths, de-duplicated, in source order
        errors: Soft diagnostics; the package is still analyzed
        sources: Files the loader already parsed, keyed by path; analysis
            reuses them instead of parsing again
    """

    id: str
    name: str = ""
    directory: Path | None = None
    go_files: list[Path] = field(default_factory=list)
    imports: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    sources: dict[Path, GoSourceFile] = field(default_factory=dict)


@dataclass
class AnalysisResult:
    """Outcome of analyzing one package, handed from a worker to the aggregator.

    Attributes:
        package_id: Package identifier
        dependencies: Module-local packages this package imports
        abstract_count: Number of interface declarations (Na)
        total_type_count: Interfaces + structs + standalone functions (Nc)
        error: Failure that aborts the run, if any
        skipped: True for standard-library and vendored packages, which
            contribute no graph node
    """

    package_id: str
    dependencies: list[str] = field(default_factory=list)
    abstract_count: int = 0
    total_type_count: int = 0
    error: Exception | None = None
    skipped: bool = False

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass(frozen=True)
class TypeCounts:
    """Declaration counts of a single package."""

    abstract_count: int = 0
    total_type_count: int = 0


@dataclass(frozen=True)
class PackageMetrics:
    """Martin package-design metrics for a single package.

    Attributes:
        name: Display name (path relative to the module)
        package_id: Full package identifier
        ca: Afferent coupling, packages that depend on this package
        ce: Efferent coupling, packages this package depends on
        na: Number of abstract types (interfaces)
        nc: Total number of counted declarations
        instability: I = Ce / (Ca + Ce)
        abstractness: A = Na / Nc
        distance: D = |A + I - 1|
    """

    name: str
    package_id: str
    ca: int
    ce: int
    na: int
    nc: int
    instability: float
    abstractness: float
    distance: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "name": self.name,
            "ca": self.ca,
            "ce": self.ce,
            "instability": self.instability,
            "na": self.na,
            "nc": self.nc,
            "abstractness": self.abstractness,
            "distance": self.distance,
        }


@dataclass(frozen=True)
class ModuleMetrics:
    """Metrics for an entire module, keyed by package display name."""

    path: str
    module_name: str = ""
    packages: dict[str, PackageMetrics] = field(default_factory=dict)

    def sorted_packages(self) -> list[PackageMetrics]:
        """Return package metrics ordered by display name."""
        return [self.packages[name] for name in sorted(self.packages)]

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "module": self.path,
            "packages": [pkg.to_dict() for pkg in self.sorted_packages()],
        }
