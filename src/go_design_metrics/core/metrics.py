"""Martin package-design metrics calculated from the dependency graph.

For each package P:

    Ca = packages depending on P          Ce = packages P depends on
    I  = Ce / (Ca + Ce)   (0 if isolated) A  = Na / Nc   (0 if Nc == 0)
    D  = |A + I - 1|      distance from the main sequence A + I = 1
"""

from __future__ import annotations

from .graph import DependencyGraph
from .models import ModuleMetrics, PackageMetrics, TypeCounts


def instability(ca: int, ce: int) -> float:
    """I = Ce / (Ca + Ce), 0.0 for a package with no couplings."""
    if ca + ce == 0:
        return 0.0
    return ce / (ca + ce)


def abstractness(na: int, nc: int) -> float:
    """A = Na / Nc, 0.0 for a package with no counted declarations."""
    if nc == 0:
        return 0.0
    return na / nc


def distance(abstractness_value: float, instability_value: float) -> float:
    """D = |A + I - 1|."""
    return abs(abstractness_value + instability_value - 1.0)


def display_name(package_id: str, module_name: str) -> str:
    """Readable package name relative to the module.

    Examples:
        >>> display_name("github.com/org/mod", "github.com/org/mod")
        'mod'

        >>> display_name("github.com/org/mod/pkg/analyzer", "github.com/org/mod")
        'pkg/analyzer'

        >>> display_name("example.com/x/tools/pkg [x.test]", "github.com/org/mod")
        'tools/pkg'
    """
    if module_name:
        if package_id == module_name:
            return module_name.rsplit("/", 1)[-1]
        if package_id.startswith(f"{module_name}/"):
            return package_id[len(module_name) + 1 :]

    # Loaders may annotate IDs, e.g. "path/to/pkg [path/to/pkg.test]"
    fields = package_id.split(maxsplit=1)
    package_path = fields[0] if fields else package_id

    parts = package_path.split("/")
    if len(parts) <= 2:
        return package_path
    return "/".join(parts[-2:])


def package_metrics(
    package_id: str, graph: DependencyGraph, module_name: str
) -> PackageMetrics:
    """Calculate the metrics of a single graph node."""
    ca = len(graph.dependents(package_id))
    ce = len(graph.dependencies(package_id))
    counts = graph.types.get(package_id, TypeCounts())
    na = counts.abstract_count
    nc = counts.total_type_count

    i = instability(ca, ce)
    a = abstractness(na, nc)

    return PackageMetrics(
        name=display_name(package_id, module_name),
        package_id=package_id,
        ca=ca,
        ce=ce,
        na=na,
        nc=nc,
        instability=i,
        abstractness=a,
        distance=distance(a, i),
    )


def calculate_metrics(
    graph: DependencyGraph, module_path: str, module_name: str = ""
) -> ModuleMetrics:
    """Calculate metrics for every package node of the graph.

    Args:
        graph: Aggregated dependency graph
        module_path: Module root directory (reported as the module path)
        module_name: Module path from go.mod, used for display names

    Returns:
        ModuleMetrics keyed by package display name
    """
    packages: dict[str, PackageMetrics] = {}
    for package_id in graph.nodes:
        metrics = package_metrics(package_id, graph, module_name)
        packages[metrics.name] = metrics

    return ModuleMetrics(path=module_path, module_name=module_name, packages=packages)
