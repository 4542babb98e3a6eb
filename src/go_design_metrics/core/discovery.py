"""Package discovery: finding Go package directories without loading them.

Discovery is the first phase of an analysis run. It only looks at the file
tree, so it is fast and gives the later phases a package count to report
progress against.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path

from loguru import logger

from ..config.defaults import (
    DEFAULT_IGNORE_DIRS,
    DISCOVERY_PACKAGES_PER_STEP,
    GO_FILE_SUFFIX,
    GO_TEST_FILE_SUFFIX,
    PATTERN_ALL,
    PATTERN_SELF,
)
from .classifier import is_within_module
from .exceptions import DiscoveryError
from .models import PackageDescriptor
from .progress import DISCOVERY


def normalize_pattern(pattern: str, module_name: str = "") -> str:
    """Normalize a package pattern to "", "." or a bare sub-path.

    "./..." and "" both mean "every package". For sub-paths a leading "./"
    and a trailing "/..." are dropped, and so is the module name when the
    pattern is a full import path: "./pkg/..." and "<module>/pkg/..." both
    become "pkg".
    """
    pattern = pattern.strip()
    if pattern in ("", PATTERN_ALL):
        return ""
    if pattern == PATTERN_SELF:
        return PATTERN_SELF

    if pattern.startswith("./"):
        pattern = pattern[2:]
    if pattern.endswith("/..."):
        pattern = pattern[: -len("/...")]
    if module_name:
        if pattern in (module_name, f"{module_name}/..."):
            return ""
        if pattern.startswith(f"{module_name}/"):
            pattern = pattern[len(module_name) + 1 :]
    return pattern.strip("/")


def _join_import_path(module_name: str, relative: str) -> str:
    if not module_name:
        return relative
    if not relative or relative == ".":
        return module_name
    return f"{module_name}/{relative}"


def matches_pattern(import_path: str, module_name: str, pattern: str) -> bool:
    """Check if an import path matches a package pattern.

    Args:
        import_path: Full import path of a discovered package
        module_name: Module path from go.mod
        pattern: "", "./..." (everything), "." (module root only) or a sub-path;
            sub-paths match whole path segments

    Examples:
        >>> matches_pattern("github.com/org/mod/pkg", "github.com/org/mod", "./...")
        True

        >>> matches_pattern("github.com/org/mod/pkg", "github.com/org/mod", ".")
        False
    """
    normalized = normalize_pattern(pattern, module_name)

    if normalized == "":
        return not module_name or is_within_module(import_path, module_name)

    if normalized == PATTERN_SELF:
        return import_path == _join_import_path(module_name, PATTERN_SELF)

    return is_within_module(import_path, _join_import_path(module_name, normalized))


def has_go_source_files(directory: Path, filenames: list[str] | None = None) -> bool:
    """Check if a directory holds at least one non-test .go file."""
    if filenames is None:
        try:
            filenames = [e.name for e in os.scandir(directory) if e.is_file()]
        except OSError:
            return False

    return any(
        name.endswith(GO_FILE_SUFFIX) and not name.endswith(GO_TEST_FILE_SUFFIX)
        for name in filenames
    )


def should_skip_directory(name: str) -> bool:
    """Check if discovery must not descend into a directory."""
    return name in DEFAULT_IGNORE_DIRS or name.startswith(".")


def discover_packages(
    module_root: Path,
    module_name: str,
    pattern: str = PATTERN_ALL,
    progress_callback: Callable[[int], None] | None = None,
) -> list[PackageDescriptor]:
    """Walk the module tree and find every Go package matching a pattern.

    Progress is reported through `progress_callback(found)`, called with the
    cumulative number of matched packages. It fires once for every
    DISCOVERY_PACKAGES_PER_STEP matches and stops once the discovery phase's
    range is used up.

    Args:
        module_root: Module root directory
        module_name: Module path from go.mod ("" if unknown)
        pattern: Package pattern ("./...", ".", or a sub-path)
        progress_callback: Optional callback(found)

    Returns:
        Package descriptors in walk order (directory names sorted)

    Raises:
        DiscoveryError: If the search root does not exist or is not a directory
    """
    module_root = Path(module_root)
    normalized = normalize_pattern(pattern, module_name)

    search_root = module_root
    if normalized not in ("", PATTERN_SELF):
        search_root = module_root / normalized

    if not search_root.is_dir():
        raise DiscoveryError(
            f"failed to find packages: search root {search_root} is not a directory",
            context={"phase": "discovery", "path": str(search_root)},
        )

    packages: list[PackageDescriptor] = []
    last_step = 0

    def _on_walk_error(error: OSError) -> None:
        if Path(error.filename or "") == search_root:
            raise DiscoveryError(
                f"failed to find packages: cannot read {search_root}: {error}",
                context={"phase": "discovery", "path": str(search_root)},
            ) from error
        logger.debug(f"Skipping unreadable directory {error.filename}: {error}")

    for root, dirs, files in os.walk(search_root, onerror=_on_walk_error):
        # Prune in place so os.walk never descends into ignored directories
        dirs[:] = sorted(d for d in dirs if not should_skip_directory(d))

        root_path = Path(root)
        if not has_go_source_files(root_path, files):
            continue

        relative = root_path.relative_to(module_root).as_posix()
        import_path = _join_import_path(module_name, relative)

        if not matches_pattern(import_path, module_name, pattern):
            continue

        packages.append(
            PackageDescriptor(
                import_path=import_path, directory=root_path, has_source_files=True
            )
        )

        step = min(len(packages) // DISCOVERY_PACKAGES_PER_STEP, DISCOVERY.span)
        if step > last_step and progress_callback is not None:
            progress_callback(len(packages))
            last_step = step

    logger.debug(
        f"Discovered {len(packages)} packages under {search_root} (pattern '{pattern}')"
    )
    return packages
