"""Package classification: standard library, vendored and module-local paths.

There is no full module resolver behind these checks. Standard-library
detection is a heuristic with two explicit branches:

- the module name is known: a path is standard library when its first
  segment has no dot (no domain) and it is not inside the module (the
  module path itself or below it, matched per path segment);
- the module name is unknown: a path is standard library when it has no dot
  at all.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from ..config.defaults import VENDOR_PREFIX
from ..parsers.go import DeclarationKind, GoSourceFile


def is_vendored_package(package_path: str) -> bool:
    """Check if a package lives in a vendor directory.

    Examples:
        >>> is_vendored_package("vendor/golang.org/x/net/http2")
        True

        >>> is_vendored_package("github.com/org/mod/vendorlib")
        False
    """
    return package_path.startswith(VENDOR_PREFIX)


def is_within_module(package_path: str, module_name: str) -> bool:
    """Check if a path is the module itself or one of its sub-packages.

    Matching is per path segment, so a sibling module sharing a name prefix
    is not inside the module.

    Examples:
        >>> is_within_module("example.com/m/util", "example.com/m")
        True

        >>> is_within_module("example.com/mx/util", "example.com/m")
        False
    """
    return package_path == module_name or package_path.startswith(f"{module_name}/")


def _classify_with_module_name(package_path: str, module_name: str) -> bool:
    if is_within_module(package_path, module_name):
        return False
    first_segment = package_path.split("/", 1)[0]
    return "." not in first_segment


def _classify_without_module_name(package_path: str) -> bool:
    return "." not in package_path


def is_standard_library_package(package_path: str, module_name: str) -> bool:
    """Check if a package is part of the Go standard library.

    Args:
        package_path: Import path or package ID
        module_name: Module path from go.mod, or "" if unknown

    Returns:
        True if the package is treated as standard library

    Examples:
        >>> is_standard_library_package("fmt", "github.com/org/mod")
        True

        >>> is_standard_library_package("github.com/org/mod/pkg", "github.com/org/mod")
        False

        >>> is_standard_library_package("net/http", "")
        True
    """
    if module_name:
        return _classify_with_module_name(package_path, module_name)
    return _classify_without_module_name(package_path)


def is_excluded_package(package_path: str, module_name: str) -> bool:
    """Check if a package never takes part in the dependency graph."""
    return is_standard_library_package(
        package_path, module_name
    ) or is_vendored_package(package_path)


def is_module_local(package_path: str, module_name: str) -> bool:
    """Check if an import refers to a package of the analyzed module.

    External modules (e.g. "other.org/ext") are neither standard library nor
    module-local; like standard library packages they are left out of the
    graph. Without a module name every non-excluded path counts as local.
    """
    if is_excluded_package(package_path, module_name):
        return False
    if module_name:
        return is_within_module(package_path, module_name)
    return True


@dataclass(frozen=True)
class DeclarationCounts:
    """Counted top-level declarations of a package."""

    interfaces: int = 0
    structs: int = 0
    functions: int = 0
    ignored: int = 0

    @property
    def abstract_count(self) -> int:
        return self.interfaces

    @property
    def total_type_count(self) -> int:
        """Interfaces + structs + standalone functions.

        Methods, type aliases and other type definitions are not counted.
        """
        return self.interfaces + self.structs + self.functions


def count_declarations(files: Iterable[GoSourceFile]) -> DeclarationCounts:
    """Count abstract and concrete declarations across a package's files."""
    interfaces = structs = functions = ignored = 0

    for source in files:
        for declaration in source.declarations:
            if declaration.kind is DeclarationKind.INTERFACE:
                interfaces += 1
            elif declaration.kind is DeclarationKind.STRUCT:
                structs += 1
            elif declaration.kind is DeclarationKind.FUNCTION:
                functions += 1
            else:
                ignored += 1

    return DeclarationCounts(
        interfaces=interfaces, structs=structs, functions=functions, ignored=ignored
    )
