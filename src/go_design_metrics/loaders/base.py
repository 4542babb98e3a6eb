"""Package loader protocol.

A package loader turns import paths into resolved packages (files, imports,
diagnostics). The pipeline calls it once per batch and treats the call as
blocking.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from ..core.models import ResolvedPackage


@dataclass(frozen=True)
class LoaderConfig:
    """Where and for which module packages are loaded."""

    module_root: Path
    module_name: str = ""


class PackageLoader(Protocol):
    """Resolves batches of import paths into packages."""

    name: str

    def load(
        self, config: LoaderConfig, import_paths: Sequence[str]
    ) -> list[ResolvedPackage]:
        """Resolve a batch of import paths.

        Packages with problems inside them (syntax errors, mixed package
        clauses, ...) are returned with `ResolvedPackage.errors` set.

        Raises:
            LoadError: If the batch as a whole cannot be resolved
        """
        ...
