"""Source-tree package loader.

Resolves packages straight from the module's files with the tree-sitter Go
parser. It needs no Go toolchain, which makes it the default loader.
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from pathlib import Path

from loguru import logger

from ..config.defaults import GO_FILE_SUFFIX, GO_TEST_FILE_SUFFIX
from ..core.exceptions import LoadError, ParsingError
from ..core.models import ResolvedPackage
from ..parsers.go import GoSourceFile, get_thread_parser
from .base import LoaderConfig


class SourcePackageLoader:
    """Loads packages by reading their Go files from disk."""

    name = "source"

    def load(
        self, config: LoaderConfig, import_paths: Sequence[str]
    ) -> list[ResolvedPackage]:
        return [self._load_package(config, path) for path in import_paths]

    def package_directory(self, config: LoaderConfig, import_path: str) -> Path:
        """Map an import path of the module onto its directory.

        Raises:
            LoadError: If the import path is outside the module
        """
        root = Path(config.module_root)
        module_name = config.module_name

        if not module_name:
            return root if import_path in ("", ".") else root / import_path
        if import_path == module_name:
            return root
        if import_path.startswith(f"{module_name}/"):
            return root / import_path[len(module_name) + 1 :]

        raise LoadError(
            f"package {import_path} is not part of module {module_name}",
            context={"phase": "loading", "package": import_path},
        )

    def _load_package(self, config: LoaderConfig, import_path: str) -> ResolvedPackage:
        directory = self.package_directory(config, import_path)

        try:
            entries = sorted(
                entry.name
                for entry in os.scandir(directory)
                if entry.is_file()
                and entry.name.endswith(GO_FILE_SUFFIX)
                and not entry.name.endswith(GO_TEST_FILE_SUFFIX)
            )
        except OSError as e:
            raise LoadError(
                f"cannot read package directory {directory}: {e}",
                context={"phase": "loading", "package": import_path},
            ) from e

        package = ResolvedPackage(
            id=import_path,
            directory=directory,
            go_files=[directory / name for name in entries],
        )
        if not package.go_files:
            package.errors.append(f"no non-test Go files in {directory}")
            return package

        parser = get_thread_parser()
        sources: list[GoSourceFile] = []
        for file_path in package.go_files:
            try:
                source = parser.parse_file(file_path, strict=False)
            except ParsingError as e:
                package.errors.append(str(e))
                continue

            if source.has_syntax_error:
                package.errors.append(
                    f"{file_path}:{source.error_line}: syntax error"
                )
            sources.append(source)
            package.sources[file_path] = source

            for imported in source.imports:
                if imported not in package.imports:
                    package.imports.append(imported)

        names = {s.package_name for s in sources if s.package_name}
        if len(names) > 1:
            package.errors.append(
                f"found packages {', '.join(sorted(names))} in {directory}"
            )
        package.name = next((s.package_name for s in sources if s.package_name), "")

        logger.trace(
            f"Loaded {import_path}: {len(package.go_files)} files, "
            f"{len(package.imports)} imports"
        )
        return package
