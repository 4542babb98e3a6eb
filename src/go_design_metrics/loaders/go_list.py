"""Package loader backed by `go list -json`.

Uses the Go toolchain to resolve packages, so build constraints, cgo files and
module replacements are handled exactly as `go build` would.
"""

from __future__ import annotations

import json
import subprocess
from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import Any

from loguru import logger

from ..config.defaults import GO_BINARY
from ..core.exceptions import LoadError
from ..core.models import ResolvedPackage
from .base import LoaderConfig


def iter_json_stream(text: str) -> Iterator[dict[str, Any]]:
    """Decode the concatenated JSON objects `go list -json` prints."""
    decoder = json.JSONDecoder()
    index = 0
    length = len(text)

    while True:
        while index < length and text[index].isspace():
            index += 1
        if index >= length:
            return
        obj, index = decoder.raw_decode(text, index)
        yield obj


def package_from_go_list(entry: dict[str, Any]) -> ResolvedPackage:
    """Convert one `go list -json` object into a ResolvedPackage."""
    directory = Path(entry["Dir"]) if entry.get("Dir") else None
    go_files = [
        (directory / name) if directory else Path(name)
        for name in entry.get("GoFiles") or []
    ]

    errors = []
    if entry.get("Error"):
        errors.append(entry["Error"].get("Err", "unknown error"))
    for dep_error in entry.get("DepsErrors") or []:
        errors.append(dep_error.get("Err", "unknown dependency error"))

    return ResolvedPackage(
        id=entry.get("ImportPath", ""),
        name=entry.get("Name", ""),
        directory=directory,
        go_files=go_files,
        imports=list(entry.get("Imports") or []),
        errors=errors,
    )


class GoListPackageLoader:
    """Loads packages by running `go list -e -json` in the module root."""

    name = "go-list"

    def __init__(self, go_binary: str = GO_BINARY, timeout: float = 300.0) -> None:
        self.go_binary = go_binary
        self.timeout = timeout

    def load(
        self, config: LoaderConfig, import_paths: Sequence[str]
    ) -> list[ResolvedPackage]:
        if not import_paths:
            return []

        cmd = [self.go_binary, "list", "-e", "-json", *import_paths]
        logger.debug(f"Running {self.go_binary} list for {len(import_paths)} packages")

        try:
            result = subprocess.run(
                cmd,
                cwd=str(config.module_root),
                capture_output=True,
                text=True,
                check=False,
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise LoadError(
                f"go binary '{self.go_binary}' not found",
                context={"phase": "loading", "batch_start": import_paths[0]},
            ) from e
        except subprocess.TimeoutExpired as e:
            raise LoadError(
                f"go list timed out after {self.timeout}s",
                context={"phase": "loading", "batch_start": import_paths[0]},
            ) from e

        if result.returncode != 0:
            raise LoadError(
                f"go list exited with status {result.returncode}: "
                f"{result.stderr.strip()}",
                context={"phase": "loading", "batch_start": import_paths[0]},
            )

        try:
            return [package_from_go_list(e) for e in iter_json_stream(result.stdout)]
        except json.JSONDecodeError as e:
            raise LoadError(
                f"cannot decode go list output: {e}",
                context={"phase": "loading", "batch_start": import_paths[0]},
            ) from e
