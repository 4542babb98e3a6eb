"""Shared fixtures: small Go modules written to a temporary directory."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from textwrap import dedent

import pytest

MODULE_NAME = "github.com/org/mod"

SCENARIO_FILES = {
    "a/a.go": """
        package a

        // Reader is the only abstraction of package a.
        type Reader interface {
            Read() string
        }

        func New() int {
            return 1
        }
    """,
    "b/b.go": """
        package b

        import (
            "fmt"

            "github.com/org/mod/a"
        )

        type Impl struct {
            r a.Reader
        }

        func (i *Impl) Print() {
            fmt.Println(i.r.Read())
        }
    """,
}


def write_go_module(
    root: Path, module_name: str | None, files: dict[str, str]
) -> Path:
    """Write a Go module (go.mod plus source files) under `root`.

    Args:
        root: Module root directory, created if missing
        module_name: Module path for go.mod, or None to omit go.mod
        files: Relative file path -> source text (dedented)
    """
    root.mkdir(parents=True, exist_ok=True)
    if module_name is not None:
        (root / "go.mod").write_text(f"module {module_name}\n\ngo 1.21\n")

    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(dedent(content).lstrip())
    return root


@pytest.fixture
def go_module_factory(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing Go modules into tmp_path."""

    def _factory(
        files: dict[str, str],
        module_name: str | None = MODULE_NAME,
        name: str = "module",
    ) -> Path:
        return write_go_module(tmp_path / name, module_name, files)

    return _factory


@pytest.fixture
def scenario_module(go_module_factory) -> Path:
    """Module where b imports a; a has one interface and one function."""
    return go_module_factory(SCENARIO_FILES)


class RecordingProgressReporter:
    """Progress reporter that records every call for assertions."""

    def __init__(self) -> None:
        self.totals: list[int] = []
        self.updates: list[tuple[int, str]] = []
        self.completed = 0

    @property
    def values(self) -> list[int]:
        return [value for value, _ in self.updates]

    def set_total(self, total: int) -> None:
        self.totals.append(total)

    def update(self, current: int, description: str) -> None:
        self.updates.append((current, description))

    def complete(self) -> None:
        self.completed += 1


@pytest.fixture
def recording_reporter() -> RecordingProgressReporter:
    return RecordingProgressReporter()
