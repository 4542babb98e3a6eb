"""Tests for batch loading with progress reporting."""

from __future__ import annotations

from pathlib import Path

import pytest
from loguru import logger

from go_design_metrics.core.batch_loader import BatchLoader
from go_design_metrics.core.exceptions import LoadError
from go_design_metrics.core.models import PackageDescriptor, ResolvedPackage
from go_design_metrics.core.progress import Phase, ProgressState
from go_design_metrics.loaders.base import LoaderConfig

CONFIG = LoaderConfig(module_root=Path("/tmp/mod"), module_name="example.com/mod")


class FakeLoader:
    """Loader resolving every path to an empty package and recording calls."""

    name = "fake"

    def __init__(self, fail_on_call: int | None = None, errors=None) -> None:
        self.calls: list[list[str]] = []
        self.fail_on_call = fail_on_call
        self.errors = errors or {}

    def load(self, config, import_paths):
        self.calls.append(list(import_paths))
        if self.fail_on_call is not None and len(self.calls) == self.fail_on_call:
            raise RuntimeError("loader exploded")
        return [
            ResolvedPackage(id=path, errors=list(self.errors.get(path, [])))
            for path in import_paths
        ]


def _descriptors(count: int) -> list[PackageDescriptor]:
    return [
        PackageDescriptor(
            import_path=f"example.com/mod/p{i}", directory=Path(f"/tmp/mod/p{i}")
        )
        for i in range(count)
    ]


class TestBatching:
    def test_batches_of_fixed_size(self):
        loader = FakeLoader()
        batch_loader = BatchLoader(loader, CONFIG, batch_size=2)

        packages = batch_loader.load_packages(_descriptors(5))

        assert [len(call) for call in loader.calls] == [2, 2, 1]
        assert [p.id for p in packages] == [d.import_path for d in _descriptors(5)]

    @pytest.mark.parametrize("batch_size", [0, -5])
    def test_non_positive_batch_size_uses_default(self, batch_size):
        loader = FakeLoader()
        batch_loader = BatchLoader(loader, CONFIG, batch_size=batch_size)

        packages = batch_loader.load_packages(_descriptors(7))

        assert batch_loader.batch_size == 100
        assert len(loader.calls) == 1
        assert len(packages) == 7

    def test_every_descriptor_loaded_exactly_once(self):
        loader = FakeLoader()
        descriptors = _descriptors(23)

        BatchLoader(loader, CONFIG, batch_size=4).load_packages(descriptors)

        loaded = [path for call in loader.calls for path in call]
        assert sorted(loaded) == sorted(d.import_path for d in descriptors)
        assert len(loaded) == len(set(loaded))

    def test_no_descriptors(self):
        loader = FakeLoader()

        assert BatchLoader(loader, CONFIG).load_packages([]) == []
        assert loader.calls == []


class TestProgress:
    def test_progress_before_and_after_each_batch(self, recording_reporter):
        batch_loader = BatchLoader(
            FakeLoader(), CONFIG, batch_size=2, progress_reporter=recording_reporter
        )

        batch_loader.load_packages(_descriptors(5))

        assert recording_reporter.values == [10, 38, 38, 66, 66, 80]
        descriptions = [d for _, d in recording_reporter.updates]
        assert descriptions[0] == "Loading 2 of 5 packages"
        assert descriptions[-1] == "Loaded 5 of 5 packages"

    def test_progress_stays_in_loading_range(self, recording_reporter):
        BatchLoader(
            FakeLoader(), CONFIG, batch_size=3, progress_reporter=recording_reporter
        ).load_packages(_descriptors(10))

        values = recording_reporter.values
        assert values == sorted(values)
        assert all(10 <= v <= 80 for v in values)
        assert values[-1] == 80

    def test_total_packages_hint(self, recording_reporter):
        BatchLoader(
            FakeLoader(),
            CONFIG,
            batch_size=10,
            progress_reporter=recording_reporter,
            total_packages=20,
        ).load_packages(_descriptors(10))

        assert recording_reporter.values == [10, 45]

    def test_shared_progress_state(self, recording_reporter):
        state = ProgressState(Phase.DISCOVERY, current=30, total=30)
        batch_loader = BatchLoader(
            FakeLoader(),
            CONFIG,
            batch_size=2,
            progress_reporter=recording_reporter,
            progress_state=state,
        )

        batch_loader.load_packages(_descriptors(5))

        assert state.phase == Phase.LOADING
        assert state.current == state.total == 5
        assert recording_reporter.values[-1] == state.value == 80


class TestFailures:
    def test_batch_failure_names_first_path(self):
        loader = FakeLoader(fail_on_call=2)
        descriptors = _descriptors(5)

        with pytest.raises(LoadError) as exc_info:
            BatchLoader(loader, CONFIG, batch_size=2).load_packages(descriptors)

        error = exc_info.value
        assert "failed to load packages batch starting at example.com/mod/p2" in str(
            error
        )
        assert error.context == {"phase": "loading", "batch_start": "example.com/mod/p2"}
        assert isinstance(error.__cause__, RuntimeError)

    def test_soft_errors_are_kept_and_logged(self):
        loader = FakeLoader(errors={"example.com/mod/p1": ["p1.go:3: syntax error"]})
        messages: list[str] = []
        handler_id = logger.add(messages.append, level="WARNING", format="{message}")
        try:
            packages = BatchLoader(loader, CONFIG).load_packages(_descriptors(3))
        finally:
            logger.remove(handler_id)

        assert len(packages) == 3
        assert packages[1].errors == ["p1.go:3: syntax error"]
        assert any("example.com/mod/p1" in m for m in messages)
