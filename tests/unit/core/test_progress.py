"""Tests for the three-phase progress model."""

import pytest

from go_design_metrics.core.progress import (
    ANALYSIS,
    DISCOVERY,
    LOADING,
    PHASES,
    PROGRESS_TOTAL,
    MonotonicProgress,
    NullProgressReporter,
    Phase,
    ProgressState,
)


class TestPhaseTable:
    def test_phases_are_contiguous(self):
        assert DISCOVERY.start == 0
        assert DISCOVERY.end == LOADING.start
        assert LOADING.end == ANALYSIS.start
        assert ANALYSIS.end == PROGRESS_TOTAL

    def test_weights(self):
        assert [PHASES[p].span for p in Phase] == [10, 70, 20]


class TestScaling:
    @pytest.mark.parametrize(
        ("done", "total", "expected"),
        [(0, 10, 10), (5, 10, 45), (10, 10, 80), (1, 3, 33), (50, 10, 80)],
    )
    def test_loading_scale(self, done, total, expected):
        assert LOADING.scale(done, total) == expected

    def test_empty_phase_completes(self):
        assert ANALYSIS.scale(0, 0) == ANALYSIS.end

    def test_step_is_clamped(self):
        assert DISCOVERY.step(3) == 3
        assert DISCOVERY.step(50) == DISCOVERY.end

    def test_progress_state_value(self):
        state = ProgressState(Phase.ANALYSIS, current=1, total=2)
        assert state.value == 90


class TestMonotonicProgress:
    def test_never_decreases(self, recording_reporter):
        progress = MonotonicProgress(recording_reporter)

        progress.update(50, "half")
        progress.update(30, "stale")
        progress.update(70, "more")

        assert recording_reporter.values == [50, 50, 70]
        assert progress.current == 70

    def test_capped_at_total(self, recording_reporter):
        progress = MonotonicProgress(recording_reporter)

        progress.update(250, "overshoot")

        assert recording_reporter.values == [PROGRESS_TOTAL]

    def test_forwards_total_and_completion(self, recording_reporter):
        progress = MonotonicProgress(recording_reporter)

        progress.set_total(100)
        progress.complete()

        assert recording_reporter.totals == [100]
        assert recording_reporter.completed == 1


def test_null_reporter_accepts_everything():
    reporter = NullProgressReporter()
    reporter.update(5, "before total")
    reporter.set_total(100)
    reporter.update(100, "done")
    reporter.complete()
