"""Three-phase progress model for a module analysis run.

All progress is expressed on a fixed 0-100 scale split into phases:

    discovery  0-10   (walking the module tree)
    loading   10-80   (resolving packages in batches)
    analysis  80-100  (parsing and classifying packages)

The phase table below is the only place the weighting lives. Components ask
their phase to scale a done/total ratio and never do the arithmetic inline.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol

PROGRESS_TOTAL = 100


class Phase(StrEnum):
    DISCOVERY = "discovery"
    LOADING = "loading"
    ANALYSIS = "analysis"


@dataclass(frozen=True)
class ProgressPhase:
    """Boundaries of one phase on the 0-100 scale."""

    phase: Phase
    start: int
    end: int

    @property
    def span(self) -> int:
        return self.end - self.start

    def clamp(self, value: int) -> int:
        """Clamp a value into this phase's range."""
        return max(self.start, min(value, self.end))

    def scale(self, done: int, total: int) -> int:
        """Map `done` out of `total` work items onto this phase's range.

        Args:
            done: Completed work items
            total: Expected work items (non-positive means "nothing to do")

        Returns:
            start + done * span // total, clamped to [start, end]
        """
        if total <= 0:
            return self.end
        return self.clamp(self.start + done * self.span // total)

    def step(self, steps: int) -> int:
        """Advance `steps` whole points from the phase start, clamped."""
        return self.clamp(self.start + steps)


PHASES: dict[Phase, ProgressPhase] = {
    Phase.DISCOVERY: ProgressPhase(Phase.DISCOVERY, 0, 10),
    Phase.LOADING: ProgressPhase(Phase.LOADING, 10, 80),
    Phase.ANALYSIS: ProgressPhase(Phase.ANALYSIS, 80, PROGRESS_TOTAL),
}

DISCOVERY = PHASES[Phase.DISCOVERY]
LOADING = PHASES[Phase.LOADING]
ANALYSIS = PHASES[Phase.ANALYSIS]


@dataclass
class ProgressState:
    """Where a single analysis run currently is."""

    phase: Phase
    current: int = 0
    total: int = 0

    @property
    def value(self) -> int:
        return PHASES[self.phase].scale(self.current, self.total)


class ProgressReporter(Protocol):
    """Sink for progress updates on the fixed 0-100 scale.

    Implementations only render; all values are computed by the pipeline.
    `update` may be called before `set_total` and must then be a no-op.
    """

    def set_total(self, total: int) -> None: ...

    def update(self, current: int, description: str) -> None: ...

    def complete(self) -> None: ...


class NullProgressReporter:
    """Progress reporter that discards every update."""

    def set_total(self, total: int) -> None:
        pass

    def update(self, current: int, description: str) -> None:
        pass

    def complete(self) -> None:
        pass


class MonotonicProgress:
    """Wraps a reporter so reported values never go backwards.

    The wrapped sink sees each value at most as high as 100 and never lower
    than the previous one, whatever order the phases report in.
    """

    def __init__(self, reporter: ProgressReporter) -> None:
        self._reporter = reporter
        self._current = 0

    @property
    def current(self) -> int:
        return self._current

    def set_total(self, total: int) -> None:
        self._reporter.set_total(total)

    def update(self, current: int, description: str) -> None:
        self._current = max(self._current, min(current, PROGRESS_TOTAL))
        self._reporter.update(self._current, description)

    def complete(self) -> None:
        self._reporter.complete()
