"""Terminal progress bar for analysis runs."""

from __future__ import annotations

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    TaskID,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)


class ConsoleProgressReporter:
    """Progress reporter rendering a rich progress bar on stderr.

    Updates before `set_total` are ignored, as are updates after `complete`.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(stderr=True)
        self._progress: Progress | None = None
        self._task: TaskID | None = None
        self._total = 0

    def set_total(self, total: int) -> None:
        self._total = total
        self._progress = Progress(
            BarColumn(bar_width=40, complete_style="green"),
            TaskProgressColumn(),
            TimeElapsedColumn(),
            TextColumn("{task.description}"),
            console=self.console,
        )
        self._progress.start()
        self._task = self._progress.add_task("Starting", total=total)

    def update(self, current: int, description: str) -> None:
        if self._progress is None or self._task is None:
            return
        self._progress.update(self._task, completed=current, description=description)

    def complete(self) -> None:
        if self._progress is None or self._task is None:
            return
        self._progress.stop()
        self._progress = None
        self._task = None
