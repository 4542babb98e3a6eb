"""Batch loading of discovered packages with progress reporting.

Loading packages in fixed-size batches keeps memory bounded on very large
modules and gives the progress display something to move between loader calls.
"""

from __future__ import annotations

from collections.abc import Sequence

from loguru import logger

from ..config.defaults import DEFAULT_BATCH_SIZE
from ..loaders.base import LoaderConfig, PackageLoader
from .exceptions import LoadError
from .models import PackageDescriptor, ResolvedPackage
from .progress import NullProgressReporter, Phase, ProgressReporter, ProgressState


class BatchLoader:
    """Loads packages in batches through a package loader.

    The loading phase covers 10-80 on the 0-100 progress scale. Progress is
    reported once before and once after every batch.
    """

    def __init__(
        self,
        loader: PackageLoader,
        config: LoaderConfig,
        batch_size: int = DEFAULT_BATCH_SIZE,
        progress_reporter: ProgressReporter | None = None,
        total_packages: int | None = None,
        progress_state: ProgressState | None = None,
    ) -> None:
        """Initialize the batch loader.

        Args:
            loader: Package loader resolving each batch
            config: Loader configuration (module root and name)
            batch_size: Packages per batch; non-positive values fall back to
                DEFAULT_BATCH_SIZE
            progress_reporter: Optional progress sink
            total_packages: Expected package count for progress; defaults to
                the number of descriptors passed to `load_packages`
            progress_state: Run-wide progress state to advance; a private one
                is used when omitted
        """
        self.loader = loader
        self.config = config
        self.batch_size = batch_size if batch_size > 0 else DEFAULT_BATCH_SIZE
        self.progress_reporter = progress_reporter or NullProgressReporter()
        self.total_packages = total_packages
        self.progress_state = progress_state or ProgressState(Phase.LOADING)

    def iter_batches(
        self, descriptors: Sequence[PackageDescriptor]
    ) -> list[list[str]]:
        """Split descriptors into batches of import paths."""
        return [
            [d.import_path for d in descriptors[i : i + self.batch_size]]
            for i in range(0, len(descriptors), self.batch_size)
        ]

    def load_packages(
        self, descriptors: Sequence[PackageDescriptor]
    ) -> list[ResolvedPackage]:
        """Load every descriptor, batch by batch.

        Returns:
            All resolved packages, in batch order. Packages with soft errors
            are kept (and logged as warnings).

        Raises:
            LoadError: If a batch fails; names the batch's first import path
        """
        total = self.total_packages
        if total is None or total <= 0:
            total = len(descriptors)

        state = self.progress_state
        state.phase = Phase.LOADING
        state.current = 0
        state.total = total

        packages: list[ResolvedPackage] = []
        loaded = 0

        for batch in self.iter_batches(descriptors):
            upper_bound = loaded + len(batch)
            self.progress_reporter.update(
                state.value,
                f"Loading {upper_bound} of {total} packages",
            )

            try:
                batch_packages = self.loader.load(self.config, batch)
            except Exception as e:
                raise LoadError(
                    f"failed to load packages batch starting at {batch[0]}: {e}",
                    context={"phase": "loading", "batch_start": batch[0]},
                ) from e

            for package in batch_packages:
                if package.errors:
                    logger.warning(
                        f"Package {package.id} has {len(package.errors)} error(s), "
                        f"analyzing anyway: {package.errors[0]}"
                    )

            packages.extend(batch_packages)
            loaded += len(batch_packages)
            state.current = loaded

            self.progress_reporter.update(
                state.value,
                f"Loaded {loaded} of {total} packages",
            )

        logger.debug(
            f"Loaded {len(packages)} packages in batches of {self.batch_size}"
        )
        return packages
