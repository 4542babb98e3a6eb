"""Per-package analysis and the bounded worker pool that runs it.

Workers never touch shared state. Each one turns a ResolvedPackage into an
AnalysisResult and hands it back; the aggregator owns everything built from
the results.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from concurrent.futures import Future, ThreadPoolExecutor, as_completed

from loguru import logger

from ..config.defaults import GO_TEST_FILE_SUFFIX
from ..config.settings import resolve_worker_count
from ..parsers.go import GoSourceFile, GoSourceParser, get_thread_parser
from .classifier import count_declarations, is_excluded_package, is_module_local
from .exceptions import ParsingError
from .models import AnalysisResult, ResolvedPackage


def analyze_package(
    package: ResolvedPackage,
    module_name: str,
    parser: GoSourceParser | None = None,
) -> AnalysisResult:
    """Analyze a single package.

    Standard-library and vendored packages yield a skipped result. Otherwise
    the module-local imports become the dependency list and every non-test
    file is parsed to count declarations, reusing files the loader already
    parsed. A file that fails to parse fails the whole package.

    Args:
        package: Resolved package
        module_name: Module path from go.mod ("" if unknown)
        parser: Go parser to use (defaults to the calling thread's parser)

    Returns:
        The package's AnalysisResult; `error` is set on parse failure
    """
    result = AnalysisResult(package_id=package.id)

    if is_excluded_package(package.id, module_name):
        result.skipped = True
        return result

    result.dependencies = [
        imported
        for imported in package.imports
        if is_module_local(imported, module_name)
    ]

    parser = parser or get_thread_parser()
    sources: list[GoSourceFile] = []
    for file_path in package.go_files:
        if file_path.name.endswith(GO_TEST_FILE_SUFFIX):
            continue
        try:
            source = package.sources.get(file_path)
            if source is None:
                source = parser.parse_file(file_path)
            else:
                source.raise_for_syntax_error()
            sources.append(source)
        except ParsingError as e:
            e.context.setdefault("package", package.id)
            result.error = e
            return result

    counts = count_declarations(sources)
    result.abstract_count = counts.abstract_count
    result.total_type_count = counts.total_type_count
    return result


class AnalyzerPool:
    """Bounded pool of analysis workers.

    Example:
        pool = AnalyzerPool(module_name="github.com/org/mod", max_workers=4)
        results = pool.imap(packages)
        try:
            graph = Aggregator().consume(results)
        finally:
            results.close()
    """

    def __init__(self, module_name: str, max_workers: int | None = None) -> None:
        self.module_name = module_name
        self.max_workers = resolve_worker_count(max_workers)

    def imap(self, packages: Sequence[ResolvedPackage]) -> Iterator[AnalysisResult]:
        """Analyze packages concurrently, yielding results as they complete.

        Closing the generator early (or an exception in the consumer) cancels
        every package that has not started yet; running ones finish first.
        """
        if not packages:
            return

        workers = min(self.max_workers, len(packages))
        logger.debug(f"Analyzing {len(packages)} packages with {workers} workers")

        executor = ThreadPoolExecutor(
            max_workers=workers, thread_name_prefix="gdm-analyzer"
        )
        futures: list[Future[AnalysisResult]] = []
        try:
            futures = [
                executor.submit(analyze_package, package, self.module_name)
                for package in packages
            ]
            for future in as_completed(futures):
                yield future.result()
        finally:
            for future in futures:
                future.cancel()
            executor.shutdown(wait=True, cancel_futures=True)
