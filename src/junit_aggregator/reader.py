"""
Concurrent reading and aggregation of JUnit report files.
"""

import logging
import queue
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, TextIO, Union

from .decoder import read_report
from .discovery import discover_reports
from .exceptions import ReportError
from .models import FileError, FullReport, SuiteResult, Summary
from .progress import ProgressDisplay
from .results import build_report
from .sorting import ReportSorting, sort_suites

logger = logging.getLogger(__name__)

DEFAULT_WORKERS = 5


class ErrorPolicy(Enum):
    """What to do with a report file that cannot be read or decoded."""

    FAIL = "fail"
    SKIP = "skip"


@dataclass
class FileResult:
    """Outcome of parsing one report file, sent from a worker to the aggregator."""

    path: Path
    suites: List[SuiteResult] = field(default_factory=list)
    error: Optional[BaseException] = None


class ReportReader:
    """
    Reads every report file of a project with a pool of parser threads.

    Files are discovered up front, then parsed by ``workers`` threads. Each
    worker sends one FileResult per file on a queue that is drained by the
    thread calling read(). That thread is the only one touching the aggregate
    summary and the progress display.
    """

    def __init__(
        self,
        base_dir: Union[str, Path],
        pattern: str,
        workers: int = DEFAULT_WORKERS,
        on_error: ErrorPolicy = ErrorPolicy.FAIL,
        progress: Optional[bool] = None,
        sink: Optional[TextIO] = None,
    ):
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got: {workers}")
        self.base_dir = Path(base_dir)
        self.pattern = pattern
        self.workers = workers
        self.on_error = on_error
        self.progress = ProgressDisplay(sink=sink, enabled=progress)

    def read(self) -> FullReport:
        """
        Discover, parse and aggregate all report files.

        Returns:
            FullReport; suites are in completion order, not discovery order

        Raises:
            InvalidPatternError: If the pattern is malformed
            ReportReadError: If discovery fails, or a file cannot be read
                under ErrorPolicy.FAIL
            ReportDecodeError: If a file cannot be decoded under
                ErrorPolicy.FAIL
        """
        report_files = discover_reports(self.base_dir, self.pattern)

        logger.info(
            "Parsing %d report files with %d workers", len(report_files), self.workers
        )

        results: "queue.Queue[FileResult]" = queue.Queue()
        summary = Summary.zero()
        suites: List[SuiteResult] = []
        errors: List[FileError] = []

        with ThreadPoolExecutor(
            max_workers=self.workers, thread_name_prefix="junit-parser"
        ) as executor:
            for path in report_files:
                executor.submit(self._parse, path, results)

            try:
                for _ in range(len(report_files)):
                    result = results.get()
                    if result.error is not None:
                        self._handle_error(result, errors)
                        continue

                    for suite_result in result.suites:
                        summary = summary + suite_result.summary
                        suites.append(suite_result)
                        self.progress.update(summary)
                    logger.debug(
                        "Appended %d suites from %s. Total: %d",
                        len(result.suites),
                        result.path,
                        len(suites),
                    )
            except BaseException:
                executor.shutdown(wait=False, cancel_futures=True)
                raise
            finally:
                self.progress.finish()

        logger.info(
            "Read %d suites: %d tests, %d failures, %d errors, %d skipped",
            len(suites),
            summary.tests,
            summary.failures,
            summary.errors,
            summary.skipped,
        )
        return build_report(suites, summary=summary, errors=errors)

    @staticmethod
    def _parse(path: Path, results: "queue.Queue[FileResult]") -> None:
        try:
            results.put(FileResult(path=path, suites=read_report(path)))
        except BaseException as e:
            # Every file yields exactly one result; the aggregator decides what is fatal
            results.put(FileResult(path=path, error=e))

    def _handle_error(self, result: FileResult, errors: List[FileError]) -> None:
        error = result.error
        if not isinstance(error, ReportError) or self.on_error == ErrorPolicy.FAIL:
            raise error
        logger.warning("Skipping unreadable report %s: %s", result.path, error)
        errors.append(FileError(path=result.path, error=error))


def read_report_tree(
    base_dir: Union[str, Path],
    pattern: str,
    workers: int = DEFAULT_WORKERS,
    on_error: ErrorPolicy = ErrorPolicy.FAIL,
    sort_by: Optional[ReportSorting] = None,
    progress: Optional[bool] = None,
    sink: Optional[TextIO] = None,
) -> FullReport:
    """
    Read all report files under a project directory, optionally sorted.

    Args:
        base_dir: Project directory the pattern is anchored at
        pattern: Report glob pattern
        workers: Number of parser threads
        on_error: Policy for unreadable or undecodable files
        sort_by: Order suites (and failed suites) by time when given
        progress: Force the progress display on or off; auto-detected when None
        sink: Stream for the progress display (default: stdout)

    Returns:
        FullReport with aggregated results
    """
    reader = ReportReader(
        base_dir,
        pattern,
        workers=workers,
        on_error=on_error,
        progress=progress,
        sink=sink,
    )
    report = reader.read()
    if sort_by is not None:
        report.suites = sort_suites(report.suites, sort_by)
        report.failed = sort_suites(report.failed, sort_by)
    return report
