"""
Summary computation, failure classification and report aggregation.
"""

from typing import Iterable, List, Optional

from .models import (
    FailedSuiteResult,
    FailedTestCase,
    FailedTestSuite,
    FileError,
    FullReport,
    Summary,
    SuiteResult,
    TestStatus,
    TestSuite,
)


def summarize(suite: TestSuite) -> Summary:
    """
    Count the outcomes of a suite's test cases.

    The time is the suite's own reported duration, which need not equal the
    sum of its test case durations.

    Args:
        suite: TestSuite to scan

    Returns:
        Summary derived from the test cases
    """
    tests = failures = errors = skipped = 0
    for case in suite.testcases:
        tests += 1
        status = case.status
        if status == TestStatus.SKIP:
            skipped += 1
        elif status == TestStatus.FAIL:
            failures += 1
        elif status == TestStatus.ERROR:
            errors += 1

    return Summary(
        time=suite.time,
        tests=tests,
        failures=failures,
        errors=errors,
        skipped=skipped,
    )


def with_summary(suite: TestSuite) -> SuiteResult:
    """Pair a suite with its derived summary."""
    return SuiteResult(suite=suite, summary=summarize(suite))


def as_failed(result: SuiteResult) -> Optional[FailedSuiteResult]:
    """
    Reduce a suite to its failing and erroring test cases.

    Args:
        result: SuiteResult to classify

    Returns:
        FailedSuiteResult carrying only the failing/erroring cases and the
        suite's unmodified summary, or None if the suite is clean
    """
    failed_cases = tuple(
        FailedTestCase.from_case(case)
        for case in result.suite.testcases
        if not case.is_successful
    )
    if not failed_cases:
        return None

    suite = result.suite
    return FailedSuiteResult(
        suite=FailedTestSuite(
            name=suite.name,
            time=suite.time,
            timestamp=suite.timestamp,
            failed_testcases=failed_cases,
        ),
        summary=result.summary,
    )


def merge_summaries(summaries: Iterable[Summary]) -> Summary:
    """Add summaries together, starting from an empty one."""
    total = Summary.zero()
    for summary in summaries:
        total = total + summary
    return total


def build_report(
    suites: List[SuiteResult],
    summary: Optional[Summary] = None,
    errors: Iterable[FileError] = (),
) -> FullReport:
    """
    Assemble a FullReport from parsed suites.

    Args:
        suites: Parsed suites with their summaries
        summary: Aggregate summary, computed from ``suites`` when omitted
        errors: Files that could not be read

    Returns:
        FullReport with the failed suite views derived from ``suites``
    """
    if summary is None:
        summary = merge_summaries(r.summary for r in suites)

    failed = [f for f in (as_failed(r) for r in suites) if f is not None]

    return FullReport(
        summary=summary,
        suites=list(suites),
        failed=failed,
        errors=list(errors),
    )
