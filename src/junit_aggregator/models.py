"""
Data models for JUnit report aggregation.
"""

from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple

from .exceptions import InternalInconsistencyError, ReportError


class TestStatus(Enum):
    """Outcome of a single test case."""

    PASS = "pass"
    FAIL = "fail"
    SKIP = "skip"
    ERROR = "error"


@dataclass(frozen=True)
class TestFailure:
    """Payload of a <failure> or <error> element."""

    message: Optional[str]
    type: str
    stack_trace: str


@dataclass(frozen=True)
class TestCase:
    """A single <testcase> as it appears in a report file."""

    name: str
    classname: str
    time: timedelta
    failure: Optional[TestFailure] = None
    error: Optional[TestFailure] = None
    skipped: bool = False

    @property
    def status(self) -> TestStatus:
        """
        Resolve the outcome of this test case.

        A case carrying several payloads is resolved with a fixed precedence:
        failure, then error, then skipped.
        """
        if self.failure is not None:
            return TestStatus.FAIL
        if self.error is not None:
            return TestStatus.ERROR
        if self.skipped:
            return TestStatus.SKIP
        return TestStatus.PASS

    @property
    def is_successful(self) -> bool:
        return self.status not in (TestStatus.FAIL, TestStatus.ERROR)


@dataclass(frozen=True)
class TestSuite:
    """A <testsuite> element and its test cases in document order."""

    name: str
    time: timedelta
    timestamp: Optional[str] = None
    testcases: Tuple[TestCase, ...] = ()


@dataclass(frozen=True)
class Summary:
    """Test counters for a suite or for a whole run."""

    time: timedelta = timedelta(0)
    tests: int = 0
    failures: int = 0
    errors: int = 0
    skipped: int = 0

    @classmethod
    def zero(cls) -> "Summary":
        return cls()

    @property
    def passed(self) -> int:
        return self.tests - self.failures - self.errors - self.skipped

    @property
    def is_successful(self) -> bool:
        """Return True if nothing failed or errored. Skipped tests don't count."""
        return self.failures == 0 and self.errors == 0

    def __add__(self, other: "Summary") -> "Summary":
        if not isinstance(other, Summary):
            return NotImplemented
        return Summary(
            time=self.time + other.time,
            tests=self.tests + other.tests,
            failures=self.failures + other.failures,
            errors=self.errors + other.errors,
            skipped=self.skipped + other.skipped,
        )


@dataclass(frozen=True)
class SuiteResult:
    """A parsed test suite paired with its summary."""

    suite: TestSuite
    summary: Summary

    @property
    def is_successful(self) -> bool:
        return self.summary.is_successful


@dataclass(frozen=True)
class FailedTestCase:
    """A test case that failed or errored."""

    name: str
    classname: str
    time: timedelta
    status: TestStatus
    failure: TestFailure

    @classmethod
    def from_case(cls, case: TestCase) -> "FailedTestCase":
        """
        Build the failed view of a test case.

        Raises:
            InternalInconsistencyError: If the case did not fail or error
        """
        status = case.status
        if status == TestStatus.FAIL:
            payload = case.failure
        elif status == TestStatus.ERROR:
            payload = case.error
        else:
            raise InternalInconsistencyError(
                f"Failed view requested for a {status.value} test case: "
                f"{case.classname}.{case.name}"
            )
        return cls(
            name=case.name,
            classname=case.classname,
            time=case.time,
            status=status,
            failure=payload,
        )


@dataclass(frozen=True)
class FailedTestSuite:
    """The failing and erroring cases of a suite, in their original order."""

    name: str
    time: timedelta
    timestamp: Optional[str]
    failed_testcases: Tuple[FailedTestCase, ...]


@dataclass(frozen=True)
class FailedSuiteResult:
    """A failed suite view paired with the summary of the full suite."""

    suite: FailedTestSuite
    summary: Summary


@dataclass(frozen=True)
class FileError:
    """A report file that could not be read or decoded."""

    path: Path
    error: ReportError


@dataclass
class FullReport:
    """Aggregated result of reading every report file of a project."""

    summary: Summary
    suites: List[SuiteResult]
    failed: List[FailedSuiteResult]
    errors: List[FileError] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """Return True if no suite has a failing or erroring test case."""
        return not self.failed

    @property
    def complete(self) -> bool:
        """Return True if every discovered report file was read."""
        return not self.errors
