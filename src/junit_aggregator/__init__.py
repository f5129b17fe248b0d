"""
Discovery, parsing and aggregation of JUnit XML test reports.
"""

from .decoder import decode_suites, read_report
from .discovery import discover_reports, validate_pattern
from .exceptions import (
    InternalInconsistencyError,
    InvalidPatternError,
    ReportDecodeError,
    ReportError,
    ReportReadError,
)
from .models import (
    FailedSuiteResult,
    FailedTestCase,
    FailedTestSuite,
    FullReport,
    Summary,
    SuiteResult,
    TestCase,
    TestFailure,
    TestStatus,
    TestSuite,
)
from .reader import ErrorPolicy, ReportReader, read_report_tree
from .results import as_failed, build_report, summarize
from .sorting import ReportSorting, SortOrder, sort_suites

__version__ = "0.1.0"

__all__ = [
    "ErrorPolicy",
    "FailedSuiteResult",
    "FailedTestCase",
    "FailedTestSuite",
    "FullReport",
    "InternalInconsistencyError",
    "InvalidPatternError",
    "ReportDecodeError",
    "ReportError",
    "ReportReadError",
    "ReportReader",
    "ReportSorting",
    "SortOrder",
    "Summary",
    "SuiteResult",
    "TestCase",
    "TestFailure",
    "TestStatus",
    "TestSuite",
    "as_failed",
    "build_report",
    "decode_suites",
    "discover_reports",
    "read_report",
    "read_report_tree",
    "sort_suites",
    "summarize",
    "validate_pattern",
]
