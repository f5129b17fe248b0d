"""
JSON reporter for aggregated JUnit reports.
"""

import json
from typing import Any, Dict, Optional

from ..durations import to_millis
from ..models import FailedTestCase, FullReport, Summary, TestCase, TestFailure
from .base import ReportGenerator


def _summary(summary: Summary) -> Dict[str, Any]:
    return {
        "time": to_millis(summary.time),
        "tests": summary.tests,
        "failures": summary.failures,
        "errors": summary.errors,
        "skipped": summary.skipped,
    }


def _failure(failure: Optional[TestFailure]) -> Optional[Dict[str, Any]]:
    if failure is None:
        return None
    return {
        "message": failure.message,
        "type": failure.type,
        "stack_trace": failure.stack_trace,
    }


def _testcase(case: TestCase) -> Dict[str, Any]:
    return {
        "name": case.name,
        "classname": case.classname,
        "time": to_millis(case.time),
        "status": case.status.value,
        "failure": _failure(case.failure),
        "error": _failure(case.error),
        "skipped": case.skipped,
    }


def _failed_testcase(case: FailedTestCase) -> Dict[str, Any]:
    return {
        "name": case.name,
        "classname": case.classname,
        "time": to_millis(case.time),
        "status": case.status.value,
        "failure": _failure(case.failure),
    }


class JSONReporter(ReportGenerator):
    """Generate JSON format for programmatic analysis."""

    def __init__(self, compact: bool = False) -> None:
        self.compact = compact

    def generate(self, report: FullReport) -> str:
        """Generate JSON report."""
        data = {
            "summary": _summary(report.summary),
            "success": report.success,
            "suites": [
                {
                    **_summary(r.summary),
                    "name": r.suite.name,
                    "timestamp": r.suite.timestamp,
                    "testcase": [_testcase(c) for c in r.suite.testcases],
                }
                for r in report.suites
            ],
            "failed": [
                {
                    **_summary(f.summary),
                    "name": f.suite.name,
                    "timestamp": f.suite.timestamp,
                    "failed_testcases": [_failed_testcase(c) for c in f.suite.failed_testcases],
                }
                for f in report.failed
            ],
            "errors": [
                {"path": str(e.path), "message": str(e.error)} for e in report.errors
            ],
        }

        if self.compact:
            return json.dumps(data, separators=(",", ":"))
        return json.dumps(data, indent=2)
