"""
Reporting modules for JUnit report aggregation.
"""

from .base import ReportGenerator
from .console import ConsoleReporter, format_summary
from .json_reporter import JSONReporter

__all__ = ["ReportGenerator", "ConsoleReporter", "JSONReporter", "format_summary"]
