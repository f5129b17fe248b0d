"""
Custom exceptions for JUnit report aggregation.
"""

from pathlib import Path
from typing import Optional, Union

PathLike = Union[str, Path]


class ReportError(Exception):
    """Base exception for report aggregation errors."""

    pass


class InvalidPatternError(ReportError):
    """Raised when a report glob pattern is malformed."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid report pattern '{pattern}': {reason}")


class ReportReadError(ReportError):
    """Raised when a report file or directory cannot be read."""

    def __init__(self, path: PathLike, original_error: Exception):
        self.path = Path(path)
        self.original_error = original_error
        super().__init__(f"Couldn't read report path {path}: {original_error}")


class ReportDecodeError(ReportError):
    """Raised when a report file is neither a testsuite nor a testsuites document."""

    def __init__(self, path: Optional[PathLike], reason: str):
        self.path = Path(path) if path is not None else None
        self.reason = reason
        source = str(path) if path is not None else "<input>"
        super().__init__(f"Couldn't parse JUnit report {source}: {reason}")


class InternalInconsistencyError(ReportError):
    """Raised when failure classification is asked for on a non-failing test case."""

    pass
