"""
Console reporter for aggregated JUnit reports.
"""

import os
import sys
from typing import List

from ..durations import format_duration
from ..models import FullReport, Summary, TestCase, TestStatus
from .base import ReportGenerator

INDENT = " "


def _supports_color() -> bool:
    """Return True if the output stream likely supports ANSI colours."""
    # Explicit opt-in / opt-out via environment variable
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("FORCE_COLOR"):
        return True
    # Non-TTY output (e.g. piped to a file) should not use colour
    if not hasattr(sys.stdout, "isatty") or not sys.stdout.isatty():
        return False
    # Windows: enable ANSI processing via the virtual terminal flag.
    if sys.platform == "win32":
        try:
            import ctypes

            kernel32 = ctypes.windll.kernel32  # type: ignore[attr-defined]
            # STD_OUTPUT_HANDLE = -11
            handle = kernel32.GetStdHandle(-11)
            # ENABLE_VIRTUAL_TERMINAL_PROCESSING = 0x0004
            mode = ctypes.c_ulong()
            kernel32.GetConsoleMode(handle, ctypes.byref(mode))
            kernel32.SetConsoleMode(handle, mode.value | 0x0004)
        except Exception:
            return False
    return True


def format_summary(summary: Summary) -> List[str]:
    """
    Render a summary as a fixed block of five lines.

    The block height never changes, which lets the progress display redraw
    it in place.
    """
    return [
        f"> {'Duration':<20}:{format_duration(summary.time)}",
        f"> {'Tests run':<20}:{summary.tests:<6}",
        f"> {'Failures':<20}:{summary.failures:<6}",
        f"> {'Errors':<20}:{summary.errors:<6}",
        f"> {'Skipped':<20}:{summary.skipped:<6}",
    ]


class ConsoleReporter(ReportGenerator):
    """Generate colored console output for an aggregated report."""

    def __init__(self) -> None:
        color = _supports_color()
        self.GREEN = "\033[92m" if color else ""
        self.RED = "\033[91m" if color else ""
        self.YELLOW = "\033[93m" if color else ""
        self.BLUE = "\033[94m" if color else ""
        self.RESET = "\033[0m" if color else ""
        self.BOLD = "\033[1m" if color else ""

    def generate(self, report: FullReport) -> str:
        """Generate console report."""
        lines = []

        lines.append(f"\n{self.BOLD}JUnit Test Report{self.RESET}")
        lines.append("=" * 60)
        lines.extend(format_summary(report.summary))

        if report.success:
            lines.append(f"\n{self.GREEN}{self.BOLD}✓ ALL TESTS PASSED{self.RESET}")
        else:
            lines.append(
                f"\n{self.RED}{self.BOLD}✗ {len(report.failed)} SUITE(S) FAILED{self.RESET}"
            )

        if report.errors:
            lines.append(f"\n{self.YELLOW}{self.BOLD}Unreadable report files:{self.RESET}")
            for file_error in report.errors:
                lines.append(f"  {self.YELLOW}! {file_error.error}{self.RESET}")

        if report.suites:
            lines.append("")
        for result in report.suites:
            suite = result.suite
            glyph = f"{self.GREEN}✓{self.RESET}" if result.is_successful else f"{self.RED}✗{self.RESET}"
            lines.append(
                f"{glyph} {format_duration(suite.time):<10} {self.BOLD}{suite.name}{self.RESET}"
            )
            for case in suite.testcases:
                lines.extend(self._case_lines(case, depth=1))

        lines.append("")  # Empty line at end
        return "\n".join(lines)

    def _case_lines(self, case: TestCase, depth: int) -> List[str]:
        status = case.status
        if status == TestStatus.SKIP:
            glyph = f"{self.BLUE}↪{self.RESET}"
        elif status in (TestStatus.FAIL, TestStatus.ERROR):
            glyph = f"{self.RED}✗{self.RESET}"
        else:
            glyph = "-"

        lines = [f"{INDENT * depth}{glyph} {format_duration(case.time):<10} {case.name}"]

        payload = case.failure if status == TestStatus.FAIL else case.error
        if status in (TestStatus.FAIL, TestStatus.ERROR) and payload is not None:
            message = payload.message or payload.type
            lines.append(f"{INDENT * (depth + 1)}-- {self.RED}{message}{self.RESET}")
        return lines
