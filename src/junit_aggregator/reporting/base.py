"""
Base class for report generators.
"""

from abc import ABC, abstractmethod

from ..models import FullReport


class ReportGenerator(ABC):
    """Base class for rendering an aggregated report."""

    @abstractmethod
    def generate(self, report: FullReport) -> str:
        """
        Render an aggregated report.

        Args:
            report: FullReport produced by the report reader

        Returns:
            Report as a string
        """
        pass
