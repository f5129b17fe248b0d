"""
Ordering of aggregated suites.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence, TypeVar, Union

from .models import FailedSuiteResult, SuiteResult

T = TypeVar("T", SuiteResult, FailedSuiteResult)


class SortOrder(Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class ReportSorting:
    """Sort key and direction for suites. Time is the only supported key."""

    order: SortOrder = SortOrder.DESC
    key: str = "time"

    @classmethod
    def parse(cls, spec: str) -> "ReportSorting":
        """
        Parse a sort specification such as ``time``, ``time asc`` or ``time DESC``.

        A bare ``time`` sorts the slowest suites first.

        Raises:
            ValueError: If the specification is not recognised
        """
        chunks = spec.split()
        if not chunks or chunks[0].lower() != "time" or len(chunks) > 2:
            raise ValueError(f"Cannot parse sort order, invalid token '{spec}'")
        if len(chunks) == 1:
            return cls(order=SortOrder.DESC)
        try:
            return cls(order=SortOrder(chunks[1].lower()))
        except ValueError:
            raise ValueError(
                f"Cannot parse sort order, invalid token '{chunks[1]}' "
                f"(expected one of: {', '.join(o.value for o in SortOrder)})"
            )


def sort_suites(
    suites: Sequence[T], sorting: Union[ReportSorting, SortOrder]
) -> List[T]:
    """
    Stable sort of suites by their summary time.

    Suites with equal durations keep their relative order in both directions.

    Args:
        suites: SuiteResult or FailedSuiteResult items
        sorting: ReportSorting or just the SortOrder

    Returns:
        New sorted list
    """
    order = sorting.order if isinstance(sorting, ReportSorting) else sorting
    return sorted(
        suites,
        key=lambda r: r.summary.time,
        reverse=order == SortOrder.DESC,
    )
