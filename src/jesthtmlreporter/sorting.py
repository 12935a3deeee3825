"""Suite ordering strategies."""
from __future__ import annotations

from enum import Enum
from typing import Callable, Optional, Sequence

from jesthtmlreporter.results import FAILED, PASSED, PENDING, SuiteResult


class SortType(str, Enum):
    """Supported values of the ``sort`` option."""

    STATUS = "status"
    STATUS_DESC = "statusdesc"
    NAME = "name"
    TITLE_ASC = "titleasc"
    TITLE_DESC = "titledesc"
    EXECUTION_ASC = "executionasc"
    EXECUTION_DESC = "executiondesc"


# Lower rank sorts first under "status".
STATUS_RANK = {
    PENDING: 0,
    FAILED: 1,
    PASSED: 2,
}


def _status_key(suite: SuiteResult) -> int:
    return STATUS_RANK.get(suite.status, len(STATUS_RANK))


def _name_key(suite: SuiteResult) -> str:
    return suite.test_file_path


def _execution_key(suite: SuiteResult) -> float:
    return suite.execution_time_ms


# strategy -> (key, descending)
STRATEGIES: dict[SortType, tuple[Callable[[SuiteResult], object], bool]] = {
    SortType.STATUS: (_status_key, False),
    SortType.STATUS_DESC: (_status_key, True),
    SortType.NAME: (_name_key, False),
    SortType.TITLE_ASC: (_name_key, False),
    SortType.TITLE_DESC: (_name_key, True),
    SortType.EXECUTION_ASC: (_execution_key, False),
    SortType.EXECUTION_DESC: (_execution_key, True),
}


def parse_sort_type(value: object) -> Optional[SortType]:
    """Map a configured sort value to a SortType, or None for no sorting."""
    if not isinstance(value, str):
        return None
    try:
        return SortType(value.strip().lower())
    except ValueError:
        return None


def sort_suites(suites: Sequence[SuiteResult], strategy: object = None) -> list[SuiteResult]:
    """Return the suites ordered by ``strategy``.

    The input is never mutated. Unknown or missing strategies keep the input
    order. Suites with equal keys keep their relative order, including for
    the descending strategies.
    """
    sort_type = parse_sort_type(strategy)
    if sort_type is None:
        return list(suites)
    key, descending = STRATEGIES[sort_type]
    # sorted(reverse=True) still preserves the original order of equal keys
    return sorted(suites, key=key, reverse=descending)
