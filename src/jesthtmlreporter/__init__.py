"""Render aggregated test-run results into a self-contained HTML report.

Typical use from a test-runner host once a run has completed::

    from jesthtmlreporter import HTMLReporter

    HTMLReporter(results, {"pageTitle": "Nightly"}, console_logs).generate()
"""
from __future__ import annotations

__version__ = "0.1.0"

from jesthtmlreporter.config import ConfigResolver
from jesthtmlreporter.errors import ErrorCode, ReporterError
from jesthtmlreporter.log import configure_logging
from jesthtmlreporter.reporter import HTMLReporter
from jesthtmlreporter.results import (
    ConsoleLogEntry,
    ConsoleLogGroup,
    SuiteResult,
    TestCaseResult,
    TestResultSet,
)
from jesthtmlreporter.sorting import SortType, sort_suites

__all__ = [
    "ConfigResolver",
    "ConsoleLogEntry",
    "ConsoleLogGroup",
    "ErrorCode",
    "HTMLReporter",
    "ReporterError",
    "SortType",
    "SuiteResult",
    "TestCaseResult",
    "TestResultSet",
    "configure_logging",
    "sort_suites",
]
