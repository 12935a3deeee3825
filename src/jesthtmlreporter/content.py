"""Report content renderer.

Builds the ``div#jesthtml-content`` tree:
- Header with page title and optional logo
- Run metadata (start time, suite and test summaries)
- One info block, result table and optional console log per suite

Every builder returns fresh elements; the root is composed at the end.
"""
from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from typing import Any, Mapping, Optional, Sequence, Union

from jesthtmlreporter.config import ConfigResolver
from jesthtmlreporter.errors import NO_TEST_DATA, make_error
from jesthtmlreporter.formatting import format_seconds, format_timestamp, strip_ansi
from jesthtmlreporter.results import (
    PASSED,
    ConsoleLogEntry,
    ConsoleLogGroup,
    SuiteResult,
    TestCaseResult,
    TestResultSet,
    coerce_console_logs,
    logs_for_file,
)
from jesthtmlreporter.sorting import sort_suites

CONTENT_ID = "jesthtml-content"
BREADCRUMB_SEPARATOR = " > "

TestData = Union[TestResultSet, Mapping[str, Any], None]
ConsoleLogs = Optional[Sequence[Union[ConsoleLogGroup, Mapping[str, Any]]]]


def _element(tag: str, attrib: Optional[dict[str, str]] = None, text: Optional[str] = None,
             children: Sequence[ET.Element] = ()) -> ET.Element:
    el = ET.Element(tag, attrib or {})
    if text is not None:
        el.text = text
    el.extend(children)
    return el


def coerce_test_data(test_data: TestData) -> TestResultSet:
    """Accept a TestResultSet or the runner's mapping; reject empty input."""
    if test_data is None:
        raise make_error(NO_TEST_DATA)
    if isinstance(test_data, TestResultSet):
        return test_data
    if not test_data:
        raise make_error(NO_TEST_DATA)
    return TestResultSet.from_dict(test_data)


def parse_status_filter(value: Optional[str]) -> frozenset[str]:
    """``"Pending, failed"`` -> ``{"pending", "failed"}``."""
    if not value:
        return frozenset()
    cleaned = re.sub(r"\s", "", str(value)).lower()
    return frozenset(status for status in cleaned.split(",") if status)


def render_header(page_title: str, logo: Optional[str]) -> ET.Element:
    children = [_element("h1", {"id": "title"}, page_title)]
    if logo:
        children.append(_element("img", {"id": "logo", "src": logo}))
    return _element("header", children=children)


def render_metadata(data: TestResultSet, date_format: str) -> ET.Element:
    timestamp = format_timestamp(data.start_time, date_format)
    suite_summary = (
        f"{data.num_total_test_suites} suites -- "
        f"{data.num_passed_test_suites} passed / "
        f"{data.num_failed_test_suites} failed / "
        f"{data.num_pending_test_suites} pending"
    )
    test_summary = (
        f"{data.num_total_tests} tests -- "
        f"{data.num_passed_tests} passed / "
        f"{data.num_failed_tests} failed / "
        f"{data.num_pending_tests} pending"
    )
    return _element("div", {"id": "metadata-container"}, children=[
        _element("div", {"id": "timestamp"}, f"Start: {timestamp}"),
        _element("div", {"id": "suite-summary"}, suite_summary),
        _element("div", {"id": "summary"}, test_summary),
    ])


def render_suite_info(suite: SuiteResult, warning_threshold: float) -> ET.Element:
    execution_seconds = suite.execution_time_ms / 1000
    time_class = "suite-time warn" if execution_seconds > warning_threshold else "suite-time"
    return _element("div", {"class": "suite-info"}, children=[
        _element("div", {"class": "suite-path"}, suite.test_file_path),
        _element("div", {"class": time_class}, f"{format_seconds(suite.execution_time_ms)}s"),
    ])


def render_test_row(test: TestCaseResult, include_failure_msg: bool) -> ET.Element:
    failures = []
    if include_failure_msg and test.failure_messages:
        failures.append(_element("div", {"class": "failureMessages"}, children=[
            _element("pre", {"class": "failureMsg"}, strip_ansi(message))
            for message in test.failure_messages
        ]))

    if test.status == PASSED:
        result = f"{test.status} in {format_seconds(test.duration)}s"
    else:
        result = test.status

    return _element("tr", {"class": test.status}, children=[
        _element("td", {"class": "suite"}, BREADCRUMB_SEPARATOR.join(test.ancestor_titles)),
        _element("td", {"class": "test"}, test.title, children=failures),
        _element("td", {"class": "result"}, result),
    ])


def render_suite_table(suite: SuiteResult, ignored_statuses: frozenset[str],
                       include_failure_msg: bool) -> ET.Element:
    rows = [
        render_test_row(test, include_failure_msg)
        for test in suite.test_results
        if test.status.lower() not in ignored_statuses
    ]
    return _element(
        "table",
        {"class": "suite-table", "cellspacing": "0", "cellpadding": "0"},
        children=rows,
    )


def render_console_log(logs: Sequence[ConsoleLogEntry]) -> ET.Element:
    items = [
        _element("div", {"class": "suite-consolelog-item"}, children=[
            _element("pre", {"class": "suite-consolelog-item-origin"}, strip_ansi(log.origin)),
            _element("pre", {"class": "suite-consolelog-item-message"}, strip_ansi(log.message)),
        ])
        for log in logs
    ]
    return _element("div", {"class": "suite-consolelog"}, children=[
        _element("div", {"class": "suite-consolelog-header"}, "Console Log"),
        *items,
    ])


def render_suite(
    suite: SuiteResult,
    config: ConfigResolver,
    ignored_statuses: frozenset[str],
    console_logs: Optional[Sequence[ConsoleLogGroup]] = None,
) -> list[ET.Element]:
    """Elements for one suite; empty when the suite has no tests."""
    if not suite.test_results:
        return []

    elements = [
        render_suite_info(suite, config.get_float("executionTimeWarningThreshold")),
        render_suite_table(suite, ignored_statuses, config.get_bool("includeFailureMsg")),
    ]

    if config.get_bool("includeConsoleLog"):
        logs = logs_for_file(console_logs, suite.test_file_path)
        if logs:
            elements.append(render_console_log(logs))

    return elements


def render_test_report_content(
    test_data: TestData,
    config: ConfigResolver,
    console_logs: ConsoleLogs = None,
) -> ET.Element:
    """Render the report body for a completed run.

    Raises:
        ReporterError: If no test data was provided.
    """
    data = coerce_test_data(test_data)
    groups = coerce_console_logs(console_logs)

    children = [
        render_header(config.get_str("pageTitle") or "", config.get_str("logoPath")),
        render_metadata(data, config.get_str("dateFormat") or ""),
    ]

    ignored_statuses = parse_status_filter(config.get_str("statusIgnoreFilter"))
    for suite in sort_suites(data.test_results, config.get_config_value("sort")):
        children.extend(render_suite(suite, config, ignored_statuses, groups))

    return _element("div", {"id": CONTENT_ID}, children=children)
