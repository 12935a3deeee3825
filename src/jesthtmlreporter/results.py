"""Test-run result model consumed by the reporter.

These structures mirror the aggregated result a test runner hands over once
a run completes. The host's JSON uses camelCase keys; ``from_dict`` accepts
that shape and ``to_dict`` produces it again.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional, Sequence

# Statuses the runner reports for a single test. Other runner-defined
# statuses (e.g. "todo", "disabled") pass through unchanged.
PASSED = "passed"
FAILED = "failed"
PENDING = "pending"


def _number(data: Mapping[str, Any], key: str, default: float = 0) -> float:
    value = data.get(key)
    if value is None:
        return default
    return value


@dataclass
class TestCaseResult:
    """Outcome of one assertion block.

    Attributes:
        title: Test title.
        status: Runner status string.
        ancestor_titles: Titles of the enclosing describe blocks, outermost first.
        duration: Execution time in milliseconds.
        failure_messages: Raw failure messages (may contain ANSI codes).
    """

    __test__ = False

    title: str
    status: str
    ancestor_titles: list[str] = field(default_factory=list)
    duration: float = 0
    failure_messages: list[str] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return self.status == PASSED

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TestCaseResult:
        return cls(
            title=data.get("title") or "",
            status=data.get("status") or "",
            ancestor_titles=list(data.get("ancestorTitles") or []),
            duration=_number(data, "duration"),
            failure_messages=list(data.get("failureMessages") or []),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "status": self.status,
            "ancestorTitles": list(self.ancestor_titles),
            "duration": self.duration,
            "failureMessages": list(self.failure_messages),
        }


@dataclass
class ConsoleLogEntry:
    """One captured console line."""

    origin: str
    message: str
    type: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ConsoleLogEntry:
        return cls(
            origin=str(data.get("origin") or ""),
            message=str(data.get("message") or ""),
            type=data.get("type"),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"origin": self.origin, "message": self.message}
        if self.type is not None:
            result["type"] = self.type
        return result


@dataclass
class ConsoleLogGroup:
    """Console lines captured while running one test file."""

    file_path: str
    logs: list[ConsoleLogEntry] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ConsoleLogGroup:
        return cls(
            file_path=data.get("filePath") or "",
            logs=[ConsoleLogEntry.from_dict(log) for log in data.get("logs") or []],
        )

    def to_dict(self) -> dict[str, Any]:
        return {"filePath": self.file_path, "logs": [log.to_dict() for log in self.logs]}


@dataclass
class SuiteResult:
    """Outcome of one test file.

    Attributes:
        test_file_path: Path of the test file; sort key and console-log key.
        perf_start: Start timestamp in milliseconds.
        perf_end: End timestamp in milliseconds.
        test_results: Test cases in runner order.
        num_passing_tests: Pre-aggregated count, if the runner supplied it.
        num_failing_tests: Pre-aggregated count, if the runner supplied it.
        num_pending_tests: Pre-aggregated count, if the runner supplied it.
        console: Console lines the runner attached to this suite.
    """

    test_file_path: str
    perf_start: float = 0
    perf_end: float = 0
    test_results: list[TestCaseResult] = field(default_factory=list)
    num_passing_tests: Optional[int] = None
    num_failing_tests: Optional[int] = None
    num_pending_tests: Optional[int] = None
    console: list[ConsoleLogEntry] = field(default_factory=list)

    @property
    def execution_time_ms(self) -> float:
        """Wall-clock duration of the suite."""
        return self.perf_end - self.perf_start

    @property
    def status(self) -> str:
        """Aggregate status: pending beats failed beats passed."""
        if self.num_pending_tests is not None or self.num_failing_tests is not None:
            if self.num_pending_tests:
                return PENDING
            if self.num_failing_tests:
                return FAILED
            return PASSED
        statuses = {test.status for test in self.test_results}
        if PENDING in statuses:
            return PENDING
        if FAILED in statuses:
            return FAILED
        return PASSED

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SuiteResult:
        perf = data.get("perfStats") or {}
        return cls(
            test_file_path=data.get("testFilePath") or "",
            perf_start=_number(perf, "start"),
            perf_end=_number(perf, "end"),
            test_results=[TestCaseResult.from_dict(t) for t in data.get("testResults") or []],
            num_passing_tests=data.get("numPassingTests"),
            num_failing_tests=data.get("numFailingTests"),
            num_pending_tests=data.get("numPendingTests"),
            console=[ConsoleLogEntry.from_dict(c) for c in data.get("console") or []],
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "testFilePath": self.test_file_path,
            "perfStats": {"start": self.perf_start, "end": self.perf_end},
            "testResults": [t.to_dict() for t in self.test_results],
        }
        if self.num_passing_tests is not None:
            result["numPassingTests"] = self.num_passing_tests
        if self.num_failing_tests is not None:
            result["numFailingTests"] = self.num_failing_tests
        if self.num_pending_tests is not None:
            result["numPendingTests"] = self.num_pending_tests
        if self.console:
            result["console"] = [c.to_dict() for c in self.console]
        return result


@dataclass
class TestResultSet:
    """Aggregated result of a full test run."""

    __test__ = False

    start_time: float = 0
    num_total_test_suites: int = 0
    num_passed_test_suites: int = 0
    num_failed_test_suites: int = 0
    num_pending_test_suites: int = 0
    num_total_tests: int = 0
    num_passed_tests: int = 0
    num_failed_tests: int = 0
    num_pending_tests: int = 0
    test_results: list[SuiteResult] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TestResultSet:
        return cls(
            start_time=_number(data, "startTime"),
            num_total_test_suites=_number(data, "numTotalTestSuites"),
            num_passed_test_suites=_number(data, "numPassedTestSuites"),
            num_failed_test_suites=_number(data, "numFailedTestSuites"),
            num_pending_test_suites=_number(data, "numPendingTestSuites"),
            num_total_tests=_number(data, "numTotalTests"),
            num_passed_tests=_number(data, "numPassedTests"),
            num_failed_tests=_number(data, "numFailedTests"),
            num_pending_tests=_number(data, "numPendingTests"),
            test_results=[SuiteResult.from_dict(s) for s in data.get("testResults") or []],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "startTime": self.start_time,
            "numTotalTestSuites": self.num_total_test_suites,
            "numPassedTestSuites": self.num_passed_test_suites,
            "numFailedTestSuites": self.num_failed_test_suites,
            "numPendingTestSuites": self.num_pending_test_suites,
            "numTotalTests": self.num_total_tests,
            "numPassedTests": self.num_passed_tests,
            "numFailedTests": self.num_failed_tests,
            "numPendingTests": self.num_pending_tests,
            "testResults": [s.to_dict() for s in self.test_results],
        }


def collect_console_logs(suites: Iterable[SuiteResult]) -> list[ConsoleLogGroup]:
    """Build console-log groups from the entries attached to each suite."""
    return [
        ConsoleLogGroup(file_path=suite.test_file_path, logs=list(suite.console))
        for suite in suites
        if suite.console
    ]


def coerce_console_logs(
    groups: Optional[Iterable[ConsoleLogGroup | Mapping[str, Any]]],
) -> Optional[list[ConsoleLogGroup]]:
    """Accept ConsoleLogGroup instances or the runner's ``{filePath, logs}`` mappings."""
    if groups is None:
        return None
    return [
        group if isinstance(group, ConsoleLogGroup) else ConsoleLogGroup.from_dict(group)
        for group in groups
    ]


def logs_for_file(
    groups: Optional[Sequence[ConsoleLogGroup]], file_path: str
) -> list[ConsoleLogEntry]:
    """All captured entries for one file path, in group order."""
    if not groups:
        return []
    entries: list[ConsoleLogEntry] = []
    for group in groups:
        if group.file_path == file_path:
            entries.extend(group.logs)
    return entries
