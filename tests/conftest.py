"""Reporter test configuration and fixtures."""
from __future__ import annotations

import copy
import sys
from pathlib import Path
from typing import Any

import pytest

# Add src to path for imports
SRC_DIR = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(SRC_DIR))

from jesthtmlreporter.config import ConfigResolver  # noqa: E402
from jesthtmlreporter.results import TestResultSet  # noqa: E402

START_TIME = 1700000000000

SAMPLE_RESULTS: dict[str, Any] = {
    "startTime": START_TIME,
    "numTotalTestSuites": 4,
    "numPassedTestSuites": 1,
    "numFailedTestSuites": 2,
    "numPendingTestSuites": 1,
    "numTotalTests": 5,
    "numPassedTests": 2,
    "numFailedTests": 2,
    "numPendingTests": 1,
    "testResults": [
        {
            "testFilePath": "/project/tests/math.test.js",
            "perfStats": {"start": 1000, "end": 1120},
            "numPassingTests": 1,
            "numFailingTests": 1,
            "numPendingTests": 1,
            "testResults": [
                {
                    "ancestorTitles": ["math", "addition"],
                    "title": "adds numbers",
                    "status": "passed",
                    "duration": 120,
                    "failureMessages": [],
                },
                {
                    "ancestorTitles": ["math"],
                    "title": "divides by zero",
                    "status": "failed",
                    "duration": 4,
                    "failureMessages": ["\x1b[31mExpected: 0\x1b[39m\n    at Object.<anonymous>"],
                },
                {
                    "ancestorTitles": ["math"],
                    "title": "multiplies",
                    "status": "pending",
                    "duration": 0,
                    "failureMessages": [],
                },
            ],
            "console": [
                {"origin": "\x1b[2mmath.test.js:12\x1b[22m", "message": "\x1b[32mcomputed\x1b[39m", "type": "log"},
            ],
        },
        {
            "testFilePath": "/project/tests/api.test.js",
            "perfStats": {"start": 0, "end": 6500},
            "numPassingTests": 1,
            "numFailingTests": 0,
            "numPendingTests": 0,
            "testResults": [
                {
                    "ancestorTitles": ["api"],
                    "title": "fetches users",
                    "status": "passed",
                    "duration": 2000,
                    "failureMessages": [],
                },
            ],
        },
        {
            "testFilePath": "/project/tests/empty.test.js",
            "perfStats": {"start": 0, "end": 10},
            "testResults": [],
        },
        {
            "testFilePath": "/project/tests/auth.test.js",
            "perfStats": {"start": 0, "end": 300},
            "numPassingTests": 0,
            "numFailingTests": 1,
            "numPendingTests": 0,
            "testResults": [
                {
                    "ancestorTitles": [],
                    "title": "rejects bad token",
                    "status": "failed",
                    "duration": 50,
                    "failureMessages": ["Error: \x1b[1mtoken rejected\x1b[22m"],
                },
            ],
        },
    ],
}


@pytest.fixture
def results_dict() -> dict[str, Any]:
    """Aggregated results in the runner's camelCase shape."""
    return copy.deepcopy(SAMPLE_RESULTS)


@pytest.fixture
def result_set(results_dict: dict[str, Any]) -> TestResultSet:
    """Parsed sample results."""
    return TestResultSet.from_dict(results_dict)


@pytest.fixture
def make_config(tmp_path: Path):
    """Build a ConfigResolver isolated from the real cwd and environment."""

    def _make(options: dict[str, Any] | None = None, environ: dict[str, str] | None = None):
        return ConfigResolver(options, cwd=tmp_path, environ=environ if environ is not None else {})

    return _make
