"""Tests for loading results and console logs from files."""
from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml

from jesthtmlreporter.errors import ErrorCode, ReporterError
from jesthtmlreporter.loader import (
    CONSOLE_LOGS_SCHEMA,
    RESULTS_SCHEMA,
    load_console_logs,
    load_test_results,
    validate_document,
)
from jesthtmlreporter.results import TestResultSet, collect_console_logs


class TestLoadTestResults:
    """Tests for load_test_results."""

    def test_json(self, results_dict, tmp_path: Path) -> None:
        path = tmp_path / "results.json"
        path.write_text(json.dumps(results_dict), encoding="utf-8")

        result_set = load_test_results(path)

        assert result_set.num_total_tests == 5
        assert result_set.num_pending_test_suites == 1
        assert [s.test_file_path for s in result_set.test_results][0] == "/project/tests/math.test.js"
        assert result_set.test_results[0].test_results[0].ancestor_titles == ["math", "addition"]

    def test_yaml(self, results_dict, tmp_path: Path) -> None:
        path = tmp_path / "results.yaml"
        path.write_text(yaml.safe_dump(results_dict), encoding="utf-8")

        result_set = load_test_results(str(path))

        assert result_set.to_dict() == TestResultSet.from_dict(results_dict).to_dict()

    def test_tab_indented_json(self, results_dict, tmp_path: Path) -> None:
        path = tmp_path / "results.json"
        path.write_text(json.dumps(results_dict, indent="\t"), encoding="utf-8")

        result_set = load_test_results(path)

        assert result_set.to_dict() == TestResultSet.from_dict(results_dict).to_dict()

    def test_yml_suffix(self, results_dict, tmp_path: Path) -> None:
        path = tmp_path / "results.yml"
        path.write_text(yaml.safe_dump(results_dict), encoding="utf-8")
        assert load_test_results(path).num_total_tests == 5

    def test_schema_violation(self, results_dict, tmp_path: Path) -> None:
        del results_dict["testResults"][0]["testResults"][1]["status"]
        path = tmp_path / "results.json"
        path.write_text(json.dumps(results_dict), encoding="utf-8")

        with pytest.raises(ReporterError) as exc_info:
            load_test_results(path)

        assert exc_info.value.code == ErrorCode.E004
        assert "$.testResults[0].testResults[1]" in str(exc_info.value)
        assert "'status' is a required property" in str(exc_info.value)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ReporterError) as exc_info:
            load_test_results(tmp_path / "missing.json")
        assert exc_info.value.code == ErrorCode.E302

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "results.json"
        path.write_text("", encoding="utf-8")
        with pytest.raises(ReporterError) as exc_info:
            load_test_results(path)
        assert exc_info.value.code == ErrorCode.E004

    def test_unparseable_file(self, tmp_path: Path) -> None:
        path = tmp_path / "results.json"
        path.write_text('{"testResults": [', encoding="utf-8")
        with pytest.raises(ReporterError) as exc_info:
            load_test_results(path)
        assert exc_info.value.code == ErrorCode.E004


class TestConsoleLogs:
    """Tests for console log loading and collection."""

    def test_load(self, tmp_path: Path) -> None:
        path = tmp_path / "console.json"
        path.write_text(
            json.dumps([
                {
                    "filePath": "/project/tests/math.test.js",
                    "logs": [{"origin": "math.test.js:3", "message": "hi", "type": "log"}],
                },
            ]),
            encoding="utf-8",
        )

        groups = load_console_logs(path)

        assert len(groups) == 1
        assert groups[0].file_path == "/project/tests/math.test.js"
        assert groups[0].logs[0].message == "hi"
        assert groups[0].logs[0].type == "log"

    def test_invalid_shape(self, tmp_path: Path) -> None:
        path = tmp_path / "console.json"
        path.write_text(json.dumps({"filePath": "x"}), encoding="utf-8")
        with pytest.raises(ReporterError) as exc_info:
            load_console_logs(path)
        assert exc_info.value.code == ErrorCode.E004

    def test_collect_from_suites(self, result_set) -> None:
        groups = collect_console_logs(result_set.test_results)

        assert [g.file_path for g in groups] == ["/project/tests/math.test.js"]
        assert groups[0].logs[0].message == "\x1b[32mcomputed\x1b[39m"


class TestValidateDocument:
    """Tests for schema validation helpers."""

    def test_valid(self, results_dict) -> None:
        assert validate_document(results_dict, RESULTS_SCHEMA) == []

    def test_wrong_types(self) -> None:
        errors = validate_document({"numTotalTests": "five", "testResults": {}}, RESULTS_SCHEMA)
        assert len(errors) == 2
        assert any(e.startswith("$.numTotalTests") for e in errors)

    def test_console_logs_must_be_list(self) -> None:
        assert validate_document({}, CONSOLE_LOGS_SCHEMA) != []
