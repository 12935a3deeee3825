"""Load run results and console logs from files.

Results files are the runner's aggregated JSON (any other suffix is read as
YAML) and are checked against the bundled schemas before use.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema
import yaml

from jesthtmlreporter.errors import CANNOT_READ_FILE, INVALID_RESULTS, make_error
from jesthtmlreporter.results import ConsoleLogGroup, TestResultSet

SCHEMA_DIR = Path(__file__).parent / "schemas"
RESULTS_SCHEMA = "test-results.schema.json"
CONSOLE_LOGS_SCHEMA = "console-logs.schema.json"


def _load_schema(schema_name: str) -> dict[str, Any]:
    """Load a bundled JSON schema by name."""
    return json.loads((SCHEMA_DIR / schema_name).read_text(encoding="utf-8"))


def _format_path(path: list[Any]) -> str:
    """Format a jsonschema path as a dotted string."""
    parts = ["$"]
    for p in path:
        if isinstance(p, int):
            parts.append(f"[{p}]")
        else:
            parts.append(f".{p}")
    return "".join(parts)


def _read_document(path: Path) -> Any:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise make_error(CANNOT_READ_FILE, f"{path} ({e.strerror or e})") from e
    if not content.strip():
        return None

    if path.suffix.lower() == ".json":
        try:
            return json.loads(content)
        except json.JSONDecodeError as e:
            raise make_error(INVALID_RESULTS, f"{path}: {e}") from e

    try:
        return yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise make_error(INVALID_RESULTS, f"{path}: {e}") from e


def validate_document(data: Any, schema_name: str) -> list[str]:
    """Return schema violations as ``"<path> - <message>"`` strings."""
    validator = jsonschema.Draft202012Validator(_load_schema(schema_name))
    errors = [
        f"{_format_path(list(err.absolute_path))} - {err.message}"
        for err in validator.iter_errors(data)
    ]
    return sorted(errors)


def load_test_results(path: str | Path) -> TestResultSet:
    """Load an aggregated results file.

    Raises:
        ReporterError: If the file cannot be read, parsed or fails validation.
    """
    path = Path(path)
    data = _read_document(path)
    if not data:
        raise make_error(INVALID_RESULTS, f"{path}: file is empty")

    errors = validate_document(data, RESULTS_SCHEMA)
    if errors:
        raise make_error(INVALID_RESULTS, f"{path}: " + "; ".join(errors))

    return TestResultSet.from_dict(data)


def load_console_logs(path: str | Path) -> list[ConsoleLogGroup]:
    """Load console-log groups (``[{"filePath": ..., "logs": [...]}]``)."""
    path = Path(path)
    data = _read_document(path) or []

    errors = validate_document(data, CONSOLE_LOGS_SCHEMA)
    if errors:
        raise make_error(INVALID_RESULTS, f"{path}: " + "; ".join(errors))

    return [ConsoleLogGroup.from_dict(group) for group in data]
