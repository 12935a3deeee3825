"""Reporter error code registry.

Every error the reporter raises carries:
- Code: JHR-EXXX format
- Message: Human-readable description
- Next step: Actionable instruction
"""
from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorCode(Enum):
    """Reporter error codes."""

    # Input/configuration errors (E001-E099)
    E001 = "E001"  # No test data provided
    E002 = "E002"  # Invalid configuration value
    E003 = "E003"  # Unknown theme
    E004 = "E004"  # Results file invalid

    # File/IO errors (E300-E399)
    E302 = "E302"  # Cannot read file
    E303 = "E303"  # Cannot write file


NO_TEST_DATA = ErrorCode.E001
INVALID_CONFIG_VALUE = ErrorCode.E002
THEME_NOT_FOUND = ErrorCode.E003
INVALID_RESULTS = ErrorCode.E004
CANNOT_READ_FILE = ErrorCode.E302
CANNOT_WRITE_FILE = ErrorCode.E303


# (message_template, next_step)
ERROR_TEMPLATES: dict[ErrorCode, tuple[str, str]] = {
    ErrorCode.E001: (
        "No test data provided",
        "Pass the aggregated results of a completed test run",
    ),
    ErrorCode.E002: (
        "Invalid configuration value: {details}",
        "Check jesthtmlreporter.config.json and JEST_HTML_REPORTER_* variables",
    ),
    ErrorCode.E003: (
        "Unknown theme: {details}",
        "Use defaultTheme, darkTheme or lightTheme, or set styleOverridePath",
    ),
    ErrorCode.E004: (
        "Results file is invalid: {details}",
        "Export the aggregated results of the test run as JSON",
    ),
    ErrorCode.E302: (
        "Cannot read file: {details}",
        "Check file permissions and path",
    ),
    ErrorCode.E303: (
        "Cannot write file: {details}",
        "Check directory permissions or use a different outputPath",
    ),
}


class ReporterError(Exception):
    """Structured reporter error with code, message, and next step."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        next_step: str,
        details: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.next_step = next_step
        self.details = details

    def __str__(self) -> str:
        lines = [f"JHR-{self.code.value}: {self.message}"]
        if self.details:
            lines.append(f"  Details: {self.details}")
        lines.append(f"  Next step: {self.next_step}")
        return "\n".join(lines)


def make_error(code: ErrorCode, details: Optional[str] = None) -> ReporterError:
    """Create a ReporterError from a code with optional details.

    Args:
        code: The error code
        details: Optional details to include in the message

    Returns:
        ReporterError instance ready to raise
    """
    message_template, next_step = ERROR_TEMPLATES[code]

    if details and "{details}" in message_template:
        message = message_template.format(details=details)
    elif details:
        message = f"{message_template}: {details}"
    else:
        message = message_template.replace(": {details}", "")

    return ReporterError(
        code=code,
        message=message,
        next_step=next_step,
        details=details if "{details}" not in message_template else None,
    )
