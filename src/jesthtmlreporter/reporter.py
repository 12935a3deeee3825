"""Reporter entry point used by test-runner hosts."""
from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any, Mapping, Optional

from jesthtmlreporter.config import ConfigResolver
from jesthtmlreporter.content import ConsoleLogs, TestData, render_test_report_content
from jesthtmlreporter.document import render_document, write_report
from jesthtmlreporter.log import ensure_logging, log_message

logger = logging.getLogger(__name__)


class HTMLReporter:
    """Render one test run into an HTML report.

    Args:
        test_data: Aggregated run result, as a TestResultSet or the runner's mapping.
        options: Caller-supplied options (see ``jesthtmlreporter.config``).
        console_logs: Captured console output grouped by test file, as
            ConsoleLogGroup instances or ``{filePath, logs}`` mappings.
        cwd: Working directory for config lookup and relative paths.
        environ: Environment mapping used for option overrides.
    """

    def __init__(
        self,
        test_data: TestData,
        options: Optional[Mapping[str, Any]] = None,
        console_logs: ConsoleLogs = None,
        *,
        cwd: str | Path | None = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.test_data = test_data
        self.console_log_list = console_logs
        self.config = ConfigResolver(options, cwd=cwd, environ=environ)

    def get_config_value(self, key: str) -> Any:
        return self.config.get_config_value(key)

    @property
    def output_path(self) -> Path:
        path = Path(self.config.get_str("outputPath") or "")
        if not path.is_absolute():
            path = self.config.cwd / path
        return path

    def render_test_report_content(self) -> ET.Element:
        """Report body element. Raises ReporterError on empty input."""
        return render_test_report_content(self.test_data, self.config, self.console_log_list)

    def render_test_report(self) -> str:
        """Complete report document as a string."""
        return render_document(self.render_test_report_content(), self.config)

    def generate(self) -> Optional[str]:
        """Render the report and write it to the output path.

        Never raises: failures are logged and None is returned, in which case
        nothing has been written.
        """
        ensure_logging()
        try:
            report = self.render_test_report()
            output_path = write_report(
                report,
                self.output_path,
                append=self.config.get_bool("append"),
            )
        except Exception as e:
            log_message("error", e)
            logger.debug("Report generation failed", exc_info=True)
            return None

        log_message("success", f"Report generated ({output_path})")
        return report
