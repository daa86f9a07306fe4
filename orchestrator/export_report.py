"""
Export report formatting.

Turns an ExportReport into a console summary and a JSON document.
"""

import json
import logging
from typing import Optional

from models import ExportReport


class ExportReportFormatter:
    """Formats export reports for console display and JSON export."""

    MAX_LISTED_FAILURES = 20

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger('docc2html.orchestrator.export_report')

    def format_console_report(self, report: ExportReport) -> str:
        """
        Format report for console display.

        Args:
            report: Export report

        Returns:
            Formatted console string
        """
        sections = []

        sections.append("=" * 60)
        sections.append("EXPORT REPORT")
        sections.append("=" * 60)
        sections.append("")

        sections.append("Summary:")
        sections.append(f"  Target:      {report.target}")
        sections.append(f"  Archives:    {', '.join(report.archives) or 'none'}")
        sections.append(f"  State:       {report.state.value}")
        sections.append(f"  Resources:   {len(report.resources.copied)} copied, "
                        f"{len(report.resources.failed)} failed")
        sections.append(f"  Stylesheet:  {'written' if report.stylesheet_written else 'failed'}")
        sections.append(f"  Pages:       {len(report.pages.pages_written)} written, "
                        f"{len(report.pages.index_pages_written)} index, "
                        f"{len(report.pages.failures)} failed")
        sections.append(f"  Duration:    {report.duration:.2f}s")
        sections.append("")

        if report.total_errors:
            sections.append(f"Errors ({report.total_errors}):")
            sections.append("-" * 60)

            failures = [f"  page {failure.page}: {failure.error}"
                        for failure in report.pages.failures]
            failures += [f"  resource {failure.source}: {failure.error}"
                         for failure in report.resources.failed]
            if report.stylesheet_error:
                failures.append(f"  stylesheet: {report.stylesheet_error}")

            sections.extend(failures[:self.MAX_LISTED_FAILURES])
            if len(failures) > self.MAX_LISTED_FAILURES:
                sections.append(f"  ... and {len(failures) - self.MAX_LISTED_FAILURES} more")
            sections.append("")

        sections.append("=" * 60)

        return "\n".join(sections)

    def export_json_report(self, report: ExportReport, filepath: str) -> None:
        """
        Export report to JSON file.

        Args:
            report: Export report
            filepath: Output file path
        """
        try:
            with open(filepath, 'w', encoding='utf-8') as f:
                json.dump(report.to_dict(), f, indent=2, ensure_ascii=False)

            self.logger.info(f"JSON report exported to {filepath}")

        except OSError as e:
            self.logger.error(f"Failed to export JSON report: {str(e)}")


__all__ = ['ExportReportFormatter']
