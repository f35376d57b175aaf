"""CSV exporter for lighthouse-batch reports."""

import csv
import io
import logging
from pathlib import Path

from config.models import Report

logger = logging.getLogger(__name__)


class CSVExporter:
    """Writes a Report as delimiter-separated text: header line, then one line per page."""

    def __init__(self, delimiter: str = ","):
        self.delimiter = delimiter

    # -------------------------------------------------------------------------
    # Public Methods
    # -------------------------------------------------------------------------

    def export_report(self, report: Report, include_header: bool = True) -> str:
        """Generate CSV string from a Report."""
        buffer = io.StringIO()
        writer = csv.writer(buffer, delimiter=self.delimiter, lineterminator="\n")
        if include_header:
            writer.writerow(report.headers)
        for row in report.rows:
            writer.writerow(row)
        return buffer.getvalue()

    def write_report(self, report: Report, path: str, append: bool = False) -> Path:
        """
        Write the report to a file. In append mode the header is only written
        when the file is missing or empty.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)

        include_header = True
        if append and target.exists() and target.stat().st_size > 0:
            include_header = False

        try:
            with open(target, "a" if append else "w", encoding="utf-8", newline="") as f:
                f.write(self.export_report(report, include_header=include_header))
        except OSError as e:
            logger.error(f"Failed to write report to {target}: {e}")
            raise

        logger.info(f"Wrote {len(report.rows)} row(s) to {target}")
        return target
