"""
CSV export of student records and their mark history.
"""

import csv
import logging
import os
import re
from datetime import datetime
from typing import Iterable, List, Optional

from ..core.entities import StudentRecord
from ..core.enums import ExportFormat
from ..core.exceptions import PersistenceError, ValidationError
from ..core.interfaces import Exporter
from ..core.subjects import SUBJECTS

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def sanitize_filename(filename: str) -> str:
    """Replace characters that are unsafe in file names with underscores."""
    return _UNSAFE_FILENAME_CHARS.sub("_", filename.strip())


class CsvExporter(Exporter):
    """Writes one row per student attempt to a timestamped CSV file."""

    DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
    FILE_STAMP_FORMAT = "%Y%m%d_%H%M%S"

    def __init__(self, export_dir: str = "exports"):
        self._export_dir = export_dir

    @property
    def export_dir(self) -> str:
        return self._export_dir

    def get_format(self) -> ExportFormat:
        return ExportFormat.CSV

    @staticmethod
    def header() -> List[str]:
        return (["Student Number", "Student Name", "Attempt Date"]
                + [subject.code for subject in SUBJECTS]
                + ["Average", "Status"])

    def build_rows(self, records: Iterable[StudentRecord]) -> List[List[str]]:
        """Build header and data rows, ordered by student number then attempt."""
        header = self.header()
        rows = [header]

        for record in sorted(records, key=lambda r: r.student_number):
            if not record.has_marks:
                row = [record.student_number, record.student_name]
                row.extend([""] * (len(header) - len(row)))
                rows.append(row)
                continue

            for entry in record.marks_history:
                row = [
                    record.student_number,
                    record.student_name,
                    entry.timestamp.strftime(self.DATE_FORMAT)
                ]
                row.extend(str(mark) for mark in entry.marks)
                row.append(f"{entry.average_mark:.2f}")
                row.append(entry.pass_status.value)
                rows.append(row)

        return rows

    def export(self, records: Iterable[StudentRecord], filename: str,
               now: Optional[datetime] = None) -> str:
        """Export records to CSV and return the absolute path of the file."""
        if not isinstance(filename, str) or not filename.strip():
            raise ValidationError("Filename cannot be empty.", error_code="empty_filename")

        stamp = (now or datetime.now()).strftime(self.FILE_STAMP_FORMAT)
        path = os.path.join(self._export_dir, f"{sanitize_filename(filename)}_{stamp}.csv")
        rows = self.build_rows(records)

        try:
            os.makedirs(self._export_dir, exist_ok=True)
            with open(path, "w", encoding="utf-8", newline="") as f:
                csv.writer(f).writerows(rows)
        except OSError as e:
            logger.error("Failed to export to %s: %s", path, e)
            raise PersistenceError(f"Failed to export data: {str(e)}")

        logger.info("Exported %d rows to %s", len(rows) - 1, path)
        return os.path.abspath(path)
