"""
JSON file record store.
"""

import json
import logging
import os
import tempfile
import threading
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from pydantic import ValidationError as SchemaValidationError

from ..core.entities import MarkEntry, StudentRecord
from ..core.exceptions import PersistenceError, ValidationError
from ..core.interfaces import RecordStore
from .schemas import RegistryDocument, StudentRecordDocument

logger = logging.getLogger(__name__)


def build_document(records: Iterable[StudentRecord]) -> Dict[str, Any]:
    """Build the persisted document for a set of records, ordered by number."""
    ordered = sorted(records, key=lambda record: record.student_number)
    return {
        "students": [record.to_dict() for record in ordered],
        "lastUpdated": datetime.now(timezone.utc).isoformat()
    }


def records_from_document(data: Any) -> List[StudentRecord]:
    """Validate a raw document and rebuild the student records it holds."""
    try:
        document = RegistryDocument.model_validate(data)
    except SchemaValidationError as e:
        raise PersistenceError(f"Data file does not match the expected layout: {e}")

    records: List[StudentRecord] = []
    seen = set()
    for student in document.students:
        if student.student_number in seen:
            raise PersistenceError(f"Duplicate student number in data file: {student.student_number}")
        seen.add(student.student_number)
        records.append(_record_from_document(student))
    return records


def _record_from_document(student: StudentRecordDocument) -> StudentRecord:
    try:
        history = [
            MarkEntry(entry.subject_marks, timestamp=entry.timestamp)
            for entry in student.marks_history
        ]
        return StudentRecord(
            student.student_number,
            student.student_name,
            marks_history=history,
            created_at=student.created_at,
            last_modified=student.last_modified
        )
    except ValidationError as e:
        raise PersistenceError(
            f"Invalid record {student.student_number} in data file: {e.message}",
            details={"student_number": student.student_number}
        )


class JsonRecordStore(RecordStore):
    """Stores all student records in a single JSON document."""

    def __init__(self, path: str = os.path.join("data", "students.json")):
        self._path = path
        self._lock = threading.RLock()

    @property
    def path(self) -> str:
        return self._path

    def _ensure_directory_exists(self) -> None:
        """Ensure the data directory exists."""
        directory = os.path.dirname(os.path.abspath(self._path))
        os.makedirs(directory, exist_ok=True)

    def load(self) -> List[StudentRecord]:
        """Load records from the data file; a missing file means no records."""
        with self._lock:
            if not os.path.exists(self._path):
                logger.info("No data file at %s, starting empty", self._path)
                return []

            try:
                with open(self._path, "r", encoding="utf-8") as f:
                    data = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                logger.error("Failed to read data file %s: %s", self._path, e)
                raise PersistenceError(f"Failed to load student data: {str(e)}")

            records = records_from_document(data)
            logger.info("Loaded %d student records from %s", len(records), self._path)
            return records

    def save(self, records: Iterable[StudentRecord]) -> None:
        """Write all records to a temporary file, then swap it into place."""
        with self._lock:
            document = build_document(records)
            tmp_path: Optional[str] = None
            try:
                self._ensure_directory_exists()
                fd, tmp_path = tempfile.mkstemp(
                    prefix=".students-", suffix=".tmp",
                    dir=os.path.dirname(os.path.abspath(self._path))
                )
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(document, f, indent=2)
                    f.flush()
                    os.fsync(f.fileno())
                os.replace(tmp_path, self._path)
                tmp_path = None
            except OSError as e:
                logger.error("Failed to save data file %s: %s", self._path, e)
                raise PersistenceError(f"Failed to save student data: {str(e)}")
            finally:
                if tmp_path is not None and os.path.exists(tmp_path):
                    os.remove(tmp_path)

            logger.info("Saved %d student records to %s", len(document["students"]), self._path)


class InMemoryRecordStore(RecordStore):
    """Keeps the last saved document in memory."""

    def __init__(self, document: Optional[Dict[str, Any]] = None):
        self._document = document
        self._save_count = 0

    @property
    def document(self) -> Optional[Dict[str, Any]]:
        return self._document

    @property
    def save_count(self) -> int:
        return self._save_count

    def load(self) -> List[StudentRecord]:
        if self._document is None:
            return []
        return records_from_document(self._document)

    def save(self, records: Iterable[StudentRecord]) -> None:
        # Round-trip through JSON so stored state matches what a file would hold
        self._document = json.loads(json.dumps(build_document(records)))
        self._save_count += 1
