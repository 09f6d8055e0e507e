"""
Student registry: record lifecycle, mark entry and system-wide statistics.
"""

import logging
import random
import threading
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Tuple

from ..core.entities import MarkEntry, StudentRecord, validate_student_name
from ..core.enums import PassStatus, STUDENT_NUMBER_MIN, STUDENT_NUMBER_MAX
from ..core.exceptions import (
    ConfigurationError, PersistenceError, ResourceExhaustedError, ResourceNotFoundError
)
from ..core.interfaces import RecordStore

logger = logging.getLogger(__name__)

DEFAULT_MAX_NUMBER_ATTEMPTS = 100


@dataclass
class RegistryStatistics:
    """Snapshot of system-wide statistics."""
    student_count: int
    students_with_marks: int
    average_pass_rate: float
    total_attempts: int


class Registry:
    """
    Owns every student record, keyed by student number.

    Every mutation is persisted through the record store before it is
    acknowledged. When the store fails, the in-memory change is rolled back
    and the PersistenceError propagates.
    """

    def __init__(self, store: RecordStore, rng: Optional[random.Random] = None,
                 max_number_attempts: int = DEFAULT_MAX_NUMBER_ATTEMPTS):
        if max_number_attempts < 1:
            raise ConfigurationError(
                "max_number_attempts must be at least 1",
                details={"max_number_attempts": max_number_attempts}
            )
        self._store = store
        self._rng = rng or random.Random()
        self._max_number_attempts = max_number_attempts
        self._students: Dict[str, StudentRecord] = {}
        self._lock = threading.RLock()

        self._load()

    def _load(self) -> None:
        """Load all records from the store."""
        with self._lock:
            self._students = {record.student_number: record for record in self._store.load()}

    def _persist(self) -> None:
        self._store.save(self._students.values())

    def create_new_record(self, student_name: str) -> str:
        """Create a record under a fresh 8-digit number and return the number."""
        name = validate_student_name(student_name)

        with self._lock:
            student_number = self._generate_unique_number()
            record = StudentRecord(student_number, name)
            self._students[student_number] = record
            try:
                self._persist()
            except PersistenceError:
                del self._students[student_number]
                logger.warning("Rolled back creation of %s after save failure", student_number)
                raise

        logger.info("Created student record %s", student_number)
        return student_number

    def _generate_unique_number(self) -> str:
        for attempt in range(1, self._max_number_attempts + 1):
            candidate = str(self._rng.randint(STUDENT_NUMBER_MIN, STUDENT_NUMBER_MAX))
            if candidate not in self._students:
                return candidate
            logger.warning("Student number collision on attempt %d", attempt)

        raise ResourceExhaustedError(
            "Unable to generate unique student number after multiple attempts.",
            details={"attempts": self._max_number_attempts}
        )

    def get_student(self, student_number: Optional[str]) -> Optional[StudentRecord]:
        """Get a record by number; None for unknown or malformed input."""
        if not isinstance(student_number, str) or not student_number.strip():
            return None
        return self._students.get(student_number)

    def contains(self, student_number: Optional[str]) -> bool:
        return self.get_student(student_number) is not None

    def enter_marks(self, student_number: str, subject_marks: Mapping[str, int]) -> MarkEntry:
        """Append a new attempt to a student's history and persist it."""
        with self._lock:
            record = self.get_student(student_number)
            if record is None:
                raise ResourceNotFoundError(
                    "Student record not found.",
                    details={"student_number": student_number}
                )

            previous_modified = record.last_modified
            entry = record.add_marks(subject_marks)
            try:
                self._persist()
            except PersistenceError:
                record.withdraw_entry(entry, previous_modified)
                logger.warning("Rolled back marks for %s after save failure", record.student_number)
                raise

        logger.info("Recorded attempt %d for %s (%s)",
                    record.marks_history_count, record.student_number, entry.pass_status.value)
        return entry

    def update_marks(self, student_number: str, subject_marks: Mapping[str, int]) -> MarkEntry:
        """Add a further attempt. Earlier attempts stay in the history."""
        return self.enter_marks(student_number, subject_marks)

    def list_student_numbers(self) -> List[str]:
        return sorted(self._students)

    def list_students(self) -> List[Tuple[str, str]]:
        """Get (number, name) pairs ordered by name."""
        records = sorted(self._students.values(),
                         key=lambda r: (r.student_name, r.student_number))
        return [(r.student_number, r.student_name) for r in records]

    def records(self) -> List[StudentRecord]:
        """Get all records ordered by student number."""
        return [self._students[number] for number in sorted(self._students)]

    @property
    def student_count(self) -> int:
        return len(self._students)

    @property
    def average_pass_rate(self) -> float:
        """Percentage of students with marks whose latest attempt passed."""
        with_marks = [r for r in self._students.values() if r.has_marks]
        if not with_marks:
            return 0.0

        passed = sum(1 for r in with_marks if r.latest_marks.pass_status is PassStatus.PASS)
        return passed / len(with_marks) * 100

    def get_statistics(self) -> RegistryStatistics:
        """Get registry statistics."""
        with self._lock:
            return RegistryStatistics(
                student_count=self.student_count,
                students_with_marks=sum(1 for r in self._students.values() if r.has_marks),
                average_pass_rate=self.average_pass_rate,
                total_attempts=sum(r.marks_history_count for r in self._students.values())
            )
