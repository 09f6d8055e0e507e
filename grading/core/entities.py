"""
Core entities for the grading system: mark entries and student records.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from .enums import (
    PassStatus, MIN_MARK, MAX_MARK, STUDENT_NUMBER_LENGTH, MAX_STUDENT_NAME_LENGTH
)
from .exceptions import ValidationError
from .subjects import SUBJECTS, Subject, subject_index


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def validate_student_number(student_number: Any) -> str:
    """Validate an 8-digit student number and return it unchanged."""
    if not isinstance(student_number, str) or not student_number.strip():
        raise ValidationError("Student number cannot be empty.", error_code="empty_number")
    if len(student_number) != STUDENT_NUMBER_LENGTH or not is_ascii_digits(student_number):
        raise ValidationError(
            f"Student number must be {STUDENT_NUMBER_LENGTH} digits.",
            error_code="invalid_number",
            details={"student_number": student_number}
        )
    return student_number


def validate_student_name(student_name: Any) -> str:
    """Validate a student name and return it trimmed."""
    if not isinstance(student_name, str) or not student_name.strip():
        raise ValidationError("Student name cannot be empty.", error_code="empty_name")
    trimmed = student_name.strip()
    if len(trimmed) > MAX_STUDENT_NAME_LENGTH:
        raise ValidationError(
            f"Student name cannot exceed {MAX_STUDENT_NAME_LENGTH} characters.",
            error_code="name_too_long",
            details={"length": len(trimmed)}
        )
    return trimmed


def is_ascii_digits(value: str) -> bool:
    # str.isdigit() also accepts superscripts and other Unicode digits
    return all("0" <= ch <= "9" for ch in value)


class MarkEntry:
    """
    Immutable record of one assessment attempt.

    Marks are held in catalog order, one per subject. Average and pass
    status are derived from them on every access.
    """

    __slots__ = ("_marks", "_timestamp")

    def __init__(self, subject_marks: Mapping[str, int], timestamp: Optional[datetime] = None):
        self._marks = self._validate(subject_marks)
        self._timestamp = timestamp or _utcnow()

    @staticmethod
    def _validate(subject_marks: Any) -> Tuple[int, ...]:
        if subject_marks is None:
            raise ValidationError("Marks cannot be empty.", error_code="missing_marks")
        if not isinstance(subject_marks, Mapping):
            raise ValidationError("Marks must be a mapping of subject code to mark.", error_code="invalid_marks")

        if len(subject_marks) != len(SUBJECTS):
            raise ValidationError(
                f"Exactly {len(SUBJECTS)} subject marks are required.",
                error_code="wrong_mark_count",
                details={"received": len(subject_marks)}
            )

        ordered: List[Optional[int]] = [None] * len(SUBJECTS)
        for code, mark in subject_marks.items():
            # bool is an int subclass
            if isinstance(mark, bool) or not isinstance(mark, int):
                raise ValidationError(
                    f"Mark for {code} must be a whole number.",
                    error_code="invalid_mark",
                    details={"subject": code, "mark": mark}
                )
            if not MIN_MARK <= mark <= MAX_MARK:
                raise ValidationError(
                    f"All marks must be between {MIN_MARK} and {MAX_MARK}.",
                    error_code="mark_out_of_range",
                    details={"subject": code, "mark": mark}
                )
            index = subject_index(code)
            if index is None:
                raise ValidationError(
                    f"Unknown subject code {code}.",
                    error_code="unknown_subject",
                    details={"subject": code}
                )
            ordered[index] = mark

        for subject, mark in zip(SUBJECTS, ordered):
            if mark is None:
                raise ValidationError(
                    f"Missing marks for subject {subject.code}",
                    error_code="missing_subject",
                    details={"subject": subject.code}
                )

        return tuple(ordered)

    @property
    def subject_marks(self) -> Dict[str, int]:
        """Get marks keyed by subject code, in catalog order."""
        return {subject.code: mark for subject, mark in zip(SUBJECTS, self._marks)}

    @property
    def marks(self) -> Tuple[int, ...]:
        """Get marks in catalog order."""
        return self._marks

    @property
    def timestamp(self) -> datetime:
        return self._timestamp

    @property
    def average_mark(self) -> float:
        """Arithmetic mean of all subject marks."""
        return sum(self._marks) / len(self._marks)

    @property
    def pass_status(self) -> PassStatus:
        """PASS only when every subject meets its own passing mark."""
        if self.failed_subjects:
            return PassStatus.FAIL
        return PassStatus.PASS

    @property
    def failed_subjects(self) -> List[Subject]:
        """Subjects whose mark falls below the passing mark."""
        return [
            subject for subject, mark in zip(SUBJECTS, self._marks)
            if mark < subject.passing_mark
        ]

    def mark_for(self, code: str) -> Optional[int]:
        """Get the mark for a subject code, or None for unknown codes."""
        index = subject_index(code)
        if index is None:
            return None
        return self._marks[index]

    def to_dict(self) -> Dict[str, Any]:
        """Convert entry to its interchange dictionary."""
        return {
            'subjectMarks': self.subject_marks,
            'timestamp': self._timestamp.isoformat(),
            'averageMark': self.average_mark,
            'passStatus': self.pass_status.value
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MarkEntry):
            return NotImplemented
        return self._marks == other._marks and self._timestamp == other._timestamp

    def __hash__(self) -> int:
        return hash((self._marks, self._timestamp))

    def __repr__(self) -> str:
        return f"MarkEntry(average={self.average_mark:.2f}, status={self.pass_status.value})"


class TimestampedEntity:
    """Base class for entities that track creation and modification times."""

    def __init__(self, created_at: Optional[datetime] = None,
                 last_modified: Optional[datetime] = None):
        self._created_at = created_at or _utcnow()
        self._last_modified = last_modified or self._created_at

    @property
    def created_at(self) -> datetime:
        """Get creation timestamp."""
        return self._created_at

    @property
    def last_modified(self) -> datetime:
        """Get last modification timestamp."""
        return self._last_modified

    def touch(self) -> None:
        self._last_modified = _utcnow()


class StudentRecord(TimestampedEntity):
    """A student's identity and append-only history of mark entries."""

    def __init__(self, student_number: str, student_name: str,
                 marks_history: Optional[Iterable[MarkEntry]] = None, **kwargs):
        super().__init__(**kwargs)
        self._student_number = validate_student_number(student_number)
        self._student_name = validate_student_name(student_name)
        self._marks_history: List[MarkEntry] = list(marks_history or [])

    @property
    def student_number(self) -> str:
        return self._student_number

    @property
    def student_name(self) -> str:
        return self._student_name

    @property
    def marks_history(self) -> Tuple[MarkEntry, ...]:
        """Get a snapshot of the history in chronological order."""
        return tuple(self._marks_history)

    @property
    def marks_history_count(self) -> int:
        return len(self._marks_history)

    @property
    def has_marks(self) -> bool:
        return bool(self._marks_history)

    @property
    def latest_marks(self) -> Optional[MarkEntry]:
        """Get the most recent entry, or None when there is no history."""
        if not self._marks_history:
            return None
        return self._marks_history[-1]

    @property
    def average_mark(self) -> float:
        """Mean of all entries' averages."""
        if not self._marks_history:
            return 0.0
        return sum(entry.average_mark for entry in self._marks_history) / len(self._marks_history)

    @property
    def highest_average_mark(self) -> float:
        if not self._marks_history:
            return 0.0
        return max(entry.average_mark for entry in self._marks_history)

    @property
    def lowest_average_mark(self) -> float:
        if not self._marks_history:
            return 0.0
        return min(entry.average_mark for entry in self._marks_history)

    @property
    def pass_count(self) -> int:
        """Number of attempts passed, across the whole history."""
        return sum(1 for entry in self._marks_history if entry.pass_status is PassStatus.PASS)

    @property
    def fail_count(self) -> int:
        """Number of attempts failed, across the whole history."""
        return sum(1 for entry in self._marks_history if entry.pass_status is PassStatus.FAIL)

    def add_marks(self, subject_marks: Mapping[str, int]) -> MarkEntry:
        """Validate a mark set and append it to the history."""
        entry = MarkEntry(subject_marks)
        self._marks_history.append(entry)
        self.touch()
        return entry

    def withdraw_entry(self, entry: MarkEntry, last_modified: datetime) -> bool:
        """
        Undo the most recent add_marks call.

        Removes ``entry`` only when it is still the latest entry, and restores
        ``last_modified`` to the value it had before the append. Earlier
        entries are never touched.

        Returns:
            True if the entry was removed
        """
        if not self._marks_history or self._marks_history[-1] is not entry:
            return False
        self._marks_history.pop()
        self._last_modified = last_modified
        return True

    def to_dict(self) -> Dict[str, Any]:
        """Convert record to its interchange dictionary."""
        return {
            'studentNumber': self._student_number,
            'studentName': self._student_name,
            'marksHistory': [entry.to_dict() for entry in self._marks_history],
            'createdAt': self._created_at.isoformat(),
            'lastModified': self._last_modified.isoformat()
        }

    def __str__(self) -> str:
        return f"{self._student_number} - {self._student_name}"

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}(student_number={self._student_number}, "
                f"attempts={len(self._marks_history)})")
