"""
Fixed curriculum of Computer Science subjects.

The catalog is defined once at import time. Its order determines the order
marks are prompted for, stored, displayed and exported in.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Subject:
    """A curriculum subject with its passing threshold."""
    code: str
    name: str
    credit_hours: int
    passing_mark: int

    def __str__(self) -> str:
        return f"{self.code} - {self.name} ({self.credit_hours} credits)"


SUBJECTS: Tuple[Subject, ...] = (
    Subject("CS101", "Programming Fundamentals", 4, 40),
    Subject("CS102", "Object-Oriented Programming", 4, 40),
    Subject("CS103", "Data Structures", 4, 40),
    Subject("CS104", "Database Systems", 3, 40),
    Subject("CS105", "Web Development", 3, 40),
    Subject("CS106", "Computer Networks", 3, 40),
)

_BY_CODE = {subject.code.upper(): subject for subject in SUBJECTS}


def get_by_code(code: Optional[str]) -> Optional[Subject]:
    """Look up a subject by code, ignoring case. Returns None when unknown."""
    if not isinstance(code, str):
        return None
    return _BY_CODE.get(code.upper())


def subject_codes() -> Tuple[str, ...]:
    """Get subject codes in catalog order."""
    return tuple(subject.code for subject in SUBJECTS)


def subject_index(code: str) -> Optional[int]:
    """Get the catalog position of a subject code, or None when unknown."""
    subject = get_by_code(code)
    if subject is None:
        return None
    return SUBJECTS.index(subject)
