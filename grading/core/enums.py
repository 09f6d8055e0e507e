"""
Enumerations and constants for the grading system.
"""

from enum import Enum


class PassStatus(Enum):
    """Outcome of a single assessment attempt."""
    PASS = "PASS"
    FAIL = "FAIL"


class ExportFormat(Enum):
    """Supported export formats."""
    CSV = "csv"


# Bounds shared by every subject
MIN_MARK = 0
MAX_MARK = 100

STUDENT_NUMBER_LENGTH = 8
STUDENT_NUMBER_MIN = 10_000_000
STUDENT_NUMBER_MAX = 99_999_999
MAX_STUDENT_NAME_LENGTH = 50
