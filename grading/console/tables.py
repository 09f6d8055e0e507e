"""
ASCII table rendering for the console.
"""

from typing import List, Optional, Sequence, Tuple

from ..core.entities import MarkEntry, StudentRecord
from ..core.enums import MAX_STUDENT_NAME_LENGTH
from ..core.subjects import SUBJECTS

ATTEMPT_WIDTH = 8
DATE_WIDTH = 10
MARK_WIDTH = 8
AVG_WIDTH = 8
STATUS_WIDTH = 10
NUMBER_WIDTH = 15
NAME_WIDTH = MAX_STUDENT_NAME_LENGTH

SHORT_DATE_FORMAT = "%m/%d/%y"


def border(widths: Sequence[int]) -> str:
    return "+" + "+".join("-" * width for width in widths) + "+"


def row(cells: Sequence[str], widths: Sequence[int]) -> str:
    return "|" + "|".join(cell.ljust(width) for cell, width in zip(cells, widths)) + "|"


def _record_widths() -> List[int]:
    return [ATTEMPT_WIDTH, DATE_WIDTH] + [MARK_WIDTH] * len(SUBJECTS) + [AVG_WIDTH, STATUS_WIDTH]


def _record_header() -> List[str]:
    return ["Attempt", "Date"] + [subject.code for subject in SUBJECTS] + ["Avg", "Status"]


def _entry_marks(entry: Optional[MarkEntry]) -> List[str]:
    if entry is None:
        return ["N/A"] * len(SUBJECTS)
    return [str(mark) for mark in entry.marks]


def render_record(record: StudentRecord) -> str:
    """Render the summary table and mark history of one student."""
    widths = _record_widths()
    header = _record_header()
    latest = record.latest_marks
    status = latest.pass_status.value if latest is not None else "No Marks"

    lines = [
        "",
        f"Student Record Summary: {record.student_number} - {record.student_name}",
        border(widths),
        row(header, widths),
        border(widths),
        row(["Latest", record.last_modified.strftime(SHORT_DATE_FORMAT)]
            + _entry_marks(latest)
            + [f"{record.average_mark:.1f}", status], widths),
        border(widths),
    ]

    if record.has_marks:
        lines.extend(["", "Mark History:", border(widths), row(header, widths), border(widths)])
        for attempt, entry in enumerate(record.marks_history, start=1):
            lines.append(row(
                [str(attempt), entry.timestamp.strftime(SHORT_DATE_FORMAT)]
                + _entry_marks(entry)
                + [f"{entry.average_mark:.1f}", entry.pass_status.value],
                widths
            ))
        lines.append(border(widths))
        lines.append("")
        lines.append(f"Pass Count: {record.pass_count} | Fail Count: {record.fail_count}")
        lines.append(
            f"Highest Average: {record.highest_average_mark:.2f} | "
            f"Lowest Average: {record.lowest_average_mark:.2f}"
        )

    return "\n".join(lines)


def render_student_list(students: Sequence[Tuple[str, str]]) -> str:
    """Render student numbers and names as a two-column table."""
    if not students:
        return "No students in the system."

    widths = [NUMBER_WIDTH, NAME_WIDTH]
    lines = [border(widths), row(["Student Number", "Student Name"], widths), border(widths)]
    for number, name in students:
        lines.append(row([number, name], widths))
    lines.append(border(widths))
    lines.append("")
    lines.append(f"Total Students: {len(students)}")
    return "\n".join(lines)


def render_subjects() -> str:
    """Render the numbered list of subjects marks are entered for."""
    lines = ["Enter marks for the following subjects:", "-" * 40]
    for index, subject in enumerate(SUBJECTS, start=1):
        lines.append(f"{index}. {subject}")
    return "\n".join(lines)
