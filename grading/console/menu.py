"""
Interactive menu loop for the grading system.
"""

import sys
from typing import Callable, Dict, Optional

from ..core.enums import MIN_MARK, MAX_MARK
from ..core.exceptions import GradingError
from ..core.subjects import SUBJECTS
from ..services.export_service import CsvExporter
from ..services.registry import Registry
from .tables import render_record, render_student_list, render_subjects


def _console_supports_utf8() -> bool:
    encoding = getattr(sys.stdout, "encoding", None)
    return encoding is not None and "utf" in encoding.lower()


_OK_CHAR = "✓" if _console_supports_utf8() else "[OK]"
_FAIL_CHAR = "✗" if _console_supports_utf8() else "[FAIL]"

MENU = """
=== Main Menu ===
1. Create New Student Record
2. Enter Marks for Student
3. Update Student Marks
4. Show Student Record
5. Show All Students
6. Show System Statistics
7. Export Data to CSV
8. Exit"""


class ConsoleApp:
    """Menu-driven console front end over a registry."""

    def __init__(self, registry: Registry, exporter: CsvExporter,
                 input_fn: Callable[[str], str] = input,
                 output_fn: Callable[[str], None] = print):
        self._registry = registry
        self._exporter = exporter
        self._input = input_fn
        self._output = output_fn
        self._actions: Dict[str, Callable[[], None]] = {
            "1": self.create_student,
            "2": self.enter_marks,
            "3": self.update_marks,
            "4": self.show_record,
            "5": self.show_all_students,
            "6": self.show_statistics,
            "7": self.export_csv,
        }

    def run(self) -> None:
        """Run the menu until the user exits or input ends."""
        self._output("Welcome to the Student Grading System!")
        try:
            while True:
                self._output(MENU)
                choice = self._input("\nEnter your choice (1-8): ").strip()

                if choice == "8":
                    if self._confirm_exit():
                        break
                    continue

                action = self._actions.get(choice)
                if action is None:
                    self._error("Invalid choice. Please try again.")
                    continue

                try:
                    action()
                except GradingError as e:
                    self._error(e.message)
        except (EOFError, KeyboardInterrupt):
            self._output("")

        self._output("Goodbye!")

    def _error(self, message: str) -> None:
        self._output(f"\n{_FAIL_CHAR} Error: {message}")

    def _success(self, message: str) -> None:
        self._output(f"\n{_OK_CHAR} {message}")

    def _confirm_exit(self) -> bool:
        response = self._input("\nAre you sure you want to exit? (y/n): ").strip().lower()
        return response in ("y", "yes")

    def _prompt_student_number(self) -> Optional[str]:
        student_number = self._input("Enter student number: ").strip()
        if not student_number:
            self._error("Student number cannot be empty.")
            return None
        if not self._registry.contains(student_number):
            self._error("Student record not found.")
            return None
        return student_number

    def _prompt_marks(self) -> Dict[str, int]:
        self._output("")
        self._output(render_subjects())
        self._output(f"\nEnter marks for each subject ({MIN_MARK}-{MAX_MARK}):")

        marks: Dict[str, int] = {}
        for subject in SUBJECTS:
            while True:
                raw = self._input(f"Enter mark for {subject.code} ({subject.name}): ").strip()
                if not raw:
                    self._output("Error: Mark cannot be empty.")
                    continue
                try:
                    mark = int(raw)
                except ValueError:
                    mark = None
                if mark is None or not MIN_MARK <= mark <= MAX_MARK:
                    self._output(f"Error: Please enter a valid number between {MIN_MARK} and {MAX_MARK}.")
                    continue
                marks[subject.code] = mark
                break
        return marks

    def create_student(self) -> None:
        self._output("\n=== Create New Student Record ===")
        name = self._input("Enter student name: ").strip()
        student_number = self._registry.create_new_record(name)
        self._success("Student record created successfully!")
        self._output(f"Student Number: {student_number}")

    def enter_marks(self) -> None:
        self._output("\n=== Enter Marks ===")
        student_number = self._prompt_student_number()
        if student_number is None:
            return
        entry = self._registry.enter_marks(student_number, self._prompt_marks())
        self._success(f"Marks entered successfully! Average: {entry.average_mark:.2f} ({entry.pass_status.value})")

    def update_marks(self) -> None:
        self._output("\n=== Update Marks ===")
        student_number = self._prompt_student_number()
        if student_number is None:
            return
        record = self._registry.get_student(student_number)
        if record.has_marks:
            self._output("\nCurrent marks for student:")
            self._output(render_record(record))
        entry = self._registry.update_marks(student_number, self._prompt_marks())
        self._success(f"Marks updated successfully! Average: {entry.average_mark:.2f} ({entry.pass_status.value})")

    def show_record(self) -> None:
        self._output("\n=== Show Student Record ===")
        student_number = self._prompt_student_number()
        if student_number is None:
            return
        self._output(render_record(self._registry.get_student(student_number)))

    def show_all_students(self) -> None:
        self._output("\n=== All Students ===")
        self._output(render_student_list(self._registry.list_students()))

    def show_statistics(self) -> None:
        stats = self._registry.get_statistics()
        self._output("\n=== System Statistics ===")
        self._output(f"Total Students: {stats.student_count}")
        self._output(f"Students With Marks: {stats.students_with_marks}")
        self._output(f"Total Attempts: {stats.total_attempts}")
        self._output(f"Average Pass Rate: {stats.average_pass_rate:.2f}%")

    def export_csv(self) -> None:
        self._output("\n=== Export Data to CSV ===")
        filename = self._input("Enter filename (without extension): ").strip()
        path = self._exporter.export(self._registry.records(), filename)
        self._success(f"Data exported successfully to: {path}")
