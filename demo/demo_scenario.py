#!/usr/bin/env python3
"""
Demo scenario for the Student Grading System.
"""

import sys
import os
import tempfile

# Add the project root to the Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from grading.config import GradingConfig
from grading.console import render_record
from grading.core.exceptions import GradingError, ValidationError
from grading.main import GradingApplication


def run_demo():
    """Run a walk-through of the grading system against a scratch data file."""
    print("=" * 60)
    print("STUDENT GRADING SYSTEM - DEMO")
    print("=" * 60)

    workdir = tempfile.mkdtemp(prefix="grading-demo-")
    config = GradingConfig(
        data_file=os.path.join(workdir, "students.json"),
        export_dir=os.path.join(workdir, "exports"),
    )
    application = GradingApplication(config)

    try:
        print("\n1. Creating a student and entering marks...")
        student_number = demonstrate_mark_entry(application)

        print("\n2. Demonstrating validation...")
        demonstrate_validation(application, student_number)

        print("\n3. Reloading the registry from disk...")
        demonstrate_reload(config, student_number)

        print("\n4. Exporting to CSV...")
        demonstrate_export(application)

        print("\n5. System statistics...")
        show_statistics(application)

        print("\n" + "=" * 60)
        print("DEMO COMPLETED SUCCESSFULLY!")
        print("=" * 60)

    except GradingError as e:
        print(f"\nDemo failed with error: {e.message}")
        import traceback
        traceback.print_exc()


def demonstrate_mark_entry(application):
    """Create Jane Doe and record a passing and a failing attempt."""
    registry = application.registry
    student_number = registry.create_new_record("Jane Doe")
    print(f"  Created Jane Doe with student number {student_number}")

    first = registry.enter_marks(student_number, {
        "CS101": 85, "CS102": 92, "CS103": 78, "CS104": 88, "CS105": 90, "CS106": 87
    })
    print(f"  First attempt: average {first.average_mark:.2f}, {first.pass_status.value}")

    second = registry.update_marks(student_number, {
        "CS101": 30, "CS102": 92, "CS103": 78, "CS104": 88, "CS105": 90, "CS106": 87
    })
    failed = ", ".join(subject.code for subject in second.failed_subjects)
    print(f"  Second attempt: average {second.average_mark:.2f}, {second.pass_status.value} (below pass mark: {failed})")

    print(render_record(registry.get_student(student_number)))
    return student_number


def demonstrate_validation(application, student_number):
    """Show that bad input is rejected without changing the record."""
    registry = application.registry
    attempts_before = registry.get_student(student_number).marks_history_count

    bad_inputs = [
        ("missing subject", {"CS101": 50, "CS102": 50, "CS103": 50, "CS104": 50, "CS105": 50}),
        ("mark above 100", {"CS101": 101, "CS102": 50, "CS103": 50, "CS104": 50, "CS105": 50, "CS106": 50}),
    ]
    for label, marks in bad_inputs:
        try:
            registry.enter_marks(student_number, marks)
        except ValidationError as e:
            print(f"  Rejected {label}: {e.message}")

    try:
        registry.create_new_record("x" * 51)
    except ValidationError as e:
        print(f"  Rejected long name: {e.message}")

    attempts_after = registry.get_student(student_number).marks_history_count
    print(f"  Attempts before: {attempts_before}, after: {attempts_after}")


def demonstrate_reload(config, student_number):
    """Open a second application on the same data file."""
    reloaded = GradingApplication(config)
    record = reloaded.registry.get_student(student_number)
    print(f"  Reloaded {record} with {record.marks_history_count} attempts")
    print(f"  Pass count: {record.pass_count}, fail count: {record.fail_count}")


def demonstrate_export(application):
    """Export every record to a CSV file."""
    application.registry.create_new_record("Amara Okafor")
    path = application.exporter.export(application.registry.records(), "demo export")
    print(f"  Exported to {path}")
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            print(f"    {line.rstrip()}")


def show_statistics(application):
    """Show registry statistics."""
    stats = application.registry.get_statistics()
    print(f"    Total students: {stats.student_count}")
    print(f"    Students with marks: {stats.students_with_marks}")
    print(f"    Total attempts: {stats.total_attempts}")
    print(f"    Average pass rate: {stats.average_pass_rate:.2f}%")


if __name__ == "__main__":
    run_demo()
