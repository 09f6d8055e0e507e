"""
Student Grading System: student records and per-attempt subject marks

Tracks student records against a fixed six-subject curriculum, derives
averages and pass/fail statistics from each student's attempt history,
and persists the whole registry to a JSON file behind a console menu.
"""

__version__ = "1.0.0"
__author__ = "Grading System Development Team"
__description__ = "Student records, subject marks and pass-rate statistics"
