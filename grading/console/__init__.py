"""
Console presentation layer: menu loop and table rendering.
"""

from .menu import ConsoleApp
from .tables import render_record, render_student_list, render_subjects

__all__ = [
    "ConsoleApp",
    "render_record",
    "render_student_list",
    "render_subjects",
]
