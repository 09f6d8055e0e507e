"""
Core module containing the subject catalog, record model and exceptions.
"""

from .subjects import *
from .entities import *
from .interfaces import *
from .exceptions import *
from .enums import *

__all__ = [
    # Subjects
    "Subject",
    "SUBJECTS",
    "get_by_code",
    "subject_codes",
    
    # Entities
    "MarkEntry",
    "StudentRecord",
    "validate_student_number",
    "validate_student_name",
    
    # Interfaces
    "RecordStore",
    "Exporter",
    
    # Enums
    "PassStatus",
    "ExportFormat",
    
    # Exceptions
    "GradingError",
    "ValidationError",
    "ResourceNotFoundError",
    "ResourceExhaustedError",
    "PersistenceError",
    "ConfigurationError",
]
