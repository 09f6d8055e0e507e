"""
Services module containing the student registry and export services.
"""

from .registry import Registry, RegistryStatistics
from .export_service import CsvExporter, sanitize_filename

__all__ = [
    "Registry",
    "RegistryStatistics",
    "CsvExporter",
    "sanitize_filename",
]
