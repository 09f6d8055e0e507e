"""
Persistence module for storing student records.
"""

from .json_store import JsonRecordStore, InMemoryRecordStore, build_document, records_from_document
from .schemas import RegistryDocument, StudentRecordDocument, MarkEntryDocument

__all__ = [
    "JsonRecordStore",
    "InMemoryRecordStore",
    "build_document",
    "records_from_document",
    "RegistryDocument",
    "StudentRecordDocument",
    "MarkEntryDocument",
]
