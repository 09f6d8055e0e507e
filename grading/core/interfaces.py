"""
Core interfaces and abstract base classes for the grading system.
"""

from abc import ABC, abstractmethod
from typing import Iterable, List

from .entities import StudentRecord
from .enums import ExportFormat


class RecordStore(ABC):
    """Interface for loading and saving the full set of student records."""
    
    @abstractmethod
    def load(self) -> List[StudentRecord]:
        """Load every persisted student record."""
        pass
    
    @abstractmethod
    def save(self, records: Iterable[StudentRecord]) -> None:
        """Replace the persisted state with the given records."""
        pass


class Exporter(ABC):
    """Interface for writing student records to an external format."""
    
    @abstractmethod
    def build_rows(self, records: Iterable[StudentRecord]) -> List[List[str]]:
        """Build the tabular rows for the given records, header first."""
        pass
    
    @abstractmethod
    def export(self, records: Iterable[StudentRecord], filename: str) -> str:
        """Write the records and return the path of the created file."""
        pass
    
    @abstractmethod
    def get_format(self) -> ExportFormat:
        """Get the format this exporter produces."""
        pass
