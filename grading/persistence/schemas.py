"""
Pydantic documents describing the persisted JSON layout.

Field names follow the lower-camel-case interchange keys; Python attribute
names stay snake_case.
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt


class MarkEntryDocument(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    subject_marks: Dict[str, StrictInt] = Field(..., alias="subjectMarks")
    timestamp: datetime
    # Derived values are written for readers of the file and recomputed on load
    average_mark: Optional[float] = Field(None, alias="averageMark")
    pass_status: Optional[str] = Field(None, alias="passStatus")


class StudentRecordDocument(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    student_number: str = Field(..., alias="studentNumber")
    student_name: str = Field(..., alias="studentName")
    marks_history: List[MarkEntryDocument] = Field(default_factory=list, alias="marksHistory")
    created_at: datetime = Field(..., alias="createdAt")
    last_modified: datetime = Field(..., alias="lastModified")


class RegistryDocument(BaseModel):
    """Top-level document of the data file."""
    model_config = ConfigDict(populate_by_name=True)

    students: List[StudentRecordDocument] = Field(default_factory=list)
    last_updated: Optional[datetime] = Field(None, alias="lastUpdated")
