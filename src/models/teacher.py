"""
Teacher models mapping to the Supabase ``public.teachers`` table.

Column names follow the existing schema (Indonesian field names) so rows can
be validated directly from query results.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator


class StatusTone(str, Enum):
    """Three-tier performance tone used for badges."""
    LOW = "low"
    MID = "mid"
    HIGH = "high"


class TeacherStatus(BaseModel):
    """Performance status label derived from the average score."""
    label: str
    tone: StatusTone


class TeacherRecord(BaseModel):
    """Maps to public.teachers table."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    nama: str
    mata_pelajaran: str
    pengalaman_mengajar: str = ""
    penilaian_kehadiran: float
    penilaian_siswa: float
    feedback: Optional[Any] = None  # JSONB, opaque

    @field_validator("pengalaman_mengajar", mode="before")
    @classmethod
    def validate_experience(cls, v):
        """Experience is a free-text descriptor; a NULL column reads as empty."""
        if v is None:
            return ""
        return str(v)


class TeacherRow(TeacherRecord):
    """A teacher record enriched for table display."""
    avg: int
    status: TeacherStatus


class RankedTeacher(BaseModel):
    """Entry in the top/bottom ranking."""
    id: int
    name: str  # first word of ``nama``
    score: int
