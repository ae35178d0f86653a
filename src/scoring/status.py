"""
Deterministic scoring for the teacher table.

Averages the two ratings, buckets the average into a status, and ranks
teachers for the top/bottom panels. Everything here is pure.
"""

import math
from typing import Iterable, List, Union

from models import RankedTeacher, StatusTone, TeacherRecord, TeacherRow, TeacherStatus


LOW_THRESHOLD = 70
HIGH_THRESHOLD = 80

STATUS_LEGEND = "*Status: Perlu perhatian (<70), Sedang (70–80), Tinggi (81–100)"

SORT_KEYS = (
    "nama",
    "mata_pelajaran",
    "pengalaman_mengajar",
    "penilaian_kehadiran",
    "penilaian_siswa",
    "avg",
)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (75.5 -> 76, -0.5 -> 0)."""
    return int(math.floor(value + 0.5))


def average_score(record: TeacherRecord) -> int:
    """Mean of attendance and student ratings, rounded half-up."""
    return round_half_up((record.penilaian_kehadiran + record.penilaian_siswa) / 2)


def compute_status(avg: Union[int, float]) -> TeacherStatus:
    """Map an average score to its status bucket (70 and 80 are both mid)."""
    if avg < LOW_THRESHOLD:
        return TeacherStatus(label="Perlu perhatian", tone=StatusTone.LOW)
    if avg <= HIGH_THRESHOLD:
        return TeacherStatus(label="Sedang", tone=StatusTone.MID)
    return TeacherStatus(label="Tinggi", tone=StatusTone.HIGH)


def enrich_teacher(record: TeacherRecord) -> TeacherRow:
    avg = average_score(record)
    return TeacherRow(**record.model_dump(), avg=avg, status=compute_status(avg))


def enrich_teachers(records: Iterable[TeacherRecord]) -> List[TeacherRow]:
    return [enrich_teacher(record) for record in records]


def sort_teachers(rows: Iterable[TeacherRow], key: str = "avg", descending: bool = False) -> List[TeacherRow]:
    """
    Sort table rows by one column.

    Args:
        rows: Enriched teacher rows
        key: One of SORT_KEYS
        descending: Reverse the order

    Returns:
        A new, stably sorted list
    """
    if key not in SORT_KEYS:
        raise ValueError(f"Unknown sort key: {key}. Supported: {', '.join(SORT_KEYS)}")

    def sort_value(row: TeacherRow):
        value = getattr(row, key)
        return value.casefold() if isinstance(value, str) else value

    return sorted(rows, key=sort_value, reverse=descending)


def _ranked(row: TeacherRow) -> RankedTeacher:
    parts = row.nama.split(" ")
    return RankedTeacher(id=row.id, name=parts[0], score=row.avg)


def top_teachers(rows: Iterable[TeacherRow], n: int = 3) -> List[RankedTeacher]:
    """Highest averages first; ties keep their table order."""
    ordered = sorted(rows, key=lambda row: -row.avg)
    return [_ranked(row) for row in ordered[:n]]


def bottom_teachers(rows: Iterable[TeacherRow], n: int = 3) -> List[RankedTeacher]:
    """Lowest averages first; ties keep their table order."""
    ordered = sorted(rows, key=lambda row: row.avg)
    return [_ranked(row) for row in ordered[:n]]
