"""
Scoring for the teacher performance table.

Main components:
- average_score / compute_status: per-teacher average and status bucket
- enrich_teachers / sort_teachers: table rows and sortable columns
- top_teachers / bottom_teachers: ranking panels
"""

from .status import (
    LOW_THRESHOLD,
    HIGH_THRESHOLD,
    STATUS_LEGEND,
    SORT_KEYS,
    round_half_up,
    average_score,
    compute_status,
    enrich_teacher,
    enrich_teachers,
    sort_teachers,
    top_teachers,
    bottom_teachers,
)

__all__ = [
    'LOW_THRESHOLD',
    'HIGH_THRESHOLD',
    'STATUS_LEGEND',
    'SORT_KEYS',
    'round_half_up',
    'average_score',
    'compute_status',
    'enrich_teacher',
    'enrich_teachers',
    'sort_teachers',
    'top_teachers',
    'bottom_teachers',
]
