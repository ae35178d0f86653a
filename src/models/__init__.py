"""
Core data models for the guru dashboard.

This package contains:
- Teacher models mapping to the Supabase ``teachers`` table
- AI evaluation schemas cached in the ``feedback`` column
"""

from .teacher import TeacherRecord, TeacherRow, TeacherStatus, StatusTone, RankedTeacher
from .evaluation import (
    SentimentBreakdown,
    Evaluation,
    CachedEvaluation,
    cached_evaluation,
    merge_feedback,
)

__all__ = [
    # Teacher models
    "TeacherRecord",
    "TeacherRow",
    "TeacherStatus",
    "StatusTone",
    "RankedTeacher",

    # Evaluation schemas
    "SentimentBreakdown",
    "Evaluation",
    "CachedEvaluation",
    "cached_evaluation",
    "merge_feedback",
]
