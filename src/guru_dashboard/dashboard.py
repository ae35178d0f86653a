"""
Dashboard service: the teacher table, rankings and detail requests.

Holds the teacher list loaded from the data store and hands detail requests
to the evaluation orchestrator. Rendering is left to a display layer.
"""

import asyncio
import logging
from typing import List, Optional

import asyncpg

from database import DatabaseConnectionError, TeacherQueries
from evaluation import DetailResult, DetailState, EvaluationOrchestrator
from models import RankedTeacher, TeacherRecord, TeacherRow
from scoring import bottom_teachers, enrich_teachers, sort_teachers, top_teachers


logger = logging.getLogger(__name__)

# Failures while reading teachers that degrade to an empty table
READ_ERRORS = (
    DatabaseConnectionError,
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    OSError,
    asyncio.TimeoutError,
)


class TeacherDashboard:
    """In-memory view of the teachers table."""

    def __init__(self, queries: TeacherQueries, orchestrator: EvaluationOrchestrator):
        self.queries = queries
        self.orchestrator = orchestrator
        self.teachers: List[TeacherRecord] = []

    async def load(self) -> List[TeacherRecord]:
        """Fetch all teachers; a failed read leaves the dashboard empty."""
        try:
            self.teachers = await self.queries.list_teachers()
        except READ_ERRORS as e:
            logger.error(f"Error fetching teachers: {e}")
            self.teachers = []
        return self.teachers

    def rows(self, sort_by: Optional[str] = None, descending: bool = False) -> List[TeacherRow]:
        """Table rows in load order, or sorted by one column."""
        rows = enrich_teachers(self.teachers)
        if sort_by is None:
            return rows
        return sort_teachers(rows, key=sort_by, descending=descending)

    def top(self, n: int = 3) -> List[RankedTeacher]:
        return top_teachers(enrich_teachers(self.teachers), n=n)

    def bottom(self, n: int = 3) -> List[RankedTeacher]:
        return bottom_teachers(enrich_teachers(self.teachers), n=n)

    def find(self, teacher_id: int) -> Optional[TeacherRecord]:
        for teacher in self.teachers:
            if teacher.id == teacher_id:
                return teacher
        return None

    async def detail(self, teacher_id: int) -> Optional[DetailResult]:
        """
        Open the detail view for one teacher.

        Returns:
            DetailResult, or None when the teacher is not in the table
        """
        record = self.find(teacher_id)
        if record is None:
            logger.warning(f"Teacher {teacher_id} not found")
            return None

        result = await self.orchestrator.show_detail(record)

        # Keep the in-memory row in step with what was stored
        if result.state == DetailState.RESOLVED and result.persisted:
            self._replace(record.model_copy(update={"feedback": result.feedback}))

        return result

    def _replace(self, record: TeacherRecord) -> None:
        self.teachers = [record if t.id == record.id else t for t in self.teachers]
