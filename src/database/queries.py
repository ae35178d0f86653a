"""
Data access layer for the ``public.teachers`` table.

Reads teacher rows for the dashboard and writes the ``feedback`` JSONB
column after an AI evaluation. No transactions and no optimistic locking:
the last write to a row's feedback wins.
"""

import json
from typing import Any, Dict, List, Optional
import logging

from pydantic import ValidationError

from evaluation.orchestrator import FeedbackStore
from models import TeacherRecord
from .connection import DatabasePool, get_database_pool


logger = logging.getLogger(__name__)


TEACHER_COLUMNS = """
    id,
    nama,
    mata_pelajaran,
    pengalaman_mengajar,
    penilaian_kehadiran,
    penilaian_siswa,
    feedback
"""


def decode_jsonb(value: Any, context: str = "") -> Any:
    """
    Decode a JSONB value.

    asyncpg returns json/jsonb columns as text unless a codec is registered;
    values that are not valid JSON are kept as the raw string.
    """
    if not isinstance(value, str):
        return value
    try:
        return json.loads(value)
    except json.JSONDecodeError:
        logger.warning(f"Could not parse feedback JSON{context}; keeping raw text")
        return value


class TeacherQueries(FeedbackStore):
    """Data access layer for teacher operations."""

    def __init__(self, pool: Optional[DatabasePool] = None):
        self._pool = pool

    async def _get_pool(self) -> DatabasePool:
        if self._pool is None:
            self._pool = await get_database_pool()
        return self._pool

    def _record_from_row(self, row) -> Optional[TeacherRecord]:
        data = dict(row)
        data['feedback'] = decode_jsonb(data.get('feedback'), context=f" for teacher {data.get('id')}")
        try:
            return TeacherRecord.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Skipping malformed teacher row {data.get('id')}: {e}")
            return None

    async def list_teachers(self) -> List[TeacherRecord]:
        """
        Get all teachers.

        Returns:
            List of TeacherRecord objects ordered by id
        """
        query = f"""
        SELECT {TEACHER_COLUMNS}
        FROM public.teachers
        ORDER BY id
        """

        pool = await self._get_pool()
        rows = await pool.execute_query(query)

        teachers = []
        for row in rows:
            record = self._record_from_row(row)
            if record is not None:
                teachers.append(record)

        logger.info(f"Loaded {len(teachers)} teachers")
        return teachers

    async def get_teacher(self, teacher_id: int) -> Optional[TeacherRecord]:
        """
        Get a single teacher by id.

        Args:
            teacher_id: Primary key of the teacher

        Returns:
            TeacherRecord or None if not found
        """
        query = f"""
        SELECT {TEACHER_COLUMNS}
        FROM public.teachers
        WHERE id = $1
        """

        pool = await self._get_pool()
        row = await pool.execute_query_one(query, teacher_id)
        if not row:
            return None
        return self._record_from_row(row)

    async def save_feedback(self, teacher_id: int, feedback: Dict[str, Any]) -> None:
        """Replace the feedback column of one teacher."""
        command = """
        UPDATE public.teachers
        SET feedback = $1::jsonb
        WHERE id = $2
        """

        pool = await self._get_pool()
        status = await pool.execute_command(command, json.dumps(feedback, ensure_ascii=False), teacher_id)
        logger.info(f"Saved feedback for teacher {teacher_id} ({status})")
