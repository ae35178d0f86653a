"""Tests for the TeacherDashboard service."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from database import DatabaseConnectionError, TeacherQueries
from evaluation import DetailResult, DetailState, EvaluationOrchestrator
from models import TeacherRecord
from guru_dashboard.dashboard import TeacherDashboard


def record(id: int, nama: str, kehadiran: float, siswa: float, feedback=None) -> TeacherRecord:
    return TeacherRecord(
        id=id,
        nama=nama,
        mata_pelajaran="Bahasa Indonesia",
        pengalaman_mengajar="5 tahun",
        penilaian_kehadiran=kehadiran,
        penilaian_siswa=siswa,
        feedback=feedback,
    )


TEACHERS = [
    record(1, "Andi Wijaya", 90, 90),
    record(2, "Budi Santoso", 40, 40),
    record(3, "Citra Lestari", 70, 70),
    record(4, "Dewi Kartika", 81, 81),
    record(5, "Eko Prasetyo", 55, 55),
]


@pytest.fixture
def queries():
    mock = MagicMock(spec=TeacherQueries)
    mock.list_teachers = AsyncMock(return_value=list(TEACHERS))
    return mock


@pytest.fixture
def orchestrator():
    mock = MagicMock(spec=EvaluationOrchestrator)
    mock.show_detail = AsyncMock()
    return mock


class TestLoad:

    @pytest.mark.asyncio
    async def test_load_and_rank(self, queries, orchestrator):
        dashboard = TeacherDashboard(queries, orchestrator)
        await dashboard.load()

        assert [r.avg for r in dashboard.rows()] == [90, 40, 70, 81, 55]
        assert [t.score for t in dashboard.top()] == [90, 81, 70]
        assert [t.score for t in dashboard.bottom()] == [40, 55, 70]
        assert [t.name for t in dashboard.top()] == ["Andi", "Dewi", "Citra"]

    @pytest.mark.asyncio
    async def test_sorted_rows(self, queries, orchestrator):
        dashboard = TeacherDashboard(queries, orchestrator)
        await dashboard.load()

        assert [r.id for r in dashboard.rows(sort_by="avg", descending=True)] == [1, 4, 3, 5, 2]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [
        DatabaseConnectionError("Failed to connect to database"),
        OSError("Connection refused"),
        asyncio.TimeoutError(),
    ])
    async def test_failed_read_leaves_empty_table(self, queries, orchestrator, error):
        queries.list_teachers.side_effect = error
        dashboard = TeacherDashboard(queries, orchestrator)

        assert await dashboard.load() == []
        assert dashboard.rows() == []
        assert dashboard.top() == []
        assert dashboard.bottom() == []


class TestDetail:

    @pytest.mark.asyncio
    async def test_unknown_teacher(self, queries, orchestrator):
        dashboard = TeacherDashboard(queries, orchestrator)
        await dashboard.load()

        assert await dashboard.detail(42) is None
        orchestrator.show_detail.assert_not_called()

    @pytest.mark.asyncio
    async def test_persisted_result_updates_record(self, queries, orchestrator):
        feedback = {"analysis": "Baru", "sentiments": None, "originalFeedback": None}
        orchestrator.show_detail.return_value = DetailResult(
            state=DetailState.RESOLVED, teacher_id=3, analysis="Baru",
            feedback=feedback, persisted=True,
        )
        dashboard = TeacherDashboard(queries, orchestrator)
        await dashboard.load()

        result = await dashboard.detail(3)

        assert result.state == DetailState.RESOLVED
        orchestrator.show_detail.assert_awaited_once_with(TEACHERS[2])
        assert dashboard.find(3).feedback == feedback
        assert [t.id for t in dashboard.teachers] == [1, 2, 3, 4, 5]

    @pytest.mark.asyncio
    async def test_unsaved_result_keeps_record(self, queries, orchestrator):
        orchestrator.show_detail.return_value = DetailResult(
            state=DetailState.RESOLVED, teacher_id=3, analysis="Baru",
            feedback={"analysis": "Baru"}, persisted=False,
        )
        dashboard = TeacherDashboard(queries, orchestrator)
        await dashboard.load()

        await dashboard.detail(3)

        assert dashboard.find(3).feedback is None

    @pytest.mark.asyncio
    async def test_failed_result_keeps_record(self, queries, orchestrator):
        orchestrator.show_detail.return_value = DetailResult(
            state=DetailState.FAILED, teacher_id=2,
            analysis="Analisis sementara untuk Budi Santoso (Bahasa Indonesia). Rata-rata 40.",
        )
        dashboard = TeacherDashboard(queries, orchestrator)
        await dashboard.load()

        result = await dashboard.detail(2)

        assert result.analysis.endswith("Rata-rata 40.")
        assert dashboard.find(2) is TEACHERS[1]
