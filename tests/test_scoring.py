"""
Tests for the scoring module.

Covers averaging, status buckets and the top/bottom rankings.
"""

import pytest

from models import StatusTone, TeacherRecord
from scoring import (
    average_score,
    bottom_teachers,
    compute_status,
    enrich_teachers,
    round_half_up,
    sort_teachers,
    top_teachers,
)


def make_teacher(teacher_id: int, nama: str, kehadiran: float, siswa: float, **kwargs) -> TeacherRecord:
    return TeacherRecord(
        id=teacher_id,
        nama=nama,
        mata_pelajaran=kwargs.get("mata_pelajaran", "Matematika"),
        pengalaman_mengajar=kwargs.get("pengalaman_mengajar", "5 tahun"),
        penilaian_kehadiran=kehadiran,
        penilaian_siswa=siswa,
        feedback=kwargs.get("feedback"),
    )


class TestAverageScore:
    """Test average_score rounding."""

    def test_exact_mean(self):
        assert average_score(make_teacher(1, "Siti Aminah", 80, 70)) == 75

    def test_half_rounds_up(self):
        # 75.5 must become 76, not the banker's 76/75 alternation
        assert average_score(make_teacher(1, "A", 80, 71)) == 76
        assert average_score(make_teacher(2, "B", 70, 71)) == 71
        assert average_score(make_teacher(3, "C", 0, 1)) == 1

    def test_fractional_ratings(self):
        assert average_score(make_teacher(1, "A", 80.4, 80.4)) == 80
        assert average_score(make_teacher(1, "A", 80.6, 80.6)) == 81

    def test_range_over_grid(self):
        """Average stays in [0, 100] and matches half-up rounding."""
        for a in range(0, 101, 7):
            for b in range(0, 101, 3):
                avg = average_score(make_teacher(1, "A", a, b))
                assert 0 <= avg <= 100
                assert avg == (a + b + 1) // 2

    def test_round_half_up_negative_half(self):
        assert round_half_up(-0.5) == 0
        assert round_half_up(2.5) == 3


class TestComputeStatus:
    """Test status buckets and their boundaries."""

    @pytest.mark.parametrize("avg,label,tone", [
        (0, "Perlu perhatian", StatusTone.LOW),
        (69, "Perlu perhatian", StatusTone.LOW),
        (70, "Sedang", StatusTone.MID),
        (75, "Sedang", StatusTone.MID),
        (80, "Sedang", StatusTone.MID),
        (81, "Tinggi", StatusTone.HIGH),
        (100, "Tinggi", StatusTone.HIGH),
    ])
    def test_buckets(self, avg, label, tone):
        status = compute_status(avg)
        assert status.label == label
        assert status.tone == tone

    def test_tone_values(self):
        assert compute_status(10).tone.value == "low"
        assert compute_status(70).tone.value == "mid"
        assert compute_status(90).tone.value == "high"


class TestRanking:
    """Test enrichment, sorting and the top/bottom panels."""

    @pytest.fixture
    def rows(self):
        teachers = [
            make_teacher(1, "Budi Santoso", 90, 90),
            make_teacher(2, "Siti Aminah", 40, 40),
            make_teacher(3, "Ahmad Fauzi", 70, 70),
            make_teacher(4, "Dewi Lestari", 81, 81),
            make_teacher(5, "Rina Wati", 55, 55),
        ]
        return enrich_teachers(teachers)

    def test_enrich_adds_avg_and_status(self, rows):
        assert [row.avg for row in rows] == [90, 40, 70, 81, 55]
        assert rows[0].status.label == "Tinggi"
        assert rows[1].status.label == "Perlu perhatian"
        assert rows[2].status.label == "Sedang"

    def test_top_three(self, rows):
        top = top_teachers(rows)
        assert [entry.score for entry in top] == [90, 81, 70]
        assert [entry.name for entry in top] == ["Budi", "Dewi", "Ahmad"]

    def test_bottom_three(self, rows):
        bottom = bottom_teachers(rows)
        assert [entry.score for entry in bottom] == [40, 55, 70]
        assert [entry.id for entry in bottom] == [2, 5, 3]

    def test_ties_keep_table_order(self):
        rows = enrich_teachers([
            make_teacher(1, "A", 80, 80),
            make_teacher(2, "B", 80, 80),
            make_teacher(3, "C", 60, 60),
        ])
        assert [entry.id for entry in top_teachers(rows, n=2)] == [1, 2]
        assert [entry.id for entry in bottom_teachers(rows, n=3)] == [3, 1, 2]

    def test_fewer_than_three(self):
        rows = enrich_teachers([make_teacher(1, "Solo", 50, 50)])
        assert len(top_teachers(rows)) == 1
        assert top_teachers([]) == []

    def test_sort_by_name(self, rows):
        sorted_rows = sort_teachers(rows, key="nama")
        assert [row.nama for row in sorted_rows][:2] == ["Ahmad Fauzi", "Budi Santoso"]

    def test_sort_by_average_descending(self, rows):
        sorted_rows = sort_teachers(rows, key="avg", descending=True)
        assert [row.avg for row in sorted_rows] == [90, 81, 70, 55, 40]

    def test_sort_unknown_key(self, rows):
        with pytest.raises(ValueError, match="Unknown sort key"):
            sort_teachers(rows, key="feedback")

    def test_sort_does_not_mutate(self, rows):
        before = [row.id for row in rows]
        sort_teachers(rows, key="avg")
        assert [row.id for row in rows] == before
