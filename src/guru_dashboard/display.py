"""Terminal rendering for the dashboard using rich."""

import json
from typing import Any, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.status import Status
from rich.table import Table
from rich.text import Text

from evaluation import DisplaySink
from models import RankedTeacher, SentimentBreakdown, StatusTone, TeacherRow
from scoring import STATUS_LEGEND


TONE_STYLES = {
    StatusTone.LOW: "bold red",
    StatusTone.MID: "bold yellow",
    StatusTone.HIGH: "bold green",
}


def _number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:g}"


def status_badge(row: TeacherRow) -> str:
    return f"[{TONE_STYLES[row.status.tone]}]{row.status.label}[/]"


def render_teacher_table(rows: List[TeacherRow]) -> Table:
    """The main teacher table."""
    table = Table(
        title="Daftar Pengajar",
        caption="Data dari Supabase. Jalankan `detail <id>` untuk analisis AI.",
    )
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Nama Pengajar", style="bold")
    table.add_column("Mata Pelajaran")
    table.add_column("Pengalaman")
    table.add_column("Kehadiran", justify="right")
    table.add_column("Penilaian Siswa", justify="right")
    table.add_column("Rata-rata", justify="right")
    table.add_column("Status")

    for row in rows:
        table.add_row(
            str(row.id),
            escape(row.nama),
            escape(row.mata_pelajaran),
            escape(row.pengalaman_mengajar),
            _number(row.penilaian_kehadiran),
            _number(row.penilaian_siswa),
            str(row.avg),
            status_badge(row),
        )
    return table


def render_ranking(title: str, ranked: List[RankedTeacher], style: str) -> Table:
    table = Table(title=title, title_style=style)
    table.add_column("Nama")
    table.add_column("Skor Rata-rata", justify="right")
    for entry in ranked:
        table.add_row(escape(entry.name), str(entry.score))
    return table


def render_status_panel(row: TeacherRow) -> Panel:
    lines = [
        f"Nama: {escape(row.nama)}",
        f"Mapel: {escape(row.mata_pelajaran)}",
        f"Kehadiran: {_number(row.penilaian_kehadiran)}",
        f"Penilaian: {_number(row.penilaian_siswa)}",
        f"Rata-rata: {row.avg}",
        f"Status: {status_badge(row)}",
    ]
    return Panel("\n".join(lines), title="Status & Skor")


def render_feedback(feedback: Any) -> Panel:
    text = json.dumps(feedback, indent=2, ensure_ascii=False)
    return Panel(Text(text), title="Umpan Balik Siswa")


def render_sentiments(sentiments: Optional[SentimentBreakdown]) -> Table:
    table = Table(title="Sentimen")
    table.add_column("Kategori")
    table.add_column("Nilai", justify="right")
    values = sentiments.model_dump() if sentiments else {"positive": 0, "neutral": 0, "negative": 0}
    for name, style in (("positive", "green"), ("neutral", "yellow"), ("negative", "red")):
        table.add_row(f"[{style}]{name.capitalize()}[/]", _number(values[name]))
    return table


class RichDisplaySink(DisplaySink):
    """Prints detail-view updates to a rich console."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()
        self.sentiments: Optional[SentimentBreakdown] = None
        self.analysis: Optional[str] = None
        self._status: Optional[Status] = None

    def open_detail(self, row: TeacherRow) -> None:
        self.console.rule(f"Analisis Pengajar (AI): {escape(row.nama)}")
        self.console.print(render_status_panel(row))

    def set_loading(self, loading: bool) -> None:
        if loading and self._status is None:
            self._status = self.console.status("Menghasilkan analisis AI…")
            self._status.start()
        elif not loading and self._status is not None:
            self._status.stop()
            self._status = None

    def clear_sentiments(self) -> None:
        self.sentiments = None

    def show_analysis(self, text: str, sentiments: Optional[SentimentBreakdown]) -> None:
        self.analysis = text
        self.sentiments = sentiments
        self.console.print(Panel(Text(text), title="Analisis AI"))
        self.console.print(render_sentiments(sentiments))


def print_dashboard(console: Console, rows: List[TeacherRow], top: List[RankedTeacher],
                    bottom: List[RankedTeacher]) -> None:
    """Table, rankings and legend."""
    if not rows:
        console.print("[dim]Tidak ada data pengajar.[/dim]")
        return

    console.print(render_teacher_table(rows))
    console.print(render_ranking("Top 3 Guru Terbaik", top, "bold blue"))
    console.print(render_ranking("Top 3 Nilai Terendah", bottom, "bold red"))
    console.print(f"[dim]{STATUS_LEGEND}[/dim]")
