"""
Prompt construction for teacher evaluations.

Builds the OpenRouter chat-completion body for one teacher. The system prompt
and the user payload are written in Indonesian for the dashboard's audience;
the model is asked to answer with a single JSON object only.
"""

import json
from typing import Any, Dict

from models import TeacherRecord
from scoring import average_score, compute_status


OPENROUTER_MODEL = "deepseek/deepseek-chat-v3.1"
EVALUATION_TEMPERATURE = 0.2

SYSTEM_PROMPT = """Anda adalah ahli evaluasi pendidikan yang menulis analisis layaknya manusia.
Gunakan bahasa Indonesia yang alami, sopan, dan komunikatif.
Tugas Anda adalah membaca data guru, menilai performa, dan menjelaskan analisis secara menyeluruh, bukan hanya satu kalimat.
Fokus pada:
- kekuatan guru
- area yang bisa ditingkatkan
- insight dari kritik & saran siswa
- rekomendasi nyata yang dapat dilakukan guru

Hindari bahasa robot, buat mengalir seperti manusia."""

USER_INSTRUCTION = (
    "Berdasarkan data guru + kritik saran siswa, buat analisis lengkap yang terdengar manusiawi. "
    "Jelaskan perilaku mengajar, kualitas interaksi, dan rekomendasi perbaikan. Jangan terlalu singkat."
)

OUTPUT_FORMAT = (
    "Keluarkan hanya JSON valid tanpa teks lain, dengan format: "
    '{ "analysis": string, "sentiments": { "positive": number, "neutral": number, "negative": number } }'
)


def _rating(value: float):
    # Keep integral ratings as ints so the payload reads 80, not 80.0
    return int(value) if float(value).is_integer() else value


def build_user_payload(record: TeacherRecord) -> Dict[str, Any]:
    """The structured data the model evaluates."""
    avg = average_score(record)
    return {
        "instruction": USER_INSTRUCTION,
        "teacher": {
            "nama": record.nama,
            "mapel": record.mata_pelajaran,
            "pengalaman_mengajar": record.pengalaman_mengajar,
            "kehadiran": _rating(record.penilaian_kehadiran),
            "penilaian_siswa": _rating(record.penilaian_siswa),
            "rataRata": avg,
            "status": compute_status(avg).label,
        },
        "feedback": record.feedback,
        "output_format": OUTPUT_FORMAT,
        "language": "id-ID",
    }


def build_openrouter_body(record: TeacherRecord) -> Dict[str, Any]:
    """
    Build the chat-completion request body for one teacher.

    Args:
        record: Teacher to evaluate

    Returns:
        Request body ready to post to the relay
    """
    return {
        "model": OPENROUTER_MODEL,
        "temperature": EVALUATION_TEMPERATURE,
        "messages": [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": json.dumps(build_user_payload(record), ensure_ascii=False)},
        ],
        "response_format": {"type": "json_object"},
    }
