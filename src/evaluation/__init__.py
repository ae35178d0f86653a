"""
AI evaluation of teachers: prompt construction and the detail-view flow.
"""

from .prompts import (
    OPENROUTER_MODEL,
    EVALUATION_TEMPERATURE,
    SYSTEM_PROMPT,
    build_user_payload,
    build_openrouter_body,
)
from .orchestrator import (
    DetailState,
    DisplaySink,
    NullDisplaySink,
    FeedbackStore,
    DetailResult,
    EvaluationOrchestrator,
    fallback_analysis,
)

__all__ = [
    # Prompts
    'OPENROUTER_MODEL',
    'EVALUATION_TEMPERATURE',
    'SYSTEM_PROMPT',
    'build_user_payload',
    'build_openrouter_body',

    # Orchestration
    'DetailState',
    'DisplaySink',
    'NullDisplaySink',
    'FeedbackStore',
    'DetailResult',
    'EvaluationOrchestrator',
    'fallback_analysis',
]
