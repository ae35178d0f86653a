"""
Detail-view evaluation flow for a single teacher.

Serves the cached AI evaluation when the teacher's feedback already holds
one, otherwise requests a fresh evaluation through the relay, shows it and
writes it back into the feedback column. The display and the persistence
layer are injected so the flow runs without any UI.
"""

import asyncio
import json
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

import aiohttp

from evaluation.prompts import build_openrouter_body
from models import SentimentBreakdown, TeacherRecord, TeacherRow, cached_evaluation, merge_feedback
from scoring import average_score, enrich_teacher
from utils.llm import Analyzer, LLMError


logger = logging.getLogger(__name__)


class DetailState(str, Enum):
    """Orchestrator state for the current detail request."""
    IDLE = "idle"
    SHOWING = "showing"
    CACHED_HIT = "cached_hit"
    REQUESTING = "requesting"
    RESOLVED = "resolved"
    FAILED = "failed"


class DisplaySink(ABC):
    """Receives display updates for the detail view."""

    @abstractmethod
    def open_detail(self, row: TeacherRow) -> None:
        """Open the detail view for a teacher."""
        pass

    @abstractmethod
    def set_loading(self, loading: bool) -> None:
        """Toggle the loading indicator."""
        pass

    @abstractmethod
    def clear_sentiments(self) -> None:
        """Drop any sentiment breakdown left from a previous teacher."""
        pass

    @abstractmethod
    def show_analysis(self, text: str, sentiments: Optional[SentimentBreakdown]) -> None:
        """Show analysis text and, when known, its sentiment breakdown."""
        pass


class NullDisplaySink(DisplaySink):
    """Sink used once the view is torn down; every update is a no-op."""

    def open_detail(self, row: TeacherRow) -> None:
        pass

    def set_loading(self, loading: bool) -> None:
        pass

    def clear_sentiments(self) -> None:
        pass

    def show_analysis(self, text: str, sentiments: Optional[SentimentBreakdown]) -> None:
        pass


class FeedbackStore(ABC):
    """Persists the feedback document of a teacher."""

    @abstractmethod
    async def save_feedback(self, teacher_id: int, feedback: Dict[str, Any]) -> None:
        """Replace the feedback column of one teacher."""
        pass


@dataclass
class DetailResult:
    """Outcome of one detail request."""
    state: DetailState
    teacher_id: int
    analysis: str
    sentiments: Optional[SentimentBreakdown] = None
    feedback: Any = None  # feedback document after the request
    persisted: bool = False
    error: Optional[str] = None
    execution_time_ms: float = 0.0

    @property
    def from_cache(self) -> bool:
        return self.state == DetailState.CACHED_HIT


# Failures that end a request on the fallback text
EVALUATION_ERRORS = (LLMError, aiohttp.ClientError, asyncio.TimeoutError, json.JSONDecodeError)


def fallback_analysis(record: TeacherRecord) -> str:
    """Deterministic text shown when no evaluation could be obtained."""
    return f"Analisis sementara untuk {record.nama} ({record.mata_pelajaran}). Rata-rata {average_score(record)}."


class EvaluationOrchestrator:
    """
    Coordinates cache check, AI request, display and persistence.

    Each call to ``show_detail`` is independent: two overlapping requests for
    the same teacher both reach the relay and the later write wins.
    """

    def __init__(
        self,
        analyzer: Analyzer,
        store: FeedbackStore,
        display: Optional[DisplaySink] = None,
    ):
        self.analyzer = analyzer
        self.store = store
        self.display = display or NullDisplaySink()
        self.state = DetailState.IDLE

    def attach_display(self, display: DisplaySink) -> None:
        self.display = display

    def detach_display(self) -> None:
        """Stop sending updates, e.g. after the detail view was closed."""
        self.display = NullDisplaySink()

    def _emit(self, method: str, *args) -> None:
        # Updates that land after the view was torn down must not break the flow
        try:
            getattr(self.display, method)(*args)
        except Exception as e:
            logger.warning(f"Display update {method} failed: {e}")

    async def show_detail(self, record: TeacherRecord) -> DetailResult:
        """
        Run the detail flow for one teacher.

        Args:
            record: The teacher whose detail view is opened

        Returns:
            DetailResult describing what was shown and whether it was saved
        """
        start_time = time.time()

        self.state = DetailState.SHOWING
        self._emit("open_detail", enrich_teacher(record))

        cached = cached_evaluation(record.feedback)
        if cached is not None:
            self.state = DetailState.CACHED_HIT
            self._emit("show_analysis", cached.analysis, cached.sentiments)
            logger.debug(f"Serving cached evaluation for teacher {record.id}")
            return DetailResult(
                state=self.state,
                teacher_id=record.id,
                analysis=cached.analysis,
                sentiments=cached.sentiments,
                feedback=record.feedback,
                execution_time_ms=(time.time() - start_time) * 1000,
            )

        self.state = DetailState.REQUESTING
        self._emit("set_loading", True)
        self._emit("clear_sentiments")

        try:
            body = build_openrouter_body(record)
            evaluation = await self.analyzer.analyze(body)

            self._emit("show_analysis", evaluation.analysis, evaluation.sentiments)
            self.state = DetailState.RESOLVED

            feedback = merge_feedback(evaluation, record.feedback)
            persisted = await self._persist(record.id, feedback)

            return DetailResult(
                state=DetailState.RESOLVED,
                teacher_id=record.id,
                analysis=evaluation.analysis,
                sentiments=evaluation.sentiments,
                feedback=feedback,
                persisted=persisted,
                execution_time_ms=(time.time() - start_time) * 1000,
            )

        except EVALUATION_ERRORS as e:
            logger.error(f"AI evaluation failed for teacher {record.id}: {e}")
            self.state = DetailState.FAILED
            fallback = fallback_analysis(record)
            self._emit("show_analysis", fallback, None)
            return DetailResult(
                state=DetailState.FAILED,
                teacher_id=record.id,
                analysis=fallback,
                feedback=record.feedback,
                error=str(e),
                execution_time_ms=(time.time() - start_time) * 1000,
            )

        finally:
            self._emit("set_loading", False)

    async def _persist(self, teacher_id: int, feedback: Dict[str, Any]) -> bool:
        # Best effort: the evaluation is already on screen
        try:
            await self.store.save_feedback(teacher_id, feedback)
            return True
        except Exception as e:
            logger.warning(f"Failed to save evaluation for teacher {teacher_id}: {e}")
            return False
