"""
AI evaluation models stored inside the teacher ``feedback`` JSONB column.

Cached documents have the shape::

    {
        "analysis": "...",
        "sentiments": {"positive": 60, "neutral": 30, "negative": 10},
        "originalFeedback": <whatever the column held before>
    }
"""

import logging
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, ValidationError


logger = logging.getLogger(__name__)


class SentimentBreakdown(BaseModel):
    """Sentiment split reported by the model. No sum-to-100 constraint."""
    positive: float = Field(..., ge=0)
    neutral: float = Field(..., ge=0)
    negative: float = Field(..., ge=0)


class Evaluation(BaseModel):
    """Analysis text plus sentiment breakdown for one teacher."""
    analysis: str = Field(..., min_length=1)
    sentiments: SentimentBreakdown


class CachedEvaluation(BaseModel):
    """An evaluation read back from the feedback column."""
    analysis: str
    sentiments: Optional[SentimentBreakdown] = None


def cached_evaluation(feedback: Any) -> Optional[CachedEvaluation]:
    """
    Return the cached evaluation held in a feedback document, if any.

    A populated ``analysis`` string is what marks a record as already
    evaluated. Any other truthy ``analysis`` value (a number, a list, a
    nested object) does not count as a cache hit: such a record is evaluated
    again and the stray value ends up under ``originalFeedback``. Sentiments that do not validate are dropped rather than
    invalidating the cached analysis.
    """
    if not isinstance(feedback, dict):
        return None

    analysis = feedback.get("analysis")
    if not isinstance(analysis, str) or not analysis:
        return None

    sentiments = None
    raw_sentiments = feedback.get("sentiments")
    if raw_sentiments is not None:
        try:
            sentiments = SentimentBreakdown.model_validate(raw_sentiments)
        except ValidationError:
            logger.warning(f"Ignoring malformed cached sentiments: {raw_sentiments!r}")

    return CachedEvaluation(analysis=analysis, sentiments=sentiments)


def merge_feedback(evaluation: Evaluation, previous_feedback: Any) -> Dict[str, Any]:
    """Build the document persisted after a fresh evaluation."""
    return {
        "analysis": evaluation.analysis,
        "sentiments": evaluation.sentiments.model_dump(),
        "originalFeedback": previous_feedback,
    }
