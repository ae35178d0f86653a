"""Relay client for AI evaluations with structured output parsing."""

import json
import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import aiohttp
from pydantic import ValidationError as PydanticValidationError

from models import Evaluation


logger = logging.getLogger(__name__)


class LLMError(Exception):
    """Base exception for LLM-related errors."""
    pass


class ConfigurationError(LLMError):
    """Exception raised when the provider credential is not configured."""
    pass


class UpstreamError(LLMError):
    """Exception raised for non-success statuses or network failures."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class MalformedResponseError(LLMError):
    """Exception raised when a response doesn't match the expected schema."""
    pass


class Analyzer(ABC):
    """Abstract base class for anything that evaluates a chat-completion body."""

    @abstractmethod
    async def analyze(self, body: Dict[str, Any]) -> Evaluation:
        """Return the evaluation produced for a request body."""
        pass


def extract_message_content(response_data: Any) -> str:
    """Return the first choice's message content from a chat-completion body."""
    try:
        content = response_data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as e:
        raise MalformedResponseError(f"Response has no message content: {e}") from e

    if not isinstance(content, str):
        raise MalformedResponseError(f"Message content is not a string: {type(content).__name__}")
    return content


def parse_evaluation(content: str) -> Evaluation:
    """
    Parse the model's message content into an Evaluation.

    The content must itself be a JSON object with ``analysis`` and
    ``sentiments``; anything else fails closed.
    """
    try:
        json_data = json.loads(content)
    except json.JSONDecodeError as e:
        raise MalformedResponseError(f"Message content is not valid JSON: {e}") from e

    try:
        return Evaluation.model_validate(json_data)
    except PydanticValidationError as e:
        raise MalformedResponseError(f"Failed to parse evaluation: {e}") from e


class RelayClient(Analyzer):
    """
    Client for the ``/api/ai-analyze`` relay.

    Posts a prepared chat-completion body and turns the provider reply into an
    Evaluation. There is no retry and no client-side timeout: a slow relay
    keeps the caller waiting, a failing one raises.
    """

    def __init__(self, relay_url: str, session: Optional[aiohttp.ClientSession] = None):
        self.relay_url = relay_url
        self._session = session

    async def complete(self, body: Dict[str, Any]) -> Dict[str, Any]:
        """Send a body through the relay and return the decoded provider response."""
        start_time = time.time()

        if self._session is not None:
            response_data = await self._post(self._session, body)
        else:
            async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=None)) as session:
                response_data = await self._post(session, body)

        latency_ms = (time.time() - start_time) * 1000
        logger.info(
            "Relay call completed",
            extra={
                "latency_ms": latency_ms,
                "model": body.get("model"),
            }
        )
        return response_data

    async def analyze(self, body: Dict[str, Any]) -> Evaluation:
        """Run one evaluation request and parse the result."""
        response_data = await self.complete(body)
        content = extract_message_content(response_data)
        return parse_evaluation(content)

    async def _post(self, session: aiohttp.ClientSession, body: Dict[str, Any]) -> Dict[str, Any]:
        try:
            async with session.post(
                self.relay_url,
                json=body,
                headers={"Content-Type": "application/json"},
            ) as response:
                raw = await response.read()

                if not 200 <= response.status < 300:
                    snippet = raw[:200].decode("utf-8", errors="replace")
                    raise UpstreamError(
                        f"AI analyze failed with status {response.status}: {snippet}",
                        status=response.status,
                    )

        except aiohttp.ClientError as e:
            raise UpstreamError(f"AI analyze request failed: {e}") from e

        # Undecodable bytes are a malformed reply, same as broken JSON
        try:
            return json.loads(raw.decode("utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MalformedResponseError(f"Relay response is not valid JSON: {e}") from e
