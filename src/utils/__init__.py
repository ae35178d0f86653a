"""
Utility modules for the guru dashboard.
"""

from .llm import (
    LLMError,
    Analyzer,
    ConfigurationError,
    UpstreamError,
    MalformedResponseError,
    RelayClient,
    extract_message_content,
    parse_evaluation,
)

__all__ = [
    'LLMError',
    'Analyzer',
    'ConfigurationError',
    'UpstreamError',
    'MalformedResponseError',
    'RelayClient',
    'extract_message_content',
    'parse_evaluation',
]
