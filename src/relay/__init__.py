"""
Relay endpoint forwarding evaluation requests to the AI provider.
"""

from .server import (
    RELAY_ROUTE,
    build_upstream_headers,
    handle_ai_analyze,
    create_relay_app,
    run_relay,
)

__all__ = [
    'RELAY_ROUTE',
    'build_upstream_headers',
    'handle_ai_analyze',
    'create_relay_app',
    'run_relay',
]
