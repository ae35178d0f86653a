"""
Server-side relay to the OpenRouter chat-completion API.

Keeps the provider credential off the client: the dashboard posts a prepared
request body to ``/api/ai-analyze`` and the relay forwards it with the
credential injected, returning the provider's status and body untouched.
"""

import json
import logging
from functools import partial
from typing import AsyncIterator, Dict, Optional

import aiohttp
from aiohttp import web

from guru_dashboard.config import OpenRouterConfig, RelayConfig
from utils.llm import ConfigurationError


logger = logging.getLogger(__name__)

RELAY_ROUTE = "/api/ai-analyze"

CONFIG_KEY = web.AppKey("openrouter_config", OpenRouterConfig)
SESSION_KEY = web.AppKey("client_session", aiohttp.ClientSession)

# Compact separators keep error bodies byte-identical to {"error":"..."}
_compact_dumps = partial(json.dumps, separators=(",", ":"))


def _error_response(message: str, status: int) -> web.Response:
    return web.json_response({"error": message}, status=status, dumps=_compact_dumps)


def build_upstream_headers(config: OpenRouterConfig) -> Dict[str, str]:
    """Headers sent to the provider; raises ConfigurationError without a key."""
    api_key = config.require_api_key()
    return {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {api_key}",
        "HTTP-Referer": config.referer,
        "X-Title": config.title,
    }


async def handle_ai_analyze(request: web.Request) -> web.Response:
    """Forward a chat-completion body to the provider and relay its reply."""
    config = request.app[CONFIG_KEY]

    try:
        headers = build_upstream_headers(config)
    except ConfigurationError as e:
        logger.error(f"Relay request rejected: {e}")
        return _error_response(str(e), status=500)

    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return _error_response("Invalid JSON body", status=400)

    session = request.app[SESSION_KEY]
    async with session.post(config.base_url, json=body, headers=headers) as upstream:
        text = await upstream.text()
        status = upstream.status

    if status >= 400:
        logger.warning(f"Provider answered {status}")

    return web.Response(text=text, status=status, content_type="application/json")


def create_relay_app(
    config: OpenRouterConfig,
    session: Optional[aiohttp.ClientSession] = None,
) -> web.Application:
    """
    Create the relay application.

    Args:
        config: Provider credential and headers, injected rather than read
            from the process environment at request time
        session: Optional client session to forward with; when omitted one is
            opened on startup and closed on cleanup

    Returns:
        aiohttp application serving ``POST /api/ai-analyze``
    """
    app = web.Application()
    app[CONFIG_KEY] = config

    async def client_session_ctx(app: web.Application) -> AsyncIterator[None]:
        if session is not None:
            app[SESSION_KEY] = session
            yield
            return

        # No client timeout: a slow provider keeps the caller waiting
        async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=None)) as client:
            app[SESSION_KEY] = client
            yield

    app.cleanup_ctx.append(client_session_ctx)
    app.router.add_post(RELAY_ROUTE, handle_ai_analyze)
    return app


def run_relay(config: OpenRouterConfig, relay_config: RelayConfig) -> None:
    """Serve the relay until interrupted."""
    if not config.api_key:
        logger.warning("OPENROUTER_API_KEY is not set; every relay request will fail with 500")

    logger.info(f"Starting relay on {relay_config.host}:{relay_config.port}{RELAY_ROUTE}")
    web.run_app(create_relay_app(config), host=relay_config.host, port=relay_config.port)
