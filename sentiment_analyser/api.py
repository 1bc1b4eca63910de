"""
Sentiment Analyser - HTTP API.

============================================================
PURPOSE
============================================================
Thin presentation layer over the engine.

ENDPOINTS:
- GET  /api/health    liveness and lexicon sizes
- POST /api/analyze   {"text": "..."} one result per line
- POST /api/confirm   {"text": "...", "rating": 3.2}

Every analyze row carries ``can_confirm`` so a client knows when
to offer the confirm action.

Engine calls run in a worker thread so a long analysis never
stalls other requests on the event loop.

============================================================
"""

import asyncio
import json
import logging
from datetime import datetime
from enum import Enum
from typing import Any

from aiohttp import web

from .engine import SentimentEngine
from .exceptions import PersistError


logger = logging.getLogger(__name__)


ENGINE_KEY = web.AppKey("engine", SentimentEngine)


# ============================================================
# JSON ENCODER
# ============================================================

class AnalyserEncoder(json.JSONEncoder):
    """JSON encoder for analyser payloads."""

    def default(self, obj):
        if isinstance(obj, datetime):
            return obj.isoformat()
        if isinstance(obj, Enum):
            return obj.value
        return super().default(obj)


def json_response(data: Any, status: int = 200) -> web.Response:
    """Create JSON response."""
    return web.Response(
        text=json.dumps(data, cls=AnalyserEncoder, indent=2),
        status=status,
        content_type="application/json",
    )


def error_response(error: str, status: int) -> web.Response:
    return json_response({
        "status": "error",
        "error": error,
    }, status=status)


# ============================================================
# API HANDLERS
# ============================================================

class AnalyserAPI:
    """HTTP handlers for analysis and phrase confirmation."""

    def __init__(self, engine: SentimentEngine) -> None:
        self._engine = engine

    async def _read_body(self, request: web.Request) -> dict:
        try:
            body = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            raise web.HTTPBadRequest(
                text=json.dumps({"status": "error", "error": "Request body must be JSON"}),
                content_type="application/json",
            )
        if not isinstance(body, dict):
            raise web.HTTPBadRequest(
                text=json.dumps({"status": "error", "error": "Request body must be a JSON object"}),
                content_type="application/json",
            )
        return body

    # --------------------------------------------------------
    # ANALYSIS
    # --------------------------------------------------------

    async def analyze(self, request: web.Request) -> web.Response:
        """
        POST /api/analyze

        Analyze every line of ``text``.
        """
        body = await self._read_body(request)
        text = body.get("text")
        if not isinstance(text, str):
            return error_response("Field 'text' must be a string", status=400)

        rows = []
        results = await asyncio.to_thread(self._engine.analyze_batch, text)
        for result in results:
            row = result.to_dict()
            row["can_confirm"] = self._engine.can_confirm(result)
            rows.append(row)

        return json_response({
            "status": "ok",
            "data": rows,
        })

    # --------------------------------------------------------
    # CONFIRMATION
    # --------------------------------------------------------

    async def confirm(self, request: web.Request) -> web.Response:
        """
        POST /api/confirm

        Append a confirmed phrase to its dataset.
        """
        body = await self._read_body(request)
        text = body.get("text")
        rating = body.get("rating")
        if not isinstance(text, str) or rating is None:
            return error_response("Fields 'text' and 'rating' are required", status=400)

        try:
            path = await asyncio.to_thread(self._engine.confirm_phrase, text, rating)
        except PersistError as e:
            logger.error(f"Error confirming phrase: {e}")
            return json_response({
                "status": "error",
                "error": e.message,
                "details": e.to_dict(),
            }, status=500)

        return json_response({
            "status": "ok",
            "dataset": self._engine.dataset_for(float(rating)).value,
            "file": path.name,
        })

    # --------------------------------------------------------
    # HEALTH CHECK
    # --------------------------------------------------------

    async def health(self, request: web.Request) -> web.Response:
        """
        GET /api/health
        """
        lexicons = self._engine.lexicons
        return json_response({
            "status": "ok",
            "timestamp": datetime.utcnow().isoformat(),
            "service": "sentiment_analyser",
            "lexicons": {
                "emotions": len(lexicons.emotions),
                "boosters": len(lexicons.boosters),
                "negators": len(lexicons.negators),
                "idioms": len(lexicons.idioms),
                "emoticons": len(lexicons.emoticons),
                "stopwords": len(lexicons.stopwords),
                "phrases": len(self._engine.corpus),
            },
        })


# ============================================================
# APPLICATION FACTORY
# ============================================================

def create_app(engine: SentimentEngine, prefix: str = "/api") -> web.Application:
    """
    Create the analyser application.

    Returns an aiohttp Application with all routes configured.
    """
    api = AnalyserAPI(engine)

    app = web.Application()
    app[ENGINE_KEY] = engine

    app.router.add_get(f"{prefix}/health", api.health)
    app.router.add_post(f"{prefix}/analyze", api.analyze)
    app.router.add_post(f"{prefix}/confirm", api.confirm)

    return app


def run(engine: SentimentEngine, host: str = "127.0.0.1", port: int = 8080) -> None:
    """Serve the API until interrupted."""
    logger.info(f"Serving sentiment analyser on http://{host}:{port}")
    web.run_app(create_app(engine), host=host, port=port, print=None)
