from __future__ import annotations

import aiohttp
from fastapi import FastAPI, Request

from chess_stats.services.stats_service import StatsService


def get_http_session_from_app(app: FastAPI) -> aiohttp.ClientSession:
    session = getattr(app.state, "http_session", None)
    if session is None:
        raise RuntimeError("HTTP session not initialized (app.state.http_session)")
    if not isinstance(session, aiohttp.ClientSession):
        raise RuntimeError("Unexpected http_session type")
    return session


def get_http_session(request: Request) -> aiohttp.ClientSession:
    return get_http_session_from_app(request.app)


def get_stats_service(request: Request) -> StatsService:
    """FastAPI dependency provider for a StatsService bound to the shared session."""

    return StatsService.from_env(session=get_http_session(request))
