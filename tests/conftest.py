"""
Shared test fixtures for pytest
"""

import asyncio
import time
from typing import Any, Optional

import pytest

from chess_stats.services.config import SetupPollConfig
from chess_stats.services.stats_api_service import ApiResponse


class FakeStatsApi:
    """Scripted in-memory stand-in for StatsApiService.

    Each scripted result is an ApiResponse, an exception to raise, or a plain body
    that is wrapped in a 200 response.
    """

    def __init__(self) -> None:
        self.setup_results: list[Any] = []
        self.setup_default: Any = {"id": "u1", "status": "Pending"}
        self.setup_delay = 0.0
        self.setup_calls: list[tuple[float, Any]] = []

        self.get_results: dict[str, Any] = {}
        self.get_calls: list[tuple[str, dict[str, str]]] = []

    async def post(self, path: str, body: Any) -> ApiResponse:
        self.setup_calls.append((time.monotonic(), body))
        result = self.setup_results.pop(0) if self.setup_results else self.setup_default
        if self.setup_delay:
            await asyncio.sleep(self.setup_delay)
        return self._resolve(result)

    async def get(self, path: str, params: Optional[dict[str, str]] = None) -> ApiResponse:
        self.get_calls.append((path, dict(params or {})))
        await asyncio.sleep(0)
        return self._resolve(self.get_results[path])

    @staticmethod
    def _resolve(result: Any) -> ApiResponse:
        if isinstance(result, BaseException):
            raise result
        if isinstance(result, ApiResponse):
            return result
        return ApiResponse(status=200, body=result)


@pytest.fixture
def fake_api():
    """Fresh scripted API with all four stats endpoints answering."""
    api = FakeStatsApi()
    api.get_results = {
        "/gamestats": {"games": 120},
        "/winstats": {"wins": 70},
        "/lossstats": {"losses": 40},
        "/drawstats": {"draws": 10},
    }
    return api


@pytest.fixture
def fast_poll_config():
    """Poll timings shrunk so timeouts resolve in well under a second."""
    return SetupPollConfig(timeout_seconds=0.3, interval_seconds=0.02, initial_delay_seconds=0.02)
