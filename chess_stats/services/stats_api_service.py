from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Optional

import aiohttp

from chess_stats.services.config import StatsApiConfig


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ApiResponse:
    status: int
    body: Any = None


class StatsApiServiceError(RuntimeError):
    """Raised for any failed stats backend call.

    ``response`` is set when the backend answered with a non-2xx status and is
    ``None`` for transport failures (connection refused, timeouts, ...).
    """

    def __init__(self, message: str, *, response: Optional[ApiResponse] = None) -> None:
        super().__init__(message)
        self.response = response

    @property
    def status(self) -> Optional[int]:
        return self.response.status if self.response is not None else None

    @property
    def is_benign_conflict(self) -> bool:
        # The backend answers 400 while a setup for the user is already running.
        return self.status == HTTPStatus.BAD_REQUEST


class StatsApiHttpError(StatsApiServiceError):
    def __init__(self, message: str, *, response: ApiResponse) -> None:
        super().__init__(message, response=response)


class StatsApiService:
    """Minimal async client for the stats backend.

    Shares the application's ``aiohttp.ClientSession``; the session is owned (and
    closed) by the caller.
    """

    def __init__(self, config: StatsApiConfig, *, session: aiohttp.ClientSession) -> None:
        self._config = config
        self._session = session

    @property
    def base_url(self) -> str:
        return self._config.base_url

    @staticmethod
    def _decode_body(payload: bytes) -> Any:
        if not payload:
            return None
        try:
            text = payload.decode("utf-8")
        except UnicodeDecodeError:
            text = payload.decode("utf-8", errors="replace")
        try:
            return json.loads(text)
        except ValueError:
            return text

    async def _request(
        self,
        *,
        method: str,
        path: str,
        json_body: Optional[Any] = None,
        params: Optional[dict[str, str]] = None,
    ) -> ApiResponse:
        url = self._config.url_for(path)
        timeout = aiohttp.ClientTimeout(total=self._config.timeout_seconds)

        try:
            async with self._session.request(
                method.upper(),
                url,
                json=json_body,
                params=params,
                headers={"Accept": "application/json"},
                timeout=timeout,
            ) as resp:
                payload = await resp.read()
                status = resp.status
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            logger.exception("Stats API request failed (method=%s path=%s)", method, path)
            raise StatsApiServiceError(f"Stats API request failed (method={method} path={path})") from exc

        response = ApiResponse(status=status, body=self._decode_body(payload))
        if 200 <= status < 300:
            return response

        details = response.body if isinstance(response.body, str) else ""
        raise StatsApiHttpError(
            f"Unexpected stats API response (method={method} path={path}) HTTP {status} {details}".strip(),
            response=response,
        )

    async def post(self, path: str, body: Any) -> ApiResponse:
        return await self._request(method="POST", path=path, json_body=body)

    async def get(self, path: str, params: Optional[dict[str, str]] = None) -> ApiResponse:
        return await self._request(method="GET", path=path, params=params)
