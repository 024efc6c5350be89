from __future__ import annotations

import logging
from typing import Optional

from chess_stats.models.setup import SetupRequest, SetupResponse
from chess_stats.services.stats_api_service import StatsApiService, StatsApiServiceError


logger = logging.getLogger(__name__)

SETUP_PATH = "/setup"


class SetupTriggerService:
    def __init__(self, *, api: StatsApiService) -> None:
        self._api = api

    async def trigger(self, *, username: str) -> Optional[SetupResponse]:
        """Ask the backend to start (or report on) the setup job for `username`.

        Returns the parsed response, or None when the backend rejected the request
        with HTTP 400 (setup already running). Every other failure propagates.
        """

        try:
            response = await self._api.post(SETUP_PATH, SetupRequest(username=username).model_dump())
        except StatsApiServiceError as exc:
            if not exc.is_benign_conflict:
                raise
            logger.error("Error requesting initial setup (username=%r): %s", username, exc)
            return None

        return SetupResponse.from_body(response.body)
