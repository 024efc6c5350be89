from __future__ import annotations

import asyncio
import logging

from chess_stats.models.stats import StatsBundle
from chess_stats.services.stats_api_service import StatsApiService


logger = logging.getLogger(__name__)

GAME_STATS_PATH = "/gamestats"
WIN_STATS_PATH = "/winstats"
LOSS_STATS_PATH = "/lossstats"
DRAW_STATS_PATH = "/drawstats"


class StatsAggregatorService:
    def __init__(self, *, api: StatsApiService) -> None:
        self._api = api

    async def fetch_all(self, *, username: str) -> StatsBundle:
        """Fetch game, win, loss and draw stats concurrently.

        All four requests are issued before any is awaited. The first failure is
        raised unchanged and no partial bundle is returned; the remaining requests
        are left to finish and their results are discarded.
        """

        params = {"username": username}
        game, win, loss, draw = await asyncio.gather(
            self._api.get(GAME_STATS_PATH, params=params),
            self._api.get(WIN_STATS_PATH, params=params),
            self._api.get(LOSS_STATS_PATH, params=params),
            self._api.get(DRAW_STATS_PATH, params=params),
        )

        logger.debug("Fetched stats bundle (username=%r)", username)
        return StatsBundle(
            game_stats=game.body,
            win_stats=win.body,
            loss_stats=loss.body,
            draw_stats=draw.body,
        )
