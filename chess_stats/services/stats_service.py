from __future__ import annotations

import logging
import time

import aiohttp

from chess_stats.models.stats import StatsBundle
from chess_stats.services.config import SetupPollConfig, StatsApiConfig
from chess_stats.services.setup.setup_poller_service import SetupPollerService
from chess_stats.services.setup.setup_trigger_service import SetupTriggerService
from chess_stats.services.stats_aggregator_service import StatsAggregatorService
from chess_stats.services.stats_api_service import StatsApiService


logger = logging.getLogger(__name__)


class StatsService:
    """Fetch a user's stats: start setup, wait for it, then read all four stats."""

    def __init__(
        self,
        *,
        trigger: SetupTriggerService,
        poller: SetupPollerService,
        aggregator: StatsAggregatorService,
    ) -> None:
        self._trigger = trigger
        self._poller = poller
        self._aggregator = aggregator

    @staticmethod
    def from_api(*, api: StatsApiService, poll_config: SetupPollConfig) -> "StatsService":
        return StatsService(
            trigger=SetupTriggerService(api=api),
            poller=SetupPollerService(api=api, config=poll_config),
            aggregator=StatsAggregatorService(api=api),
        )

    @staticmethod
    def from_env(*, session: aiohttp.ClientSession) -> "StatsService":
        api = StatsApiService(StatsApiConfig.from_env(), session=session)
        return StatsService.from_api(api=api, poll_config=SetupPollConfig.from_env())

    async def fetch_stats(self, *, username: str) -> StatsBundle:
        started = time.monotonic()

        initial = await self._trigger.trigger(username=username)
        await self._poller.wait_until_complete(username=username, initial=initial)
        bundle = await self._aggregator.fetch_all(username=username)

        logger.info("Stats fetched: username=%r elapsed=%.2fs", username, time.monotonic() - started)
        return bundle
