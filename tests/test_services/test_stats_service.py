"""
Tests for StatsService - trigger, poll gate and aggregation end to end.
"""

import pytest

from chess_stats.services.setup.setup_poller_service import SetupMissingIdError, SetupTimeoutError
from chess_stats.services.stats_api_service import ApiResponse, StatsApiHttpError
from chess_stats.services.stats_service import StatsService


class TestFetchStats:
    """Test StatsService.fetch_stats."""

    @pytest.mark.asyncio
    async def test_pending_then_complete_returns_bundle(self, fake_api, fast_poll_config):
        """Trigger Pending, first poll Complete, then four reads."""
        fake_api.setup_results = [{"id": "u1", "status": "Pending"}, {"id": "u1", "status": "Complete"}]
        svc = StatsService.from_api(api=fake_api, poll_config=fast_poll_config)

        bundle = await svc.fetch_stats(username="alice")

        assert bundle.model_dump(by_alias=True) == {
            "gameStats": {"games": 120},
            "winStats": {"wins": 70},
            "lossStats": {"losses": 40},
            "drawStats": {"draws": 10},
        }
        assert len(fake_api.setup_calls) == 2
        assert len(fake_api.get_calls) == 4

    @pytest.mark.asyncio
    async def test_already_complete_goes_straight_to_aggregation(self, fake_api, fast_poll_config):
        """No poll request is made when the trigger reports Complete."""
        fake_api.setup_results = [{"id": "u1", "status": "Complete"}]
        svc = StatsService.from_api(api=fake_api, poll_config=fast_poll_config)

        await svc.fetch_stats(username="alice")

        assert len(fake_api.setup_calls) == 1
        assert len(fake_api.get_calls) == 4

    @pytest.mark.asyncio
    async def test_missing_id_aborts_before_any_read(self, fake_api, fast_poll_config):
        """A trigger response without id fails before polling or reading."""
        fake_api.setup_results = [{"status": "Started"}]
        svc = StatsService.from_api(api=fake_api, poll_config=fast_poll_config)

        with pytest.raises(SetupMissingIdError):
            await svc.fetch_stats(username="alice")

        assert len(fake_api.setup_calls) == 1
        assert fake_api.get_calls == []

    @pytest.mark.asyncio
    async def test_suppressed_trigger_conflict_fails_on_missing_id(self, fake_api, fast_poll_config):
        """A swallowed 400 on trigger leaves nothing to poll on."""
        fake_api.setup_results = [StatsApiHttpError("HTTP 400", response=ApiResponse(status=400, body=""))]
        svc = StatsService.from_api(api=fake_api, poll_config=fast_poll_config)

        with pytest.raises(SetupMissingIdError):
            await svc.fetch_stats(username="alice")

        assert fake_api.get_calls == []

    @pytest.mark.asyncio
    async def test_timeout_returns_no_stats(self, fake_api, fast_poll_config):
        """A setup that never completes fails the operation with a timeout."""
        svc = StatsService.from_api(api=fake_api, poll_config=fast_poll_config)

        with pytest.raises(SetupTimeoutError):
            await svc.fetch_stats(username="alice")

        assert fake_api.get_calls == []

    @pytest.mark.asyncio
    async def test_aggregation_failure_propagates(self, fake_api, fast_poll_config):
        """A failing stats read fails the whole operation."""
        fake_api.setup_results = [{"id": "u1", "status": "Complete"}]
        fake_api.get_results["/winstats"] = StatsApiHttpError(
            "HTTP 400", response=ApiResponse(status=400, body="User not setup")
        )
        svc = StatsService.from_api(api=fake_api, poll_config=fast_poll_config)

        with pytest.raises(StatsApiHttpError):
            await svc.fetch_stats(username="alice")
