from __future__ import annotations

import asyncio
import logging
import time
from enum import Enum
from typing import Optional

from chess_stats.models.setup import SetupRequest, SetupResponse
from chess_stats.services.config import SetupPollConfig
from chess_stats.services.setup.setup_trigger_service import SETUP_PATH
from chess_stats.services.stats_api_service import StatsApiService, StatsApiServiceError


logger = logging.getLogger(__name__)


class SetupPollError(RuntimeError):
    pass


class SetupMissingIdError(SetupPollError):
    pass


class SetupMissingStatusError(SetupPollError):
    pass


class SetupTimeoutError(SetupPollError):
    pass


class SetupPollState(str, Enum):
    AWAITING_RESULT = "AwaitingResult"
    POLLING = "Polling"
    COMPLETE = "Complete"
    TIMED_OUT = "TimedOut"
    FAILED = "Failed"

    @property
    def is_terminal(self) -> bool:
        return self in (SetupPollState.COMPLETE, SetupPollState.TIMED_OUT, SetupPollState.FAILED)


class SetupPollRun:
    """A single wait on one user's setup job.

    The run owns one deadline timer and at most one scheduled poll. It settles
    exactly once: whichever of the deadline or the poll chain reaches a terminal
    state first decides the outcome, and anything that settles later is ignored.

    Polls still in flight when the run settles are left to finish on their own;
    their results are dropped.
    """

    def __init__(self, *, api: StatsApiService, config: SetupPollConfig, username: str) -> None:
        self._api = api
        self._config = config
        self._username = username

        self._state = SetupPollState.AWAITING_RESULT
        self._poll_count = 0
        self._settled: Optional[asyncio.Future[None]] = None
        self._deadline: Optional[asyncio.TimerHandle] = None
        self._next_poll: Optional[asyncio.TimerHandle] = None
        self._in_flight: Optional[asyncio.Task[None]] = None

    @property
    def state(self) -> SetupPollState:
        return self._state

    @property
    def poll_count(self) -> int:
        return self._poll_count

    async def run(self, initial: Optional[SetupResponse]) -> None:
        """Drive the run to a terminal state.

        Raises:
            SetupMissingIdError: no initial response, or it carried no id.
            SetupMissingStatusError: a poll response carried no status.
            SetupTimeoutError: the deadline fired before the job completed.
            StatsApiServiceError: a poll failed with anything other than HTTP 400.
        """

        if initial is None or not initial.has_id:
            self._transition(SetupPollState.FAILED)
            raise SetupMissingIdError("Error polling setup: no id in initial response")

        if initial.is_complete:
            self._transition(SetupPollState.COMPLETE)
            return

        loop = asyncio.get_running_loop()
        self._settled = loop.create_future()
        self._transition(SetupPollState.POLLING)

        self._deadline = loop.call_later(self._config.timeout_seconds, self._on_deadline)
        self._schedule_poll(self._config.initial_delay_seconds)

        try:
            await self._settled
        finally:
            self._release_timers()

    # -----------------
    # Private helpers
    # -----------------

    def _transition(self, state: SetupPollState) -> None:
        logger.debug("Setup poll state %s -> %s (username=%r)", self._state.value, state.value, self._username)
        self._state = state

    def _is_settled(self) -> bool:
        return self._settled is None or self._settled.done()

    def _settle(self, state: SetupPollState, error: Optional[BaseException] = None) -> None:
        if self._is_settled():
            return

        assert self._settled is not None
        self._transition(state)
        if error is not None:
            self._settled.set_exception(error)
        else:
            self._settled.set_result(None)

    def _schedule_poll(self, delay: float) -> None:
        loop = asyncio.get_running_loop()
        self._next_poll = loop.call_later(delay, self._start_poll)

    def _start_poll(self) -> None:
        self._next_poll = None
        if self._is_settled():
            return
        self._in_flight = asyncio.get_running_loop().create_task(self._poll_once())

    def _on_deadline(self) -> None:
        self._deadline = None
        self._settle(SetupPollState.TIMED_OUT, SetupTimeoutError("Error polling setup: timeout"))

    def _release_timers(self) -> None:
        if self._deadline is not None:
            self._deadline.cancel()
            self._deadline = None
        if self._next_poll is not None:
            self._next_poll.cancel()
            self._next_poll = None

    async def _poll_once(self) -> None:
        self._poll_count += 1

        try:
            response = await self._api.post(SETUP_PATH, SetupRequest(username=self._username).model_dump())
            result = SetupResponse.from_body(response.body)
        except Exception as exc:
            if isinstance(exc, StatsApiServiceError) and exc.is_benign_conflict:
                # Nothing re-arms the poll from here; the run waits for the deadline.
                logger.error("Error polling setup (username=%r): %s", self._username, exc)
                return
            self._settle(SetupPollState.FAILED, exc)
            return

        if self._is_settled():
            return

        if not result.has_status:
            self._settle(SetupPollState.FAILED, SetupMissingStatusError("Error polling setup: no status in response"))
            return

        if result.is_complete:
            self._settle(SetupPollState.COMPLETE)
            return

        logger.debug("Setup still pending (username=%r status=%s)", self._username, result.status)
        self._schedule_poll(self._config.interval_seconds)


class SetupPollerService:
    """Waits for a backend setup job to report Complete."""

    def __init__(self, *, api: StatsApiService, config: SetupPollConfig) -> None:
        self._api = api
        self._config = config

    async def wait_until_complete(self, *, username: str, initial: Optional[SetupResponse]) -> SetupPollState:
        run = SetupPollRun(api=self._api, config=self._config, username=username)
        started = time.monotonic()
        try:
            await run.run(initial)
        finally:
            logger.info(
                "Setup poll finished: username=%r state=%s polls=%d elapsed=%.2fs",
                username,
                run.state.value,
                run.poll_count,
                time.monotonic() - started,
            )
        return run.state
