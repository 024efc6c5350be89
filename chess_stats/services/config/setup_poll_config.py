from __future__ import annotations

import os
from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class SetupPollConfig:
    """Timing policy for waiting on a remote setup job.

    The deadline is armed once when polling starts. `initial_delay_seconds` is the
    wait before the first poll; later polls are spaced by `interval_seconds`.
    """

    _DEFAULT_TIMEOUT_SECONDS: ClassVar[float] = 30.0
    _DEFAULT_INTERVAL_SECONDS: ClassVar[float] = 1.0
    timeout_seconds: float = _DEFAULT_TIMEOUT_SECONDS
    interval_seconds: float = _DEFAULT_INTERVAL_SECONDS
    initial_delay_seconds: float = _DEFAULT_INTERVAL_SECONDS

    def __post_init__(self) -> None:
        if self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")
        if self.interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        if self.initial_delay_seconds < 0:
            raise ValueError("initial_delay_seconds must not be negative")

    @staticmethod
    def _float_from_env(name: str, default: float) -> float:
        raw = os.getenv(name)
        if not raw:
            return default
        try:
            return float(raw)
        except ValueError as exc:
            raise ValueError(f"Invalid {name}; must be a number") from exc

    @staticmethod
    def from_env() -> "SetupPollConfig":
        interval_seconds = SetupPollConfig._float_from_env(
            "SETUP_POLL_INTERVAL_SECONDS", SetupPollConfig._DEFAULT_INTERVAL_SECONDS
        )
        return SetupPollConfig(
            timeout_seconds=SetupPollConfig._float_from_env(
                "SETUP_POLL_TIMEOUT_SECONDS", SetupPollConfig._DEFAULT_TIMEOUT_SECONDS
            ),
            interval_seconds=interval_seconds,
            # The first poll waits one interval unless told otherwise.
            initial_delay_seconds=SetupPollConfig._float_from_env(
                "SETUP_POLL_INITIAL_DELAY_SECONDS", interval_seconds
            ),
        )
