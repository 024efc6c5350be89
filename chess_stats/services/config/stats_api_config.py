from __future__ import annotations

import os
from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class StatsApiConfig:
    """Runtime configuration for the stats backend HTTP calls.

    `base_url` should include the scheme, e.g. "http://localhost:8090".
    """

    _DEFAULT_BASE_URL: ClassVar[str] = "http://localhost:8090"
    _DEFAULT_TIMEOUT_SECONDS: ClassVar[float] = 30.0
    base_url: str = _DEFAULT_BASE_URL
    timeout_seconds: float = _DEFAULT_TIMEOUT_SECONDS

    def url_for(self, path: str) -> str:
        if not path.startswith("/"):
            path = "/" + path
        return f"{self.base_url}{path}"

    @staticmethod
    def from_env(
        *,
        base_url_env: str = "STATS_API_BASE_URL",
        timeout_env: str = "STATS_API_TIMEOUT_SECONDS",
    ) -> "StatsApiConfig":
        base_url = (os.getenv(base_url_env) or "").strip() or StatsApiConfig._DEFAULT_BASE_URL

        timeout_raw = os.getenv(timeout_env)
        timeout_seconds = StatsApiConfig._DEFAULT_TIMEOUT_SECONDS
        if timeout_raw:
            try:
                timeout_seconds = float(timeout_raw)
            except ValueError as exc:
                raise ValueError(f"Invalid {timeout_env}; must be a number") from exc
        if timeout_seconds <= 0:
            raise ValueError(f"Invalid {timeout_env}; must be positive")

        return StatsApiConfig(base_url=base_url.rstrip("/"), timeout_seconds=timeout_seconds)
