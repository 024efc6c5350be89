"""Configuration package (Facade).

Re-exports the public config types so callers import from a single, stable path:

	from chess_stats.services.config import StatsApiConfig

Internal module layout can change without touching call sites; ``__all__`` is the
public API of this package.
"""

from chess_stats.services.config.setup_poll_config import SetupPollConfig
from chess_stats.services.config.stats_api_config import StatsApiConfig

__all__ = ["SetupPollConfig", "StatsApiConfig"]
