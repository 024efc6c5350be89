from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class StatsBundle(BaseModel):
    """The four stats payloads for one user, each passed through verbatim."""

    model_config = ConfigDict(populate_by_name=True)

    game_stats: Any = Field(default=None, alias="gameStats")
    win_stats: Any = Field(default=None, alias="winStats")
    loss_stats: Any = Field(default=None, alias="lossStats")
    draw_stats: Any = Field(default=None, alias="drawStats")
