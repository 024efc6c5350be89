from __future__ import annotations

from fastapi import APIRouter, Depends, Path

from chess_stats.models.stats import StatsBundle
from chess_stats.services.dependencies import get_stats_service
from chess_stats.services.stats_service import StatsService

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("/{username}", response_model=StatsBundle)
async def get_stats(
    username: str = Path(..., description="Player username"),
    svc: StatsService = Depends(get_stats_service),
) -> StatsBundle:
    return await svc.fetch_stats(username=username)
