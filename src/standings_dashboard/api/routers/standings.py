"""Standings API endpoints."""

from typing import Any

from fastapi import APIRouter, Query

from ...core.types import StandingsScope
from ..dependencies import StandingsDependency

router = APIRouter()


@router.get("")
async def get_standings(
    service: StandingsDependency,
    scope: StandingsScope = Query(StandingsScope.MLB, description="mlb, al or nl"),
) -> dict[str, Any]:
    """
    Get current-season division tables.

    Args:
        scope: Whole league or one of its two leagues
        service: Standings service (injected)

    Returns:
        Scope title, season and one table per division
    """
    tables = await service.current_standings(scope)
    return {
        "scope": scope.value,
        "title": scope.title,
        "season": service.client.current_season,
        "divisions": [table.model_dump() for table in tables],
    }
