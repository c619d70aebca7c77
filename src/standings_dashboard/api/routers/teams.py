"""Team API endpoints."""

from typing import Any

from fastapi import APIRouter, Query

from ...core.statistics import Statistic
from ...core.types import TEAM_REGISTRY, TeamOption, resolve_team
from ...services.timeseries import series_to_dict
from ..dependencies import SettingsDependency, StandingsDependency, TimeSeriesDependency
from ..errors import NotFoundError, ValidationError

router = APIRouter()


def _team_or_404(team: str) -> TeamOption:
    option = resolve_team(team)
    if option is None:
        raise NotFoundError("Team", team)
    return option


@router.get("")
async def list_teams() -> list[dict[str, Any]]:
    """List selectable teams, alphabetically by name."""
    return [
        {"key": option.key, "id": option.id, "label": option.label}
        for option in sorted(TEAM_REGISTRY.values(), key=lambda o: o.label)
    ]


@router.get("/{team}")
async def get_team(team: str, service: StandingsDependency) -> dict[str, Any]:
    """
    Get a team's current-season record.

    Args:
        team: Symbolic name (e.g. "yankees") or MLB team id

    Raises:
        NotFoundError: 404 if the team is not in the current standings
    """
    option = _team_or_404(team)
    record = await service.current_team(option.id)
    return record.model_dump(by_alias=True, mode="json")


@router.get("/{team}/series")
async def get_team_series(
    team: str,
    service: StandingsDependency,
    builder: TimeSeriesDependency,
    settings: SettingsDependency,
    stat: Statistic = Query(Statistic.WINS, description="Statistic to plot"),
    start: int | None = Query(None, ge=1901, le=2100, description="First season (inclusive)"),
    end: int | None = Query(None, ge=1901, le=2100, description="Last season (inclusive)"),
    exclude: list[int] = Query(default=[], description="Seasons to drop"),
    exclude_shortened: bool = Query(False, description="Drop shortened seasons (2020)"),
) -> dict[str, Any]:
    """
    Get one team's statistic as chart series over a range of seasons.

    The team must appear in the current-season standings; otherwise the
    request fails with 404 and is not worth retrying.

    Returns:
        Team, statistic, effective range and ``{label: [{name, value}]}`` series
    """
    option = _team_or_404(team)
    start_year = start if start is not None else settings.default_start_year
    end_year = end if end is not None else settings.default_end_year
    if start_year > end_year:
        raise ValidationError(
            "Invalid year range",
            detail=f"Start year {start_year} is after end year {end_year}",
        )

    excluded = set(exclude)
    if exclude_shortened:
        excluded.update(settings.shortened_seasons)

    await service.current_team(option.id)
    series = await builder.team_series(option.id, stat, start_year, end_year, excluded)

    return {
        "team": {"key": option.key, "id": option.id, "label": option.label},
        "statistic": {"key": stat.value, "label": stat.label},
        "start": start_year,
        "end": end_year,
        "excluded": sorted(excluded),
        "series": series_to_dict(series),
    }
