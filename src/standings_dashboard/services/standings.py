"""
Standings service: current-season division tables and team lookup.

Routers and CLI call this instead of talking to the client directly.
"""

import logging

from ..core.errors import NotFoundError
from ..core.models import DivisionTable, StandingsRow, StandingsSnapshot, TeamYearRecord
from ..core.types import StandingsScope, get_division_name
from ..providers.mlb import MLBStatsClient
from .timeseries import locate_team

logger = logging.getLogger(__name__)


def build_division_tables(snapshot: StandingsSnapshot) -> list[DivisionTable]:
    """Flatten a snapshot into one table per division, in source order."""
    tables = []
    for division in snapshot.records:
        rows = [
            StandingsRow(
                team_id=record.team.id,
                team_name=record.team.name,
                wins=record.wins,
                losses=record.losses,
                winning_percentage=record.winning_percentage,
                games_back=record.games_back,
                division_rank=record.division_rank,
            )
            for record in division.team_records
        ]
        tables.append(
            DivisionTable(
                division_id=division.division.id,
                name=get_division_name(division.division.id),
                rows=rows,
            )
        )
    return tables


class StandingsService:
    """Current-season standings lookups."""

    def __init__(self, client: MLBStatsClient):
        self.client = client

    async def current_standings(self, scope: StandingsScope = StandingsScope.MLB) -> list[DivisionTable]:
        """Division tables for the current season."""
        snapshot = await self.client.fetch_standings(scope=scope)
        return build_division_tables(snapshot)

    async def current_team(self, team_id: int) -> TeamYearRecord:
        """
        Get a team's record in the current season.

        Raises:
            NotFoundError: The team is not in the current standings
        """
        season = self.client.current_season
        snapshot = await self.client.fetch_standings(season)
        record = locate_team(snapshot, team_id, season=season)
        if record is None:
            logger.info(f"Team {team_id} not in {season} standings")
            raise NotFoundError("Team", team_id, context=f"{season} standings")
        return record
