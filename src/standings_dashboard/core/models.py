"""
Models for standings payloads, cache envelopes and chart series.

The pydantic models mirror the MLB Stats API standings shape. Field names
are snake_case with the API's camelCase as aliases; unknown fields are kept
(``extra="allow"``) so a cached snapshot round-trips without loss.
"""

from __future__ import annotations

from typing import Any, Optional

import msgspec
from pydantic import BaseModel, ConfigDict, Field


class _ApiModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")


# =============================================================================
# Standings payload
# =============================================================================


class TeamRef(_ApiModel):
    """Identifying info for a club."""

    id: int
    name: str = ""


class LeagueRecord(_ApiModel):
    wins: Optional[int] = None
    losses: Optional[int] = None
    pct: Optional[str] = None


class SplitRecord(_ApiModel):
    """Record in one game context (home, away, lastTen, ...)."""

    type: str
    wins: Optional[int] = None
    losses: Optional[int] = None
    pct: Optional[str] = None


class TeamSplits(_ApiModel):
    split_records: list[SplitRecord] = Field(default_factory=list, alias="splitRecords")

    def split(self, split_type: str) -> Optional[SplitRecord]:
        for record in self.split_records:
            if record.type == split_type:
                return record
        return None


class TeamRecord(_ApiModel):
    """One team's line in a division table."""

    team: TeamRef
    wins: Optional[int] = None
    losses: Optional[int] = None
    winning_percentage: Optional[str] = Field(default=None, alias="winningPercentage")
    games_back: Optional[str] = Field(default=None, alias="gamesBack")
    division_rank: Optional[str] = Field(default=None, alias="divisionRank")
    run_differential: Optional[int] = Field(default=None, alias="runDifferential")
    league_record: Optional[LeagueRecord] = Field(default=None, alias="leagueRecord")
    records: Optional[TeamSplits] = None


class DivisionRef(_ApiModel):
    id: int


class DivisionStandings(_ApiModel):
    division: DivisionRef
    team_records: list[TeamRecord] = Field(default_factory=list, alias="teamRecords")


class StandingsSnapshot(_ApiModel):
    """One season's full standings payload."""

    records: list[DivisionStandings] = Field(default_factory=list)


class TeamYearRecord(TeamRecord):
    """A team's record for one season, decorated with its division name."""

    division_name: str = Field(alias="divisionName")
    season: int


class YearSnapshot(_ApiModel):
    year: int
    snapshot: StandingsSnapshot


# =============================================================================
# Series and tables
# =============================================================================


class TimeSeriesPoint(BaseModel):
    """A single chart point; ``name`` is the season year."""

    name: int
    value: Any


class StandingsRow(BaseModel):
    team_id: int
    team_name: str
    wins: Optional[int] = None
    losses: Optional[int] = None
    winning_percentage: Optional[str] = None
    games_back: Optional[str] = None
    division_rank: Optional[str] = None


class DivisionTable(BaseModel):
    division_id: int
    name: str
    rows: list[StandingsRow] = Field(default_factory=list)


# =============================================================================
# Cache envelope
# =============================================================================


class CacheEntry(msgspec.Struct):
    """Persisted cache envelope. ``timestamp`` is epoch milliseconds at write time."""

    data: Any
    timestamp: int
    version: str
