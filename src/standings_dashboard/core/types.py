"""
Core types and constants for the Standings Dashboard.

This module provides:
- StandingsScope enum (whole league, American League, National League)
- DIVISION_NAMES for resolving division ids
- TEAM_REGISTRY mapping symbolic team names to MLB team ids
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class StandingsScope(str, Enum):
    """Which leagues a standings request covers."""

    MLB = "mlb"
    AL = "al"
    NL = "nl"

    @property
    def league_ids(self) -> str:
        return SCOPE_LEAGUE_IDS[self]

    @property
    def title(self) -> str:
        return SCOPE_TITLES[self]


# MLB Stats API league ids: 103 American League, 104 National League
SCOPE_LEAGUE_IDS: dict[StandingsScope, str] = {
    StandingsScope.MLB: "103,104",
    StandingsScope.AL: "103",
    StandingsScope.NL: "104",
}

SCOPE_TITLES: dict[StandingsScope, str] = {
    StandingsScope.MLB: "MLB Team Standings",
    StandingsScope.AL: "American League Standings",
    StandingsScope.NL: "National League Standings",
}


DIVISION_NAMES: dict[int, str] = {
    200: "American League West",
    201: "American League East",
    202: "American League Central",
    203: "National League West",
    204: "National League East",
    205: "National League Central",
}


def get_division_name(division_id: int) -> str:
    """Resolve a division id, falling back to a generic label."""
    return DIVISION_NAMES.get(division_id, f"Division {division_id}")


@dataclass(frozen=True)
class TeamOption:
    """A selectable club."""

    key: str
    id: int
    label: str


# =============================================================================
# TEAM REGISTRY - symbolic name -> MLB team id
# =============================================================================

TEAM_REGISTRY: dict[str, TeamOption] = {
    option.key: option
    for option in (
        TeamOption("diamondbacks", 109, "Arizona Diamondbacks"),
        TeamOption("braves", 144, "Atlanta Braves"),
        TeamOption("orioles", 110, "Baltimore Orioles"),
        TeamOption("redsox", 111, "Boston Red Sox"),
        TeamOption("cubs", 112, "Chicago Cubs"),
        TeamOption("whitesox", 145, "Chicago White Sox"),
        TeamOption("reds", 113, "Cincinnati Reds"),
        TeamOption("guardians", 114, "Cleveland Guardians"),
        TeamOption("rockies", 115, "Colorado Rockies"),
        TeamOption("tigers", 116, "Detroit Tigers"),
        TeamOption("astros", 117, "Houston Astros"),
        TeamOption("royals", 118, "Kansas City Royals"),
        TeamOption("angels", 108, "Los Angeles Angels"),
        TeamOption("dodgers", 119, "Los Angeles Dodgers"),
        TeamOption("marlins", 146, "Miami Marlins"),
        TeamOption("brewers", 158, "Milwaukee Brewers"),
        TeamOption("twins", 142, "Minnesota Twins"),
        TeamOption("mets", 121, "New York Mets"),
        TeamOption("yankees", 147, "New York Yankees"),
        TeamOption("athletics", 133, "Oakland Athletics"),
        TeamOption("phillies", 143, "Philadelphia Phillies"),
        TeamOption("pirates", 134, "Pittsburgh Pirates"),
        TeamOption("padres", 135, "San Diego Padres"),
        TeamOption("giants", 137, "San Francisco Giants"),
        TeamOption("mariners", 136, "Seattle Mariners"),
        TeamOption("cardinals", 138, "St. Louis Cardinals"),
        TeamOption("rays", 139, "Tampa Bay Rays"),
        TeamOption("rangers", 140, "Texas Rangers"),
        TeamOption("jays", 141, "Toronto Blue Jays"),
        TeamOption("nationals", 120, "Washington Nationals"),
    )
}

_TEAMS_BY_ID: dict[int, TeamOption] = {option.id: option for option in TEAM_REGISTRY.values()}


def resolve_team(identifier: Union[str, int]) -> Optional[TeamOption]:
    """
    Look up a team by symbolic name (case-insensitive) or numeric id.

    Numeric ids outside the registry are passed through with a generic
    label; whether the club exists is decided against a snapshot.

    Returns:
        TeamOption, or None if a symbolic name matches no club
    """
    if isinstance(identifier, str):
        text = identifier.strip()
        if not text.isdigit():
            return TEAM_REGISTRY.get(text.lower())
        identifier = int(text)
    return _TEAMS_BY_ID.get(identifier) or TeamOption(str(identifier), identifier, f"Team {identifier}")
