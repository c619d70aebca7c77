"""
Core module for the Standings Dashboard.

This module provides the foundational components:
- Configuration management (config.py)
- Error taxonomy (errors.py)
- Standings payload and series models (models.py)
- Scopes, divisions and the team registry (types.py)
- Typed statistic accessors (statistics.py)
- Shared HTTP client infrastructure (http.py)

Usage:
    from standings_dashboard.core import Settings, get_settings
    from standings_dashboard.core import Statistic, StandingsScope, resolve_team
    from standings_dashboard.core.http import BaseApiClient
"""

# Configuration
from .config import Settings, configure_logging, get_settings

# Errors
from .errors import (
    CacheError,
    DataIntegrityError,
    NotFoundError,
    ParseError,
    RemoteError,
    StandingsError,
)

# Models
from .models import (
    CacheEntry,
    DivisionStandings,
    DivisionTable,
    StandingsRow,
    StandingsSnapshot,
    TeamRecord,
    TeamYearRecord,
    TimeSeriesPoint,
    YearSnapshot,
)

# Types
from .statistics import StatField, Statistic
from .types import (
    DIVISION_NAMES,
    TEAM_REGISTRY,
    StandingsScope,
    TeamOption,
    get_division_name,
    resolve_team,
)

__all__ = [
    # Config
    "Settings",
    "configure_logging",
    "get_settings",
    # Errors
    "CacheError",
    "DataIntegrityError",
    "NotFoundError",
    "ParseError",
    "RemoteError",
    "StandingsError",
    # Models
    "CacheEntry",
    "DivisionStandings",
    "DivisionTable",
    "StandingsRow",
    "StandingsSnapshot",
    "TeamRecord",
    "TeamYearRecord",
    "TimeSeriesPoint",
    "YearSnapshot",
    # Types
    "DIVISION_NAMES",
    "TEAM_REGISTRY",
    "StandingsScope",
    "StatField",
    "Statistic",
    "TeamOption",
    "get_division_name",
    "resolve_team",
]
