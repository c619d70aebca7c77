"""
Standings Dashboard

Fetches MLB standings from the public MLB Stats API, serves them as division
tables, and reshapes historical seasons into chart-ready team series.

Key Features:
- Two-tier expiring cache (size-limited cookie jar + unlimited fallback)
- Whole-range caching of yearly standings under one composite key
- Typed statistic accessors, including home/away split series

Usage:
    from standings_dashboard import MLBStatsClient, StatsCache, TimeSeriesBuilder
    from standings_dashboard import Statistic, create_cache_store, get_settings

    settings = get_settings()
    cache = StatsCache(create_cache_store(settings))

    async with MLBStatsClient(settings) as client:
        builder = TimeSeriesBuilder(client, cache)
        series = await builder.team_series(147, Statistic.WINS, 2015, 2024, exclude_years=[2020])
"""

from .cache import CacheStore, StatsCache, create_cache_store
from .core import (
    NotFoundError,
    ParseError,
    RemoteError,
    Settings,
    StandingsScope,
    Statistic,
    get_settings,
    resolve_team,
)
from .providers import MLBStatsClient
from .services import StandingsService, TimeSeriesBuilder

__version__ = "1.0.0"

__all__ = [
    # Cache
    "CacheStore",
    "StatsCache",
    "create_cache_store",
    # Core
    "NotFoundError",
    "ParseError",
    "RemoteError",
    "Settings",
    "StandingsScope",
    "Statistic",
    "get_settings",
    "resolve_team",
    # Providers
    "MLBStatsClient",
    # Services
    "StandingsService",
    "TimeSeriesBuilder",
]
