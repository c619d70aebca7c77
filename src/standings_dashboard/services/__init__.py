"""
Service layer: standings tables and team time series.

Usage:
    from standings_dashboard.services import StandingsService, TimeSeriesBuilder
"""

from .standings import StandingsService, build_division_tables
from .timeseries import (
    StandingsFetcher,
    TimeSeriesBuilder,
    filter_range,
    locate_team,
    project_field,
    series_to_dict,
)

__all__ = [
    "StandingsFetcher",
    "StandingsService",
    "TimeSeriesBuilder",
    "build_division_tables",
    "filter_range",
    "locate_team",
    "project_field",
    "series_to_dict",
]
