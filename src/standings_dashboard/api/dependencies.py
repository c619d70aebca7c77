"""
Dependency injection for API endpoints.

The HTTP client and the stats cache are process-wide singletons: the
client holds a connection pool and the cache's tiers may be backed by
files or Redis. Tests swap them through ``app.dependency_overrides``.
"""

from typing import Annotated

from fastapi import Depends

from ..cache import StatsCache, create_cache_store
from ..core.config import Settings, get_settings
from ..providers.mlb import MLBStatsClient
from ..services.standings import StandingsService
from ..services.timeseries import TimeSeriesBuilder

_client_instance: MLBStatsClient | None = None
_cache_instance: StatsCache | None = None


def get_client() -> MLBStatsClient:
    """Dependency that provides the shared standings client."""
    global _client_instance
    if _client_instance is None:
        _client_instance = MLBStatsClient(get_settings())
    return _client_instance


async def close_client() -> None:
    """Close the shared client. Called at app shutdown."""
    global _client_instance
    if _client_instance is not None:
        await _client_instance.close()
        _client_instance = None


def get_stats_cache() -> StatsCache:
    """Dependency that provides the shared stats cache."""
    global _cache_instance
    if _cache_instance is None:
        _cache_instance = StatsCache(create_cache_store(get_settings()))
    return _cache_instance


SettingsDependency = Annotated[Settings, Depends(get_settings)]
ClientDependency = Annotated[MLBStatsClient, Depends(get_client)]
CacheDependency = Annotated[StatsCache, Depends(get_stats_cache)]


def get_standings_service(client: ClientDependency) -> StandingsService:
    return StandingsService(client)


def get_timeseries_builder(
    client: ClientDependency,
    cache: CacheDependency,
    settings: SettingsDependency,
) -> TimeSeriesBuilder:
    return TimeSeriesBuilder(
        client,
        cache,
        expiry_days=settings.cache_expiry_days,
        key_prefix=settings.cache_key_prefix,
    )


StandingsDependency = Annotated[StandingsService, Depends(get_standings_service)]
TimeSeriesDependency = Annotated[TimeSeriesBuilder, Depends(get_timeseries_builder)]
