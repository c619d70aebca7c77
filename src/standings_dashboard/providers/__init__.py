"""
Standings data source clients.

Usage:
    from standings_dashboard.providers import MLBStatsClient

    async with MLBStatsClient() as client:
        snapshot = await client.fetch_standings(2023)
"""

from .mlb import MLBStatsClient

__all__ = ["MLBStatsClient"]
