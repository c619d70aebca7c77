"""API routers."""

from . import standings, statistics, teams

__all__ = ["standings", "statistics", "teams"]
