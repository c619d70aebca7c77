"""
Time-series service: turns yearly standings into chart series.

A year range is fetched once per season, sequentially, and cached as a
whole under one composite key; partial ranges are never cached. From the
range, one team's record is located per year and a statistic is projected
into ``{name: year, value}`` points.
"""

import logging
from typing import Any, Iterable, Optional, Protocol, Sequence

from pydantic import ValidationError

from ..cache import StatsCache
from ..core.errors import DataIntegrityError
from ..core.models import StandingsSnapshot, TeamYearRecord, TimeSeriesPoint, YearSnapshot
from ..core.statistics import Scalar, StatField, Statistic
from ..core.types import get_division_name

logger = logging.getLogger(__name__)


class StandingsFetcher(Protocol):
    async def fetch_standings(self, year: Optional[int] = None) -> StandingsSnapshot: ...


def locate_team(snapshot: StandingsSnapshot, team_id: int, season: int = 0) -> Optional[TeamYearRecord]:
    """
    Find a team's record in a snapshot.

    Args:
        snapshot: One season's standings
        team_id: MLB team id
        season: Season year stamped on the result

    Returns:
        The record decorated with its division name, or None if absent

    Raises:
        DataIntegrityError: The team id appears more than once
    """
    found: Optional[TeamYearRecord] = None
    for division in snapshot.records:
        for record in division.team_records:
            if record.team.id != team_id:
                continue
            if found is not None:
                raise DataIntegrityError(
                    f"Team {team_id} appears more than once in the {season or 'current'} standings"
                )
            found = TeamYearRecord.model_validate(
                {
                    **record.model_dump(by_alias=True),
                    "divisionName": get_division_name(division.division.id),
                    "season": season,
                }
            )
    return found


def project_field(record: TeamYearRecord, field: StatField) -> Optional[Scalar]:
    """Resolve one statistic on a record; None when the payload lacks it."""
    return field.resolve(record)


def filter_range(
    series: Sequence[TimeSeriesPoint],
    start_year: int,
    end_year: int,
    exclude_years: Iterable[int] = (),
) -> list[TimeSeriesPoint]:
    """Keep points with ``start_year <= name <= end_year`` not in ``exclude_years``, in order."""
    excluded = set(exclude_years)
    return [
        point
        for point in series
        if start_year <= point.name <= end_year and point.name not in excluded
    ]


class TimeSeriesBuilder:
    """Builds per-team statistic series over a range of seasons."""

    def __init__(
        self,
        fetcher: StandingsFetcher,
        cache: StatsCache,
        expiry_days: float = 30,
        key_prefix: str = "mlb_standings",
    ):
        self.fetcher = fetcher
        self.cache = cache
        self.expiry_days = expiry_days
        self.key_prefix = key_prefix

    def range_key(self, start_year: int, end_year: int) -> str:
        """Composite cache key for a whole year range."""
        return f"{self.key_prefix}_{start_year}_{end_year}"

    def _load_cached_range(self, key: str) -> Optional[list[YearSnapshot]]:
        payload = self.cache.load(key, self.expiry_days)
        if payload is None:
            return None
        try:
            return [YearSnapshot.model_validate(item) for item in payload]
        except (ValidationError, TypeError) as e:
            logger.warning(f"Discarding malformed cached range {key}: {e}")
            return None

    async def build_year_range(self, start_year: int, end_year: int) -> list[YearSnapshot]:
        """
        Get standings for every season in ``[start_year, end_year]``, ascending.

        Seasons are fetched one after another. The assembled range is cached
        once under its composite key; if any fetch fails the error propagates,
        nothing is returned and nothing is cached.

        Raises:
            ValueError: start_year is after end_year
            RemoteError: A season could not be fetched
            ParseError: A season's payload was malformed
        """
        if start_year > end_year:
            raise ValueError(f"Start year {start_year} is after end year {end_year}")

        key = self.range_key(start_year, end_year)
        cached = self._load_cached_range(key)
        if cached is not None:
            logger.debug(f"Cache hit for {key}")
            return cached

        logger.info(f"Fetching standings for {start_year}-{end_year}")
        years: list[YearSnapshot] = []
        for year in range(start_year, end_year + 1):
            snapshot = await self.fetcher.fetch_standings(year)
            years.append(YearSnapshot(year=year, snapshot=snapshot))

        self.cache.save(
            [item.model_dump(by_alias=True, mode="json") for item in years],
            key,
            self.expiry_days,
        )
        return years

    async def team_records(self, team_id: int, start_year: int, end_year: int) -> list[TimeSeriesPoint]:
        """Points whose value is the team's full record; seasons without the team are dropped."""
        points = []
        for item in await self.build_year_range(start_year, end_year):
            record = locate_team(item.snapshot, team_id, season=item.year)
            if record is not None:
                points.append(TimeSeriesPoint(name=item.year, value=record))
        return points

    async def team_series(
        self,
        team_id: int,
        statistic: Statistic,
        start_year: int,
        end_year: int,
        exclude_years: Iterable[int] = (),
    ) -> dict[str, list[TimeSeriesPoint]]:
        """
        Build the plotted series for one team and one statistic.

        Returns:
            ``{label: points}``; one entry for a plain statistic, two
            (``home``/``away``) for a split statistic
        """
        records = await self.team_records(team_id, start_year, end_year)
        excluded = list(exclude_years)

        series: dict[str, list[TimeSeriesPoint]] = {}
        for field in statistic.fields:
            points = []
            for point in records:
                value = project_field(point.value, field)
                if value is not None:
                    points.append(TimeSeriesPoint(name=point.name, value=value))
            series[field.label] = filter_range(points, start_year, end_year, excluded)
        return series


def series_to_dict(series: dict[str, list[TimeSeriesPoint]]) -> dict[str, Any]:
    """Plain JSON form of a series mapping."""
    return {
        label: [point.model_dump(by_alias=True, mode="json") for point in points]
        for label, points in series.items()
    }
