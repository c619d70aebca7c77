"""
Pytest configuration for standings-dashboard tests.

Provides a controllable clock, MLB Stats API payload builders and a fake
standings fetcher so no test touches the network.
"""

from typing import Any, Callable, Optional

import httpx
import pytest

from standings_dashboard.cache import CacheStore, CookieJarStorage, MemoryStorage, StatsCache
from standings_dashboard.core.config import Settings
from standings_dashboard.core.errors import RemoteError
from standings_dashboard.core.models import StandingsSnapshot

START_MS = 1_700_000_000_000


class FakeClock:
    """Epoch-millisecond clock that only moves when told to."""

    def __init__(self, now: int = START_MS):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


def team_record(
    team_id: int,
    name: str,
    wins: int = 90,
    losses: int = 72,
    rank: str = "1",
    run_differential: Optional[int] = 50,
    home: Optional[tuple[int, int]] = (50, 31),
    away: Optional[tuple[int, int]] = (40, 41),
) -> dict[str, Any]:
    """One teamRecords entry shaped like the MLB Stats API."""
    total = wins + losses
    pct = f"{wins / total:.3f}".lstrip("0") if total else ".000"
    splits = []
    if home is not None:
        splits.append({"wins": home[0], "losses": home[1], "type": "home", "pct": ".500"})
    if away is not None:
        splits.append({"wins": away[0], "losses": away[1], "type": "away", "pct": ".500"})
    record: dict[str, Any] = {
        "team": {"id": team_id, "name": name, "link": f"/api/v1/teams/{team_id}"},
        "season": "2024",
        "wins": wins,
        "losses": losses,
        "winningPercentage": pct,
        "gamesBack": "-" if rank == "1" else "5.0",
        "divisionRank": rank,
        "leagueRecord": {"wins": wins, "losses": losses, "ties": 0, "pct": pct},
        "records": {"splitRecords": splits},
    }
    if run_differential is not None:
        record["runDifferential"] = run_differential
    return record


def standings_payload(year: int = 2024, yankees_wins: Optional[int] = None) -> dict[str, Any]:
    """A two-division standings payload; Yankees wins default to ``year - 1930``."""
    wins = yankees_wins if yankees_wins is not None else year - 1930
    return {
        "copyright": "Copyright MLB Advanced Media",
        "records": [
            {
                "standingsType": "regularSeason",
                "division": {"id": 201, "link": "/api/v1/divisions/201"},
                "teamRecords": [
                    team_record(147, "New York Yankees", wins=wins, losses=162 - wins),
                    team_record(111, "Boston Red Sox", wins=81, losses=81, rank="2", run_differential=-3),
                ],
            },
            {
                "standingsType": "regularSeason",
                "division": {"id": 203, "link": "/api/v1/divisions/203"},
                "teamRecords": [
                    team_record(119, "Los Angeles Dodgers", wins=98, losses=64),
                ],
            },
        ],
    }


class FakeFetcher:
    """Records every requested year; raises RemoteError for ``fail_years``."""

    def __init__(self, fail_years: tuple[int, ...] = (), status: int = 500):
        self.calls: list[Optional[int]] = []
        self.fail_years = fail_years
        self.status = status

    async def fetch_standings(self, year: Optional[int] = None) -> StandingsSnapshot:
        self.calls.append(year)
        if year in self.fail_years:
            raise RemoteError(f"HTTP error! status: {self.status}", status=self.status)
        return StandingsSnapshot.model_validate(standings_payload(year or 2025))


class CountingStatsCache(StatsCache):
    """StatsCache that records every save."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.saved_keys: list[str] = []

    def save(self, payload, key, expiry_days):
        self.saved_keys.append(key)
        super().save(payload, key, expiry_days)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock) -> CacheStore:
    return CacheStore(CookieJarStorage(max_bytes=4096, clock=clock), MemoryStorage(), clock=clock)


@pytest.fixture
def stats_cache(store, clock) -> CountingStatsCache:
    return CountingStatsCache(store, clock=clock)


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        current_season=2025,
        default_start_year=2020,
        default_end_year=2022,
        cache_dir=None,
        redis_url=None,
    )


def mlb_transport(
    handler: Optional[Callable[[httpx.Request], httpx.Response]] = None,
    requests: Optional[list[httpx.Request]] = None,
) -> httpx.MockTransport:
    """MockTransport serving ``standings_payload`` for the requested season."""

    def default(request: httpx.Request) -> httpx.Response:
        season = int(request.url.params.get("season", "2025"))
        return httpx.Response(200, json=standings_payload(season))

    def record(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)
        return (handler or default)(request)

    return httpx.MockTransport(record)
