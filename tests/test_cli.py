"""CLI tests via click's CliRunner with the standings source mocked."""

import json

import httpx
import pytest
from click.testing import CliRunner

from standings_dashboard import cli as cli_module
from standings_dashboard.core.config import Settings
from standings_dashboard.providers.mlb import MLBStatsClient

from conftest import mlb_transport


@pytest.fixture
def cli_settings(tmp_path, monkeypatch) -> Settings:
    settings = Settings(
        _env_file=None,
        current_season=2025,
        default_start_year=2021,
        default_end_year=2022,
        cache_dir=tmp_path,
        redis_url=None,
    )
    monkeypatch.setattr(cli_module, "get_settings", lambda: settings)
    return settings


@pytest.fixture
def requests(monkeypatch) -> list[httpx.Request]:
    seen: list[httpx.Request] = []
    monkeypatch.setattr(
        cli_module,
        "MLBStatsClient",
        lambda settings: MLBStatsClient(settings, transport=mlb_transport(requests=seen)),
    )
    return seen


def run(*args):
    return CliRunner().invoke(cli_module.cli, list(args))


def test_teams_lists_registry(cli_settings):
    result = run("teams")
    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert len(lines) == 30
    assert any("yankees" in line and "147" in line for line in lines)


def test_standings_table(cli_settings, requests):
    result = run("standings", "--scope", "nl")
    assert result.exit_code == 0, result.output
    assert "National League Standings (2025)" in result.output
    assert "National League West" in result.output
    assert "Los Angeles Dodgers" in result.output
    assert requests[0].url.params["leagueId"] == "104"


def test_series_table(cli_settings, requests):
    result = run("series", "yankees")
    assert result.exit_code == 0, result.output
    assert "New York Yankees: Wins 2021-2022" in result.output
    assert "2021  91" in result.output
    assert "2022  92" in result.output


def test_series_json_split(cli_settings, requests):
    result = run("series", "147", "--stat", "homeVsAwayWins", "--start", "2021", "--end", "2021", "--json")
    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {
        "home": [{"name": 2021, "value": 50}],
        "away": [{"name": 2021, "value": 40}],
    }


def test_series_exclusions(cli_settings, requests):
    result = run(
        "series", "yankees", "--start", "2019", "--end", "2022",
        "--exclude", "2022", "--exclude-shortened", "--json",
    )
    assert result.exit_code == 0, result.output
    assert [p["name"] for p in json.loads(result.output)["value"]] == [2019, 2021]


def test_series_uses_cache_between_runs(cli_settings, requests):
    run("series", "yankees")
    run("series", "yankees", "--stat", "losses")
    assert [r.url.params["season"] for r in requests] == ["2025", "2021", "2022", "2025"]


def test_series_unknown_team(cli_settings, requests):
    result = run("series", "expos")
    assert result.exit_code == 1
    assert "Unknown team" in result.output
    assert requests == []


def test_series_team_not_in_current_standings(cli_settings, requests):
    result = run("series", "mets")
    assert result.exit_code == 1
    assert "Team 121 not found in 2025 standings" in result.output


def test_series_reversed_range(cli_settings, requests):
    result = run("series", "yankees", "--start", "2022", "--end", "2020")
    assert result.exit_code == 1
    assert "after end year" in result.output


def test_clear_cache(cli_settings, requests):
    run("series", "yankees")
    result = run("clear-cache")
    assert result.exit_code == 0
    assert "Removed 1 cache entries" in result.output

    assert "Removed 0 cache entries" in run("clear-cache").output
