"""MLB Stats client tests against httpx.MockTransport."""

import httpx
import pytest

from standings_dashboard.core.errors import ParseError, RemoteError
from standings_dashboard.core.types import StandingsScope
from standings_dashboard.providers.mlb import MLBStatsClient

from conftest import mlb_transport


async def test_fetch_historical_season(settings):
    requests: list[httpx.Request] = []
    async with MLBStatsClient(settings, transport=mlb_transport(requests=requests)) as client:
        snapshot = await client.fetch_standings(2021)

    assert len(requests) == 1
    params = requests[0].url.params
    assert requests[0].url.path == "/api/v1/standings"
    assert params["season"] == "2021"
    assert params["leagueId"] == "103,104"
    assert params["standingsTypes"] == "regularSeason"

    assert [d.division.id for d in snapshot.records] == [201, 203]
    yankees = snapshot.records[0].team_records[0]
    assert yankees.team.id == 147
    assert yankees.wins == 91
    assert yankees.records.split("home").wins == 50


async def test_fetch_defaults_to_current_season(settings):
    requests: list[httpx.Request] = []
    async with MLBStatsClient(settings, transport=mlb_transport(requests=requests)) as client:
        await client.fetch_standings(scope=StandingsScope.AL)

    assert requests[0].url.params["season"] == "2025"
    assert requests[0].url.params["leagueId"] == "103"


async def test_unknown_fields_are_preserved(settings):
    async with MLBStatsClient(settings, transport=mlb_transport()) as client:
        snapshot = await client.fetch_standings(2021)

    dumped = snapshot.model_dump(by_alias=True)
    assert dumped["copyright"] == "Copyright MLB Advanced Media"
    assert dumped["records"][0]["teamRecords"][0]["team"]["link"] == "/api/v1/teams/147"


@pytest.mark.parametrize("status", [500, 503, 404])
async def test_http_error_raises_remote_error(settings, status):
    transport = mlb_transport(lambda request: httpx.Response(status, text="nope"))
    async with MLBStatsClient(settings, transport=transport) as client:
        with pytest.raises(RemoteError) as exc_info:
            await client.fetch_standings(2021)

    assert exc_info.value.status == status
    assert exc_info.value.retryable == (status >= 500)


async def test_single_request_by_default(settings):
    requests: list[httpx.Request] = []
    transport = mlb_transport(lambda request: httpx.Response(500), requests=requests)
    async with MLBStatsClient(settings, transport=transport) as client:
        with pytest.raises(RemoteError):
            await client.fetch_standings(2021)
    assert len(requests) == 1


async def test_invalid_json_raises_parse_error(settings):
    transport = mlb_transport(lambda request: httpx.Response(200, text="<html>maintenance</html>"))
    async with MLBStatsClient(settings, transport=transport) as client:
        with pytest.raises(ParseError):
            await client.fetch_standings(2021)


async def test_wrong_shape_raises_parse_error(settings):
    transport = mlb_transport(
        lambda request: httpx.Response(200, json={"records": [{"teamRecords": "oops"}]})
    )
    async with MLBStatsClient(settings, transport=transport) as client:
        with pytest.raises(ParseError):
            await client.fetch_standings(2021)


async def test_transport_failure_raises_remote_error(settings):
    def fail(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with MLBStatsClient(settings, transport=mlb_transport(fail)) as client:
        with pytest.raises(RemoteError) as exc_info:
            await client.fetch_standings(2021)

    assert exc_info.value.status is None
    assert exc_info.value.retryable
