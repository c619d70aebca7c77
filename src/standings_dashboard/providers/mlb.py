"""
MLB Stats API standings client.

Fetches regular-season division standings for the current season or a
historical year from https://statsapi.mlb.com.
"""

import logging
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from ..core.config import Settings, get_settings
from ..core.errors import ParseError
from ..core.http import BaseApiClient
from ..core.models import StandingsSnapshot
from ..core.types import StandingsScope

logger = logging.getLogger(__name__)


class MLBStatsClient(BaseApiClient):
    """MLB Stats API client."""

    BASE_URL = "https://statsapi.mlb.com/api/v1"

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or get_settings()
        super().__init__(
            base_url=self.settings.mlb_api_base_url,
            requests_per_minute=self.settings.requests_per_minute,
            timeout=self.settings.http_timeout,
            max_retries=self.settings.http_max_retries,
            transport=transport,
        )

    @property
    def current_season(self) -> int:
        return self.settings.current_season

    async def get_standings_raw(
        self,
        year: Optional[int] = None,
        scope: StandingsScope = StandingsScope.MLB,
    ) -> dict[str, Any]:
        """Get the raw standings payload for a season."""
        params = {
            "leagueId": scope.league_ids,
            "season": year or self.current_season,
            "standingsTypes": self.settings.standings_type,
        }
        return await self._get("/standings", params)

    async def fetch_standings(
        self,
        year: Optional[int] = None,
        scope: StandingsScope = StandingsScope.MLB,
    ) -> StandingsSnapshot:
        """
        Fetch standings for a season.

        Args:
            year: Season year; the current season when omitted
            scope: Leagues to include

        Returns:
            Validated standings snapshot

        Raises:
            RemoteError: Non-success HTTP status or transport failure
            ParseError: Body is not JSON or not a standings payload
        """
        season = year or self.current_season
        payload = await self.get_standings_raw(season, scope)
        try:
            snapshot = StandingsSnapshot.model_validate(payload)
        except ValidationError as e:
            raise ParseError(f"Unexpected standings payload for {season}: {e}") from e

        logger.debug(f"Fetched {scope.value} standings for {season}: {len(snapshot.records)} divisions")
        return snapshot
