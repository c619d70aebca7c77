"""
Command-line interface for the Standings Dashboard.

Usage:
    standings-dashboard standings --scope al
    standings-dashboard teams
    standings-dashboard series yankees --stat wins --start 2015 --end 2024 --exclude-shortened
    standings-dashboard series 147 --stat homeVsAwayWins --json
    standings-dashboard clear-cache
    standings-dashboard serve --port 8000
"""

import asyncio
import json
import logging
import sys

import click

from .cache import StatsCache, create_cache_store
from .core.config import Settings, configure_logging, get_settings
from .core.errors import NotFoundError, StandingsError
from .core.statistics import Statistic
from .core.types import TEAM_REGISTRY, StandingsScope, resolve_team
from .providers.mlb import MLBStatsClient
from .services.standings import StandingsService
from .services.timeseries import TimeSeriesBuilder, series_to_dict

logger = logging.getLogger(__name__)


def _fail(message: str) -> None:
    click.echo(f"ERROR: {message}", err=True)
    sys.exit(1)


@click.group()
@click.option("--log-level", default=None, help="Override STANDINGS_LOG_LEVEL")
@click.pass_context
def cli(ctx: click.Context, log_level: str | None):
    """MLB standings and team history."""
    configure_logging(log_level)
    ctx.obj = get_settings()


@cli.command()
@click.option(
    "--scope",
    type=click.Choice([s.value for s in StandingsScope]),
    default=StandingsScope.MLB.value,
    show_default=True,
    help="Whole league or one league",
)
@click.pass_obj
def standings(settings: Settings, scope: str):
    """Show current-season division tables."""
    asyncio.run(_standings(settings, StandingsScope(scope)))


async def _standings(settings: Settings, scope: StandingsScope) -> None:
    async with MLBStatsClient(settings) as client:
        try:
            tables = await StandingsService(client).current_standings(scope)
        except StandingsError as e:
            _fail(f"Failed to fetch {scope.value} data: {e.message}")

    click.echo(f"{scope.title} ({settings.current_season})")
    for table in tables:
        click.echo("")
        click.echo(f"{table.name:<28} {'W':>4} {'L':>4} {'PCT':>6} {'GB':>6} {'RANK':>5}")
        click.echo("-" * 58)
        for row in table.rows:
            click.echo(
                f"{row.team_name:<28} {row.wins or 0:>4} {row.losses or 0:>4} "
                f"{row.winning_percentage or '':>6} {row.games_back or '':>6} {row.division_rank or '':>5}"
            )


@cli.command()
def teams():
    """List team names accepted by the series command."""
    for option in sorted(TEAM_REGISTRY.values(), key=lambda o: o.label):
        click.echo(f"{option.key:<14} {option.id:>4}  {option.label}")


@cli.command()
@click.argument("team")
@click.option(
    "--stat",
    type=click.Choice([s.value for s in Statistic]),
    default=Statistic.WINS.value,
    show_default=True,
)
@click.option("--start", type=int, default=None, help="First season (default from settings)")
@click.option("--end", type=int, default=None, help="Last season (default from settings)")
@click.option("--exclude", type=int, multiple=True, help="Season to drop; repeatable")
@click.option("--exclude-shortened", is_flag=True, help="Drop shortened seasons (2020)")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a table")
@click.pass_obj
def series(
    settings: Settings,
    team: str,
    stat: str,
    start: int | None,
    end: int | None,
    exclude: tuple[int, ...],
    exclude_shortened: bool,
    as_json: bool,
):
    """Plot-ready series of one statistic for TEAM (name or id)."""
    option = resolve_team(team)
    if option is None:
        _fail(f"Unknown team '{team}'. Run 'teams' for the list.")

    start_year = start if start is not None else settings.default_start_year
    end_year = end if end is not None else settings.default_end_year
    if start_year > end_year:
        _fail(f"Start year {start_year} is after end year {end_year}")

    excluded = set(exclude)
    if exclude_shortened:
        excluded.update(settings.shortened_seasons)

    result = asyncio.run(
        _series(settings, option.id, Statistic(stat), start_year, end_year, excluded)
    )

    if as_json:
        click.echo(json.dumps(series_to_dict(result), indent=2))
        return

    click.echo(f"{option.label}: {Statistic(stat).label} {start_year}-{end_year}")
    for label, points in result.items():
        if len(result) > 1:
            click.echo(f"[{label}]")
        for point in points:
            click.echo(f"{point.name}  {point.value}")


async def _series(
    settings: Settings,
    team_id: int,
    stat: Statistic,
    start_year: int,
    end_year: int,
    excluded: set[int],
):
    cache = StatsCache(create_cache_store(settings))
    async with MLBStatsClient(settings) as client:
        builder = TimeSeriesBuilder(
            client,
            cache,
            expiry_days=settings.cache_expiry_days,
            key_prefix=settings.cache_key_prefix,
        )
        try:
            await StandingsService(client).current_team(team_id)
            return await builder.team_series(team_id, stat, start_year, end_year, excluded)
        except NotFoundError as e:
            _fail(e.message)
        except StandingsError as e:
            _fail(f"Failed to load team data: {e.message}")


@cli.command("clear-cache")
@click.option("--pattern", default="*", show_default=True, help="Glob of cache names to drop")
@click.pass_obj
def clear_cache(settings: Settings, pattern: str):
    """Remove cached standings ranges."""
    store = create_cache_store(settings)
    removed = store.clear(pattern)
    click.echo(f"Removed {removed} cache entries")


@cli.command()
@click.option("--host", default=None, help="Bind address (default from settings)")
@click.option("--port", type=int, default=None, help="Port (default from settings)")
@click.pass_obj
def serve(settings: Settings, host: str | None, port: int | None):
    """Run the JSON API."""
    import uvicorn

    uvicorn.run(
        "standings_dashboard.api.main:app",
        host=host or settings.api_host,
        port=port or settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    cli()
