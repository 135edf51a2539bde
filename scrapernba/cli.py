"""
Command-line interface for scrapernba.

Provides batch access to the NBA stats and live endpoints directly from the terminal.

Note: DataFrame scrapers are imported lazily, only by the commands that use them.
"""

import asyncio
import json
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple

import click

from scrapernba import __version__
from scrapernba.api import NbaAPI
from scrapernba.config import (
    DEFAULT_OUTPUT_DIR,
    DEFAULT_SEASON_TYPE,
    RATE_LIMIT_MAX_SECONDS,
    RATE_LIMIT_MIN_SECONDS,
    SeasonType,
    StatCategory,
    constant_values,
    generate_season_range,
    get_current_season,
    get_today_date,
    parse_season_year,
)
from scrapernba.core.http import CLIENT_TIERS
from scrapernba.core.utils import is_tabular, random_pause, write_to_file
from scrapernba.core.validation import validate_season

LOG = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "NONE")
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class ProgressReporter:
    """Prints job progress as text or as JSON lines. Errors are printed even when quiet."""

    def __init__(self, json_lines: bool = False, quiet: bool = False):
        self.json_lines = json_lines
        self.quiet = quiet

    def _event(self, **event):
        click.echo(json.dumps(event, default=str))

    def header(self, title: str):
        if not self.quiet and not self.json_lines:
            click.echo(f"\n=== {title} ===\n")

    def fetch(self, endpoint: str, params: Optional[Dict[str, Any]] = None):
        if self.quiet:
            return
        if self.json_lines:
            self._event(event="fetch", endpoint=endpoint, params=params)
        else:
            click.echo(f"Fetching: {endpoint}" + (f" ({json.dumps(params, default=str)})" if params else ""))

    def success(self, endpoint: str, filepath: Optional[Path] = None):
        if self.quiet:
            return
        if self.json_lines:
            self._event(event="success", endpoint=endpoint, filepath=filepath)
        else:
            click.echo(f"  ✓ {endpoint}" + (f" -> {filepath}" if filepath else ""))

    def error(self, endpoint: str, message: str):
        if self.json_lines:
            self._event(event="error", endpoint=endpoint, error=message)
        else:
            click.echo(f"  ✗ {endpoint}: {message}", err=True)

    def info(self, message: str):
        if self.quiet:
            return
        if self.json_lines:
            self._event(event="info", message=message)
        else:
            click.echo(message)


@dataclass(frozen=True)
class Job:
    """One endpoint the fetch command can run."""

    flag: str
    label: str
    call: Callable[[NbaAPI, Dict[str, Any], Optional[str]], Awaitable[Any]]
    path: Callable[[Dict[str, Any], Optional[str], Any], str]
    needs: Tuple[str, ...] = ()
    per_season: bool = False


def _game_file(prefix: str, ctx: Dict[str, Any], data: Any) -> str:
    """'20241225/SASNYK' game codes become <prefix>_SASNYK_20241225; otherwise <prefix>_<game id>."""
    code = data.get("gameCode") if isinstance(data, dict) else None
    if isinstance(code, str) and "/" in code:
        date, teams = code.split("/", 1)
        return f"{prefix}_{teams}_{date}"
    return f"{prefix}_{ctx['game_id']}"


def _compact_date() -> str:
    return get_today_date().replace("-", "")


JOBS: List[Job] = [
    # Live
    Job("live_scoreboard", "Live Scoreboard",
        lambda api, ctx, season: api.get_live_scoreboard(),
        lambda ctx, season, data: f"live/scoreboard/scoreboard_{_compact_date()}"),
    Job("live_box_score", "Live Box Score",
        lambda api, ctx, season: api.get_live_box_score(ctx["game_id"]),
        lambda ctx, season, data: f"live/boxscore/{_game_file('boxscore', ctx, data)}",
        needs=("game_id",)),
    Job("live_play_by_play", "Live Play By Play",
        lambda api, ctx, season: api.get_live_play_by_play(ctx["game_id"]),
        lambda ctx, season, data: f"live/playbyplay/{_game_file('playbyplay', ctx, data)}",
        needs=("game_id",)),
    Job("live_odds", "Live Odds",
        lambda api, ctx, season: api.get_live_odds(),
        lambda ctx, season, data: f"live/odds/odds_{_compact_date()}"),
    # Games
    Job("box_score", "Box Score Traditional",
        lambda api, ctx, season: api.get_box_score_traditional(ctx["game_id"]),
        lambda ctx, season, data: f"boxscore/{_game_file('traditional', ctx, data)}",
        needs=("game_id",)),
    Job("box_score_advanced", "Box Score Advanced",
        lambda api, ctx, season: api.get_box_score_advanced(ctx["game_id"]),
        lambda ctx, season, data: f"boxscore/{_game_file('advanced', ctx, data)}",
        needs=("game_id",)),
    Job("play_by_play", "Play By Play",
        lambda api, ctx, season: api.get_play_by_play(ctx["game_id"]),
        lambda ctx, season, data: f"playbyplay/pbp_{ctx['game_id']}",
        needs=("game_id",)),
    Job("scoreboard", "Scoreboard",
        lambda api, ctx, season: api.get_scoreboard(ctx["game_date"]),
        lambda ctx, season, data: f"scoreboard/scoreboard_{(ctx['game_date'] or get_today_date()).replace('-', '')}"),
    Job("game_finder", "Game Finder",
        lambda api, ctx, season: api.get_league_game_finder(
            season=ctx["season"], season_type=ctx["season_type"], team=ctx["team"], player_id=ctx["player_id"],
            player_or_team="P" if ctx["player_id"] else "T"),
        lambda ctx, season, data: f"league/gamefinder_{ctx['season'] or 'all'}"),
    # Player / team, not season-bound
    Job("player_career", "Player Career Stats",
        lambda api, ctx, season: api.get_player_career_stats(ctx["player_id"]),
        lambda ctx, season, data: f"player/{ctx['player_id']}/career",
        needs=("player_id",)),
    Job("player_info", "Player Info",
        lambda api, ctx, season: api.get_common_player_info(ctx["player_id"]),
        lambda ctx, season, data: f"player/{ctx['player_id']}/info",
        needs=("player_id",)),
    Job("team_history", "Team Year-by-Year Stats",
        lambda api, ctx, season: api.get_team_year_by_year_stats(ctx["team"]),
        lambda ctx, season, data: f"team/{ctx['team']}/history",
        needs=("team",)),
    # Season-based
    Job("draft_history", "Draft History",
        lambda api, ctx, season: api.get_draft_history(parse_season_year(season)),
        lambda ctx, season, data: f"draft/draft_{parse_season_year(season)}",
        per_season=True),
    Job("player_game_log", "Player Game Log",
        lambda api, ctx, season: api.get_player_game_log(ctx["player_id"], season, ctx["season_type"]),
        lambda ctx, season, data: f"player/{ctx['player_id']}/gamelog_{season}",
        needs=("player_id",), per_season=True),
    Job("all_players", "All Players",
        lambda api, ctx, season: api.get_common_all_players(season),
        lambda ctx, season, data: f"players/all_players_{season}",
        per_season=True),
    Job("player_metrics", "Player Estimated Metrics",
        lambda api, ctx, season: api.get_player_estimated_metrics(season),
        lambda ctx, season, data: f"players/metrics_{season}",
        per_season=True),
    Job("team_roster", "Team Roster",
        lambda api, ctx, season: api.get_common_team_roster(ctx["team"], season),
        lambda ctx, season, data: f"team/{ctx['team']}/roster_{season}",
        needs=("team",), per_season=True),
    Job("team_game_log", "Team Game Log",
        lambda api, ctx, season: api.get_team_game_log(ctx["team"], season, ctx["season_type"]),
        lambda ctx, season, data: f"team/{ctx['team']}/gamelog_{season}",
        needs=("team",), per_season=True),
    Job("team_info", "Team Info",
        lambda api, ctx, season: api.get_team_info_common(ctx["team"], season),
        lambda ctx, season, data: f"team/{ctx['team']}/info_{season}",
        needs=("team",), per_season=True),
    Job("league_leaders", "League Leaders",
        lambda api, ctx, season: api.get_league_leaders(season, ctx["stat_category"]),
        lambda ctx, season, data: f"league/leaders_{ctx['stat_category']}_{season}",
        per_season=True),
    Job("league_dash_players", "League Dashboard Player Stats",
        lambda api, ctx, season: api.get_league_dash_player_stats(season=season, season_type=ctx["season_type"]),
        lambda ctx, season, data: f"league/dash_players_{season}",
        per_season=True),
    Job("standings", "League Standings",
        lambda api, ctx, season: api.get_league_standings(season, ctx["season_type"]),
        lambda ctx, season, data: f"league/standings_{season}",
        per_season=True),
    Job("league_game_log", "League Game Log",
        lambda api, ctx, season: api.get_league_game_log(season, ctx["season_type"]),
        lambda ctx, season, data: f"league/gamelog_{season}",
        per_season=True),
    Job("shot_chart", "Shot Chart",
        lambda api, ctx, season: api.get_shot_chart_detail(
            ctx["player_id"], team=ctx["team"] or 0, season=season, season_type=ctx["season_type"]),
        lambda ctx, season, data: f"shotchart/player_{ctx['player_id']}_{season}",
        needs=("player_id",), per_season=True),
]

CATEGORIES = {
    "all_player_endpoints": ("player_career", "player_game_log", "player_info", "all_players", "player_metrics"),
    "all_team_endpoints": ("team_roster", "team_game_log", "team_info", "team_history"),
    "all_league_endpoints": ("league_leaders", "league_dash_players", "standings", "league_game_log"),
    "live": ("live_scoreboard", "live_odds"),
}

REQUIREMENT_FLAGS = {"player_id": "--player-id", "team": "--team-id", "game_id": "--game-id"}

EXAMPLES = """
ScraperNBA CLI - Usage Examples
===============================

# League leaders for the current season
scrapernba fetch --league-leaders

# League leaders for a specific season, rebounds
scrapernba fetch --league-leaders --season 2024-25 --stat-category REB

# Player career stats (LeBron James)
scrapernba fetch --player-career --player-id 2544

# Player game log as CSV
scrapernba fetch --player-game-log --player-id 2544 --season 2024-25 --format csv

# Team roster (by id or abbreviation)
scrapernba fetch --team-roster --team-id LAL --season 2024-25

# Standings for several seasons
scrapernba fetch --standings --start-season 2020-21 --end-season 2024-25

# Scoreboard for a date
scrapernba fetch --scoreboard --game-date 2025-01-15

# Box score and play-by-play for a game
scrapernba fetch --box-score --play-by-play --game-id 0022400123

# Live scoreboard and odds
scrapernba fetch --live

# Everything for a player, previewed first
scrapernba fetch --all-player-endpoints --player-id 2544 --season 2024-25 --dry-run

# Fall back to a headless browser when stats.nba.com blocks plain requests
scrapernba fetch --league-leaders --client auto

# Static team table
scrapernba teams --format json

Common Player IDs:
  LeBron James: 2544
  Stephen Curry: 201939
  Kevin Durant: 201142
  Giannis Antetokounmpo: 203507

Common Team IDs:
  Lakers: 1610612747
  Celtics: 1610612738
  Warriors: 1610612744
  Bulls: 1610612741
"""


def _configure_logging(level: str) -> None:
    """NONE silences logging until the running command exits, then the previous threshold is restored."""
    if level == "NONE":
        previous = logging.root.manager.disable
        logging.disable(logging.CRITICAL)
        click.get_current_context().call_on_close(lambda: logging.disable(previous))
        return
    logging.basicConfig(level=getattr(logging, level), format=LOG_FORMAT)


def _make_api(client: str) -> NbaAPI:
    return NbaAPI(client_tier=client)


def _fail(message: str) -> None:
    click.echo(f"❌ Error: {message}", err=True)
    sys.exit(1)


def _season_range(season: Optional[str], start: Optional[str], end: Optional[str]) -> List[str]:
    if season:
        validate_season(season)
        return [season]
    if start and end:
        validate_season(start)
        validate_season(end)
        return generate_season_range(parse_season_year(start), parse_season_year(end))
    return [get_current_season()]


def _save(data: Any, base: Path, fmt: str) -> Path:
    """CSV only for row lists; dict results (box scores, scoreboards) always go to JSON."""
    if fmt == "csv" and is_tabular(data):
        return write_to_file(data, base.with_name(base.name + ".csv"), "csv")
    return write_to_file(data, base.with_name(base.name + ".json"), "json")


async def _run_jobs(api: NbaAPI, jobs: List[Job], ctx: Dict[str, Any], seasons: List[str],
                    reporter: ProgressReporter, output_dir: Path, fmt: str,
                    min_delay: float, max_delay: float) -> Tuple[int, int]:
    calls = [(job, None) for job in jobs if not job.per_season]
    calls += [(job, season) for season in seasons for job in jobs if job.per_season]

    succeeded = failed = 0
    current_season = None
    async with api:
        for index, (job, season) in enumerate(calls):
            if season is not None and season != current_season:
                current_season = season
                reporter.header(f"Season: {season}")

            params = {k: ctx[k] for k in job.needs}
            if season is not None:
                params["season"] = season
            reporter.fetch(job.flag, params or None)
            try:
                data = await job.call(api, ctx, season)
                filepath = _save(data, output_dir / "nba" / job.path(ctx, season, data), fmt)
            except Exception as e:
                failed += 1
                LOG.debug(f"{job.flag} failed", exc_info=True)
                reporter.error(job.flag if season is None else f"{job.flag} ({season})", str(e))
            else:
                succeeded += 1
                reporter.success(job.flag, filepath)

            if job.per_season and index < len(calls) - 1:
                await random_pause(min_delay, max_delay)

    return succeeded, failed


@click.group()
@click.version_option(version=__version__, prog_name="scrapernba")
def cli():
    """
    ScraperNBA - Command-line interface for NBA data scraping.

    Fetch player, team, league, game and live data from stats.nba.com and
    cdn.nba.com and save it as JSON or CSV.
    """
    pass


def _endpoint_options(func):
    for job in reversed(JOBS):
        func = click.option(f"--{job.flag.replace('_', '-')}", job.flag, is_flag=True,
                            help=f"Fetch {job.label}")(func)
    return func


@cli.command()
@click.option('--all', 'all_endpoints', is_flag=True, help='Fetch all player, team and league endpoints')
@click.option('--all-player-endpoints', is_flag=True, help='Fetch all player endpoints')
@click.option('--all-team-endpoints', is_flag=True, help='Fetch all team endpoints')
@click.option('--all-league-endpoints', is_flag=True, help='Fetch all league endpoints')
@click.option('--live', is_flag=True, help='Fetch live scoreboard and odds')
@_endpoint_options
@click.option('--season', help='Single season (YYYY-YY)')
@click.option('--start-season', help='First season of a range (YYYY-YY)')
@click.option('--end-season', help='Last season of a range (YYYY-YY)')
@click.option('--player-id', type=int, help='Player ID')
@click.option('--team-id', 'team', help='Team ID, abbreviation or name')
@click.option('--game-id', help='Game ID (10 digits)')
@click.option('--game-date', help='Game date (YYYY-MM-DD)')
@click.option('--season-type', type=click.Choice(constant_values(SeasonType)), default=DEFAULT_SEASON_TYPE,
              help='Season type')
@click.option('--stat-category', type=click.Choice(constant_values(StatCategory)), default=StatCategory.POINTS,
              help='Stat category for league leaders')
@click.option('--output-dir', '-o', default=DEFAULT_OUTPUT_DIR, type=click.Path(file_okay=False),
              help='Output directory')
@click.option('--format', '-f', 'fmt', type=click.Choice(['json', 'csv']), default='json', help='Output format')
@click.option('--client', type=click.Choice(CLIENT_TIERS), default='primary', help='HTTP client tier')
@click.option('--dry-run', is_flag=True, help='Show what would be fetched and exit')
@click.option('--json-progress', is_flag=True, help='Report progress as JSON lines')
@click.option('--min-delay', type=float, default=RATE_LIMIT_MIN_SECONDS, help='Minimum pause between season calls')
@click.option('--max-delay', type=float, default=RATE_LIMIT_MAX_SECONDS, help='Maximum pause between season calls')
@click.option('--log-level', type=click.Choice(LOG_LEVELS, case_sensitive=False), default='WARNING',
              help='Log level')
def fetch(all_endpoints, all_player_endpoints, all_team_endpoints, all_league_endpoints, live,
          season, start_season, end_season, player_id, team, game_id, game_date, season_type,
          stat_category, output_dir, fmt, client, dry_run, json_progress, min_delay, max_delay,
          log_level, **flags):
    """Fetch one or more endpoints and save each result to a file."""
    _configure_logging(log_level.upper())

    if bool(start_season) != bool(end_season):
        _fail("--start-season and --end-season must be used together")
    if min_delay < 0 or min_delay > max_delay:
        _fail("--min-delay must be between 0 and --max-delay")

    categories = {
        "all_player_endpoints": all_player_endpoints or all_endpoints,
        "all_team_endpoints": all_team_endpoints or all_endpoints,
        "all_league_endpoints": all_league_endpoints or all_endpoints,
        "live": live,
    }
    for category, enabled in categories.items():
        if enabled:
            flags.update({flag: True for flag in CATEGORIES[category]})

    jobs = [job for job in JOBS if flags.get(job.flag)]
    if not jobs:
        _fail("At least one endpoint must be specified (see: scrapernba examples)")

    ctx = {
        "player_id": player_id,
        "team": team,
        "game_id": game_id,
        "game_date": game_date,
        "season": season,
        "season_type": season_type,
        "stat_category": stat_category,
    }
    for job in jobs:
        missing = [REQUIREMENT_FLAGS[need] for need in job.needs if not ctx[need]]
        if missing:
            _fail(f"{', '.join(missing)} is required for --{job.flag.replace('_', '-')}")

    try:
        seasons = _season_range(season, start_season, end_season)
    except ValueError as e:
        _fail(str(e))

    if dry_run:
        click.echo("\n=== DRY RUN ===\n")
        click.echo("Would fetch the following:")
        click.echo(f"  Seasons: {', '.join(seasons)}")
        for key in ("player_id", "team", "game_id", "game_date"):
            if ctx[key]:
                click.echo(f"  {key}: {ctx[key]}")
        click.echo("\nEndpoints:")
        for job in jobs:
            click.echo(f"  - {job.label}")
        return

    reporter = ProgressReporter(json_lines=json_progress)
    api = _make_api(client)
    succeeded, failed = asyncio.run(
        _run_jobs(api, jobs, ctx, seasons, reporter, Path(output_dir), fmt, min_delay, max_delay)
    )
    reporter.info(f"\nDone: {succeeded} succeeded, {failed} failed")
    if failed:
        sys.exit(1)


@cli.command()
@click.option('--output', '-o', help='Output file path (default: nba_teams.csv)')
@click.option('--format', '-f', 'fmt', type=click.Choice(['csv', 'json']), default='csv', help='Output format')
@click.option('--polars', is_flag=True, help='Use Polars instead of Pandas')
def teams(output, fmt, polars):
    """Write the static NBA team table."""
    from scrapernba.scrapers.teams import scrapeTeams

    teams_df = scrapeTeams(output_format="polars" if polars else "pandas")
    output_path = Path(output) if output else Path(f"nba_teams.{fmt}")
    try:
        write_to_file(teams_df, output_path, fmt)
    except OSError as e:
        _fail(str(e))
    click.echo(f"✅ Wrote {len(teams_df)} teams")
    click.echo(f"📁 Saved to: {output_path}")


@cli.command()
def examples():
    """Show usage examples."""
    click.echo(EXAMPLES)


if __name__ == '__main__':
    cli()
