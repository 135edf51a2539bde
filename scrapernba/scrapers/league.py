"""NBA league-wide data scrapers."""

from typing import Dict, List, Optional

import pandas as pd
import polars as pl

from scrapernba.api import NbaAPI, run_sync
from scrapernba.config import DEFAULT_SEASON_TYPE, StatCategory
from scrapernba.core.utils import json_normalize, stamp_records


def getLeadersData(season: Optional[str] = None, stat_category: str = StatCategory.POINTS,
                   api: Optional[NbaAPI] = None) -> List[Dict]:
    """
    Scrapes per-game league leaders for a stat category.

    Parameters:
    - season (str, optional): 'YYYY-YY'. Defaults to the current season.
    - stat_category (str): "PTS", "REB", "AST", ...

    Returns:
    - List[Dict]: Leader records in rank order
    """
    rows = run_sync(lambda client: client.get_league_leaders(season, stat_category), api)
    return stamp_records(rows, "NBA Stats leagueleaders")


def scrapeLeaders(season: Optional[str] = None, stat_category: str = StatCategory.POINTS,
                  output_format: str = "pandas", api: Optional[NbaAPI] = None) -> pd.DataFrame | pl.DataFrame:
    return json_normalize(getLeadersData(season, stat_category, api), output_format)


def getStandingsData(season: Optional[str] = None, season_type: str = DEFAULT_SEASON_TYPE,
                     api: Optional[NbaAPI] = None) -> List[Dict]:
    rows = run_sync(lambda client: client.get_league_standings(season, season_type), api)
    return stamp_records(rows, "NBA Stats leaguestandingsv3")


def scrapeStandings(season: Optional[str] = None, season_type: str = DEFAULT_SEASON_TYPE,
                    output_format: str = "pandas", api: Optional[NbaAPI] = None) -> pd.DataFrame | pl.DataFrame:
    return json_normalize(getStandingsData(season, season_type, api), output_format)


def getLeagueGameLogData(season: Optional[str] = None, season_type: str = DEFAULT_SEASON_TYPE,
                         api: Optional[NbaAPI] = None) -> List[Dict]:
    rows = run_sync(lambda client: client.get_league_game_log(season, season_type), api)
    return stamp_records(rows, "NBA Stats leaguegamelog")


def scrapeLeagueGameLog(season: Optional[str] = None, season_type: str = DEFAULT_SEASON_TYPE,
                        output_format: str = "pandas", api: Optional[NbaAPI] = None) -> pd.DataFrame | pl.DataFrame:
    return json_normalize(getLeagueGameLogData(season, season_type, api), output_format)


def getPlayerStatsData(api: Optional[NbaAPI] = None, **filters) -> List[Dict]:
    """
    Scrapes the league player dashboard.

    Parameters:
    - **filters: Keyword filters of NbaAPI.get_league_dash_player_stats
      (season, per_mode, measure_type, team, ...)
    """
    rows = run_sync(lambda client: client.get_league_dash_player_stats(**filters), api)
    return stamp_records(rows, "NBA Stats leaguedashplayerstats")


def scrapePlayerStats(output_format: str = "pandas", api: Optional[NbaAPI] = None,
                      **filters) -> pd.DataFrame | pl.DataFrame:
    return json_normalize(getPlayerStatsData(api, **filters), output_format)


def getGameFinderData(api: Optional[NbaAPI] = None, **filters) -> List[Dict]:
    """Game search; filters are those of NbaAPI.get_league_game_finder."""
    rows = run_sync(lambda client: client.get_league_game_finder(**filters), api)
    return stamp_records(rows, "NBA Stats leaguegamefinder")


def scrapeGameFinder(output_format: str = "pandas", api: Optional[NbaAPI] = None,
                     **filters) -> pd.DataFrame | pl.DataFrame:
    return json_normalize(getGameFinderData(api, **filters), output_format)
