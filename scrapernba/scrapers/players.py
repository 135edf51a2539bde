"""NBA player data scrapers."""

from typing import Dict, List, Optional

import pandas as pd
import polars as pl

from scrapernba.api import NbaAPI, run_sync
from scrapernba.config import DEFAULT_PER_MODE, DEFAULT_SEASON_TYPE
from scrapernba.core.utils import json_normalize, stamp_records


def getPlayerCareerData(player_id: int, per_mode: str = DEFAULT_PER_MODE,
                        api: Optional[NbaAPI] = None) -> List[Dict]:
    """
    Scrapes season-by-season regular season totals for a player.

    Parameters:
    - player_id (int): NBA player ID (e.g., 2544)
    - per_mode (str): "Totals", "PerGame", ...
    - api (NbaAPI, optional): Client to reuse; a fresh one is opened otherwise

    Returns:
    - List[Dict]: Career rows with metadata
    """
    rows = run_sync(lambda client: client.get_player_career_stats(player_id, per_mode=per_mode), api)
    return stamp_records(rows, "NBA Stats playercareerstats")


def scrapePlayerCareer(player_id: int, per_mode: str = DEFAULT_PER_MODE, output_format: str = "pandas",
                       api: Optional[NbaAPI] = None) -> pd.DataFrame | pl.DataFrame:
    return json_normalize(getPlayerCareerData(player_id, per_mode, api), output_format)


def getPlayerGameLogData(player_id: int, season: Optional[str] = None,
                         season_type: str = DEFAULT_SEASON_TYPE, api: Optional[NbaAPI] = None) -> List[Dict]:
    """
    Scrapes a player's game log for one season.

    Parameters:
    - player_id (int): NBA player ID
    - season (str, optional): 'YYYY-YY'. Defaults to the current season.
    - season_type (str): "Regular Season", "Playoffs", ...

    Returns:
    - List[Dict]: One record per game, most recent first
    """
    rows = run_sync(lambda client: client.get_player_game_log(player_id, season, season_type), api)
    return stamp_records(rows, "NBA Stats playergamelog")


def scrapePlayerGameLog(player_id: int, season: Optional[str] = None, season_type: str = DEFAULT_SEASON_TYPE,
                        output_format: str = "pandas", api: Optional[NbaAPI] = None) -> pd.DataFrame | pl.DataFrame:
    return json_normalize(getPlayerGameLogData(player_id, season, season_type, api), output_format)


def getPlayerInfoData(player_id: int, api: Optional[NbaAPI] = None) -> Dict:
    """Bio record for one player. Raises NotFoundError for unknown ids."""
    row = run_sync(lambda client: client.get_common_player_info(player_id), api)
    return stamp_records([row], "NBA Stats commonplayerinfo")[0]


def getAllPlayersData(season: Optional[str] = None, only_current: bool = False,
                      api: Optional[NbaAPI] = None) -> List[Dict]:
    rows = run_sync(lambda client: client.get_common_all_players(season, only_current), api)
    return stamp_records(rows, "NBA Stats commonallplayers")


def scrapeAllPlayers(season: Optional[str] = None, only_current: bool = False, output_format: str = "pandas",
                     api: Optional[NbaAPI] = None) -> pd.DataFrame | pl.DataFrame:
    return json_normalize(getAllPlayersData(season, only_current, api), output_format)


def getPlayerEstimatedMetricsData(season: Optional[str] = None, api: Optional[NbaAPI] = None) -> List[Dict]:
    rows = run_sync(lambda client: client.get_player_estimated_metrics(season), api)
    return stamp_records(rows, "NBA Stats playerestimatedmetrics")


def scrapePlayerEstimatedMetrics(season: Optional[str] = None, output_format: str = "pandas",
                                 api: Optional[NbaAPI] = None) -> pd.DataFrame | pl.DataFrame:
    return json_normalize(getPlayerEstimatedMetricsData(season, api), output_format)
