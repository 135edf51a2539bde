"""NBA game data scrapers: scoreboards, box scores, play-by-play, shot charts and live feeds."""

import logging
from typing import Dict, List, Optional

import pandas as pd
import polars as pl

from scrapernba.api import NbaAPI, run_sync
from scrapernba.core.utils import json_normalize, stamp_records

LOG = logging.getLogger(__name__)

BOX_SCORE_KINDS = ("traditional", "advanced", "live")


def getScoreboardData(game_date: Optional[str] = None, api: Optional[NbaAPI] = None) -> List[Dict]:
    """
    Scrapes the games scheduled or played on a date.

    Parameters:
    - game_date (str, optional): 'YYYY-MM-DD'. Defaults to today.

    Returns:
    - List[Dict]: One flat record per game (homeTeamId, awayTeamScore, ...)
    """
    scoreboard = run_sync(lambda client: client.get_scoreboard(game_date), api)
    games = [{**game, "gameDate": scoreboard["gameDate"]} for game in scoreboard["games"]]
    return stamp_records(games, "NBA Stats scoreboardv3")


def scrapeScoreboard(game_date: Optional[str] = None, output_format: str = "pandas",
                     api: Optional[NbaAPI] = None) -> pd.DataFrame | pl.DataFrame:
    return json_normalize(getScoreboardData(game_date, api), output_format)


def getBoxScoreData(game_id: str, kind: str = "traditional", api: Optional[NbaAPI] = None) -> Dict:
    """
    Scrapes a box score.

    Parameters:
    - game_id (str): 10-digit game ID (e.g., "0022400001")
    - kind (str): One of ["traditional", "advanced", "live"]

    Returns:
    - Dict: Game context plus playerStats and teamStats lists
    """
    if kind == "traditional":
        return run_sync(lambda client: client.get_box_score_traditional(game_id), api)
    elif kind == "advanced":
        return run_sync(lambda client: client.get_box_score_advanced(game_id), api)
    elif kind == "live":
        return run_sync(lambda client: client.get_live_box_score(game_id), api)
    else:
        raise ValueError(f"Invalid kind: {kind}. Use one of {', '.join(BOX_SCORE_KINDS)}.")


def scrapeBoxScore(game_id: str, kind: str = "traditional", players: bool = True, output_format: str = "pandas",
                   api: Optional[NbaAPI] = None) -> pd.DataFrame | pl.DataFrame:
    """
    Box score as a table of player rows (players=True) or team rows.
    """
    box_score = getBoxScoreData(game_id, kind, api)
    rows = box_score["playerStats"] if players else box_score["teamStats"]
    LOG.info(f"Box score {game_id} ({kind}): {len(rows)} {'player' if players else 'team'} rows")
    return json_normalize(stamp_records(rows, f"NBA {kind} box score"), output_format)


def getPlayByPlayData(game_id: str, live: bool = False, api: Optional[NbaAPI] = None) -> List[Dict]:
    """
    Scrapes play-by-play events for a game.

    Parameters:
    - game_id (str): 10-digit game ID
    - live (bool): Read the cdn.nba.com live feed instead of stats.nba.com

    Returns:
    - List[Dict]: Events in game order
    """
    if live:
        feed = run_sync(lambda client: client.get_live_play_by_play(game_id), api)
        return stamp_records(feed["actions"], "NBA live play-by-play")
    rows = run_sync(lambda client: client.get_play_by_play(game_id), api)
    return stamp_records(rows, "NBA Stats playbyplayv2")


def scrapePlays(game_id: str, live: bool = False, output_format: str = "pandas",
                api: Optional[NbaAPI] = None) -> pd.DataFrame | pl.DataFrame:
    return json_normalize(getPlayByPlayData(game_id, live, api), output_format)


def getShotChartData(player_id: int, season: Optional[str] = None, api: Optional[NbaAPI] = None,
                     **filters) -> List[Dict]:
    """Every shot a player attempted; filters are those of NbaAPI.get_shot_chart_detail."""
    rows = run_sync(lambda client: client.get_shot_chart_detail(player_id, season=season, **filters), api)
    return stamp_records(rows, "NBA Stats shotchartdetail")


def scrapeShotChart(player_id: int, season: Optional[str] = None, output_format: str = "pandas",
                    api: Optional[NbaAPI] = None, **filters) -> pd.DataFrame | pl.DataFrame:
    return json_normalize(getShotChartData(player_id, season, api, **filters), output_format)


def getLiveScoreboardData(api: Optional[NbaAPI] = None) -> List[Dict]:
    scoreboard = run_sync(lambda client: client.get_live_scoreboard(), api)
    return stamp_records(scoreboard["games"], "NBA live scoreboard")


def scrapeLiveScoreboard(output_format: str = "pandas", api: Optional[NbaAPI] = None) -> pd.DataFrame | pl.DataFrame:
    return json_normalize(getLiveScoreboardData(api), output_format)


def getLiveOddsData(api: Optional[NbaAPI] = None) -> List[Dict]:
    odds = run_sync(lambda client: client.get_live_odds(), api)
    return stamp_records(odds["games"], "NBA live odds")
