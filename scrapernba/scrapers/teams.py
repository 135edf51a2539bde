"""NBA team data scrapers."""

from typing import Dict, List, Optional, Union

import pandas as pd
import polars as pl

from scrapernba.api import NbaAPI, run_sync
from scrapernba.config import DEFAULT_SEASON_TYPE
from scrapernba.core.utils import json_normalize, stamp_records
from scrapernba.reference import ReferenceData, teams_table

TeamArg = Union[int, str]


def getTeamsData(reference: Optional[ReferenceData] = None) -> List[Dict]:
    """
    The 30 NBA teams from the bundled reference table. No network access.

    Parameters:
    - reference (ReferenceData, optional): Table to read; the bundled one by default

    Returns:
    - List[Dict]: Team records with metadata
    """
    return stamp_records(teams_table(reference or ReferenceData.default()), "reference data")


def scrapeTeams(output_format: str = "pandas", reference: Optional[ReferenceData] = None) -> pd.DataFrame | pl.DataFrame:
    return json_normalize(getTeamsData(reference), output_format)


def getRosterData(team: TeamArg, season: Optional[str] = None, api: Optional[NbaAPI] = None) -> List[Dict]:
    """
    Scrapes a team roster.

    Parameters:
    - team (int or str): Team ID, abbreviation ("BOS") or name ("Celtics")
    - season (str, optional): 'YYYY-YY'. Defaults to the current season.

    Returns:
    - List[Dict]: One record per player
    """
    rows = run_sync(lambda client: client.get_common_team_roster(team, season), api)
    return stamp_records(rows, "NBA Stats commonteamroster")


def scrapeRoster(team: TeamArg, season: Optional[str] = None, output_format: str = "pandas",
                 api: Optional[NbaAPI] = None) -> pd.DataFrame | pl.DataFrame:
    return json_normalize(getRosterData(team, season, api), output_format)


def getTeamGameLogData(team: TeamArg, season: Optional[str] = None, season_type: str = DEFAULT_SEASON_TYPE,
                       api: Optional[NbaAPI] = None) -> List[Dict]:
    rows = run_sync(lambda client: client.get_team_game_log(team, season, season_type), api)
    return stamp_records(rows, "NBA Stats teamgamelog")


def scrapeTeamGameLog(team: TeamArg, season: Optional[str] = None, season_type: str = DEFAULT_SEASON_TYPE,
                      output_format: str = "pandas", api: Optional[NbaAPI] = None) -> pd.DataFrame | pl.DataFrame:
    return json_normalize(getTeamGameLogData(team, season, season_type, api), output_format)


def getTeamInfoData(team: TeamArg, season: Optional[str] = None, api: Optional[NbaAPI] = None) -> Dict:
    """Conference, division, record and ranks for one team."""
    row = run_sync(lambda client: client.get_team_info_common(team, season), api)
    return stamp_records([row], "NBA Stats teaminfocommon")[0]


def getTeamHistoryData(team: TeamArg, api: Optional[NbaAPI] = None) -> List[Dict]:
    """Year-by-year totals since the franchise's first season."""
    rows = run_sync(lambda client: client.get_team_year_by_year_stats(team), api)
    return stamp_records(rows, "NBA Stats teamyearbyyearstats")


def scrapeTeamHistory(team: TeamArg, output_format: str = "pandas",
                      api: Optional[NbaAPI] = None) -> pd.DataFrame | pl.DataFrame:
    return json_normalize(getTeamHistoryData(team, api), output_format)
