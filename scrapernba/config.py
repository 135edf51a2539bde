"""Config.py : Constants, headers, endpoints and season helpers for NBA data scraping"""
import re
from datetime import date, datetime
from typing import Dict, List, Optional, Union
from urllib.parse import urlencode

from scrapernba.core.errors import ValidationInputError

# API BASE URLS
STATS_BASE_URL = "https://stats.nba.com/stats"
LIVE_BASE_URL = "https://cdn.nba.com/static/json/liveData"


# HEADERS
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36"
)

STATS_HEADERS = {
    "Host": "stats.nba.com",
    "User-Agent": USER_AGENT,
    "Accept": "application/json, text/plain, */*",
    "Accept-Language": "en-US,en;q=0.9",
    "Accept-Encoding": "gzip, deflate, br",
    "Connection": "keep-alive",
    "Referer": "https://stats.nba.com/",
    "Origin": "https://stats.nba.com",
    "Sec-Ch-Ua": '"Chromium";v="131", "Google Chrome";v="131", "Not;A=Brand";v="24"',
    "Sec-Ch-Ua-Mobile": "?0",
    "Sec-Ch-Ua-Platform": '"Windows"',
    "Sec-Fetch-Dest": "empty",
    "Sec-Fetch-Mode": "cors",
    "Sec-Fetch-Site": "same-origin",
    "Pragma": "no-cache",
    "Cache-Control": "no-cache",
}

LIVE_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,image/apng,*/*;q=0.8",
    "Accept-Encoding": "gzip, deflate, br",
    "Accept-Language": "en-US,en;q=0.9",
    "Cache-Control": "max-age=0",
    "Connection": "keep-alive",
    "Host": "cdn.nba.com",
    "User-Agent": USER_AGENT,
}


# STATS API ENDPOINTS
class Endpoint:
    # Player
    PLAYER_CAREER_STATS = "playercareerstats"
    PLAYER_GAME_LOG = "playergamelog"
    COMMON_PLAYER_INFO = "commonplayerinfo"
    COMMON_ALL_PLAYERS = "commonallplayers"
    PLAYER_ESTIMATED_METRICS = "playerestimatedmetrics"

    # Team
    COMMON_TEAM_ROSTER = "commonteamroster"
    TEAM_GAME_LOG = "teamgamelog"
    TEAM_INFO_COMMON = "teaminfocommon"
    TEAM_YEAR_BY_YEAR_STATS = "teamyearbyyearstats"

    # League
    LEAGUE_LEADERS = "leagueleaders"
    LEAGUE_DASH_PLAYER_STATS = "leaguedashplayerstats"
    LEAGUE_STANDINGS = "leaguestandingsv3"
    LEAGUE_GAME_FINDER = "leaguegamefinder"
    LEAGUE_GAME_LOG = "leaguegamelog"

    # Game
    GAME_SUMMARY = "boxscoresummaryv2"
    SCOREBOARD = "scoreboardv3"
    BOX_SCORE_TRADITIONAL = "boxscoretraditionalv3"
    BOX_SCORE_ADVANCED = "boxscoreadvancedv3"
    # playbyplayv3 answers with HTTP 500; the legacy endpoint carries the same data
    PLAY_BY_PLAY = "playbyplayv2"

    # Other
    SHOT_CHART_DETAIL = "shotchartdetail"
    DRAFT_HISTORY = "drafthistory"

    # Live (cdn.nba.com)
    LIVE_SCOREBOARD = "scoreboard/todaysScoreboard_00.json"
    LIVE_BOX_SCORE = "boxscore/boxscore_{game_id}.json"
    LIVE_PLAY_BY_PLAY = "playbyplay/playbyplay_{game_id}.json"
    LIVE_ODDS = "odds/odds_todaysGames.json"


# PARAMETER CONSTANTS
class SeasonType:
    REGULAR = "Regular Season"
    PLAYOFFS = "Playoffs"
    PRESEASON = "Pre Season"
    PLAYIN = "PlayIn"
    ALL_STAR = "All Star"


class PerMode:
    TOTALS = "Totals"
    PER_GAME = "PerGame"
    PER_36 = "Per36"
    PER_48 = "Per48"
    PER_MINUTE = "PerMinute"
    PER_POSSESSION = "PerPossession"
    PER_PLAY = "PerPlay"
    PER_100_POSSESSIONS = "Per100Possessions"
    PER_100_PLAYS = "Per100Plays"


class MeasureType:
    BASE = "Base"
    ADVANCED = "Advanced"
    MISC = "Misc"
    SCORING = "Scoring"
    USAGE = "Usage"
    OPPONENT = "Opponent"
    FOUR_FACTORS = "Four Factors"
    DEFENSE = "Defense"


class LeagueID:
    NBA = "00"
    ABA = "01"
    WNBA = "10"
    SUMMER_LEAGUE = "15"
    G_LEAGUE = "20"


class Conference:
    EAST = "East"
    WEST = "West"


class Division:
    ATLANTIC = "Atlantic"
    CENTRAL = "Central"
    SOUTHEAST = "Southeast"
    NORTHWEST = "Northwest"
    PACIFIC = "Pacific"
    SOUTHWEST = "Southwest"


class Outcome:
    WIN = "W"
    LOSS = "L"


class Location:
    HOME = "Home"
    ROAD = "Road"


class PlayerPosition:
    GUARD = "G"
    FORWARD = "F"
    CENTER = "C"
    GUARD_FORWARD = "G-F"
    FORWARD_GUARD = "F-G"
    FORWARD_CENTER = "F-C"
    CENTER_FORWARD = "C-F"


class StatCategory:
    POINTS = "PTS"
    REBOUNDS = "REB"
    ASSISTS = "AST"
    STEALS = "STL"
    BLOCKS = "BLK"
    FIELD_GOAL_PCT = "FG_PCT"
    THREE_POINT_PCT = "FG3_PCT"
    FREE_THROW_PCT = "FT_PCT"
    EFFICIENCY = "EFF"
    ASSISTS_TURNOVERS = "AST_TOV"
    STEALS_TURNOVERS = "STL_TOV"


class GameSegment:
    FIRST_HALF = "First Half"
    SECOND_HALF = "Second Half"
    OVERTIME = "Overtime"


class ShotClockRange:
    RANGE_24_22 = "24-22"
    RANGE_22_18 = "22-18 Very Early"
    RANGE_18_15 = "18-15 Early"
    RANGE_15_7 = "15-7 Average"
    RANGE_7_4 = "7-4 Late"
    RANGE_4_0 = "4-0 Very Late"
    SHOT_CLOCK_OFF = "ShotClock Off"


def constant_values(holder: type) -> List[str]:
    """Return the public string constants declared on a parameter class."""
    return [v for k, v in vars(holder).items() if not k.startswith("_") and isinstance(v, str)]


# DEFAULTS
DEFAULT_TIMEOUT = 30  # seconds
DEFAULT_LEAGUE_ID = LeagueID.NBA
DEFAULT_PER_MODE = PerMode.TOTALS
DEFAULT_SEASON_TYPE = SeasonType.REGULAR
DEFAULT_OUTPUT_DIR = "datasets"
RATE_LIMIT_MIN_SECONDS = 1.0
RATE_LIMIT_MAX_SECONDS = 3.0
MAX_RESPONSE_SIZE = 10 * 1024 * 1024  # bytes
NBA_FOUNDING_YEAR = 1946

SEASON_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}")
DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
GAME_ID_PATTERN = re.compile(r"[0-9]{10}")


# SEASON HELPERS
def get_current_season_year(today: Optional[date] = None) -> int:
    """Start year of the season in progress. Seasons tip off in October."""
    today = today or datetime.now().date()
    return today.year if today.month >= 10 else today.year - 1


def format_season(year: int) -> str:
    """2024 -> '2024-25'"""
    return f"{year}-{str(year + 1)[2:]}"


def get_current_season(today: Optional[date] = None) -> str:
    """Current season in 'YYYY-YY' format."""
    return format_season(get_current_season_year(today))


def parse_season_year(season: str) -> int:
    """Start year of a 'YYYY-YY' season string."""
    if not isinstance(season, str) or not SEASON_PATTERN.fullmatch(season):
        raise ValidationInputError(
            f"Invalid season format: {season}. Expected format: YYYY-YY (e.g., 2024-25)"
        )
    return int(season[:4])


def generate_season_range(start_year: int, end_year: int) -> List[str]:
    """All seasons from start_year to end_year inclusive."""
    if start_year > end_year:
        raise ValidationInputError(
            f"Start year ({start_year}) cannot be greater than end year ({end_year})"
        )
    return [format_season(year) for year in range(start_year, end_year + 1)]


def get_today_date() -> str:
    return datetime.now().strftime("%Y-%m-%d")


# URL BUILDING
def build_stats_url(endpoint: str, params: Optional[Dict[str, Union[str, int, bool, None]]] = None) -> str:
    """
    Build a stats.nba.com URL.

    Empty values (None or "") are dropped and the remaining parameters are
    sorted by name; the stats API is picky about parameter order.
    """
    query = sorted(
        (key, str(value))
        for key, value in (params or {}).items()
        if value is not None and value != ""
    )
    return f"{STATS_BASE_URL}/{endpoint}?{urlencode(query)}"


def build_live_url(endpoint: str, game_id: Optional[str] = None) -> str:
    path = endpoint.replace("{game_id}", game_id) if game_id else endpoint
    return f"{LIVE_BASE_URL}/{path}"
