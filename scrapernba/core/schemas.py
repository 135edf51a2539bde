"""
Pydantic shapes for normalized NBA rows, and the validator that checks rows against them.

Field names are the camelCased upstream headers. Every shape allows extra
fields, and validation never rewrites a row: callers always get back the
dicts they passed in.

Two failure policies:
- strict:  the first bad row raises SchemaValidationError
- lenient: a single warning is logged and the whole batch is returned as-is
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence, Type, Union

from pydantic import BaseModel, ConfigDict, ValidationError

from scrapernba.core.errors import SchemaValidationError

LOG = logging.getLogger(__name__)

MAX_REPORTED_ISSUES = 3

Number = Optional[float]
Minutes = Optional[Union[float, str]]


class ValidationMode:
    STRICT = "strict"
    LENIENT = "lenient"


VALIDATION_MODES = (ValidationMode.STRICT, ValidationMode.LENIENT)


class Shape(BaseModel):
    model_config = ConfigDict(extra="allow", strict=True)


# =============================================================================
# Shared stat blocks
# =============================================================================


class ShootingStats(Shape):
    fgm: Number = None
    fga: Number = None
    fgPct: Number = None
    fg3m: Number = None
    fg3a: Number = None
    fg3Pct: Number = None
    ftm: Number = None
    fta: Number = None
    ftPct: Number = None
    oreb: Number = None
    dreb: Number = None
    reb: Number = None
    ast: Number = None
    stl: Number = None
    blk: Number = None
    pf: Number = None
    pts: Number = None


class CountingStats(ShootingStats):
    min: Minutes = None
    tov: Number = None


class GameStats(CountingStats):
    plusMinus: Number = None


# =============================================================================
# Player
# =============================================================================


class PlayerCareerStats(CountingStats):
    playerId: int
    seasonId: str
    leagueId: Optional[str] = None
    teamId: int
    teamAbbreviation: Optional[str] = None
    playerAge: Number = None
    gp: int
    gs: Optional[int] = None


class PlayerGameLog(GameStats):
    seasonId: str
    playerId: int
    gameId: str
    gameDate: str
    matchup: str
    wl: Optional[str] = None


class CommonPlayerInfo(Shape):
    personId: int
    firstName: str
    lastName: str
    displayFirstLast: str
    birthdate: Optional[str] = None
    school: Optional[str] = None
    country: Optional[str] = None
    height: Optional[str] = None
    weight: Optional[str] = None
    seasonExp: Optional[int] = None
    jersey: Optional[str] = None
    position: Optional[str] = None
    teamId: int
    teamName: Optional[str] = None
    teamAbbreviation: Optional[str] = None
    teamCity: Optional[str] = None
    fromYear: Optional[int] = None
    toYear: Optional[int] = None


class PlayerSummary(Shape):
    """Row of commonallplayers."""

    personId: int
    displayFirstLast: str
    displayLastCommaFirst: Optional[str] = None
    rosterstatus: Optional[int] = None
    fromYear: Optional[str] = None
    toYear: Optional[str] = None
    teamId: Optional[int] = None
    teamAbbreviation: Optional[str] = None


class PlayerEstimatedMetrics(Shape):
    playerId: int
    playerName: str
    gp: int
    w: Optional[int] = None
    l: Optional[int] = None
    min: Number = None
    eOffRating: Number = None
    eDefRating: Number = None
    eNetRating: Number = None
    eUsgPct: Number = None
    ePace: Number = None


# =============================================================================
# Team
# =============================================================================


class TeamRoster(Shape):
    # commonteamroster mixes header styles: TeamID -> teamid, LeagueID -> leagueid
    teamid: int
    season: str
    player: str
    playerId: int
    num: Optional[str] = None
    position: Optional[str] = None
    age: Number = None


class TeamGameLog(GameStats):
    teamId: int
    gameId: str
    gameDate: str
    matchup: str
    wl: Optional[str] = None
    w: Optional[int] = None
    l: Optional[int] = None


class TeamInfoCommon(Shape):
    teamId: int
    seasonYear: str
    teamCity: str
    teamName: str
    teamAbbreviation: str
    teamConference: Optional[str] = None
    teamDivision: Optional[str] = None
    w: Optional[int] = None
    l: Optional[int] = None
    pct: Number = None
    confRank: Optional[int] = None
    divRank: Optional[int] = None


class TeamYearByYearStats(CountingStats):
    teamId: int
    teamCity: str
    teamName: str
    year: str
    gp: int
    wins: int
    losses: int
    winPct: Number = None


# =============================================================================
# League
# =============================================================================


class LeagueLeader(CountingStats):
    playerId: int
    rank: int
    player: str
    teamId: Optional[int] = None
    team: Optional[str] = None
    gp: int
    eff: Number = None


class LeagueDashPlayerStats(GameStats):
    playerId: int
    playerName: str
    teamId: Optional[int] = None
    teamAbbreviation: Optional[str] = None
    age: Number = None
    gp: int


class LeagueStanding(Shape):
    # leaguestandingsv3 uses PascalCase headers, flattened to lowercase
    teamid: int
    teamcity: str
    teamname: str
    conference: str
    wins: int
    losses: int
    winpct: Number = None
    playoffrank: Optional[int] = None


class GameFinderResult(GameStats):
    seasonId: str
    teamId: int
    teamAbbreviation: str
    teamName: str
    gameId: str
    gameDate: str
    matchup: str
    wl: Optional[str] = None


class LeagueGameLogEntry(GameFinderResult):
    pass


# =============================================================================
# Game
# =============================================================================


class GameSummary(Shape):
    gameDateEst: str
    gameId: str
    gameStatusId: int
    gameStatusText: Optional[str] = None
    gamecode: str
    homeTeamId: int
    visitorTeamId: int
    season: str


class ScoreboardGame(Shape):
    gameId: str
    gameCode: Optional[str] = None
    gameStatus: int
    gameStatusText: Optional[str] = None
    homeTeamId: int
    awayTeamId: int
    homeTeamTricode: Optional[str] = None
    awayTeamTricode: Optional[str] = None
    homeTeamScore: Optional[int] = None
    awayTeamScore: Optional[int] = None


class BoxScorePlayerStats(GameStats):
    gameId: str
    teamId: int
    playerId: int
    playerName: str
    to: Number = None


class BoxScoreTeamStats(GameStats):
    gameId: str
    teamId: int
    teamAbbreviation: Optional[str] = None
    to: Number = None


class AdvancedStats(Shape):
    min: Minutes = None
    offRating: Number = None
    defRating: Number = None
    netRating: Number = None
    astPct: Number = None
    rebPct: Number = None
    efgPct: Number = None
    tsPct: Number = None
    usgPct: Number = None
    pace: Number = None
    poss: Number = None
    pie: Number = None


class BoxScoreAdvancedPlayerStats(AdvancedStats):
    gameId: str
    teamId: int
    playerId: int
    playerName: str


class BoxScoreAdvancedTeamStats(AdvancedStats):
    gameId: str
    teamId: int
    teamAbbreviation: Optional[str] = None


class PlayByPlayEvent(Shape):
    gameId: str
    eventnum: int
    eventmsgtype: int
    eventmsgactiontype: Optional[int] = None
    period: int
    pctimestring: str
    homedescription: Optional[str] = None
    neutraldescription: Optional[str] = None
    visitordescription: Optional[str] = None
    score: Optional[str] = None
    scoremargin: Optional[str] = None


class ShotChartShot(Shape):
    gameId: str
    gameEventId: int
    playerId: int
    playerName: str
    teamId: int
    period: int
    minutesRemaining: int
    secondsRemaining: int
    eventType: str
    actionType: str
    shotType: str
    shotDistance: Number = None
    locX: Number = None
    locY: Number = None
    shotMadeFlag: int
    gameDate: str


class DraftHistoryEntry(Shape):
    personId: int
    playerName: str
    season: str
    roundNumber: int
    roundPick: int
    overallPick: int
    teamId: int
    teamAbbreviation: Optional[str] = None
    organization: Optional[str] = None


# =============================================================================
# Live
# =============================================================================


class LiveBoxScorePlayer(BoxScorePlayerStats):
    status: Optional[str] = None
    starter: Optional[str] = None


class LivePlayByPlayAction(Shape):
    actionNumber: int
    period: int
    clock: str
    actionType: str


class LiveOddsGame(Shape):
    gameId: str


# =============================================================================
# Validation
# =============================================================================


def _issues(error: ValidationError, index: int) -> List[str]:
    return [
        f"row {index}: {'.'.join(str(part) for part in issue['loc'])}: {issue['msg']}"
        for issue in error.errors()
    ]


def validate_rows(shape: Type[Shape], rows: Sequence[Dict[str, Any]], mode: str) -> List[Dict[str, Any]]:
    """
    Check every row against a shape.

    Args:
        shape: Shape model the rows should satisfy
        rows: Normalized rows
        mode: ValidationMode.STRICT or ValidationMode.LENIENT

    Returns:
        The input rows, unchanged (extra fields included)

    Raises:
        SchemaValidationError: strict mode, on the first failing row
    """
    if mode not in VALIDATION_MODES:
        raise ValueError(f"Invalid validation mode: {mode}. Use one of {', '.join(VALIDATION_MODES)}.")

    rows = list(rows)
    issues: List[str] = []
    failed = 0
    for index, row in enumerate(rows):
        try:
            shape.model_validate(row)
        except ValidationError as e:
            if mode == ValidationMode.STRICT:
                raise SchemaValidationError(shape.__name__, index, row, "; ".join(_issues(e, index))) from e
            failed += 1
            issues.extend(_issues(e, index))

    if failed:
        LOG.warning(
            f"Schema validation failed for {shape.__name__} ({failed}/{len(rows)} rows), "
            f"returning unvalidated data: {'; '.join(issues[:MAX_REPORTED_ISSUES])}"
        )
    return rows


def validate_strict(shape: Type[Shape], rows: Sequence[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return validate_rows(shape, rows, ValidationMode.STRICT)


def validate_lenient(shape: Type[Shape], rows: Sequence[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return validate_rows(shape, rows, ValidationMode.LENIENT)
