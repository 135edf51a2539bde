"""
api.py : Async client for the NBA stats and live data APIs.

Usage:

    async with NbaAPI() as api:
        leaders = await api.get_league_leaders(season="2024-25")
        box = await api.get_box_score_traditional("0022400001")

Every method validates its arguments before touching the network, fetches
one or more payloads sequentially, normalizes them through the routing
table and validates the rows (lenient by default). Nothing is cached and
nothing is retried.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Type, Union

from scrapernba.config import (
    DEFAULT_LEAGUE_ID,
    DEFAULT_PER_MODE,
    DEFAULT_SEASON_TYPE,
    DEFAULT_TIMEOUT,
    LIVE_HEADERS,
    STATS_HEADERS,
    Endpoint,
    MeasureType,
    PerMode,
    SeasonType,
    StatCategory,
    build_live_url,
    build_stats_url,
    constant_values,
    get_current_season,
    get_today_date,
)
from scrapernba.core.envelopes import Tables, dispatch, route_for
from scrapernba.core.errors import NotFoundError, ValidationInputError
from scrapernba.core.http import CLIENT_TIERS, fetch_json_async, make_transport
from scrapernba.core.schemas import (
    VALIDATION_MODES,
    BoxScoreAdvancedPlayerStats,
    BoxScoreAdvancedTeamStats,
    BoxScorePlayerStats,
    BoxScoreTeamStats,
    CommonPlayerInfo,
    DraftHistoryEntry,
    GameFinderResult,
    GameSummary,
    LeagueDashPlayerStats,
    LeagueGameLogEntry,
    LeagueLeader,
    LeagueStanding,
    LiveBoxScorePlayer,
    LiveOddsGame,
    LivePlayByPlayAction,
    PlayByPlayEvent,
    PlayerCareerStats,
    PlayerEstimatedMetrics,
    PlayerGameLog,
    PlayerSummary,
    ScoreboardGame,
    Shape,
    ShotChartShot,
    TeamGameLog,
    TeamInfoCommon,
    TeamRoster,
    TeamYearByYearStats,
    ValidationMode,
    validate_rows,
)
from scrapernba.core.validation import (
    validate_date,
    validate_enum,
    validate_game_id,
    validate_player_id,
    validate_season,
    validate_team_id,
)
from scrapernba.reference import Player, ReferenceData, Team

LOG = logging.getLogger(__name__)

Row = Dict[str, Any]
TeamArg = Union[int, str]

LEAGUE_NAME = "National Basketball Association"


class NbaAPI:
    """
    Typed access to stats.nba.com and the cdn.nba.com live feeds.

    Args:
        timeout: Per-request timeout in seconds
        client_tier: "primary" (requests), "browser" (playwright) or "auto" (primary, then browser)
        validation: ValidationMode.LENIENT (log and pass through) or ValidationMode.STRICT (raise)
        transport: Object with fetch(url, timeout, headers) -> str; overrides client_tier
        reference: Team/player tables used for name lookups; the bundled team table by default
    """

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, client_tier: str = "primary",
                 validation: str = ValidationMode.LENIENT, transport=None,
                 reference: Optional[ReferenceData] = None):
        validate_enum(client_tier, CLIENT_TIERS, "client tier")
        validate_enum(validation, VALIDATION_MODES, "validation mode")
        if timeout <= 0:
            raise ValidationInputError(f"Invalid timeout: {timeout}. Must be positive.")

        self.timeout = timeout
        self.client_tier = client_tier
        self.validation = validation
        self.reference = reference or ReferenceData.default()
        self._transport = transport
        self._owns_transport = transport is None

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def connect(self) -> "NbaAPI":
        if self._transport is None:
            self._transport = make_transport(self.client_tier)
            LOG.info(f"NBA API client connected ({self.client_tier} tier)")
        return self

    async def close(self) -> None:
        if self._transport is not None and self._owns_transport:
            self._transport.close()
            self._transport = None
            LOG.info("NBA API client closed")

    async def __aenter__(self) -> "NbaAPI":
        return await self.connect()

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    # =========================================================================
    # Internal helpers
    # =========================================================================

    async def _fetch(self, endpoint: str, params: Optional[Dict[str, Any]] = None,
                     game_id: Optional[str] = None) -> Tables:
        await self.connect()
        route = route_for(endpoint)
        if route.live:
            url, headers = build_live_url(endpoint, game_id), LIVE_HEADERS
        else:
            url, headers = build_stats_url(endpoint, params), STATS_HEADERS
        raw = await fetch_json_async(self._transport, url, self.timeout, headers)
        return dispatch(route, raw)

    def _validate(self, shape: Type[Shape], rows: List[Row]) -> List[Row]:
        return validate_rows(shape, rows, self.validation)

    async def _rows(self, endpoint: str, params: Dict[str, Any], table: str, shape: Type[Shape]) -> List[Row]:
        tables = await self._fetch(endpoint, params)
        return self._validate(shape, tables.get(table, []))

    async def _single(self, endpoint: str, params: Dict[str, Any], table: str, shape: Type[Shape],
                      what: str, identifier: Any) -> Row:
        rows = await self._rows(endpoint, params, table, shape)
        if not rows:
            raise NotFoundError(f"{what} not found: {identifier}", identifier=identifier)
        return rows[0]

    def _team_id(self, team: TeamArg) -> int:
        team_id = self.reference.resolve_team_id(team)
        validate_team_id(team_id)
        return team_id

    @staticmethod
    def _season(season: Optional[str]) -> str:
        season = season or get_current_season()
        validate_season(season)
        return season

    @staticmethod
    def _season_type(season_type: str) -> str:
        validate_enum(season_type, constant_values(SeasonType), "season type")
        return season_type

    # =========================================================================
    # Player endpoints
    # =========================================================================

    async def get_player_career_stats(self, player_id: int, per_mode: str = DEFAULT_PER_MODE,
                                      league_id: str = DEFAULT_LEAGUE_ID) -> List[Row]:
        """Season-by-season regular season totals for a player."""
        validate_player_id(player_id)
        validate_enum(per_mode, constant_values(PerMode), "per mode")
        return await self._rows(
            Endpoint.PLAYER_CAREER_STATS,
            {"PlayerID": player_id, "PerMode": per_mode, "LeagueID": league_id},
            "SeasonTotalsRegularSeason",
            PlayerCareerStats,
        )

    async def get_player_game_log(self, player_id: int, season: Optional[str] = None,
                                  season_type: str = DEFAULT_SEASON_TYPE) -> List[Row]:
        validate_player_id(player_id)
        return await self._rows(
            Endpoint.PLAYER_GAME_LOG,
            {
                "PlayerID": player_id,
                "Season": self._season(season),
                "SeasonType": self._season_type(season_type),
                "LeagueID": DEFAULT_LEAGUE_ID,
            },
            "PlayerGameLog",
            PlayerGameLog,
        )

    async def get_common_player_info(self, player_id: int) -> Row:
        """Bio and draft information for one player. Raises NotFoundError when the player is unknown."""
        validate_player_id(player_id)
        return await self._single(
            Endpoint.COMMON_PLAYER_INFO,
            {"PlayerID": player_id, "LeagueID": DEFAULT_LEAGUE_ID},
            "CommonPlayerInfo",
            CommonPlayerInfo,
            "Player",
            player_id,
        )

    async def get_common_all_players(self, season: Optional[str] = None,
                                     is_only_current_season: bool = False) -> List[Row]:
        return await self._rows(
            Endpoint.COMMON_ALL_PLAYERS,
            {
                "Season": self._season(season),
                "LeagueID": DEFAULT_LEAGUE_ID,
                "IsOnlyCurrentSeason": 1 if is_only_current_season else 0,
            },
            "CommonAllPlayers",
            PlayerSummary,
        )

    async def get_player_estimated_metrics(self, season: Optional[str] = None) -> List[Row]:
        return await self._rows(
            Endpoint.PLAYER_ESTIMATED_METRICS,
            {"Season": self._season(season), "LeagueID": DEFAULT_LEAGUE_ID, "SeasonType": SeasonType.REGULAR},
            "PlayerEstimatedMetrics",
            PlayerEstimatedMetrics,
        )

    # =========================================================================
    # Team endpoints
    # =========================================================================

    async def get_common_team_roster(self, team: TeamArg, season: Optional[str] = None) -> List[Row]:
        """Roster for a team, by id, abbreviation ("BOS") or name ("Celtics")."""
        return await self._rows(
            Endpoint.COMMON_TEAM_ROSTER,
            {"TeamID": self._team_id(team), "Season": self._season(season), "LeagueID": DEFAULT_LEAGUE_ID},
            "CommonTeamRoster",
            TeamRoster,
        )

    async def get_team_game_log(self, team: TeamArg, season: Optional[str] = None,
                                season_type: str = DEFAULT_SEASON_TYPE) -> List[Row]:
        return await self._rows(
            Endpoint.TEAM_GAME_LOG,
            {
                "TeamID": self._team_id(team),
                "Season": self._season(season),
                "SeasonType": self._season_type(season_type),
                "LeagueID": DEFAULT_LEAGUE_ID,
            },
            "TeamGameLog",
            TeamGameLog,
        )

    async def get_team_info_common(self, team: TeamArg, season: Optional[str] = None) -> Row:
        team_id = self._team_id(team)
        return await self._single(
            Endpoint.TEAM_INFO_COMMON,
            {"TeamID": team_id, "Season": self._season(season), "LeagueID": DEFAULT_LEAGUE_ID},
            "TeamInfoCommon",
            TeamInfoCommon,
            "Team",
            team_id,
        )

    async def get_team_year_by_year_stats(self, team: TeamArg) -> List[Row]:
        return await self._rows(
            Endpoint.TEAM_YEAR_BY_YEAR_STATS,
            {
                "TeamID": self._team_id(team),
                "LeagueID": DEFAULT_LEAGUE_ID,
                "SeasonType": SeasonType.REGULAR,
                "PerMode": PerMode.TOTALS,
            },
            "TeamStats",
            TeamYearByYearStats,
        )

    # =========================================================================
    # League endpoints
    # =========================================================================

    async def get_league_leaders(self, season: Optional[str] = None,
                                 stat_category: str = StatCategory.POINTS) -> List[Row]:
        """Per-game leaders for a stat category, in rank order."""
        validate_enum(stat_category, constant_values(StatCategory), "stat category")
        return await self._rows(
            Endpoint.LEAGUE_LEADERS,
            {
                "Season": self._season(season),
                "SeasonType": SeasonType.REGULAR,
                "LeagueID": DEFAULT_LEAGUE_ID,
                "StatCategory": stat_category,
                "PerMode": PerMode.PER_GAME,
                "Scope": "S",
            },
            "LeagueLeaders",
            LeagueLeader,
        )

    async def get_league_dash_player_stats(self, season: Optional[str] = None,
                                           season_type: str = DEFAULT_SEASON_TYPE,
                                           per_mode: str = DEFAULT_PER_MODE,
                                           measure_type: str = MeasureType.BASE,
                                           conference: Optional[str] = None,
                                           division: Optional[str] = None,
                                           team: Optional[TeamArg] = None,
                                           outcome: Optional[str] = None,
                                           location: Optional[str] = None,
                                           month: int = 0, period: int = 0, last_n_games: int = 0,
                                           extra_params: Optional[Dict[str, Any]] = None) -> List[Row]:
        """
        League-wide player dashboard.

        Keyword filters override the defaults; extra_params is merged last
        and is passed to the API verbatim (upstream parameter names).
        """
        validate_enum(per_mode, constant_values(PerMode), "per mode")
        validate_enum(measure_type, constant_values(MeasureType), "measure type")
        params = {
            "Season": self._season(season),
            "SeasonType": self._season_type(season_type),
            "LeagueID": DEFAULT_LEAGUE_ID,
            "PerMode": per_mode,
            "MeasureType": measure_type,
            "Conference": conference,
            "Division": division,
            "TeamID": self._team_id(team) if team else 0,
            "Outcome": outcome,
            "Location": location,
            "Month": month,
            "Period": period,
            "LastNGames": last_n_games,
            "PORound": 0,
            "PaceAdjust": "N",
            "PlusMinus": "N",
            "Rank": "N",
            "OpponentTeamID": 0,
        }
        params.update(extra_params or {})
        return await self._rows(
            Endpoint.LEAGUE_DASH_PLAYER_STATS, params, "LeagueDashPlayerStats", LeagueDashPlayerStats
        )

    async def get_league_standings(self, season: Optional[str] = None,
                                   season_type: str = DEFAULT_SEASON_TYPE) -> List[Row]:
        return await self._rows(
            Endpoint.LEAGUE_STANDINGS,
            {"Season": self._season(season), "SeasonType": self._season_type(season_type),
             "LeagueID": DEFAULT_LEAGUE_ID},
            "Standings",
            LeagueStanding,
        )

    async def get_league_game_finder(self, player_or_team: str = "T", season: Optional[str] = None,
                                     season_type: str = DEFAULT_SEASON_TYPE,
                                     league_id: str = DEFAULT_LEAGUE_ID,
                                     team: Optional[TeamArg] = None, player_id: Optional[int] = None,
                                     vs_team: Optional[TeamArg] = None,
                                     vs_conference: Optional[str] = None, vs_division: Optional[str] = None,
                                     outcome: Optional[str] = None, location: Optional[str] = None,
                                     date_from: Optional[str] = None, date_to: Optional[str] = None,
                                     extra_params: Optional[Dict[str, Any]] = None) -> List[Row]:
        """Search games. Dates are YYYY-MM-DD; an unset season searches every season."""
        validate_enum(player_or_team, ("P", "T"), "player or team")
        if season:
            validate_season(season)
        if player_id is not None:
            validate_player_id(player_id)
        for value in (date_from, date_to):
            if value:
                validate_date(value)

        params = {
            "PlayerOrTeam": player_or_team,
            "Season": season,
            "SeasonType": self._season_type(season_type),
            "LeagueID": league_id,
            "TeamID": self._team_id(team) if team is not None else None,
            "PlayerID": player_id,
            "VsTeamID": self._team_id(vs_team) if vs_team is not None else None,
            "VsConference": vs_conference,
            "VsDivision": vs_division,
            "Outcome": outcome,
            "Location": location,
            "DateFrom": date_from,
            "DateTo": date_to,
        }
        params.update(extra_params or {})
        return await self._rows(
            Endpoint.LEAGUE_GAME_FINDER, params, "LeagueGameFinderResults", GameFinderResult
        )

    async def get_league_game_log(self, season: Optional[str] = None,
                                  season_type: str = DEFAULT_SEASON_TYPE) -> List[Row]:
        return await self._rows(
            Endpoint.LEAGUE_GAME_LOG,
            {
                "Season": self._season(season),
                "SeasonType": self._season_type(season_type),
                "LeagueID": DEFAULT_LEAGUE_ID,
                "PlayerOrTeam": "T",
                "Direction": "DESC",
                "Sorter": "DATE",
                "Counter": 0,
            },
            "LeagueGameLog",
            LeagueGameLogEntry,
        )

    # =========================================================================
    # Game endpoints
    # =========================================================================

    async def get_game_summary(self, game_id: str) -> Row:
        """The GameSummary row of boxscoresummaryv2 (game code, date, status, teams)."""
        validate_game_id(game_id)
        return await self._single(
            Endpoint.GAME_SUMMARY,
            {"GameID": game_id, "LeagueID": DEFAULT_LEAGUE_ID},
            "GameSummary",
            GameSummary,
            "Game",
            game_id,
        )

    async def get_scoreboard(self, game_date: Optional[str] = None) -> Dict[str, Any]:
        """Games on a date (YYYY-MM-DD, default today)."""
        if game_date:
            validate_date(game_date)
        tables = await self._fetch(
            Endpoint.SCOREBOARD, {"GameDate": game_date, "LeagueID": DEFAULT_LEAGUE_ID}
        )
        header = (tables.get("Scoreboard") or [{}])[0]
        return {
            "gameDate": header.get("gameDate") or game_date or get_today_date(),
            "leagueId": header.get("leagueId") or DEFAULT_LEAGUE_ID,
            "leagueName": header.get("leagueName") or LEAGUE_NAME,
            "games": self._validate(ScoreboardGame, tables.get("Games", [])),
        }

    async def _game_context(self, game_id: str) -> Dict[str, Any]:
        """gameCode and gameDate, which the v3 box scores leave out."""
        try:
            summary = await self.get_game_summary(game_id)
        except NotFoundError:
            LOG.warning(f"No game summary for {game_id}; box score returned without game code/date")
            return {"gameCode": None, "gameDate": None}
        game_date = summary.get("gameDateEst")
        return {
            "gameCode": summary.get("gamecode"),
            "gameDate": game_date[:10] if isinstance(game_date, str) else game_date,
        }

    async def _box_score(self, endpoint: str, game_id: str, player_shape: Type[Shape],
                         team_shape: Type[Shape]) -> Dict[str, Any]:
        validate_game_id(game_id)
        tables = await self._fetch(endpoint, {"GameID": game_id, "LeagueID": DEFAULT_LEAGUE_ID})
        context = await self._game_context(game_id)
        game = (tables.get("Game") or [{}])[0]
        return {
            "gameId": game.get("gameId") or game_id,
            **context,
            "homeTeamId": game.get("homeTeamId"),
            "awayTeamId": game.get("awayTeamId"),
            "playerStats": self._validate(player_shape, tables.get("PlayerStats", [])),
            "teamStats": self._validate(team_shape, tables.get("TeamStats", [])),
        }

    async def get_box_score_traditional(self, game_id: str) -> Dict[str, Any]:
        return await self._box_score(
            Endpoint.BOX_SCORE_TRADITIONAL, game_id, BoxScorePlayerStats, BoxScoreTeamStats
        )

    async def get_box_score_advanced(self, game_id: str) -> Dict[str, Any]:
        return await self._box_score(
            Endpoint.BOX_SCORE_ADVANCED, game_id, BoxScoreAdvancedPlayerStats, BoxScoreAdvancedTeamStats
        )

    async def get_play_by_play(self, game_id: str) -> List[Row]:
        validate_game_id(game_id)
        # StartPeriod/EndPeriod are required; 14 covers every overtime seen so far
        return await self._rows(
            Endpoint.PLAY_BY_PLAY,
            {"GameID": game_id, "LeagueID": DEFAULT_LEAGUE_ID, "StartPeriod": 0, "EndPeriod": 14},
            "PlayByPlay",
            PlayByPlayEvent,
        )

    # =========================================================================
    # Other endpoints
    # =========================================================================

    async def get_shot_chart_detail(self, player_id: int, team: TeamArg = 0, season: Optional[str] = None,
                                    season_type: str = DEFAULT_SEASON_TYPE, game_id: Optional[str] = None,
                                    context_measure: str = "FGA", date_from: Optional[str] = None,
                                    date_to: Optional[str] = None, last_n_games: int = 0, month: int = 0,
                                    opponent_team: TeamArg = 0, period: int = 0,
                                    extra_params: Optional[Dict[str, Any]] = None) -> List[Row]:
        """Every shot a player took. team=0 means all teams."""
        validate_player_id(player_id)
        if game_id:
            validate_game_id(game_id)
        for value in (date_from, date_to):
            if value:
                validate_date(value)

        params = {
            "PlayerID": player_id,
            "TeamID": self._team_id(team) if team else 0,
            "Season": self._season(season),
            "SeasonType": self._season_type(season_type),
            "LeagueID": DEFAULT_LEAGUE_ID,
            "ContextMeasure": context_measure,
            "GameID": game_id,
            "DateFrom": date_from,
            "DateTo": date_to,
            "LastNGames": last_n_games,
            "Month": month,
            "OpponentTeamID": self._team_id(opponent_team) if opponent_team else 0,
            "Period": period,
        }
        params.update(extra_params or {})
        return await self._rows(Endpoint.SHOT_CHART_DETAIL, params, "Shot_Chart_Detail", ShotChartShot)

    async def get_draft_history(self, season: Optional[int] = None) -> List[Row]:
        """Draft picks; season is the draft year (2024), every draft when omitted."""
        if season is not None and (
            not isinstance(season, int) or isinstance(season, bool) or season < 1947
        ):
            raise ValidationInputError(f"Invalid draft year: {season!r}")
        return await self._rows(
            Endpoint.DRAFT_HISTORY,
            {"Season": season, "LeagueID": DEFAULT_LEAGUE_ID},
            "DraftHistory",
            DraftHistoryEntry,
        )

    # =========================================================================
    # Live endpoints (cdn.nba.com)
    # =========================================================================

    async def get_live_scoreboard(self) -> Dict[str, Any]:
        tables = await self._fetch(Endpoint.LIVE_SCOREBOARD)
        header = (tables.get("Scoreboard") or [{}])[0]
        return {
            "gameDate": header.get("gameDate"),
            "leagueId": header.get("leagueId"),
            "leagueName": header.get("leagueName"),
            "games": self._validate(ScoreboardGame, tables.get("Games", [])),
        }

    async def get_live_box_score(self, game_id: str) -> Dict[str, Any]:
        validate_game_id(game_id)
        tables = await self._fetch(Endpoint.LIVE_BOX_SCORE, game_id=game_id)
        game = (tables.get("Game") or [{"gameId": game_id}])[0]
        return {
            **game,
            "playerStats": self._validate(LiveBoxScorePlayer, tables.get("PlayerStats", [])),
            "teamStats": self._validate(BoxScoreTeamStats, tables.get("TeamStats", [])),
        }

    async def get_live_play_by_play(self, game_id: str) -> Dict[str, Any]:
        """Live actions for a game. gameCode comes from the live box score; the feed itself omits it."""
        validate_game_id(game_id)
        box_score = (
            (await self._fetch(Endpoint.LIVE_BOX_SCORE, game_id=game_id)).get("Game") or [{}]
        )[0]
        tables = await self._fetch(Endpoint.LIVE_PLAY_BY_PLAY, game_id=game_id)
        game = (tables.get("Game") or [{"gameId": game_id}])[0]
        return {
            "gameId": game.get("gameId") or game_id,
            "gameCode": box_score.get("gameCode"),
            "actions": self._validate(LivePlayByPlayAction, tables.get("Actions", [])),
        }

    async def get_live_odds(self) -> Dict[str, Any]:
        tables = await self._fetch(Endpoint.LIVE_ODDS)
        return {"games": self._validate(LiveOddsGame, tables.get("Games", []))}

    # =========================================================================
    # Reference data
    # =========================================================================

    def get_teams(self) -> List[Team]:
        return list(self.reference.teams)

    def get_players(self) -> List[Player]:
        return list(self.reference.players)

    def get_active_players(self) -> List[Player]:
        return self.reference.active_players()

    def get_inactive_players(self) -> List[Player]:
        return self.reference.inactive_players()

    def find_team_by_id(self, team_id: int) -> Optional[Team]:
        return self.reference.find_team_by_id(team_id)

    def find_team_by_abbreviation(self, abbreviation: str) -> Optional[Team]:
        return self.reference.find_team_by_abbreviation(abbreviation)

    def find_teams_by_name(self, pattern: str) -> List[Team]:
        return self.reference.find_teams_by_name(pattern)

    def find_player_by_id(self, player_id: int) -> Optional[Player]:
        return self.reference.find_player_by_id(player_id)

    def find_players_by_name(self, pattern: str) -> List[Player]:
        return self.reference.find_players_by_name(pattern)


def run_sync(call: Callable[[NbaAPI], Awaitable[Any]], api: Optional[NbaAPI] = None) -> Any:
    """
    Run one coroutine against a client from synchronous code.

    A fresh client is opened and closed around the call unless one is given.
    Must not be called from inside a running event loop.
    """
    async def _main():
        if api is not None:
            return await call(api)
        async with NbaAPI() as client:
            return await call(client)

    return asyncio.run(_main())
