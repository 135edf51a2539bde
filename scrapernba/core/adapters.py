"""
adapters.py : Flatten the nested (non-tabular) NBA payloads into flat rows.

The v3 box score, v3 scoreboard and cdn.nba.com live feeds do not use the
headers/rowSet envelope. Each adapter here pulls its named container out of
the raw payload and returns {table name: rows}, with rows keyed the same way
the legacy tabular endpoints are after camelCasing (fgm, fgPct, plusMinus...),
so validation and consumers do not care where a row came from.

Adapters never raise on a missing container or team side; they return
empty tables instead.
"""

from typing import Any, Callable, Dict, List, Mapping, Tuple

Row = Dict[str, Any]
Tables = Dict[str, List[Row]]

# output field -> key inside a v3 "statistics" block
TRADITIONAL_FIELDS: Dict[str, str] = {
    "min": "minutes",
    "fgm": "fieldGoalsMade",
    "fga": "fieldGoalsAttempted",
    "fgPct": "fieldGoalsPercentage",
    "fg3m": "threePointersMade",
    "fg3a": "threePointersAttempted",
    "fg3Pct": "threePointersPercentage",
    "ftm": "freeThrowsMade",
    "fta": "freeThrowsAttempted",
    "ftPct": "freeThrowsPercentage",
    "oreb": "reboundsOffensive",
    "dreb": "reboundsDefensive",
    "reb": "reboundsTotal",
    "ast": "assists",
    "stl": "steals",
    "blk": "blocks",
    "to": "turnovers",
    "pf": "foulsPersonal",
    "pts": "points",
    "plusMinus": "plusMinusPoints",
}

ADVANCED_FIELDS: Dict[str, str] = {
    "min": "minutes",
    "eOffRating": "estimatedOffensiveRating",
    "offRating": "offensiveRating",
    "eDefRating": "estimatedDefensiveRating",
    "defRating": "defensiveRating",
    "eNetRating": "estimatedNetRating",
    "netRating": "netRating",
    "astPct": "assistPercentage",
    "astTov": "assistToTurnover",
    "astRatio": "assistRatio",
    "orebPct": "offensiveReboundPercentage",
    "drebPct": "defensiveReboundPercentage",
    "rebPct": "reboundPercentage",
    "tmTovPct": "turnoverRatio",
    "efgPct": "effectiveFieldGoalPercentage",
    "tsPct": "trueShootingPercentage",
    "usgPct": "usagePercentage",
    "eUsgPct": "estimatedUsagePercentage",
    "ePace": "estimatedPace",
    "pace": "pace",
    "pacePer40": "pacePer40",
    "poss": "possessions",
    "pie": "PIE",
}

ADVANCED_TEAM_FIELDS: Dict[str, str] = {
    **ADVANCED_FIELDS,
    "eTmTovPct": "estimatedTeamTurnoverPercentage",
}

# The live feed spells minutes as ISO durations; minutesCalculated is rounded ("PT36M").
LIVE_FIELDS: Dict[str, str] = {
    **TRADITIONAL_FIELDS,
    "min": "minutesCalculated",
    "pfd": "foulsDrawn",
    "blka": "blocksReceived",
    "ptsPaint": "pointsInThePaint",
    "ptsFb": "pointsFastBreak",
    "ptsSecondChance": "pointsSecondChance",
}

# output field -> key on a team container
TEAM_IDENTITY_FIELDS: Dict[str, str] = {
    "teamId": "teamId",
    "teamCity": "teamCity",
    "teamName": "teamName",
    "teamAbbreviation": "teamTricode",
}

SCOREBOARD_GAME_FIELDS: Tuple[str, ...] = (
    "gameId", "gameCode", "gameStatus", "gameStatusText", "period", "gameClock",
    "gameTimeUTC", "gameEt", "regulationPeriods", "seriesGameNumber", "seriesText",
    "ifNecessary", "seriesConference", "poRoundDesc", "gameSubtype", "isNeutral",
)

# output suffix -> key on a scoreboard team container; prefixed with homeTeam/awayTeam
SCOREBOARD_TEAM_FIELDS: Dict[str, str] = {
    "Id": "teamId",
    "Name": "teamName",
    "City": "teamCity",
    "Tricode": "teamTricode",
    "Slug": "teamSlug",
    "Wins": "wins",
    "Losses": "losses",
    "Score": "score",
    "Seed": "seed",
    "InBonus": "inBonus",
    "TimeoutsRemaining": "timeoutsRemaining",
}

SIDES = ("homeTeam", "awayTeam")


def _container(raw: Any, *names: str) -> Dict[str, Any]:
    """First named container present in the payload, or {}."""
    if isinstance(raw, Mapping):
        for name in names:
            value = raw.get(name)
            if isinstance(value, Mapping):
                return dict(value)
    return {}


def _mapping(value: Any) -> Dict[str, Any]:
    return dict(value) if isinstance(value, Mapping) else {}


def _records(value: Any) -> List[Dict[str, Any]]:
    return [dict(item) for item in value if isinstance(item, Mapping)] if isinstance(value, list) else []


def _remap(source: Mapping[str, Any], fields: Mapping[str, str]) -> Row:
    return {out: source.get(key) for out, key in fields.items()}


def _full_name(player: Mapping[str, Any]) -> str:
    return f"{player.get('firstName') or ''} {player.get('familyName') or ''}".strip()


def _box_score_player(player: Mapping[str, Any], team: Mapping[str, Any], game_id: Any,
                      fields: Mapping[str, str]) -> Row:
    return {
        "gameId": game_id,
        **_remap(team, TEAM_IDENTITY_FIELDS),
        "playerId": player.get("personId"),
        "playerName": _full_name(player),
        "playerNameI": player.get("nameI"),
        "jerseyNum": player.get("jerseyNum"),
        "position": player.get("position"),
        "startPosition": player.get("position"),
        "comment": player.get("comment"),
        **_remap(_mapping(player.get("statistics")), fields),
    }


def _box_score_team(team: Mapping[str, Any], game_id: Any, fields: Mapping[str, str]) -> Row:
    return {
        "gameId": game_id,
        **_remap(team, TEAM_IDENTITY_FIELDS),
        "teamSlug": team.get("teamSlug"),
        **_remap(_mapping(team.get("statistics")), fields),
    }


def _adapt_box_score(raw: Any, container: str, player_fields: Mapping[str, str],
                     team_fields: Mapping[str, str]) -> Tables:
    box_score = _container(raw, container)
    game_id = box_score.get("gameId")
    players: List[Row] = []
    teams: List[Row] = []

    for side in SIDES:
        team = _mapping(box_score.get(side))
        if not team:
            continue
        players.extend(
            _box_score_player(player, team, game_id, player_fields)
            for player in _records(team.get("players"))
        )
        teams.append(_box_score_team(team, game_id, team_fields))

    game = [{
        "gameId": game_id,
        "homeTeamId": box_score.get("homeTeamId"),
        "awayTeamId": box_score.get("awayTeamId"),
    }] if box_score else []

    return {"PlayerStats": players, "TeamStats": teams, "Game": game}


def adapt_box_score_traditional(raw: Any) -> Tables:
    """boxscoretraditionalv3 -> PlayerStats, TeamStats, Game tables."""
    return _adapt_box_score(raw, "boxScoreTraditional", TRADITIONAL_FIELDS, TRADITIONAL_FIELDS)


def adapt_box_score_advanced(raw: Any) -> Tables:
    """boxscoreadvancedv3 -> PlayerStats, TeamStats, Game tables."""
    return _adapt_box_score(raw, "boxScoreAdvanced", ADVANCED_FIELDS, ADVANCED_TEAM_FIELDS)


def _scoreboard_game(game: Mapping[str, Any]) -> Row:
    row = {field: game.get(field) for field in SCOREBOARD_GAME_FIELDS}
    for side in SIDES:
        team = _mapping(game.get(side))
        for suffix, key in SCOREBOARD_TEAM_FIELDS.items():
            row[f"{side}{suffix}"] = team.get(key)
    return row


def _adapt_scoreboard(scoreboard: Mapping[str, Any]) -> Tables:
    header = [{
        "gameDate": scoreboard.get("gameDate"),
        "leagueId": scoreboard.get("leagueId"),
        "leagueName": scoreboard.get("leagueName"),
    }] if scoreboard else []
    return {
        "Scoreboard": header,
        "Games": [_scoreboard_game(game) for game in _records(scoreboard.get("games"))],
    }


def adapt_scoreboard(raw: Any) -> Tables:
    """scoreboardv3 -> Scoreboard (one row), Games (one flat row per game)."""
    return _adapt_scoreboard(_container(raw, "scoreboard", "ScoreBoard"))


def adapt_live_scoreboard(raw: Any) -> Tables:
    """cdn todaysScoreboard -> Scoreboard, Games."""
    return _adapt_scoreboard(_container(raw, "scoreboard"))


def _live_player(player: Mapping[str, Any], team: Mapping[str, Any], game_id: Any) -> Row:
    return {
        "gameId": game_id,
        **_remap(team, TEAM_IDENTITY_FIELDS),
        "playerId": player.get("personId"),
        "playerName": player.get("name") or _full_name(player),
        "playerNameI": player.get("nameI"),
        "jerseyNum": player.get("jerseyNum"),
        "position": player.get("position"),
        "status": player.get("status"),
        "starter": player.get("starter"),
        "oncourt": player.get("oncourt"),
        "played": player.get("played"),
        **_remap(_mapping(player.get("statistics")), LIVE_FIELDS),
    }


def adapt_live_box_score(raw: Any) -> Tables:
    """cdn boxscore_{game_id} -> PlayerStats, TeamStats, Game."""
    game = _container(raw, "game")
    game_id = game.get("gameId")
    players: List[Row] = []
    teams: List[Row] = []

    for side in SIDES:
        team = _mapping(game.get(side))
        if not team:
            continue
        players.extend(_live_player(player, team, game_id) for player in _records(team.get("players")))
        teams.append({
            "gameId": game_id,
            **_remap(team, TEAM_IDENTITY_FIELDS),
            "score": team.get("score"),
            **_remap(_mapping(team.get("statistics")), LIVE_FIELDS),
        })

    header = [{
        "gameId": game_id,
        "gameCode": game.get("gameCode"),
        "gameTimeUTC": game.get("gameTimeUTC"),
        "gameStatus": game.get("gameStatus"),
        "gameStatusText": game.get("gameStatusText"),
        "homeTeamId": _mapping(game.get("homeTeam")).get("teamId"),
        "awayTeamId": _mapping(game.get("awayTeam")).get("teamId"),
    }] if game else []

    return {"PlayerStats": players, "TeamStats": teams, "Game": header}


def adapt_live_play_by_play(raw: Any) -> Tables:
    """cdn playbyplay_{game_id} -> Actions (already flat), Game."""
    game = _container(raw, "game")
    return {
        "Actions": _records(game.get("actions")),
        "Game": [{"gameId": game.get("gameId")}] if game else [],
    }


def adapt_live_odds(raw: Any) -> Tables:
    """cdn odds_todaysGames -> Games."""
    games = raw.get("games") if isinstance(raw, Mapping) else None
    return {"Games": _records(games)}


ADAPTERS: Dict[str, Callable[[Any], Tables]] = {
    "boxScoreTraditional": adapt_box_score_traditional,
    "boxScoreAdvanced": adapt_box_score_advanced,
    "scoreboard": adapt_scoreboard,
    "liveScoreboard": adapt_live_scoreboard,
    "liveBoxScore": adapt_live_box_score,
    "livePlayByPlay": adapt_live_play_by_play,
    "liveOdds": adapt_live_odds,
}
