"""
envelopes.py : Per-endpoint routing table.

Every endpoint declares up front which response family it speaks: the
standard headers/rowSet envelope, or a named adapter for a nested payload.
dispatch() follows that declaration instead of sniffing the payload.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Union

from scrapernba.config import Endpoint
from scrapernba.core.adapters import ADAPTERS
from scrapernba.core.normalize import normalize_keys, normalize_response

Tables = Dict[str, List[Dict[str, Any]]]


@dataclass(frozen=True)
class StandardEnvelope:
    live: bool = False


@dataclass(frozen=True)
class AdapterEnvelope:
    adapter: str
    live: bool = False

    def __post_init__(self):
        if self.adapter not in ADAPTERS:
            raise ValueError(f"Unknown adapter: {self.adapter}")


Envelope = Union[StandardEnvelope, AdapterEnvelope]


ROUTES: Dict[str, Envelope] = {
    # Player
    Endpoint.PLAYER_CAREER_STATS: StandardEnvelope(),
    Endpoint.PLAYER_GAME_LOG: StandardEnvelope(),
    Endpoint.COMMON_PLAYER_INFO: StandardEnvelope(),
    Endpoint.COMMON_ALL_PLAYERS: StandardEnvelope(),
    Endpoint.PLAYER_ESTIMATED_METRICS: StandardEnvelope(),
    # Team
    Endpoint.COMMON_TEAM_ROSTER: StandardEnvelope(),
    Endpoint.TEAM_GAME_LOG: StandardEnvelope(),
    Endpoint.TEAM_INFO_COMMON: StandardEnvelope(),
    Endpoint.TEAM_YEAR_BY_YEAR_STATS: StandardEnvelope(),
    # League
    Endpoint.LEAGUE_LEADERS: StandardEnvelope(),
    Endpoint.LEAGUE_DASH_PLAYER_STATS: StandardEnvelope(),
    Endpoint.LEAGUE_STANDINGS: StandardEnvelope(),
    Endpoint.LEAGUE_GAME_FINDER: StandardEnvelope(),
    Endpoint.LEAGUE_GAME_LOG: StandardEnvelope(),
    # Game
    Endpoint.GAME_SUMMARY: StandardEnvelope(),
    Endpoint.SCOREBOARD: AdapterEnvelope("scoreboard"),
    Endpoint.BOX_SCORE_TRADITIONAL: AdapterEnvelope("boxScoreTraditional"),
    Endpoint.BOX_SCORE_ADVANCED: AdapterEnvelope("boxScoreAdvanced"),
    Endpoint.PLAY_BY_PLAY: StandardEnvelope(),
    # Other
    Endpoint.SHOT_CHART_DETAIL: StandardEnvelope(),
    Endpoint.DRAFT_HISTORY: StandardEnvelope(),
    # Live
    Endpoint.LIVE_SCOREBOARD: AdapterEnvelope("liveScoreboard", live=True),
    Endpoint.LIVE_BOX_SCORE: AdapterEnvelope("liveBoxScore", live=True),
    Endpoint.LIVE_PLAY_BY_PLAY: AdapterEnvelope("livePlayByPlay", live=True),
    Endpoint.LIVE_ODDS: AdapterEnvelope("liveOdds", live=True),
}


def route_for(endpoint: str) -> Envelope:
    try:
        return ROUTES[endpoint]
    except KeyError:
        raise ValueError(f"No route declared for endpoint: {endpoint}") from None


def dispatch(route: Envelope, raw: Any) -> Tables:
    """Turn a raw payload into {table name: flat camelCase rows} per its declared route."""
    if isinstance(route, AdapterEnvelope):
        return ADAPTERS[route.adapter](raw)

    return {
        name: [normalize_keys(row) for row in rows]
        for name, rows in normalize_response(raw).items()
    }
