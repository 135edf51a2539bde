"""Shared fixtures: a fake transport serving canned NBA payloads."""

import json
import os
import sys

import pytest

# Add parent directory to path so we can import scrapernba without installing it
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from scrapernba.api import NbaAPI
from scrapernba.core.errors import NetworkError


class FakeTransport:
    """
    Answers fetch(url) with the first payload whose key is a substring of the URL.

    A payload that is an exception instance is raised instead. Unmatched URLs
    get an HTTP 404 NetworkError. Every requested URL is recorded.
    """

    name = "fake"

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.urls = []
        self.closed = False

    def fetch(self, url, timeout=30, headers=None):
        self.urls.append(url)
        for key, payload in self.routes.items():
            if key in url:
                if isinstance(payload, Exception):
                    raise payload
                return json.dumps(payload)
        raise NetworkError(f"HTTP 404: Not Found ({url})", url=url, status=404)

    def close(self):
        self.closed = True


def result_set(name, headers, rows):
    return {"name": name, "headers": headers, "rowSet": rows}


def envelope(*result_sets):
    return {"resource": "test", "parameters": {}, "resultSets": list(result_sets)}


@pytest.fixture
def make_api():
    """make_api(routes, validation=...) -> (NbaAPI, FakeTransport)"""

    def _make(routes=None, **kwargs):
        transport = FakeTransport(routes)
        return NbaAPI(transport=transport, **kwargs), transport

    return _make


@pytest.fixture
def box_score_payload():
    """A trimmed boxscoretraditionalv3 response: one player per side."""

    def team(team_id, city, name, tricode, player_id, first, last, points):
        return {
            "teamId": team_id,
            "teamCity": city,
            "teamName": name,
            "teamTricode": tricode,
            "teamSlug": name.lower(),
            "players": [{
                "personId": player_id,
                "firstName": first,
                "familyName": last,
                "nameI": f"{first[0]}. {last}",
                "jerseyNum": "23",
                "position": "F",
                "comment": "",
                "statistics": {
                    "minutes": "36:12",
                    "fieldGoalsMade": 10,
                    "fieldGoalsAttempted": 20,
                    "fieldGoalsPercentage": 0.5,
                    "reboundsTotal": 8,
                    "assists": 7,
                    "turnovers": 3,
                    "points": points,
                    "plusMinusPoints": 5.0,
                },
            }],
            "statistics": {"points": points, "turnovers": 12, "fieldGoalsPercentage": 0.48},
        }

    return {
        "meta": {"version": 1},
        "boxScoreTraditional": {
            "gameId": "0022400001",
            "awayTeamId": 1610612738,
            "homeTeamId": 1610612752,
            "homeTeam": team(1610612752, "New York", "Knicks", "NYK", 1628973, "Jalen", "Brunson", 30),
            "awayTeam": team(1610612738, "Boston", "Celtics", "BOS", 1628369, "Jayson", "Tatum", 37),
        },
    }


@pytest.fixture
def game_summary_payload():
    return envelope(
        result_set(
            "GameSummary",
            ["GAME_DATE_EST", "GAME_SEQUENCE", "GAME_ID", "GAME_STATUS_ID", "GAME_STATUS_TEXT",
             "GAMECODE", "HOME_TEAM_ID", "VISITOR_TEAM_ID", "SEASON"],
            [["2024-10-22T00:00:00", 1, "0022400001", 3, "Final", "20241022/BOSNYK",
              1610612752, 1610612738, "2024"]],
        ),
        result_set("LineScore", ["GAME_ID", "TEAM_ID", "PTS"], [["0022400001", 1610612752, 109]]),
    )
