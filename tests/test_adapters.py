from scrapernba.core.adapters import (
    ADVANCED_FIELDS,
    TRADITIONAL_FIELDS,
    adapt_box_score_advanced,
    adapt_box_score_traditional,
    adapt_live_box_score,
    adapt_live_odds,
    adapt_live_play_by_play,
    adapt_live_scoreboard,
    adapt_scoreboard,
)


def test_traditional_player_rows(box_score_payload):
    tables = adapt_box_score_traditional(box_score_payload)
    brunson = tables["PlayerStats"][0]

    assert brunson["gameId"] == "0022400001"
    assert brunson["teamId"] == 1610612752
    assert brunson["teamAbbreviation"] == "NYK"
    assert brunson["playerId"] == 1628973
    assert brunson["playerName"] == "Jalen Brunson"
    assert brunson["playerNameI"] == "J. Brunson"
    assert brunson["min"] == "36:12"
    assert brunson["fgPct"] == 0.5
    assert brunson["to"] == 3
    assert brunson["pts"] == 30
    assert brunson["plusMinus"] == 5.0


def test_missing_stats_are_present_as_none(box_score_payload):
    brunson = adapt_box_score_traditional(box_score_payload)["PlayerStats"][0]
    for field in TRADITIONAL_FIELDS:
        assert field in brunson
    assert brunson["fg3m"] is None
    assert brunson["stl"] is None


def test_traditional_team_rows_and_game(box_score_payload):
    tables = adapt_box_score_traditional(box_score_payload)
    assert [t["teamAbbreviation"] for t in tables["TeamStats"]] == ["NYK", "BOS"]
    assert tables["TeamStats"][1]["pts"] == 37
    assert tables["TeamStats"][1]["to"] == 12
    assert tables["Game"] == [{"gameId": "0022400001", "homeTeamId": 1610612752, "awayTeamId": 1610612738}]


def test_missing_team_side_is_skipped(box_score_payload):
    del box_score_payload["boxScoreTraditional"]["awayTeam"]
    tables = adapt_box_score_traditional(box_score_payload)
    assert len(tables["PlayerStats"]) == 1
    assert len(tables["TeamStats"]) == 1


def test_missing_container_gives_empty_tables():
    assert adapt_box_score_traditional({}) == {"PlayerStats": [], "TeamStats": [], "Game": []}
    assert adapt_box_score_traditional(None) == {"PlayerStats": [], "TeamStats": [], "Game": []}


def test_advanced_box_score():
    raw = {
        "boxScoreAdvanced": {
            "gameId": "0022400002",
            "homeTeamId": 1,
            "awayTeamId": 2,
            "homeTeam": {
                "teamId": 1,
                "teamTricode": "AAA",
                "players": [{
                    "personId": 10,
                    "firstName": "A",
                    "familyName": "Player",
                    "statistics": {"offensiveRating": 120.5, "PIE": 0.2, "usagePercentage": 0.31},
                }],
                "statistics": {"pace": 99.1, "estimatedTeamTurnoverPercentage": 12.0},
            },
        }
    }
    tables = adapt_box_score_advanced(raw)
    player = tables["PlayerStats"][0]
    assert player["offRating"] == 120.5
    assert player["pie"] == 0.2
    assert player["usgPct"] == 0.31
    assert set(ADVANCED_FIELDS) <= set(player)
    assert "eTmTovPct" not in player

    team = tables["TeamStats"][0]
    assert team["pace"] == 99.1
    assert team["eTmTovPct"] == 12.0


def _scoreboard_games():
    return [{
        "gameId": "0022400500",
        "gameCode": "20250115/LALBOS",
        "gameStatus": 3,
        "gameStatusText": "Final",
        "homeTeam": {"teamId": 1610612738, "teamTricode": "BOS", "score": 110, "wins": 30, "losses": 10},
        "awayTeam": {"teamId": 1610612747, "teamTricode": "LAL", "score": 101},
    }]


def test_scoreboard_flattens_games():
    raw = {"scoreboard": {"gameDate": "2025-01-15", "leagueId": "00", "leagueName": "NBA",
                          "games": _scoreboard_games()}}
    tables = adapt_scoreboard(raw)
    assert tables["Scoreboard"] == [{"gameDate": "2025-01-15", "leagueId": "00", "leagueName": "NBA"}]

    game = tables["Games"][0]
    assert game["homeTeamId"] == 1610612738
    assert game["homeTeamTricode"] == "BOS"
    assert game["homeTeamScore"] == 110
    assert game["awayTeamId"] == 1610612747
    assert game["awayTeamScore"] == 101
    assert game["awayTeamWins"] is None
    assert game["period"] is None


def test_scoreboard_accepts_capitalized_container():
    tables = adapt_scoreboard({"ScoreBoard": {"gameDate": "2025-01-15", "games": _scoreboard_games()}})
    assert len(tables["Games"]) == 1


def test_scoreboard_without_games():
    assert adapt_scoreboard({}) == {"Scoreboard": [], "Games": []}


def test_live_scoreboard():
    tables = adapt_live_scoreboard({"meta": {}, "scoreboard": {"gameDate": "2025-01-15",
                                                              "games": _scoreboard_games()}})
    assert tables["Games"][0]["gameCode"] == "20250115/LALBOS"


def test_live_box_score():
    raw = {
        "game": {
            "gameId": "0022400600",
            "gameCode": "20241225/SASNYK",
            "gameStatus": 3,
            "gameStatusText": "Final",
            "homeTeam": {
                "teamId": 1610612752,
                "teamTricode": "NYK",
                "score": 117,
                "players": [{
                    "personId": 1628973,
                    "name": "Jalen Brunson",
                    "status": "ACTIVE",
                    "starter": "1",
                    "oncourt": "0",
                    "played": "1",
                    "statistics": {"minutesCalculated": "PT36M", "points": 32, "foulsDrawn": 6},
                }],
                "statistics": {"points": 117},
            },
            "awayTeam": {"teamId": 1610612759, "teamTricode": "SAS", "score": 114, "players": []},
        }
    }
    tables = adapt_live_box_score(raw)
    player = tables["PlayerStats"][0]
    assert player["playerName"] == "Jalen Brunson"
    assert player["starter"] == "1"
    assert player["min"] == "PT36M"
    assert player["pfd"] == 6
    assert player["ptsPaint"] is None

    assert [t["score"] for t in tables["TeamStats"]] == [117, 114]
    assert tables["Game"][0]["gameCode"] == "20241225/SASNYK"
    assert tables["Game"][0]["awayTeamId"] == 1610612759


def test_live_play_by_play():
    raw = {"game": {"gameId": "0022400600", "actions": [
        {"actionNumber": 1, "period": 1, "clock": "PT12M00.00S", "actionType": "period"},
        "not an action",
    ]}}
    tables = adapt_live_play_by_play(raw)
    assert tables["Actions"] == [
        {"actionNumber": 1, "period": 1, "clock": "PT12M00.00S", "actionType": "period"}
    ]
    assert tables["Game"] == [{"gameId": "0022400600"}]


def test_live_odds():
    assert adapt_live_odds({"games": [{"gameId": "0022400600", "markets": []}]}) == {
        "Games": [{"gameId": "0022400600", "markets": []}]
    }
    assert adapt_live_odds([]) == {"Games": []}
