import asyncio
import logging
from urllib.parse import parse_qs, urlsplit

import pytest

from conftest import envelope, result_set
from scrapernba.api import NbaAPI, run_sync
from scrapernba.core.errors import (
    NetworkError,
    NotFoundError,
    SchemaValidationError,
    ValidationInputError,
)
from scrapernba.core.schemas import ValidationMode

CAREER = envelope(
    result_set(
        "SeasonTotalsRegularSeason",
        ["PLAYER_ID", "SEASON_ID", "LEAGUE_ID", "TEAM_ID", "TEAM_ABBREVIATION", "PLAYER_AGE", "GP", "GS",
         "MIN", "PTS"],
        [[2544, "2003-04", "00", 1610612739, "CLE", 19.0, 79, 79, 3122.0, 1654],
         [2544, "2004-05", "00", 1610612739, "CLE", 20.0, 80, 80, 3388.0, 2175]],
    ),
    result_set("CareerTotalsRegularSeason", ["PLAYER_ID", "GP"], [[2544, 1492]]),
)

ROSTER = envelope(
    result_set(
        "CommonTeamRoster",
        ["TeamID", "SEASON", "LeagueID", "PLAYER", "NUM", "POSITION", "AGE", "PLAYER_ID"],
        [[1610612738, "2024", "00", "Jayson Tatum", "0", "F-G", 26.0, 1628369]],
    ),
)


def _query(url):
    return parse_qs(urlsplit(url).query)


def test_player_career_stats(make_api):
    api, transport = make_api({"playercareerstats?": CAREER})
    rows = run_sync(lambda client: client.get_player_career_stats(2544), api)

    assert [row["seasonId"] for row in rows] == ["2003-04", "2004-05"]
    assert rows[0]["teamAbbreviation"] == "CLE"
    assert rows[1]["pts"] == 2175
    assert transport.urls == [
        "https://stats.nba.com/stats/playercareerstats?LeagueID=00&PerMode=Totals&PlayerID=2544"
    ]


def test_invalid_arguments_never_reach_the_network(make_api):
    api, transport = make_api({})
    with pytest.raises(ValidationInputError):
        run_sync(lambda client: client.get_player_career_stats(-1), api)
    with pytest.raises(ValidationInputError):
        run_sync(lambda client: client.get_player_game_log(2544, season="2024-26"), api)
    with pytest.raises(ValidationInputError):
        run_sync(lambda client: client.get_play_by_play("123"), api)
    with pytest.raises(ValidationInputError):
        run_sync(lambda client: client.get_league_leaders(stat_category="XYZ"), api)
    with pytest.raises(ValidationInputError):
        run_sync(lambda client: client.get_draft_history(1900), api)
    assert transport.urls == []


def test_constructor_validates_options():
    with pytest.raises(ValidationInputError):
        NbaAPI(client_tier="curl")
    with pytest.raises(ValidationInputError):
        NbaAPI(validation="sometimes")
    with pytest.raises(ValidationInputError):
        NbaAPI(timeout=0)


def test_team_abbreviation_is_resolved(make_api):
    api, transport = make_api({"commonteamroster?": ROSTER})
    rows = run_sync(lambda client: client.get_common_team_roster("BOS", "2024-25"), api)

    assert rows[0]["player"] == "Jayson Tatum"
    assert rows[0]["teamid"] == 1610612738
    assert rows[0]["playerId"] == 1628369
    assert "TeamID=1610612738" in transport.urls[0]


def test_unknown_team_name(make_api):
    api, transport = make_api({})
    with pytest.raises(NotFoundError):
        run_sync(lambda client: client.get_team_game_log("Sonics"), api)
    assert transport.urls == []


def test_single_record_not_found(make_api):
    empty = envelope(result_set("CommonPlayerInfo", ["PERSON_ID", "FIRST_NAME"], []))
    api, _ = make_api({"commonplayerinfo?": empty})
    with pytest.raises(NotFoundError, match="Player not found: 2544") as excinfo:
        run_sync(lambda client: client.get_common_player_info(2544), api)
    assert excinfo.value.identifier == 2544


def test_network_errors_propagate(make_api):
    api, _ = make_api({"leagueleaders?": NetworkError("HTTP 500: Server Error", status=500)})
    with pytest.raises(NetworkError) as excinfo:
        run_sync(lambda client: client.get_league_leaders("2024-25"), api)
    assert excinfo.value.status == 500


def test_box_score_adds_game_code_and_date(make_api, box_score_payload, game_summary_payload):
    api, transport = make_api({
        "boxscoretraditionalv3?": box_score_payload,
        "boxscoresummaryv2?": game_summary_payload,
    })
    box = run_sync(lambda client: client.get_box_score_traditional("0022400001"), api)

    assert box["gameId"] == "0022400001"
    assert box["gameCode"] == "20241022/BOSNYK"
    assert box["gameDate"] == "2024-10-22"
    assert box["homeTeamId"] == 1610612752
    assert box["awayTeamId"] == 1610612738
    assert [p["playerName"] for p in box["playerStats"]] == ["Jalen Brunson", "Jayson Tatum"]
    assert len(box["teamStats"]) == 2
    assert len(transport.urls) == 2
    assert "boxscoretraditionalv3" in transport.urls[0]
    assert "boxscoresummaryv2" in transport.urls[1]


def test_box_score_without_summary(make_api, box_score_payload, caplog):
    empty_summary = envelope(result_set("GameSummary", ["GAME_ID"], []))
    api, _ = make_api({
        "boxscoretraditionalv3?": box_score_payload,
        "boxscoresummaryv2?": empty_summary,
    })
    with caplog.at_level(logging.WARNING, logger="scrapernba.api"):
        box = run_sync(lambda client: client.get_box_score_traditional("0022400001"), api)
    assert box["gameCode"] is None
    assert box["gameDate"] is None
    assert len(box["playerStats"]) == 2
    assert "No game summary" in caplog.text


def test_strict_mode_raises(make_api):
    bad = envelope(result_set("LeagueLeaders", ["PLAYER_ID", "RANK", "PLAYER", "GP"], [["x", 1, "A", 1]]))
    api, _ = make_api({"leagueleaders?": bad}, validation=ValidationMode.STRICT)
    with pytest.raises(SchemaValidationError):
        run_sync(lambda client: client.get_league_leaders("2024-25"), api)


def test_lenient_mode_returns_raw_rows(make_api, caplog):
    bad = envelope(result_set("LeagueLeaders", ["PLAYER_ID", "RANK", "PLAYER", "GP"], [["x", 1, "A", 1]]))
    api, _ = make_api({"leagueleaders?": bad})
    rows = run_sync(lambda client: client.get_league_leaders("2024-25"), api)
    assert rows == [{"playerId": "x", "rank": 1, "player": "A", "gp": 1}]
    assert "returning unvalidated data" in caplog.text


def test_scoreboard_defaults(make_api):
    api, transport = make_api({"scoreboardv3?": {"scoreboard": {"games": []}}})
    scoreboard = run_sync(lambda client: client.get_scoreboard("2025-01-15"), api)
    assert scoreboard == {
        "gameDate": "2025-01-15",
        "leagueId": "00",
        "leagueName": "National Basketball Association",
        "games": [],
    }
    assert "GameDate=2025-01-15" in transport.urls[0]


def test_game_finder_optional_filters(make_api):
    results = envelope(result_set("LeagueGameFinderResults", ["GAME_ID"], []))
    api, transport = make_api({"leaguegamefinder?": results})
    run_sync(lambda client: client.get_league_game_finder(team="LAL", date_from="2025-01-01",
                                                          extra_params={"GameID": "0022400001"}), api)
    params = _query(transport.urls[0])
    assert params["TeamID"] == ["1610612747"]
    assert params["DateFrom"] == ["2025-01-01"]
    assert params["GameID"] == ["0022400001"]
    assert "Season" not in params
    assert "DateTo" not in params


def test_live_box_score_uses_cdn(make_api):
    payload = {"game": {"gameId": "0022400600", "gameCode": "20241225/SASNYK",
                        "homeTeam": {"teamId": 1610612752, "players": []}}}
    api, transport = make_api({"boxscore_0022400600.json": payload})
    box = run_sync(lambda client: client.get_live_box_score("0022400600"), api)

    assert transport.urls == ["https://cdn.nba.com/static/json/liveData/boxscore/boxscore_0022400600.json"]
    assert box["gameCode"] == "20241225/SASNYK"
    assert box["homeTeamId"] == 1610612752
    assert box["playerStats"] == []


def test_live_play_by_play(make_api):
    payload = {"game": {"gameId": "0022400600", "actions": [
        {"actionNumber": 1, "period": 1, "clock": "PT12M00.00S", "actionType": "period"},
    ]}}
    box_score = {"game": {"gameId": "0022400600", "gameCode": "20241225/SASNYK"}}
    api, transport = make_api({"playbyplay_0022400600.json": payload, "boxscore_0022400600.json": box_score})
    feed = run_sync(lambda client: client.get_live_play_by_play("0022400600"), api)
    assert feed["gameId"] == "0022400600"
    assert feed["gameCode"] == "20241225/SASNYK"
    assert feed["actions"][0]["actionType"] == "period"
    assert [url.rsplit("/", 1)[-1] for url in transport.urls] == [
        "boxscore_0022400600.json", "playbyplay_0022400600.json",
    ]


def test_live_play_by_play_box_score_failure_propagates(make_api):
    api, _ = make_api({
        "boxscore_0022400600.json": NetworkError("HTTP 503: Service Unavailable", status=503),
        "playbyplay_0022400600.json": {"game": {"gameId": "0022400600", "actions": []}},
    })
    with pytest.raises(NetworkError):
        run_sync(lambda client: client.get_live_play_by_play("0022400600"), api)


def test_league_dash_team_zero_means_all_teams(make_api):
    dash = envelope(result_set("LeagueDashPlayerStats", ["PLAYER_ID"], []))
    api, transport = make_api({"leaguedashplayerstats?": dash})
    assert run_sync(lambda client: client.get_league_dash_player_stats("2024-25", team=0), api) == []
    assert _query(transport.urls[0])["TeamID"] == ["0"]


def test_common_player_info_returns_first_row(make_api):
    info = envelope(result_set(
        "CommonPlayerInfo",
        ["PERSON_ID", "FIRST_NAME", "LAST_NAME", "DISPLAY_FIRST_LAST", "TEAM_ID", "JERSEY"],
        [[2544, "LeBron", "James", "LeBron James", 1610612747, "23"],
         [2544, "LeBron", "James", "LeBron James", 1610612739, "6"]],
    ))
    api, _ = make_api({"commonplayerinfo?": info})
    player = run_sync(lambda client: client.get_common_player_info(2544), api)
    assert player == {
        "personId": 2544, "firstName": "LeBron", "lastName": "James",
        "displayFirstLast": "LeBron James", "teamId": 1610612747, "jersey": "23",
    }


def test_team_info_common_returns_first_row(make_api):
    info = envelope(result_set(
        "TeamInfoCommon",
        ["TEAM_ID", "SEASON_YEAR", "TEAM_CITY", "TEAM_NAME", "TEAM_ABBREVIATION", "W", "L"],
        [[1610612738, "2024-25", "Boston", "Celtics", "BOS", 61, 21],
         [1610612738, "2023-24", "Boston", "Celtics", "BOS", 64, 18]],
    ))
    api, transport = make_api({"teaminfocommon?": info})
    team = run_sync(lambda client: client.get_team_info_common("BOS", "2024-25"), api)
    assert team == {
        "teamId": 1610612738, "seasonYear": "2024-25", "teamCity": "Boston", "teamName": "Celtics",
        "teamAbbreviation": "BOS", "w": 61, "l": 21,
    }
    assert "TeamID=1610612738" in transport.urls[0]


def test_draft_history_all_years(make_api):
    drafts = envelope(result_set("DraftHistory", ["PERSON_ID"], []))
    api, transport = make_api({"drafthistory?": drafts})
    assert run_sync(lambda client: client.get_draft_history(), api) == []
    assert "Season" not in _query(transport.urls[0])


def test_injected_transport_is_not_closed(make_api):
    api, transport = make_api({})

    async def _use():
        async with api:
            pass

    asyncio.run(_use())
    assert not transport.closed


def test_reference_lookups():
    api = NbaAPI()
    assert len(api.get_teams()) == 30
    assert api.find_team_by_abbreviation("MIA").id == 1610612748
    assert api.find_teams_by_name("Heat")[0].abbreviation == "MIA"
    assert api.get_players() == []
