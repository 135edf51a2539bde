import logging

import pytest

from scrapernba.core.errors import SchemaValidationError
from scrapernba.core.schemas import (
    BoxScorePlayerStats,
    LeagueLeader,
    ValidationMode,
    validate_lenient,
    validate_rows,
    validate_strict,
)


def _leader(**overrides):
    row = {"playerId": 2544, "rank": 1, "player": "LeBron James", "gp": 70, "pts": 27.1, "reb": 7}
    row.update(overrides)
    return row


def test_valid_rows_pass_through_unchanged():
    rows = [_leader(), _leader(playerId=201939, rank=2, teamExtra="kept")]
    result = validate_strict(LeagueLeader, rows)
    assert result == rows
    assert result[1]["teamExtra"] == "kept"


def test_ints_accepted_for_float_stats():
    validate_strict(LeagueLeader, [_leader(pts=27)])


def test_strict_raises_on_first_bad_row():
    rows = [_leader(), _leader(playerId="2544"), _leader(rank=None)]
    with pytest.raises(SchemaValidationError) as excinfo:
        validate_strict(LeagueLeader, rows)
    assert excinfo.value.shape == "LeagueLeader"
    assert excinfo.value.index == 1
    assert excinfo.value.row == rows[1]
    assert "playerId" in str(excinfo.value)


def test_lenient_logs_once_and_returns_everything(caplog):
    rows = [_leader(playerId="a"), _leader(), _leader(rank="b"), _leader(gp="c"), _leader(player=None)]
    with caplog.at_level(logging.WARNING, logger="scrapernba.core.schemas"):
        result = validate_lenient(LeagueLeader, rows)

    assert result == rows
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    message = warnings[0].getMessage()
    assert "LeagueLeader (4/5 rows)" in message
    assert "row 0" in message
    assert "row 2" in message
    assert "row 3" in message
    # only the first three issues are reported
    assert "row 4" not in message


def test_lenient_silent_when_valid(caplog):
    with caplog.at_level(logging.WARNING):
        validate_lenient(LeagueLeader, [_leader()])
    assert not caplog.records


def test_box_score_row_requires_string_game_id():
    row = {"gameId": 22400001, "teamId": 1, "playerId": 2, "playerName": "X"}
    with pytest.raises(SchemaValidationError):
        validate_strict(BoxScorePlayerStats, [row])


def test_minutes_accepts_clock_strings():
    row = {"gameId": "0022400001", "teamId": 1, "playerId": 2, "playerName": "X", "min": "36:12"}
    validate_strict(BoxScorePlayerStats, [row])


def test_invalid_mode():
    with pytest.raises(ValueError, match="validation mode"):
        validate_rows(LeagueLeader, [], "loose")


def test_empty_rows():
    assert validate_rows(LeagueLeader, [], ValidationMode.STRICT) == []
