import asyncio
import csv
import json

import pandas as pd
import polars as pl
import pytest

from scrapernba.core.utils import (
    escape_csv_value,
    is_tabular,
    json_normalize,
    random_delay,
    random_pause,
    read_from_file,
    stamp_records,
    write_to_file,
)


def test_json_normalize_formats():
    rows = [{"playerId": 1, "pts": 10}, {"playerId": 2, "pts": None}]
    df = json_normalize(rows)
    assert isinstance(df, pd.DataFrame)
    assert list(df.columns) == ["playerId", "pts"]

    df = json_normalize(rows, "polars")
    assert isinstance(df, pl.DataFrame)
    assert df.height == 2

    with pytest.raises(ValueError):
        json_normalize(rows, "arrow")


def test_escape_csv_value():
    assert escape_csv_value("=SUM(A1)") == "'=SUM(A1)"
    assert escape_csv_value("+1") == "'+1"
    assert escape_csv_value("-5") == "'-5"
    assert escape_csv_value("@cmd") == "'@cmd"
    assert escape_csv_value("LeBron") == "LeBron"
    assert escape_csv_value(-5) == -5
    assert escape_csv_value(None) is None


def test_write_csv_escapes_formulas(tmp_path):
    path = write_to_file([{"player": "=HYPERLINK()", "pts": 30}], tmp_path / "out" / "rows.csv")
    with path.open(newline="") as f:
        rows = list(csv.DictReader(f))
    assert rows == [{"player": "'=HYPERLINK()", "pts": "30"}]


def test_write_csv_from_polars(tmp_path):
    path = write_to_file(pl.DataFrame({"a": [1, 2]}), tmp_path / "a.csv", "csv")
    assert path.read_text().splitlines() == ["a", "1", "2"]


def test_write_csv_rejects_nested_results(tmp_path):
    with pytest.raises(ValueError):
        write_to_file({"games": []}, tmp_path / "scoreboard.csv")


def test_write_and_read_json(tmp_path):
    data = {"gameId": "0022400001", "playerStats": [{"pts": 30}]}
    path = write_to_file(data, tmp_path / "nested" / "box.json")
    assert json.loads(path.read_text()) == data
    assert read_from_file(path) == data


def test_write_json_from_dataframe(tmp_path):
    path = write_to_file(pd.DataFrame([{"a": 1}]), tmp_path / "df.json", "json")
    assert read_from_file(path) == [{"a": 1}]


def test_write_invalid_format(tmp_path):
    with pytest.raises(ValueError):
        write_to_file([], tmp_path / "x.xlsx", "xlsx")


def test_read_text_file(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("hello")
    assert read_from_file(path) == "hello"


def test_is_tabular():
    assert is_tabular([{"a": 1}])
    assert is_tabular([])
    assert is_tabular(pd.DataFrame())
    assert not is_tabular({"games": []})
    assert not is_tabular([1, 2])


def test_random_delay_bounds():
    for _ in range(20):
        assert 0.1 <= random_delay(0.1, 0.2) <= 0.2
    assert random_delay(0, 0) == 0
    with pytest.raises(ValueError):
        random_delay(2, 1)


def test_random_pause_zero():
    assert asyncio.run(random_pause(0, 0)) == 0


def test_stamp_records():
    original = [{"a": 1}]
    stamped = stamp_records(original, "NBA Stats test")
    assert stamped[0]["a"] == 1
    assert stamped[0]["source"] == "NBA Stats test"
    assert "scrapedOn" in stamped[0]
    assert "source" not in original[0]
