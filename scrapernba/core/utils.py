"""utils.py : Utility functions for NBA data scraping."""

import asyncio
import json
import random
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Union

import pandas as pd
import polars as pl

from scrapernba.config import RATE_LIMIT_MAX_SECONDS, RATE_LIMIT_MIN_SECONDS

# Leading characters a spreadsheet would evaluate as a formula
FORMULA_PREFIXES = ("=", "+", "-", "@", "\t", "\r")


def json_normalize(data: List[Dict], output_format: str = "pandas") -> pd.DataFrame | pl.DataFrame:
    """
    Normalize flat row dicts to a table.

    Parameters:
    - data (List[Dict]): List of dictionaries to normalize.
    - output_format (str): One of ["pandas", "polars"]

    Returns:
    - pd.DataFrame or pl.DataFrame: Normalized data in the specified format.
    """
    if output_format == "pandas":
        return pd.json_normalize(data)
    elif output_format == "polars":
        return pl.DataFrame(data, infer_schema_length=None)
    else:
        raise ValueError(f"Invalid output_format: {output_format}. Use 'pandas' or 'polars'.")


def escape_csv_value(value: Any) -> Any:
    """Prefix a quote to strings a spreadsheet would run as a formula."""
    if isinstance(value, str) and value.startswith(FORMULA_PREFIXES):
        return "'" + value
    return value


def _to_pandas(data: Any) -> pd.DataFrame:
    if isinstance(data, pd.DataFrame):
        return data
    if isinstance(data, pl.DataFrame):
        return pd.DataFrame(data.to_dicts())
    if isinstance(data, list) and all(isinstance(row, dict) for row in data):
        return pd.DataFrame.from_records(data)
    raise ValueError("CSV output needs a DataFrame or a list of row dicts")


def is_tabular(data: Any) -> bool:
    return isinstance(data, (pd.DataFrame, pl.DataFrame)) or (
        isinstance(data, list) and all(isinstance(row, dict) for row in data)
    )


def write_to_file(data: Any, path: Union[str, Path], fmt: str = "auto") -> Path:
    """
    Write rows, a DataFrame or any JSON-able object to disk.

    fmt is "csv", "json" or "auto" (chosen from the file suffix). Parent
    directories are created as needed.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    if fmt == "auto":
        fmt = "csv" if path.suffix.lower() == ".csv" else "json"

    if fmt == "csv":
        df = _to_pandas(data)
        df = df.apply(lambda col: col.map(escape_csv_value))
        df.to_csv(path, index=False)
    elif fmt == "json":
        if isinstance(data, pd.DataFrame):
            data = data.to_dict(orient="records")
        elif isinstance(data, pl.DataFrame):
            data = data.to_dicts()
        with path.open("w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, default=str)
    else:
        raise ValueError(f"Invalid format: {fmt}. Use 'csv', 'json' or 'auto'.")
    return path


def read_from_file(path: Union[str, Path]) -> Any:
    """Read a .json file back into Python objects; any other file is returned as text."""
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        return json.loads(text)
    return text


def random_delay(min_seconds: float = RATE_LIMIT_MIN_SECONDS, max_seconds: float = RATE_LIMIT_MAX_SECONDS) -> float:
    """Pick a delay in seconds, uniformly within [min_seconds, max_seconds]."""
    if min_seconds > max_seconds:
        raise ValueError(f"min_seconds ({min_seconds}) cannot exceed max_seconds ({max_seconds})")
    return random.uniform(min_seconds, max_seconds)


async def random_pause(min_seconds: float = RATE_LIMIT_MIN_SECONDS,
                       max_seconds: float = RATE_LIMIT_MAX_SECONDS) -> float:
    """Sleep for a random delay between calls; returns the seconds slept."""
    delay = random_delay(min_seconds, max_seconds)
    await asyncio.sleep(delay)
    return delay


def stamp_records(records: List[Dict], source: str) -> List[Dict]:
    """Copy each record, adding scrapedOn (UTC ISO timestamp) and source."""
    now = datetime.now(timezone.utc).isoformat()
    return [{**record, "scrapedOn": now, "source": source} for record in records if isinstance(record, dict)]
