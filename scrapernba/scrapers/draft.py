"""NBA draft data scrapers."""

from typing import Dict, List, Optional

import pandas as pd
import polars as pl

from scrapernba.api import NbaAPI, run_sync
from scrapernba.core.utils import json_normalize, stamp_records


def getDraftHistoryData(year: Optional[int] = None, round_number: Optional[int] = None,
                        api: Optional[NbaAPI] = None) -> List[Dict]:
    """
    Scrapes NBA draft picks.

    Parameters:
    - year (int, optional): Draft year (e.g., 2024). Every draft when omitted.
    - round_number (int, optional): Keep only picks from this round

    Returns:
    - List[Dict]: Draft records with metadata, in pick order
    """
    rows = run_sync(lambda client: client.get_draft_history(year), api)
    if round_number is not None:
        rows = [row for row in rows if row.get("roundNumber") == round_number]
    return stamp_records(rows, "NBA Stats drafthistory")


def scrapeDraftHistory(year: Optional[int] = None, round_number: Optional[int] = None, output_format: str = "pandas",
                       api: Optional[NbaAPI] = None) -> pd.DataFrame | pl.DataFrame:
    return json_normalize(getDraftHistoryData(year, round_number, api), output_format)
