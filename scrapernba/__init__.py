"""
ScraperNBA - typed client for the NBA stats and live data APIs.

    from scrapernba import NbaAPI

    async with NbaAPI() as api:
        standings = await api.get_league_standings("2024-25")

DataFrame scrapers live in scrapernba.scrapers (pandas/polars are only
imported from there).
"""

from scrapernba.api import NbaAPI, run_sync
from scrapernba.core.errors import (
    NbaError,
    NetworkError,
    NotFoundError,
    SchemaValidationError,
    ValidationInputError,
)
from scrapernba.core.schemas import ValidationMode
from scrapernba.reference import Player, ReferenceData, Team

__version__ = "0.1.0"

__all__ = [
    "NbaAPI",
    "run_sync",
    "NbaError",
    "NetworkError",
    "NotFoundError",
    "SchemaValidationError",
    "ValidationInputError",
    "ValidationMode",
    "Player",
    "ReferenceData",
    "Team",
]
