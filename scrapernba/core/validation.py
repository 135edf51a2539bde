"""validation.py : Checks applied to caller arguments before any request is made."""

from datetime import datetime
from typing import Any, Iterable

from scrapernba.config import (
    DATE_PATTERN,
    GAME_ID_PATTERN,
    NBA_FOUNDING_YEAR,
    SEASON_PATTERN,
)
from scrapernba.core.errors import ValidationInputError


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def validate_player_id(player_id: Any) -> None:
    if not _is_positive_int(player_id):
        raise ValidationInputError(f"Invalid player ID: {player_id!r}. Must be a positive integer.")


def validate_team_id(team_id: Any) -> None:
    if not _is_positive_int(team_id):
        raise ValidationInputError(f"Invalid team ID: {team_id!r}. Must be a positive integer.")


def validate_game_id(game_id: Any) -> None:
    """NBA game IDs are 10-digit strings, e.g. '0022400001'."""
    if not isinstance(game_id, str) or not GAME_ID_PATTERN.fullmatch(game_id):
        raise ValidationInputError(
            f'Invalid game ID: {game_id!r}. Must be a 10-digit string (e.g., "0022400001").'
        )


def validate_date(value: Any) -> None:
    if not isinstance(value, str) or not DATE_PATTERN.fullmatch(value):
        raise ValidationInputError(f"Invalid date format: {value!r}. Expected format: YYYY-MM-DD")
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError as e:
        raise ValidationInputError(f"Invalid date: {value}") from e


def validate_season(season: Any) -> None:
    """
    Validate a 'YYYY-YY' season string.

    The two-digit suffix must equal (start year + 1) % 100, the start year
    cannot precede the league's founding and cannot be more than a year ahead.
    """
    if not isinstance(season, str) or not SEASON_PATTERN.fullmatch(season):
        raise ValidationInputError(
            f"Invalid season format: {season!r}. Expected format: YYYY-YY (e.g., 2024-25)"
        )

    start_year = int(season[:4])
    expected_suffix = (start_year + 1) % 100
    if int(season[5:]) != expected_suffix:
        raise ValidationInputError(
            f"Invalid season: {season}. End year suffix should be {expected_suffix:02d}"
        )

    if start_year < NBA_FOUNDING_YEAR:
        raise ValidationInputError(f"Season {season} is before NBA founding year ({NBA_FOUNDING_YEAR})")

    if start_year > datetime.now().year + 1:
        raise ValidationInputError(f"Season {season} is in the future")


def validate_enum(value: Any, allowed: Iterable[str], param_name: str) -> None:
    allowed = list(allowed)
    if value not in allowed:
        raise ValidationInputError(
            f'Invalid {param_name}: "{value}". Allowed values: {", ".join(allowed)}'
        )
