"""normalize.py : Turn stats.nba.com tabular result sets into lists of camelCase rows."""

import re
from typing import Any, Dict, List, Mapping

_UNDERSCORE_LETTER = re.compile(r"_([a-z])")


def to_camel_case(token: str) -> str:
    """
    Convert an UPPER_SNAKE_CASE column name to camelCase.

    The whole token is lowercased first, so mixed-case input is flattened:
    'PLAYER_ID' -> 'playerId', 'AST' -> 'ast', 'TeamCity' -> 'teamcity'.
    """
    return _UNDERSCORE_LETTER.sub(lambda m: m.group(1).upper(), token.lower())


def normalize_keys(row: Mapping[str, Any]) -> Dict[str, Any]:
    """Rename every key of a flat row through to_camel_case. Values are untouched."""
    return {to_camel_case(key): value for key, value in row.items()}


def normalize_result_set(result_set: Mapping[str, Any]) -> List[Dict[str, Any]]:
    """
    Zip a result set's headers with each of its rows.

    Rows keep their input order. Empty header names are skipped, and a row
    shorter than the header list simply lacks the trailing keys.
    """
    headers = result_set.get("headers") or []
    rows = []
    for values in result_set.get("rowSet") or []:
        rows.append({
            header: values[i]
            for i, header in enumerate(headers)
            if header and i < len(values)
        })
    return rows


def normalize_response(raw: Any) -> Dict[str, List[Dict[str, Any]]]:
    """
    Normalize a standard envelope into {result set name: rows}.

    Handles 'resultSets' (list) and 'resultSet' (object or list). Anything
    else yields an empty dict: the payload is not a standard envelope.
    """
    normalized: Dict[str, List[Dict[str, Any]]] = {}
    if not isinstance(raw, Mapping):
        return normalized

    result_sets = raw.get("resultSets")
    if isinstance(result_sets, list):
        pass
    elif raw.get("resultSet"):
        result_sets = raw["resultSet"]
        if not isinstance(result_sets, list):
            result_sets = [result_sets]
    else:
        return normalized

    for result_set in result_sets:
        if isinstance(result_set, Mapping):
            normalized[result_set.get("name")] = normalize_result_set(result_set)
    return normalized
