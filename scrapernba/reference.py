"""
reference.py : Static NBA reference data (teams, players) for offline lookups.

ReferenceData is built once and passed to whatever needs lookups; nothing
here is module-level mutable state. Tests hand in their own fixtures.
"""

import json
import logging
import re
import unicodedata
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from scrapernba.core.errors import NotFoundError, ValidationInputError

LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class Team:
    id: int
    abbreviation: str
    nickname: str
    year_founded: int
    city: str
    full_name: str
    state: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "abbreviation": self.abbreviation,
            "nickname": self.nickname,
            "yearFounded": self.year_founded,
            "city": self.city,
            "fullName": self.full_name,
            "state": self.state,
        }


@dataclass(frozen=True)
class Player:
    id: int
    full_name: str
    first_name: str
    last_name: str
    is_active: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "fullName": self.full_name,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "isActive": self.is_active,
        }


# id, abbreviation, nickname, year founded, city, full name, state
NBA_TEAMS: Tuple[Tuple[int, str, str, int, str, str, str], ...] = (
    (1610612737, "ATL", "Hawks", 1949, "Atlanta", "Atlanta Hawks", "Georgia"),
    (1610612738, "BOS", "Celtics", 1946, "Boston", "Boston Celtics", "Massachusetts"),
    (1610612739, "CLE", "Cavaliers", 1970, "Cleveland", "Cleveland Cavaliers", "Ohio"),
    (1610612740, "NOP", "Pelicans", 2002, "New Orleans", "New Orleans Pelicans", "Louisiana"),
    (1610612741, "CHI", "Bulls", 1966, "Chicago", "Chicago Bulls", "Illinois"),
    (1610612742, "DAL", "Mavericks", 1980, "Dallas", "Dallas Mavericks", "Texas"),
    (1610612743, "DEN", "Nuggets", 1976, "Denver", "Denver Nuggets", "Colorado"),
    (1610612744, "GSW", "Warriors", 1946, "San Francisco", "Golden State Warriors", "California"),
    (1610612745, "HOU", "Rockets", 1967, "Houston", "Houston Rockets", "Texas"),
    (1610612746, "LAC", "Clippers", 1970, "Los Angeles", "Los Angeles Clippers", "California"),
    (1610612747, "LAL", "Lakers", 1948, "Los Angeles", "Los Angeles Lakers", "California"),
    (1610612748, "MIA", "Heat", 1988, "Miami", "Miami Heat", "Florida"),
    (1610612749, "MIL", "Bucks", 1968, "Milwaukee", "Milwaukee Bucks", "Wisconsin"),
    (1610612750, "MIN", "Timberwolves", 1989, "Minnesota", "Minnesota Timberwolves", "Minnesota"),
    (1610612751, "BKN", "Nets", 1976, "Brooklyn", "Brooklyn Nets", "New York"),
    (1610612752, "NYK", "Knicks", 1946, "New York", "New York Knicks", "New York"),
    (1610612753, "ORL", "Magic", 1989, "Orlando", "Orlando Magic", "Florida"),
    (1610612754, "IND", "Pacers", 1976, "Indiana", "Indiana Pacers", "Indiana"),
    (1610612755, "PHI", "76ers", 1949, "Philadelphia", "Philadelphia 76ers", "Pennsylvania"),
    (1610612756, "PHX", "Suns", 1968, "Phoenix", "Phoenix Suns", "Arizona"),
    (1610612757, "POR", "Trail Blazers", 1970, "Portland", "Portland Trail Blazers", "Oregon"),
    (1610612758, "SAC", "Kings", 1948, "Sacramento", "Sacramento Kings", "California"),
    (1610612759, "SAS", "Spurs", 1976, "San Antonio", "San Antonio Spurs", "Texas"),
    (1610612760, "OKC", "Thunder", 1967, "Oklahoma City", "Oklahoma City Thunder", "Oklahoma"),
    (1610612761, "TOR", "Raptors", 1995, "Toronto", "Toronto Raptors", "Ontario"),
    (1610612762, "UTA", "Jazz", 1974, "Utah", "Utah Jazz", "Utah"),
    (1610612763, "MEM", "Grizzlies", 1995, "Memphis", "Memphis Grizzlies", "Tennessee"),
    (1610612764, "WAS", "Wizards", 1961, "Washington", "Washington Wizards", "District of Columbia"),
    (1610612765, "DET", "Pistons", 1948, "Detroit", "Detroit Pistons", "Michigan"),
    (1610612766, "CHA", "Hornets", 1988, "Charlotte", "Charlotte Hornets", "North Carolina"),
)


def _ascii(text: str) -> str:
    """Strip accents so 'Jokic' finds 'Jokić'."""
    return unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")


def _search(pattern: str) -> re.Pattern:
    try:
        return re.compile(pattern, re.IGNORECASE)
    except re.error as e:
        raise ValidationInputError(f"Invalid search pattern {pattern!r}: {e}") from e


def _team_from_dict(record: Dict[str, Any]) -> Team:
    return Team(
        id=int(record["id"]),
        abbreviation=record["abbreviation"],
        nickname=record["nickname"],
        year_founded=int(record["yearFounded"]),
        city=record["city"],
        full_name=record["fullName"],
        state=record["state"],
    )


def _player_from_dict(record: Dict[str, Any]) -> Player:
    return Player(
        id=int(record["id"]),
        full_name=record["fullName"],
        first_name=record.get("firstName", ""),
        last_name=record.get("lastName", ""),
        is_active=bool(record.get("isActive", False)),
    )


class ReferenceData:
    """Immutable team and player tables with lookup helpers."""

    def __init__(self, teams: Iterable[Team] = (), players: Iterable[Player] = ()):
        self._teams: Tuple[Team, ...] = tuple(teams)
        self._players: Tuple[Player, ...] = tuple(players)

    @classmethod
    def default(cls) -> "ReferenceData":
        """The 30 current NBA teams; no player table."""
        return cls(teams=(Team(*row) for row in NBA_TEAMS))

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "ReferenceData":
        """
        Load {"teams": [...], "players": [...]} from a JSON file.

        Records use camelCase keys (fullName, yearFounded, isActive). When the
        file has no "teams" list the bundled team table is used.
        """
        with Path(path).open(encoding="utf-8") as f:
            payload = json.load(f)

        teams = payload.get("teams")
        players = payload.get("players") or []
        data = cls(
            teams=[_team_from_dict(t) for t in teams] if teams else cls.default().teams,
            players=[_player_from_dict(p) for p in players],
        )
        LOG.info(f"Loaded reference data from {path}: {len(data.teams)} teams, {len(data.players)} players")
        return data

    @property
    def teams(self) -> Tuple[Team, ...]:
        return self._teams

    @property
    def players(self) -> Tuple[Player, ...]:
        return self._players

    # Teams

    def find_team_by_id(self, team_id: int) -> Optional[Team]:
        return next((t for t in self._teams if t.id == team_id), None)

    def find_team_by_abbreviation(self, abbreviation: str) -> Optional[Team]:
        upper = abbreviation.upper()
        return next((t for t in self._teams if t.abbreviation == upper), None)

    def find_teams_by_name(self, pattern: str) -> List[Team]:
        """Regex (case-insensitive) over full name, nickname and city."""
        regex = _search(pattern)
        return [
            t for t in self._teams
            if regex.search(t.full_name) or regex.search(t.nickname) or regex.search(t.city)
        ]

    def find_teams_by_city(self, city: str) -> List[Team]:
        regex = _search(city)
        return [t for t in self._teams if regex.search(t.city)]

    def find_teams_by_state(self, state: str) -> List[Team]:
        regex = _search(state)
        return [t for t in self._teams if regex.search(t.state)]

    def team_ids(self) -> List[int]:
        return [t.id for t in self._teams]

    def team_abbreviations(self) -> List[str]:
        return [t.abbreviation for t in self._teams]

    def resolve_team_id(self, team: Union[int, str]) -> int:
        """
        Turn a team id, abbreviation or name into a team id.

        Integers pass through untouched. Strings are tried as a numeric id,
        an abbreviation, then an exact full name / nickname / city, then a
        name search that must match exactly one team.
        """
        if isinstance(team, int) and not isinstance(team, bool):
            return team
        if not isinstance(team, str) or not team.strip():
            raise ValidationInputError(f"Invalid team: {team!r}. Use a team ID, abbreviation or name.")

        text = team.strip()
        if text.isdigit():
            return int(text)

        found = self.find_team_by_abbreviation(text)
        if found:
            return found.id

        lowered = text.lower()
        exact = [
            t for t in self._teams
            if lowered in (t.full_name.lower(), t.nickname.lower(), t.city.lower())
        ]
        matches = exact or self.find_teams_by_name(re.escape(text))
        if len(matches) == 1:
            return matches[0].id
        if not matches:
            raise NotFoundError(f"Team not found: {team}", identifier=team)
        raise ValidationInputError(
            f"Ambiguous team {team!r}: matches {', '.join(t.abbreviation for t in matches)}"
        )

    # Players

    def find_player_by_id(self, player_id: int) -> Optional[Player]:
        return next((p for p in self._players if p.id == player_id), None)

    def find_players_by_name(self, pattern: str) -> List[Player]:
        """Regex (case-insensitive, accent-insensitive) over full, first and last name."""
        regex = _search(_ascii(pattern))
        return [
            p for p in self._players
            if regex.search(_ascii(p.full_name))
            or regex.search(_ascii(p.first_name))
            or regex.search(_ascii(p.last_name))
        ]

    def active_players(self) -> List[Player]:
        return [p for p in self._players if p.is_active]

    def inactive_players(self) -> List[Player]:
        return [p for p in self._players if not p.is_active]


def teams_table(reference: ReferenceData) -> List[Dict[str, Any]]:
    """Team records as camelCase dicts, ready for file output."""
    return [team.to_dict() for team in reference.teams]
