# src/crewbattle/roster.py
from __future__ import annotations

"""
Roster validation: raw team rows -> member lists and available pools.

Raw rows are (available, name) pairs. The spreadsheet layout this tool grew out
of stores one player on every other row, so callers reading that layout pass
row_step=2; CSV rosters use row_step=1.
"""

from typing import Iterable, List, Sequence, Tuple

from crewbattle.models import Roster


class RosterError(ValueError):
    """Base class for input problems that stop an analysis before the search."""


class EmptyNameError(RosterError):
    def __init__(self):
        super().__init__("A player with empty name has been marked available")


class OpponentAvailableError(RosterError):
    def __init__(self, name: str):
        super().__init__(
            f"The player {name} is marked as available, but has already been sent as the opponent"
        )


class DuplicatePlayerError(RosterError):
    def __init__(self, name: str, team_idx: int):
        super().__init__(f"Duplicate player {name} in Team {team_idx + 1}'s player pool")


class UnknownOpponentError(RosterError):
    def __init__(self, name: str):
        super().__init__(f"Opponent {name} is not a member of the opposing team")


class InvalidTurnError(RosterError):
    def __init__(self, turn):
        super().__init__(f"Turn must be 1 or 2, got {turn!r}")


class NoCounterpickError(RosterError):
    def __init__(self, team_idx: int, opponent: str):
        super().__init__(f"Team {team_idx + 1} has no available players to counterpick against {opponent}")


class RosterFormatError(RosterError):
    """A roster file without the expected columns."""


def _clean_name(name) -> str:
    if name is None:
        return ""
    return str(name).strip()


def build_roster(
    team_idx: int,
    rows: Sequence[Tuple[object, object]],
    opponent: str = "",
    row_step: int = 1,
) -> Roster:
    """
    Validate one team's rows. Unavailable rows only contribute to `members`.
    Raises a RosterError subclass on the first problem found.
    """
    members: List[str] = []
    pool: List[str] = []
    seen = set()
    for row in range(0, len(rows), row_step):
        is_available, raw_name = rows[row]
        name = _clean_name(raw_name)
        members.append(name)
        if not is_available:
            continue
        if not name:
            raise EmptyNameError()
        if name == opponent:
            raise OpponentAvailableError(name)
        if name in seen:
            raise DuplicatePlayerError(name, team_idx)
        seen.add(name)
        pool.append(name)
    return Roster(team_idx=team_idx, members=tuple(members), pool=tuple(pool))


def parse_turn(turn) -> int:
    """1-based team number -> 0-based index."""
    try:
        t = int(turn)
    except (TypeError, ValueError):
        raise InvalidTurnError(turn) from None
    if t not in (1, 2):
        raise InvalidTurnError(turn)
    return t - 1


def validate_rosters(
    teams: Iterable[Sequence[Tuple[object, object]]],
    turn,
    opponent: str = "",
    row_step: int = 1,
) -> Tuple[Tuple[Roster, Roster], int, str]:
    """
    Validate both teams plus the turn/opponent pair.
    Returns ((roster1, roster2), turn_idx, opponent) with turn_idx 0-based.
    """
    opponent = _clean_name(opponent)
    turn_idx = parse_turn(turn)
    rosters = tuple(
        build_roster(t, rows, opponent=opponent, row_step=row_step)
        for t, rows in enumerate(teams)
    )
    if len(rosters) != 2:
        raise RosterError(f"Expected exactly 2 teams, got {len(rosters)}")

    if opponent:
        if opponent not in rosters[1 - turn_idx].members:
            raise UnknownOpponentError(opponent)
        if not rosters[turn_idx].pool:
            raise NoCounterpickError(turn_idx, opponent)
    return (rosters[0], rosters[1]), turn_idx, opponent
