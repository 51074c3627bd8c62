# src/crewbattle/matchups.py
from __future__ import annotations

"""
Pairwise win probabilities between the two rosters.

Entry (i, j) of the matrix is the probability that team1's i-th member beats
team2's j-th member; team2's probability is the complement.
"""

from dataclasses import dataclass, field
from typing import Dict, Sequence, Tuple

import numpy as np
import pandas as pd

from crewbattle.models import TEAM1


class ProbabilityTableError(ValueError):
    """Matrix shape or values are unusable."""


def matchup_roles(turn: int, opponent: str, candidate: str) -> Tuple[str, str]:
    """
    Map a counterpick onto fixed matrix orientation.
    Returns (team1_player, team2_player) whichever team is acting.
    """
    if turn == TEAM1:
        return candidate, opponent
    return opponent, candidate


def _first_index(members: Sequence[str]) -> Dict[str, int]:
    idx: Dict[str, int] = {}
    for i, name in enumerate(members):
        idx.setdefault(name, i)
    return idx


@dataclass(frozen=True, eq=False)
class MatchupTable:
    members1: Tuple[str, ...]
    members2: Tuple[str, ...]
    probs: np.ndarray
    _index1: Dict[str, int] = field(init=False, repr=False, compare=False)
    _index2: Dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        probs = np.array(self.probs, dtype=float)
        expected = (len(self.members1), len(self.members2))
        if probs.ndim != 2 or probs.shape != expected:
            raise ProbabilityTableError(
                f"Probability table has shape {probs.shape}, expected {expected} (team1 x team2 roster)"
            )
        named = np.ix_([bool(n) for n in self.members1], [bool(n) for n in self.members2])
        if np.isnan(probs[named]).any():
            raise ProbabilityTableError("Probability table contains empty or non-numeric entries for named players")
        bad = np.argwhere((probs < 0.0) | (probs > 1.0))
        if bad.size:
            i, j = bad[0]
            raise ProbabilityTableError(
                f"Probability {probs[i, j]} for {self.members1[i]} vs {self.members2[j]} is outside [0, 1]"
            )
        probs.setflags(write=False)
        object.__setattr__(self, "probs", probs)
        object.__setattr__(self, "_index1", _first_index(self.members1))
        object.__setattr__(self, "_index2", _first_index(self.members2))

    @classmethod
    def from_rows(cls, members1: Sequence[str], members2: Sequence[str], rows) -> "MatchupTable":
        """
        Build from a nested sequence (e.g. a spreadsheet range). Cells are coerced one by
        one, so blank strings become NaN and only fail validation in named rows/columns.
        """
        members1, members2 = tuple(members1), tuple(members2)
        try:
            frame = pd.DataFrame(rows if rows is not None else [])
        except (TypeError, ValueError) as e:
            raise ProbabilityTableError(f"Probability table is not numeric: {e}") from e
        if frame.size == 0 and (not members1 or not members2):
            # a team with no roster has no matchups to look up
            probs = np.zeros((len(members1), len(members2)))
        else:
            probs = frame.apply(pd.to_numeric, errors="coerce").to_numpy(dtype=float)
        return cls(members1=members1, members2=members2, probs=probs)

    def win_probability(self, team1_player: str, team2_player: str) -> float:
        """P(team1_player beats team2_player)."""
        return float(self.probs[self._index1[team1_player], self._index2[team2_player]])
