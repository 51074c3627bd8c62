# src/crewbattle/loaders.py
from __future__ import annotations

"""
CSV loaders for rosters and the probability table.

Roster CSV:  columns `available,name` (header names are matched case-insensitively;
             'avail' / 'player' also accepted). One player per row.
Matrix CSV:  first column = team1 player names, header = team2 player names.
"""

from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from crewbattle.matchups import ProbabilityTableError
from crewbattle.roster import RosterFormatError

TRUTHY = {"1", "true", "yes", "y", "x", "t"}


def _coalesce(columns: Dict[str, str], keys: List[str]) -> Optional[str]:
    for k in keys:
        if k in columns:
            return columns[k]
    return None


def _to_flag(x) -> bool:
    if x is None:
        return False
    if isinstance(x, float) and np.isnan(x):
        return False
    return str(x).strip().lower() in TRUTHY


def load_team_rows(path: str) -> List[Tuple[bool, str]]:
    """Read a roster CSV into (available, name) rows, in file order."""
    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    columns = {str(c).strip().lower(): c for c in df.columns}
    avail_col = _coalesce(columns, ["available", "avail", "is_available"])
    name_col = _coalesce(columns, ["name", "player", "player_name"])
    if avail_col is None or name_col is None:
        raise RosterFormatError(f"{path}: expected 'available' and 'name' columns, got {list(df.columns)}")
    return [(_to_flag(a), str(n).strip()) for a, n in zip(df[avail_col], df[name_col])]


def align_probability_frame(
    frame: pd.DataFrame,
    members1: Sequence[str],
    members2: Sequence[str],
) -> np.ndarray:
    """
    Reorder a labeled matrix to member-list order when its labels cover both rosters;
    otherwise take it positionally.
    """
    index = [str(i).strip() for i in frame.index]
    cols = [str(c).strip() for c in frame.columns]
    frame = frame.copy()
    frame.index, frame.columns = index, cols
    named1 = {m for m in members1 if m}
    named2 = {m for m in members2 if m}
    if named1 <= set(index) and named2 <= set(cols):
        frame = frame.loc[~frame.index.duplicated(), ~frame.columns.duplicated()]
        frame = frame.reindex(index=list(members1), columns=list(members2))
    try:
        return frame.apply(pd.to_numeric, errors="coerce").to_numpy(dtype=float)
    except (TypeError, ValueError) as e:
        raise ProbabilityTableError(f"Probability table is not numeric: {e}") from e


def load_probability_table(path: str, members1: Sequence[str], members2: Sequence[str]) -> np.ndarray:
    frame = pd.read_csv(path, index_col=0)
    return align_probability_frame(frame, members1, members2)
