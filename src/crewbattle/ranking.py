# src/crewbattle/ranking.py
from __future__ import annotations

from typing import List

import pandas as pd

from crewbattle.models import TEAM1, CandidateRow


def rank_candidates(picks: List[CandidateRow], turn: int, overall: float) -> List[CandidateRow]:
    """
    Best move for the acting team first: descending score for team1, ascending for team2.
    The sort is stable, so tied candidates stay in roster order.
    Fills in rank (1-based) and loss = |score - overall|.
    """
    ranked = sorted(picks, key=lambda r: r.score, reverse=(turn == TEAM1))
    for i, row in enumerate(ranked, start=1):
        row.rank = i
        row.loss = abs(row.score - overall)
    return ranked


def ranking_frame(picks: List[CandidateRow]) -> pd.DataFrame:
    """Ranked picks as a table with columns rank, player, eval, loss."""
    return pd.DataFrame(
        {
            "rank": [r.rank for r in picks],
            "player": [r.name for r in picks],
            "eval": [r.score for r in picks],
            "loss": [r.loss for r in picks],
        },
        columns=["rank", "player", "eval", "loss"],
    )
