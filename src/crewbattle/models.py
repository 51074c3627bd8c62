# src/crewbattle/models.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, List, Optional, Tuple


# -----------------------------
# Core enums & type aliases
# -----------------------------

Pool = Tuple[str, ...]
Pools = Tuple[Pool, Pool]

TEAM1 = 0
TEAM2 = 1

SUCCESS = "SUCCESS"


class Verbosity(IntEnum):
    QUIET = 0
    SUMMARY = 1
    DEBUG = 2
    TRACE = 3


# -----------------------------
# Rosters
# -----------------------------

@dataclass(frozen=True)
class Roster:
    """
    Validated team data.

    members:
        Full ordered roster (available or not). Only used to resolve a name
        to a row/column of the probability matrix.
    pool:
        Names marked available, in roster order.
    """
    team_idx: int
    members: Tuple[str, ...]
    pool: Pool

    @property
    def label(self) -> str:
        return f"Team {self.team_idx + 1}"


# -----------------------------
# Game state
# -----------------------------

@dataclass(frozen=True)
class GameState:
    """
    Minimal data needed to resume the search.

    - pools: remaining players per team (team1, team2)
    - turn: 0-based index of the team about to act
    - opponent: player already committed by the other team, or "" for an open pick
    """
    pools: Pools
    turn: int
    opponent: str = ""

    @property
    def pool1(self) -> Pool:
        return self.pools[TEAM1]

    @property
    def pool2(self) -> Pool:
        return self.pools[TEAM2]

    def acting_pool(self) -> Pool:
        return self.pools[self.turn]

    def is_open_pick(self) -> bool:
        return not self.opponent

    def is_terminal(self) -> bool:
        """An open pick with an exhausted pool on either side ends the battle."""
        return self.is_open_pick() and (not self.pool1 or not self.pool2)

    def forfeit_tally(self) -> int:
        return len(self.pool1)

    def _pools_without(self, candidate: str) -> Pools:
        trimmed = tuple(name for name in self.pools[self.turn] if name != candidate)
        if self.turn == TEAM1:
            return (trimmed, self.pool2)
        return (self.pool1, trimmed)

    def after_commit(self, candidate: str) -> "GameState":
        """Acting team sends `candidate` first; the other team must counter."""
        return GameState(pools=self._pools_without(candidate), turn=1 - self.turn, opponent=candidate)

    def after_match(self, candidate: str, winner: int) -> "GameState":
        """Acting team counters with `candidate`; the match winner picks next."""
        return GameState(pools=self._pools_without(candidate), turn=winner, opponent="")

    def cache_key(self) -> Tuple[Pool, Pool, int, str]:
        return (self.pool1, self.pool2, self.turn, self.opponent)


# -----------------------------
# Search bookkeeping
# -----------------------------

@dataclass
class SearchMetrics:
    max_depth: int = 0
    nodes: int = 0
    elapsed: float = 0.0

    def visit(self, depth: int) -> None:
        self.nodes += 1
        if depth > self.max_depth:
            self.max_depth = depth


@dataclass
class CandidateRow:
    """
    One root-level choice for the acting team.
    `score` is in expected-sets-won-by-team1 units; rank/loss are filled in by ranking.
    """
    name: str
    score: float
    rank: Optional[int] = None
    loss: Optional[float] = None
    win_branch: Optional[float] = None     # counterpick roots only: value if team1 wins the set
    loss_branch: Optional[float] = None    # counterpick roots only: value if team2 wins the set
    probability: Optional[float] = None    # counterpick roots only: team1 win probability


@dataclass
class SearchContext:
    """
    Per-analysis accumulator threaded through the recursion.
    A fresh context per top-level call keeps metrics and root picks independent.
    """
    metrics: SearchMetrics = field(default_factory=SearchMetrics)
    picks: List[CandidateRow] = field(default_factory=list)
    cache: Optional[Dict[Tuple[Pool, Pool, int, str], float]] = None


# -----------------------------
# Engine configuration
# -----------------------------

@dataclass(frozen=True)
class EngineParams:
    """
    - memoize: reuse values of identical (pool1, pool2, turn, opponent) states.
      Values and rankings are unchanged; only node counts drop.
    - verbosity: console printing level.
    """
    memoize: bool = False
    verbosity: Verbosity = Verbosity.QUIET


# -----------------------------
# Analysis output
# -----------------------------

@dataclass
class AnalysisResult:
    status: str
    rosters: Tuple[Optional[Roster], Optional[Roster]] = (None, None)
    turn: int = TEAM1
    opponent: str = ""
    note: str = ""
    overall: Optional[float] = None
    metrics: SearchMetrics = field(default_factory=SearchMetrics)
    picks: List[CandidateRow] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status == SUCCESS

    def best(self) -> Optional[CandidateRow]:
        return self.picks[0] if self.picks else None
