# src/crewbattle/battle_engine.py
from __future__ import annotations

"""
CrewBattleEngine: exact evaluation of a two-team crew battle.

Game tree
---------
- Open pick (no opponent committed): the acting team sends any player from its pool;
  the other team then has counterpick against that player.
- Counterpick: the acting team answers the committed opponent. With p = P(team1 wins),
      value = p * (1 + V(open, team1 to act)) + (1 - p) * V(open, team2 to act)
  i.e. the winner of the set picks first for the next one.
- Terminal: an open pick with either pool empty. Team1's tally is |pool1|:
  each of its remaining players is a set team2 forfeits.

Team1 maximizes the expected number of sets it wins, team2 minimizes it.
Every root choice is recorded so callers get a full ranking, not just the best move.

Verbosity
---------
- 0 (QUIET): no printing
- 1 (SUMMARY): one line per analysis
- 2 (DEBUG): plus the ranked candidate table
- 3 (TRACE): plus the win/loss branch values behind each root counterpick
"""

import math
import time
from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple

from .matchups import MatchupTable, ProbabilityTableError, matchup_roles
from .models import (
    SUCCESS,
    TEAM1,
    TEAM2,
    AnalysisResult,
    CandidateRow,
    EngineParams,
    GameState,
    Roster,
    SearchContext,
    Verbosity,
)
from .ranking import rank_candidates
from .report import pick_note, print_analysis
from .roster import RosterError, validate_rosters


@dataclass
class CrewBattleEngine:
    params: EngineParams = field(default_factory=EngineParams)

    # ---------- Public API ----------

    def analyze(
        self,
        team1_rows: Sequence[Tuple[object, object]],
        team2_rows: Sequence[Tuple[object, object]],
        turn,
        opponent: str = "",
        probability_table=None,
        row_step: int = 1,
    ) -> AnalysisResult:
        """
        Validate raw rosters and the probability table, then analyze.
        `turn` is the 1-based number of the team about to act.
        Validation problems come back as an error status with no ranking data.
        """
        try:
            rosters, turn_idx, opponent = validate_rosters(
                (team1_rows, team2_rows), turn, opponent=opponent, row_step=row_step
            )
            table = MatchupTable.from_rows(rosters[TEAM1].members, rosters[TEAM2].members, probability_table)
        except (RosterError, ProbabilityTableError) as e:
            result = AnalysisResult(status=f"ERROR: {e}")
            if self.params.verbosity >= Verbosity.SUMMARY:
                print(result.status)
            return result
        return self.analyze_rosters(rosters, table, turn_idx, opponent)

    def analyze_rosters(
        self,
        rosters: Tuple[Roster, Roster],
        table: MatchupTable,
        turn: int,
        opponent: str = "",
    ) -> AnalysisResult:
        """Analyze already-validated rosters. `turn` is 0-based here."""
        start = time.perf_counter()
        state = GameState(pools=(rosters[TEAM1].pool, rosters[TEAM2].pool), turn=turn, opponent=opponent)
        ctx = self.new_context()

        overall = self.evaluate(state, table, ctx)
        ctx.metrics.elapsed = time.perf_counter() - start

        result = AnalysisResult(
            status=SUCCESS,
            rosters=rosters,
            turn=turn,
            opponent=opponent,
            note=pick_note(state),
            overall=overall,
            metrics=ctx.metrics,
            picks=rank_candidates(ctx.picks, turn, overall),
        )
        if self.params.verbosity >= Verbosity.SUMMARY:
            print_analysis(result, self.params.verbosity)
        return result

    def best_pick(self, state: GameState, table: MatchupTable) -> Optional[CandidateRow]:
        """Top-ranked choice for the team acting in `state` (None at a terminal state)."""
        ctx = self.new_context()
        overall = self.evaluate(state, table, ctx)
        ranked = rank_candidates(ctx.picks, state.turn, overall)
        return ranked[0] if ranked else None

    def new_context(self) -> SearchContext:
        return SearchContext(cache={} if self.params.memoize else None)

    # ---------- Search ----------

    def evaluate(self, state: GameState, table: MatchupTable, ctx: SearchContext, depth: int = 0) -> float:
        """
        Expected number of sets team1 wins from `state` under optimal play.
        At depth 0 each candidate's value is appended to ctx.picks.
        """
        ctx.metrics.visit(depth)

        if state.is_terminal():
            return float(state.forfeit_tally())

        cache = ctx.cache
        if cache is not None and depth > 0:
            key = state.cache_key()
            hit = cache.get(key)
            if hit is not None:
                return hit

        maximizing = state.turn == TEAM1
        best = -math.inf if maximizing else math.inf

        for candidate in state.acting_pool():
            branches = None
            if state.is_open_pick():
                score = self.evaluate(state.after_commit(candidate), table, ctx, depth + 1)
            else:
                p1, p2 = matchup_roles(state.turn, state.opponent, candidate)
                prob = table.win_probability(p1, p2)
                if_won = self.evaluate(state.after_match(candidate, TEAM1), table, ctx, depth + 1)
                if_lost = self.evaluate(state.after_match(candidate, TEAM2), table, ctx, depth + 1)
                score = prob * (1.0 + if_won) + (1.0 - prob) * if_lost
                branches = (prob, 1.0 + if_won, if_lost)

            if depth == 0:
                row = CandidateRow(name=candidate, score=score)
                if branches is not None:
                    row.probability, row.win_branch, row.loss_branch = branches
                ctx.picks.append(row)

            if (maximizing and score > best) or (not maximizing and score < best):
                best = score

        if cache is not None and depth > 0:
            cache[state.cache_key()] = best
        return best
