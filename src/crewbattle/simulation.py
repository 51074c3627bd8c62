# src/crewbattle/simulation.py
from __future__ import annotations

"""
Play out a crew battle with the engine choosing for both teams.

Each set: the team on the clock sends its best first pick, the other team
answers with its best counterpick, the set is sampled from the probability
table, and the winner picks first next. When a pool runs dry the other team's
remaining players win by forfeit.
"""

from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from crewbattle.battle_engine import CrewBattleEngine
from crewbattle.matchups import MatchupTable, matchup_roles
from crewbattle.models import TEAM1, TEAM2, GameState
from crewbattle.roster import NoCounterpickError


@dataclass(frozen=True)
class PlayedSet:
    first_pick: str
    counterpick: str
    team1_player: str
    team2_player: str
    probability: float
    winner: int


@dataclass
class BattleLog:
    sets: List[PlayedSet] = field(default_factory=list)
    forfeits: int = 0          # sets team1 collects because team2 ran out

    @property
    def team1_sets(self) -> int:
        return sum(1 for s in self.sets if s.winner == TEAM1) + self.forfeits


def simulate_battle(
    engine: CrewBattleEngine,
    state: GameState,
    table: MatchupTable,
    rng: Optional[np.random.Generator] = None,
) -> BattleLog:
    """
    Run one battle from `state` to the end. `state` may be an open pick or a
    pending counterpick. A pending counterpick with nobody left to send raises
    NoCounterpickError.
    """
    if not state.is_open_pick() and not state.acting_pool():
        raise NoCounterpickError(state.turn, state.opponent)
    rng = rng if rng is not None else np.random.default_rng()
    log = BattleLog()

    while not state.is_terminal():
        if state.is_open_pick():
            first = engine.best_pick(state, table)
            state = state.after_commit(first.name)
        first_pick = state.opponent

        answer = engine.best_pick(state, table)
        p1, p2 = matchup_roles(state.turn, state.opponent, answer.name)
        prob = table.win_probability(p1, p2)
        winner = TEAM1 if rng.random() < prob else TEAM2

        log.sets.append(PlayedSet(
            first_pick=first_pick,
            counterpick=answer.name,
            team1_player=p1,
            team2_player=p2,
            probability=prob,
            winner=winner,
        ))
        state = state.after_match(answer.name, winner)

    log.forfeits = state.forfeit_tally()
    return log
