# mock_battle.py
"""
Simulate crew battles with the engine choosing for both teams.

What this does
--------------
- Builds two rosters and a probability table (CONFIG BLOCK below, or CSVs)
- Analyzes the opening position (expected sets won by Team 1)
- Plays NUM_BATTLES battles, sampling each set from the table
- Prints the first battle set-by-set and the average Team 1 tally,
  which should land near the analyzed expectation

How to use
---------
1) Edit the CONFIG BLOCK, or pass --team1/--team2/--matrix CSVs.
2) Run:  python mock_battle.py --battles 500 --seed 7
"""

from __future__ import annotations

import argparse
import sys

import numpy as np

from crewbattle.battle_engine import CrewBattleEngine
from crewbattle.loaders import load_probability_table, load_team_rows
from crewbattle.matchups import MatchupTable, ProbabilityTableError
from crewbattle.models import TEAM1, EngineParams, GameState, Verbosity
from crewbattle.roster import RosterError, validate_rosters
from crewbattle.simulation import simulate_battle


# ==========================
# ===== CONFIG BLOCK =======
# ==========================

TEAM1_ROWS = [(True, "Ava"), (True, "Ben"), (True, "Cal"), (False, "Dee")]
TEAM2_ROWS = [(True, "Xia"), (True, "Yor"), (True, "Zed")]
PROBABILITIES = [
    [0.55, 0.40, 0.70],
    [0.35, 0.60, 0.50],
    [0.65, 0.45, 0.30],
    [0.50, 0.50, 0.50],
]

FIRST_TURN = 1
NUM_BATTLES = 200

ENGINE_PARAMS = EngineParams(memoize=True, verbosity=Verbosity.QUIET)


def main() -> int:
    parser = argparse.ArgumentParser(description="Mock crew battles driven by the engine.")
    parser.add_argument("--team1", default=None, help="Team 1 roster CSV (defaults to CONFIG BLOCK)")
    parser.add_argument("--team2", default=None, help="Team 2 roster CSV (defaults to CONFIG BLOCK)")
    parser.add_argument("--matrix", default=None, help="Probability CSV (defaults to CONFIG BLOCK)")
    parser.add_argument("--turn", type=int, choices=(1, 2), default=FIRST_TURN)
    parser.add_argument("--battles", type=int, default=NUM_BATTLES)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args()

    try:
        team1_rows = load_team_rows(args.team1) if args.team1 else TEAM1_ROWS
        team2_rows = load_team_rows(args.team2) if args.team2 else TEAM2_ROWS
        rosters, turn_idx, _ = validate_rosters((team1_rows, team2_rows), args.turn)
        probs = (
            load_probability_table(args.matrix, rosters[0].members, rosters[1].members)
            if args.matrix else PROBABILITIES
        )
        table = MatchupTable.from_rows(rosters[0].members, rosters[1].members, probs)
    except (RosterError, ProbabilityTableError) as e:
        print(f"ERROR: {e}")
        return 1

    engine = CrewBattleEngine(params=ENGINE_PARAMS)
    result = engine.analyze_rosters(rosters, table, turn_idx)
    print(f"Opening: {result.note}. Expected Team 1 sets = {result.overall:.4f}\n")

    rng = np.random.default_rng(args.seed)
    start = GameState(pools=(rosters[0].pool, rosters[1].pool), turn=turn_idx)
    tallies = []
    for i in range(args.battles):
        log = simulate_battle(engine, start, table, rng)
        tallies.append(log.team1_sets)
        if i == 0:
            print("=== Battle 1 ===")
            for n, s in enumerate(log.sets, start=1):
                who = "Team 1" if s.winner == TEAM1 else "Team 2"
                print(
                    f"{n:3d}. {s.first_pick} sent, {s.counterpick} counters  "
                    f"[{s.team1_player} vs {s.team2_player}, p={s.probability:.2f}] -> {who}"
                )
            if log.forfeits:
                print(f"     Team 2 out of members, forfeiting {log.forfeits} sets")
            print(f"Team 1 sets: {log.team1_sets}\n")

    arr = np.asarray(tallies, dtype=float)
    print(f"{args.battles} battles: mean Team 1 sets = {arr.mean():.4f} (sd {arr.std(ddof=0):.3f}), "
          f"expected {result.overall:.4f}")
    print("\nDone.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
