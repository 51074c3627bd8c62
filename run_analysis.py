# run_analysis.py
"""
Analyze a crew battle position from CSV inputs.

How to use
----------
1) Write one roster CSV per team with `available,name` columns, e.g.
       available,name
       1,Alice
       0,Bob
2) Write the probability table: first column = Team 1 names, header = Team 2 names,
   cell = probability the Team 1 player beats the Team 2 player.
3) Run:
       python run_analysis.py --team1 data/team1.csv --team2 data/team2.csv \\
           --matrix data/probs.csv --turn 1
   Add `--opponent NAME` when the team on the clock has counterpick.
"""

from __future__ import annotations

import argparse
import sys

from crewbattle.battle_engine import CrewBattleEngine
from crewbattle.loaders import load_probability_table, load_team_rows
from crewbattle.matchups import ProbabilityTableError
from crewbattle.models import EngineParams, Verbosity
from crewbattle.ranking import ranking_frame
from crewbattle.report import to_grid
from crewbattle.roster import RosterError, validate_rosters


# ==========================
# ===== CONFIG DEFAULTS ====
# ==========================

DEFAULT_TEAM1 = "data/team1.csv"
DEFAULT_TEAM2 = "data/team2.csv"
DEFAULT_MATRIX = "data/probs.csv"

RUN_VERBOSITY = Verbosity.DEBUG


def _print_grid(grid) -> None:
    for row in grid:
        cells = ["" if c == "" else str(c) for c in row]
        while cells and cells[-1] == "":
            cells.pop()
        print(" | ".join(cells))


def main() -> int:
    parser = argparse.ArgumentParser(description="Rank every pick for the team on the clock in a crew battle.")
    parser.add_argument("--team1", default=DEFAULT_TEAM1, help="Team 1 roster CSV")
    parser.add_argument("--team2", default=DEFAULT_TEAM2, help="Team 2 roster CSV")
    parser.add_argument("--matrix", default=DEFAULT_MATRIX, help="Team 1 x Team 2 win probability CSV")
    parser.add_argument("--turn", type=int, choices=(1, 2), required=True, help="Team picking next (1 or 2)")
    parser.add_argument("--opponent", default="", help="Player the other team already sent, if countering")
    parser.add_argument("--memoize", action="store_true", help="Cache repeated states (same results, fewer nodes)")
    parser.add_argument("--verbosity", type=int, choices=[int(v) for v in Verbosity], default=int(RUN_VERBOSITY))
    parser.add_argument("--grid", action="store_true", help="Print the spreadsheet-style output grid")
    parser.add_argument("--csv-out", default=None, help="Write the ranked picks to this CSV")
    args = parser.parse_args()

    engine = CrewBattleEngine(params=EngineParams(memoize=args.memoize, verbosity=Verbosity(args.verbosity)))

    # Validate first so the matrix can be aligned to member order by label.
    try:
        team1_rows = load_team_rows(args.team1)
        team2_rows = load_team_rows(args.team2)
        rosters, _, _ = validate_rosters((team1_rows, team2_rows), args.turn, opponent=args.opponent)
        probs = load_probability_table(args.matrix, rosters[0].members, rosters[1].members)
    except (RosterError, ProbabilityTableError) as e:
        print(f"ERROR: {e}")
        return 1

    result = engine.analyze(team1_rows, team2_rows, args.turn, args.opponent, probs)

    if args.grid:
        _print_grid(to_grid(result))
    if not result.ok:
        return 1

    if args.csv_out:
        ranking_frame(result.picks).to_csv(args.csv_out, index=False)
        print(f"Wrote {len(result.picks)} ranked picks to {args.csv_out}")
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nInterrupted. Bye.")
        sys.exit(0)
