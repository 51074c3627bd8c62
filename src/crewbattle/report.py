# src/crewbattle/report.py
from __future__ import annotations

"""
Presentation helpers: pick notes, the spreadsheet-style output grid, console printing.

Grid layout (0-based row, col):
    (0,0) Status        (0,1) SUCCESS / ERROR: ...
    (1,0) Team 1 Pool   (1,1) "(n) a, b, ..."
    (2,0) Team 2 Pool   (2,1) "(n) x, y, ..."
    (3,0) pick note
    (5..7, 0/1) Depth, Nodes, Time (s)
    (1,5) Ranked Picks  (1,9) Overall  (1,10) overall score
    (2,5) #  (2,6) Player  (2,10) Eval  (2,11) Loss
    (3+i, ...) one row per ranked candidate
"""

from typing import List

from crewbattle.models import TEAM1, TEAM2, AnalysisResult, GameState, Verbosity

OUTPUT_ROWS = 8
OUTPUT_COLS = 12
PICK_ROW_OFFSET = 3


def pick_note(state: GameState) -> str:
    """Describe the root situation for the team about to act."""
    n1, n2 = len(state.pool1), len(state.pool2)
    if state.is_terminal():
        if n1 == 0 and n2 == 0:
            return "GAME OVER - Both teams are out of members"
        if n1 == 0:
            return f"GAME OVER - Team 1 is out of members, automatically forfeiting {n2} sets"
        return f"GAME OVER - Team 2 is out of members, automatically forfeiting {n1} sets"
    if state.is_open_pick():
        return f"Team {state.turn + 1} picks first for this set"
    return f"Team {state.turn + 1} counterpicks against {state.opponent}"


def pool_summary(pool) -> str:
    return f"({len(pool)}) " + ", ".join(pool)


def to_grid(result: AnalysisResult) -> List[list]:
    """
    Render into a fixed-width grid of cells ('' where empty).
    Rows are added below the standard 8 when the ranking needs them.
    """
    n_rows = max(OUTPUT_ROWS, PICK_ROW_OFFSET + len(result.picks))
    grid = [["" for _ in range(OUTPUT_COLS)] for _ in range(n_rows)]
    grid[0][0] = "Status"
    grid[0][1] = result.status
    if not result.ok:
        return grid

    for t in (TEAM1, TEAM2):
        grid[t + 1][0] = f"Team {t + 1} Pool"
        grid[t + 1][1] = pool_summary(result.rosters[t].pool)
    grid[3][0] = result.note

    grid[5][0], grid[5][1] = "Depth", result.metrics.max_depth
    grid[6][0], grid[6][1] = "Nodes", result.metrics.nodes
    grid[7][0], grid[7][1] = "Time (s)", round(result.metrics.elapsed, 3)

    grid[1][5], grid[1][9], grid[1][10] = "Ranked Picks", "Overall", result.overall
    grid[2][5], grid[2][6], grid[2][10], grid[2][11] = "#", "Player", "Eval", "Loss"
    for i, row in enumerate(result.picks):
        r = PICK_ROW_OFFSET + i
        grid[r][5] = row.rank
        grid[r][6] = row.name
        grid[r][10] = row.score
        grid[r][11] = row.loss
    return grid


def print_analysis(result: AnalysisResult, verbosity: Verbosity = Verbosity.DEBUG) -> None:
    if not result.ok:
        print(result.status)
        return

    m = result.metrics
    best = result.best()
    print(
        f"{result.note} -> overall={result.overall:.4f}"
        f"{'  best=' + best.name if best else ''}  "
        f"[depth={m.max_depth}, nodes={m.nodes}, time={m.elapsed:.3f}s]"
    )
    if verbosity < Verbosity.DEBUG or not result.picks:
        return

    for t in (TEAM1, TEAM2):
        print(f"    Team {t + 1} pool: {pool_summary(result.rosters[t].pool)}")
    print("    Ranked picks:")
    for r in result.picks:
        print(f"      {r.rank:2d}. {r.name:20s}  eval={r.score:7.4f}  loss={r.loss:7.4f}")
        if verbosity >= Verbosity.TRACE and r.probability is not None:
            print(
                f"          p(team1 wins)={r.probability:.3f}  "
                f"if team1 wins={r.win_branch:7.4f}  if team2 wins={r.loss_branch:7.4f}"
            )
