"""Tests for the probability table and CSV loaders."""
import numpy as np
import pandas as pd
import pytest

from crewbattle.loaders import align_probability_frame, load_probability_table, load_team_rows
from crewbattle.matchups import MatchupTable, ProbabilityTableError, matchup_roles
from crewbattle.models import TEAM1, TEAM2
from crewbattle.roster import RosterError, RosterFormatError


class TestMatchupRoles:
    def test_team1_acting(self):
        assert matchup_roles(TEAM1, "X", "A") == ("A", "X")

    def test_team2_acting(self):
        assert matchup_roles(TEAM2, "A", "X") == ("A", "X")


class TestMatchupTable:
    def test_lookup_uses_member_positions(self):
        table = MatchupTable.from_rows(["A", "B"], ["X", "Y", "Z"], [[0.1, 0.2, 0.3], [0.4, 0.5, 0.6]])
        assert table.win_probability("B", "Y") == pytest.approx(0.5)
        assert table.win_probability("A", "Z") == pytest.approx(0.3)

    def test_duplicate_member_resolves_to_first(self):
        table = MatchupTable.from_rows(["A", "A"], ["X"], [[0.2], [0.9]])
        assert table.win_probability("A", "X") == pytest.approx(0.2)

    def test_table_is_read_only(self):
        rows = np.array([[0.5]])
        table = MatchupTable.from_rows(["A"], ["X"], rows)
        with pytest.raises(ValueError):
            table.probs[0, 0] = 0.1
        rows[0, 0] = 0.9
        assert table.win_probability("A", "X") == pytest.approx(0.5)

    def test_wrong_shape(self):
        with pytest.raises(ProbabilityTableError, match="shape"):
            MatchupTable.from_rows(["A", "B"], ["X"], [[0.5]])

    @pytest.mark.parametrize("bad", [-0.1, 1.01])
    def test_out_of_range(self, bad):
        with pytest.raises(ProbabilityTableError, match="outside"):
            MatchupTable.from_rows(["A"], ["X", "Y"], [[0.5, bad]])

    def test_missing_value(self):
        with pytest.raises(ProbabilityTableError, match="non-numeric"):
            MatchupTable.from_rows(["A"], ["X"], [[float("nan")]])

    def test_missing_value_for_blank_slot_is_ignored(self):
        table = MatchupTable.from_rows(["A", ""], ["X"], [[0.4], [float("nan")]])
        assert table.win_probability("A", "X") == pytest.approx(0.4)

    def test_blank_string_for_blank_slot_is_ignored(self):
        table = MatchupTable.from_rows(["A", ""], ["X"], [[0.4], [""]])
        assert table.win_probability("A", "X") == pytest.approx(0.4)

    def test_blank_string_for_named_player_is_rejected(self):
        with pytest.raises(ProbabilityTableError, match="non-numeric"):
            MatchupTable.from_rows(["A", "B"], ["X"], [[0.4], [""]])

    def test_empty_rows_for_empty_roster(self):
        table = MatchupTable.from_rows([], ["X", "Y"], [])
        assert table.probs.shape == (0, 2)

    def test_non_numeric(self):
        with pytest.raises(ProbabilityTableError):
            MatchupTable.from_rows(["A"], ["X"], [["high"]])


class TestLoaders:
    def test_load_team_rows(self, tmp_path):
        path = tmp_path / "team.csv"
        path.write_text("Available,Name\n1,Alice\n0,Bob\nyes,Cy\n,Dee\n")
        assert load_team_rows(str(path)) == [(True, "Alice"), (False, "Bob"), (True, "Cy"), (False, "Dee")]

    def test_load_team_rows_missing_columns(self, tmp_path):
        path = tmp_path / "team.csv"
        path.write_text("who\nAlice\n")
        with pytest.raises(RosterFormatError, match="available"):
            load_team_rows(str(path))
        assert issubclass(RosterFormatError, RosterError)

    def test_labeled_matrix_is_reordered(self, tmp_path):
        path = tmp_path / "probs.csv"
        path.write_text(",Y,X\nB,0.1,0.2\nA,0.3,0.4\n")
        probs = load_probability_table(str(path), ["A", "B"], ["X", "Y"])
        np.testing.assert_allclose(probs, [[0.4, 0.3], [0.2, 0.1]])

    def test_unlabeled_matrix_is_positional(self):
        frame = pd.DataFrame([[0.1, 0.2], [0.3, 0.4]], index=["r1", "r2"], columns=["c1", "c2"])
        probs = align_probability_frame(frame, ["A", "B"], ["X", "Y"])
        np.testing.assert_allclose(probs, [[0.1, 0.2], [0.3, 0.4]])
