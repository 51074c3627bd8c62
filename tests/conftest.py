"""Pytest fixtures/config for crew battle tests."""

import os
import sys

import pytest


def pytest_sessionstart(session) -> None:  # type: ignore[unused-argument]
    repo_root = os.path.dirname(os.path.dirname(__file__))
    src_path = os.path.join(repo_root, "src")
    if src_path not in sys.path:
        sys.path.insert(0, src_path)


@pytest.fixture
def two_vs_one():
    """Team 1 = A, B; Team 2 = X. A beats X 60%, B beats X 30%."""
    team1 = [(True, "A"), (True, "B")]
    team2 = [(True, "X")]
    probs = [[0.6], [0.3]]
    return team1, team2, probs
