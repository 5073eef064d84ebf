"""Shared test fixtures for robotourney."""

import json

import pytest

from helpers import game_record, robot


@pytest.fixture
def competition_record():
    """Four-robot double elimination plus a four-robot Swiss tournament."""
    robots = [robot(i) for i in range(1, 5)]
    return {
        "name": "Spring Sumo Cup",
        "robots": robots,
        "doubleEliminationTournament": {
            "robots": robots,
            "games": [
                game_record(1, 1, 2, [(2, 0, True), (1, 0, True)], "won", 1, 2),
                game_record(2, 3, 4, [(0, 1, True), (0, 2, True)], "won", 4, 2),
                game_record(3, 1, 4, [(1, 0, True), (0, 1, True), (1, 0, True)], "won", 1, 2),
                game_record(4, 2, 3, [(1, 0, True), (1, 0, True)], "won", 2, 2),
                game_record(5, 4, 2, [(1, 0, True), (1, 0, True)], "won", 4, 2),
                game_record(6, 1, 4, [(1, 0, False)]),
            ],
            "gameTypes": {
                "1": "noLoss", "2": "noLoss", "3": "noLoss",
                "4": "oneLoss", "5": "oneLoss", "6": "grandFinal",
            },
            "noLossQueue": [robot(1)],
            "oneLossQueue": [robot(4)],
            "eliminatedRobots": [robot(3), robot(2)],
        },
        "swissSystemTournament": {
            "robots": robots,
            "games": [
                game_record(11, 1, 2, [(1, 0, True), (1, 0, True)], "won", 1, 2),
                game_record(12, 3, 4, [(1, 1, True), (0, 0, True)], "tied"),
                game_record(13, 1, 3, [(1, 0, True)]),
                game_record(14, 2, 4),
            ],
            "roundCount": 3,
            "byes": [None, {"robotID": 99}],
            "robotScores": [
                {"robot": robot(1), "score": 2.0, "tieBreakScore": 0.5},
                {"robot": robot(2), "score": 0.0, "tieBreakScore": 1.0},
                {"robot": robot(3), "score": 0.5, "tieBreakScore": 1.5},
                {"robot": robot(4), "score": 0.5, "tieBreakScore": 2.005},
            ],
        },
    }


@pytest.fixture
def summary_file(tmp_path, competition_record):
    """Competition summary written where a file source can read it."""
    path = tmp_path / "competition-state" / "competition-summary.json"
    path.parent.mkdir(parents=True)
    path.write_text(json.dumps(competition_record))
    return path
