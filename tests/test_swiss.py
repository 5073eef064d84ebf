"""Tests for Swiss-system round grouping and scoreboard ranking."""

from helpers import game_record, robot

from robotourney.core.snapshot import Robot, RobotScore, SwissSystemInfo
from robotourney.swiss import bye_text, games_per_round, group_rounds, rank_scores


def _swiss(robot_count: int, game_count: int, round_count: int = 3, byes=()) -> SwissSystemInfo:
    robots = [robot(i) for i in range(1, robot_count + 1)]
    return SwissSystemInfo.from_record({
        "robots": robots,
        "games": [game_record(100 + i, 1, 2) for i in range(game_count)],
        "roundCount": round_count,
        "byes": list(byes),
        "robotScores": [],
    })


def _score(name: str, score: float, tie_break: float) -> RobotScore:
    return RobotScore(robot=Robot(id=name, name=name), score=score, tie_break_score=tie_break)


# ── Round grouping ───────────────────────────────────────────────


class TestGroupRounds:
    def test_eight_robots_twelve_games(self):
        swiss = _swiss(8, 12)
        rounds = group_rounds(swiss, swiss.robots)
        assert games_per_round(swiss) == 4
        assert len(rounds) == 3
        assert all(len(r.games) == 4 for r in rounds)
        assert [r.label for r in rounds] == ["Round 3 of 3", "Round 2 of 3", "Round 1 of 3"]

    def test_most_recent_round_first(self):
        swiss = _swiss(4, 5)
        rounds = group_rounds(swiss, swiss.robots)
        assert [r.number for r in rounds] == [3, 2, 1]
        # flat index i belongs to round i // 2
        assert [g.id for g in rounds[-1].games] == [100, 101]
        assert [g.id for g in rounds[0].games] == [104]

    def test_odd_robot_count_rounds_down(self):
        swiss = _swiss(5, 4)
        assert games_per_round(swiss) == 2
        assert len(group_rounds(swiss, swiss.robots)) == 2

    def test_fewer_than_two_robots_has_no_rounds(self):
        swiss = _swiss(1, 3)
        assert group_rounds(swiss, swiss.robots) == []

    def test_no_games_no_rounds(self):
        swiss = _swiss(4, 0)
        assert group_rounds(swiss, swiss.robots) == []

    def test_bye_resolved_by_round_index(self):
        swiss = _swiss(5, 4, byes=[{"robotID": 5}, {"robotID": 3}])
        rounds = group_rounds(swiss, swiss.robots)
        assert rounds[-1].bye_robot.name == "Robot 5"
        assert rounds[0].bye_robot.name == "Robot 3"

    def test_unknown_bye_dropped(self):
        swiss = _swiss(5, 2, byes=[{"robotID": 42}])
        rounds = group_rounds(swiss, swiss.robots)
        assert rounds[0].bye_robot is None

    def test_missing_bye_entries(self):
        swiss = _swiss(5, 4, byes=[None])
        rounds = group_rounds(swiss, swiss.robots)
        assert [r.bye_robot for r in rounds] == [None, None]

    def test_bye_text(self):
        assert bye_text(Robot(id=1, name="Crusher")) == "Bye: Crusher | bye = 1 point"


# ── Scoreboard ───────────────────────────────────────────────────


class TestRankScores:
    def test_score_descending(self):
        ranked = rank_scores([_score("a", 1.0, 0), _score("b", 3.0, 0), _score("c", 2.0, 0)])
        assert [s.robot.name for s in ranked] == ["b", "c", "a"]

    def test_tie_break_descending_on_equal_score(self):
        ranked = rank_scores([_score("a", 2.0, 0.5), _score("b", 2.0, 1.5), _score("c", 3.0, 0.0)])
        assert [s.robot.name for s in ranked] == ["c", "b", "a"]

    def test_stable_for_full_ties(self):
        entries = [_score(n, 1.0, 1.0) for n in ("x", "y", "z")]
        entries.insert(1, _score("top", 2.0, 0.0))
        ranked = rank_scores(entries)
        assert [s.robot.name for s in ranked] == ["top", "x", "y", "z"]

    def test_full_precision_ranking(self):
        # 1.004 and 1.001 both display as 1, ranking still tells them apart
        ranked = rank_scores([_score("a", 1.001, 0), _score("b", 1.004, 0)])
        assert [s.robot.name for s in ranked] == ["b", "a"]

    def test_pairwise_order(self):
        entries = [
            _score("a", 0.5, 2.0), _score("b", 2.5, 0.0), _score("c", 0.5, 3.0),
            _score("d", 1.0, 1.0), _score("e", 1.0, 1.0),
        ]
        ranked = rank_scores(entries)
        for first, second in zip(ranked, ranked[1:]):
            assert (first.score, first.tie_break_score) >= (second.score, second.tie_break_score)

    def test_input_not_mutated(self):
        entries = (_score("a", 1.0, 0), _score("b", 2.0, 0))
        rank_scores(entries)
        assert [s.robot.name for s in entries] == ["a", "b"]
