"""Swiss-system rounds and scoreboard."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from robotourney.core.snapshot import Game, Robot, RobotScore, SwissSystemInfo, find_robot

logger = logging.getLogger(__name__)

BYE_POINTS_TEXT = "bye = 1 point"


@dataclass(frozen=True)
class SwissRound:
    number: int  # 1-based
    round_count: int
    games: tuple[Game, ...]
    bye_robot: Robot | None = None

    @property
    def label(self) -> str:
        return f"Round {self.number} of {self.round_count}"


def games_per_round(swiss: SwissSystemInfo) -> int:
    return len(swiss.robots) // 2


def group_rounds(swiss: SwissSystemInfo, robots: tuple[Robot, ...]) -> list[SwissRound]:
    """Split the chronological game list into rounds, most recent first.

    Game i belongs to round i // games_per_round. Byes are resolved against
    `robots`; a bye naming an unknown robot is dropped.
    """
    per_round = games_per_round(swiss)
    if per_round == 0:
        return []

    grouped: list[list[Game]] = []
    for index, game in enumerate(swiss.games):
        round_index = index // per_round
        if round_index == len(grouped):
            grouped.append([])
        grouped[round_index].append(game)

    rounds = []
    for round_index, games in enumerate(grouped):
        bye_robot = None
        bye = swiss.byes[round_index] if round_index < len(swiss.byes) else None
        if bye is not None:
            bye_robot = find_robot(robots, bye.robot_id)
            if bye_robot is None:
                logger.debug(
                    "Dropping bye for unknown robot %r in round %d",
                    bye.robot_id, round_index + 1,
                )
        rounds.append(SwissRound(
            number=round_index + 1,
            round_count=swiss.round_count,
            games=tuple(games),
            bye_robot=bye_robot,
        ))

    rounds.reverse()
    return rounds


def bye_text(robot: Robot) -> str:
    return f"Bye: {robot.name} | {BYE_POINTS_TEXT}"


def rank_scores(robot_scores: tuple[RobotScore, ...] | list[RobotScore]) -> list[RobotScore]:
    """Order by score, then tie-break score, both descending.

    sorted() is stable, so entries equal on both keys keep their input order.
    """
    return sorted(robot_scores, key=lambda s: (-s.score, -s.tie_break_score))
