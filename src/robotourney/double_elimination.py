"""Double-elimination standings: placements, game buckets, next matchups."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from robotourney.core.snapshot import DoubleEliminationInfo, Game, Robot

logger = logging.getLogger(__name__)

GAME_TYPE_NO_LOSS = "noLoss"
GAME_TYPE_ONE_LOSS = "oneLoss"
FINAL_SUFFIX = "Final"

UNDETERMINED = "???"


# ── Placements ───────────────────────────────────────────────────

@dataclass(frozen=True)
class Placements:
    first: Robot | None
    second: Robot | None
    third: Robot

    def lines(self) -> list[str]:
        return [
            f"Winner: {self.first.name if self.first else UNDETERMINED}",
            f"2nd place: {self.second.name if self.second else UNDETERMINED}",
            f"3rd place: {self.third.name}",
        ]


def _eliminated_at(info: DoubleEliminationInfo, index: int) -> Robot | None:
    if 0 <= index < len(info.eliminated_robots):
        return info.eliminated_robots[index]
    return None


def determine_placements(info: DoubleEliminationInfo) -> Placements | None:
    """Derive 1st/2nd/3rd place, or None while 3rd place is still open.

    1st place is only known once a single robot is left across both queues.
    2nd and 3rd are the last robots eliminated, counted from the robot total.
    """
    robot_count = len(info.robots)
    contenders = info.no_loss_queue + info.one_loss_queue
    first = contenders[0] if len(contenders) == 1 else None
    second = _eliminated_at(info, robot_count - 2)
    third = _eliminated_at(info, robot_count - 3)

    if third is None:
        return None
    return Placements(first=first, second=second, third=third)


# ── Game buckets ─────────────────────────────────────────────────

@dataclass(frozen=True)
class GameBuckets:
    no_loss: tuple[Game, ...] = ()
    one_loss: tuple[Game, ...] = ()
    final: tuple[Game, ...] = ()


def is_final_type(game_type: str | None) -> bool:
    return bool(game_type) and game_type.endswith(FINAL_SUFFIX)


def bucket_games(info: DoubleEliminationInfo) -> GameBuckets:
    no_loss: list[Game] = []
    one_loss: list[Game] = []
    final: list[Game] = []

    for game in info.games:
        game_type = info.game_type(game)
        if game_type == GAME_TYPE_NO_LOSS:
            no_loss.append(game)
        elif game_type == GAME_TYPE_ONE_LOSS:
            one_loss.append(game)
        elif is_final_type(game_type):
            final.append(game)
        else:
            logger.debug("Skipping game %r with type %r", game.id, game_type)

    return GameBuckets(no_loss=tuple(no_loss), one_loss=tuple(one_loss), final=tuple(final))


# ── Next matchups ────────────────────────────────────────────────

def next_matchups(queue: tuple[Robot, ...]) -> list[tuple[Robot, ...]]:
    """Pair consecutive queue entries; an odd leftover waits on its own."""
    return [tuple(queue[i:i + 2]) for i in range(0, len(queue), 2)]


def matchup_text(matchup: tuple[Robot, ...]) -> str:
    if len(matchup) == 1:
        return matchup[0].name
    return f"{matchup[0].name} vs {matchup[1].name}"
