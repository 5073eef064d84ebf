"""Game result lines — how one game's outcome reads in the results view.

A game line has up to four parts joined with " | ":

    Alpha vs Beta | (3 - 1) (2 - 2) | Alpha won | 2 out of 2 round wins = 1 point

Finals (any game formatted with a game-type tag) carry no league points,
so the points part is left off for them.
"""

from __future__ import annotations

from dataclasses import dataclass

from robotourney.core.scoring import valid_score_counts
from robotourney.core.snapshot import RESULT_TIED, RESULT_UNKNOWN, RESULT_WON, Game

STAGE_UNDECIDED = "undecided"
STAGE_IN_PROGRESS = "in_progress"
STAGE_DECIDED = "decided"

TIE_POINTS_TEXT = "tie = 0.5 points"
CLEAN_WIN_POINTS_TEXT = "2 out of 2 round wins = 1 point"
NARROW_WIN_POINTS_TEXT = "2 out of 3 round wins = 0.9 points"
MINORITY_WIN_POINTS_TEXT = "1 out of 3 round wins = 0.8 points"


@dataclass(frozen=True)
class GameSummary:
    """Display parts of a single game line."""

    label: str
    tallies: tuple[str, ...] = ()
    outcome: str | None = None
    winner_emphasized: bool = False
    points: str | None = None
    stage: str = STAGE_UNDECIDED

    @property
    def tally_text(self) -> str:
        return " ".join(self.tallies)

    @property
    def text(self) -> str:
        if self.stage == STAGE_UNDECIDED:
            return self.label
        parts = [self.label]
        if self.tallies:
            parts.append(self.tally_text)
        if self.outcome:
            parts.append(self.outcome)
        if self.points:
            parts.append(self.points)
        return " | ".join(parts)


def _round_tallies(game: Game) -> tuple[str, ...]:
    tallies = []
    for rnd in game.rounds:
        if not rnd.has_ended:
            continue
        counts = valid_score_counts(rnd.scores)
        tallies.append(f"({counts[0]} - {counts[1]})")
    if game.free_throws is not None:
        a, b = game.free_throws.scores
        tallies.append(f"({a} - {b})")
    return tuple(tallies)


def points_text(game: Game) -> str:
    """Standings points a decided, points-bearing game awards."""
    status = game.status
    if status.result == RESULT_TIED:
        return TIE_POINTS_TEXT
    if len(game.rounds) == 2:
        return CLEAN_WIN_POINTS_TEXT
    if status.round_win_count == 2:
        return NARROW_WIN_POINTS_TEXT
    return MINORITY_WIN_POINTS_TEXT


def is_undecided(game: Game) -> bool:
    # Only round 0 is consulted, even when later rounds ended out of order.
    if game.status.result != RESULT_UNKNOWN:
        return False
    return not game.rounds or not game.rounds[0].has_ended


def format_game(game: Game, game_type: str | None = None) -> GameSummary:
    """Build the display parts of one game.

    game_type is the double-elimination type tag of the game; when given,
    no points annotation is produced.
    """
    robot_a, robot_b = game.robots
    label = f"{robot_a.name} vs {robot_b.name}"

    if is_undecided(game):
        return GameSummary(label=label, stage=STAGE_UNDECIDED)

    tallies = _round_tallies(game)
    status = game.status

    if status.result == RESULT_UNKNOWN:
        return GameSummary(label=label, tallies=tallies, stage=STAGE_IN_PROGRESS)

    if status.result == RESULT_WON:
        winner = status.winner.name if status.winner else "???"
        outcome = f"{winner} won"
        emphasized = True
    else:
        outcome = status.result
        emphasized = False

    return GameSummary(
        label=label,
        tallies=tallies,
        outcome=outcome,
        winner_emphasized=emphasized,
        points=points_text(game) if game_type is None else None,
        stage=STAGE_DECIDED,
    )
