"""Competition snapshot — the immutable state fetched from the competition server.

The raw JSON document is parsed exactly once, here. Everything downstream
works with frozen dataclasses and tuples and never re-checks shapes.

Usage:
    snapshot = CompetitionSnapshot.from_record(json.loads(text))
    if snapshot.swiss is not None:
        ...
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)

RESULT_UNKNOWN = "unknown"
RESULT_WON = "won"
RESULT_TIED = "tied"


class SnapshotError(Exception):
    """Raised when a snapshot (or one of its sections) has an unexpected shape."""


def _require_mapping(value: Any, what: str) -> Mapping:
    if not isinstance(value, Mapping):
        raise SnapshotError(f"{what} must be an object, got {type(value).__name__}")
    return value


def _require_list(record: Mapping, key: str, what: str) -> list:
    value = record.get(key)
    if not isinstance(value, list):
        raise SnapshotError(f"{what}.{key} must be a list")
    return value


@dataclass(frozen=True)
class Robot:
    id: Any
    name: str

    @classmethod
    def from_record(cls, record: Any) -> Robot:
        record = _require_mapping(record, "robot")
        return cls(id=record.get("id"), name=str(record.get("name", "")))


def find_robot(robots: tuple[Robot, ...], robot_id: Any) -> Robot | None:
    """Resolve a robot by id; None when the id is unknown."""
    for robot in robots:
        if robot.id == robot_id:
            return robot
    return None


@dataclass(frozen=True)
class Score:
    is_valid: bool
    value: Any = None

    @classmethod
    def from_record(cls, record: Any) -> Score:
        record = _require_mapping(record, "score")
        return cls(is_valid=bool(record.get("isValid", False)), value=record.get("value"))


@dataclass(frozen=True)
class Round:
    has_ended: bool
    scores: tuple[tuple[Score, ...], ...]

    @classmethod
    def from_record(cls, record: Any) -> Round:
        record = _require_mapping(record, "round")
        scores = tuple(
            tuple(Score.from_record(s) for s in robot_scores)
            for robot_scores in _require_list(record, "scores", "round")
        )
        return cls(has_ended=bool(record.get("hasEnded", False)), scores=scores)


@dataclass(frozen=True)
class FreeThrows:
    scores: tuple[Any, Any]

    @classmethod
    def from_record(cls, record: Any) -> FreeThrows:
        record = _require_mapping(record, "freeThrows")
        scores = _require_list(record, "scores", "freeThrows")
        if len(scores) != 2:
            raise SnapshotError("freeThrows.scores must hold two entries")
        return cls(scores=(scores[0], scores[1]))


@dataclass(frozen=True)
class GameStatus:
    result: str
    winner: Robot | None = None
    round_win_count: int | None = None

    @classmethod
    def from_record(cls, record: Any) -> GameStatus:
        record = _require_mapping(record, "status")
        winner = record.get("winner")
        return cls(
            result=record.get("result", RESULT_UNKNOWN),
            winner=Robot.from_record(winner) if winner else None,
            round_win_count=record.get("roundWinCount"),
        )


@dataclass(frozen=True)
class Game:
    id: Any
    robots: tuple[Robot, Robot]
    rounds: tuple[Round, ...]
    status: GameStatus
    free_throws: FreeThrows | None = None

    @classmethod
    def from_record(cls, record: Any) -> Game:
        record = _require_mapping(record, "game")
        robots = _require_list(record, "robots", "game")
        if len(robots) != 2:
            raise SnapshotError(f"game {record.get('id')!r} must have two robots")
        free_throws = record.get("freeThrows")
        return cls(
            id=record.get("id"),
            robots=(Robot.from_record(robots[0]), Robot.from_record(robots[1])),
            rounds=tuple(Round.from_record(r) for r in record.get("rounds") or []),
            status=GameStatus.from_record(record.get("status") or {}),
            free_throws=FreeThrows.from_record(free_throws) if free_throws else None,
        )


@dataclass(frozen=True)
class DoubleEliminationInfo:
    robots: tuple[Robot, ...]
    games: tuple[Game, ...]
    game_types: Mapping[Any, str]
    no_loss_queue: tuple[Robot, ...]
    one_loss_queue: tuple[Robot, ...]
    eliminated_robots: tuple[Robot, ...]

    @classmethod
    def from_record(cls, record: Any) -> DoubleEliminationInfo:
        what = "doubleEliminationTournament"
        record = _require_mapping(record, what)
        game_types = _require_mapping(record.get("gameTypes"), f"{what}.gameTypes")
        return cls(
            robots=tuple(Robot.from_record(r) for r in _require_list(record, "robots", what)),
            games=tuple(Game.from_record(g) for g in _require_list(record, "games", what)),
            game_types=dict(game_types),
            no_loss_queue=tuple(
                Robot.from_record(r) for r in _require_list(record, "noLossQueue", what)
            ),
            one_loss_queue=tuple(
                Robot.from_record(r) for r in _require_list(record, "oneLossQueue", what)
            ),
            eliminated_robots=tuple(
                Robot.from_record(r) for r in _require_list(record, "eliminatedRobots", what)
            ),
        )

    def game_type(self, game: Game) -> str | None:
        # JSON object keys are strings even when game ids are numbers
        if game.id in self.game_types:
            return self.game_types[game.id]
        return self.game_types.get(str(game.id))


@dataclass(frozen=True)
class Bye:
    robot_id: Any

    @classmethod
    def from_record(cls, record: Any) -> Bye | None:
        if record is None:
            return None
        if isinstance(record, Mapping):
            return cls(robot_id=record.get("robotID"))
        return cls(robot_id=record)


@dataclass(frozen=True)
class RobotScore:
    robot: Robot
    score: float
    tie_break_score: float

    @classmethod
    def from_record(cls, record: Any) -> RobotScore:
        record = _require_mapping(record, "robotScore")
        return cls(
            robot=Robot.from_record(record.get("robot")),
            score=float(record.get("score", 0)),
            tie_break_score=float(record.get("tieBreakScore", 0)),
        )


@dataclass(frozen=True)
class SwissSystemInfo:
    robots: tuple[Robot, ...]
    games: tuple[Game, ...]
    round_count: int
    byes: tuple[Bye | None, ...] = ()
    robot_scores: tuple[RobotScore, ...] = ()

    @classmethod
    def from_record(cls, record: Any) -> SwissSystemInfo:
        what = "swissSystemTournament"
        record = _require_mapping(record, what)
        return cls(
            robots=tuple(Robot.from_record(r) for r in _require_list(record, "robots", what)),
            games=tuple(Game.from_record(g) for g in _require_list(record, "games", what)),
            round_count=int(record.get("roundCount", 0)),
            byes=tuple(Bye.from_record(b) for b in record.get("byes") or []),
            robot_scores=tuple(RobotScore.from_record(s) for s in record.get("robotScores") or []),
        )


def _parse_section(record: Mapping, key: str, parser):
    """Parse an optional tournament section; a malformed one degrades to None."""
    raw = record.get(key)
    if raw is None:
        return None
    try:
        return parser(raw)
    except (SnapshotError, TypeError, ValueError) as exc:
        logger.warning("Ignoring malformed %s section: %s", key, exc)
        return None


@dataclass(frozen=True)
class CompetitionSnapshot:
    """One immutable fetched copy of competition state."""

    name: str | None = None
    robots: tuple[Robot, ...] = field(default_factory=tuple)
    double_elimination: DoubleEliminationInfo | None = None
    swiss: SwissSystemInfo | None = None

    @classmethod
    def empty(cls) -> CompetitionSnapshot:
        """The 'no competition configured' snapshot."""
        return cls()

    @property
    def is_configured(self) -> bool:
        return bool(self.name)

    @classmethod
    def from_record(cls, record: Any) -> CompetitionSnapshot:
        record = _require_mapping(record, "competition")
        robots = record.get("robots")
        try:
            parsed_robots = tuple(Robot.from_record(r) for r in robots or [])
        except (SnapshotError, TypeError) as exc:
            logger.warning("Ignoring malformed robots list: %s", exc)
            parsed_robots = ()
        return cls(
            name=str(record["name"]) if record.get("name") else None,
            robots=parsed_robots,
            double_elimination=_parse_section(
                record, "doubleEliminationTournament", DoubleEliminationInfo.from_record
            ),
            swiss=_parse_section(record, "swissSystemTournament", SwissSystemInfo.from_record),
        )
