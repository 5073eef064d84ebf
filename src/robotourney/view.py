"""CompetitionView — owns the fetched snapshot and builds the results document.

State moves only when a fetch completes:

    UNINITIALIZED -> LOADING -> READY(snapshot)
                             -> ERROR(kind)
    READY / ERROR -> LOADING -> ...

render() never fetches and never changes state; it is a pure function of
the current cell.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum

from robotourney.core.fetch import FetchError, SnapshotSource
from robotourney.core.scoring import format_number
from robotourney.core.snapshot import CompetitionSnapshot, DoubleEliminationInfo, Game, SnapshotError
from robotourney.double_elimination import (
    bucket_games,
    determine_placements,
    matchup_text,
    next_matchups,
)
from robotourney.reporting.tree import Document, Heading, Item, ItemList, Node, Paragraph, Span, Table
from robotourney.results import format_game
from robotourney.swiss import bye_text, group_rounds, rank_scores

logger = logging.getLogger(__name__)

LOADING_TEXT = "Loading..."
UNAVAILABLE_TEXT = "Competition results unavailable"


class ViewState(Enum):
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass(frozen=True)
class SnapshotCell:
    """Versioned holder of the current snapshot.

    `snapshot` keeps the last READY snapshot through later LOADING/ERROR
    states; `version` counts successful replacements.
    """

    state: ViewState = ViewState.UNINITIALIZED
    snapshot: CompetitionSnapshot | None = None
    version: int = 0
    error: Exception | None = None

    def loading(self) -> SnapshotCell:
        return replace(self, state=ViewState.LOADING, error=None)

    def ready(self, snapshot: CompetitionSnapshot) -> SnapshotCell:
        return SnapshotCell(
            state=ViewState.READY, snapshot=snapshot, version=self.version + 1,
        )

    def failed(self, error: Exception) -> SnapshotCell:
        return replace(self, state=ViewState.ERROR, error=error)


# ── Document building ────────────────────────────────────────────

def game_item(game: Game, game_type: str | None = None) -> Item:
    summary = format_game(game, game_type)
    if summary.outcome is None:
        return Item.of(summary.text)

    lead = summary.label
    if summary.tallies:
        lead += f" | {summary.tally_text}"
    spans = [
        Span(f"{lead} | "),
        Span(summary.outcome, strong=summary.winner_emphasized),
    ]
    if summary.points:
        spans.append(Span(f" | {summary.points}"))
    return Item(spans=tuple(spans))


def _games_list(info: DoubleEliminationInfo, games: tuple[Game, ...]) -> ItemList:
    return ItemList(items=tuple(game_item(g, info.game_type(g)) for g in games))


def _placement_nodes(snapshot: CompetitionSnapshot) -> list[Node]:
    info = snapshot.double_elimination
    if info is None:
        return []
    placements = determine_placements(info)
    if placements is None:
        return []
    return [ItemList(items=tuple(Item.of(line) for line in placements.lines()))]


def _double_elimination_nodes(info: DoubleEliminationInfo) -> list[Node]:
    buckets = bucket_games(info)
    nodes: list[Node] = [Heading("Double elimination tournament", 2)]

    if buckets.final:
        nodes += [Heading("Final games", 3), _games_list(info, buckets.final)]

    for title, games, queue in (
        ("No games lost", buckets.no_loss, info.no_loss_queue),
        ("1 game lost", buckets.one_loss, info.one_loss_queue),
    ):
        nodes.append(Heading(title, 3))
        nodes.append(_games_list(info, games))
        nodes.append(ItemList(
            items=tuple(Item.of(matchup_text(m)) for m in next_matchups(queue)),
        ))

    nodes.append(Heading("Eliminated", 3))
    nodes.append(ItemList(
        items=tuple(Item.of(r.name) for r in info.eliminated_robots),
        ordered=True,
    ))
    return nodes


def _swiss_nodes(snapshot: CompetitionSnapshot) -> list[Node]:
    swiss = snapshot.swiss
    nodes: list[Node] = [
        Heading("Swiss-system tournament", 2),
        Heading("Scoreboard", 3),
        Table(
            columns=("Name", "Score", "Tiebreak score"),
            rows=tuple(
                (s.robot.name, format_number(s.score), format_number(s.tie_break_score))
                for s in rank_scores(swiss.robot_scores)
            ),
        ),
    ]

    for swiss_round in group_rounds(swiss, snapshot.robots):
        items = [game_item(g) for g in swiss_round.games]
        if swiss_round.bye_robot is not None:
            items.append(Item.of(bye_text(swiss_round.bye_robot)))
        nodes.append(Heading(swiss_round.label, 3))
        nodes.append(ItemList(items=tuple(items)))
    return nodes


def build_document(snapshot: CompetitionSnapshot) -> Document | None:
    """Build the results document; None when no competition is configured."""
    if not snapshot.is_configured:
        return None

    nodes: list[Node] = [Heading(snapshot.name, 1)]
    nodes += _placement_nodes(snapshot)
    if snapshot.double_elimination is not None:
        nodes += _double_elimination_nodes(snapshot.double_elimination)
    if snapshot.swiss is not None:
        nodes += _swiss_nodes(snapshot)
    return Document(title=snapshot.name, children=tuple(nodes))


def _status_document(text: str) -> Document:
    return Document(title=text, children=(Paragraph(text),))


# ── CompetitionView ──────────────────────────────────────────────

class CompetitionView:
    """Holds the snapshot cell and drives it from fetch completions."""

    def __init__(self, source: SnapshotSource) -> None:
        self.source = source
        self.cell = SnapshotCell()

    @property
    def state(self) -> ViewState:
        return self.cell.state

    async def refresh(self) -> bool:
        """Fetch a new snapshot and swap it in.

        Returns False when a fetch is already outstanding. A 404 means no
        competition is configured and yields the empty snapshot; any other
        failure is logged, recorded in the cell and re-raised.
        """
        if self.cell.state is ViewState.LOADING:
            logger.debug("Fetch already in flight, skipping refresh")
            return False

        self.cell = self.cell.loading()
        try:
            record = await self.source.fetch()
            snapshot = CompetitionSnapshot.from_record(record)
        except FetchError as exc:
            if exc.not_found:
                self.cell = self.cell.ready(CompetitionSnapshot.empty())
                return True
            logger.error("Refreshing competition from %s failed: %s", self.source.location, exc)
            self.cell = self.cell.failed(exc)
            raise
        except SnapshotError as exc:
            logger.error("Competition snapshot from %s is malformed: %s", self.source.location, exc)
            self.cell = self.cell.failed(exc)
            raise
        except Exception as exc:
            logger.exception("Unexpected error refreshing competition from %s", self.source.location)
            self.cell = self.cell.failed(exc)
            raise

        self.cell = self.cell.ready(snapshot)
        logger.debug("Snapshot v%d: %s", self.cell.version, snapshot.name)
        return True

    def render(self) -> Document | None:
        cell = self.cell
        if cell.snapshot is None:
            if cell.state is ViewState.ERROR:
                return _status_document(UNAVAILABLE_TEXT)
            return _status_document(LOADING_TEXT)
        return build_document(cell.snapshot)
