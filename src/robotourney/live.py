"""Refresh loop — fetch on a fixed interval and repaint a rich Live display."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from rich.console import Console, Group
from rich.live import Live
from rich.text import Text

from robotourney.config import ViewerConfig
from robotourney.core.fetch import FetchError
from robotourney.core.snapshot import SnapshotError
from robotourney.reporting.console import to_renderable
from robotourney.reporting.html import write_html
from robotourney.view import CompetitionView, ViewState

logger = logging.getLogger(__name__)


def build_footer(view: CompetitionView, refresh_interval_s: float) -> Text:
    """Status bar."""
    footer = Text()
    if view.state is ViewState.ERROR:
        footer.append(" STALE ", style="bold white on red")
        footer.append(f"  Last fetch failed: {view.cell.error}", style="red")
    else:
        footer.append(" LIVE ", style="bold white on green")
    footer.append(f"  Refreshing every {refresh_interval_s:g}s", style="dim")
    footer.append("  |  Ctrl+C to exit", style="dim")
    return footer


def render_screen(view: CompetitionView, refresh_interval_s: float) -> Group:
    return Group(to_renderable(view.render()), Text(), build_footer(view, refresh_interval_s))


def _export(view: CompetitionView, html_output: Path | None) -> None:
    if html_output is None:
        return
    path = write_html(view.render(), html_output)
    logger.debug("Wrote %s", path)


async def refresh_and_export(view: CompetitionView, html_output: Path | None = None) -> bool:
    """One refresh cycle. Failures propagate; they are already logged."""
    refreshed = await view.refresh()
    if refreshed:
        _export(view, html_output)
    return refreshed


async def run_once(view: CompetitionView, console: Console, html_output: Path | None = None) -> None:
    await refresh_and_export(view, html_output)
    console.print(to_renderable(view.render()))


async def run_live(
    view: CompetitionView,
    console: Console,
    config: ViewerConfig,
    max_cycles: int | None = None,
) -> None:
    """Refresh every config.refresh_interval_s until interrupted."""
    interval = config.refresh_interval_s
    cycles = 0
    with Live(
        render_screen(view, interval),
        console=console,
        refresh_per_second=4,
        screen=config.screen,
    ) as live:
        while max_cycles is None or cycles < max_cycles:
            try:
                await refresh_and_export(view, config.html_output)
            except (FetchError, SnapshotError):
                pass  # logged by the view, shown in the footer; next cycle fetches again
            live.update(render_screen(view, interval))
            cycles += 1
            if max_cycles is None or cycles < max_cycles:
                await asyncio.sleep(interval)
