"""CLI entry point: python -m robotourney [source]"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler

from robotourney.config import ViewerConfig, apply_env_overrides, load_config
from robotourney.core.fetch import FetchError, open_source
from robotourney.core.snapshot import SnapshotError
from robotourney.live import run_live, run_once
from robotourney.view import CompetitionView


def _setup_logging(level: str, console: Console) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="robotourney",
        description="Robot-combat competition results viewer",
    )
    parser.add_argument(
        "source",
        nargs="?",
        default=None,
        help="URL or path of competition-summary.json (default: from config)",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="Path to viewer YAML config file",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        default=False,
        help="Fetch once, print the results and exit",
    )
    parser.add_argument(
        "--html",
        type=Path,
        default=None,
        help="Also write a static HTML page after each refresh",
    )
    parser.add_argument(
        "--interval",
        type=float,
        default=None,
        help="Seconds between refreshes (default: 5)",
    )
    parser.add_argument(
        "--screen",
        action="store_true",
        default=False,
        help="Use the full terminal screen",
    )
    return parser


def resolve_config(args: argparse.Namespace) -> ViewerConfig:
    """File config, then environment, then command-line flags."""
    if args.config is not None:
        if not args.config.exists():
            print(f"Error: config file not found: {args.config}", file=sys.stderr)
            sys.exit(1)
        config = load_config(args.config)
    else:
        config = ViewerConfig()
    apply_env_overrides(config)

    if args.source:
        config.source = args.source
    if args.html:
        config.html_output = args.html
    if args.interval is not None:
        config.refresh_interval_s = args.interval
    if args.screen:
        config.screen = True
    return config


def main(argv: list[str] | None = None) -> None:
    load_dotenv()
    args = build_parser().parse_args(argv)
    config = resolve_config(args)

    console = Console()
    _setup_logging(config.log_level, console)

    view = CompetitionView(open_source(config.source, timeout_s=config.timeout_s))

    if args.once:
        try:
            asyncio.run(run_once(view, console, config.html_output))
        except (FetchError, SnapshotError) as exc:
            print(f"Error: {exc}", file=sys.stderr)
            sys.exit(1)
        return

    try:
        asyncio.run(run_live(view, console, config))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
