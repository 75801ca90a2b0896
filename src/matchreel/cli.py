from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Sequence

from rich.console import Console

from .banner import build_banner_info, print_startup_banner
from .config import CONFIG_ENV_VAR, AppConfig, load_config
from .crawler import Crawler
from .errors import DataLoadError
from .logging_utils import configure_logging
from .persistence import LinkStore
from .summary_table import SummaryTableRenderer
from .version import __version__

LOGGER = logging.getLogger(__name__)


def _add_path_overrides(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--schedule", type=Path, help="Schedule file (overrides settings.schedule_path)")
    parser.add_argument("--teams", type=Path, help="Team keyword file (overrides settings.teams_path)")
    parser.add_argument("--links", type=Path, help="Link store file (overrides settings.links_path)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="matchreel",
        description="Find highlight clips for scheduled fixtures and store their links.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"Path to the YAML settings file (default: ${CONFIG_ENV_VAR} or ./matchreel.yaml)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--log-level", default=None, help="Explicit log level (DEBUG, INFO, WARNING, ...)")
    parser.add_argument("--log-file", type=Path, default=None, help="Also write logs to this file")

    sub = parser.add_subparsers(dest="command", required=True)

    crawl = sub.add_parser("crawl", help="Search for fixtures whose search window is open")
    crawl.add_argument(
        "--test",
        type=int,
        metavar="MATCHDAY",
        default=None,
        help="Search every unresolved fixture of MATCHDAY, ignoring search-start times",
    )
    _add_path_overrides(crawl)

    crawl_all = sub.add_parser("crawl-all", help="Run a test-mode crawl for each matchday in a range")
    crawl_all.add_argument("--from", dest="from_matchday", type=int, default=None, help="First matchday")
    crawl_all.add_argument("--to", dest="to_matchday", type=int, default=None, help="Last matchday")
    _add_path_overrides(crawl_all)

    links = sub.add_parser("links", help="Show the stored links")
    links.add_argument("--matchday", type=int, default=None, help="Only show this matchday")
    links.add_argument("--links", type=Path, help="Link store file (overrides settings.links_path)")

    return parser


def _log_level(args: argparse.Namespace) -> int | str:
    if args.log_level:
        return args.log_level
    return logging.DEBUG if args.verbose else logging.INFO


def _load_app_config(args: argparse.Namespace) -> AppConfig:
    config = load_config(args.config)
    settings = config.settings
    if getattr(args, "schedule", None):
        settings.schedule_path = args.schedule
    if getattr(args, "teams", None):
        settings.teams_path = args.teams
    if getattr(args, "links", None):
        settings.links_path = args.links
    return config


def run_crawl(args: argparse.Namespace, *, console: Console | None = None) -> int:
    console = console or Console()
    config = _load_app_config(args)
    mode = f"test (matchday {args.test})" if args.test is not None else "scheduled"
    print_startup_banner(build_banner_info(config, mode=mode, verbose=args.verbose), console)

    started = time.perf_counter()
    stats = Crawler(config).run(test_matchday=args.test)
    SummaryTableRenderer(console).print_run_summary(stats, time.perf_counter() - started)
    return 0


def run_crawl_all(args: argparse.Namespace, *, console: Console | None = None) -> int:
    console = console or Console()
    config = _load_app_config(args)
    print_startup_banner(build_banner_info(config, mode="test (all matchdays)", verbose=args.verbose), console)

    crawler = Crawler(config)
    matchdays = [
        matchday
        for matchday in crawler.schedule_matchdays()
        if (args.from_matchday is None or matchday >= args.from_matchday)
        and (args.to_matchday is None or matchday <= args.to_matchday)
    ]
    if not matchdays:
        LOGGER.warning("No matchdays in the schedule fall inside the requested range")
        return 0

    results = crawler.run_matchdays(matchdays)
    console.print()
    console.print(SummaryTableRenderer(console).render_matchday_table(results))
    return 0


def run_links(args: argparse.Namespace, *, console: Console | None = None) -> int:
    console = console or Console()
    config = _load_app_config(args)
    store = LinkStore(config.settings.links_path)
    console.print(SummaryTableRenderer(console).render_links_table(store, args.matchday))
    if store.last_updated:
        console.print(f"[dim]Last updated: {store.last_updated}[/dim]")
    return 0


COMMANDS = {
    "crawl": run_crawl,
    "crawl-all": run_crawl_all,
    "links": run_links,
}


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        configure_logging(_log_level(args), log_file=args.log_file)
    except ValueError as exc:
        parser.error(str(exc))

    try:
        return COMMANDS[args.command](args)
    except DataLoadError as exc:
        LOGGER.error("Aborting: %s", exc)
        return 1
    except KeyboardInterrupt:
        LOGGER.warning("Interrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
