from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Optional

from rich.console import Console
from rich.table import Table

from .models import ClipType

if TYPE_CHECKING:  # pragma: no cover
    from .models import CrawlStats
    from .persistence import LinkStore


SUCCESS_COLOR = "green"
WARNING_COLOR = "yellow"
ERROR_COLOR = "red"
DIM_COLOR = "dim"

FOUND_SYMBOL = "✓"
MISSING_SYMBOL = "✗"
EXPIRED_SYMBOL = "⏰"
SKIP_SYMBOL = "⊘"


class SummaryTableRenderer:
    """Renders crawl results as Rich tables."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    @staticmethod
    def _colorize(value: int, color: str, symbol: str = "") -> str:
        if value == 0:
            return f"[{DIM_COLOR}]{value}[/{DIM_COLOR}]"
        prefix = f"{symbol} " if symbol else ""
        return f"[{color}]{prefix}{value}[/{color}]"

    def render_run_recap_table(self, stats: CrawlStats, duration: float | None = None) -> Table:
        table = Table(title="Run Recap", show_header=True, header_style="bold")
        table.add_column("Metric", style="cyan", no_wrap=True)
        table.add_column("Value", justify="right")

        if duration is not None:
            table.add_row("Duration", f"{duration:.2f}s")
        table.add_row("Searched", str(stats.candidates))
        table.add_row("Queries", str(stats.queries))
        table.add_row("Found", self._colorize(stats.found, SUCCESS_COLOR, FOUND_SYMBOL))
        table.add_row("  Standalone", self._colorize(stats.standalone, SUCCESS_COLOR))
        table.add_row("  Broadcast", self._colorize(stats.broadcast, SUCCESS_COLOR))
        table.add_row("Not Found", self._colorize(stats.not_found, WARNING_COLOR, MISSING_SYMBOL))
        table.add_row("Window Expired", self._colorize(stats.expired, WARNING_COLOR, EXPIRED_SYMBOL))
        table.add_row("Already Linked", self._colorize(stats.skipped_resolved, DIM_COLOR, SKIP_SYMBOL))
        return table

    def render_fixture_table(self, stats: CrawlStats) -> Optional[Table]:
        """One row per searched fixture; None when nothing was searched."""
        if not stats.outcomes:
            return None

        table = Table(title="Fixtures", show_header=True, header_style="bold")
        table.add_column("Matchday", justify="right")
        table.add_column("Fixture", style="cyan")
        table.add_column("Queries", justify="right")
        table.add_column("Results", justify="right")
        table.add_column("Status")
        table.add_column("Title", overflow="fold")

        for outcome in stats.outcomes:
            if outcome.link is None:
                status = f"[{WARNING_COLOR}]{MISSING_SYMBOL} not found[/{WARNING_COLOR}]"
                title = ""
            else:
                status = f"[{SUCCESS_COLOR}]{FOUND_SYMBOL} {outcome.link.type.value}[/{SUCCESS_COLOR}]"
                title = outcome.link.title
            table.add_row(
                str(outcome.fixture.matchday),
                outcome.fixture.label,
                str(outcome.queries),
                str(outcome.results),
                status,
                title,
            )
        return table

    def render_matchday_table(self, results: Dict[int, CrawlStats]) -> Table:
        table = Table(title="Matchdays", show_header=True, header_style="bold")
        table.add_column("Matchday", justify="right")
        table.add_column("Searched", justify="right")
        table.add_column("Found", justify="right")
        table.add_column("Not Found", justify="right")
        table.add_column("Already Linked", justify="right")
        for matchday, stats in sorted(results.items()):
            table.add_row(
                str(matchday),
                str(stats.candidates),
                self._colorize(stats.found, SUCCESS_COLOR, FOUND_SYMBOL),
                self._colorize(stats.not_found, WARNING_COLOR, MISSING_SYMBOL),
                str(stats.skipped_resolved),
            )
        return table

    def render_links_table(self, store: LinkStore, matchday: Optional[int] = None) -> Table:
        table = Table(title="Stored Links", show_header=True, header_style="bold")
        table.add_column("Fixture", style="cyan")
        table.add_column("Type")
        table.add_column("Found At")
        table.add_column("URL", overflow="fold")

        prefix = f"{matchday}: " if matchday is not None else ""
        for key, entry in sorted(store.items()):
            if prefix and not key.startswith(prefix):
                continue
            color = SUCCESS_COLOR if entry.type == ClipType.STANDALONE.value else WARNING_COLOR
            table.add_row(key, f"[{color}]{entry.type or '?'}[/{color}]", entry.found_at or "", entry.url)
        return table

    def print_run_summary(self, stats: CrawlStats, duration: float | None = None) -> None:
        self.console.print()
        self.console.print(self.render_run_recap_table(stats, duration))
        fixture_table = self.render_fixture_table(stats)
        if fixture_table is not None:
            self.console.print()
            self.console.print(fixture_table)
