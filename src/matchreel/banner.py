from __future__ import annotations

from dataclasses import dataclass

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .config import AppConfig
from .version import __version__


@dataclass
class BannerInfo:
    version: str
    mode: str
    verbose: bool
    schedule_path: str
    teams_path: str
    links_path: str
    api_base_url: str
    search_window_hours: float


def build_banner_info(config: AppConfig, *, mode: str, verbose: bool = False) -> BannerInfo:
    """Build a BannerInfo instance from AppConfig and runtime settings."""
    settings = config.settings
    return BannerInfo(
        version=__version__,
        mode=mode,
        verbose=verbose,
        schedule_path=str(settings.schedule_path),
        teams_path=str(settings.teams_path),
        links_path=str(settings.links_path),
        api_base_url=config.search.api_base_url,
        search_window_hours=settings.search_window_hours,
    )


def print_startup_banner(info: BannerInfo, console: Console) -> None:
    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column("Key", style="cyan bold", no_wrap=True)
    table.add_column("Value", style="white")

    table.add_row("Version", f"[bold]{info.version}[/bold]")

    mode = f"[yellow]{info.mode.upper()}[/yellow]" if info.mode != "scheduled" else "[green]SCHEDULED[/green]"
    if info.verbose:
        mode += " [cyan]VERBOSE[/cyan]"
    table.add_row("Mode", mode)

    table.add_row("Schedule", info.schedule_path)
    table.add_row("Teams", info.teams_path)
    table.add_row("Links", info.links_path)
    table.add_row("Search API", info.api_base_url)
    table.add_row("Search Window", f"{info.search_window_hours:g}h after search start")

    console.print()
    console.print(
        Panel(
            table,
            title="[bold white]MATCHREEL[/bold white]",
            border_style="blue",
            padding=(1, 2),
        )
    )
    console.print()
