from __future__ import annotations

import datetime as dt
import logging
from collections.abc import Mapping

from rich.progress import Progress

from .config import AppConfig
from .logging_utils import render_fields_block, render_section_block
from .matcher import MatchResolution, run_resolution
from .models import CrawlStats, Fixture, FixtureOutcome, TeamDirectory
from .persistence import LinkStore
from .schedule import load_schedule, matchdays_of, select_candidates
from .search import ClipSearcher, SearchClient
from .teams import load_team_directory
from .utils import utc_now

LOGGER = logging.getLogger(__name__)


class Crawler:
    """Runs one search pass over the schedule and persists newly found links.

    Reference data (schedule and teams) is loaded first; any failure there
    raises :class:`~matchreel.errors.DataLoadError` before a single request is
    made. The link store is read once at the start of a run and written once
    at the end, only when something new was found.
    """

    def __init__(self, config: AppConfig, *, searcher: ClipSearcher | None = None) -> None:
        self.config = config
        self._searcher = searcher

    @staticmethod
    def _format_log(event: str, fields: Mapping[str, object] | None = None) -> str:
        return render_fields_block(event, fields or {}, pad_top=True)

    def _load_reference_data(self) -> tuple[list[Fixture], TeamDirectory]:
        settings = self.config.settings
        teams = load_team_directory(settings.teams_path)
        fixtures = load_schedule(settings.schedule_path)
        LOGGER.debug(
            self._format_log(
                "Reference Data Loaded",
                {
                    "Schedule": settings.schedule_path,
                    "Fixtures": len(fixtures),
                    "Teams": settings.teams_path,
                    "Team Entries": len(teams.teams),
                    "Derbies": len(teams.derbies),
                },
            )
        )
        return fixtures, teams

    def schedule_matchdays(self) -> list[int]:
        return matchdays_of(load_schedule(self.config.settings.schedule_path))

    def run(self, *, test_matchday: int | None = None, now: dt.datetime | None = None) -> CrawlStats:
        """Search for every eligible fixture and persist what was found.

        Args:
            test_matchday: Process every unresolved fixture of this matchday, ignoring timing
            now: Reference time for the eligibility window (defaults to the current UTC time)
        """
        now = now or utc_now()
        fixtures, teams = self._load_reference_data()
        store = LinkStore(self.config.settings.links_path)

        selection = select_candidates(
            fixtures,
            store,
            now=now,
            window_hours=self.config.settings.search_window_hours,
            test_matchday=test_matchday,
        )

        stats = CrawlStats(candidates=len(selection.candidates), skipped_resolved=len(selection.already_resolved))
        for fixture in selection.expired:
            stats.register_expired(fixture)
        if selection.expired:
            LOGGER.info(
                self._format_log(
                    "Search Windows Expired",
                    {
                        "Fixtures": len(selection.expired),
                        "Window": f"{self.config.settings.search_window_hours:g}h",
                    },
                )
            )

        if not selection.candidates:
            LOGGER.info(
                self._format_log(
                    "No Fixtures To Search",
                    {
                        "Mode": f"test (matchday {test_matchday})" if test_matchday is not None else "scheduled",
                        "Already Linked": len(selection.already_resolved),
                        "Not Yet Due": len(selection.pending),
                    },
                )
            )
            return stats

        LOGGER.info(
            render_section_block(
                "Searching Fixtures",
                [(f"{len(selection.candidates)} fixtures", [fixture.key for fixture in selection.candidates])],
            )
        )

        searcher = self._searcher
        owned_client: SearchClient | None = None
        if searcher is None:
            owned_client = SearchClient(self.config.search)
            searcher = owned_client

        try:
            with Progress(disable=not LOGGER.isEnabledFor(logging.INFO)) as progress:
                task_id = progress.add_task("Searching", total=len(selection.candidates))
                for fixture in selection.candidates:
                    resolution = run_resolution(
                        fixture,
                        teams,
                        searcher,
                        self.config.rules,
                        url_template=self.config.search.video_url_template,
                    )
                    self._register(resolution, store, stats)
                    progress.advance(task_id)
        finally:
            if owned_client is not None:
                owned_client.close()

        if store.save():
            LOGGER.info(
                self._format_log(
                    "Links Saved",
                    {"New Links": stats.found, "Path": self.config.settings.links_path},
                )
            )
        else:
            LOGGER.info(self._format_log("No New Links Found", {"Searched": stats.candidates}))
        return stats

    def run_matchdays(self, matchdays: list[int]) -> dict[int, CrawlStats]:
        """Run one test-mode pass per matchday, each with its own store read and write."""
        results: dict[int, CrawlStats] = {}
        for matchday in matchdays:
            LOGGER.info(self._format_log("Matchday", {"Number": matchday}))
            results[matchday] = self.run(test_matchday=matchday)
        return results

    def _register(self, resolution: MatchResolution, store: LinkStore, stats: CrawlStats) -> None:
        fixture = resolution.fixture
        query_lines = [
            f'"{attempt.query}": {attempt.result_count} results, {attempt.scan.accepted} accepted'
            for attempt in resolution.attempts
        ]
        link = resolution.link

        if link is None:
            LOGGER.info(
                render_section_block("Not Found: " + fixture.key, [("Queries", query_lines)])
            )
        else:
            store.record(link)
            LOGGER.info(
                self._format_log(
                    "Fixture Resolved",
                    {
                        "Fixture": fixture.key,
                        "Type": link.type.value,
                        "Title": link.title,
                        "URL": link.url,
                        "Queries": "; ".join(query_lines),
                    },
                )
            )

        stats.register_outcome(
            FixtureOutcome(
                fixture=fixture,
                link=link,
                queries=len(resolution.attempts),
                results=resolution.result_count,
            )
        )
