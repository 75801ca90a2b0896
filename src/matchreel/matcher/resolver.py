"""Fixture resolution: from ordered keyword queries to one linked clip.

For each query (most specific first) the search results are scanned in their
original order. A standalone highlight ends the scan immediately; the first
broadcast segment is remembered as a fallback while scanning continues. As
soon as a query produces any winner no further queries are issued.
"""

from __future__ import annotations

import datetime as dt
import logging
from collections import Counter
from dataclasses import dataclass, field

from ..config import DEFAULT_VIDEO_URL_TEMPLATE, MatchRules
from ..models import ClipType, Fixture, ResolvedLink, TeamDirectory
from ..search.client import ClipSearcher
from ..search.models import RawClip
from ..utils import utc_now
from .classifier import classify_clip
from .keywords import resolve_queries
from .validator import rejection_reason

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class ScanResult:
    standalone: RawClip | None = None
    broadcast: RawClip | None = None
    accepted: int = 0
    unclassified: int = 0
    rejections: Counter = field(default_factory=Counter)

    @property
    def winner(self) -> tuple[RawClip, ClipType] | None:
        if self.standalone is not None:
            return self.standalone, ClipType.STANDALONE
        if self.broadcast is not None:
            return self.broadcast, ClipType.BROADCAST
        return None


@dataclass(slots=True)
class QueryAttempt:
    query: str
    result_count: int
    scan: ScanResult

    @property
    def winner_type(self) -> ClipType | None:
        winner = self.scan.winner
        return winner[1] if winner else None


@dataclass(slots=True)
class MatchResolution:
    fixture: Fixture
    link: ResolvedLink | None
    attempts: list[QueryAttempt] = field(default_factory=list)

    @property
    def result_count(self) -> int:
        return sum(attempt.result_count for attempt in self.attempts)


def scan_results(
    clips: list[RawClip],
    fixture: Fixture,
    teams: TeamDirectory,
    rules: MatchRules,
) -> ScanResult:
    """Scan one query's result set for the best clip."""
    scan = ScanResult()
    for clip in clips:
        reason = rejection_reason(clip, fixture, teams, rules)
        if reason is not None:
            scan.rejections[reason] += 1
            continue

        scan.accepted += 1
        clip_type = classify_clip(clip, rules)
        if clip_type is ClipType.STANDALONE:
            scan.standalone = clip
            break
        if clip_type is ClipType.BROADCAST:
            if scan.broadcast is None:
                scan.broadcast = clip
            continue
        scan.unclassified += 1
    return scan


def run_resolution(
    fixture: Fixture,
    teams: TeamDirectory,
    searcher: ClipSearcher,
    rules: MatchRules,
    *,
    url_template: str = DEFAULT_VIDEO_URL_TEMPLATE,
    now: dt.datetime | None = None,
) -> MatchResolution:
    """Resolve a fixture and keep a record of every query issued."""
    resolution = MatchResolution(fixture=fixture, link=None)

    for query in resolve_queries(fixture, teams):
        clips = searcher.search(query)
        scan = scan_results(clips, fixture, teams, rules)
        resolution.attempts.append(QueryAttempt(query=query, result_count=len(clips), scan=scan))
        LOGGER.debug(
            'Query "%s": %d results, %d accepted, rejected %s',
            query,
            len(clips),
            scan.accepted,
            dict(scan.rejections) or "none",
        )

        winner = scan.winner
        if winner is None:
            continue

        clip, clip_type = winner
        resolution.link = ResolvedLink(
            fixture_key=fixture.key,
            url=url_template.format(urn=clip.urn),
            found_at=now or utc_now(),
            title=clip.title,
            urn=clip.urn,
            type=clip_type,
        )
        break

    return resolution


def resolve_fixture(
    fixture: Fixture,
    teams: TeamDirectory,
    searcher: ClipSearcher,
    rules: MatchRules,
    *,
    url_template: str = DEFAULT_VIDEO_URL_TEMPLATE,
    now: dt.datetime | None = None,
) -> ResolvedLink | None:
    """Return the link for the best clip of a fixture, or None when nothing qualifies."""
    return run_resolution(
        fixture,
        teams,
        searcher,
        rules,
        url_template=url_template,
        now=now,
    ).link
