from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional


class ClipType(str, Enum):
    STANDALONE = "Standalone"
    BROADCAST = "Broadcast"
    UNCLASSIFIED = "Unclassified"


@dataclass(frozen=True, slots=True)
class Fixture:
    matchday: int
    home: str
    away: str
    date: dt.date
    search_start: Optional[dt.datetime] = None

    @property
    def key(self) -> str:
        return fixture_key(self.matchday, self.home, self.away)

    @property
    def label(self) -> str:
        return f"{self.home} - {self.away}"


def fixture_key(matchday: int, home: str, away: str) -> str:
    """Return the persistence key for a fixture."""
    return f"{matchday}: {home} - {away}"


@dataclass(slots=True)
class TeamEntry:
    name: str
    keywords: List[str] = field(default_factory=list)

    @property
    def primary_keyword(self) -> str:
        return self.keywords[0] if self.keywords else self.name

    @property
    def search_terms(self) -> List[str]:
        return list(self.keywords) if self.keywords else [self.name]


@dataclass(slots=True)
class TeamDirectory:
    """Keyword reference data for every configured team plus derby overrides."""

    teams: Dict[str, TeamEntry] = field(default_factory=dict)
    derbies: Dict[FrozenSet[str], List[str]] = field(default_factory=dict)

    def entry(self, team: str) -> TeamEntry:
        return self.teams.get(team) or TeamEntry(name=team)

    def derby_keywords(self, home: str, away: str) -> List[str]:
        return list(self.derbies.get(frozenset((home, away)), []))


@dataclass(frozen=True, slots=True)
class ResolvedLink:
    fixture_key: str
    url: str
    found_at: dt.datetime
    title: str
    urn: str
    type: ClipType

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "foundAt": self.found_at.isoformat(),
            "title": self.title,
            "urn": self.urn,
            "type": self.type.value,
        }


@dataclass(slots=True)
class FixtureOutcome:
    fixture: Fixture
    link: Optional[ResolvedLink]
    queries: int
    results: int


@dataclass(slots=True)
class CrawlStats:
    candidates: int = 0
    found: int = 0
    not_found: int = 0
    expired: int = 0
    skipped_resolved: int = 0
    queries: int = 0
    standalone: int = 0
    broadcast: int = 0
    outcomes: List[FixtureOutcome] = field(default_factory=list)

    def register_outcome(self, outcome: FixtureOutcome) -> None:
        self.outcomes.append(outcome)
        self.queries += outcome.queries
        if outcome.link is None:
            self.not_found += 1
            return
        self.found += 1
        if outcome.link.type is ClipType.STANDALONE:
            self.standalone += 1
        else:
            self.broadcast += 1

    def register_expired(self, fixture: Fixture) -> None:
        self.expired += 1
