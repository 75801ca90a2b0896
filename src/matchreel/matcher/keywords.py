"""Search query derivation for fixtures."""

from __future__ import annotations

from ..models import Fixture, TeamDirectory


def resolve_queries(fixture: Fixture, teams: TeamDirectory) -> list[str]:
    """Build the ordered, de-duplicated search queries for a fixture.

    The order is the search priority:

    1. both primary keywords joined (most specific)
    2. derby overrides registered for the pairing, in either direction
    3. every home keyword, then every away keyword

    A team without configured keywords contributes its identifier instead.
    """
    home = teams.entry(fixture.home)
    away = teams.entry(fixture.away)

    queries: list[str] = []
    seen: set[str] = set()

    def _append(query: str) -> None:
        cleaned = query.strip()
        if cleaned and cleaned not in seen:
            seen.add(cleaned)
            queries.append(cleaned)

    _append(f"{home.primary_keyword} {away.primary_keyword}")
    for keyword in teams.derby_keywords(fixture.home, fixture.away):
        _append(keyword)
    for keyword in home.search_terms + away.search_terms:
        _append(keyword)
    return queries


def mention_terms(fixture: Fixture, teams: TeamDirectory) -> tuple[list[str], list[str]]:
    """Return the lower-cased terms that identify each side of a fixture in clip text."""

    def _terms(team: str) -> list[str]:
        entry = teams.entry(team)
        terms = [keyword.lower() for keyword in entry.keywords if keyword.strip()]
        terms.append(team.lower())
        return terms

    return _terms(fixture.home), _terms(fixture.away)
