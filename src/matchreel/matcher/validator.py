"""Acceptance checks applied to a search result before classification."""

from __future__ import annotations

from ..config import MatchRules
from ..models import Fixture, TeamDirectory
from ..search.models import RawClip
from .date_utils import parse_calendar_date, within_days_after
from .keywords import mention_terms

REASON_NO_TEAM = "no team mentioned"
REASON_NO_DATE = "missing date"
REASON_OUT_OF_WINDOW = "outside date window"
REASON_TOO_SHORT = "too short"
REASON_BLACKLISTED = "blacklisted title"


def mentions_fixture(clip: RawClip, fixture: Fixture, teams: TeamDirectory) -> bool:
    """Return True when either side of the fixture is named in the clip text."""
    text = clip.searchable_text.lower()
    home_terms, away_terms = mention_terms(fixture, teams)
    return any(term in text for term in home_terms) or any(term in text for term in away_terms)


def blacklisted_term(title: str, blacklist: list[str]) -> str | None:
    lowered = title.lower()
    for term in blacklist:
        if term and term.lower() in lowered:
            return term
    return None


def rejection_reason(
    clip: RawClip,
    fixture: Fixture,
    teams: TeamDirectory,
    rules: MatchRules,
) -> str | None:
    """Return why a clip cannot belong to the fixture, or None when it is acceptable.

    Checks run in a fixed order: team mention, date window, duration, title
    blacklist. The first failing check is reported.
    """
    if not mentions_fixture(clip, fixture, teams):
        return REASON_NO_TEAM

    clip_date = parse_calendar_date(clip.raw_date)
    if clip_date is None:
        return REASON_NO_DATE
    if not within_days_after(clip_date, fixture.date, rules.max_days_after):
        return REASON_OUT_OF_WINDOW

    if clip.duration < rules.min_duration_ms:
        return REASON_TOO_SHORT

    if blacklisted_term(clip.title, rules.title_blacklist) is not None:
        return REASON_BLACKLISTED

    return None


def is_acceptable(
    clip: RawClip,
    fixture: Fixture,
    teams: TeamDirectory,
    rules: MatchRules,
) -> bool:
    return rejection_reason(clip, fixture, teams, rules) is None
