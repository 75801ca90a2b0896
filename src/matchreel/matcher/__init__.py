"""Matcher package: the fixture-to-clip matching engine.

This package turns loose text, date and duration signals from search
results into a confident association with one scheduled fixture:
- Keyword query derivation (team keywords and derby overrides)
- Clip validation (team mention, date window, duration, title blacklist)
- Clip classification (standalone highlight vs. broadcast segment)
- Per-fixture resolution across the ordered queries

Public API:
- resolve_queries: Ordered search queries for a fixture
- is_acceptable / rejection_reason: Clip acceptance checks
- classify_clip: Standalone / Broadcast / Unclassified
- resolve_fixture / run_resolution: Resolve one fixture to a link

Example:
    from matchreel.matcher import resolve_fixture

    link = resolve_fixture(fixture, teams, search_client, config.rules)
    if link:
        print(link.url)
"""

from .classifier import classify_clip
from .date_utils import parse_calendar_date, parse_timestamp, within_days_after
from .keywords import mention_terms, resolve_queries
from .resolver import MatchResolution, QueryAttempt, ScanResult, resolve_fixture, run_resolution, scan_results
from .validator import is_acceptable, mentions_fixture, rejection_reason

__all__ = [
    "MatchResolution",
    "QueryAttempt",
    "ScanResult",
    "classify_clip",
    "is_acceptable",
    "mention_terms",
    "mentions_fixture",
    "parse_calendar_date",
    "parse_timestamp",
    "rejection_reason",
    "resolve_fixture",
    "resolve_queries",
    "run_resolution",
    "scan_results",
    "within_days_after",
]
