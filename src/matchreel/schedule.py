"""Schedule loading and the per-run eligibility gate.

A fixture is searched at most once per scheduling cycle: in normal mode it is
a candidate only while ``now`` lies inside ``[search_start, search_start +
window]``. Test mode targets one matchday and ignores timing entirely. In both
modes fixtures that already have a stored link are skipped.
"""

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Protocol

from .errors import DataLoadError
from .logging_utils import render_fields_block
from .matcher.date_utils import parse_calendar_date, parse_timestamp
from .models import Fixture
from .utils import load_data_file

LOGGER = logging.getLogger(__name__)

DEFAULT_SEARCH_WINDOW_HOURS = 6.0


class LinkLookup(Protocol):
    def has_link(self, key: str) -> bool: ...


@dataclass(slots=True)
class CandidateSelection:
    candidates: list[Fixture] = field(default_factory=list)
    expired: list[Fixture] = field(default_factory=list)
    already_resolved: list[Fixture] = field(default_factory=list)
    pending: list[Fixture] = field(default_factory=list)


def _build_fixture(matchday: int, data: Any, position: str) -> Fixture:
    if not isinstance(data, dict):
        raise ValueError(f"{position} must be a mapping")
    home = str(data.get("home") or "").strip()
    away = str(data.get("away") or "").strip()
    if not home or not away:
        raise ValueError(f"{position} requires both 'home' and 'away'")
    date = parse_calendar_date(data.get("date"))
    if date is None:
        raise ValueError(f"{position} has a missing or invalid 'date'")
    return Fixture(
        matchday=matchday,
        home=home,
        away=away,
        date=date,
        search_start=parse_timestamp(data.get("searchStart")),
    )


def build_schedule(data: dict[str, Any]) -> list[Fixture]:
    matchdays = data.get("matchdays")
    if not isinstance(matchdays, list):
        raise ValueError("'matchdays' must be a list")

    fixtures: list[Fixture] = []
    for index, entry in enumerate(matchdays):
        if not isinstance(entry, dict):
            raise ValueError(f"'matchdays[{index}]' must be a mapping")
        try:
            matchday = int(entry["matchday"])
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"'matchdays[{index}].matchday' must be an integer") from exc
        for position, match in enumerate(entry.get("matches") or []):
            fixtures.append(_build_fixture(matchday, match, f"'matchdays[{index}].matches[{position}]'"))
    return fixtures


def load_schedule(path: Path) -> list[Fixture]:
    """Load every fixture of the schedule file.

    Raises:
        DataLoadError: If the file is missing or cannot be interpreted.
    """
    data = load_data_file(path)
    try:
        return build_schedule(data)
    except ValueError as exc:
        raise DataLoadError(path, str(exc)) from exc


def matchdays_of(fixtures: Iterable[Fixture]) -> list[int]:
    return sorted({fixture.matchday for fixture in fixtures})


def select_candidates(
    fixtures: Iterable[Fixture],
    links: LinkLookup,
    *,
    now: dt.datetime,
    window_hours: float = DEFAULT_SEARCH_WINDOW_HOURS,
    test_matchday: int | None = None,
) -> CandidateSelection:
    """Partition the schedule into this run's candidates and the rest.

    Args:
        fixtures: Every fixture of the schedule
        links: Store consulted for already-resolved fixtures
        now: Aware reference time
        window_hours: Follow-up window after a fixture's search start
        test_matchday: Restrict to this matchday and ignore timing

    Returns:
        CandidateSelection with candidates in schedule order
    """
    selection = CandidateSelection()
    window = dt.timedelta(hours=window_hours)

    for fixture in fixtures:
        if test_matchday is not None and fixture.matchday != test_matchday:
            continue
        if links.has_link(fixture.key):
            selection.already_resolved.append(fixture)
            continue
        if test_matchday is not None:
            selection.candidates.append(fixture)
            continue
        if fixture.search_start is None:
            selection.pending.append(fixture)
            continue

        search_end = fixture.search_start + window
        if fixture.search_start <= now <= search_end:
            selection.candidates.append(fixture)
        elif now > search_end:
            selection.expired.append(fixture)
            LOGGER.debug(
                render_fields_block(
                    "Search Window Expired",
                    {
                        "Fixture": fixture.key,
                        "Search Start": fixture.search_start.isoformat(),
                        "Window": f"{window_hours:g}h",
                    },
                )
            )
        else:
            selection.pending.append(fixture)

    return selection
