from __future__ import annotations

import json
from pathlib import Path

import pytest

from matchreel.search.models import RawClip

SCHEDULE = {
    "matchdays": [
        {
            "matchday": 4,
            "matches": [
                {"home": "FC B", "away": "FC C", "date": "2024-03-03", "searchStart": "2024-03-03T18:00:00+00:00"},
            ],
        },
        {
            "matchday": 5,
            "matches": [
                {"home": "FC A", "away": "FC B", "date": "2024-03-10", "searchStart": "2024-03-10T18:00:00+00:00"},
                {"home": "FC C", "away": "FC D", "date": "2024-03-10", "searchStart": "2024-03-10T18:00:00+00:00"},
            ],
        },
    ]
}

TEAMS = {
    "teams": {
        "FC A": {"keywords": ["FC A", "Club A"]},
        "FC B": {"keywords": ["FC B"]},
    }
}


def _make_clip(urn: str, *, title: str = "FC A - FC B Highlights", show: str = "Sport-Clip", **overrides) -> RawClip:
    payload = {
        "urn": urn,
        "title": title,
        "show": {"title": show},
        "date": "2024-03-10",
        "duration": 95_000,
    }
    payload.update(overrides)
    return RawClip.model_validate(payload)


class RecordingSearcher:
    """Search collaborator returning canned clips per query and recording every call."""

    def __init__(
        self,
        results: dict[str, list[RawClip]] | None = None,
        default: list[RawClip] | None = None,
    ) -> None:
        self.results = results or {}
        self.default = default or []
        self.queries: list[str] = []
        self.closed = False

    def search(self, query: str) -> list[RawClip]:
        self.queries.append(query)
        return list(self.results.get(query, self.default))

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def data_dir(tmp_path) -> Path:
    (tmp_path / "schedule.json").write_text(json.dumps(SCHEDULE), encoding="utf-8")
    (tmp_path / "teams.json").write_text(json.dumps(TEAMS), encoding="utf-8")
    return tmp_path


@pytest.fixture
def make_clip():
    """Factory for search results that pass every check for 5: FC A - FC B by default."""
    return _make_clip


@pytest.fixture
def make_searcher():
    return RecordingSearcher
