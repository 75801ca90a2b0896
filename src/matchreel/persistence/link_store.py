"""JSON-backed store of resolved fixture links.

The whole document is read once when the store is opened and written back
in one piece by :meth:`LinkStore.save`, which is a no-op unless a link was
recorded since loading.

File layout::

    {
      "lastUpdated": "2024-03-10T20:15:00+00:00",
      "matches": {
        "5: FC A - FC B": {"url": "...", "foundAt": "...", "title": "...",
                           "urn": "...", "type": "Standalone"}
      }
    }
"""

from __future__ import annotations

import datetime as dt
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..errors import DataLoadError
from ..models import ResolvedLink
from ..utils import dump_json_file, utc_now

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class StoredLink:
    """A persisted link entry as read back from disk."""

    url: str
    found_at: str | None = None
    title: str = ""
    urn: str = ""
    type: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StoredLink:
        return cls(
            url=str(data.get("url") or ""),
            found_at=data.get("foundAt"),
            title=str(data.get("title") or ""),
            urn=str(data.get("urn") or ""),
            type=str(data.get("type") or ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "foundAt": self.found_at,
            "title": self.title,
            "urn": self.urn,
            "type": self.type,
        }


class LinkStore:
    def __init__(self, path: Path) -> None:
        self.path = path
        self.last_updated: str | None = None
        self._entries: dict[str, StoredLink] = {}
        self._dirty = False
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            LOGGER.debug("Link store %s does not exist yet; starting empty", self.path)
            return

        try:
            with self.path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except (OSError, ValueError) as exc:
            raise DataLoadError(self.path, f"unreadable link store ({exc})") from exc

        if not isinstance(payload, dict):
            raise DataLoadError(self.path, "link store must be a JSON object")

        self.last_updated = payload.get("lastUpdated")
        matches = payload.get("matches") or {}
        if not isinstance(matches, dict):
            raise DataLoadError(self.path, "'matches' must be a JSON object")

        for key, data in matches.items():
            if not isinstance(data, dict):
                LOGGER.warning("Ignoring malformed link entry %r in %s", key, self.path)
                continue
            self._entries[str(key)] = StoredLink.from_dict(data)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    @property
    def dirty(self) -> bool:
        return self._dirty

    def get(self, key: str) -> StoredLink | None:
        return self._entries.get(key)

    def items(self) -> list[tuple[str, StoredLink]]:
        return list(self._entries.items())

    def has_link(self, key: str) -> bool:
        """Return True when the fixture already has a link with a non-empty url."""
        entry = self._entries.get(key)
        return bool(entry and entry.url)

    def record(self, link: ResolvedLink) -> bool:
        """Store a newly resolved link.

        Links are never replaced: recording a fixture that already has a url
        is ignored and returns False.
        """
        if self.has_link(link.fixture_key):
            LOGGER.debug("Link for %s already stored; keeping existing entry", link.fixture_key)
            return False
        self._entries[link.fixture_key] = StoredLink.from_dict(link.to_dict())
        self._dirty = True
        return True

    def save(self, *, now: dt.datetime | None = None) -> bool:
        """Write the store if anything changed. Returns True when a write happened."""
        if not self._dirty:
            return False
        self.last_updated = (now or utc_now()).isoformat()
        document = {
            "lastUpdated": self.last_updated,
            "matches": {key: entry.to_dict() for key, entry in self._entries.items()},
        }
        dump_json_file(self.path, document)
        self._dirty = False
        return True
