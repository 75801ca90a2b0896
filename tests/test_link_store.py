from __future__ import annotations

import datetime as dt
import json

import pytest

from matchreel.errors import DataLoadError
from matchreel.models import ClipType, ResolvedLink
from matchreel.persistence import LinkStore

FOUND_AT = dt.datetime(2024, 3, 10, 20, 15, tzinfo=dt.timezone.utc)


def _link(key: str = "5: FC A - FC B", urn: str = "urn:srf:video:1") -> ResolvedLink:
    return ResolvedLink(
        fixture_key=key,
        url=f"https://www.srf.ch/play/tv/-/video/-?urn={urn}",
        found_at=FOUND_AT,
        title="FC A - FC B 2:1",
        urn=urn,
        type=ClipType.STANDALONE,
    )


def test_missing_file_starts_empty(tmp_path) -> None:
    store = LinkStore(tmp_path / "links.json")

    assert len(store) == 0
    assert store.last_updated is None
    assert not store.has_link("5: FC A - FC B")
    assert store.save() is False
    assert not (tmp_path / "links.json").exists()


def test_record_and_save_round_trip(tmp_path) -> None:
    path = tmp_path / "links.json"
    store = LinkStore(path)

    assert store.record(_link()) is True
    assert store.dirty
    assert store.save(now=FOUND_AT) is True

    document = json.loads(path.read_text(encoding="utf-8"))
    assert document["lastUpdated"] == "2024-03-10T20:15:00+00:00"
    assert document["matches"]["5: FC A - FC B"] == {
        "url": "https://www.srf.ch/play/tv/-/video/-?urn=urn:srf:video:1",
        "foundAt": "2024-03-10T20:15:00+00:00",
        "title": "FC A - FC B 2:1",
        "urn": "urn:srf:video:1",
        "type": "Standalone",
    }

    reloaded = LinkStore(path)
    assert reloaded.has_link("5: FC A - FC B")
    assert reloaded.get("5: FC A - FC B").type == "Standalone"
    assert reloaded.last_updated == "2024-03-10T20:15:00+00:00"


def test_existing_link_is_never_replaced(tmp_path) -> None:
    store = LinkStore(tmp_path / "links.json")
    store.record(_link(urn="urn:srf:video:1"))

    assert store.record(_link(urn="urn:srf:video:2")) is False
    assert store.get("5: FC A - FC B").urn == "urn:srf:video:1"


def test_save_without_changes_does_not_touch_file(tmp_path) -> None:
    path = tmp_path / "links.json"
    store = LinkStore(path)
    store.record(_link())
    store.save(now=FOUND_AT)
    before = path.read_text(encoding="utf-8")

    reopened = LinkStore(path)
    assert reopened.save(now=FOUND_AT + dt.timedelta(hours=1)) is False
    assert path.read_text(encoding="utf-8") == before


def test_entry_with_empty_url_is_not_linked(tmp_path) -> None:
    path = tmp_path / "links.json"
    path.write_text(
        json.dumps({"lastUpdated": None, "matches": {"5: FC A - FC B": {"url": ""}}}),
        encoding="utf-8",
    )
    store = LinkStore(path)

    assert "5: FC A - FC B" in store
    assert not store.has_link("5: FC A - FC B")
    assert store.record(_link()) is True


def test_unrelated_entries_are_preserved(tmp_path) -> None:
    path = tmp_path / "links.json"
    path.write_text(
        json.dumps(
            {
                "lastUpdated": "2024-03-03T20:00:00+00:00",
                "matches": {"4: FC C - FC D": {"url": "https://example.com/x", "type": "Broadcast"}},
            }
        ),
        encoding="utf-8",
    )
    store = LinkStore(path)
    store.record(_link())
    store.save(now=FOUND_AT)

    matches = json.loads(path.read_text(encoding="utf-8"))["matches"]
    assert set(matches) == {"4: FC C - FC D", "5: FC A - FC B"}
    assert matches["4: FC C - FC D"]["url"] == "https://example.com/x"


def test_malformed_entry_is_skipped(tmp_path, caplog) -> None:
    path = tmp_path / "links.json"
    path.write_text(json.dumps({"matches": {"bad": "nope", "5: FC A - FC B": {"url": "x"}}}), encoding="utf-8")

    with caplog.at_level("WARNING"):
        store = LinkStore(path)

    assert len(store) == 1
    assert "bad" in caplog.text


@pytest.mark.parametrize("content", ["{not json", "[]", '{"matches": []}'])
def test_corrupt_store_is_fatal(tmp_path, content) -> None:
    path = tmp_path / "links.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(DataLoadError):
        LinkStore(path)
