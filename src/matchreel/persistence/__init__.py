"""Persistence layer for resolved links.

Public API:
- LinkStore: JSON document of fixture key -> resolved link
- StoredLink: One link entry as persisted on disk

Example:
    from matchreel.persistence import LinkStore

    store = LinkStore(Path("links.json"))
    if not store.has_link(fixture.key):
        store.record(link)
    store.save()
"""

from .link_store import LinkStore, StoredLink

__all__ = [
    "LinkStore",
    "StoredLink",
]
