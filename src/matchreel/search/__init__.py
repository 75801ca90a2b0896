"""Media search API access.

Public API:
- SearchClient: paced httpx client returning validated clips
- SearchError: a single failed request (never escapes ``SearchClient.search``)
- RawClip / ShowInfo / SearchResponse: pydantic models for the payload
"""

from .client import ClipSearcher, SearchClient, SearchError
from .models import RawClip, SearchResponse, ShowInfo

__all__ = [
    "ClipSearcher",
    "RawClip",
    "SearchClient",
    "SearchError",
    "SearchResponse",
    "ShowInfo",
]
