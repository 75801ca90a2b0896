from __future__ import annotations

from ..config import MatchRules
from ..models import ClipType
from ..search.models import RawClip


def classify_clip(clip: RawClip, rules: MatchRules) -> ClipType:
    """Classify a clip by the show it was published under.

    The dedicated short-clip show yields a standalone highlight; any show
    whose title contains the highlights-broadcast fragment yields a broadcast
    segment. Everything else stays unclassified and is never linked.
    """
    show_title = clip.show_title
    if show_title == rules.standalone_show:
        return ClipType.STANDALONE
    if rules.broadcast_show_fragment in show_title:
        return ClipType.BROADCAST
    return ClipType.UNCLASSIFIED
