from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, FrozenSet, List

from .errors import DataLoadError
from .models import TeamDirectory, TeamEntry
from .utils import load_data_file


def _clean_keywords(raw: Any) -> List[str]:
    if raw is None:
        return []
    if isinstance(raw, str):
        raw = [raw]
    if not isinstance(raw, list):
        raise ValueError("keywords must be a list of strings")
    keywords: List[str] = []
    for value in raw:
        text = str(value).strip()
        if text and text not in keywords:
            keywords.append(text)
    return keywords


def _build_teams(raw: Any) -> Dict[str, TeamEntry]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ValueError("'teams' must be a mapping of team name -> settings")

    teams: Dict[str, TeamEntry] = {}
    for name, data in raw.items():
        team_name = str(name).strip()
        if not team_name:
            continue
        keywords = _clean_keywords(data.get("keywords") if isinstance(data, dict) else data)
        teams[team_name] = TeamEntry(name=team_name, keywords=keywords)
    return teams


def _build_derbies(raw: Any) -> Dict[FrozenSet[str], List[str]]:
    if raw is None:
        return {}
    if not isinstance(raw, list):
        raise ValueError("'derbies' must be a list of {teams, keywords} entries")

    derbies: Dict[FrozenSet[str], List[str]] = {}
    for index, entry in enumerate(raw):
        if not isinstance(entry, dict):
            raise ValueError(f"'derbies[{index}]' must be a mapping")
        pair = entry.get("teams")
        if not isinstance(pair, list) or len(pair) != 2:
            raise ValueError(f"'derbies[{index}].teams' must list exactly two teams")
        key = frozenset(str(team).strip() for team in pair)
        keywords = derbies.setdefault(key, [])
        for keyword in _clean_keywords(entry.get("keywords")):
            if keyword not in keywords:
                keywords.append(keyword)
    return derbies


def build_team_directory(data: Dict[str, Any]) -> TeamDirectory:
    return TeamDirectory(
        teams=_build_teams(data.get("teams")),
        derbies=_build_derbies(data.get("derbies")),
    )


def load_team_directory(path: Path) -> TeamDirectory:
    """Load team keywords and derby overrides.

    Raises:
        DataLoadError: If the file is missing or cannot be interpreted.
    """
    data = load_data_file(path)
    try:
        return build_team_directory(data)
    except (ValueError, AttributeError) as exc:
        raise DataLoadError(path, str(exc)) from exc
