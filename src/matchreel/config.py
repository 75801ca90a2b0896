from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .errors import DataLoadError
from .utils import load_data_file

CONFIG_ENV_VAR = "MATCHREEL_CONFIG"
DEFAULT_CONFIG_PATH = Path("matchreel.yaml")
DEFAULT_VIDEO_URL_TEMPLATE = "https://www.srf.ch/play/tv/-/video/-?urn={urn}"

DEFAULT_TITLE_BLACKLIST: tuple[str, ...] = (
    "trainer",
    "coach",
    "interview",
    "pressekonferenz",
    "press conference",
    "press-conference",
    "medienkonferenz",
    "präsentation",
    "presentation",
    "rückblick",
    "review",
    "zusammenfassung",
    "summary",
    "analyse",
    "analysis",
    "vorschau",
    "preview",
    "reaktion",
    "reaction",
    "stimmen",
    "quotes",
)


@dataclass
class SearchSettings:
    api_base_url: str = "https://il.srgssr.ch/integrationlayer/2.0/srf/searchResultMediaList"
    timeout: float = 30.0
    request_delay: float = 0.3
    video_url_template: str = DEFAULT_VIDEO_URL_TEMPLATE


@dataclass
class MatchRules:
    """Acceptance and classification rules applied to every search result."""

    min_duration_ms: int = 90_000
    max_days_after: int = 2
    title_blacklist: list[str] = field(default_factory=lambda: list(DEFAULT_TITLE_BLACKLIST))
    standalone_show: str = "Sport-Clip"
    broadcast_show_fragment: str = "Super League"


@dataclass
class Settings:
    schedule_path: Path = Path("schedule.json")
    teams_path: Path = Path("teams.json")
    links_path: Path = Path("links.json")
    search_window_hours: float = 6.0


@dataclass
class AppConfig:
    settings: Settings = field(default_factory=Settings)
    search: SearchSettings = field(default_factory=SearchSettings)
    rules: MatchRules = field(default_factory=MatchRules)


def _ensure_string_list(value: Any, *, field_name: str) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        raise ValueError(f"'{field_name}' must be provided as a list of strings")
    result: list[str] = []
    for index, entry in enumerate(value):
        if not isinstance(entry, str):
            raise ValueError(f"'{field_name}[{index}]' must be a string")
        cleaned = entry.strip()
        if cleaned:
            result.append(cleaned)
    return result


def _coerce_number(value: Any, *, field_name: str, minimum: float = 0.0) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"'{field_name}' must be a number") from exc
    if number < minimum:
        raise ValueError(f"'{field_name}' must be greater than or equal to {minimum:g}")
    return number


def _resolve_path(value: Any, base_dir: Path, default: Path) -> Path:
    if value is None or not str(value).strip():
        raw = default
    else:
        raw = Path(str(value).strip()).expanduser()
    if raw.is_absolute():
        return raw
    return base_dir / raw


def _build_section(data: dict[str, Any], key: str) -> dict[str, Any]:
    section = data.get(key, {}) or {}
    if not isinstance(section, dict):
        raise ValueError(f"'{key}' must be provided as a mapping when specified")
    return section


def _build_search_settings(data: dict[str, Any]) -> SearchSettings:
    defaults = SearchSettings()
    template = str(data.get("video_url_template", defaults.video_url_template)).strip()
    if "{urn}" not in template:
        raise ValueError("'search.video_url_template' must contain the '{urn}' placeholder")

    return SearchSettings(
        api_base_url=str(data.get("api_base_url", defaults.api_base_url)).strip() or defaults.api_base_url,
        timeout=_coerce_number(data.get("timeout", defaults.timeout), field_name="search.timeout"),
        request_delay=_coerce_number(
            data.get("request_delay", defaults.request_delay),
            field_name="search.request_delay",
        ),
        video_url_template=template,
    )


def _build_match_rules(data: dict[str, Any]) -> MatchRules:
    defaults = MatchRules()
    blacklist = defaults.title_blacklist
    if "title_blacklist" in data:
        blacklist = [term.lower() for term in _ensure_string_list(data["title_blacklist"], field_name="matching.title_blacklist")]

    standalone_show = str(data.get("standalone_show", defaults.standalone_show)).strip()
    broadcast_fragment = str(data.get("broadcast_show_fragment", defaults.broadcast_show_fragment)).strip()
    if not standalone_show:
        raise ValueError("'matching.standalone_show' must not be empty")
    if not broadcast_fragment:
        raise ValueError("'matching.broadcast_show_fragment' must not be empty")

    return MatchRules(
        min_duration_ms=int(
            _coerce_number(data.get("min_duration_ms", defaults.min_duration_ms), field_name="matching.min_duration_ms")
        ),
        max_days_after=int(
            _coerce_number(data.get("max_days_after", defaults.max_days_after), field_name="matching.max_days_after")
        ),
        title_blacklist=blacklist,
        standalone_show=standalone_show,
        broadcast_show_fragment=broadcast_fragment,
    )


def _build_settings(data: dict[str, Any], base_dir: Path) -> Settings:
    defaults = Settings()
    return Settings(
        schedule_path=_resolve_path(data.get("schedule_path"), base_dir, defaults.schedule_path),
        teams_path=_resolve_path(data.get("teams_path"), base_dir, defaults.teams_path),
        links_path=_resolve_path(data.get("links_path"), base_dir, defaults.links_path),
        search_window_hours=_coerce_number(
            data.get("search_window_hours", defaults.search_window_hours),
            field_name="settings.search_window_hours",
        ),
    )


def build_app_config(data: dict[str, Any], base_dir: Path) -> AppConfig:
    return AppConfig(
        settings=_build_settings(_build_section(data, "settings"), base_dir),
        search=_build_search_settings(_build_section(data, "search")),
        rules=_build_match_rules(_build_section(data, "matching")),
    )


def default_config_path() -> Path:
    return Path(os.getenv(CONFIG_ENV_VAR, str(DEFAULT_CONFIG_PATH))).expanduser()


def load_config(path: Path | None = None) -> AppConfig:
    """Load the crawler configuration.

    When no path is given the default location is tried and silently skipped
    if absent. An explicitly requested file that is missing is fatal.

    Raises:
        DataLoadError: If the file cannot be read or holds invalid values.
    """
    explicit = path is not None
    config_path = path if path is not None else default_config_path()

    if not explicit and not config_path.exists():
        return build_app_config({}, Path.cwd())

    data = load_data_file(config_path, expand=True)
    try:
        return build_app_config(data, config_path.resolve().parent)
    except ValueError as exc:
        raise DataLoadError(config_path, str(exc)) from exc
