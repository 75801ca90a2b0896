from __future__ import annotations

import datetime as dt
import json
import os
from pathlib import Path
from typing import Any, Dict

import yaml

from .errors import DataLoadError


def ensure_directory(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def expand_env(value: Any) -> Any:
    if isinstance(value, str):
        return os.path.expandvars(value)
    if isinstance(value, list):
        return [expand_env(item) for item in value]
    if isinstance(value, dict):
        return {key: expand_env(val) for key, val in value.items()}
    return value


def load_data_file(path: Path, *, expand: bool = False) -> Dict[str, Any]:
    """Load a JSON or YAML mapping from disk.

    JSON documents are valid YAML, so a single safe loader covers both the
    crawler's data files and its YAML settings.

    Raises:
        DataLoadError: If the file is missing, unreadable, unparseable or not a mapping.
    """
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except OSError as exc:
        raise DataLoadError(path, exc.strerror or str(exc)) from exc
    except yaml.YAMLError as exc:
        raise DataLoadError(path, f"invalid document ({exc})") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise DataLoadError(path, "top-level value must be a mapping")
    return expand_env(data) if expand else data


def dump_json_file(path: Path, data: Dict[str, Any]) -> None:
    ensure_directory(path.parent)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    with tmp_path.open("w", encoding="utf-8") as handle:
        json.dump(data, handle, indent=2, ensure_ascii=False)
        handle.write("\n")
    tmp_path.replace(path)


def utc_now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)
