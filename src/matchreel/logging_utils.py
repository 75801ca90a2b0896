from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from textwrap import wrap
from typing import Union

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s\n%(message)s\n"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

BLOCK_WIDTH = 100
LABEL_WIDTH = 16
INDENT = "    "

FieldMapping = Union[Mapping[str, object], Sequence[tuple[str, object]]]


def _as_pairs(fields: FieldMapping) -> list[tuple[str, object]]:
    if isinstance(fields, Mapping):
        return [(str(key), value) for key, value in fields.items()]
    return [(str(key), value) for key, value in fields]


def _as_text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple, set, frozenset)):
        return ", ".join(_as_text(item) for item in value)
    return str(value).strip()


class LogBlockBuilder:
    """Builds the titled, aligned multi-line blocks used for log messages.

    Example output::

        Fixture Resolved
        ----------------
            Fixture : 5: FC A - FC B
            Type    : Standalone
    """

    def __init__(self, title: str, *, pad_top: bool = True, width: int = BLOCK_WIDTH) -> None:
        self.width = width
        self.lines: list[str] = [""] if pad_top else []
        self.lines.extend([title, "-" * len(title)])

    def add_fields(self, fields: FieldMapping | None) -> None:
        pairs = _as_pairs(fields or {})
        if not pairs:
            return
        label_width = min(max(len(key) for key, _ in pairs), LABEL_WIDTH)
        value_width = max(self.width - len(INDENT) - label_width - 3, 30)
        for key, value in pairs:
            chunks = wrap(_as_text(value), width=value_width) or [""]
            self.lines.append(f"{INDENT}{key:<{label_width}} : {chunks[0]}")
            for chunk in chunks[1:]:
                self.lines.append(f"{INDENT}{'':<{label_width}}   {chunk}")

    def add_section(self, heading: str, items: Iterable[object], *, empty_label: str = "(none)") -> None:
        if self.lines and self.lines[-1] != "":
            self.lines.append("")
        self.lines.append(f"{heading}:")
        entries = [_as_text(item) for item in items if item is not None]
        if not entries:
            self.lines.append(f"{INDENT}{empty_label}")
            return
        for entry in entries:
            chunks = wrap(entry, width=max(self.width - len(INDENT) - 2, 24)) or [""]
            self.lines.append(f"{INDENT}- {chunks[0]}")
            self.lines.extend(f"{INDENT}  {chunk}" for chunk in chunks[1:])

    def render(self) -> str:
        return "\n".join(self.lines).rstrip()


def render_fields_block(title: str, fields: FieldMapping, *, pad_top: bool = True) -> str:
    builder = LogBlockBuilder(title, pad_top=pad_top)
    builder.add_fields(fields)
    return builder.render()


def render_section_block(
    title: str,
    sections: Sequence[tuple[str, Sequence[object]]],
    *,
    pad_top: bool = True,
) -> str:
    builder = LogBlockBuilder(title, pad_top=pad_top)
    for heading, items in sections:
        builder.add_section(heading, items)
    return builder.render()


def configure_logging(level: int | str = logging.INFO, *, log_file: Path | None = None) -> None:
    """Install console (and optionally file) handlers on the root logger."""
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        level = resolved

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(level)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
