from __future__ import annotations

import logging

import pytest

from matchreel.logging_utils import (
    LogBlockBuilder,
    _as_pairs,
    _as_text,
    configure_logging,
    render_fields_block,
    render_section_block,
)


class TestHelpers:
    def test_as_pairs_keeps_order(self):
        assert _as_pairs({"b": 1, "a": 2}) == [("b", 1), ("a", 2)]
        assert _as_pairs([("z", 1), ("a", 2)]) == [("z", 1), ("a", 2)]

    def test_as_text(self):
        assert _as_text(None) == ""
        assert _as_text("  padded ") == "padded"
        assert _as_text(["FC A", "FC B"]) == "FC A, FC B"
        assert _as_text(3) == "3"


class TestLogBlockBuilder:
    def test_fields_are_aligned(self):
        builder = LogBlockBuilder("Fixture Resolved", pad_top=False)
        builder.add_fields({"Fixture": "5: FC A - FC B", "Type": "Standalone"})

        assert builder.render().splitlines() == [
            "Fixture Resolved",
            "----------------",
            "    Fixture : 5: FC A - FC B",
            "    Type    : Standalone",
        ]

    def test_pad_top_adds_leading_blank_line(self):
        rendered = render_fields_block("Title", {"Key": "value"})

        assert rendered.splitlines()[0] == ""

    def test_long_values_wrap(self):
        builder = LogBlockBuilder("T", pad_top=False, width=60)
        builder.add_fields({"URL": "word " * 30})

        lines = builder.render().splitlines()[2:]
        assert len(lines) > 1
        assert all(len(line) <= 60 for line in lines)

    def test_empty_fields_render_title_only(self):
        assert render_fields_block("Nothing", {}, pad_top=False) == "Nothing\n-------"


class TestSectionBlock:
    def test_sections_list_items(self):
        rendered = render_section_block(
            "Not Found: 5: FC A - FC B",
            [("Queries", ['"FC A FC B": 0 results, 0 accepted', '"FC A": 3 results, 0 accepted'])],
            pad_top=False,
        )

        lines = rendered.splitlines()
        assert lines[0] == "Not Found: 5: FC A - FC B"
        assert "Queries:" in lines
        assert '    - "FC A": 3 results, 0 accepted' in lines

    def test_empty_section_uses_placeholder(self):
        rendered = render_section_block("Empty", [("Items", [])], pad_top=False)

        assert rendered.splitlines()[-1] == "    (none)"


class TestConfigureLogging:
    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root = logging.getLogger()
        handlers = list(root.handlers)
        level = root.level
        httpx_level = logging.getLogger("httpx").level
        yield
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()
        for handler in handlers:
            root.addHandler(handler)
        root.setLevel(level)
        logging.getLogger("httpx").setLevel(httpx_level)

    def test_level_names_are_accepted(self):
        configure_logging("debug")

        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_unknown_level_raises(self):
        with pytest.raises(ValueError, match="LOUD"):
            configure_logging("LOUD")

    def test_log_file_receives_records(self, tmp_path):
        log_file = tmp_path / "logs" / "matchreel.log"
        configure_logging(logging.INFO, log_file=log_file)

        logging.getLogger("matchreel.test").info("hello")
        for handler in logging.getLogger().handlers:
            handler.flush()

        content = log_file.read_text(encoding="utf-8")
        assert "| INFO     | matchreel.test" in content
        assert "hello" in content
