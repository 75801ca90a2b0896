from __future__ import annotations

import pytest
from pydantic import ValidationError

from matchreel.search.models import RawClip, SearchResponse


class TestRawClip:
    def test_absent_fields_default_to_empty(self) -> None:
        clip = RawClip.model_validate({})

        assert clip.urn == ""
        assert clip.title == ""
        assert clip.description == ""
        assert clip.show_title == ""
        assert clip.duration == 0
        assert clip.raw_date is None

    def test_null_fields_default_to_empty(self) -> None:
        clip = RawClip.model_validate(
            {"title": None, "description": None, "show": {"title": None}, "duration": None, "date": ""}
        )

        assert clip.title == ""
        assert clip.show_title == ""
        assert clip.duration == 0
        assert clip.raw_date is None

    def test_first_present_date_wins(self) -> None:
        clip = RawClip.model_validate(
            {"validFrom": "2024-03-11T08:00:00+01:00", "publishedDate": "2024-03-12T08:00:00+01:00"}
        )

        assert clip.raw_date == "2024-03-11T08:00:00+01:00"

        clip = RawClip.model_validate({"date": "2024-03-10", "validFrom": "2024-03-11"})
        assert clip.raw_date == "2024-03-10"

    def test_searchable_text_joins_title_description_and_show(self) -> None:
        clip = RawClip.model_validate({"title": "T", "description": "D", "show": {"title": "S"}})

        assert clip.searchable_text == "T D S"

    def test_unknown_fields_are_ignored(self) -> None:
        clip = RawClip.model_validate({"urn": "u", "imageUrl": "https://img", "vendor": "SRF"})

        assert clip.urn == "u"

    def test_non_numeric_duration_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            RawClip.model_validate({"duration": "long"})


class TestSearchResponse:
    def test_null_list_becomes_empty(self) -> None:
        assert SearchResponse.model_validate({"searchResultMediaList": None}).items == []

    def test_items_are_parsed(self) -> None:
        response = SearchResponse.model_validate({"searchResultMediaList": [{"urn": "a"}, {"urn": "b"}]})

        assert [clip.urn for clip in response.items] == ["a", "b"]
