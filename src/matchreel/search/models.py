"""Pydantic models for media search API responses."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ShowInfo(BaseModel):
    """Show a clip belongs to (e.g. a magazine or the short-clip channel)."""

    model_config = ConfigDict(extra="ignore")

    title: str = ""

    @field_validator("title", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class RawClip(BaseModel):
    """One media record from the search endpoint.

    The payload is external input: absent or null text fields become empty
    strings and an absent duration becomes zero.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    urn: str = ""
    title: str = ""
    description: str = ""
    show: ShowInfo | None = None
    date: str | None = None
    valid_from: str | None = Field(default=None, alias="validFrom")
    published_date: str | None = Field(default=None, alias="publishedDate")
    duration: int = 0

    @field_validator("urn", "title", "description", mode="before")
    @classmethod
    def _text_defaults(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("duration", mode="before")
    @classmethod
    def _duration_default(cls, value: Any) -> Any:
        return 0 if value is None or value == "" else value

    @field_validator("date", "valid_from", "published_date", mode="before")
    @classmethod
    def _blank_dates(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def show_title(self) -> str:
        return self.show.title if self.show is not None else ""

    @property
    def raw_date(self) -> str | None:
        """First present of ``date``, ``validFrom`` and ``publishedDate``."""
        return self.date or self.valid_from or self.published_date

    @property
    def searchable_text(self) -> str:
        return f"{self.title} {self.description} {self.show_title}"


class SearchResponse(BaseModel):
    """Envelope returned by the media list search endpoint."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    items: list[RawClip] = Field(default_factory=list, alias="searchResultMediaList")

    @field_validator("items", mode="before")
    @classmethod
    def _null_list(cls, value: Any) -> Any:
        return [] if value is None else value
