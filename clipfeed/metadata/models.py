"""Per-document metadata extracted from front-matter."""

from __future__ import annotations

from datetime import date, datetime, time, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Metadata(BaseModel):
    """One source document's front-matter, after coercion.

    ``created`` is None when neither the front-matter nor the scanner could
    supply a timestamp.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: str = ""
    site: str = ""
    source: str = ""
    authors: list[str] = Field(default_factory=list, alias="author")
    published: str = ""
    created: datetime | None = None
    description: str = ""
    tags: list[str] = Field(default_factory=list)

    @property
    def is_publishable(self) -> bool:
        """A record needs both a title and a source URL to become a feed item."""
        return bool(self.title) and bool(self.source)

    @field_validator("title", "site", "source", "published", "description", mode="before")
    @classmethod
    def _coerce_text(cls, value: object) -> object:
        if value is None:
            return ""
        if isinstance(value, (date, datetime)):
            return value.isoformat()
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("authors", "tags", mode="before")
    @classmethod
    def _coerce_list(cls, value: object) -> object:
        if value is None:
            return []
        if isinstance(value, (str, int, float)):
            return [str(value)]
        if isinstance(value, list):
            return [str(v) for v in value if v is not None]
        return value

    @field_validator("created", mode="before")
    @classmethod
    def _coerce_created(cls, value: object) -> object:
        if value is None or value == "":
            return None
        # YAML turns bare 2025-06-01 into a date, not a datetime
        if isinstance(value, date) and not isinstance(value, datetime):
            return datetime.combine(value, time(), tzinfo=timezone.utc)
        return value

    @field_validator("created")
    @classmethod
    def _assume_utc(cls, value: datetime | None) -> datetime | None:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
