from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class FeedSettings(BaseModel):
    """Feed-level values fixed for the duration of one regeneration."""

    model_config = ConfigDict(frozen=True)

    title: str
    link: str
    description: str = ""
    author: str = ""
    created: datetime
    max_items: int = Field(default=0, ge=0)
    hide_description: bool = False


class FeedItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    link: str
    description: str = ""
    author: str = ""
    created: datetime | None = None


class Feed(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    link: str
    description: str = ""
    author: str = ""
    created: datetime
    items: tuple[FeedItem, ...] = ()
