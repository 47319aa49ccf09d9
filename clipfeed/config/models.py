from pydantic import BaseModel, Field
from typing import Literal

FeedFormat = Literal["rss", "atom", "json"]


class SourceConfig(BaseModel):
    target_dir: str = "./"
    extension: str = ".md"


class FeedConfig(BaseModel):
    title: str = Field(default="Obsidian Clippings Feed", min_length=1)
    link: str = Field(default="http://localhost:8080", min_length=1)
    description: str = "RSS feed from Obsidian clippings"
    author: str = "Obsidian User"
    max_items: int = Field(default=0, ge=0)
    hide_description: bool = False


class OutputConfig(BaseModel):
    directory: str | None = None
    formats: list[FeedFormat] = Field(default_factory=lambda: ["rss", "atom", "json"])


class WatchConfig(BaseModel):
    debounce_seconds: float = Field(default=10.0, gt=0)


class ServerConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = Field(default=8080, gt=0, lt=65536)


class ClipfeedConfig(BaseModel):
    source: SourceConfig = Field(default_factory=SourceConfig)
    feed: FeedConfig = Field(default_factory=FeedConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    watch: WatchConfig = Field(default_factory=WatchConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"
