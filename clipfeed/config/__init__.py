from .loader import load_config, parse_duration
from .models import (
    ClipfeedConfig,
    FeedConfig,
    OutputConfig,
    ServerConfig,
    SourceConfig,
    WatchConfig,
)

__all__ = [
    "ClipfeedConfig",
    "FeedConfig",
    "OutputConfig",
    "ServerConfig",
    "SourceConfig",
    "WatchConfig",
    "load_config",
    "parse_duration",
]
