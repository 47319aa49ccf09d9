"""clipfeed - syndication feeds generated from a tree of front-matter documents."""

from clipfeed.config import ClipfeedConfig, load_config
from clipfeed.feed import Feed, FeedItem, FeedSettings, build_feed, render_feed
from clipfeed.metadata import Metadata, extract_metadata, scan_documents, select_metadata
from clipfeed.regenerator import RegenerationReport, Regenerator
from clipfeed.watch import ChangeWatcher, DebounceCoordinator

__version__ = "0.1.0"

__all__ = [
    "ChangeWatcher",
    "ClipfeedConfig",
    "DebounceCoordinator",
    "Feed",
    "FeedItem",
    "FeedSettings",
    "Metadata",
    "RegenerationReport",
    "Regenerator",
    "build_feed",
    "extract_metadata",
    "load_config",
    "render_feed",
    "scan_documents",
    "select_metadata",
]
