"""Feed construction and serialization."""

from clipfeed.feed.builder import build_feed, build_item, compose_description
from clipfeed.feed.models import Feed, FeedItem, FeedSettings
from clipfeed.feed.renderer import FEED_FORMATS, render_feed

__all__ = [
    "FEED_FORMATS",
    "Feed",
    "FeedItem",
    "FeedSettings",
    "build_feed",
    "build_item",
    "compose_description",
    "render_feed",
]
