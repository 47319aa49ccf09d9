"""Maps selected metadata onto the in-memory feed representation."""

from __future__ import annotations

from collections.abc import Sequence

from clipfeed.feed.models import Feed, FeedItem, FeedSettings
from clipfeed.metadata.models import Metadata


def compose_description(meta: Metadata, hide_description: bool = False) -> str:
    """Build an item description from the clipping's own text plus its metadata.

    Existing subscribers rely on the paragraph order: description, authors,
    tags, site.
    """
    if hide_description:
        return ""

    description = meta.description
    if meta.authors:
        description += f"\n\nAuthor(s): {', '.join(meta.authors)}"
    if meta.tags:
        description += f"\n\nTags: [{' '.join(meta.tags)}]"
    if meta.site:
        description += f"\n\nSite: {meta.site}"
    return description


def build_item(meta: Metadata, hide_description: bool = False) -> FeedItem:
    return FeedItem(
        id=meta.source,
        title=meta.title,
        link=meta.source,
        description=compose_description(meta, hide_description),
        author=", ".join(meta.authors),
        created=meta.created,
    )


def build_feed(selected: Sequence[Metadata], settings: FeedSettings) -> Feed:
    """Build a Feed from already-selected metadata, one item per record."""
    return Feed(
        title=settings.title,
        link=settings.link,
        description=settings.description,
        author=settings.author,
        created=settings.created,
        items=tuple(build_item(meta, settings.hide_description) for meta in selected),
    )
