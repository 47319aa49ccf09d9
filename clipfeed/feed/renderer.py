"""Serializes a Feed into RSS 2.0, Atom 1.0 or JSON Feed 1.0 bytes."""

from __future__ import annotations

import json
from collections.abc import Callable
from datetime import datetime, timezone

from feedgen.feed import FeedGenerator

from clipfeed.errors import UnsupportedFormatError
from clipfeed.feed.models import Feed

JSON_FEED_VERSION = "https://jsonfeed.org/version/1"
FALLBACK_TITLE = "Untitled feed"
FALLBACK_LINK = "http://localhost:8080"


def _aware(value: datetime) -> datetime:
    # feedgen refuses naive datetimes
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _generator(feed: Feed) -> FeedGenerator:
    # feedgen refuses to serialize without a title, link and description
    title = feed.title or FALLBACK_TITLE
    link = feed.link or FALLBACK_LINK

    fg = FeedGenerator()
    fg.load_extension("dc")
    fg.id(link)
    fg.title(title)
    fg.link(href=link, rel="alternate")
    fg.description(feed.description or title)
    if feed.author:
        fg.author({"name": feed.author})
    created = _aware(feed.created)
    fg.updated(created)
    fg.pubDate(created)
    fg.lastBuildDate(created)

    for item in feed.items:
        fe = fg.add_entry(order="append")
        fe.id(item.id)
        fe.guid(item.id, permalink=False)
        fe.title(item.title)
        fe.link(href=item.link)
        if item.description:
            fe.description(item.description, isSummary=True)
        if item.author:
            fe.author({"name": item.author})
            fe.dc.dc_creator(item.author)
        if item.created is not None:
            fe.published(_aware(item.created))
            fe.updated(_aware(item.created))
    return fg


def _render_rss(feed: Feed) -> bytes:
    return _generator(feed).rss_str(pretty=True)


def _render_atom(feed: Feed) -> bytes:
    return _generator(feed).atom_str(pretty=True)


def _render_json(feed: Feed) -> bytes:
    doc: dict = {
        "version": JSON_FEED_VERSION,
        "title": feed.title or FALLBACK_TITLE,
    }
    if feed.link:
        doc["home_page_url"] = feed.link
    if feed.description:
        doc["description"] = feed.description
    if feed.author:
        doc["author"] = {"name": feed.author}

    items = []
    for item in feed.items:
        entry: dict = {
            "id": item.id,
            "url": item.link,
            "title": item.title,
            "content_text": item.description,
        }
        if item.description:
            entry["summary"] = item.description
        if item.created is not None:
            entry["date_published"] = _aware(item.created).isoformat()
        if item.author:
            entry["author"] = {"name": item.author}
        items.append(entry)
    doc["items"] = items

    return json.dumps(doc, indent=2, ensure_ascii=False).encode("utf-8")


_RENDERERS: dict[str, Callable[[Feed], bytes]] = {
    "rss": _render_rss,
    "atom": _render_atom,
    "json": _render_json,
}

FEED_FORMATS: tuple[str, ...] = tuple(_RENDERERS)


def render_feed(feed: Feed, fmt: str) -> bytes:
    """Render the feed in the given format.

    Raises UnsupportedFormatError for anything other than rss, atom or json.
    """
    try:
        renderer = _RENDERERS[fmt]
    except KeyError:
        raise UnsupportedFormatError(fmt, FEED_FORMATS) from None
    return renderer(feed)
