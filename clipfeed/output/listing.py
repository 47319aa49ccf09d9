"""HTML listing page rendered from the same selection as the feeds."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from jinja2 import Environment, select_autoescape
from pydantic import BaseModel

from clipfeed.metadata.models import Metadata

LISTING_TEMPLATE = """\
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>{{ feed_title }}</title>
    <style>
        body { font-family: Arial, sans-serif; margin: 40px; }
        .header { margin-bottom: 30px; }
        .feeds { margin-bottom: 30px; }
        .feeds a { margin-right: 15px; padding: 5px 10px; background: #007cba; color: white; text-decoration: none; border-radius: 3px; }
        .stats { margin-bottom: 30px; color: #666; }
        .items { list-style: none; padding: 0; }
        .item { margin-bottom: 20px; padding: 15px; border: 1px solid #ddd; border-radius: 5px; }
        .item-title { font-weight: bold; margin-bottom: 5px; }
        .item-meta { color: #666; font-size: 0.9em; margin-bottom: 10px; }
        .item-desc { margin-bottom: 10px; }
        .item-tags { font-size: 0.8em; color: #999; }
        .last-updated { color: #999; font-size: 0.9em; margin-top: 30px; text-align: center; }
    </style>
</head>
<body>
    <div class="header">
        <h1>{{ feed_title }}</h1>
        <p>{{ feed_description }}</p>
    </div>

    <div class="feeds">
        <strong>Available feeds:</strong><br><br>
{% for fmt in formats %}
        <a href="/feed.{{ fmt }}">{{ format_labels.get(fmt, fmt) }}</a>
{% endfor %}
    </div>

    <div class="stats">
        <strong>Statistics:</strong> {{ items | length }} items found in directory: {{ target_dir }}
    </div>

    <div class="content">
        <h2>Recent Items</h2>
        <ul class="items">
{% for item in items %}
            <li class="item">
                <div class="item-title"><a href="{{ item.source }}" target="_blank">{{ item.title }}</a></div>
                <div class="item-meta">Author(s): {{ item.authors }} | Site: {{ item.site }} | Published: {{ item.published }}</div>
                <div class="item-desc">{{ item.description }}</div>
                <div class="item-tags">Tags: {{ item.tags }}</div>
            </li>
{% endfor %}
        </ul>
    </div>

    <div class="last-updated">
        Last updated: {{ last_updated }} (update mode: {{ update_mode }})
    </div>
</body>
</html>
"""

_FORMAT_LABELS = {"rss": "RSS", "atom": "Atom", "json": "JSON"}

_env = Environment(
    autoescape=select_autoescape(default_for_string=True),
    trim_blocks=True,
    lstrip_blocks=True,
)
_template = _env.from_string(LISTING_TEMPLATE)


class ListingItem(BaseModel):
    title: str
    source: str
    authors: str
    site: str
    published: str
    description: str
    tags: str


def listing_item(meta: Metadata) -> ListingItem:
    return ListingItem(
        title=meta.title,
        source=meta.source,
        authors=", ".join(meta.authors) or "Unknown",
        site=meta.site,
        published=meta.published,
        description=meta.description,
        tags=", ".join(meta.tags) or "No tags",
    )


def render_listing(
    selected: Sequence[Metadata],
    *,
    feed_title: str,
    feed_description: str,
    target_dir: str,
    generated_at: datetime,
    formats: Sequence[str] = ("rss", "atom", "json"),
    update_mode: str = "file watcher",
) -> str:
    """Render index.html for the selected records, in their given order."""
    return _template.render(
        feed_title=feed_title,
        feed_description=feed_description,
        formats=list(formats),
        format_labels=_FORMAT_LABELS,
        target_dir=target_dir,
        items=[listing_item(meta) for meta in selected],
        last_updated=generated_at.strftime("%Y-%m-%d %H:%M:%S"),
        update_mode=update_mode,
    )
