"""Filtering, ordering and capping of scanned metadata."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timezone

from clipfeed.metadata.models import Metadata

# Undated records rank below everything else
_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def filter_valid(records: Iterable[Metadata]) -> list[Metadata]:
    """Drop records missing a title or a source, preserving order."""
    return [meta for meta in records if meta.is_publishable]


def sort_by_created(records: Iterable[Metadata]) -> list[Metadata]:
    """Newest first. Stable, so equal timestamps keep their input order."""
    return sorted(
        records,
        key=lambda meta: meta.created or _OLDEST,
        reverse=True,
    )


def limit_items(records: list[Metadata], max_items: int) -> list[Metadata]:
    """Truncate to max_items when it is positive; otherwise return everything."""
    if max_items > 0 and len(records) > max_items:
        return records[:max_items]
    return records


def select_metadata(records: Iterable[Metadata], max_items: int = 0) -> list[Metadata]:
    """filter -> sort -> cap. The cap must see the already-ranked list."""
    return limit_items(sort_by_created(filter_valid(records)), max_items)
