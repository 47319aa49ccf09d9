"""Writes rendered feeds and the listing page to disk."""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

LISTING_FILENAME = "index.html"


def feed_filename(fmt: str) -> str:
    """feed.rss, feed.atom, feed.json"""
    return f"feed.{fmt}"


class ArtifactWriter:
    """Writes regenerated artifacts into the serving directory.

    Every write replaces the whole file; nothing is appended or merged.
    """

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def write_feed(self, fmt: str, data: bytes, *, dry_run: bool = False) -> Path:
        """Write one serialized feed. Returns the Path of the written file."""
        return self._write(self.directory / feed_filename(fmt), data, dry_run=dry_run)

    def write_listing(self, html: str, *, dry_run: bool = False) -> Path:
        return self._write(
            self.directory / LISTING_FILENAME, html.encode("utf-8"), dry_run=dry_run
        )

    def _write(self, dest: Path, data: bytes, *, dry_run: bool) -> Path:
        if dry_run:
            logger.debug("dry-run: would write %s", dest)
            return dest

        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_bytes(data)
        logger.debug("wrote %s (%d bytes)", dest, len(data))
        return dest
