"""Full rebuild of every feed artifact from the source tree."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import datetime, timezone
from pathlib import Path

from pydantic import BaseModel, Field

from clipfeed.config.models import ClipfeedConfig
from clipfeed.errors import RegenerationError, ScanError
from clipfeed.feed import FeedSettings, build_feed, render_feed
from clipfeed.metadata import Metadata, extract_metadata, scan_documents, select_metadata
from clipfeed.output import LISTING_FILENAME, ArtifactWriter, feed_filename, render_listing

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RegenerationReport(BaseModel):
    """Outcome of a regeneration pass."""

    scanned: int = 0
    selected: int = 0
    written: list[str] = Field(default_factory=list)
    failed: list[tuple[str, str]] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


class Regenerator:
    """Rescans the tree and rewrites every feed plus the listing page.

    Each run builds one selection and one Feed; every artifact is derived
    from those, so the feeds and index.html never disagree. A failing
    artifact is recorded and the rest are still written.
    """

    def __init__(
        self,
        config: ClipfeedConfig,
        output_dir: str | Path,
        *,
        formats: Sequence[str] | None = None,
        extractor: Callable[[str], Metadata] = extract_metadata,
        clock: Callable[[], datetime] = _utcnow,
        update_mode: str = "file watcher",
    ) -> None:
        self.config = config
        self.writer = ArtifactWriter(output_dir)
        self.formats = tuple(formats if formats is not None else config.output.formats)
        self._extractor = extractor
        self._clock = clock
        self._update_mode = update_mode

    @property
    def output_dir(self) -> Path:
        return self.writer.directory

    def feed_settings(self, created: datetime) -> FeedSettings:
        feed = self.config.feed
        return FeedSettings(
            title=feed.title,
            link=feed.link,
            description=feed.description,
            author=feed.author,
            created=created,
            max_items=feed.max_items,
            hide_description=feed.hide_description,
        )

    def regenerate(self) -> RegenerationReport:
        """Scan, select, build and write all artifacts.

        Raises RegenerationError only when the scan itself fails; artifact
        failures are logged and reported in ``failed``.
        """
        source = self.config.source
        try:
            records = scan_documents(
                source.target_dir,
                extension=source.extension,
                extractor=self._extractor,
            )
        except ScanError as e:
            raise RegenerationError(f"failed to scan {source.target_dir}: {e}") from e

        now = self._clock()
        settings = self.feed_settings(now)
        selected = select_metadata(records, settings.max_items)
        feed = build_feed(selected, settings)

        report = RegenerationReport(scanned=len(records), selected=len(selected))

        for fmt in self.formats:
            name = feed_filename(fmt)
            try:
                self.writer.write_feed(fmt, render_feed(feed, fmt))
            except Exception as exc:
                logger.error("Failed to write %s feed: %s", fmt, exc, exc_info=True)
                report.failed.append((name, str(exc)))
                continue
            report.written.append(name)

        try:
            html = render_listing(
                selected,
                feed_title=settings.title,
                feed_description=settings.description,
                target_dir=source.target_dir,
                generated_at=now,
                # only link feeds that exist on disk
                formats=[f for f in self.formats if feed_filename(f) in report.written],
                update_mode=self._update_mode,
            )
            self.writer.write_listing(html)
        except Exception as exc:
            logger.error("Failed to write %s: %s", LISTING_FILENAME, exc, exc_info=True)
            report.failed.append((LISTING_FILENAME, str(exc)))
        else:
            report.written.append(LISTING_FILENAME)

        logger.info(
            "Generated feeds with %d items (%d documents scanned)",
            report.selected,
            report.scanned,
        )
        return report
