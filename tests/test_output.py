"""Tests for the artifact writer and the HTML listing page."""

from __future__ import annotations

from pathlib import Path

import pytest

from clipfeed.metadata import Metadata, select_metadata
from clipfeed.output import ArtifactWriter, feed_filename, render_listing
from clipfeed.output.listing import listing_item


def _listing(selected, base_time, **kwargs) -> str:
    return render_listing(
        selected,
        feed_title=kwargs.pop("feed_title", "Test Feed"),
        feed_description=kwargs.pop("feed_description", "Test Description"),
        target_dir=kwargs.pop("target_dir", "/test/dir"),
        generated_at=base_time,
        **kwargs,
    )


# ── ArtifactWriter ───────────────────────────────────────────────────


class TestArtifactWriter:
    def test_feed_filename(self):
        assert feed_filename("rss") == "feed.rss"
        assert feed_filename("atom") == "feed.atom"
        assert feed_filename("json") == "feed.json"

    def test_writes_feed_bytes(self, tmp_path: Path):
        writer = ArtifactWriter(tmp_path / "out")
        dest = writer.write_feed("rss", b"<rss/>")
        assert dest == tmp_path / "out" / "feed.rss"
        assert dest.read_bytes() == b"<rss/>"

    def test_overwrites_whole_file(self, tmp_path: Path):
        writer = ArtifactWriter(tmp_path)
        writer.write_feed("json", b'{"long": "previous content"}')
        writer.write_feed("json", b"{}")
        assert (tmp_path / "feed.json").read_bytes() == b"{}"

    def test_writes_listing(self, tmp_path: Path):
        dest = ArtifactWriter(tmp_path).write_listing("<html>é</html>")
        assert dest.name == "index.html"
        assert dest.read_text(encoding="utf-8") == "<html>é</html>"

    def test_dry_run_writes_nothing(self, tmp_path: Path):
        dest = ArtifactWriter(tmp_path).write_feed("atom", b"x", dry_run=True)
        assert not dest.exists()


# ── Listing page ─────────────────────────────────────────────────────


class TestListingPage:
    def test_header_links_and_stats(self, sample_metadata, base_time):
        html = _listing(select_metadata(sample_metadata), base_time)

        assert "<h1>Test Feed</h1>" in html
        assert "<p>Test Description</p>" in html
        assert '<a href="/feed.rss">RSS</a>' in html
        assert '<a href="/feed.atom">Atom</a>' in html
        assert '<a href="/feed.json">JSON</a>' in html
        assert "2 items found in directory: /test/dir" in html
        assert "Last updated: 2025-06-01 12:00:00 (update mode: file watcher)" in html

    def test_items_follow_selection_order(self, sample_metadata, base_time):
        html = _listing(select_metadata(sample_metadata), base_time)
        assert html.index("Second Article") < html.index("First Article")
        assert "No Source Article" not in html

    def test_item_fields(self, sample_metadata, base_time):
        html = _listing(select_metadata(sample_metadata), base_time)
        assert '<a href="https://example.org/article2" target="_blank">Second Article</a>' in html
        assert (
            "Author(s): Author Two, Author Three | Site: example.org | Published: 2025-06-02"
            in html
        )
        assert "Tags: testing, feed" in html

    def test_placeholders_for_missing_authors_and_tags(self, base_time):
        item = listing_item(Metadata(title="Bare", source="https://x/bare"))
        assert item.authors == "Unknown"
        assert item.tags == "No tags"

    def test_escapes_html(self, base_time):
        meta = Metadata(
            title="<script>alert(1)</script>",
            source="https://x/1",
            description="Tom & Jerry",
        )
        html = _listing([meta], base_time)
        assert "<script>alert(1)</script>" not in html
        assert "&lt;script&gt;" in html
        assert "Tom &amp; Jerry" in html

    def test_empty_listing(self, base_time):
        html = _listing([], base_time)
        assert "0 items found" in html
        assert 'class="item"' not in html

    @pytest.mark.parametrize("mode", ["file watcher", "one-shot"])
    def test_update_mode(self, base_time, mode):
        assert f"(update mode: {mode})" in _listing([], base_time, update_mode=mode)
