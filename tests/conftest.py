"""Shared test fixtures for clipfeed."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
import yaml

from clipfeed.config.models import ClipfeedConfig
from clipfeed.feed.models import FeedSettings
from clipfeed.metadata.models import Metadata

BASE_TIME = datetime(2025, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


def write_clipping(path: Path, front_matter: dict | None, body: str = "Body text.\n") -> Path:
    """Write a Markdown clipping with YAML front-matter (or none at all)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    if front_matter is None:
        path.write_text(body)
    else:
        fm = yaml.safe_dump(front_matter, default_flow_style=False, sort_keys=False)
        path.write_text(f"---\n{fm}---\n\n{body}")
    return path


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """CLI commands reconfigure the root logger; undo that after each test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture(name="write_clipping")
def write_clipping_fixture():
    return write_clipping


@pytest.fixture
def base_time() -> datetime:
    return BASE_TIME


@pytest.fixture
def sample_metadata() -> list[Metadata]:
    """Three records: two valid (out of order) and one without a source."""
    return [
        Metadata(
            title="First Article",
            site="example.com",
            source="https://example.com/article1",
            authors=["Author One"],
            published="2025-06-01",
            created=BASE_TIME,
            description="First test article",
            tags=["go", "web"],
        ),
        Metadata(
            title="No Source Article",
            site="example.com",
            source="",
            authors=["No Source Author"],
            published="2025-06-03",
            created=BASE_TIME + timedelta(days=2),
            description="This article has no source",
            tags=["invalid"],
        ),
        Metadata(
            title="Second Article",
            site="example.org",
            source="https://example.org/article2",
            authors=["Author Two", "Author Three"],
            published="2025-06-02",
            created=BASE_TIME + timedelta(days=1),
            description="Second test article",
            tags=["testing", "feed"],
        ),
    ]


@pytest.fixture
def feed_settings() -> FeedSettings:
    return FeedSettings(
        title="Test Feed",
        link="https://example.com/feed",
        description="Test RSS Feed",
        author="Feed Author",
        created=BASE_TIME,
    )


@pytest.fixture
def clippings_dir(tmp_path: Path) -> Path:
    """A clippings tree with one valid, one invalid and one nested document."""
    root = tmp_path / "clippings"
    write_clipping(root / "valid.md", {
        "title": "T",
        "source": "https://x/1",
        "author": ["Jane Doe"],
        "created": "2025-06-01T12:00:00Z",
        "tags": ["clippings"],
    })
    write_clipping(root / "no-source.md", {"title": "Missing source"})
    write_clipping(root / "nested" / "deeper.MD", {
        "title": "Nested",
        "source": "https://x/2",
        "created": "2025-06-02T12:00:00Z",
    })
    (root / "notes.txt").write_text("not a document")
    return root


@pytest.fixture
def make_config(tmp_path: Path):
    """Build a ClipfeedConfig pointed at a clippings directory."""

    def _make(target_dir: Path, **feed) -> ClipfeedConfig:
        return ClipfeedConfig(
            source={"target_dir": str(target_dir)},
            feed={"title": "Test Feed", "link": "http://example.com", **feed},
            output={"directory": str(tmp_path / "out")},
        )

    return _make
