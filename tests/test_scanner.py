"""Tests for the directory scanner."""

from __future__ import annotations

import os
from datetime import datetime, timezone
from pathlib import Path

import pytest

from clipfeed.errors import ParseError, ScanError
from clipfeed.metadata import Metadata, is_document, scan_documents, select_metadata


class TestIsDocument:
    @pytest.mark.parametrize("name", ["note.md", "NOTE.MD", "dir/Note.Md"])
    def test_matches_extension_case_insensitively(self, name):
        assert is_document(name)

    @pytest.mark.parametrize("name", ["note.txt", "md", "note.md.bak", "notemd"])
    def test_rejects_other_names(self, name):
        assert not is_document(name)

    def test_custom_extension(self):
        assert is_document("clip.markdown", ".markdown")
        assert not is_document("clip.md", ".markdown")


class TestScanDocuments:
    def test_scans_recursively_and_skips_other_files(self, clippings_dir: Path):
        records = scan_documents(clippings_dir)
        titles = [m.title for m in records]
        assert sorted(titles) == ["Missing source", "Nested", "T"]

    def test_lexical_walk_order(self, clippings_dir: Path):
        records = scan_documents(clippings_dir)
        # files of a directory come before its subdirectories
        assert [m.title for m in records] == ["Missing source", "T", "Nested"]

    def test_selects_only_valid_document(self, clippings_dir: Path):
        (clippings_dir / "nested" / "deeper.MD").unlink()
        selected = select_metadata(scan_documents(clippings_dir))
        assert len(selected) == 1
        assert selected[0].title == "T"
        assert selected[0].source == "https://x/1"

    def test_title_defaults_to_file_name(self, tmp_path: Path, write_clipping):
        write_clipping(tmp_path / "Untitled Clip.md", {"source": "https://x/3"})
        [meta] = scan_documents(tmp_path)
        assert meta.title == "Untitled Clip.md"

    def test_created_defaults_to_mtime(self, tmp_path: Path, write_clipping):
        path = write_clipping(tmp_path / "a.md", {"title": "A", "source": "https://x/a"})
        stamp = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc).timestamp()
        os.utime(path, (stamp, stamp))

        [meta] = scan_documents(tmp_path)
        assert meta.created == datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)

    def test_frontmatter_created_wins_over_mtime(self, clippings_dir: Path):
        records = {m.title: m for m in scan_documents(clippings_dir)}
        assert records["T"].created == datetime(2025, 6, 1, 12, tzinfo=timezone.utc)

    def test_unparseable_files_are_skipped(self, tmp_path: Path, caplog, write_clipping):
        write_clipping(tmp_path / "good.md", {"title": "Good", "source": "https://x/g"})
        write_clipping(tmp_path / "plain.md", None, body="no front-matter\n")
        (tmp_path / "broken.md").write_text("---\ntitle: [oops\n---\n")

        with caplog.at_level("WARNING", logger="clipfeed.metadata.scanner"):
            records = scan_documents(tmp_path)

        assert [m.title for m in records] == ["Good"]
        assert "plain.md" in caplog.text
        assert "broken.md" in caplog.text

    def test_extractor_is_pluggable(self, tmp_path: Path):
        (tmp_path / "one.md").write_text("anything")
        (tmp_path / "two.md").write_text("skip me")

        def extractor(text: str) -> Metadata:
            if text == "skip me":
                raise ParseError("nope")
            return Metadata(title=text, source="https://x/p")

        records = scan_documents(tmp_path, extractor=extractor)
        assert [m.title for m in records] == ["anything"]

    def test_invalid_utf8_is_replaced_not_fatal(self, tmp_path: Path):
        (tmp_path / "latin1.md").write_bytes(
            b"---\ntitle: caf\xe9\nsource: https://x/c\n---\n"
        )
        [meta] = scan_documents(tmp_path)
        assert meta.title.startswith("caf")

    def test_missing_root_raises(self, tmp_path: Path):
        with pytest.raises(ScanError):
            scan_documents(tmp_path / "does-not-exist")

    def test_root_that_is_a_file_raises(self, tmp_path: Path):
        target = tmp_path / "file.md"
        target.write_text("x")
        with pytest.raises(ScanError):
            scan_documents(target)

    @pytest.mark.skipif(
        not hasattr(os, "geteuid") or os.geteuid() == 0,
        reason="permission bits are not enforced for root",
    )
    def test_unreadable_subdirectory_is_skipped(self, clippings_dir: Path):
        locked = clippings_dir / "nested"
        locked.chmod(0)
        try:
            records = scan_documents(clippings_dir)
        finally:
            locked.chmod(0o755)
        assert "Nested" not in [m.title for m in records]
        assert "T" in [m.title for m in records]
