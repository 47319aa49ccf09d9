"""Recursive scan of a clippings tree into Metadata records."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path

from clipfeed.errors import ParseError, ScanError
from clipfeed.metadata.models import Metadata
from clipfeed.metadata.parser import extract_metadata

logger = logging.getLogger(__name__)

Extractor = Callable[[str], Metadata]


def is_document(path: str | Path, extension: str = ".md") -> bool:
    """Return True if the path ends with the document extension, ignoring case."""
    return str(path).lower().endswith(extension.lower())


def scan_documents(
    root: str | Path,
    *,
    extension: str = ".md",
    extractor: Extractor = extract_metadata,
) -> list[Metadata]:
    """Walk root and extract metadata from every matching document.

    Unreadable or unparseable files are logged and skipped. Only a root that
    cannot be walked raises ScanError. Records come back in lexical walk
    order with ``title`` and ``created`` filled from the file when the
    front-matter left them empty.
    """
    root = Path(root)
    if not root.is_dir():
        raise ScanError(f"scan root is not a readable directory: {root}")

    def _on_walk_error(exc: OSError) -> None:
        if exc.filename is not None and Path(exc.filename) == root:
            raise ScanError(f"cannot read scan root {root}: {exc}") from exc
        logger.warning("Skipping unreadable directory %s: %s", exc.filename, exc)

    records: list[Metadata] = []
    skipped = 0
    for dirpath, dirnames, filenames in os.walk(root, onerror=_on_walk_error):
        dirnames.sort()
        for name in sorted(filenames):
            if not is_document(name, extension):
                continue
            path = Path(dirpath) / name
            meta = _read_document(path, extractor)
            if meta is None:
                skipped += 1
                continue
            records.append(_apply_fallbacks(meta, path))

    logger.debug(
        "Scanned %s: %d documents, %d skipped", root, len(records), skipped
    )
    return records


def _read_document(path: Path, extractor: Extractor) -> Metadata | None:
    try:
        content = path.read_bytes()
    except OSError as e:
        logger.warning("Error reading file %s: %s", path, e)
        return None

    try:
        return extractor(content.decode("utf-8", errors="replace"))
    except ParseError as e:
        logger.warning("Error parsing metadata from %s: %s", path, e)
        return None


def _apply_fallbacks(meta: Metadata, path: Path) -> Metadata:
    updates: dict = {}
    if not meta.title:
        updates["title"] = path.name
    if meta.created is None:
        try:
            mtime = path.stat().st_mtime
        except OSError:
            pass
        else:
            updates["created"] = datetime.fromtimestamp(mtime, tz=timezone.utc)
    return meta.model_copy(update=updates) if updates else meta
