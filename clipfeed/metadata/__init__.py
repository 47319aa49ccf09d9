"""Metadata extraction, scanning, and selection."""

from clipfeed.metadata.models import Metadata
from clipfeed.metadata.parser import extract_metadata, split_frontmatter
from clipfeed.metadata.scanner import is_document, scan_documents
from clipfeed.metadata.selector import (
    filter_valid,
    limit_items,
    select_metadata,
    sort_by_created,
)

__all__ = [
    "Metadata",
    "extract_metadata",
    "filter_valid",
    "is_document",
    "limit_items",
    "scan_documents",
    "select_metadata",
    "sort_by_created",
    "split_frontmatter",
]
