"""Front-matter extraction for clipping documents."""

from __future__ import annotations

import re

import yaml
from pydantic import ValidationError

from clipfeed.errors import ParseError
from clipfeed.metadata.models import Metadata

_FRONTMATTER_RE = re.compile(
    r"\A---[ \t]*\r?\n(.*?)^---[ \t]*\r?$", re.DOTALL | re.MULTILINE
)


def split_frontmatter(content: str) -> tuple[str, str]:
    """Split a document into its raw YAML block and body.

    Raises ParseError when the document does not open with a ``---`` fence
    or the fence is never closed.
    """
    content = content.lstrip("\ufeff")
    match = _FRONTMATTER_RE.match(content)
    if match is None:
        raise ParseError("no front-matter block found")
    body = content[match.end():].lstrip("\r\n")
    return match.group(1), body


def extract_metadata(content: str) -> Metadata:
    """Parse a document's front-matter into a Metadata record."""
    fm_text, _body = split_frontmatter(content)
    try:
        raw = yaml.safe_load(fm_text)
    except yaml.YAMLError as e:
        raise ParseError(f"invalid YAML front-matter: {e}") from e

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ParseError(
            f"front-matter must be a mapping, got {type(raw).__name__}"
        )

    try:
        return Metadata.model_validate({str(k): v for k, v in raw.items()})
    except ValidationError as e:
        raise ParseError(f"invalid front-matter fields: {e}") from e
