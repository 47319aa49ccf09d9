"""Exception hierarchy for clipfeed."""

from __future__ import annotations


class ClipfeedError(Exception):
    """Base class for every error raised by clipfeed."""


class FatalStartupError(ClipfeedError):
    """The process cannot proceed: initial generation or watch setup failed."""


class ParseError(ClipfeedError):
    """A document's front-matter is absent or malformed."""


class ScanError(ClipfeedError):
    """The directory walk itself cannot proceed."""


class UnsupportedFormatError(ClipfeedError, ValueError):
    """A feed was requested in a format the renderer does not know."""

    def __init__(self, fmt: str, supported: tuple[str, ...]) -> None:
        self.format = fmt
        self.supported = supported
        super().__init__(
            f"unsupported feed format: {fmt!r} (supported: {', '.join(supported)})"
        )


class RegenerationError(ClipfeedError):
    """A regeneration could not produce its artifacts."""


class WatchRegistrationError(ClipfeedError):
    """A single directory could not be added to the watch set."""

    def __init__(self, path: str, cause: BaseException) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"failed to watch directory {path}: {cause}")
