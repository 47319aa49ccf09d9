"""Output subsystem: writes feeds and the listing page."""

from clipfeed.output.listing import ListingItem, render_listing
from clipfeed.output.writer import LISTING_FILENAME, ArtifactWriter, feed_filename

__all__ = [
    "LISTING_FILENAME",
    "ArtifactWriter",
    "ListingItem",
    "feed_filename",
    "render_listing",
]
