"""
Turns discovered plate ranges into size-bounded sitemap batches plus an index.
Output is a pure function of the ranges, base URL and batch cap.
"""

from .emit import emit_batches, index_location, iter_batches
from .writer import EmitSummary, render_index, render_urlset, write_sitemaps

__all__ = [
    "EmitSummary",
    "emit_batches",
    "index_location",
    "iter_batches",
    "render_index",
    "render_urlset",
    "write_sitemaps",
]
