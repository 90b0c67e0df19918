"""
scan
========
Discovers, per two-letter prefix, the contiguous plate ranges currently
assigned in the registry, using existence probes as an oracle.

This package ONLY concerns:
  - binary-searching each numeric domain for its highest assigned number,
  - fanning the search out across all prefixes with a bounded pool,
  - persisting results after every prefix so an interrupted run resumes.

It produces no URLs; see platescan.sitemaps for that.
"""

from .cache import JsonRangeStore, MemoryRangeStore
from .prefix import scan_prefix
from .runner import RangeScanner, candidate_prefixes, scan_ranges
from .search import find_max

__all__ = [
    "JsonRangeStore",
    "MemoryRangeStore",
    "RangeScanner",
    "candidate_prefixes",
    "find_max",
    "scan_prefix",
    "scan_ranges",
]
