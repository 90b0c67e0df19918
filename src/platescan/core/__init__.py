"""
Core exports for platescan.
"""

from .contracts import (
    D4,
    D5,
    DOMAINS,
    EMPTY,
    Domain,
    NumericRange,
    PrefixOutcome,
    ProbeCounter,
    ScanCache,
    ScanReport,
    SitemapBatch,
    SitemapIndex,
    active_only,
)
from .interfaces import PlateProber, RangeStore

__all__ = [
    "Domain",
    "D5",
    "D4",
    "DOMAINS",
    "EMPTY",
    "NumericRange",
    "PrefixOutcome",
    "ProbeCounter",
    "ScanCache",
    "ScanReport",
    "SitemapBatch",
    "SitemapIndex",
    "active_only",
    "PlateProber",
    "RangeStore",
]
