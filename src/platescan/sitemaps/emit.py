from __future__ import annotations

from typing import Iterator, List, Mapping, Tuple

from ..config import MAX_URLS_PER_SITEMAP
from ..core.contracts import PrefixOutcome, SitemapBatch, SitemapIndex


def iter_batches(
    ranges: Mapping[str, PrefixOutcome],
    base_url: str,
    *,
    max_urls: int = MAX_URLS_PER_SITEMAP,
) -> Iterator[SitemapBatch]:
    """
    Yield URL batches in a fixed order: prefixes sorted, d5 before d4, each
    range cut into consecutive chunks of at most `max_urls`. Batch ids run
    from 0 across the whole sequence.
    """
    if max_urls < 1:
        raise ValueError(f"max_urls must be >= 1, got {max_urls}")
    base = base_url.rstrip("/")
    batch_id = 0
    for prefix in sorted(ranges):
        for domain, rng in ranges[prefix].items():
            for start in range(rng.min, rng.max + 1, max_urls):
                end = min(start + max_urls - 1, rng.max)
                urls = [
                    f"{base}/{domain.plate(prefix, n)}"
                    for n in range(start, end + 1)
                ]
                yield SitemapBatch(batch_id=batch_id, urls=urls)
                batch_id += 1


def index_location(base_url: str, batch: SitemapBatch) -> str:
    return f"{base_url.rstrip('/')}/sitemaps/{batch.filename}"


def emit_batches(
    ranges: Mapping[str, PrefixOutcome],
    base_url: str,
    *,
    max_urls: int = MAX_URLS_PER_SITEMAP,
) -> Tuple[SitemapIndex, List[SitemapBatch]]:
    batches = list(iter_batches(ranges, base_url, max_urls=max_urls))
    index = SitemapIndex(
        locations=[index_location(base_url, b) for b in batches]
    )
    return index, batches
