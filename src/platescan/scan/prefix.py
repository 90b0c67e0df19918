from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Optional, Sequence

from ..core.contracts import DOMAINS, Domain, NumericRange, PrefixOutcome
from .search import Probe, find_max


def scan_prefix(
    probe: Probe, prefix: str, domains: Sequence[Domain] = DOMAINS
) -> PrefixOutcome:
    """
    Search every domain of `prefix` concurrently and join the maxima.
    Ranges always start at the domain floor.
    """
    with ThreadPoolExecutor(
        max_workers=len(domains), thread_name_prefix=f"scan-{prefix}"
    ) as pool:
        futures = {
            d.key: pool.submit(
                find_max, probe, prefix, d.floor, d.ceiling, d.digits
            )
            for d in domains
        }
        maxima: Dict[str, Optional[int]] = {
            k: f.result() for k, f in futures.items()
        }

    ranges = {
        d.key: NumericRange(min=d.floor, max=maxima[d.key])
        for d in domains
        if maxima[d.key] is not None
    }
    return PrefixOutcome(ranges=ranges)
