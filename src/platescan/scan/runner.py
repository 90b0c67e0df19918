from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from itertools import product
from typing import List, Optional

from ..config import DEFAULT_CONCURRENCY, VALID_LETTERS
from ..core.contracts import ProbeCounter, ScanReport, active_only
from ..core.interfaces import PlateProber, RangeStore
from .prefix import scan_prefix

logger = logging.getLogger(__name__)


def candidate_prefixes(letters: str = VALID_LETTERS) -> List[str]:
    """Every two-letter prefix, row-major over `letters` (AA, AB, ..., ZZ)."""
    return [a + b for a, b in product(letters, repeat=2)]


class RangeScanner:
    """
    Drives scan_prefix over the whole prefix space with a fixed-width thread
    pool, persisting the cache after every completed prefix.

    Restarting against a partially written cache skips every prefix already
    present (including "empty" ones). Once all prefixes are known, "empty"
    entries are pruned from the store unless `prune_empty=False`.
    """

    def __init__(
        self,
        prober: PlateProber,
        store: RangeStore,
        *,
        letters: str = VALID_LETTERS,
        concurrency: int = DEFAULT_CONCURRENCY,
        counter: Optional[ProbeCounter] = None,
        prune_empty: bool = True,
    ) -> None:
        self.prober = prober
        self.store = store
        self.letters = letters
        self.concurrency = max(1, int(concurrency))
        self.counter = counter or getattr(prober, "counter", None)
        self.prune_empty = prune_empty
        self._lock = threading.Lock()

    def run(self) -> ScanReport:
        prefixes = candidate_prefixes(self.letters)
        total = len(prefixes)
        cache = self.store.load()
        pending = [p for p in prefixes if p not in cache]
        cached = total - len(pending)
        probes_before = self.counter.value if self.counter else 0

        logger.info(
            "Scanning %d prefixes (%d cached, concurrency %d)",
            total,
            cached,
            self.concurrency,
        )

        done = cached

        def _work(prefix: str) -> None:
            nonlocal done
            outcome = scan_prefix(self.prober.probe, prefix)
            # merge + persist must not interleave between workers
            with self._lock:
                cache[prefix] = outcome
                done += 1
                self.store.save(cache)
                logger.info(
                    "[%d/%d] %s %s", done, total, prefix, outcome.describe()
                )

        if pending:
            with ThreadPoolExecutor(
                max_workers=self.concurrency, thread_name_prefix="prefix"
            ) as pool:
                futures = [pool.submit(_work, p) for p in pending]
                for fut in as_completed(futures):
                    fut.result()

        ranges = active_only(cache)
        if self.prune_empty and len(ranges) != len(cache):
            self.store.save(ranges)

        probes = (self.counter.value if self.counter else 0) - probes_before
        return ScanReport(
            ranges=ranges,
            total_prefixes=total,
            cached_prefixes=cached,
            scanned_prefixes=len(pending),
            probes=probes,
        )


def scan_ranges(
    prober: PlateProber,
    store: RangeStore,
    *,
    letters: str = VALID_LETTERS,
    concurrency: int = DEFAULT_CONCURRENCY,
    prune_empty: bool = True,
) -> ScanReport:
    """Public entry: scan every uncached prefix and return the active ranges."""
    return RangeScanner(
        prober,
        store,
        letters=letters,
        concurrency=concurrency,
        prune_empty=prune_empty,
    ).run()
