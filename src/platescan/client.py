from __future__ import annotations

from pathlib import Path
from typing import Optional

from .config import (
    DEFAULT_CONCURRENCY,
    MAX_URLS_PER_SITEMAP,
    OUTPUT_DIR,
    VALID_LETTERS,
    base_url,
)
from .core.contracts import ScanCache, ScanReport, active_only
from .core.interfaces import PlateProber, RangeStore
from .providers.factory import Registry, make_prober
from .scan.cache import JsonRangeStore
from .scan.runner import RangeScanner
from .sitemaps.writer import EmitSummary, write_sitemaps


class PlateScan:
    """
    Public façade. Wires a prober and a range store together; the scanning
    and emission logic lives in platescan.scan and platescan.sitemaps.
    """

    def __init__(
        self,
        registry: Registry = Registry.VEGVESEN,
        *,
        store: Optional[RangeStore] = None,
        prober: Optional[PlateProber] = None,
        **prober_kwargs,
    ) -> None:
        self._store = store or JsonRangeStore()
        self._registry = registry
        self._prober = prober
        self._prober_kwargs = prober_kwargs

    @property
    def prober(self) -> PlateProber:
        # built lazily so emit-only runs need no credential
        if self._prober is None:
            self._prober = make_prober(self._registry, **self._prober_kwargs)
        return self._prober

    def scan(
        self,
        *,
        concurrency: int = DEFAULT_CONCURRENCY,
        letters: str = VALID_LETTERS,
        prune_empty: bool = True,
    ) -> ScanReport:
        scanner = RangeScanner(
            self.prober,
            self._store,
            letters=letters,
            concurrency=concurrency,
            prune_empty=prune_empty,
        )
        return scanner.run()

    def cached_ranges(self) -> ScanCache:
        return active_only(self._store.load())

    def write_sitemaps(
        self,
        *,
        out_dir: Path = OUTPUT_DIR,
        site_url: Optional[str] = None,
        max_urls: int = MAX_URLS_PER_SITEMAP,
        ranges: Optional[ScanCache] = None,
    ) -> EmitSummary:
        return write_sitemaps(
            ranges if ranges is not None else self.cached_ranges(),
            out_dir,
            site_url or base_url(),
            max_urls=max_urls,
        )
