from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from .client import PlateScan
from .config import (
    CACHE_PATH,
    DEFAULT_CONCURRENCY,
    DEFAULT_DELAY_S,
    MAX_URLS_PER_SITEMAP,
    OUTPUT_DIR,
    VALID_LETTERS,
)
from .core.contracts import ScanReport
from .providers.factory import Registry
from .providers.vegvesen import normalize_plate
from .scan.cache import JsonRangeStore
from .sitemaps.writer import EmitSummary

app = typer.Typer(help="platescan: plate range discovery and sitemap builder")


def _setup_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _client(
    cache: Path,
    *,
    delay: float = DEFAULT_DELAY_S,
    concurrency: int = DEFAULT_CONCURRENCY,
    debug: bool = False,
) -> PlateScan:
    return PlateScan(
        Registry.VEGVESEN,
        store=JsonRangeStore(cache),
        delay_s=delay,
        pool_maxsize=2 * max(1, concurrency),
        debug=debug,
    )


def _run_scan(
    pp: PlateScan, *, concurrency: int, letters: str, keep_empty: bool
) -> ScanReport:
    _require_prober(pp)
    return pp.scan(
        concurrency=concurrency,
        letters=letters,
        prune_empty=not keep_empty,
    )


def _require_prober(pp: PlateScan) -> None:
    # a missing credential is the only fatal condition
    try:
        pp.prober
    except RuntimeError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)


def _echo_emit(summary: EmitSummary) -> None:
    typer.echo(
        f"{len(summary.batch_files)} sitemaps, {summary.total_urls:,} URLs "
        f"-> {summary.index_path}"
    )


@app.command("scan")
def scan(
    cache: Path = typer.Option(CACHE_PATH, help="Scan cache (JSON)"),
    concurrency: int = typer.Option(
        DEFAULT_CONCURRENCY, help="Prefixes scanned in parallel"
    ),
    delay: float = typer.Option(
        DEFAULT_DELAY_S, help="Pause after every probe, in seconds"
    ),
    letters: str = typer.Option(VALID_LETTERS, help="Prefix alphabet"),
    keep_empty: bool = typer.Option(
        False, help="Keep 'empty' markers in the cache after the run"
    ),
    debug: bool = typer.Option(False, help="Verbose HTTP diagnostics"),
):
    """Discover assigned plate ranges for every prefix (resumable)."""
    _setup_logging(debug)
    pp = _client(cache, delay=delay, concurrency=concurrency, debug=debug)
    rep = _run_scan(
        pp, concurrency=concurrency, letters=letters, keep_empty=keep_empty
    )
    typer.echo(
        f"{len(rep.ranges)} active prefixes, {rep.scanned_prefixes} scanned, "
        f"{rep.probes} API calls"
    )


@app.command("sitemaps")
def sitemaps(
    cache: Path = typer.Option(CACHE_PATH, help="Scan cache (JSON)"),
    out: Path = typer.Option(OUTPUT_DIR, help="Output directory"),
    base_url: Optional[str] = typer.Option(
        None, help="Site address (default: PLATESCAN_BASE_URL / COOLIFY_URL)"
    ),
    max_urls: int = typer.Option(
        MAX_URLS_PER_SITEMAP, help="Max URLs per sitemap file"
    ),
    debug: bool = typer.Option(False, help="Verbose output"),
):
    """Regenerate sitemap.xml and sitemaps/*.xml from the cached ranges."""
    _setup_logging(debug)
    pp = _client(cache, debug=debug)
    _echo_emit(pp.write_sitemaps(out_dir=out, site_url=base_url, max_urls=max_urls))


@app.command("build")
def build(
    cache: Path = typer.Option(CACHE_PATH, help="Scan cache (JSON)"),
    out: Path = typer.Option(OUTPUT_DIR, help="Output directory"),
    base_url: Optional[str] = typer.Option(None, help="Site address"),
    concurrency: int = typer.Option(DEFAULT_CONCURRENCY),
    delay: float = typer.Option(DEFAULT_DELAY_S),
    max_urls: int = typer.Option(MAX_URLS_PER_SITEMAP),
    debug: bool = typer.Option(False, help="Verbose HTTP diagnostics"),
):
    """Scan, then write sitemaps."""
    _setup_logging(debug)
    pp = _client(cache, delay=delay, concurrency=concurrency, debug=debug)
    rep = _run_scan(
        pp, concurrency=concurrency, letters=VALID_LETTERS, keep_empty=False
    )
    summary = pp.write_sitemaps(
        out_dir=out, site_url=base_url, max_urls=max_urls, ranges=rep.ranges
    )
    typer.echo(
        f"Done: {len(rep.ranges)} active prefixes, "
        f"{len(summary.batch_files)} sitemaps, {summary.total_urls:,} URLs, "
        f"{rep.probes} API calls"
    )


@app.command("probe")
def probe(
    plate: str = typer.Argument(..., help="Plate, e.g. 'AB 12345'"),
    debug: bool = typer.Option(False, help="Verbose HTTP diagnostics"),
):
    """Check whether a single plate exists."""
    _setup_logging(debug)
    cleaned = normalize_plate(plate)
    pp = PlateScan(Registry.VEGVESEN, delay_s=0.0, debug=debug)
    _require_prober(pp)
    found = pp.prober.probe(cleaned)
    typer.echo(f"{cleaned}\t{'exists' if found else 'absent'}")


def main() -> None:
    app()


if __name__ == "__main__":
    app()
