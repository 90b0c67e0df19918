from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Mapping
from xml.sax.saxutils import escape

from ..config import MAX_URLS_PER_SITEMAP, URL_CHANGEFREQ, URL_PRIORITY
from ..core.contracts import PrefixOutcome, SitemapIndex
from .emit import index_location, iter_batches

logger = logging.getLogger(__name__)

_XML_DECL = '<?xml version="1.0" encoding="UTF-8"?>\n'
_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"

INDEX_FILENAME = "sitemap.xml"
BATCH_DIRNAME = "sitemaps"


def render_urlset(
    urls: Iterable[str],
    *,
    changefreq: str = URL_CHANGEFREQ,
    priority: str = URL_PRIORITY,
) -> str:
    parts = [_XML_DECL, f'<urlset xmlns="{_NS}">\n']
    tail = (
        f"<changefreq>{escape(changefreq)}</changefreq>"
        f"<priority>{escape(priority)}</priority></url>\n"
    )
    for url in urls:
        parts.append(f"<url><loc>{escape(url)}</loc>{tail}")
    parts.append("</urlset>\n")
    return "".join(parts)


def render_index(index: SitemapIndex) -> str:
    parts = [_XML_DECL, f'<sitemapindex xmlns="{_NS}">\n']
    for loc in index.locations:
        parts.append(f"<sitemap><loc>{escape(loc)}</loc></sitemap>\n")
    parts.append("</sitemapindex>\n")
    return "".join(parts)


@dataclass(frozen=True)
class EmitSummary:
    index_path: Path
    batch_files: List[Path]
    total_urls: int


def write_sitemaps(
    ranges: Mapping[str, PrefixOutcome],
    out_dir: Path,
    base_url: str,
    *,
    max_urls: int = MAX_URLS_PER_SITEMAP,
    changefreq: str = URL_CHANGEFREQ,
    priority: str = URL_PRIORITY,
) -> EmitSummary:
    """
    Regenerate OUT/sitemap.xml and OUT/sitemaps/{id}.xml from scratch.
    Any previous batch directory is removed first.
    """
    out_dir = Path(out_dir)
    batch_dir = out_dir / BATCH_DIRNAME
    if batch_dir.exists():
        shutil.rmtree(batch_dir)
    batch_dir.mkdir(parents=True, exist_ok=True)

    locations: List[str] = []
    files: List[Path] = []
    total_urls = 0
    for batch in iter_batches(ranges, base_url, max_urls=max_urls):
        path = batch_dir / batch.filename
        path.write_text(
            render_urlset(batch.urls, changefreq=changefreq, priority=priority),
            encoding="utf-8",
        )
        files.append(path)
        locations.append(index_location(base_url, batch))
        total_urls += len(batch.urls)
        logger.debug("wrote %s (%d urls)", path, len(batch.urls))

    index_path = out_dir / INDEX_FILENAME
    index_path.write_text(
        render_index(SitemapIndex(locations=locations)), encoding="utf-8"
    )
    return EmitSummary(
        index_path=index_path, batch_files=files, total_urls=total_urls
    )
