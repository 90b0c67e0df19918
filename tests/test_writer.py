import xml.etree.ElementTree as ET

from platescan.core.contracts import NumericRange, PrefixOutcome, SitemapIndex
from platescan.sitemaps.writer import render_index, render_urlset, write_sitemaps

BASE = "https://plates.test"
NS = {"sm": "http://www.sitemaps.org/schemas/sitemap/0.9"}


def _ranges():
    return {
        "AB": PrefixOutcome(ranges={"d4": NumericRange(1000, 1004)}),
        "EL": PrefixOutcome(ranges={"d5": NumericRange(10000, 10001)}),
    }


def test_render_urlset():
    xml = render_urlset(["https://x.test/AB1000"], changefreq="daily", priority="0.8")
    assert xml.startswith('<?xml version="1.0" encoding="UTF-8"?>\n<urlset')
    assert (
        "<url><loc>https://x.test/AB1000</loc><changefreq>daily</changefreq>"
        "<priority>0.8</priority></url>\n" in xml
    )
    assert xml.endswith("</urlset>\n")


def test_render_escapes():
    xml = render_urlset(["https://x.test/?a=1&b=2"])
    assert "&amp;" in xml
    ET.fromstring(xml.encode("utf-8"))


def test_render_index():
    xml = render_index(SitemapIndex(locations=["https://x.test/sitemaps/0.xml"]))
    root = ET.fromstring(xml.encode("utf-8"))
    locs = [e.text for e in root.findall("sm:sitemap/sm:loc", NS)]
    assert locs == ["https://x.test/sitemaps/0.xml"]


def test_write_sitemaps_layout(tmp_path):
    s = write_sitemaps(_ranges(), tmp_path, BASE, max_urls=2)

    assert s.index_path == tmp_path / "sitemap.xml"
    assert [p.name for p in s.batch_files] == ["0.xml", "1.xml", "2.xml", "3.xml"]
    assert s.total_urls == 7

    root = ET.fromstring(s.index_path.read_bytes())
    locs = [e.text for e in root.findall("sm:sitemap/sm:loc", NS)]
    assert locs == [f"{BASE}/sitemaps/{i}.xml" for i in range(4)]

    last = ET.fromstring((tmp_path / "sitemaps" / "3.xml").read_bytes())
    urls = [e.text for e in last.findall("sm:url/sm:loc", NS)]
    assert urls == [f"{BASE}/EL10000", f"{BASE}/EL10001"]


def test_previous_batches_discarded(tmp_path):
    stale = tmp_path / "sitemaps"
    stale.mkdir()
    (stale / "99.xml").write_text("old", encoding="utf-8")

    write_sitemaps(_ranges(), tmp_path, BASE, max_urls=50000)
    assert sorted(p.name for p in stale.iterdir()) == ["0.xml", "1.xml"]


def test_byte_identical_reruns(tmp_path):
    a, b = tmp_path / "a", tmp_path / "b"
    write_sitemaps(_ranges(), a, BASE, max_urls=3)
    write_sitemaps(_ranges(), b, BASE, max_urls=3)
    files_a = sorted(p.relative_to(a) for p in a.rglob("*.xml"))
    files_b = sorted(p.relative_to(b) for p in b.rglob("*.xml"))
    assert files_a == files_b
    for rel in files_a:
        assert (a / rel).read_bytes() == (b / rel).read_bytes()
