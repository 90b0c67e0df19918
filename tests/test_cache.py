import json

from platescan.core.contracts import NumericRange, PrefixOutcome
from platescan.scan.cache import JsonRangeStore, MemoryRangeStore


def _sample():
    return {
        "AA": PrefixOutcome.empty(),
        "EL": PrefixOutcome(
            ranges={
                "d5": NumericRange(10000, 54321),
                "d4": NumericRange(1000, 1234),
            }
        ),
    }


def test_missing_file_is_empty(tmp_path):
    assert JsonRangeStore(tmp_path / "nope.json").load() == {}


def test_malformed_file_is_empty(tmp_path):
    p = tmp_path / "ranges.json"
    p.write_text("{not json", encoding="utf-8")
    assert JsonRangeStore(p).load() == {}


def test_non_object_file_is_empty(tmp_path):
    p = tmp_path / "ranges.json"
    p.write_text("[1, 2, 3]", encoding="utf-8")
    assert JsonRangeStore(p).load() == {}


def test_bad_entries_are_skipped(tmp_path):
    p = tmp_path / "ranges.json"
    p.write_text(
        json.dumps(
            {
                "AA": "empty",
                "AB": {"d4": {"min": 1000}},
                "AC": 42,
                "AD": {"d4": {"min": 1000, "max": 1010}},
                "AE": {"d4": {"min": 5, "max": 7}},
                "AF": {"d5": {"min": 10000, "max": 123456}},
                "AG": {"d4": {"min": 1500, "max": 1600}},
            }
        ),
        encoding="utf-8",
    )
    got = JsonRangeStore(p).load()
    assert set(got) == {"AA", "AD"}
    assert got["AD"].ranges["d4"].max == 1010


def test_save_then_load(tmp_path):
    p = tmp_path / "nested" / "ranges.json"
    store = JsonRangeStore(p)
    store.save(_sample())
    assert store.load() == _sample()
    assert not p.with_name("ranges.json.tmp").exists()


def test_file_format_matches_site_consumer(tmp_path):
    p = tmp_path / "ranges.json"
    JsonRangeStore(p).save(_sample())
    doc = json.loads(p.read_text(encoding="utf-8"))
    assert doc == {
        "AA": "empty",
        "EL": {
            "d5": {"min": 10000, "max": 54321},
            "d4": {"min": 1000, "max": 1234},
        },
    }
    # pretty-printed so diffs stay readable
    assert p.read_text(encoding="utf-8").startswith('{\n  "AA"')


def test_memory_store_copies():
    store = MemoryRangeStore()
    data = _sample()
    store.save(data)
    data.pop("AA")
    assert "AA" in store.load()
    assert store.saves == 1
