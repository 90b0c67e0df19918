from __future__ import annotations

import json
import logging
import os
import threading
from pathlib import Path
from typing import Dict, Mapping, Optional

from ..config import CACHE_PATH
from ..core.contracts import PrefixOutcome, ScanCache
from ..core.interfaces import RangeStore

logger = logging.getLogger(__name__)

# Scan cache persisted as one pretty-printed JSON object:
#   {"AB": "empty", "CD": {"d5": {"min": 10000, "max": 54321}, "d4": {...}}}
# A prefix present here is never probed again; "empty" marks "checked, nothing".
#
# NOTE: the whole object is rewritten per completed prefix. Fine for a few
# hundred prefixes; swap in another RangeStore if that ever changes.

_LOCK = threading.Lock()


class JsonRangeStore(RangeStore):
    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = Path(path or CACHE_PATH)

    def load(self) -> ScanCache:
        if not self.path.exists():
            return {}
        with _LOCK:
            try:
                with self.path.open("r", encoding="utf-8") as fh:
                    raw = json.load(fh)
            except (OSError, ValueError) as e:
                logger.warning(
                    "ignoring unreadable cache %s (%s)", self.path, e
                )
                return {}
        if not isinstance(raw, dict):
            logger.warning("ignoring cache %s: not a JSON object", self.path)
            return {}

        out: ScanCache = {}
        for prefix, val in raw.items():
            try:
                out[str(prefix)] = PrefixOutcome.from_json(val)
            except (KeyError, TypeError, ValueError):
                logger.warning("skipping malformed cache entry %r", prefix)
                continue
        return out

    def save(self, cache: Mapping[str, PrefixOutcome]) -> None:
        doc = {k: v.to_json() for k, v in cache.items()}
        tmp = self.path.with_name(self.path.name + ".tmp")
        with _LOCK:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tmp.open("w", encoding="utf-8") as fh:
                json.dump(doc, fh, indent=2)
                fh.write("\n")
            os.replace(tmp, self.path)


class MemoryRangeStore(RangeStore):
    """Process-local store; handy for embedding and tests."""

    def __init__(self, initial: Optional[Mapping[str, PrefixOutcome]] = None):
        self._data: Dict[str, PrefixOutcome] = dict(initial or {})
        self.saves = 0

    def load(self) -> ScanCache:
        return dict(self._data)

    def save(self, cache: Mapping[str, PrefixOutcome]) -> None:
        self._data = dict(cache)
        self.saves += 1
