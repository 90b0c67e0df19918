from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

EMPTY = "empty"


@dataclass(frozen=True)
class Domain:
    """One fixed-width numeric suffix space (e.g. 4 digits: 1000..9999)."""

    key: str  # "d5" | "d4"
    digits: int

    @property
    def floor(self) -> int:
        return 10 ** (self.digits - 1)

    @property
    def ceiling(self) -> int:
        return 10**self.digits - 1

    def plate(self, prefix: str, number: int) -> str:
        return f"{prefix}{number:0{self.digits}d}"


D5 = Domain("d5", 5)
D4 = Domain("d4", 4)

# Emission and serialization order: 5-digit before 4-digit.
DOMAINS: Tuple[Domain, ...] = (D5, D4)
DOMAINS_BY_KEY: Dict[str, Domain] = {d.key: d for d in DOMAINS}


@dataclass(frozen=True)
class NumericRange:
    min: int
    max: int

    def __post_init__(self):
        if self.max < self.min:
            raise ValueError(f"range max {self.max} < min {self.min}")

    def __len__(self) -> int:
        return self.max - self.min + 1


@dataclass(frozen=True)
class PrefixOutcome:
    """
    Result of scanning one prefix: zero to two ranges keyed by domain key.
    No ranges at all is the "empty" outcome.
    """

    ranges: Dict[str, NumericRange] = field(default_factory=dict)

    def __post_init__(self):
        unknown = set(self.ranges) - set(DOMAINS_BY_KEY)
        if unknown:
            raise ValueError(f"unknown domain keys: {sorted(unknown)}")
        # assignment starts at the floor; nothing may leave the digit width
        for key, rng in self.ranges.items():
            d = DOMAINS_BY_KEY[key]
            if rng.min != d.floor or rng.max > d.ceiling:
                raise ValueError(
                    f"{key} range {rng.min}..{rng.max} outside "
                    f"{d.floor}..{d.ceiling} or not starting at floor"
                )

    # frozen+eq would generate a hash over the dict field and fail
    def __hash__(self) -> int:
        return hash(tuple(sorted(self.ranges.items())))

    @classmethod
    def empty(cls) -> "PrefixOutcome":
        return cls()

    @property
    def is_empty(self) -> bool:
        return not self.ranges

    def items(self) -> List[Tuple[Domain, NumericRange]]:
        """(domain, range) pairs in fixed domain order."""
        return [(d, self.ranges[d.key]) for d in DOMAINS if d.key in self.ranges]

    def describe(self) -> str:
        if self.is_empty:
            return EMPTY
        return " ".join(f"{d.key}:{r.max}" for d, r in self.items())

    # json ---------------------------------------------------------------
    def to_json(self) -> Union[str, Dict[str, Dict[str, int]]]:
        if self.is_empty:
            return EMPTY
        return {d.key: {"min": r.min, "max": r.max} for d, r in self.items()}

    @classmethod
    def from_json(cls, raw: Any) -> "PrefixOutcome":
        if raw == EMPTY:
            return cls.empty()
        if not isinstance(raw, dict):
            raise ValueError(f"unexpected outcome shape: {raw!r}")
        ranges: Dict[str, NumericRange] = {}
        for key, val in raw.items():
            ranges[key] = NumericRange(min=int(val["min"]), max=int(val["max"]))
        return cls(ranges=ranges)


ScanCache = Dict[str, PrefixOutcome]


def active_only(cache: Mapping[str, PrefixOutcome]) -> ScanCache:
    """Drop "empty" entries; keeps the input order."""
    return {k: v for k, v in cache.items() if not v.is_empty}


class ProbeCounter:
    """Thread-safe count of HTTP attempts issued against the registry."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value = 0

    def increment(self) -> int:
        with self._lock:
            self._value += 1
            return self._value

    @property
    def value(self) -> int:
        with self._lock:
            return self._value


@dataclass(frozen=True)
class SitemapBatch:
    batch_id: int
    urls: List[str]

    def __hash__(self) -> int:
        return hash((self.batch_id, tuple(self.urls)))

    @property
    def filename(self) -> str:
        return f"{self.batch_id}.xml"


@dataclass(frozen=True)
class SitemapIndex:
    """References to every batch of one emission run, in emission order."""

    locations: List[str] = field(default_factory=list)

    def __hash__(self) -> int:
        return hash(tuple(self.locations))


@dataclass(frozen=True)
class ScanReport:
    ranges: ScanCache
    total_prefixes: int
    cached_prefixes: int
    scanned_prefixes: int
    probes: int
    meta: Optional[Dict[str, Any]] = None
