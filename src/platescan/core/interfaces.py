from __future__ import annotations

from typing import Mapping, Protocol

from .contracts import PrefixOutcome, ScanCache


class PlateProber(Protocol):
    """
    Existence oracle for full plate strings. Implementations must only
    return once they have a definitive answer.
    """

    def probe(self, plate: str) -> bool: ...


class RangeStore(Protocol):
    """Durable home of the scan cache (prefix -> outcome)."""

    def load(self) -> ScanCache: ...

    def save(self, cache: Mapping[str, PrefixOutcome]) -> None: ...
