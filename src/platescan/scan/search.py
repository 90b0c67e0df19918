from __future__ import annotations

from typing import Callable, Optional

Probe = Callable[[str], bool]


def _plate(prefix: str, number: int, digits: int) -> str:
    return f"{prefix}{number:0{digits}d}"


def find_max(
    probe: Probe, prefix: str, lo: int, hi: int, digits: int
) -> Optional[int]:
    """
    Largest assigned number in [lo, hi] for `prefix`, or None if `lo` itself
    is unassigned.

    Assumes plates are issued contiguously from `lo`: a floor miss means the
    whole domain is empty, and a gap below the true maximum truncates the
    result to the end of the first contiguous run.
    """
    if not probe(_plate(prefix, lo, digits)):
        return None

    left, right, best = lo, hi, lo
    while left <= right:
        mid = (left + right + 1) // 2  # upper midpoint
        if probe(_plate(prefix, mid, digits)):
            best = mid
            left = mid + 1
        else:
            right = mid - 1
    return best
