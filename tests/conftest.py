import os
import threading
from typing import Dict, List, Tuple

import pytest

# ---- mode & env flags -------------------------------------------------------


def _truthy(s: str | None) -> bool:
    return str(s).strip().lower() in {"1", "true", "yes", "on"}


LIVE = _truthy(os.getenv("PLATESCAN_LIVE_TESTS"))
SVV_KEY = os.getenv("SVV_API_KEY", "")


# =============================================================================
# MOCK HELPERS (used when PLATESCAN_LIVE_TESTS is NOT set)
# =============================================================================


class FakeRegistry:
    """
    Monotone existence oracle: plates exist from the domain floor up to the
    configured max. `maxes` maps (prefix, digits) -> highest assigned number.
    Records every probed plate, thread-safely.
    """

    def __init__(self, maxes: Dict[Tuple[str, int], int]) -> None:
        self.maxes = dict(maxes)
        self.calls: List[str] = []
        self._lock = threading.Lock()

    def probe(self, plate: str) -> bool:
        with self._lock:
            self.calls.append(plate)
        prefix, digits = plate[:2], len(plate) - 2
        n = int(plate[2:])
        top = self.maxes.get((prefix, digits))
        return top is not None and 10 ** (digits - 1) <= n <= top

    def calls_for(self, prefix: str, digits: int | None = None) -> List[str]:
        with self._lock:
            return [
                c
                for c in self.calls
                if c[:2] == prefix
                and (digits is None or len(c) - 2 == digits)
            ]


class Resp:
    def __init__(self, status=200, text=""):
        self.status_code = status
        self.text = text


class ScriptedSession:
    """
    Stand-in for requests.Session: `get` pops the next scripted item, which
    is either a status code or an exception instance to raise.
    """

    def __init__(self, script):
        self.script = list(script)
        self.headers: Dict[str, str] = {}
        self.requests: List[dict] = []

    def get(self, url, params=None, timeout=None):
        self.requests.append({"url": url, "params": params, "timeout": timeout})
        item = self.script.pop(0)
        if isinstance(item, BaseException):
            raise item
        return Resp(status=item)


@pytest.fixture
def registry_factory():
    return FakeRegistry


@pytest.fixture
def scripted_session():
    return ScriptedSession


@pytest.fixture
def no_sleep():
    """Sleep stub that records requested pauses instead of waiting."""
    pauses: List[float] = []

    def _sleep(s: float) -> None:
        pauses.append(s)

    _sleep.pauses = pauses  # type: ignore[attr-defined]
    return _sleep


@pytest.fixture
def live_prober():
    """Real prober; only in LIVE mode with a key."""
    if not LIVE:
        pytest.skip("live_prober skipped (offline mode)")
    if not SVV_KEY:
        pytest.skip("SVV_API_KEY missing for live tests")
    from platescan.providers.vegvesen import VegvesenProber

    return VegvesenProber(api_key=SVV_KEY, delay_s=0.1)


# =============================================================================
# PYTEST MARKER HANDLING
# =============================================================================


def pytest_runtest_setup(item: pytest.Item) -> None:
    # If a test is marked live but we're not in LIVE mode, skip it proactively.
    if "live" in item.keywords and not LIVE:
        pytest.skip("live test skipped (PLATESCAN_LIVE_TESTS not enabled)")
