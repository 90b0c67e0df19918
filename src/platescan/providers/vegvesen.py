from __future__ import annotations

import logging
import time
from typing import Callable, Optional

import requests
from requests.adapters import HTTPAdapter

from ..config import (
    DEFAULT_CONCURRENCY,
    DEFAULT_DELAY_S,
    DEFAULT_TIMEOUT_S,
    RATE_LIMIT_BACKOFF_S,
    SVV_API_URL,
    TRANSPORT_BACKOFF_S,
    svv_api_key,
)
from ..core.contracts import ProbeCounter
from ..core.interfaces import PlateProber

logger = logging.getLogger(__name__)

FOUND = "found"
ABSENT = "absent"
RETRY = "retry"


def classify_status(status: int) -> str:
    """Map an HTTP status to found / absent / retry."""
    if status in (204, 404):
        return ABSENT
    if status == 429 or status >= 500:
        return RETRY
    if 200 <= status < 300:
        return FOUND
    return ABSENT


def normalize_plate(raw: str) -> str:
    return "".join(ch for ch in (raw or "").upper() if ch not in " -\t")


class VegvesenProber(PlateProber):
    """
    Existence checks against the Statens vegvesen vehicle lookup.

    Endpoint:
      GET {SVV_API_URL}?kjennemerke=<plate>

    Notes:
      - API key is REQUIRED via the SVV-Authorization header.
      - Only the status code is used; the body is never read.
      - 429/5xx and transport errors are retried forever at a fixed interval.
        A dead key or endpoint therefore loops; watch the WARNING lines.
    """

    def __init__(
        self,
        *,
        api_key: Optional[str] = None,
        api_url: str = SVV_API_URL,
        delay_s: float = DEFAULT_DELAY_S,
        rate_limit_backoff_s: float = RATE_LIMIT_BACKOFF_S,
        transport_backoff_s: float = TRANSPORT_BACKOFF_S,
        counter: Optional[ProbeCounter] = None,
        session: Optional[requests.Session] = None,
        pool_maxsize: int = 2 * DEFAULT_CONCURRENCY,
        sleep: Callable[[float], None] = time.sleep,
        debug: bool = False,
    ) -> None:
        key = api_key or svv_api_key()
        if not key:
            raise RuntimeError(
                "SVV_API_KEY is required (SVV-Authorization for kjoretoydata). "
                "Set env var SVV_API_KEY, add it to .env.local, or pass api_key=..."
            )
        if session is None:
            session = requests.Session()
            # each prefix worker runs two searches at once; size the pool for
            # all of them. Retries are handled in probe(), not by urllib3.
            adapter = HTTPAdapter(
                pool_connections=2,
                pool_maxsize=max(1, int(pool_maxsize)),
                max_retries=0,
            )
            session.mount("https://", adapter)
            session.mount("http://", adapter)
        self._session = session
        self._session.headers.update(
            {
                "Accept": "application/json",
                "SVV-Authorization": f"Apikey {key}",
            }
        )
        self._url = api_url
        self._timeout = DEFAULT_TIMEOUT_S
        self._delay_s = max(0.0, float(delay_s))
        self._rate_limit_backoff_s = rate_limit_backoff_s
        self._transport_backoff_s = transport_backoff_s
        self._sleep = sleep
        self._debug = bool(debug)
        self.counter = counter or ProbeCounter()

    def _get(self, plate: str) -> requests.Response:
        self.counter.increment()
        r = self._session.get(
            self._url, params={"kjennemerke": plate}, timeout=self._timeout
        )
        if self._debug:
            logger.debug("[SVV GET] plate=%s status=%s", plate, r.status_code)
        return r

    def probe(self, plate: str) -> bool:
        while True:
            try:
                status = self._get(plate).status_code
            except requests.RequestException as e:
                logger.warning(
                    "probe %s: %s: %s; retrying in %.1fs",
                    plate,
                    type(e).__name__,
                    e,
                    self._transport_backoff_s,
                )
                self._sleep(self._transport_backoff_s)
                continue

            verdict = classify_status(status)
            if verdict == RETRY:
                logger.warning(
                    "probe %s: HTTP %s; retrying in %.1fs",
                    plate,
                    status,
                    self._rate_limit_backoff_s,
                )
                self._sleep(self._rate_limit_backoff_s)
                continue
            break

        if self._delay_s:
            self._sleep(self._delay_s)
        return verdict == FOUND
