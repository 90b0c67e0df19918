"""
Global configuration for platescan.
Only infrastructure knobs live here (paths, URLs, pacing, retries, creds).
Values are read once at import; tests reload the module after patching env.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Final, Optional

from dotenv import find_dotenv, load_dotenv

# Process env wins; .env.local is consulted before .env.
load_dotenv(find_dotenv(".env.local", usecwd=True))
load_dotenv(find_dotenv(usecwd=True))

# -----------------------------------------------------------------------------
# Storage roots
# -----------------------------------------------------------------------------
# XDG cache location: ~/.cache/platescan (or $XDG_CACHE_HOME/platescan)
_XDG_CACHE_HOME = Path(os.getenv("XDG_CACHE_HOME", Path.home() / ".cache"))
CACHE_DIR = _XDG_CACHE_HOME / "platescan"

CACHE_PATH: Final[Path] = Path(
    os.getenv("PLATESCAN_CACHE_PATH", str(CACHE_DIR / "plate-ranges.json"))
)
OUTPUT_DIR: Final[Path] = Path(os.getenv("PLATESCAN_OUTPUT_DIR", "public"))

# -----------------------------------------------------------------------------
# Plate space
# -----------------------------------------------------------------------------
# I, M, O and Q are never issued.
VALID_LETTERS: Final[str] = "ABCDEFGHJKLNPRSTUVWXYZ"

# -----------------------------------------------------------------------------
# HTTP / retry / pacing
# -----------------------------------------------------------------------------
SVV_API_URL: Final[str] = os.getenv(
    "PLATESCAN_API_URL",
    "https://www.vegvesen.no/ws/no/vegvesen/kjoretoy/felles/datautlevering/enkeltoppslag/kjoretoydata",
)
DEFAULT_TIMEOUT_S: Final[int] = int(os.getenv("PLATESCAN_TIMEOUT_S", "45"))

DEFAULT_CONCURRENCY: Final[int] = int(
    os.getenv("PLATESCAN_CONCURRENCY", "10")
)
DEFAULT_DELAY_S: Final[float] = float(os.getenv("PLATESCAN_DELAY_S", "0.03"))
RATE_LIMIT_BACKOFF_S: Final[float] = float(
    os.getenv("PLATESCAN_RATE_LIMIT_BACKOFF_S", "3.0")
)
TRANSPORT_BACKOFF_S: Final[float] = float(
    os.getenv("PLATESCAN_TRANSPORT_BACKOFF_S", "2.0")
)

# -----------------------------------------------------------------------------
# Sitemaps
# -----------------------------------------------------------------------------
MAX_URLS_PER_SITEMAP: Final[int] = int(
    os.getenv("PLATESCAN_MAX_URLS", "50000")
)
URL_CHANGEFREQ: Final[str] = os.getenv("PLATESCAN_CHANGEFREQ", "daily")
URL_PRIORITY: Final[str] = os.getenv("PLATESCAN_PRIORITY", "0.8")


def get_env(
    name: str, *, required: bool = False, default: Optional[str] = None
) -> Optional[str]:
    """Small helper to fetch env vars with an optional 'required' flag."""
    val = os.getenv(name, default)
    if val is not None:
        val = val.strip().strip("\"'")
    if required and not val:
        raise RuntimeError(f"Missing required environment variable: {name}")
    return val


def svv_api_key(required: bool = False) -> Optional[str]:
    return get_env("SVV_API_KEY", required=required)


def base_url() -> str:
    """
    Public site address used to build sitemap URLs.

    PLATESCAN_BASE_URL wins; otherwise the first entry of the comma-separated
    COOLIFY_URL (e.g. "https://a.no,https://www.a.no"); else localhost.
    """
    explicit = get_env("PLATESCAN_BASE_URL")
    if explicit:
        return explicit.rstrip("/")
    coolify = get_env("COOLIFY_URL")
    if coolify:
        first = coolify.split(",")[0].strip()
        if first:
            return first.rstrip("/")
    return "http://localhost:3000"


# -----------------------------------------------------------------------------
# Public exports
# -----------------------------------------------------------------------------
__all__ = [
    # roots
    "CACHE_DIR",
    "CACHE_PATH",
    "OUTPUT_DIR",
    # plate space
    "VALID_LETTERS",
    # http/retry/pacing
    "SVV_API_URL",
    "DEFAULT_TIMEOUT_S",
    "DEFAULT_CONCURRENCY",
    "DEFAULT_DELAY_S",
    "RATE_LIMIT_BACKOFF_S",
    "TRANSPORT_BACKOFF_S",
    # sitemaps
    "MAX_URLS_PER_SITEMAP",
    "URL_CHANGEFREQ",
    "URL_PRIORITY",
    # env helpers
    "get_env",
    "svv_api_key",
    "base_url",
]
