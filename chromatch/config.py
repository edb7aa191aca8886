"""
config.py — Runtime settings read from the environment (and .env).

Env vars:
    UNSPLASH_ACCESS_KEY=...        # Unsplash "Client-ID" key
    PEXELS_API_KEY=...
    PIXABAY_API_KEY=...            # optional — Pixabay is skipped without it
    CHROMATCH_TIMEOUT=8            # per-provider HTTP timeout (seconds)
    CHROMATCH_FANOUT_TIMEOUT=      # optional cap on the whole provider fan-out
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 80.0
THRESHOLD_RANGE = (20.0, 150.0)


def _env_float(name: str, default: Optional[float]) -> Optional[float]:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Ignoring non-numeric {name}={raw!r}")
        return default


@dataclass
class Settings:
    unsplash_access_key: str = ""
    pexels_api_key: str = ""
    pixabay_api_key: str = ""

    request_timeout: float = 8.0
    fanout_timeout: Optional[float] = None

    unsplash_per_page: int = 20
    pexels_per_page: int = 20
    pixabay_per_page: int = 30

    default_threshold: float = DEFAULT_THRESHOLD

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from os.environ. Call load_dotenv() first for .env support."""
        return cls(
            unsplash_access_key=os.environ.get("UNSPLASH_ACCESS_KEY", ""),
            pexels_api_key=os.environ.get("PEXELS_API_KEY", ""),
            pixabay_api_key=os.environ.get("PIXABAY_API_KEY", ""),
            request_timeout=_env_float("CHROMATCH_TIMEOUT", 8.0),
            fanout_timeout=_env_float("CHROMATCH_FANOUT_TIMEOUT", None),
        )
