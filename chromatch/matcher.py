"""
matcher.py — Color-matched image search across Unsplash, Pexels and Pixabay.

Pipeline:
  1. Parse/validate the swatches (no swatches → MatchInputError, no API calls)
  2. Build one search query from the primary swatch's color name
  3. Query all providers concurrently (one worker thread each)
  4. Normalize every record → UnifiedImage (images without a color drop out)
  5. Keep images with any palette color within `threshold` of any swatch
  6. Sort by the closest palette-to-swatch distance, closest first

Usage:
    from chromatch.matcher import MatchEngine
    response = MatchEngine().match_text("#FF5733 #000000", threshold=60)
    for image in response.images:
        print(image.source, image.color)
"""

from __future__ import annotations

import logging
import math
from concurrent.futures import ThreadPoolExecutor, as_completed
from concurrent.futures import TimeoutError as FuturesTimeout
from typing import Dict, List, Optional, Sequence, Tuple

from pydantic import BaseModel, Field

from . import color_math as cm
from .config import THRESHOLD_RANGE, Settings
from .normalizer import PROVIDERS, UnifiedImage, normalize_image
from .providers import PexelsAdapter, PixabayAdapter, ProviderAdapter, UnsplashAdapter

logger = logging.getLogger(__name__)

QUERY_TERMS = "nature abstract"


class MatchInputError(ValueError):
    """The request cannot be served (no valid swatches, bad page)."""


class MatchResponse(BaseModel):
    images: List[UnifiedImage] = Field(default_factory=list)
    page: int = 1
    total: int = 0
    # matched images per provider
    sources: Dict[str, int] = Field(default_factory=dict)
    # raw records returned per provider, before normalization/filtering
    fetched: Dict[str, int] = Field(default_factory=dict)


def build_query(primary: str) -> str:
    return f"{cm.color_name(primary)} {QUERY_TERMS}"


def match_distance(image: UnifiedImage, swatches: Sequence[str]) -> float:
    """Smallest RGB distance between any palette color and any swatch."""
    best = math.inf
    for color in image.dominant_colors.colors():
        for swatch in swatches:
            best = min(best, cm.distance(color, swatch))
    return best


class MatchEngine:
    """
    Fans a swatch search out to every provider adapter and ranks the results.
    Adapters are injectable; by default they are built from Settings.
    """

    def __init__(
        self,
        adapters: Optional[List[ProviderAdapter]] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.settings = settings or Settings.from_env()
        if adapters is None:
            s = self.settings
            adapters = [
                UnsplashAdapter(s.unsplash_access_key, timeout=s.request_timeout),
                PexelsAdapter(s.pexels_api_key, timeout=s.request_timeout),
                PixabayAdapter(s.pixabay_api_key, timeout=s.request_timeout),
            ]
        self.adapters = adapters

    def _page_size(self, provider: str) -> int:
        return getattr(self.settings, f"{provider}_per_page", 30)

    def _fetch_all(self, query: str, page: int, color_hint: Optional[str]) -> Dict[str, list]:
        """
        Run every adapter in its own thread and join them.
        A provider that raises or misses the fan-out deadline contributes [].
        """
        results: Dict[str, list] = {a.name: [] for a in self.adapters}
        if not self.adapters:
            return results

        executor = ThreadPoolExecutor(max_workers=len(self.adapters))
        futures = {
            executor.submit(
                adapter.search,
                query,
                page,
                self._page_size(adapter.name),
                color_hint if adapter.name == "unsplash" else None,
            ): adapter.name
            for adapter in self.adapters
        }
        try:
            for future in as_completed(futures, timeout=self.settings.fanout_timeout):
                name = futures[future]
                try:
                    results[name] = list(future.result() or [])
                except Exception as exc:
                    logger.warning(f"{name} provider failed: {exc}")
        except FuturesTimeout:
            pending = [futures[f] for f in futures if not f.done()]
            logger.warning(f"Provider fan-out timed out; no results from {', '.join(pending)}")
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        return results

    def match(
        self,
        swatches: Sequence[str],
        page: int = 1,
        threshold: Optional[float] = None,
    ) -> MatchResponse:
        """
        Search all providers for images close to `swatches`.

        Args:
            swatches:  Hex colors; the first one drives the search query
            page:      1-based provider page
            threshold: Max RGB distance for a match (default 80; 20–150 is sensible)

        Raises:
            MatchInputError: no valid swatch, or page < 1
        """
        colors = [c for c in (cm.normalize(s) for s in swatches) if c]
        if not colors:
            raise MatchInputError("No valid HEX colors provided")
        if page < 1:
            raise MatchInputError(f"Page must be >= 1, got {page}")

        if threshold is None:
            threshold = self.settings.default_threshold
        lo, hi = THRESHOLD_RANGE
        if not lo <= threshold <= hi:
            logger.warning(f"Threshold {threshold} is outside the recommended range {lo:g}–{hi:g}")

        primary = colors[0]
        query = build_query(primary)
        logger.info(f"Searching '{query}' for {len(colors)} swatch(es), page {page}")

        raw = self._fetch_all(query, page, cm.unsplash_color_param(primary))

        # Provider order, then provider result order — the stable sort keeps it for ties
        scored: List[Tuple[float, UnifiedImage]] = []
        sources = {name: 0 for name in PROVIDERS}
        for adapter in self.adapters:
            for record in raw.get(adapter.name, []):
                image = normalize_image(record, adapter.name)
                if image is None:
                    continue
                dist = match_distance(image, colors)
                if dist <= threshold:
                    scored.append((dist, image))
                    sources[adapter.name] = sources.get(adapter.name, 0) + 1

        scored.sort(key=lambda item: item[0])
        images = [image for _, image in scored]

        return MatchResponse(
            images=images,
            page=page,
            total=len(images),
            sources=sources,
            fetched={name: len(records) for name, records in raw.items()},
        )

    def match_text(
        self,
        text: str,
        page: int = 1,
        threshold: Optional[float] = None,
    ) -> MatchResponse:
        """Like match(), but pulls the swatches out of free text first."""
        swatches = cm.parse_all(text)
        if not swatches:
            raise MatchInputError("No valid HEX colors provided")
        return self.match(swatches, page=page, threshold=threshold)
