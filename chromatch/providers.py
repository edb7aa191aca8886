"""
providers.py — Thin search clients for the three stock-image APIs.

Sources:
  1. Unsplash — https://api.unsplash.com/search/photos
     Every photo carries a primary `color` hex.
  2. Pexels   — https://api.pexels.com/v1/search
     Every photo carries an `avg_color` hex.
  3. Pixabay  — https://pixabay.com/api/
     No color metadata at all (see normalizer.py).

Each adapter returns the provider-native records, validated into pydantic
models. Adapters never raise: a missing key, a network/auth error or a
malformed payload all come back as an empty list and a log line.
A single record that fails validation is logged and skipped; the rest are kept.

Usage:
    from chromatch.providers import UnsplashAdapter
    photos = UnsplashAdapter(api_key="...").search("blue nature abstract", color_hint="blue")
"""

from __future__ import annotations

import json
import logging
import urllib.parse
import urllib.request
from typing import Dict, List, Optional

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

USER_AGENT = "Chromatch/1.0"


# ── Provider-native records ───────────────────────────────────────────────────

class UnsplashUrls(BaseModel):
    raw: str
    full: str
    regular: str
    small: str
    thumb: str


class ProfileImage(BaseModel):
    small: str


class UnsplashUser(BaseModel):
    name: str
    username: str
    profile_image: Optional[ProfileImage] = None


class UnsplashLinks(BaseModel):
    html: str


class UnsplashImage(BaseModel):
    id: str
    urls: UnsplashUrls
    user: UnsplashUser
    links: Optional[UnsplashLinks] = None
    description: Optional[str] = None
    alt_description: Optional[str] = None
    color: Optional[str] = None         # primary color picked by Unsplash


class PexelsSrc(BaseModel):
    original: str
    large2x: str
    large: str
    medium: str
    small: str


class PexelsImage(BaseModel):
    id: int
    src: PexelsSrc
    photographer: str
    avg_color: Optional[str] = None     # average color computed by Pexels


class PixabayImage(BaseModel):
    id: int
    pageURL: str
    type: str = ""
    tags: str = ""
    previewURL: str
    webformatURL: str
    largeImageURL: str
    user: str
    userImageURL: str = ""


# ── Base adapter ──────────────────────────────────────────────────────────────

class ProviderAdapter:
    """
    One image-search provider.

    Subclasses set the endpoint, the key of the result list in the JSON
    payload and the record model, and build params/headers for a query.
    """

    name: str = ""
    endpoint: str = ""
    results_key: str = ""
    record_model: type = BaseModel
    warn_on_missing_key: bool = True

    def __init__(self, api_key: str = "", timeout: float = 8.0) -> None:
        self.api_key = api_key
        self.timeout = timeout

    def search(
        self,
        query: str,
        page: int = 1,
        page_size: int = 30,
        color_hint: Optional[str] = None,
    ) -> List[BaseModel]:
        """
        Query the provider. Returns [] on any failure.

        Args:
            query:      Human-readable search text
            page:       1-based page number
            page_size:  Results per page
            color_hint: Provider color filter (only Unsplash uses it)
        """
        if not self.api_key:
            msg = f"{self.name}: no API key configured, skipping"
            if self.warn_on_missing_key:
                logger.warning(msg)
            else:
                logger.debug(msg)
            return []

        try:
            params = self.build_params(query, page, page_size, color_hint)
            data = self._get_json(params, self.build_headers())
            records = self._extract(data)
        except Exception as e:
            logger.warning(f"{self.name} search failed: {e}")
            return []

        logger.info(f"{self.name}: {len(records)} results for '{query}' (page {page})")
        return records

    def build_params(
        self, query: str, page: int, page_size: int, color_hint: Optional[str]
    ) -> Dict[str, object]:
        raise NotImplementedError

    def build_headers(self) -> Dict[str, str]:
        return {}

    def _get_json(self, params: Dict[str, object], headers: Dict[str, str]):
        url = f"{self.endpoint}?{urllib.parse.urlencode(params)}"
        req = urllib.request.Request(
            url,
            headers={"User-Agent": USER_AGENT, "Accept": "application/json", **headers},
        )
        with urllib.request.urlopen(req, timeout=self.timeout) as resp:
            return json.loads(resp.read().decode("utf-8"))

    def _extract(self, data) -> List[BaseModel]:
        if not isinstance(data, dict):
            raise ValueError(f"unexpected payload type {type(data).__name__}")
        items = data.get(self.results_key) or []
        if not isinstance(items, list):
            raise ValueError(f"'{self.results_key}' is not a list")

        records = []
        for i, item in enumerate(items):
            try:
                records.append(self.record_model.model_validate(item))
            except ValidationError as e:
                logger.warning(f"{self.name}: skipping malformed record #{i}: {e.error_count()} error(s)")
        return records


# ── Providers ─────────────────────────────────────────────────────────────────

class UnsplashAdapter(ProviderAdapter):
    name = "unsplash"
    endpoint = "https://api.unsplash.com/search/photos"
    results_key = "results"
    record_model = UnsplashImage

    def build_params(self, query, page, page_size, color_hint):
        params = {
            "query": query,
            "page": page,
            "per_page": page_size,
            "order_by": "relevant",
        }
        if color_hint:
            params["color"] = color_hint
        return params

    def build_headers(self):
        return {"Authorization": f"Client-ID {self.api_key}"}


class PexelsAdapter(ProviderAdapter):
    name = "pexels"
    endpoint = "https://api.pexels.com/v1/search"
    results_key = "photos"
    record_model = PexelsImage

    def build_params(self, query, page, page_size, color_hint):
        return {"query": query, "page": page, "per_page": page_size}

    def build_headers(self):
        return {"Authorization": self.api_key}


class PixabayAdapter(ProviderAdapter):
    """Photos + illustrations + vectors. Running without a key is a normal, quiet mode."""

    name = "pixabay"
    endpoint = "https://pixabay.com/api/"
    results_key = "hits"
    record_model = PixabayImage
    warn_on_missing_key = False

    def build_params(self, query, page, page_size, color_hint):
        return {
            "key": self.api_key,
            "q": query,
            "page": page,
            "per_page": page_size,
            "safesearch": "true",
            "image_type": "all",
            "orientation": "horizontal",
        }
