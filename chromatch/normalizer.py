"""
normalizer.py — Map provider-native records into one UnifiedImage shape.

The unified shape is Unsplash-like (urls / user / links) so a grid can
render any source the same way. An image is only kept when a base color
can be read from the provider metadata; that color is spread into a
DerivedPalette (palette_deriver.derive) which becomes `dominantColors`.

Pixabay exposes no color field, so its images never normalize. That is a
known limitation until real pixel sampling exists, not a bug.
"""

from __future__ import annotations

import re
import urllib.parse
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from . import color_math as cm
from .palette_deriver import DerivedPalette, derive
from .providers import (
    PexelsImage,
    ProfileImage,
    UnsplashImage,
    UnsplashLinks,
    UnsplashUrls,
    UnsplashUser,
)

Provider = Literal["unsplash", "pexels", "pixabay"]
PROVIDERS = ("unsplash", "pexels", "pixabay")


class UnifiedImage(BaseModel):
    """Provider-agnostic search result, serialized in the Unsplash-like wire shape."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    urls: UnsplashUrls
    user: UnsplashUser
    links: UnsplashLinks
    description: Optional[str] = None
    alt_description: Optional[str] = None
    color: str
    dominant_colors: DerivedPalette = Field(alias="dominantColors")
    source: Provider


def _slug(name: str) -> str:
    return re.sub(r"\s+", "-", name.lower())


def _from_unsplash(image: UnsplashImage) -> Optional[UnifiedImage]:
    color = cm.normalize(image.color)
    if color is None:
        return None
    return UnifiedImage(
        id=image.id,
        urls=image.urls,
        user=image.user,
        links=image.links or UnsplashLinks(html=f"https://unsplash.com/photos/{image.id}"),
        description=image.description,
        alt_description=image.alt_description,
        color=color,
        dominant_colors=derive(color),
        source="unsplash",
    )


def _from_pexels(image: PexelsImage) -> Optional[UnifiedImage]:
    color = cm.normalize(image.avg_color)
    if color is None:
        return None
    avatar_name = urllib.parse.quote(image.photographer, safe="")
    return UnifiedImage(
        id=str(image.id),
        urls=UnsplashUrls(
            raw=image.src.original,
            full=image.src.large2x,
            regular=image.src.large,
            small=image.src.medium,
            thumb=image.src.small,
        ),
        user=UnsplashUser(
            name=image.photographer,
            username=_slug(image.photographer),
            profile_image=ProfileImage(
                small=f"https://ui-avatars.com/api/?name={avatar_name}&size=32"
            ),
        ),
        links=UnsplashLinks(html=f"https://www.pexels.com/photo/{image.id}/"),
        description=None,
        alt_description=f"Photo by {image.photographer}",
        color=color,
        dominant_colors=derive(color),
        source="pexels",
    )


def normalize_image(image: BaseModel, provider: str) -> Optional[UnifiedImage]:
    """
    Convert one provider record. Returns None when the image has no usable
    base color (always the case for Pixabay).
    """
    if provider == "unsplash":
        return _from_unsplash(image)
    if provider == "pexels":
        return _from_pexels(image)
    if provider == "pixabay":
        return None
    raise ValueError(f"Unknown provider: {provider!r}")
