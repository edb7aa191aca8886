"""
palette_deriver.py — Build a 9-swatch palette from one color.

Stock-photo APIs only hand us a single average/primary color per image.
derive() spreads that one color into a small, deterministic system of
related swatches so it can be matched against user swatches:

    vibrant        source color
    darkVibrant    brightness -30%
    lightVibrant   brightness +30%
    muted          saturation -30%
    darkMuted      muted, brightness -30%
    lightMuted     muted, brightness +30%
    complementary  RGB inversion
    analogous1/2   brightness +15% / -15%

Usage:
    from chromatch.palette_deriver import derive
    palette = derive("#3b82f6")
    palette.model_dump(by_alias=True)
    # → {"vibrant": "#3b82f6", "darkVibrant": "#2959ac", ...}
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from . import color_math as cm

SCHEMES = ["complementary", "analogous", "triadic", "tetradic", "monochromatic", "shades"]

# Whole-palette adjustments applied after the scheme is built
PALETTE_VIBES: Dict[str, Callable[[str], str]] = {
    "vintage":      lambda c: cm.adjust_saturation(c, -30),
    "playful":      lambda c: cm.adjust_saturation(c, 20),
    "professional": lambda c: cm.adjust_saturation(cm.adjust_brightness(c, -5), -20),
    "minimalist":   lambda c: cm.adjust_saturation(cm.adjust_brightness(c, 10), -40),
    "bold":         lambda c: cm.adjust_saturation(c, 40),
    "luxury":       lambda c: cm.adjust_brightness(cm.adjust_saturation(c, -10), -15),
    "eco":          cm.shift_towards_green,
}


class DerivedPalette(BaseModel):
    """The dominant-color set of one image (or one user swatch)."""
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    vibrant: str
    dark_vibrant: str
    light_vibrant: str
    muted: str
    dark_muted: str
    light_muted: str
    complementary: str
    analogous1: str
    analogous2: str

    def colors(self) -> List[str]:
        """All nine swatches in slot order."""
        return list(self.model_dump().values())


def derive(source: str) -> DerivedPalette:
    color = cm.normalize(source)
    if color is None:
        raise ValueError(f"Invalid hex color: {source!r}")

    muted = cm.adjust_saturation(color, -30)
    analogous1, analogous2 = cm.analogous(color)

    return DerivedPalette(
        vibrant=color,
        dark_vibrant=cm.adjust_brightness(color, -30),
        light_vibrant=cm.adjust_brightness(color, 30),
        muted=muted,
        dark_muted=cm.adjust_brightness(muted, -30),
        light_muted=cm.adjust_brightness(muted, 30),
        complementary=cm.complement(color),
        analogous1=analogous1,
        analogous2=analogous2,
    )


def scheme_palette(base: str, scheme: str = "shades", vibe: Optional[str] = None) -> List[str]:
    """
    Five-color palette for a named harmony scheme.

    Schemes:
      complementary  → base, complement, analogous (-6°), both triadic
      analogous      → base, hue -6° and +6°, 2 shades
      triadic        → base, both triadic, 2 tints
      tetradic       → base, complement, both triadic, analogous (-6°)
      monochromatic  → base, 2 shades, 2 tints
      shades         → base, 4 shades (also the fallback)

    `vibe` (a PALETTE_VIBES key) then shifts every color, the base included.
    Raises ValueError for an invalid base or an unknown vibe.
    """
    color = cm.normalize(base)
    if color is None:
        raise ValueError(f"Invalid hex color: {base!r}")
    if vibe is not None and vibe not in PALETTE_VIBES:
        raise ValueError(f"Unknown palette vibe: {vibe!r}")

    h = cm.harmony(color)
    if scheme == "complementary":
        colors = [color, h.complementary, h.analogous[1], *h.triadic]
    elif scheme == "analogous":
        colors = [color, *h.analogous[1:], *cm.generate_shades(color, 2)]
    elif scheme == "triadic":
        colors = [color, *h.triadic, *cm.generate_tints(color, 2)]
    elif scheme == "tetradic":
        colors = [color, h.complementary, *h.triadic, h.analogous[1]]
    elif scheme == "monochromatic":
        colors = [color, *cm.generate_shades(color, 2), *cm.generate_tints(color, 2)]
    else:
        colors = [color, *cm.generate_shades(color, 4)]

    colors = colors[:5]
    if vibe is not None:
        colors = [PALETTE_VIBES[vibe](c) for c in colors]
    return colors
