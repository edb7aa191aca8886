"""
roles.py — Contrast-aware UI palette from one base color.

Roles:
  background    light / dark / mixed preference, tinted toward the base hue
  illustration  the (vibe-adjusted) base, lifted on dark backgrounds
  accent        complementary color (triadic for the playful vibe)
  textHeading   deepest shade / lightest tint, contrast-corrected
  textBody      a softer shade / tint, contrast-corrected

Usage:
    from chromatch.roles import assign_roles
    palette = assign_roles("#8B5CF6", vibe="minimal", brightness="dark", target_ratio=4.5)

    # Stateful: recompute whenever an input changes
    assigner = RoleAssigner("#8B5CF6")
    assigner.update(vibe="retro")
    assigner.fix_contrast(7.0)
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, NamedTuple, Optional, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from . import color_math as cm

SHADE_STEPS = 8
HEADING_INDEX = 7
BODY_INDEX = 5
ILLUSTRATION_TINT_INDEX = 2
MIN_ACCENT_RATIO = 3.0
DEFAULT_TARGET_RATIO = 4.5


class Vibe(str, Enum):
    MINIMAL = "minimal"
    VIBRANT = "vibrant"
    PLAYFUL = "playful"
    SERIOUS = "serious"
    EDITORIAL = "editorial"
    RETRO = "retro"


class Brightness(str, Enum):
    LIGHT = "light"
    DARK = "dark"
    MIXED = "mixed"


class VibeShift(NamedTuple):
    saturation: int     # HSL saturation points
    brightness: int     # HSL lightness points


VIBE_SHIFTS: Dict[Vibe, VibeShift] = {
    Vibe.MINIMAL:   VibeShift(-20, 10),
    Vibe.VIBRANT:   VibeShift(30, 5),
    Vibe.PLAYFUL:   VibeShift(15, 10),
    Vibe.SERIOUS:   VibeShift(-10, -10),
    Vibe.EDITORIAL: VibeShift(-5, 0),
    Vibe.RETRO:     VibeShift(-10, -5),
}

MIXED_BACKGROUNDS: Dict[Vibe, str] = {
    Vibe.RETRO:   "#fdf8f1",
    Vibe.MINIMAL: "#f3f4f6",
}
DEFAULT_MIXED_BACKGROUND = "#f9fafb"

TEXT_ROLES = ("text_heading", "text_body")
SLOTS = ("base", "background", "illustration", "accent", "text_heading", "text_body")


class RolePalette(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    base: str
    background: str
    illustration: str
    accent: str
    text_heading: str
    text_body: str

    vibe: Vibe = Vibe.MINIMAL
    brightness: Brightness = Brightness.LIGHT
    target_ratio: float = DEFAULT_TARGET_RATIO

    def roles(self) -> Dict[str, str]:
        """The six color slots only, keyed by camelCase role name."""
        return {to_camel(slot): getattr(self, slot) for slot in SLOTS}


# ── Steps ─────────────────────────────────────────────────────────────────────

def apply_vibe(hex_str: str, vibe: Union[Vibe, str]) -> str:
    """Shift HSL saturation, then lightness, by the vibe's fixed amounts."""
    shift = VIBE_SHIFTS[Vibe(vibe)]
    h, s, l = cm.to_hsl(hex_str)
    s = max(0.0, min(1.0, s + shift.saturation / 100))
    l = max(0.0, min(1.0, l + shift.brightness / 100))
    return cm.from_hsl(h, s, l)


def pick_background(vibe_base: str, vibe: Vibe, brightness: Brightness) -> str:
    h, s, _ = cm.to_hsl(vibe_base)
    if brightness is Brightness.DARK:
        return cm.from_hsl(h, min(s, 0.2), 0.08)
    if brightness is Brightness.MIXED:
        return MIXED_BACKGROUNDS.get(vibe, DEFAULT_MIXED_BACKGROUND)
    return cm.from_hsl(h, min(s, 0.1), 0.98)


def assign_roles(
    base: str,
    vibe: Union[Vibe, str] = Vibe.MINIMAL,
    brightness: Union[Brightness, str] = Brightness.LIGHT,
    target_ratio: float = DEFAULT_TARGET_RATIO,
) -> RolePalette:
    """
    Derive the five UI roles from `base`.

    Text roles are corrected to `target_ratio` against the background, the
    accent to max(target_ratio, 3.0). Correction is best effort: if the
    ratio cannot be reached in 100 lightness steps the best color is kept.
    Deterministic for identical inputs.
    """
    color = cm.normalize(base)
    if color is None:
        raise ValueError(f"Invalid hex color: {base!r}")
    vibe = Vibe(vibe)
    brightness = Brightness(brightness)

    vibe_base = apply_vibe(color, vibe)
    harmony = cm.harmony(vibe_base)
    shades = cm.generate_shades(vibe_base, SHADE_STEPS)
    tints = cm.generate_tints(vibe_base, SHADE_STEPS)

    background = pick_background(vibe_base, vibe, brightness)
    dark_bg = cm.is_dark(background)

    illustration = tints[ILLUSTRATION_TINT_INDEX] if dark_bg else vibe_base

    # Playful takes the +120° triad rotation instead of the complement
    accent_candidate = harmony.triadic[0] if vibe is Vibe.PLAYFUL else harmony.complementary
    accent = cm.ensure_contrast(accent_candidate, background, max(target_ratio, MIN_ACCENT_RATIO))

    ramp = tints if dark_bg else shades
    return RolePalette(
        base=color,
        background=background,
        illustration=illustration,
        accent=accent,
        text_heading=cm.ensure_contrast(ramp[HEADING_INDEX], background, target_ratio),
        text_body=cm.ensure_contrast(ramp[BODY_INDEX], background, target_ratio),
        vibe=vibe,
        brightness=brightness,
        target_ratio=target_ratio,
    )


def contrast_warnings(palette: RolePalette, target_ratio: Optional[float] = None) -> List[str]:
    """Human-readable notes for every text role below the target ratio."""
    target = palette.target_ratio if target_ratio is None else target_ratio
    warnings = []
    for slot, label in (("text_heading", "Heading"), ("text_body", "Body")):
        ratio = cm.contrast_ratio(getattr(palette, slot), palette.background)
        if ratio < target:
            warnings.append(
                f"{label} on background contrast is low ({ratio:.2f}:1, target {target:g}:1)."
            )
    return warnings


# ── Stateful assigner ─────────────────────────────────────────────────────────

class RoleAssigner:
    """
    Holds one RolePalette and recomputes it whenever an input changes.
    Manual slot overrides survive until the next update().
    """

    def __init__(
        self,
        base: str,
        vibe: Union[Vibe, str] = Vibe.MINIMAL,
        brightness: Union[Brightness, str] = Brightness.LIGHT,
        target_ratio: float = DEFAULT_TARGET_RATIO,
    ) -> None:
        self.palette = assign_roles(base, vibe, brightness, target_ratio)

    def update(
        self,
        base: Optional[str] = None,
        vibe: Union[Vibe, str, None] = None,
        brightness: Union[Brightness, str, None] = None,
        target_ratio: Optional[float] = None,
    ) -> RolePalette:
        p = self.palette
        self.palette = assign_roles(
            base if base is not None else p.base,
            vibe if vibe is not None else p.vibe,
            brightness if brightness is not None else p.brightness,
            target_ratio if target_ratio is not None else p.target_ratio,
        )
        return self.palette

    def fix_contrast(self, target_ratio: Optional[float] = None) -> RolePalette:
        """Re-run contrast correction on the current text roles only."""
        target = self.palette.target_ratio if target_ratio is None else target_ratio
        bg = self.palette.background
        self.palette = self.palette.model_copy(update={
            "text_heading": cm.ensure_contrast(self.palette.text_heading, bg, target),
            "text_body": cm.ensure_contrast(self.palette.text_body, bg, target),
            "target_ratio": target,
        })
        return self.palette

    def set_slot(self, slot: str, value: str) -> RolePalette:
        """Override one color slot (e.g. a hand-picked accent)."""
        if slot not in SLOTS or slot == "base":
            raise ValueError(f"Unknown role slot: {slot!r}")
        color = cm.normalize(value)
        if color is None:
            raise ValueError(f"Invalid hex color: {value!r}")
        self.palette = self.palette.model_copy(update={slot: color})
        return self.palette

    def contrast_warnings(self) -> List[str]:
        return contrast_warnings(self.palette)
