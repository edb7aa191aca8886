"""
color_math.py — Pure color helpers shared by the palette, matching and role code.

Two families of operations live here and both are used on purpose:

  * RGB approximations (adjust_brightness, adjust_saturation, complement,
    analogous) — cheap channel arithmetic used to derive image palettes.
    They are NOT true HSB/HSL transforms.
  * HSL/HSV rotations (lighten, darken, rotate_hue, harmony, ...) — the
    usual web color-library semantics, used for UI role assignment.

All colors are plain strings in the normalized '#rrggbb' form.

Usage:
    from chromatch.color_math import parse_all, distance, ensure_contrast

    swatches = parse_all("#FF5733 #000 and ffd700")
    # → ['#ff5733', '#000000', '#ffd700']
"""

from __future__ import annotations

import colorsys
import math
import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

# ── Constants ─────────────────────────────────────────────────────────────────

HEX_TOKEN = re.compile(r"#?[0-9A-Fa-f]{3,6}")
_HEX3 = re.compile(r"^[0-9A-Fa-f]{3}$")
_HEX6 = re.compile(r"^[0-9A-Fa-f]{6}$")

MAX_DISTANCE = math.sqrt(255 ** 2 * 3)   # ≈ 441.67
MAX_CONTRAST_ITERATIONS = 100

# Unsplash's `color` search filter only accepts these names
UNSPLASH_COLORS = {
    "black", "white", "yellow", "orange", "red",
    "purple", "magenta", "green", "teal", "blue",
}


# ── Parsing & conversion ──────────────────────────────────────────────────────

def normalize(value) -> Optional[str]:
    """
    Validate and normalize a hex color.

    Accepts 'abc', '#abc', 'aabbcc' or '#AABBCC' (surrounding whitespace is
    ignored). Returns '#rrggbb' in lower case, or None for anything else.
    """
    if not isinstance(value, str):
        return None
    cleaned = value.strip()
    if cleaned.startswith("#"):
        cleaned = cleaned[1:]

    if _HEX3.match(cleaned):
        return "#" + "".join(c * 2 for c in cleaned).lower()
    if _HEX6.match(cleaned):
        return "#" + cleaned.lower()
    return None


def parse_all(text: str) -> List[str]:
    """
    Extract every hex-like token from free text, in order.
    Tokens that do not normalize (e.g. 4 or 5 digits) are dropped.
    """
    if not text:
        return []
    colors = []
    for token in HEX_TOKEN.findall(text):
        color = normalize(token)
        if color:
            colors.append(color)
    return colors


def hex_to_rgb(hex_str: str) -> Tuple[int, int, int]:
    color = normalize(hex_str)
    if color is None:
        raise ValueError(f"Invalid hex color: {hex_str!r}")
    return int(color[1:3], 16), int(color[3:5], 16), int(color[5:7], 16)


def rgb_to_hex(r: int, g: int, b: int) -> str:
    return f"#{r:02x}{g:02x}{b:02x}"


def _round(value: float) -> int:
    # Half-up rounding; Python's round() is banker's rounding.
    return int(math.floor(value + 0.5))


def _clamp(value: float, lo: float = 0.0, hi: float = 255.0) -> float:
    return max(lo, min(hi, value))


def _clamp01(value: float) -> float:
    return _clamp(value, 0.0, 1.0)


def _from_rgb_floats(r: float, g: float, b: float) -> str:
    """Scale 0–1 channel floats to a hex color."""
    return rgb_to_hex(
        _round(_clamp(r * 255)),
        _round(_clamp(g * 255)),
        _round(_clamp(b * 255)),
    )


def to_hsl(hex_str: str) -> Tuple[float, float, float]:
    """hex → (H: 0–360, S: 0–1, L: 0–1)"""
    r, g, b = hex_to_rgb(hex_str)
    h, l, s = colorsys.rgb_to_hls(r / 255, g / 255, b / 255)
    return h * 360, s, l


def from_hsl(h: float, s: float, l: float) -> str:
    """(H: degrees, S: 0–1, L: 0–1) → hex. S and L are clamped, H wraps."""
    r, g, b = colorsys.hls_to_rgb((h % 360) / 360, _clamp01(l), _clamp01(s))
    return _from_rgb_floats(r, g, b)


# ── Distance ──────────────────────────────────────────────────────────────────

def distance(hex_a: str, hex_b: str) -> float:
    """Euclidean distance between two hex colors in RGB space."""
    ra, ga, ba = hex_to_rgb(hex_a)
    rb, gb, bb = hex_to_rgb(hex_b)
    return math.sqrt((ra - rb) ** 2 + (ga - gb) ** 2 + (ba - bb) ** 2)


def is_match(target: str, candidate: str, threshold: float = 80) -> bool:
    return distance(target, candidate) <= threshold


# ── RGB approximations ────────────────────────────────────────────────────────

def adjust_brightness(hex_str: str, percent: float) -> str:
    """
    Scale every channel by (1 + percent/100), clamped to 0–255.
    A channel-space approximation of brightness, not an HSB transform.
    """
    r, g, b = hex_to_rgb(hex_str)

    def _adjust(ch: int) -> int:
        return _round(_clamp(ch + ch * percent / 100))

    return rgb_to_hex(_adjust(r), _adjust(g), _adjust(b))


def adjust_saturation(hex_str: str, percent: float) -> str:
    """
    Scale each channel's deviation from the channel mean by (1 + percent/100).
    A channel-space approximation of saturation, not an HSL transform.
    """
    r, g, b = hex_to_rgb(hex_str)
    gray = (r + g + b) / 3

    def _adjust(ch: int) -> int:
        return _round(_clamp(gray + (ch - gray) * (1 + percent / 100)))

    return rgb_to_hex(_adjust(r), _adjust(g), _adjust(b))


def complement(hex_str: str) -> str:
    """Per-channel inversion (255 - ch)."""
    r, g, b = hex_to_rgb(hex_str)
    return rgb_to_hex(255 - r, 255 - g, 255 - b)


def shift_towards_green(hex_str: str) -> str:
    """Red and blue -10, green +20, clamped."""
    r, g, b = hex_to_rgb(hex_str)
    return rgb_to_hex(max(0, r - 10), min(255, g + 20), max(0, b - 10))


def analogous(hex_str: str) -> Tuple[str, str]:
    """Brightness-shifted pair (+15%, -15%), a stand-in for hue rotation."""
    return adjust_brightness(hex_str, 15), adjust_brightness(hex_str, -15)


# ── HSL modifications ─────────────────────────────────────────────────────────

def lighten(hex_str: str, amount: float = 10) -> str:
    h, s, l = to_hsl(hex_str)
    return from_hsl(h, s, l + amount / 100)


def darken(hex_str: str, amount: float = 10) -> str:
    h, s, l = to_hsl(hex_str)
    return from_hsl(h, s, l - amount / 100)


def saturate(hex_str: str, amount: float = 10) -> str:
    h, s, l = to_hsl(hex_str)
    return from_hsl(h, s + amount / 100, l)


def desaturate(hex_str: str, amount: float = 10) -> str:
    h, s, l = to_hsl(hex_str)
    return from_hsl(h, s - amount / 100, l)


def rotate_hue(hex_str: str, degrees: float) -> str:
    h, s, l = to_hsl(hex_str)
    return from_hsl(h + degrees, s, l)


def generate_shades(hex_str: str, count: int = 5) -> List[str]:
    """Darken by 12 lightness points per step (step 1 → -12, step 2 → -24, ...)."""
    return [darken(hex_str, i * 12) for i in range(1, count + 1)]


def generate_tints(hex_str: str, count: int = 5) -> List[str]:
    """Lighten by 12 lightness points per step."""
    return [lighten(hex_str, i * 12) for i in range(1, count + 1)]


# ── Harmony ───────────────────────────────────────────────────────────────────

@dataclass
class Harmony:
    """Hue/lightness rotations of one color."""
    complementary: str
    analogous: List[str] = field(default_factory=list)            # 3 colors
    triadic: List[str] = field(default_factory=list)              # 2 colors
    split_complementary: List[str] = field(default_factory=list)  # 2 colors
    monochromatic: List[str] = field(default_factory=list)        # 5 colors

    def to_dict(self) -> dict:
        return {
            "complementary": self.complementary,
            "analogous": list(self.analogous),
            "triadic": list(self.triadic),
            "splitComplementary": list(self.split_complementary),
            "monochromatic": list(self.monochromatic),
        }


def _analogous_hues(hex_str: str, results: int = 3, slices: int = 30) -> List[str]:
    """
    Walk the hue wheel in 360/slices steps, centred on the source color.
    The source color is always the first result.
    """
    h, s, l = to_hsl(hex_str)
    part = 360 / slices
    out = [hex_str]
    hue = (h - int(part * results) // 2 + 720) % 360
    for _ in range(results - 1):
        hue = (hue + part) % 360
        out.append(from_hsl(hue, s, l))
    return out


def _monochromatic(hex_str: str, results: int = 5) -> List[str]:
    """Step HSV value by 1/results, wrapping around at 1."""
    r, g, b = hex_to_rgb(hex_str)
    h, s, v = colorsys.rgb_to_hsv(r / 255, g / 255, b / 255)
    out = []
    for _ in range(results):
        out.append(_from_rgb_floats(*colorsys.hsv_to_rgb(h, s, v)))
        v = (v + 1 / results) % 1
    return out


def harmony(hex_str: str) -> Harmony:
    """
    Generate true hue-rotation harmonies:
      complementary        → hue + 180°
      analogous            → [color, hue - 6°, hue + 6°]
      triadic              → hue + 120°, hue + 240°
      split_complementary  → complement ± 30° (hue + 150°, hue + 210°)
      monochromatic        → 5 HSV value steps starting at the color
    """
    color = normalize(hex_str)
    if color is None:
        raise ValueError(f"Invalid hex color: {hex_str!r}")

    return Harmony(
        complementary=rotate_hue(color, 180),
        analogous=_analogous_hues(color),
        triadic=[rotate_hue(color, 120), rotate_hue(color, 240)],
        split_complementary=[rotate_hue(color, 150), rotate_hue(color, 210)],
        monochromatic=_monochromatic(color),
    )


# ── Contrast ──────────────────────────────────────────────────────────────────

def relative_luminance(hex_str: str) -> float:
    """WCAG 2.x relative luminance (0–1)."""
    def _linear(ch: int) -> float:
        c = ch / 255
        return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4

    r, g, b = hex_to_rgb(hex_str)
    return 0.2126 * _linear(r) + 0.7152 * _linear(g) + 0.0722 * _linear(b)


def contrast_ratio(fg: str, bg: str) -> float:
    """WCAG contrast ratio, 1.0 (identical) → 21.0 (black on white)."""
    l1 = relative_luminance(fg)
    l2 = relative_luminance(bg)
    return (max(l1, l2) + 0.05) / (min(l1, l2) + 0.05)


def brightness(hex_str: str) -> float:
    """Perceived brightness (0–255), W3C formula."""
    r, g, b = hex_to_rgb(hex_str)
    return (r * 299 + g * 587 + b * 114) / 1000


def is_dark(hex_str: str) -> bool:
    return brightness(hex_str) < 128


def ensure_contrast(fg: str, bg: str, target_ratio: float = 4.5) -> str:
    """
    Nudge `fg` until it reaches `target_ratio` against `bg`.

    The direction is picked once: lighten when the background is dark,
    darken otherwise. Lightness moves one point per step for at most
    MAX_CONTRAST_ITERATIONS steps. If the target is never reached, the
    highest-contrast color seen (possibly `fg` itself) is returned.
    """
    fg_color = normalize(fg)
    bg_color = normalize(bg)
    if fg_color is None or bg_color is None:
        raise ValueError(f"Invalid color pair: {fg!r} on {bg!r}")

    best = fg_color
    best_ratio = contrast_ratio(fg_color, bg_color)
    if best_ratio >= target_ratio:
        return fg_color

    step = 0.01 if is_dark(bg_color) else -0.01
    h, s, l = to_hsl(fg_color)

    for _ in range(MAX_CONTRAST_ITERATIONS):
        l = _clamp01(l + step)
        candidate = from_hsl(h, s, l)
        ratio = contrast_ratio(candidate, bg_color)
        if ratio >= target_ratio:
            return candidate
        if ratio > best_ratio:
            best, best_ratio = candidate, ratio

    return best


# ── Naming ────────────────────────────────────────────────────────────────────

def color_name(hex_str: str) -> str:
    """Bucket a color into a small search-friendly vocabulary."""
    h, s, l = to_hsl(hex_str)

    if l < 0.15:
        return "black"
    if l > 0.85:
        return "white"
    if s < 0.15:
        return "gray"

    for cutoff, name in (
        (30, "red"), (60, "orange"), (90, "yellow"), (150, "green"),
        (210, "teal"), (270, "blue"), (300, "purple"), (330, "pink"),
    ):
        if h < cutoff:
            return name
    return "red"


def unsplash_color_param(hex_str: str) -> Optional[str]:
    """Map color_name() onto the values Unsplash's `color` filter accepts."""
    name = color_name(hex_str)
    if name == "pink":
        return "magenta"
    return name if name in UNSPLASH_COLORS else None
