"""
palette_renderer.py — Render palettes as vertical strip images.

Format:
  ┌──────┬──────┬──────┬──────┬──────┐
  │ROLE  │ROLE  │ROLE  │ROLE  │ROLE  │  ← role badge (top, inside strip)
  │      │      │      │      │      │  ← tall color fill
  │NAME  │NAME  │NAME  │NAME  │NAME  │  ← slot name
  ├──────┼──────┼──────┼──────┼──────┤
  │#HEX  │#HEX  │#HEX  │#HEX  │#HEX  │  ← hex + CMYK (bottom footer)
  │C M Y K      ...                   │
  └──────┴──────┴──────┴──────┴──────┘

Usage:
    from chromatch.palette_renderer import render_palette, role_palette_to_dicts

    path = render_palette(role_palette_to_dicts(palette), "out/roles.png")
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Tuple, Union

from PIL import Image, ImageDraw, ImageFont

from . import color_math as cm
from .palette_deriver import DerivedPalette
from .roles import RolePalette

MAX_STRIPS = 9

# ── Font helpers ────────────────────────────────────────────────────────────

_FONT_CANDIDATES = [
    "/System/Library/Fonts/HelveticaNeue.ttc",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
]

_FONT_BOLD_CANDIDATES = [
    "/System/Library/Fonts/HelveticaNeue.ttc",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationSans-Bold.ttf",
]


def _load_font(size: int, bold: bool = False) -> ImageFont.ImageFont:
    candidates = _FONT_BOLD_CANDIDATES if bold else _FONT_CANDIDATES
    for path in candidates:
        try:
            return ImageFont.truetype(path, size)
        except OSError:
            continue
    return ImageFont.load_default()


# ── Color utilities ─────────────────────────────────────────────────────────

def rgb_to_cmyk(r: int, g: int, b: int) -> Tuple[int, int, int, int]:
    """Convert RGB (0-255) → CMYK (0-100 percent)."""
    if r == g == b == 0:
        return 0, 0, 0, 100
    rf, gf, bf = r / 255, g / 255, b / 255
    k = 1 - max(rf, gf, bf)
    c = (1 - rf - k) / (1 - k)
    m = (1 - gf - k) / (1 - k)
    y = (1 - bf - k) / (1 - k)
    return round(c * 100), round(m * 100), round(y * 100), round(k * 100)


def _text_color(hex_str: str) -> Tuple[int, int, int]:
    """White or near-black, whichever reads better on `hex_str`."""
    on_white = cm.contrast_ratio(hex_str, "#ffffff")
    on_black = cm.contrast_ratio(hex_str, "#141414")
    return (255, 255, 255) if on_white >= on_black else (20, 20, 20)


def _footer_bg(rgb: Tuple[int, int, int]) -> Tuple[int, int, int]:
    """Slightly darker/lighter footer strip for contrast."""
    factor = 0.80 if cm.brightness(cm.rgb_to_hex(*rgb)) > 100 else 1.25
    return tuple(min(255, max(0, int(c * factor))) for c in rgb)


def _text_height(draw: ImageDraw.ImageDraw, text: str, font) -> int:
    try:
        bb = draw.textbbox((0, 0), text, font=font)
        return bb[3] - bb[1]
    except (AttributeError, TypeError):
        return getattr(font, "size", 16)


# ── Palette → color dicts ───────────────────────────────────────────────────

def derived_palette_to_dicts(palette: DerivedPalette) -> List[Dict]:
    """One dict per derived slot, named by its camelCase slot."""
    return [
        {"hex": hex_val, "name": name, "role": ""}
        for name, hex_val in palette.model_dump(by_alias=True).items()
    ]


def role_palette_to_dicts(palette: RolePalette) -> List[Dict]:
    """One dict per role; text roles carry their contrast ratio on the background."""
    result = []
    for role, hex_val in palette.roles().items():
        entry = {"hex": hex_val, "name": role, "role": ""}
        if role in ("textHeading", "textBody", "accent"):
            ratio = cm.contrast_ratio(hex_val, palette.background)
            entry["role"] = f"{ratio:.2f}:1"
        result.append(entry)
    return result


# ── Core renderer ───────────────────────────────────────────────────────────

def render_palette_image(
    colors: List[Dict],
    width: int = 1800,
    height: int = 560,
    gap: int = 3,
    label_text: str = "COLOR PALETTE",
) -> Image.Image:
    """
    Render a vertical-strip palette as a PIL Image.

    Args:
        colors:     Dicts with 'hex' and 'name', optional 'role' badge text.
        width:      Total image width in pixels.
        height:     Total image height in pixels.
        gap:        Pixel gap between strips.
        label_text: Header label ('' hides the header).

    Returns:
        PIL Image in RGB mode.
    """
    img = Image.new("RGB", (width, height), (12, 12, 16))
    if not colors:
        return img

    colors = colors[:MAX_STRIPS]
    n = len(colors)

    HEADER_H = 44 if label_text else 0
    FOOTER_H = max(80, int(height * 0.20))
    NAME_PAD = 14
    STRIP_H  = height - HEADER_H

    strip_w   = (width - gap * (n - 1)) // n
    remainder = width - gap * (n - 1) - strip_w * n

    draw = ImageDraw.Draw(img)
    if HEADER_H:
        draw.text((NAME_PAD, 10), label_text, fill=(80, 80, 95), font=_load_font(HEADER_H - 18))

    font_name = _load_font(max(12, min(24, int(strip_w * 0.09))), bold=True)
    font_hex  = _load_font(max(10, min(20, int(strip_w * 0.08))))
    font_cmyk = _load_font(max(9,  min(15, int(strip_w * 0.065))))

    for i, color in enumerate(colors):
        hex_val = cm.normalize(color.get("hex", "")) or "#888888"
        rgb     = cm.hex_to_rgb(hex_val)
        sw      = strip_w + (remainder if i == n - 1 else 0)
        sx      = i * (strip_w + gap)
        sy      = HEADER_H

        text_col  = _text_color(hex_val)
        footer_bg = _footer_bg(rgb)

        draw.rectangle([sx, sy, sx + sw - 1, sy + STRIP_H - FOOTER_H - 1], fill=rgb)
        draw.rectangle([sx, sy + STRIP_H - FOOTER_H, sx + sw - 1, sy + STRIP_H - 1], fill=footer_bg)

        role = color.get("role", "")
        if role:
            draw.text((sx + NAME_PAD, sy + 10), role.upper(), fill=text_col, font=font_cmyk)

        name = color.get("name", "")[:16]
        name_y = sy + STRIP_H - FOOTER_H - _text_height(draw, name, font_name) - 14
        draw.text((sx + NAME_PAD, max(sy + 30, name_y)), name, fill=text_col, font=font_name)

        footer_col = _text_color(cm.rgb_to_hex(*footer_bg))
        footer_y = sy + STRIP_H - FOOTER_H + 10
        draw.text((sx + NAME_PAD, footer_y), hex_val.upper(), fill=footer_col, font=font_hex)
        footer_y += _text_height(draw, hex_val, font_hex) + 6

        c, m, y, k = rgb_to_cmyk(*rgb)
        draw.text((sx + NAME_PAD, footer_y), f"C{c} M{m} Y{y} K{k}", fill=footer_col, font=font_cmyk)

    return img


def render_palette(
    colors: List[Dict],
    output_path: Union[str, Path],
    width: int = 1800,
    height: int = 560,
    label_text: str = "COLOR PALETTE",
) -> Path:
    """Render a palette and save it as PNG. Returns the saved path."""
    img = render_palette_image(colors, width=width, height=height, label_text=label_text)
    out = Path(output_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    img.save(str(out), "PNG")
    return out
