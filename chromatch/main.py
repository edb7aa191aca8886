"""
chromatch — swatch palettes, color-matched stock images and UI role palettes.

Usage:
  python -m chromatch.main match   "#FF5733 #000000" --threshold 60
  python -m chromatch.main derive  "#3b82f6 #f59e0b" --render out/derived.png
  python -m chromatch.main harmony "#8B5CF6"
  python -m chromatch.main scheme  "#8B5CF6" --scheme triadic --vibe luxury
  python -m chromatch.main roles   "#8B5CF6" --vibe minimal --brightness dark --ratio 4.5
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from . import color_math as cm
from .config import Settings
from .matcher import MatchEngine, MatchResponse
from .palette_deriver import PALETTE_VIBES, SCHEMES, derive, scheme_palette
from .palette_renderer import derived_palette_to_dicts, render_palette, role_palette_to_dicts
from .roles import Brightness, RolePalette, Vibe, assign_roles, contrast_warnings

load_dotenv()

console = Console()
logger = logging.getLogger(__name__)


# ── CLI ───────────────────────────────────────────────────────────────────────

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="chromatch",
        description="Color swatch palettes, color-matched stock images and UI role palettes",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("match", help="Find stock images close to the given swatches")
    p.add_argument("text", help="Free text containing HEX colors, e.g. '#FF5733 #000'")
    p.add_argument("--page", type=int, default=1)
    p.add_argument("--threshold", type=float, default=None,
                   help="Max RGB distance for a match (default 80, sensible 20–150)")
    p.add_argument("--json", action="store_true", help="Print the raw JSON response")

    p = sub.add_parser("derive", help="Derived 9-color palette for each swatch")
    p.add_argument("text")
    p.add_argument("--render", type=Path, default=None, help="Save a PNG per swatch (suffixed)")
    p.add_argument("--json", action="store_true")

    p = sub.add_parser("harmony", help="Hue-rotation harmonies of one color")
    p.add_argument("color")

    p = sub.add_parser("scheme", help="Five-color palette for a harmony scheme")
    p.add_argument("color")
    p.add_argument("--scheme", choices=SCHEMES, default="shades")
    p.add_argument("--vibe", choices=list(PALETTE_VIBES), default=None,
                   help="Shift the whole palette (vintage, bold, eco, ...)")

    p = sub.add_parser("roles", help="Contrast-aware UI role palette from a base color")
    p.add_argument("color")
    p.add_argument("--vibe", choices=[v.value for v in Vibe], default=Vibe.MINIMAL.value)
    p.add_argument("--brightness", choices=[b.value for b in Brightness], default=Brightness.LIGHT.value)
    p.add_argument("--ratio", type=float, default=4.5, help="Target contrast ratio (3.0–7.0)")
    p.add_argument("--render", type=Path, default=None)
    p.add_argument("--json", action="store_true")

    return parser.parse_args(argv)


# ── Output helpers ────────────────────────────────────────────────────────────

def _swatch(hex_val: str) -> str:
    return f"[on {hex_val}]      [/] {hex_val}"


def _parse_swatches(text: str) -> List[str]:
    swatches = cm.parse_all(text)
    if not swatches:
        raise ValueError("No valid HEX colors provided")
    return swatches


def display_match(response: MatchResponse) -> None:
    table = Table(title=f"Matches — page {response.page}", show_lines=False)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Source")
    table.add_column("Color")
    table.add_column("By")
    table.add_column("URL", overflow="fold")
    for i, image in enumerate(response.images, 1):
        table.add_row(str(i), image.source, _swatch(image.color), image.user.name, image.urls.small)
    console.print(table)

    counts = "  ".join(f"{name}: {n}" for name, n in response.sources.items())
    console.print(f"[bold]{response.total}[/bold] matched  [dim]({counts})[/dim]")


def display_roles(palette: RolePalette) -> None:
    table = Table(title=f"Roles — {palette.vibe.value} / {palette.brightness.value}")
    table.add_column("Role")
    table.add_column("Color")
    table.add_column("Contrast", justify="right")
    for role, hex_val in palette.roles().items():
        ratio = cm.contrast_ratio(hex_val, palette.background)
        table.add_row(role, _swatch(hex_val), f"{ratio:.2f}:1" if role != "background" else "—")
    console.print(table)

    for warning in contrast_warnings(palette):
        console.print(f"  [yellow]⚠ {warning}[/yellow]")


# ── Commands ──────────────────────────────────────────────────────────────────

def cmd_match(args: argparse.Namespace) -> None:
    engine = MatchEngine(settings=Settings.from_env())
    with console.status("Searching Unsplash, Pexels and Pixabay..."):
        response = engine.match_text(args.text, page=args.page, threshold=args.threshold)
    if args.json:
        console.print_json(response.model_dump_json(by_alias=True))
    else:
        display_match(response)


def cmd_derive(args: argparse.Namespace) -> None:
    swatches = _parse_swatches(args.text)
    palettes = [derive(s) for s in swatches]

    if args.json:
        console.print_json(json.dumps([p.model_dump(by_alias=True) for p in palettes]))
    else:
        for swatch, palette in zip(swatches, palettes):
            lines = [f"{name:<14} {_swatch(hex_val)}"
                     for name, hex_val in palette.model_dump(by_alias=True).items()]
            console.print(Panel("\n".join(lines), title=swatch, expand=False))

    if args.render:
        for swatch, palette in zip(swatches, palettes):
            out = args.render.with_name(f"{args.render.stem}_{swatch.lstrip('#')}.png")
            render_palette(derived_palette_to_dicts(palette), out, label_text=f"DERIVED — {swatch.upper()}")
            console.print(f"  [green]✓[/green] Saved {out}")


def cmd_harmony(args: argparse.Namespace) -> None:
    h = cm.harmony(_parse_swatches(args.color)[0])
    for name, value in h.to_dict().items():
        values = value if isinstance(value, list) else [value]
        console.print(f"[bold]{name:<19}[/bold] " + "  ".join(_swatch(v) for v in values))


def cmd_scheme(args: argparse.Namespace) -> None:
    colors = scheme_palette(_parse_swatches(args.color)[0], args.scheme, vibe=args.vibe)
    title = f"{args.scheme} / {args.vibe}" if args.vibe else args.scheme
    console.print(Panel("\n".join(_swatch(c) for c in colors), title=title, expand=False))


def cmd_roles(args: argparse.Namespace) -> None:
    base = _parse_swatches(args.color)[0]
    palette = assign_roles(base, args.vibe, args.brightness, args.ratio)
    if args.json:
        console.print_json(palette.model_dump_json(by_alias=True))
    else:
        display_roles(palette)
    if args.render:
        out = render_palette(role_palette_to_dicts(palette), args.render, label_text="UI ROLES")
        console.print(f"  [green]✓[/green] Saved {out}")


COMMANDS = {
    "match": cmd_match,
    "derive": cmd_derive,
    "harmony": cmd_harmony,
    "scheme": cmd_scheme,
    "roles": cmd_roles,
}


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        format="%(asctime)s — %(name)s — %(levelname)s — %(message)s",
        level=logging.DEBUG if args.verbose else logging.WARNING,
    )

    try:
        COMMANDS[args.command](args)
    except ValueError as e:
        console.print(f"[red]✗ {e}[/red]")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
