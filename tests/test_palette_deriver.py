import pytest

from chromatch import color_math as cm
from chromatch.palette_deriver import PALETTE_VIBES, SCHEMES, DerivedPalette, derive, scheme_palette


@pytest.mark.parametrize("color", ["#ff0000", "#3b82f6", "#000000", "#ffffff", "#8b5cf6"])
def test_vibrant_is_the_source(color):
    assert derive(color).vibrant == color


def test_derive_normalizes_input():
    assert derive("#ABC").vibrant == "#aabbcc"


def test_derive_gray_slots():
    p = derive("#646464")
    assert p.dark_vibrant == "#464646"
    assert p.light_vibrant == "#828282"
    assert p.muted == "#646464"
    assert p.dark_muted == "#464646"
    assert p.light_muted == "#828282"
    assert p.complementary == "#9b9b9b"
    assert (p.analogous1, p.analogous2) == ("#737373", "#555555")


def test_derive_is_deterministic():
    assert derive("#e94560") == derive("#e94560")


def test_derive_serializes_with_camel_case_slots():
    dumped = derive("#e94560").model_dump(by_alias=True)
    assert list(dumped) == [
        "vibrant", "darkVibrant", "lightVibrant", "muted", "darkMuted",
        "lightMuted", "complementary", "analogous1", "analogous2",
    ]
    assert DerivedPalette.model_validate(dumped) == derive("#e94560")


def test_colors_lists_all_nine_slots():
    colors = derive("#2c3e50").colors()
    assert len(colors) == 9
    assert colors[0] == "#2c3e50"


def test_derive_rejects_invalid():
    with pytest.raises(ValueError):
        derive("not-a-color")


@pytest.mark.parametrize("scheme", SCHEMES + ["unknown"])
def test_scheme_palette_has_five_colors_led_by_base(scheme):
    colors = scheme_palette("#8B5CF6", scheme)
    assert len(colors) == 5
    assert colors[0] == "#8b5cf6"


def test_scheme_palette_tetradic_contains_complement_and_triad():
    colors = scheme_palette("#ff0000", "tetradic")
    assert colors[1:4] == ["#00ffff", "#00ff00", "#0000ff"]


def test_scheme_palette_without_vibe_is_unshifted():
    assert scheme_palette("#3b82f6", "triadic", vibe=None) == scheme_palette("#3b82f6", "triadic")


@pytest.mark.parametrize("vibe", sorted(PALETTE_VIBES))
def test_vibe_shifts_every_color(vibe):
    plain = scheme_palette("#3b82f6", "complementary")
    shifted = scheme_palette("#3b82f6", "complementary", vibe=vibe)
    assert len(shifted) == 5
    assert shifted == [PALETTE_VIBES[vibe](c) for c in plain]


def test_vibe_transforms():
    assert PALETTE_VIBES["vintage"]("#ff0000") == cm.adjust_saturation("#ff0000", -30) == "#cc1a1a"
    assert PALETTE_VIBES["professional"]("#646464") == "#5f5f5f"
    assert PALETTE_VIBES["minimalist"]("#646464") == "#6e6e6e"
    assert PALETTE_VIBES["luxury"]("#646464") == "#555555"
    assert PALETTE_VIBES["eco"]("#808080") == "#769476"


def test_eco_vibe_on_gray_scheme_leans_green():
    for c in scheme_palette("#808080", "shades", vibe="eco"):
        r, g, b = cm.hex_to_rgb(c)
        assert g > r and g > b


def test_unknown_vibe_rejected():
    with pytest.raises(ValueError):
        scheme_palette("#3b82f6", "triadic", vibe="grunge")
