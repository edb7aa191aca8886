from PIL import Image

from chromatch.palette_deriver import derive
from chromatch.palette_renderer import (
    derived_palette_to_dicts,
    render_palette,
    render_palette_image,
    rgb_to_cmyk,
    role_palette_to_dicts,
)
from chromatch.roles import assign_roles


def test_rgb_to_cmyk():
    assert rgb_to_cmyk(0, 0, 0) == (0, 0, 0, 100)
    assert rgb_to_cmyk(255, 0, 0) == (0, 100, 100, 0)
    assert rgb_to_cmyk(255, 255, 255) == (0, 0, 0, 0)


def test_derived_palette_dicts_use_slot_names():
    dicts = derived_palette_to_dicts(derive("#3b82f6"))
    assert len(dicts) == 9
    assert dicts[0] == {"hex": "#3b82f6", "name": "vibrant", "role": ""}
    assert dicts[1]["name"] == "darkVibrant"


def test_role_dicts_carry_contrast_ratios():
    dicts = role_palette_to_dicts(assign_roles("#8B5CF6", "minimal", "dark"))
    by_name = {d["name"]: d for d in dicts}
    assert len(dicts) == 6
    assert by_name["textHeading"]["role"].endswith(":1")
    assert by_name["accent"]["role"].endswith(":1")
    assert by_name["background"]["role"] == ""


def test_render_palette_image_size_and_fill():
    img = render_palette_image(derived_palette_to_dicts(derive("#ff0000")), width=900, height=300)
    assert img.size == (900, 300)
    assert img.mode == "RGB"
    # first strip, below the header, is the source color
    assert img.getpixel((5, 100)) == (255, 0, 0)


def test_render_empty_palette_is_blank():
    img = render_palette_image([], width=200, height=100)
    assert img.size == (200, 100)
    assert img.getcolors() == [(200 * 100, (12, 12, 16))]


def test_render_caps_strip_count():
    colors = [{"hex": "#112233", "name": f"c{i}"} for i in range(15)]
    assert render_palette_image(colors, width=900, height=300).size == (900, 300)


def test_render_palette_saves_png(tmp_path):
    out = render_palette(role_palette_to_dicts(assign_roles("#22c55e")), tmp_path / "nested" / "roles.png")
    assert out.exists()
    with Image.open(out) as img:
        assert img.format == "PNG"
        assert img.size == (1800, 560)
