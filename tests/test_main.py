import json

import pytest

from chromatch.main import _parse_swatches, main, parse_args
from chromatch.matcher import MatchInputError


@pytest.fixture(autouse=True)
def no_keys(monkeypatch):
    for name in ("UNSPLASH_ACCESS_KEY", "PEXELS_API_KEY", "PIXABAY_API_KEY"):
        monkeypatch.delenv(name, raising=False)


def test_roles_json(capsys):
    assert main(["roles", "#8B5CF6", "--vibe", "minimal", "--brightness", "dark", "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["base"] == "#8b5cf6"
    assert data["brightness"] == "dark"
    assert "textHeading" in data


def test_derive_json(capsys):
    assert main(["derive", "#abc #ff0000", "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert [p["vibrant"] for p in data] == ["#aabbcc", "#ff0000"]


def test_derive_render_writes_one_file_per_swatch(tmp_path):
    assert main(["derive", "#abc #ff0000", "--render", str(tmp_path / "derived.png")]) == 0
    assert (tmp_path / "derived_aabbcc.png").exists()
    assert (tmp_path / "derived_ff0000.png").exists()


@pytest.mark.parametrize("argv", [
    ["harmony", "#8B5CF6"],
    ["scheme", "#8B5CF6", "--scheme", "triadic"],
    ["scheme", "#8B5CF6", "--scheme", "analogous", "--vibe", "eco"],
    ["roles", "#8B5CF6", "--brightness", "mixed", "--vibe", "retro"],
])
def test_commands_succeed(argv):
    assert main(argv) == 0


@pytest.mark.parametrize("argv", [
    ["match", "nothing to see"],
    ["derive", "no colors"],
    ["harmony", "purple"],
])
def test_input_errors_exit_nonzero(argv, capsys):
    assert main(argv) == 1
    assert "No valid HEX colors" in capsys.readouterr().out


def test_match_without_keys_returns_empty(capsys):
    assert main(["match", "#ff0000", "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["images"] == []
    assert data["total"] == 0
    assert data["sources"] == {"unsplash": 0, "pexels": 0, "pixabay": 0}


def test_unknown_scheme_is_rejected():
    with pytest.raises(SystemExit):
        parse_args(["scheme", "#fff", "--scheme", "rainbow"])


def test_unknown_palette_vibe_is_rejected():
    with pytest.raises(SystemExit):
        parse_args(["scheme", "#fff", "--vibe", "grunge"])


def test_swatch_parsing_raises_plain_value_error():
    with pytest.raises(ValueError) as exc:
        _parse_swatches("no colors")
    assert not isinstance(exc.value, MatchInputError)
