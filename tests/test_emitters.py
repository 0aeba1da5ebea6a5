"""Tests for the downstream config emitters."""

from __future__ import annotations

from pathlib import Path

import pytest

from themepicker.themes.colors import to_hex
from themepicker.themes.emitters import emit_hyprland, emit_kitty, emit_waybar
from themepicker.themes.parser import parse_text

VARIABLES = {
    "borderColor": "rgba(40, 40, 40, 1)",
    "foregroundColor": "C",
    "gap": "4px",
}


def test_hyprland_uses_equals_without_semicolon() -> None:
    output = emit_hyprland({"borderColor": "A", "foregroundColor": "C"})

    assert output == "$borderColor = A\n$foregroundColor = C\n"
    assert "$foregroundColor = C;" not in output


def test_waybar_uses_colon_with_semicolon() -> None:
    output = emit_waybar({"borderColor": "A", "foregroundColor": "C"})

    assert output == "$borderColor: A;\n$foregroundColor: C;\n"


def test_rgba_values_copied_verbatim() -> None:
    assert "$borderColor = rgba(40, 40, 40, 1)\n" in emit_hyprland(VARIABLES)
    assert "$borderColor: rgba(40, 40, 40, 1);\n" in emit_waybar(VARIABLES)


def test_source_header() -> None:
    source = Path("/themes/nord/theme-variables.scss")

    assert emit_hyprland(VARIABLES, source=source).startswith(f"# Autogenerated from {source}\n")
    assert emit_waybar(VARIABLES, source=source).startswith(f"// Autogenerated from {source}\n")


def test_source_is_keyword_only() -> None:
    with pytest.raises(TypeError):
        emit_waybar(VARIABLES, Path("x"))


@pytest.mark.parametrize("emitter", [emit_waybar, emit_hyprland])
def test_emitters_are_idempotent(emitter) -> None:
    source = Path("/themes/nord/theme-variables.scss")
    assert emitter(VARIABLES, source=source) == emitter(dict(VARIABLES), source=source)


def test_empty_variable_set_renders_header_only() -> None:
    assert emit_waybar({}) == "\n"
    assert emit_hyprland({}, source=Path("x")) == "# Autogenerated from x\n"


def test_emitted_files_read_back_to_same_variables() -> None:
    source = Path("/themes/nord/theme-variables.scss")

    assert parse_text(emit_waybar(VARIABLES, source=source)) == VARIABLES
    assert parse_text(emit_hyprland(VARIABLES, source=source), separator="=") == VARIABLES


def test_kitty_fills_placeholders_with_hex() -> None:
    template = (
        "foreground __foregroundColor__\n"
        "background __backgroundColor__\n"
        "active_border_color __borderColor__\n"
        "font_size 11\n"
    )
    variables = {
        "foregroundColor": "#DCD7BA",
        "borderColor": "rgba(40, 40, 40, 0.8)",
    }

    output = emit_kitty(variables, template)

    assert output.splitlines() == [
        "foreground #dcd7ba",
        "background __backgroundColor__",
        "active_border_color #282828",
        "font_size 11",
    ]


def test_kitty_leaves_non_color_values_alone() -> None:
    output = emit_kitty({"gap": "4px"}, "window_padding __gap__\n")

    assert output == "window_padding __gap__\n"


class TestToHex:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("#abc", "#aabbcc"),
            ("#A1B2C3", "#a1b2c3"),
            ("#a1b2c3ff", "#a1b2c3"),
            ("rgb(255, 0, 16)", "#ff0010"),
            ("rgba(1,2,3,0.5)", "#010203"),
            ("RGBA(10, 20, 30, 1)", "#0a141e"),
        ],
    )
    def test_converts(self, value: str, expected: str) -> None:
        assert to_hex(value) == expected

    @pytest.mark.parametrize("value", ["red", "#12", "rgba(1, 2)", "rgb(300, 0, 0)", "rgb(a, b, c)"])
    def test_rejects(self, value: str) -> None:
        with pytest.raises(ValueError):
            to_hex(value)
