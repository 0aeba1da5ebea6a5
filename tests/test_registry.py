"""Tests for theme discovery."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from themepicker.errors import RegistryUnavailableError
from themepicker.themes.constants import VARIABLES_FILENAME
from themepicker.themes.registry import ThemeRegistry


def test_skips_theme_without_variables_file(themes_root: Path, make_theme) -> None:
    make_theme("kanagawa", "$accent: #7e9cd8;\n")
    (themes_root / "unfinished").mkdir()

    registry = ThemeRegistry(themes_root)
    themes = registry.list_themes()

    assert [theme.theme_id for theme in themes] == ["kanagawa"]
    assert len(registry.warnings()) == 1
    assert "unfinished" in registry.warnings()[0]


def test_missing_root_raises(tmp_path: Path) -> None:
    registry = ThemeRegistry(tmp_path / "missing")

    with pytest.raises(RegistryUnavailableError) as excinfo:
        registry.list_themes()
    assert excinfo.value.path == tmp_path / "missing"


def test_root_that_is_a_file_raises(tmp_path: Path) -> None:
    root = tmp_path / "themes"
    root.write_text("", encoding="utf-8")

    with pytest.raises(RegistryUnavailableError):
        ThemeRegistry(root).list_themes()


def test_active_pointer_and_hidden_dirs_are_not_themes(themes_root: Path, make_theme) -> None:
    theme_dir = make_theme("nord", "$accent: #88c0d0;\n")
    os.symlink(theme_dir, themes_root / "current")
    hidden = themes_root / ".cache"
    hidden.mkdir()
    (hidden / VARIABLES_FILENAME).write_text("$a: b;\n", encoding="utf-8")

    themes = ThemeRegistry(themes_root).list_themes()

    assert [theme.theme_id for theme in themes] == ["nord"]


def test_metadata_and_sorting(make_theme) -> None:
    make_theme("b-theme", "", meta='name = "Alpha"\ndescription = "First one."\n')
    make_theme("a-theme", "", meta='name = "Zulu"\n')
    make_theme("plain", "")

    themes = ThemeRegistry(make_theme("c", "").parent).list_themes()

    assert [theme.name for theme in themes] == ["Alpha", "c", "plain", "Zulu"]
    alpha = themes[0]
    assert alpha.theme_id == "b-theme"
    assert alpha.description == "First one."
    assert alpha.variables_path == alpha.directory / VARIABLES_FILENAME


def test_invalid_metadata_falls_back_with_warning(themes_root: Path, make_theme) -> None:
    make_theme("nord", "", meta="name = \n")

    registry = ThemeRegistry(themes_root)
    themes = registry.list_themes()

    assert themes[0].name == "nord"
    assert any("meta.toml" in warning for warning in registry.warnings())


def test_validate_skips_unparseable_theme(themes_root: Path, make_theme) -> None:
    make_theme("good", "$accent: #fff;\n")
    make_theme("bad", "$accent #fff;\n")

    registry = ThemeRegistry(themes_root)

    assert {theme.theme_id for theme in registry.list_themes()} == {"good", "bad"}
    assert [theme.theme_id for theme in registry.list_themes(validate=True)] == ["good"]
    assert any("bad" in warning for warning in registry.warnings())


def test_every_call_rescans(themes_root: Path, make_theme) -> None:
    registry = ThemeRegistry(themes_root)
    assert registry.list_themes() == []

    make_theme("nord", "")

    assert registry.get_theme("nord") is not None
    assert registry.get_theme("missing") is None
