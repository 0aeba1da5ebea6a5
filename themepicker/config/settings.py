"""Application settings via QSettings."""

from __future__ import annotations

import os
from pathlib import Path

from PySide6.QtCore import QSettings

from themepicker.themes.constants import GENERATED_DIRNAME

_DEFAULT_RECOMPILE_TIMEOUT = 30.0


class AppSettings:
    """Wraps QSettings for persistent app configuration."""

    def __init__(self, qsettings: QSettings | None = None) -> None:
        self._qs = qsettings if qsettings is not None else QSettings("themepicker", "themepicker")

    # -- themes --

    @property
    def themes_root(self) -> Path:
        default = Path.home() / ".local" / "share" / "themepicker"
        return self._path_value("themes/root", default)

    @themes_root.setter
    def themes_root(self, value: Path) -> None:
        self._qs.setValue("themes/root", str(Path(value).expanduser().resolve()))

    @property
    def theme_id(self) -> str:
        raw = self._qs.value("themes/theme_id", "", type=str)
        return (raw or "").strip()

    @theme_id.setter
    def theme_id(self, value: str) -> None:
        self._qs.setValue("themes/theme_id", (value or "").strip())

    # -- hyprland --

    @property
    def hypr_variables_path(self) -> Path:
        default = _config_home() / "hypr" / "style-variables.conf"
        return self._path_value("hypr/variables_path", default)

    @hypr_variables_path.setter
    def hypr_variables_path(self, value: Path) -> None:
        self._qs.setValue("hypr/variables_path", str(value))

    # -- waybar --

    @property
    def waybar_variables_path(self) -> Path:
        default = self.themes_root / GENERATED_DIRNAME / "waybar-variables.scss"
        return self._path_value("waybar/variables_path", default)

    @waybar_variables_path.setter
    def waybar_variables_path(self, value: Path) -> None:
        self._qs.setValue("waybar/variables_path", str(value))

    @property
    def waybar_stylesheet_path(self) -> Path:
        default = self.themes_root / "waybar-style.scss"
        return self._path_value("waybar/stylesheet_path", default)

    @waybar_stylesheet_path.setter
    def waybar_stylesheet_path(self, value: Path) -> None:
        self._qs.setValue("waybar/stylesheet_path", str(value))

    @property
    def waybar_css_path(self) -> Path:
        default = _config_home() / "waybar" / "style.css"
        return self._path_value("waybar/css_path", default)

    @waybar_css_path.setter
    def waybar_css_path(self, value: Path) -> None:
        self._qs.setValue("waybar/css_path", str(value))

    @property
    def sass_binary(self) -> str:
        raw = self._qs.value("waybar/sass_binary", "sass", type=str)
        return (raw or "").strip() or "sass"

    @sass_binary.setter
    def sass_binary(self, value: str) -> None:
        self._qs.setValue("waybar/sass_binary", (value or "").strip() or "sass")

    @property
    def recompile_timeout(self) -> float:
        value = self._qs.value("waybar/recompile_timeout", _DEFAULT_RECOMPILE_TIMEOUT, type=float)
        if value is None or value <= 0:
            return _DEFAULT_RECOMPILE_TIMEOUT
        return float(value)

    @recompile_timeout.setter
    def recompile_timeout(self, value: float) -> None:
        self._qs.setValue("waybar/recompile_timeout", float(value))

    # -- kitty --

    @property
    def kitty_template_path(self) -> Path:
        default = _config_home() / "kitty" / "theme-template.conf"
        return self._path_value("kitty/template_path", default)

    @kitty_template_path.setter
    def kitty_template_path(self, value: Path) -> None:
        self._qs.setValue("kitty/template_path", str(value))

    @property
    def kitty_theme_path(self) -> Path:
        default = _config_home() / "kitty" / "theme.conf"
        return self._path_value("kitty/theme_path", default)

    @kitty_theme_path.setter
    def kitty_theme_path(self, value: Path) -> None:
        self._qs.setValue("kitty/theme_path", str(value))

    # -- helpers --

    @property
    def app_data_dir(self) -> Path:
        base = Path(os.environ.get("XDG_STATE_HOME", Path.home() / ".local" / "state"))
        path = base / "themepicker"
        path.mkdir(parents=True, exist_ok=True)
        return path

    def sync(self) -> None:
        self._qs.sync()

    def _path_value(self, key: str, default: Path) -> Path:
        raw = self._qs.value(key, "", type=str)
        value = (raw or "").strip()
        if not value:
            return default
        return Path(value).expanduser().resolve()


def _config_home() -> Path:
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
