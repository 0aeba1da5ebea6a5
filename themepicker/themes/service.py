"""Theme listing and apply service used by the front ends."""

from __future__ import annotations

import functools
import logging
from typing import TYPE_CHECKING

from PySide6.QtCore import QObject, Signal

from themepicker.errors import (
    ApplyStage,
    ThemeNotFoundError,
    ThemePickerError,
    format_error_for_user,
)
from themepicker.themes.activation import ActivationManager
from themepicker.themes.constants import ACTIVE_POINTER_NAME
from themepicker.themes.emitters import EmitTarget, emit_hyprland, emit_kitty, emit_waybar
from themepicker.themes.models import ApplyOutcome, Theme
from themepicker.themes.pointer import ActivePointer, SymlinkPointer
from themepicker.themes.recompile import KittyReloader, SassCompiler
from themepicker.themes.registry import ThemeRegistry
from themepicker.themes.wallpaper import WallpaperChanger

if TYPE_CHECKING:
    from themepicker.config.settings import AppSettings

logger = logging.getLogger(__name__)


def build_targets(settings: AppSettings) -> list[EmitTarget]:
    """Assemble the configured downstream consumers."""
    targets = [
        EmitTarget(
            name="waybar",
            output_path=settings.waybar_variables_path,
            render=emit_waybar,
            recompiler=SassCompiler(
                settings.waybar_stylesheet_path,
                settings.waybar_css_path,
                binary=settings.sass_binary,
                timeout=settings.recompile_timeout,
            ),
        ),
        EmitTarget(
            name="hyprland",
            output_path=settings.hypr_variables_path,
            render=emit_hyprland,
        ),
    ]

    template_path = settings.kitty_template_path
    if template_path.is_file():
        try:
            template = template_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("kitty template %s unreadable, skipping kitty: %s", template_path, exc)
        else:
            targets.append(
                EmitTarget(
                    name="kitty",
                    output_path=settings.kitty_theme_path,
                    render=functools.partial(emit_kitty, template=template),
                    recompiler=KittyReloader(),
                )
            )
    return targets


class ThemeService(QObject):
    """List themes and apply a selection, reporting outcomes for display."""

    theme_changed = Signal(str)
    apply_failed = Signal(str, str)

    def __init__(
        self,
        settings: AppSettings,
        registry: ThemeRegistry | None = None,
        activation: ActivationManager | None = None,
        wallpaper: WallpaperChanger | None = None,
    ) -> None:
        super().__init__()
        self._settings = settings
        root = settings.themes_root
        self._registry = registry or ThemeRegistry(root)
        if activation is None:
            pointer: ActivePointer = SymlinkPointer(root / ACTIVE_POINTER_NAME)
            activation = ActivationManager(pointer, build_targets(settings))
        self._activation = activation
        self._wallpaper = wallpaper or WallpaperChanger(activation.pointer)

    @property
    def registry(self) -> ThemeRegistry:
        return self._registry

    @property
    def active_theme_id(self) -> str:
        target = self._activation.pointer.target()
        return target.name if target is not None else ""

    def list_themes(self) -> list[Theme]:
        return self._registry.list_themes()

    def load_warnings(self) -> list[str]:
        return self._registry.warnings()

    def apply_theme(
        self,
        theme_id: str,
        *,
        persist: bool = True,
        change_wallpaper: bool = False,
    ) -> ApplyOutcome:
        try:
            theme = self._registry.get_theme(theme_id)
            if theme is None:
                raise ThemeNotFoundError(
                    theme_id=theme_id,
                    stage=ApplyStage.POINTER_SWITCHING,
                    path=self._registry.root / theme_id,
                )
            result = self._activation.apply(theme)
        except ThemePickerError as exc:
            message = format_error_for_user(exc)
            if exc.stage is ApplyStage.EMITTING:
                # The pointer already names the new theme.
                if persist:
                    self._settings.theme_id = theme_id
                self.theme_changed.emit(theme_id)
            self.apply_failed.emit(theme_id, message)
            return ApplyOutcome(
                ok=False,
                message=message,
                stage=exc.stage or ApplyStage.IDLE,
                error=exc,
            )

        if persist:
            self._settings.theme_id = theme_id
        self.theme_changed.emit(theme_id)

        if change_wallpaper:
            wallpaper_outcome = self.change_wallpaper()
            if not wallpaper_outcome.ok:
                logger.warning("wallpaper not changed: %s", wallpaper_outcome.message)

        if not result.ok:
            first = result.recompile_errors[0]
            message = format_error_for_user(first)
            self.apply_failed.emit(theme_id, message)
            return ApplyOutcome(
                ok=False,
                message=message,
                stage=ApplyStage.RECOMPILING,
                result=result,
                error=first,
            )
        return ApplyOutcome(ok=True, message=f"Applied theme: {theme.name}", result=result)

    def recompile(self) -> ApplyOutcome:
        errors = self._activation.recompile()
        if errors:
            return ApplyOutcome(
                ok=False,
                message="\n\n".join(format_error_for_user(error) for error in errors),
                stage=ApplyStage.RECOMPILING,
                error=errors[0],
            )
        return ApplyOutcome(ok=True, message="Recompiled theme outputs.")

    def change_wallpaper(self) -> ApplyOutcome:
        try:
            wallpaper = self._wallpaper.change()
        except ThemePickerError as exc:
            return ApplyOutcome(ok=False, message=format_error_for_user(exc), error=exc)
        return ApplyOutcome(ok=True, message=f"Wallpaper set to {wallpaper.name}")
