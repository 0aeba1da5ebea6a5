"""Switch the active theme and regenerate derived config files."""

from __future__ import annotations

import logging
from typing import Sequence

from themepicker.errors import (
    ApplyStage,
    EmitError,
    ParseError,
    RecompileError,
    ThemeNotFoundError,
    ThemePickerError,
    VariablesFileError,
    classify_os_error,
)
from themepicker.fsutil import atomic_write_text
from themepicker.themes.constants import VARIABLES_FILENAME
from themepicker.themes.emitters import EmitTarget
from themepicker.themes.models import ActivationResult, EmittedConfig, Theme, VariableSet
from themepicker.themes.parser import parse_variables
from themepicker.themes.pointer import ActivePointer

logger = logging.getLogger(__name__)


class ActivationManager:
    """Owns every write to the active pointer and the emitted configs.

    An activation runs POINTER_SWITCHING, EMITTING and RECOMPILING in order
    and always ends back in IDLE. Errors raised from the first two stages
    abort the call; recompile failures are collected into the result
    because the theme's source files are already switched by then.
    """

    def __init__(self, pointer: ActivePointer, targets: Sequence[EmitTarget]) -> None:
        self._pointer = pointer
        self._targets = list(targets)
        self._stage = ApplyStage.IDLE

    @property
    def stage(self) -> ApplyStage:
        return self._stage

    @property
    def pointer(self) -> ActivePointer:
        return self._pointer

    @property
    def targets(self) -> list[EmitTarget]:
        return list(self._targets)

    def apply(self, theme: Theme) -> ActivationResult:
        try:
            self._stage = ApplyStage.POINTER_SWITCHING
            self._switch_pointer(theme)

            self._stage = ApplyStage.EMITTING
            variables = self._resolve_active()
            emitted = self._emit(theme, variables)

            self._stage = ApplyStage.RECOMPILING
            recompile_errors = self._recompile(emitted, theme_id=theme.theme_id)
        except ThemePickerError as exc:
            if exc.stage is None:
                exc.stage = self._stage
            if not exc.theme_id:
                exc.theme_id = theme.theme_id
            logger.error("apply %s failed: %s", theme.theme_id, exc)
            raise
        finally:
            self._stage = ApplyStage.IDLE

        logger.info(
            "applied theme %s (%d variables, %d files, %d recompile errors)",
            theme.theme_id,
            len(variables),
            len(emitted),
            len(recompile_errors),
        )
        return ActivationResult(
            theme=theme,
            pointer_target=self._pointer.target() or theme.directory,
            variables=variables,
            emitted=emitted,
            recompile_errors=recompile_errors,
        )

    def recompile(self, emitted: Sequence[EmittedConfig] | None = None) -> list[RecompileError]:
        """Re-run only the recompile stage, e.g. to retry after a failure."""
        if emitted is None:
            emitted = [target.emitted() for target in self._targets]
        target = self._pointer.target()
        theme_id = target.name if target is not None else ""
        self._stage = ApplyStage.RECOMPILING
        try:
            return self._recompile(list(emitted), theme_id=theme_id)
        finally:
            self._stage = ApplyStage.IDLE

    def _switch_pointer(self, theme: Theme) -> None:
        if not theme.variables_path.is_file():
            raise ThemeNotFoundError(path=theme.variables_path)
        # A theme that fails to parse must never become active.
        try:
            parse_variables(theme.variables_path)
        except VariablesFileError as exc:
            if theme.variables_path.is_file():
                raise
            raise ThemeNotFoundError(path=theme.variables_path, details=exc.details) from exc
        self._pointer.switch(theme.directory)

    def _resolve_active(self) -> VariableSet:
        active_path = self._pointer.path_for(VARIABLES_FILENAME)
        try:
            return parse_variables(active_path)
        except ParseError as exc:
            exc.stage = ApplyStage.EMITTING
            raise

    def _emit(self, theme: Theme, variables: VariableSet) -> list[EmittedConfig]:
        rendered = [
            (target, target.render(variables, source=theme.variables_path))
            for target in self._targets
        ]
        emitted: list[EmittedConfig] = []
        for target, text in rendered:
            try:
                atomic_write_text(target.output_path, text)
            except OSError as exc:
                raise EmitError(
                    path=target.output_path,
                    details={"target": target.name, **classify_os_error(exc)},
                ) from exc
            logger.debug("wrote %s config %s", target.name, target.output_path)
            emitted.append(target.emitted())
        return emitted

    def _recompile(self, emitted: list[EmittedConfig], *, theme_id: str) -> list[RecompileError]:
        recompilers = {target.name: target.recompiler for target in self._targets}
        errors: list[RecompileError] = []
        for config in emitted:
            recompiler = recompilers.get(config.target)
            if recompiler is None:
                continue
            try:
                recompiler(config)
            except RecompileError as exc:
                exc.theme_id = exc.theme_id or theme_id
                exc.stage = ApplyStage.RECOMPILING
                logger.warning("recompile of %s failed: %s", config.target, exc)
                errors.append(exc)
            except OSError as exc:
                error = RecompileError(
                    path=config.path,
                    theme_id=theme_id,
                    stage=ApplyStage.RECOMPILING,
                    details={"target": config.target, **classify_os_error(exc)},
                )
                logger.warning("recompile of %s failed: %s", config.target, error)
                errors.append(error)
        return errors
