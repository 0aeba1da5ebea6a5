"""Theme framework models."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from themepicker.errors import ApplyStage, RecompileError, ThemePickerError

VariableSet = dict[str, str]


@dataclass(frozen=True, slots=True)
class Theme:
    """A theme directory discovered under the themes root."""

    theme_id: str
    name: str
    description: str
    directory: Path
    variables_path: Path


@dataclass(frozen=True, slots=True)
class EmittedConfig:
    """A derived file written for one downstream consumer."""

    target: str
    path: Path


@dataclass(slots=True)
class ActivationResult:
    """Outcome of a completed activation."""

    theme: Theme
    pointer_target: Path
    variables: VariableSet
    emitted: list[EmittedConfig] = field(default_factory=list)
    recompile_errors: list[RecompileError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.recompile_errors


@dataclass(slots=True)
class ApplyOutcome:
    """Display-ready result handed back to the UI layer."""

    ok: bool
    message: str
    stage: ApplyStage = ApplyStage.IDLE
    result: ActivationResult | None = None
    error: ThemePickerError | None = None
