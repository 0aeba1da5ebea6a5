"""Render resolved theme variables into downstream config syntaxes."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from themepicker.themes.colors import to_hex
from themepicker.themes.models import EmittedConfig, VariableSet

_PLACEHOLDER_RE = re.compile(r"__(?P<name>[A-Za-z0-9_-]+?)__")

Render = Callable[..., str]
Recompiler = Callable[[EmittedConfig], None]


@dataclass(frozen=True, slots=True)
class EmitTarget:
    """An emitter bound to its output file and optional recompile step."""

    name: str
    output_path: Path
    render: Render
    recompiler: Recompiler | None = None

    def emitted(self) -> EmittedConfig:
        return EmittedConfig(target=self.name, path=self.output_path)


def emit_waybar(variables: VariableSet, *, source: Path | None = None) -> str:
    """Render ``$name: value;`` lines for the Waybar stylesheet."""
    lines = []
    if source is not None:
        lines.append(f"// Autogenerated from {source}")
    lines.extend(f"${name}: {value};" for name, value in variables.items())
    return _join(lines)


def emit_hyprland(variables: VariableSet, *, source: Path | None = None) -> str:
    """Render ``$name = value`` lines for a Hyprland config fragment."""
    lines = []
    if source is not None:
        lines.append(f"# Autogenerated from {source}")
    lines.extend(f"${name} = {value}" for name, value in variables.items())
    return _join(lines)


def emit_kitty(variables: VariableSet, template: str, *, source: Path | None = None) -> str:
    """Fill ``__name__`` placeholders in a kitty template with hex colors.

    Placeholders naming unknown variables, or values that are not colors,
    are left as written.
    """
    lines = []
    if source is not None:
        lines.append(f"# Autogenerated from {source}")

    def _substitute(match: re.Match[str]) -> str:
        value = variables.get(match.group("name"))
        if value is None:
            return match.group(0)
        try:
            return to_hex(value)
        except ValueError:
            return match.group(0)

    lines.extend(_PLACEHOLDER_RE.sub(_substitute, line) for line in template.splitlines())
    return _join(lines)


def _join(lines: list[str]) -> str:
    return "\n".join(lines) + "\n"
