"""Theme framework exports."""

from themepicker.themes.activation import ActivationManager
from themepicker.themes.models import ActivationResult, ApplyOutcome, EmittedConfig, Theme, VariableSet
from themepicker.themes.parser import parse_variables
from themepicker.themes.pointer import ActivePointer, SymlinkPointer
from themepicker.themes.registry import ThemeRegistry
from themepicker.themes.service import ThemeService

__all__ = [
    "ActivationManager",
    "ActivationResult",
    "ActivePointer",
    "ApplyOutcome",
    "EmittedConfig",
    "SymlinkPointer",
    "Theme",
    "ThemeRegistry",
    "ThemeService",
    "VariableSet",
    "parse_variables",
]
