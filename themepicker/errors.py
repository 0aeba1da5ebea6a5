"""Error codes and error handling utilities for themepicker."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Any


class ApplyStage(Enum):
    """Stages of a single theme activation."""

    IDLE = "idle"
    POINTER_SWITCHING = "pointer switching"
    EMITTING = "emitting"
    RECOMPILING = "recompiling"


class ErrorCode(Enum):
    """Standardized error codes for themepicker operations."""

    # Registry errors
    REGISTRY_UNAVAILABLE = auto()

    # Parse errors
    VARIABLES_UNREADABLE = auto()
    INCLUDE_MISSING = auto()
    INCLUDE_UNSUPPORTED = auto()
    ASSIGNMENT_MALFORMED = auto()

    # Apply errors
    THEME_NOT_FOUND = auto()
    POINTER_SWITCH_FAILED = auto()
    EMIT_FAILED = auto()
    RECOMPILE_FAILED = auto()
    RECOMPILE_TIMEOUT = auto()

    # Extras
    WALLPAPER_FAILED = auto()


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.REGISTRY_UNAVAILABLE: "The themes directory is missing or unreadable.",
    ErrorCode.VARIABLES_UNREADABLE: "The theme variables file could not be read.",
    ErrorCode.INCLUDE_MISSING: "The included base variables file does not exist.",
    ErrorCode.INCLUDE_UNSUPPORTED: "Only a single include of the base variables file is supported.",
    ErrorCode.ASSIGNMENT_MALFORMED: "A variable assignment could not be parsed.",
    ErrorCode.THEME_NOT_FOUND: "The theme was not found. It may have been removed.",
    ErrorCode.POINTER_SWITCH_FAILED: "Could not switch the active theme. The previous theme is still active.",
    ErrorCode.EMIT_FAILED: "Could not write a generated config file.",
    ErrorCode.RECOMPILE_FAILED: "The theme was switched but recompiling a derived file failed.",
    ErrorCode.RECOMPILE_TIMEOUT: "The theme was switched but recompiling a derived file timed out.",
    ErrorCode.WALLPAPER_FAILED: "Could not set the wallpaper.",
}

ERROR_SUGGESTIONS: dict[ErrorCode, str] = {
    ErrorCode.REGISTRY_UNAVAILABLE: "Check the themes root setting or pass --root.",
    ErrorCode.INCLUDE_MISSING: "Check the path in the @use line of the theme file.",
    ErrorCode.INCLUDE_UNSUPPORTED: "Move shared variables into the base file; nested includes are not followed.",
    ErrorCode.ASSIGNMENT_MALFORMED: "Variables must be written as `$name: value;`.",
    ErrorCode.THEME_NOT_FOUND: "Refresh the theme list and try again.",
    ErrorCode.POINTER_SWITCH_FAILED: "Check permissions and free space in the themes directory.",
    ErrorCode.EMIT_FAILED: "Check permissions on the config directories.",
    ErrorCode.RECOMPILE_FAILED: "Fix the tool error and run `themepicker recompile`.",
    ErrorCode.RECOMPILE_TIMEOUT: "Run `themepicker recompile` to retry.",
}


@dataclass(eq=False)
class ThemePickerError(Exception):
    """Base exception for themepicker with error code and context."""

    code: ErrorCode
    message: str = ""
    path: Path | None = None
    theme_id: str = ""
    stage: ApplyStage | None = None
    details: dict[str, Any] = field(default_factory=dict)
    suggestion: str = ""

    def __post_init__(self) -> None:
        if not self.message:
            self.message = ERROR_MESSAGES.get(self.code, "An unexpected error occurred.")
        if not self.suggestion:
            self.suggestion = ERROR_SUGGESTIONS.get(self.code, "")

    def __str__(self) -> str:
        parts = []
        if self.stage is not None:
            parts.append(f"[{self.stage.value}] ")
        parts.append(self.message)
        if self.theme_id:
            parts.append(f"\nTheme: {self.theme_id}")
        if self.path:
            parts.append(f"\nFile: {self.path}")
        if self.details:
            details_str = " | ".join(f"{k}={v}" for k, v in self.details.items())
            parts.append(f"\nDetails: {details_str}")
        return "".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging or UI display."""
        return {
            "code": self.code.name,
            "message": self.message,
            "stage": self.stage.value if self.stage else None,
            "theme_id": self.theme_id or None,
            "path": str(self.path) if self.path else None,
            "details": self.details,
            "suggestion": self.suggestion,
        }


@dataclass(eq=False)
class RegistryUnavailableError(ThemePickerError):
    code: ErrorCode = ErrorCode.REGISTRY_UNAVAILABLE


@dataclass(eq=False)
class ParseError(ThemePickerError):
    """Raised when a theme variables file cannot be resolved."""

    code: ErrorCode = ErrorCode.VARIABLES_UNREADABLE


@dataclass(eq=False)
class VariablesFileError(ParseError):
    code: ErrorCode = ErrorCode.VARIABLES_UNREADABLE


@dataclass(eq=False)
class MissingIncludeError(ParseError):
    code: ErrorCode = ErrorCode.INCLUDE_MISSING


@dataclass(eq=False)
class UnsupportedIncludeError(ParseError):
    code: ErrorCode = ErrorCode.INCLUDE_UNSUPPORTED


@dataclass(eq=False)
class MalformedAssignmentError(ParseError):
    code: ErrorCode = ErrorCode.ASSIGNMENT_MALFORMED


@dataclass(eq=False)
class ApplyError(ThemePickerError):
    """Raised when a stage of theme activation fails."""


@dataclass(eq=False)
class ThemeNotFoundError(ApplyError):
    code: ErrorCode = ErrorCode.THEME_NOT_FOUND


@dataclass(eq=False)
class PointerSwitchError(ApplyError):
    code: ErrorCode = ErrorCode.POINTER_SWITCH_FAILED


@dataclass(eq=False)
class EmitError(ApplyError):
    code: ErrorCode = ErrorCode.EMIT_FAILED


@dataclass(eq=False)
class RecompileError(ApplyError):
    code: ErrorCode = ErrorCode.RECOMPILE_FAILED


@dataclass(eq=False)
class WallpaperError(ThemePickerError):
    code: ErrorCode = ErrorCode.WALLPAPER_FAILED


def classify_os_error(exc: OSError) -> dict[str, Any]:
    """Summarize an OSError into error details."""
    details: dict[str, Any] = {"original": str(exc)}
    exc_str = str(exc).lower()
    if isinstance(exc, PermissionError) or "permission denied" in exc_str:
        details["reason"] = "permission denied"
    elif "no space left" in exc_str or "disk full" in exc_str:
        details["reason"] = "disk full"
    elif isinstance(exc, FileNotFoundError):
        details["reason"] = "not found"
    return details


def format_error_for_user(error: ThemePickerError | Exception) -> str:
    """Format an error for display to the user with actionable suggestions."""
    if isinstance(error, ThemePickerError):
        parts = []
        if error.stage is not None:
            parts.append(f"{error.stage.value.capitalize()} failed: ")
        parts.append(error.message)
        if error.theme_id:
            parts.append(f"\nTheme: {error.theme_id}")
        if error.path:
            parts.append(f"\nFile: {error.path}")
        original = error.details.get("original") or error.details.get("stderr")
        if original:
            parts.append(f"\nCause: {original}")
        if error.suggestion and error.suggestion != error.message:
            parts.append(f"\n\n{error.suggestion}")
        return "".join(parts)
    return f"{type(error).__name__}: {error}"
