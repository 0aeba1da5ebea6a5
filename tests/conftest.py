"""Shared fixtures for theme pipeline tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from themepicker.errors import RecompileError
from themepicker.themes.constants import BASE_VARIABLES_FILENAME, VARIABLES_FILENAME
from themepicker.themes.models import EmittedConfig

BASE_VARIABLES = """\
// Shared defaults
$borderColor: rgba(40, 40, 40, 1);
$foregroundColor: #dcd7ba;
"""


class MemoryPointer:
    """In-memory ActivePointer used instead of a real symlink."""

    def __init__(self, target: Path | None = None) -> None:
        self._target = target
        self.switches: list[Path] = []
        self.lookups: list[str] = []

    def target(self) -> Path | None:
        return self._target

    def switch(self, target: Path) -> None:
        self._target = target
        self.switches.append(target)

    def path_for(self, name: str) -> Path:
        self.lookups.append(name)
        if self._target is None:
            return Path("/nonexistent") / name
        return self._target / name


class RecordingRecompiler:
    """Recompiler that records calls and optionally fails."""

    def __init__(self, error: Exception | None = None) -> None:
        self.calls: list[EmittedConfig] = []
        self._error = error

    def __call__(self, emitted: EmittedConfig) -> None:
        self.calls.append(emitted)
        if self._error is not None:
            raise self._error


@pytest.fixture
def themes_root(tmp_path: Path) -> Path:
    root = tmp_path / "themes"
    root.mkdir()
    (root / BASE_VARIABLES_FILENAME).write_text(BASE_VARIABLES, encoding="utf-8")
    return root


@pytest.fixture
def make_theme(themes_root: Path) -> Callable[..., Path]:
    def _make(theme_id: str, body: str = "", *, meta: str | None = None, include: bool = True) -> Path:
        theme_dir = themes_root / theme_id
        theme_dir.mkdir(parents=True, exist_ok=True)
        header = '@use "../base-variables";\n' if include else ""
        (theme_dir / VARIABLES_FILENAME).write_text(header + body, encoding="utf-8")
        if meta is not None:
            (theme_dir / "meta.toml").write_text(meta, encoding="utf-8")
        return theme_dir

    return _make


@pytest.fixture
def failing_recompiler() -> RecordingRecompiler:
    return RecordingRecompiler(error=RecompileError(details={"stderr": "Undefined variable"}))
