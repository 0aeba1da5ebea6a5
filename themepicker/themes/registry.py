"""Theme discovery and registry."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path

from themepicker.errors import ParseError, RegistryUnavailableError
from themepicker.themes.constants import METADATA_FILENAME, VARIABLES_FILENAME
from themepicker.themes.models import Theme
from themepicker.themes.parser import parse_variables

logger = logging.getLogger(__name__)

_MAX_THEME_DIR_CANDIDATES = 512
_MAX_SHORT_FIELD_LEN = 120
_MAX_DESC_LEN = 240


class ThemeRegistry:
    """Lists theme directories under a themes root.

    Every call rescans the disk; nothing is cached between calls.
    """

    def __init__(self, root: Path) -> None:
        self._root = root
        self._warnings: list[str] = []

    @property
    def root(self) -> Path:
        return self._root

    def set_root(self, path: Path) -> None:
        self._root = path

    def warnings(self) -> list[str]:
        """Warnings recorded during the most recent scan."""
        return list(self._warnings)

    def list_themes(self, *, validate: bool = False) -> list[Theme]:
        self._warnings = []
        themes: list[Theme] = []
        for theme_dir in self._candidate_dirs():
            theme = self._load_theme(theme_dir, validate=validate)
            if theme is not None:
                themes.append(theme)
        return sorted(themes, key=lambda theme: (theme.name.lower(), theme.theme_id))

    def get_theme(self, theme_id: str) -> Theme | None:
        for theme in self.list_themes():
            if theme.theme_id == theme_id:
                return theme
        return None

    def _candidate_dirs(self) -> list[Path]:
        root = self._root
        if not root.is_dir():
            raise RegistryUnavailableError(path=root)
        try:
            entries = sorted(root.iterdir())
        except OSError as exc:
            raise RegistryUnavailableError(path=root, details={"original": str(exc)}) from exc

        candidates = [
            path
            for path in entries
            if not path.name.startswith(".") and path.is_dir() and not path.is_symlink()
        ]
        if len(candidates) > _MAX_THEME_DIR_CANDIDATES:
            self._warn(
                f"Theme directory limit exceeded in {root}; "
                f"only first {_MAX_THEME_DIR_CANDIDATES} folders were scanned."
            )
            candidates = candidates[:_MAX_THEME_DIR_CANDIDATES]
        return candidates

    def _load_theme(self, theme_dir: Path, *, validate: bool) -> Theme | None:
        variables_path = theme_dir / VARIABLES_FILENAME
        if not variables_path.is_file():
            self._warn(f"Skipping {theme_dir.name}: missing {VARIABLES_FILENAME}")
            return None

        if validate:
            try:
                parse_variables(variables_path)
            except ParseError as exc:
                self._warn(f"Skipping {theme_dir.name}: {exc.message} ({exc.path})")
                return None

        name, description = self._read_metadata(theme_dir)
        return Theme(
            theme_id=theme_dir.name,
            name=name,
            description=description,
            directory=theme_dir,
            variables_path=variables_path,
        )

    def _read_metadata(self, theme_dir: Path) -> tuple[str, str]:
        meta_path = theme_dir / METADATA_FILENAME
        if not meta_path.is_file():
            return theme_dir.name, ""
        try:
            data = tomllib.loads(meta_path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as exc:
            self._warn(f"Ignoring invalid {METADATA_FILENAME} in {theme_dir.name}: {exc}")
            return theme_dir.name, ""

        name = _single_line(data.get("name"), max_len=_MAX_SHORT_FIELD_LEN) or theme_dir.name
        description = _single_line(data.get("description"), max_len=_MAX_DESC_LEN)
        return name, description

    def _warn(self, message: str) -> None:
        logger.warning(message)
        self._warnings.append(message)


def _single_line(value: object, *, max_len: int) -> str:
    if not isinstance(value, str):
        return ""
    cleaned = " ".join(value.split())
    return cleaned[:max_len]
