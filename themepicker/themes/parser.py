"""Theme variable file parsing.

A variables file holds flat SCSS assignments (``$name: value;``) and at most
one include of the shared base file (``@use "../base-variables";``). The
include is resolved as a two-pass merge: the base file seeds the result and
the theme's own assignments overlay it. Deeper include chains are a
deliberate limit of the format and are rejected, not followed.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from themepicker.errors import (
    MalformedAssignmentError,
    MissingIncludeError,
    ParseError,
    UnsupportedIncludeError,
    VariablesFileError,
)
from themepicker.themes.constants import (
    BLOCK_COMMENT_END,
    BLOCK_COMMENT_START,
    INCLUDE_SUFFIX,
    LINE_COMMENT,
)
from themepicker.themes.models import VariableSet

_INCLUDE_RE = re.compile(
    r"""^@(?:use|import)\s+(["'])(?P<target>[^"']+)\1(?:\s+as\s+[\w*-]+)?\s*;?\s*$"""
)
_BUILTIN_MODULE_PREFIX = "sass:"

_MAX_VARIABLES_BYTES = 256 * 1024


@dataclass(frozen=True, slots=True)
class _ParsedFile:
    include: str | None
    assignments: list[tuple[str, str]]


def parse_variables(path: Path) -> VariableSet:
    """Resolve a theme variables file, merging its included base file."""
    parsed = _parse_file(path)
    variables: VariableSet = {}

    if parsed.include is not None:
        base_path = resolve_include(path, parsed.include)
        base = _parse_file(base_path, missing_error=MissingIncludeError)
        if base.include is not None:
            raise UnsupportedIncludeError(
                message=f"Base file {base_path.name} has its own include; only one level is followed.",
                path=base_path,
                details={"include": base.include},
            )
        variables.update(base.assignments)

    variables.update(parsed.assignments)
    return variables


def parse_text(text: str, *, separator: str = ":", source: Path | None = None) -> VariableSet:
    """Read ``$name<separator>value`` lines from text, ignoring everything else.

    Used to read emitted files back; include directives are not honored.
    """
    variables: VariableSet = {}
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line.startswith("$"):
            continue
        name, value = _split_assignment(line, separator, source, lineno)
        variables[name] = value
    return variables


def resolve_include(path: Path, reference: str) -> Path:
    """Resolve an include reference relative to the including file."""
    relative = Path(reference)
    if not relative.suffix:
        relative = relative.with_name(relative.name + INCLUDE_SUFFIX)
    return path.parent / relative


def _parse_file(path: Path, *, missing_error: type[ParseError] = VariablesFileError) -> _ParsedFile:
    text = _read_text_limited(path, missing_error=missing_error)

    include: str | None = None
    assignments: list[tuple[str, str]] = []
    for lineno, line in _code_lines(text):
        if line.startswith("@"):
            match = _INCLUDE_RE.match(line)
            if match is None or match.group("target").startswith(_BUILTIN_MODULE_PREFIX):
                continue
            if include is not None:
                raise UnsupportedIncludeError(
                    message="Only one include directive is allowed per variables file.",
                    path=path,
                    details={"line": lineno},
                )
            include = match.group("target")
            continue

        if line.startswith("$"):
            assignments.append(_split_assignment(line, ":", path, lineno))

    return _ParsedFile(include=include, assignments=assignments)


def _code_lines(text: str) -> Iterator[tuple[int, str]]:
    """Yield stripped, numbered lines with comments removed."""
    in_block = False
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if in_block:
            end = line.find(BLOCK_COMMENT_END)
            if end < 0:
                continue
            in_block = False
            line = line[end + len(BLOCK_COMMENT_END):].strip()
        if line.startswith(BLOCK_COMMENT_START):
            end = line.find(BLOCK_COMMENT_END, len(BLOCK_COMMENT_START))
            if end < 0:
                in_block = True
                continue
            line = line[end + len(BLOCK_COMMENT_END):].strip()
        opener = line.rfind(BLOCK_COMMENT_START)
        if opener > 0 and line.find(BLOCK_COMMENT_END, opener) < 0:
            in_block = True
            line = line[:opener].strip()
        if not line or line.startswith(LINE_COMMENT):
            continue
        yield lineno, line


def _split_assignment(line: str, separator: str, path: Path | None, lineno: int) -> tuple[str, str]:
    name, sep, rest = line[1:].partition(separator)
    value = rest.split(";", 1)[0]
    name = name.strip()
    value = value.strip()
    if not sep or not name or not value:
        raise MalformedAssignmentError(
            message=f"Cannot split line {lineno} into a name and value: {line!r}",
            path=path,
            details={"line": lineno},
        )
    return name, value


def _read_text_limited(path: Path, *, missing_error: type[ParseError]) -> str:
    if not path.is_file():
        raise missing_error(path=path)
    try:
        size = path.stat().st_size
    except OSError as exc:
        raise VariablesFileError(path=path, details={"original": str(exc)}) from exc
    if size > _MAX_VARIABLES_BYTES:
        raise VariablesFileError(
            message=f"{path.name} exceeds max size ({_MAX_VARIABLES_BYTES} bytes)",
            path=path,
        )
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise VariablesFileError(path=path, details={"original": str(exc)}) from exc
