"""Color value conversion for targets that only accept hex colors."""

from __future__ import annotations

import re

_HEX_COLOR_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
_FUNC_COLOR_RE = re.compile(r"^rgba?\((?P<args>[^)]*)\)$", re.IGNORECASE)


def to_hex(value: str) -> str:
    """Convert a hex, rgb() or rgba() color into ``#rrggbb``.

    Alpha is dropped; kitty colors are always opaque.
    """
    cleaned = value.strip()
    if _HEX_COLOR_RE.match(cleaned):
        digits = cleaned[1:]
        if len(digits) == 3:
            digits = "".join(ch * 2 for ch in digits)
        return f"#{digits[:6].lower()}"

    match = _FUNC_COLOR_RE.match(cleaned)
    if match is None:
        raise ValueError(f"Unsupported color value: {value!r}")

    parts = [part.strip() for part in match.group("args").split(",")]
    if len(parts) < 3:
        raise ValueError(f"Unsupported color value: {value!r}")
    channels: list[int] = []
    for part in parts[:3]:
        try:
            channel = int(part)
        except ValueError as exc:
            raise ValueError(f"Unsupported color channel {part!r} in {value!r}") from exc
        if not 0 <= channel <= 255:
            raise ValueError(f"Color channel out of range in {value!r}")
        channels.append(channel)
    return "#" + "".join(f"{channel:02x}" for channel in channels)