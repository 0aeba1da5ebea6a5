"""Theme framework constants."""

from __future__ import annotations

VARIABLES_FILENAME = "theme-variables.scss"
BASE_VARIABLES_FILENAME = "base-variables.scss"
METADATA_FILENAME = "meta.toml"
ACTIVE_POINTER_NAME = "current"
WALLPAPERS_DIRNAME = "wallpapers"
GENERATED_DIRNAME = "generated"

INCLUDE_SUFFIX = ".scss"

WALLPAPER_EXTENSIONS: tuple[str, ...] = (
    ".png",
    ".jpg",
    ".jpeg",
    ".bmp",
)

LINE_COMMENT = "//"
BLOCK_COMMENT_START = "/*"
BLOCK_COMMENT_END = "*/"
