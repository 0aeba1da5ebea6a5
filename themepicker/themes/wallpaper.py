"""Set a random wallpaper from the active theme through hyprpaper."""

from __future__ import annotations

import logging
import random
import subprocess
import time
from pathlib import Path
from typing import Callable, Sequence

from themepicker.errors import WallpaperError, classify_os_error
from themepicker.themes.constants import WALLPAPER_EXTENSIONS, WALLPAPERS_DIRNAME
from themepicker.themes.pointer import ActivePointer

logger = logging.getLogger(__name__)


class WallpaperChanger:
    """Pick an image from ``current/wallpapers`` and hand it to hyprpaper.

    hyprpaper may not be ready right after login or a theme switch, so the
    request is retried a few times before giving up.
    """

    def __init__(
        self,
        pointer: ActivePointer,
        *,
        binary: str = "hyprctl",
        attempts: int = 5,
        delay: float = 1.0,
        runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
        sleep: Callable[[float], None] = time.sleep,
        choose: Callable[[Sequence[Path]], Path] = random.choice,
    ) -> None:
        self._pointer = pointer
        self._binary = binary
        self._attempts = max(1, attempts)
        self._delay = delay
        self._runner = runner
        self._sleep = sleep
        self._choose = choose

    def wallpapers(self) -> list[Path]:
        directory = self._pointer.path_for(WALLPAPERS_DIRNAME)
        try:
            entries = sorted(directory.iterdir())
        except OSError as exc:
            raise WallpaperError(
                message="Failed to read the wallpaper directory.",
                path=directory,
                details=classify_os_error(exc),
            ) from exc
        return [
            path
            for path in entries
            if path.is_file() and path.suffix.lower() in WALLPAPER_EXTENSIONS
        ]

    def change(self) -> Path:
        """Set a random wallpaper and return its path."""
        images = self.wallpapers()
        if not images:
            raise WallpaperError(
                message="No image files found in the wallpaper directory.",
                path=self._pointer.path_for(WALLPAPERS_DIRNAME),
            )
        wallpaper = self._choose(images)
        args = [self._binary, "hyprpaper", "wallpaper", f",{wallpaper}"]

        last_error = ""
        for attempt in range(1, self._attempts + 1):
            try:
                completed = self._runner(args, capture_output=True, text=True, check=False)
            except OSError as exc:
                last_error = str(exc)
            else:
                response = (completed.stdout or "").strip()
                if response in ("", "ok"):
                    logger.info("wallpaper set to %s", wallpaper)
                    return wallpaper
                last_error = response
            logger.debug("hyprpaper attempt %d/%d failed: %s", attempt, self._attempts, last_error)
            if attempt < self._attempts:
                self._sleep(self._delay)

        raise WallpaperError(
            path=wallpaper,
            details={"attempts": self._attempts, "original": last_error},
        )
