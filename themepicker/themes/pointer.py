"""The active-theme pointer."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Protocol

from themepicker.errors import ApplyStage, PointerSwitchError, classify_os_error
from themepicker.fsutil import staging_path

logger = logging.getLogger(__name__)


class ActivePointer(Protocol):
    """A single indirection naming the active theme directory."""

    def target(self) -> Path | None:
        """Return the directory the pointer names, or None when unset."""
        ...

    def switch(self, target: Path) -> None:
        """Atomically repoint to ``target``."""
        ...

    def path_for(self, name: str) -> Path:
        """Return the path of ``name`` as seen through the pointer."""
        ...


class SymlinkPointer:
    """Pointer stored as a symlink, replaced by rename.

    A staging link is created next to the live one and renamed over it, so
    a concurrent reader always finds either the old or the new target.
    """

    def __init__(self, link_path: Path) -> None:
        self._link_path = link_path

    @property
    def link_path(self) -> Path:
        return self._link_path

    def target(self) -> Path | None:
        if not self._link_path.is_symlink():
            return None
        raw = Path(os.readlink(self._link_path))
        if not raw.is_absolute():
            raw = self._link_path.parent / raw
        return raw

    def switch(self, target: Path) -> None:
        if self._link_path.exists() and not self._link_path.is_symlink():
            raise PointerSwitchError(
                message=f"{self._link_path} exists and is not a symlink; refusing to replace it.",
                path=self._link_path,
                stage=ApplyStage.POINTER_SWITCHING,
            )

        # A relative target would resolve against the link's own directory.
        target = Path(os.path.abspath(target))
        staging = staging_path(self._link_path)
        try:
            os.symlink(target, staging, target_is_directory=True)
            os.replace(staging, self._link_path)
        except OSError as exc:
            if staging.is_symlink():
                staging.unlink()
            raise PointerSwitchError(
                path=self._link_path,
                stage=ApplyStage.POINTER_SWITCHING,
                details=classify_os_error(exc),
            ) from exc
        logger.info("active pointer %s -> %s", self._link_path, target)

    def path_for(self, name: str) -> Path:
        return self._link_path / name
