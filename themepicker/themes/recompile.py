"""External tool invocations that turn emitted files into consumed artifacts."""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path

from themepicker.errors import ApplyStage, ErrorCode, RecompileError, classify_os_error
from themepicker.fsutil import staging_path
from themepicker.themes.models import EmittedConfig

logger = logging.getLogger(__name__)

_MAX_STDERR_CHARS = 2000


class SassCompiler:
    """Compile the Waybar stylesheet into the CSS file Waybar loads.

    The stylesheet consumes the emitted variables fragment, whose directory
    is put on the sass load path. Output goes to a staging file that is
    renamed over the final CSS once sass succeeds.
    """

    def __init__(
        self,
        stylesheet: Path,
        output: Path,
        *,
        binary: str = "sass",
        timeout: float = 30.0,
    ) -> None:
        self._stylesheet = stylesheet
        self._output = output
        self._binary = binary
        self._timeout = timeout

    @property
    def output(self) -> Path:
        return self._output

    def __call__(self, emitted: EmittedConfig) -> None:
        self._output.parent.mkdir(parents=True, exist_ok=True)
        staging = staging_path(self._output)
        args = [
            self._binary,
            "--no-source-map",
            "--load-path",
            str(emitted.path.parent),
            str(self._stylesheet),
            str(staging),
        ]
        logger.info("recompiling %s: %s", emitted.target, " ".join(args))
        try:
            completed = subprocess.run(
                args,
                capture_output=True,
                text=True,
                timeout=self._timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            staging.unlink(missing_ok=True)
            raise RecompileError(
                code=ErrorCode.RECOMPILE_TIMEOUT,
                path=emitted.path,
                stage=ApplyStage.RECOMPILING,
                details={"target": emitted.target, "timeout": self._timeout},
            ) from exc
        except OSError as exc:
            raise RecompileError(
                message=f"Could not run {self._binary!r}.",
                path=emitted.path,
                stage=ApplyStage.RECOMPILING,
                details={"target": emitted.target, **classify_os_error(exc)},
            ) from exc

        if completed.returncode != 0:
            staging.unlink(missing_ok=True)
            raise RecompileError(
                path=emitted.path,
                stage=ApplyStage.RECOMPILING,
                details={
                    "target": emitted.target,
                    "returncode": completed.returncode,
                    "stderr": completed.stderr.strip()[:_MAX_STDERR_CHARS],
                },
            )

        try:
            os.replace(staging, self._output)
        except OSError as exc:
            staging.unlink(missing_ok=True)
            raise RecompileError(
                path=self._output,
                stage=ApplyStage.RECOMPILING,
                details={"target": emitted.target, **classify_os_error(exc)},
            ) from exc


class KittyReloader:
    """Ask running kitty instances to reload their config."""

    def __init__(self, *, binary: str = "kitty") -> None:
        self._binary = binary

    def __call__(self, emitted: EmittedConfig) -> None:
        args = [self._binary, "@", "--no-response", "load-config"]
        logger.info("reloading %s: %s", emitted.target, " ".join(args))
        try:
            subprocess.Popen(
                args,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError as exc:
            raise RecompileError(
                message=f"Could not run {self._binary!r}.",
                path=emitted.path,
                stage=ApplyStage.RECOMPILING,
                details={"target": emitted.target, **classify_os_error(exc)},
            ) from exc
