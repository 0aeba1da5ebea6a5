"""Tests for external recompile invocations."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from themepicker.errors import ErrorCode, RecompileError
from themepicker.themes import recompile
from themepicker.themes.models import EmittedConfig
from themepicker.themes.recompile import KittyReloader, SassCompiler


@pytest.fixture
def emitted(tmp_path: Path) -> EmittedConfig:
    path = tmp_path / "generated" / "waybar-variables.scss"
    path.parent.mkdir()
    path.write_text("$accent: #fff;\n", encoding="utf-8")
    return EmittedConfig(target="waybar", path=path)


@pytest.fixture
def compiler(tmp_path: Path) -> SassCompiler:
    stylesheet = tmp_path / "waybar-style.scss"
    stylesheet.write_text('@use "waybar-variables" as *;\n', encoding="utf-8")
    return SassCompiler(stylesheet, tmp_path / "waybar" / "style.css", timeout=5.0)


class TestSassCompiler:
    def test_success_replaces_output(self, compiler, emitted, monkeypatch) -> None:
        calls = []

        def _run(args, **kwargs):
            calls.append((args, kwargs))
            Path(args[-1]).write_text("* { color: #fff; }\n", encoding="utf-8")
            return subprocess.CompletedProcess(args, 0, "", "")

        monkeypatch.setattr(recompile.subprocess, "run", _run)

        compiler(emitted)

        args, kwargs = calls[0]
        assert args[:4] == ["sass", "--no-source-map", "--load-path", str(emitted.path.parent)]
        assert kwargs["timeout"] == 5.0
        assert compiler.output.read_text(encoding="utf-8") == "* { color: #fff; }\n"
        assert sorted(p.name for p in compiler.output.parent.iterdir()) == ["style.css"]

    def test_nonzero_exit_keeps_old_output(self, compiler, emitted, monkeypatch) -> None:
        compiler.output.parent.mkdir(parents=True)
        compiler.output.write_text("old\n", encoding="utf-8")

        def _run(args, **kwargs):
            return subprocess.CompletedProcess(args, 65, "", "Error: Undefined variable.\n")

        monkeypatch.setattr(recompile.subprocess, "run", _run)

        with pytest.raises(RecompileError) as excinfo:
            compiler(emitted)

        assert excinfo.value.details["stderr"] == "Error: Undefined variable."
        assert excinfo.value.details["returncode"] == 65
        assert compiler.output.read_text(encoding="utf-8") == "old\n"

    def test_timeout(self, compiler, emitted, monkeypatch) -> None:
        def _run(args, **kwargs):
            raise subprocess.TimeoutExpired(args, kwargs["timeout"])

        monkeypatch.setattr(recompile.subprocess, "run", _run)

        with pytest.raises(RecompileError) as excinfo:
            compiler(emitted)

        assert excinfo.value.code is ErrorCode.RECOMPILE_TIMEOUT

    def test_missing_binary(self, compiler, emitted, monkeypatch) -> None:
        def _run(args, **kwargs):
            raise FileNotFoundError(2, "No such file or directory", "sass")

        monkeypatch.setattr(recompile.subprocess, "run", _run)

        with pytest.raises(RecompileError) as excinfo:
            compiler(emitted)

        assert excinfo.value.details["reason"] == "not found"


class TestKittyReloader:
    def test_spawns_load_config(self, emitted, monkeypatch) -> None:
        spawned = []
        monkeypatch.setattr(recompile.subprocess, "Popen", lambda args, **kwargs: spawned.append(args))

        KittyReloader()(EmittedConfig(target="kitty", path=emitted.path))

        assert spawned == [["kitty", "@", "--no-response", "load-config"]]

    def test_spawn_failure(self, emitted, monkeypatch) -> None:
        def _popen(args, **kwargs):
            raise FileNotFoundError(2, "No such file or directory", "kitty")

        monkeypatch.setattr(recompile.subprocess, "Popen", _popen)

        with pytest.raises(RecompileError):
            KittyReloader()(EmittedConfig(target="kitty", path=emitted.path))
