"""Shared test fixtures."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import pytest

from stillalive.tasks import launcher as launcher_module
from stillalive.tasks.process_table import ProcessSnapshot

PS_HEADER = "USER       PID %CPU %MEM    VSZ   RSS TTY      STAT START   TIME COMMAND"


@pytest.fixture()
def write_settings(tmp_path: Path) -> Callable[..., Path]:
    """Write a settings document (dict or raw text) and return its path."""

    def _write(document: dict | str, name: str = "localSettings.json") -> Path:
        path = tmp_path / name
        text = document if isinstance(document, str) else json.dumps(document, indent=2)
        path.write_text(text, "utf-8")
        return path

    return _write


@pytest.fixture()
def process_table(monkeypatch: pytest.MonkeyPatch) -> list[str]:
    """Replace the process listing with the returned list of lines."""

    lines: list[str] = [PS_HEADER]

    def _capture(_command: str) -> ProcessSnapshot:
        return ProcessSnapshot(text="\n".join(lines))

    monkeypatch.setattr("stillalive.controllers.capture_process_snapshot", _capture)
    return lines


@pytest.fixture()
def spawned(monkeypatch: pytest.MonkeyPatch) -> list[tuple[str, str]]:
    """Record spawns instead of starting processes."""

    calls: list[tuple[str, str]] = []

    def _spawn(command: str, cwd: str) -> int:
        calls.append((command, cwd))
        return 4242

    monkeypatch.setattr(launcher_module, "spawn_detached", _spawn)
    monkeypatch.setenv("STILLALIVE_LAUNCH_PAUSE_SECONDS", "0")
    return calls
