"""Launch command construction and detached process spawning."""

from __future__ import annotations

import logging
import shlex
import subprocess
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

from stillalive.tasks.models import Task, TaskOutcome

logger = logging.getLogger(__name__)

BACKGROUND_SUFFIX = " &"
DETACH_PREFIX = "nohup "


class LaunchError(RuntimeError):
    """Spawning a task failed."""


class Spawner(Protocol):
    """Starts a shell command in the given working directory without waiting."""

    def __call__(self, command: str, cwd: str) -> int:
        """Spawn ``command`` and return the child pid."""


def build_launch_command(cmd: str, user: str | None = None) -> str:
    """Make a command run in the background, survive hangups and switch user."""

    command = cmd.strip()
    if not command.endswith(BACKGROUND_SUFFIX):
        command += BACKGROUND_SUFFIX
    if not command.startswith(DETACH_PREFIX):
        command = DETACH_PREFIX + command
    if user:
        command = f"sudo -u {shlex.quote(user)} {command}"
    return command


def spawn_detached(command: str, cwd: str) -> int:
    try:
        process = subprocess.Popen(  # noqa: S602
            command,
            shell=True,
            cwd=cwd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
    except OSError as error:
        raise LaunchError(f"cannot start in {cwd}: {error}") from error
    return process.pid


@dataclass(slots=True)
class LaunchReport:
    """Outcome of handing one eligible task to the launcher."""

    outcome: TaskOutcome
    command: str
    lines: list[str] = field(default_factory=list)


class TaskLauncher:
    """Starts eligible tasks, or only reports them in dry mode."""

    def __init__(
        self,
        *,
        dry: bool,
        pause_seconds: float = 1.0,
        spawner: Spawner | None = None,
        sleep: Callable[[float], None] | None = None,
    ) -> None:
        self.dry = dry
        self.pause_seconds = pause_seconds
        self._spawner = spawner if spawner is not None else spawn_detached
        self._sleep = sleep if sleep is not None else time.sleep

    def launch(self, task: Task) -> LaunchReport:
        command = build_launch_command(task.cmd, task.user)
        if self.dry:
            return LaunchReport(
                outcome=TaskOutcome.DRY_RUN,
                command=command,
                lines=["\t=> DRY-RUN", f"\tcmd: {command}"],
            )

        lines = ["\t=> START...", f"\tcwd: {task.cwd}", f"\tcmd: {command}"]
        try:
            pid = self._spawner(command, task.cwd)
        except LaunchError as error:
            logger.warning("Task tasks[%s] failed to launch: %s", task.position, error)
            lines.append(f"\t=> LAUNCH FAILED: {error}")
            return LaunchReport(outcome=TaskOutcome.LAUNCH_FAILED, command=command, lines=lines)

        logger.debug("Spawned tasks[%s] shell pid=%s", task.position, pid)
        if self.pause_seconds > 0:
            self._sleep(self.pause_seconds)
        return LaunchReport(outcome=TaskOutcome.STARTED, command=command, lines=lines)
