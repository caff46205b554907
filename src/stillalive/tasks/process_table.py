"""Point-in-time process listing and substring lookups against it."""

from __future__ import annotations

import logging
import shlex
import subprocess
from dataclasses import dataclass

from stillalive.tasks.models import ConfigurationError

logger = logging.getLogger(__name__)


def find_line(snapshot: str, pattern: str) -> str | None:
    """Return the first line containing ``pattern`` as a plain substring."""

    for line in snapshot.splitlines():
        if pattern in line:
            return line
    return None


@dataclass(frozen=True, slots=True)
class ProcessSnapshot:
    """Process listing captured once per run and never refreshed."""

    text: str

    def find(self, pattern: str) -> str | None:
        return find_line(self.text, pattern)


def capture_process_snapshot(command: str) -> ProcessSnapshot:
    """Run the process listing command once and keep its output."""

    argv = shlex.split(command)
    if not argv:
        raise ConfigurationError("Process listing command is empty.")
    try:
        completed = subprocess.run(  # noqa: S603
            argv,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as error:
        raise ConfigurationError(f"Cannot run process listing '{command}': {error}") from error

    if completed.returncode != 0:
        raise ConfigurationError(
            f"Process listing '{command}' failed with exit code {completed.returncode}: "
            f"{completed.stderr.strip()}",
        )
    logger.debug("Captured %d process lines with %r", len(completed.stdout.splitlines()), command)
    return ProcessSnapshot(text=completed.stdout)
