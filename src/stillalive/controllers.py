"""Controller for the keep-alive CLI command."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from stillalive.config import Settings
from stillalive.tasks.expander import expand_templates
from stillalive.tasks.launcher import TaskLauncher
from stillalive.tasks.loader import load_local_settings
from stillalive.tasks.models import RunOptions
from stillalive.tasks.process_table import capture_process_snapshot
from stillalive.tasks.reconciler import reconcile_tasks, resolve_tasks

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SuperviseCommand:
    """CLI inputs for one reconciliation pass."""

    config_path: Path | None
    dry: bool
    verbose: bool
    pool: str | None


class SupervisorCliController:
    """Coordinates one pass: load, expand, snapshot, reconcile."""

    def run(self, command: SuperviseCommand) -> Iterator[str]:
        settings = Settings.from_env(config_path=command.config_path)
        settings.validate()
        options = RunOptions(verbose=command.verbose, dry=command.dry, pool=command.pool or None)

        local_settings = expand_templates(load_local_settings(settings.config_path))
        logger.debug(
            "Loaded %d tasks from %s",
            len(local_settings.tasks),
            settings.config_path,
        )

        if options.verbose:
            yield "-- Expanded settings:"
            yield ""
            yield from json.dumps(
                local_settings.as_document(),
                indent=2,
                ensure_ascii=False,
            ).splitlines()
            yield ""
            yield "-- Check the tasks:"

        tasks = resolve_tasks(local_settings)
        snapshot = capture_process_snapshot(settings.ps_command)
        launcher = TaskLauncher(dry=options.dry, pause_seconds=settings.launch_pause_seconds)
        yield from reconcile_tasks(tasks, snapshot, options, launcher)
