"""Task resolution, liveness checks and launching."""

from stillalive.tasks.expander import expand_templates
from stillalive.tasks.launcher import LaunchError, TaskLauncher, build_launch_command
from stillalive.tasks.loader import LocalSettings, load_local_settings
from stillalive.tasks.models import ConfigurationError, RunOptions, Task, TaskOutcome
from stillalive.tasks.process_table import ProcessSnapshot, capture_process_snapshot, find_line
from stillalive.tasks.reconciler import decide, reconcile_tasks, resolve_tasks

__all__ = [
    "ConfigurationError",
    "LaunchError",
    "LocalSettings",
    "ProcessSnapshot",
    "RunOptions",
    "Task",
    "TaskLauncher",
    "TaskOutcome",
    "build_launch_command",
    "capture_process_snapshot",
    "decide",
    "expand_templates",
    "find_line",
    "load_local_settings",
    "reconcile_tasks",
    "resolve_tasks",
]
