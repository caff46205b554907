"""Task resolution and the per-task keep-alive decision."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any

from stillalive.tasks.launcher import TaskLauncher
from stillalive.tasks.loader import LocalSettings
from stillalive.tasks.models import (
    BareCommand,
    ConfigurationError,
    RunOptions,
    Task,
    TaskDecision,
    TaskEntry,
    TaskOutcome,
    TaskRecord,
    normalize_pool,
    normalize_user,
)
from stillalive.tasks.process_table import ProcessSnapshot


def parse_task_entry(raw: Any, position: str) -> TaskEntry:
    if isinstance(raw, str):
        return BareCommand(cmd=raw)
    if isinstance(raw, dict):
        return TaskRecord(
            cmd=raw.get("cmd"),
            cwd=raw.get("cwd"),
            user=raw.get("user"),
            match=raw.get("match"),
            pool=raw.get("pool"),
            disabled=raw.get("disabled"),
        )
    raise ConfigurationError(f"tasks[{position}] must be a command string or an object.")


def resolve_task(entry: TaskEntry, position: str, settings: LocalSettings) -> Task:
    """Fill defaults for one entry; a missing ``cmd`` is fatal."""

    if isinstance(entry, BareCommand):
        entry = TaskRecord(cmd=entry.cmd)

    if not isinstance(entry.cmd, str) or not entry.cmd.strip():
        raise ConfigurationError(f'Missing "cmd" property in tasks[{position}].')

    cwd = entry.cwd if entry.cwd is not None else settings.cwd
    user = entry.user if entry.user is not None else settings.user
    match = entry.match if isinstance(entry.match, str) and entry.match else entry.cmd

    return Task(
        position=position,
        cmd=entry.cmd,
        cwd=str(cwd),
        user=normalize_user(user),
        match=match,
        pool=normalize_pool(entry.pool),
        disabled=entry.disabled is True,
    )


def resolve_tasks(settings: LocalSettings) -> list[Task]:
    """Resolve every declared entry before any task is looked at."""

    return [
        resolve_task(parse_task_entry(raw, position), position, settings)
        for raw, position in zip(settings.tasks, settings.task_labels, strict=True)
    ]


def decide(task: Task, snapshot: ProcessSnapshot, options: RunOptions) -> TaskDecision:
    ps_line = snapshot.find(task.match)
    if ps_line is not None:
        return TaskDecision(outcome=TaskOutcome.RUNNING, ps_line=ps_line)
    if task.disabled:
        return TaskDecision(outcome=TaskOutcome.DISABLED)
    if task.pool != options.pool:
        return TaskDecision(outcome=TaskOutcome.DIFFERENT_POOL)
    return TaskDecision(outcome=TaskOutcome.ELIGIBLE)


def reconcile_tasks(
    tasks: Iterable[Task],
    snapshot: ProcessSnapshot,
    options: RunOptions,
    launcher: TaskLauncher,
) -> Iterator[str]:
    """Check every task in order and start the ones that should be running.

    Yields human-readable status lines as tasks are processed.
    """

    for task in tasks:
        yield ""
        yield f"Task: {task.match}"
        decision = decide(task, snapshot, options)
        if decision.outcome is TaskOutcome.RUNNING:
            yield "\t=> RUNNING"
            yield f"\tps: {decision.ps_line}"
            continue

        yield "\t=> NOT RUNNING"
        if decision.outcome is TaskOutcome.DISABLED:
            yield "\t=> DISABLED"
            continue
        if decision.outcome is TaskOutcome.DIFFERENT_POOL:
            yield "\t=> DIFFERENT POOL"
            continue

        yield from launcher.launch(task).lines
