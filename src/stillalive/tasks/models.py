"""Domain models for task resolution and reconciliation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

OVERRIDE_KEYS = ("cmd", "cwd", "user", "match", "pool", "disabled")


class ConfigurationError(ValueError):
    """Fatal configuration problem that must abort the whole run."""


class TaskOutcome(str, Enum):
    """Per-task decision recorded during a reconciliation pass."""

    RUNNING = "running"
    DISABLED = "disabled"
    DIFFERENT_POOL = "different_pool"
    ELIGIBLE = "eligible"
    STARTED = "started"
    DRY_RUN = "dry_run"
    LAUNCH_FAILED = "launch_failed"


@dataclass(frozen=True, slots=True)
class BareCommand:
    """Task entry given as a plain command string."""

    cmd: str


@dataclass(frozen=True, slots=True)
class TaskRecord:
    """Task entry given as a mapping; every field may be absent."""

    cmd: object = None
    cwd: object = None
    user: object = None
    match: object = None
    pool: object = None
    disabled: object = None


TaskEntry = BareCommand | TaskRecord
PoolLabel = str | int | float | bool


@dataclass(frozen=True, slots=True)
class Task:
    """Fully resolved unit of work."""

    position: str
    cmd: str
    cwd: str
    user: str | None = None
    match: str = ""
    pool: PoolLabel | None = None
    disabled: bool = False


@dataclass(frozen=True, slots=True)
class RunOptions:
    """Options of one reconciliation pass."""

    verbose: bool = False
    dry: bool = False
    pool: str | None = None


@dataclass(frozen=True, slots=True)
class TaskDecision:
    """Liveness and eligibility verdict for one task."""

    outcome: TaskOutcome
    ps_line: str | None = None


def normalize_pool(value: object) -> PoolLabel | None:
    """Map absent, null, false and empty pool labels to ``None``.

    Other labels are kept as declared; a numeric pool never equals a ``--pool``
    string.
    """

    if value is None or value is False or value == "":
        return None
    if isinstance(value, str | int | float):
        return value
    return str(value)


def normalize_user(value: object) -> str | None:
    if value is None or value is False:
        return None
    text = str(value).strip()
    return text or None
