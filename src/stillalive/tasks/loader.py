"""Loading of the JSON-with-comments settings document."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from stillalive.tasks.models import ConfigurationError
from stillalive.tasks.placeholders import substitute_placeholders

logger = logging.getLogger(__name__)

REQUIRED_KEYS = ("template-tasks", "templates", "tasks", "cwd")


@dataclass(frozen=True, slots=True)
class LocalSettings:
    """Declared tasks and their defaults, as read from the settings file."""

    cwd: str
    templates: dict[str, dict[str, Any]] = field(default_factory=dict)
    template_tasks: dict[str, list[dict[str, Any]]] = field(default_factory=dict)
    tasks: tuple[Any, ...] = ()
    task_labels: tuple[str, ...] = ()
    user: Any = None
    parameters: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_document(cls, document: dict[str, Any], *, source_name: str) -> LocalSettings:
        """Validate required keys and build settings from a parsed document."""

        for key in REQUIRED_KEYS:
            if key not in document or document[key] is None:
                raise ConfigurationError(f"Required key '{key}' must exist in {source_name}.")

        # An empty JSON array is accepted where an object is expected.
        templates = document["templates"] or {}
        template_tasks = document["template-tasks"] or {}
        if not isinstance(templates, dict):
            raise ConfigurationError(f"Key 'templates' in {source_name} must be an object.")
        if not isinstance(template_tasks, dict):
            raise ConfigurationError(f"Key 'template-tasks' in {source_name} must be an object.")

        tasks, labels = _task_sequence(document["tasks"], source_name=source_name)
        parameters = document.get("parameters") or {}
        if not isinstance(parameters, dict):
            raise ConfigurationError(f"Key 'parameters' in {source_name} must be an object.")

        return cls(
            cwd=str(document["cwd"]),
            templates=templates,
            template_tasks=template_tasks,
            tasks=tasks,
            task_labels=labels,
            user=document.get("user"),
            parameters=parameters,
        )

    def with_tasks(self, tasks: tuple[Any, ...], task_labels: tuple[str, ...]) -> LocalSettings:
        return replace(self, tasks=tasks, task_labels=task_labels, template_tasks={})

    def as_document(self) -> dict[str, Any]:
        """Render settings back to the document shape for verbose output."""

        return {
            "template-tasks": self.template_tasks,
            "templates": self.templates,
            "tasks": list(self.tasks),
            "cwd": self.cwd,
            "user": self.user if self.user is not None else False,
            "parameters": self.parameters,
        }


def strip_comments(text: str) -> str:
    """Drop lines whose first non-blank characters are ``//``."""

    return "\n".join(line for line in text.splitlines() if not line.lstrip().startswith("//"))


def read_settings_document(path: Path) -> dict[str, Any]:
    """Read and parse the settings file, failing with one uniform diagnostic."""

    message = (
        f"SyntaxError while parsing JSON. Ensure {path.name} exists and contains valid JSON."
    )
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as error:
        logger.debug("Cannot read settings file %s: %s", path, error)
        raise ConfigurationError(message) from error

    try:
        document = json.loads(strip_comments(raw))
    except json.JSONDecodeError as error:
        logger.debug("Invalid JSON in %s: %s", path, error)
        raise ConfigurationError(message) from error

    if not isinstance(document, dict) or not document:
        raise ConfigurationError(message)
    return document


def load_local_settings(path: Path) -> LocalSettings:
    """Load the settings file and apply its global ``parameters`` everywhere."""

    document = read_settings_document(path)
    parameters = document.get("parameters")
    if isinstance(parameters, dict):
        document = substitute_placeholders(document, parameters)
    return LocalSettings.from_document(document, source_name=path.name)


def _task_sequence(
    raw_tasks: Any,
    *,
    source_name: str,
) -> tuple[tuple[Any, ...], tuple[str, ...]]:
    if isinstance(raw_tasks, list):
        return tuple(raw_tasks), tuple(str(index) for index in range(len(raw_tasks)))
    if isinstance(raw_tasks, dict):
        return tuple(raw_tasks.values()), tuple(str(key) for key in raw_tasks)
    raise ConfigurationError(f"Key 'tasks' in {source_name} must be a list or an object.")
