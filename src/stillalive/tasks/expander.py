"""Expansion of template tasks into concrete task entries."""

from __future__ import annotations

from typing import Any

from stillalive.tasks.loader import LocalSettings
from stillalive.tasks.models import OVERRIDE_KEYS, ConfigurationError
from stillalive.tasks.placeholders import substitute_placeholders


def expand_template_instance(
    template: dict[str, Any],
    instance: dict[str, Any],
) -> dict[str, Any]:
    """Build one concrete task from a template and one instance of it.

    The instance fields serve both as placeholder parameters for the template
    copy and as overrides for the recognized task keys.
    """

    expanded = substitute_placeholders(template, instance)
    for key in OVERRIDE_KEYS:
        if instance.get(key) is not None:
            expanded[key] = instance[key]
    return expanded


def expand_templates(settings: LocalSettings) -> LocalSettings:
    """Append every template instance as a task after the literal tasks.

    Returns new settings with ``template_tasks`` consumed.
    """

    tasks: list[Any] = list(settings.tasks)
    labels: list[str] = list(settings.task_labels)

    for template_id, instances in settings.template_tasks.items():
        template = settings.templates.get(template_id)
        if not isinstance(template, dict):
            raise ConfigurationError(
                f"Template '{template_id}' is used in template-tasks but not defined in templates.",
            )
        if not isinstance(instances, list):
            raise ConfigurationError(f"template-tasks['{template_id}'] must be a list.")

        for index, instance in enumerate(instances):
            if not isinstance(instance, dict):
                raise ConfigurationError(
                    f"template-tasks['{template_id}'][{index}] must be an object.",
                )
            tasks.append(expand_template_instance(template, instance))
            labels.append(str(len(labels)))

    return settings.with_tasks(tuple(tasks), tuple(labels))
