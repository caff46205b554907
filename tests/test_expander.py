from __future__ import annotations

import allure
import pytest

from stillalive.tasks.expander import expand_template_instance, expand_templates
from stillalive.tasks.loader import LocalSettings
from stillalive.tasks.models import ConfigurationError

pytestmark = [
    allure.epic("Settings"),
    allure.feature("Template Expansion"),
]


def _settings(**overrides) -> LocalSettings:
    document = {"template-tasks": {}, "templates": {}, "tasks": [], "cwd": "/srv"}
    document.update(overrides)
    return LocalSettings.from_document(document, source_name="localSettings.json")


def test_expansion_appends_instances_after_literal_tasks_in_order() -> None:
    settings = _settings(
        tasks=["literal.sh"],
        templates={
            "bot": {"cmd": "bot.sh --wiki=${wiki}"},
            "web": {"cmd": "web.sh --port=${port}"},
        },
        **{
            "template-tasks": {
                "bot": [{"wiki": "en"}, {"wiki": "nl"}, {"wiki": "de"}],
                "web": [{"port": 8080}],
            },
        },
    )

    expanded = expand_templates(settings)

    assert expanded.tasks == (
        "literal.sh",
        {"cmd": "bot.sh --wiki=en"},
        {"cmd": "bot.sh --wiki=nl"},
        {"cmd": "bot.sh --wiki=de"},
        {"cmd": "web.sh --port=8080"},
    )
    assert expanded.task_labels == ("0", "1", "2", "3", "4")
    assert expanded.template_tasks == {}
    # The input settings still hold their template tasks.
    assert list(settings.template_tasks) == ["bot", "web"]


def test_instance_overrides_take_precedence() -> None:
    template = {"cmd": "bot.sh ${wiki}", "pool": "a", "user": "bots", "extra": "kept"}
    instance = {"wiki": "en", "pool": "b", "disabled": True, "cwd": None}

    expanded = expand_template_instance(template, instance)

    assert expanded == {
        "cmd": "bot.sh en",
        "pool": "b",
        "user": "bots",
        "extra": "kept",
        "disabled": True,
    }


def test_expanded_tasks_are_independent_of_template_and_each_other() -> None:
    template = {"cmd": "bot.sh", "args": ["--x"]}
    settings = _settings(templates={"bot": template}, **{"template-tasks": {"bot": [{}, {}]}})

    expanded = expand_templates(settings)
    first, second = expanded.tasks
    first["args"].append("--y")
    first["cmd"] = "changed"

    assert second == {"cmd": "bot.sh", "args": ["--x"]}
    assert template == {"cmd": "bot.sh", "args": ["--x"]}


def test_template_with_no_instances_produces_no_tasks() -> None:
    settings = _settings(templates={"bot": {"cmd": "x"}}, **{"template-tasks": {"bot": []}})
    assert expand_templates(settings).tasks == ()


def test_unknown_template_is_fatal() -> None:
    settings = _settings(**{"template-tasks": {"missing": [{"x": 1}]}})
    with pytest.raises(ConfigurationError, match="Template 'missing'"):
        expand_templates(settings)


def test_non_object_instance_is_fatal() -> None:
    settings = _settings(templates={"bot": {"cmd": "x"}}, **{"template-tasks": {"bot": ["en"]}})
    with pytest.raises(ConfigurationError, match=r"template-tasks\['bot'\]\[0\]"):
        expand_templates(settings)
