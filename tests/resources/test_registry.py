from __future__ import annotations

import pytest

from scriptgate.core.exceptions import ConfigurationError
from scriptgate.core.scripts import Script, ScriptRegistry

from helpers.scripts import lifecycle_config, scripts_config, widget_args


class WidgetScript(Script):
    FILE = ""

    def __init__(self, host, args=None, **kwargs):
        super().__init__(host, {**widget_args(WidgetScript.FILE), **(args or {})}, **kwargs)


@pytest.fixture
def registry(host):
    return ScriptRegistry(host, lifecycle=lifecycle_config(), scripts_config=scripts_config())


@pytest.fixture(autouse=True)
def _widget_file(script_file, monkeypatch):
    monkeypatch.setattr(WidgetScript, "FILE", str(script_file))


def test_instance_is_constructed_once(registry, host):
    first = registry.instance(WidgetScript)
    second = registry.instance(WidgetScript, {"priority": 99})

    assert first is second
    assert first.priority == 25
    assert len(host.actions.get("loaded")) == 1


def test_get_builds_script_subclasses_on_demand(registry):
    script = registry.get(WidgetScript)
    assert isinstance(script, WidgetScript)
    assert registry.is_constructed(WidgetScript)
    assert registry.instances() == (script,)


def test_registered_factory_is_lazy(registry, script_file):
    built: list[str] = []

    def factory():
        built.append("x")
        return registry.build(widget_args(script_file, handle="lazy-js"))

    registry.register("lazy", factory)
    assert "lazy" in registry
    assert built == []

    script = registry.get("lazy")
    assert registry.get("lazy") is script
    assert built == ["x"]
    assert script.handle == "lazy-js"


def test_conflicting_factory_rejected(registry):
    registry.register("a", lambda: None)
    with pytest.raises(ValueError):
        registry.register("a", lambda: None)


def test_same_factory_can_be_registered_twice(registry):
    def factory():
        return None

    registry.register("a", factory)
    registry.register("a", factory)


def test_non_callable_factory_rejected(registry):
    with pytest.raises(TypeError):
        registry.register("a", "not callable")  # type: ignore[arg-type]


def test_unknown_key_raises_key_error(registry):
    with pytest.raises(KeyError):
        registry.get("missing")


def test_failed_construction_is_not_cached(registry, script_file):
    attempts: list[int] = []

    def factory():
        attempts.append(1)
        if len(attempts) == 1:
            return registry.build({"handle": "broken", "src": "/b.js", "file": ""})
        return registry.build(widget_args(script_file))

    registry.register("w", factory)
    with pytest.raises(ConfigurationError):
        registry.get("w")
    assert not registry.is_constructed("w")

    assert registry.get("w").handle == "widget-js"
    assert len(attempts) == 2


def test_self_referencing_construction_detected(registry):
    registry.register("loop", lambda: registry.get("loop"))
    with pytest.raises(ConfigurationError):
        registry.get("loop")


def test_clear_forgets_instances(registry):
    registry.instance(WidgetScript)
    registry.clear()
    assert not registry.is_constructed(WidgetScript)
    assert registry.instances() == ()
