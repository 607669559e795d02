from __future__ import annotations

from types import SimpleNamespace

import pytest

from scriptgate.core.exceptions import EvaluationError
from scriptgate.core.host import InMemoryHost
from scriptgate.core.lifecycle import ConditionalEvaluator

from helpers.scripts import scripts_config


def _subject(handle="widget-js", override=None, conditional=lambda: True):
    return SimpleNamespace(handle=handle, conditional_override=override, conditional=conditional)


def test_default_conditional_true_outside_admin(host):
    assert ConditionalEvaluator(host).default_conditional("widget-js") is True


def test_default_conditional_false_in_admin(admin_host):
    assert ConditionalEvaluator(admin_host).default_conditional("widget-js") is False


def test_resource_filter_receives_base_value(host):
    received: list = []
    host.add_filter("scriptgate_widget-js_conditional", lambda value: received.append(value) or False)

    assert ConditionalEvaluator(host).default_conditional("widget-js") is False
    assert received == [True]


def test_global_filter_wraps_resource_filter(host):
    host.add_filter("scriptgate_widget-js_conditional", lambda value: False)
    seen: list = []

    def global_filter(value, handle):
        seen.append((value, handle))
        return handle == "widget-js"

    host.add_filter("scriptgate__conditional", global_filter)

    assert ConditionalEvaluator(host).default_conditional("widget-js") is True
    assert seen == [(False, "widget-js")]


def test_filter_results_are_coerced_to_bool(host):
    host.add_filter("scriptgate__conditional", lambda value, handle: "yes")
    assert ConditionalEvaluator(host).default_conditional("widget-js") is True


def test_filter_names_come_from_config(host):
    evaluator = ConditionalEvaluator.from_config(
        host,
        scripts_config(filters={"resource_conditional": "load_{handle}", "global_conditional": "load_any"}),
    )
    host.add_filter("load_widget-js", lambda value: False)

    assert evaluator.resource_filter_name("widget-js") == "load_widget-js"
    assert evaluator.default_conditional("widget-js") is False


def test_callable_override_wins_over_conditional(host):
    evaluator = ConditionalEvaluator(host)
    subject = _subject(override=lambda: False, conditional=lambda: True)
    assert evaluator.should_activate(subject) is False


def test_non_callable_override_activates(host):
    evaluator = ConditionalEvaluator(host)
    # Set but not invocable: activates regardless of its value.
    assert evaluator.should_activate(_subject(override=False, conditional=lambda: False)) is True
    assert evaluator.should_activate(_subject(override="always", conditional=lambda: False)) is True


def test_unset_override_uses_conditional_routine(host):
    evaluator = ConditionalEvaluator(host)
    assert evaluator.should_activate(_subject(conditional=lambda: 0)) is False
    assert evaluator.should_activate(_subject(conditional=lambda: 1)) is True


def test_failing_predicate_raises_evaluation_error(host):
    def boom():
        raise RuntimeError("db down")

    with pytest.raises(EvaluationError) as excinfo:
        ConditionalEvaluator(host).should_activate(_subject(override=boom))

    err = excinfo.value
    assert isinstance(err.__cause__, RuntimeError)
    assert err.context == {"handle": "widget-js", "source": "override"}
    assert "db down" in str(err)


def test_failing_filter_raises_evaluation_error():
    host = InMemoryHost()

    def bad_filter(value):
        raise ValueError("nope")

    host.add_filter("scriptgate_widget-js_conditional", bad_filter)
    evaluator = ConditionalEvaluator(host)
    subject = _subject(conditional=lambda: evaluator.default_conditional("widget-js"))

    with pytest.raises(EvaluationError) as excinfo:
        evaluator.should_activate(subject)
    assert excinfo.value.context["source"] == "conditional"
