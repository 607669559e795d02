from __future__ import annotations

from scriptgate.core.host import InMemoryHost
from scriptgate.core.lifecycle import LifecycleBinder, bind_or_run_now

from helpers.scripts import lifecycle_config


def test_runs_action_immediately_when_phase_elapsed():
    ran: list[str] = []
    deferred: list[tuple] = []

    result = bind_or_run_now(
        "init",
        lambda: ran.append("now"),
        has_elapsed=lambda phase: True,
        on_phase=lambda *a: deferred.append(a),
    )

    assert result is True
    assert ran == ["now"]
    assert deferred == []


def test_defers_action_when_phase_pending():
    ran: list[str] = []
    deferred: list[tuple] = []

    def action() -> None:
        ran.append("later")

    result = bind_or_run_now(
        "init",
        action,
        has_elapsed=lambda phase: False,
        on_phase=lambda *a: deferred.append(a),
        priority=7,
    )

    assert result is False
    assert ran == []
    assert deferred == [("init", action, 7)]


def test_binder_uses_configured_phase_names():
    host = InMemoryHost(phases=("boot", "setup", "render"))
    binder = LifecycleBinder(
        host,
        lifecycle_config(bootstrap_phase="boot", registration_phase="setup", render_phase="render"),
    )
    seen: list[str] = []

    binder.bind(binder.lifecycle.registration_phase, lambda: seen.append("setup"))
    assert host.actions.has("setup")

    host.run_lifecycle()
    assert seen == ["setup"]
    assert binder.lifecycle.phase_order == ("boot", "setup", "render")


def test_deferred_action_runs_exactly_once_per_fire():
    host = InMemoryHost()
    binder = LifecycleBinder(host, lifecycle_config())
    seen: list[str] = []

    binder.bind("init", lambda: seen.append("init"))
    host.fire("init")
    # Binding after the phase fired runs synchronously instead of re-registering.
    binder.bind("init", lambda: seen.append("late"))

    assert seen == ["init", "late"]
    assert len(host.actions.get("init")) == 1
