from __future__ import annotations

import json
import logging

import yaml

from scriptgate.core.audit import audit_event, configure_stdlib_logging
from scriptgate.core.audit.jsonl import append_jsonl

from helpers.scripts import make_script


def _enable_audit(root, path=".scriptgate/logs/audit.jsonl"):
    cfg = root / ".scriptgate" / "config" / "logging.yaml"
    cfg.write_text(yaml.safe_dump({"logging": {"audit": {"enabled": True, "path": path}}}), encoding="utf-8")
    return root / path


def _events(path):
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]


def test_audit_disabled_by_default(isolated_project_env):
    audit_event("script.registered", handle="a")
    assert not (isolated_project_env / ".scriptgate" / "logs").exists()


def test_audit_event_appends_jsonl(isolated_project_env):
    log_path = _enable_audit(isolated_project_env)

    audit_event("script.registered", repo_root=isolated_project_env, handle="a")
    audit_event("script.activated", repo_root=isolated_project_env, handle="a", inline=True)

    events = _events(log_path)
    assert [e["event"] for e in events] == ["script.registered", "script.activated"]
    assert events[1]["inline"] is True
    assert {"ts", "pid", "handle"} <= set(events[0])


def test_script_lifecycle_emits_audit_events(host, script_file, isolated_project_env):
    log_path = _enable_audit(isolated_project_env)

    script = make_script(host, script_file, localize={"name": "cfg", "data": {"a": 1}})
    host.run_lifecycle()
    script.set_conditional(lambda: False)
    script.activate()

    events = _events(log_path)
    assert [e["event"] for e in events] == ["script.registered", "script.activated", "script.skipped"]
    assert events[1]["localized"] == "cfg"
    assert all(e["handle"] == "widget-js" for e in events)


def test_append_jsonl_fails_open(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")
    # Parent "directory" is a regular file; the write must not raise.
    append_jsonl(path=blocker / "audit.jsonl", payload={"event": "x"})


def test_configure_stdlib_logging_writes_to_file(tmp_path):
    log_path = tmp_path / "logs" / "scriptgate.log"
    configure_stdlib_logging(log_path=log_path, level="DEBUG")
    configure_stdlib_logging(log_path=log_path, level="DEBUG")

    logging.getLogger("scriptgate.test").debug("hello from test")
    for handler in logging.getLogger().handlers:
        handler.flush()

    content = log_path.read_text(encoding="utf-8")
    assert content.count("hello from test") == 1
    assert "DEBUG scriptgate.test" in content


def test_declined_render_emits_skipped_event(admin_host, script_file, isolated_project_env):
    log_path = _enable_audit(isolated_project_env)

    make_script(admin_host, script_file)
    admin_host.run_lifecycle()

    events = _events(log_path)
    assert [e["event"] for e in events] == ["script.registered", "script.skipped"]
    assert events[1]["handle"] == "widget-js"
