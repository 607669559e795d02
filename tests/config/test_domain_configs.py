from __future__ import annotations

from pathlib import Path

import yaml

from scriptgate.core.config import LifecycleConfig, LoggingConfig, ScriptsConfig


def test_lifecycle_config_from_files(isolated_project_env):
    cfg = LifecycleConfig(repo_root=isolated_project_env)
    assert cfg.phase_order == ("loaded", "init", "enqueue_scripts")
    assert cfg.bootstrap_priority == 10
    assert cfg.registration_priority == 10


def test_lifecycle_config_from_explicit_mapping():
    cfg = LifecycleConfig(config={"lifecycle": {"render_phase": "footer", "bootstrap_priority": 1}})
    assert cfg.render_phase == "footer"
    assert cfg.bootstrap_phase == "loaded"
    assert cfg.bootstrap_priority == 1


def test_scripts_config_defaults_are_normalised():
    cfg = ScriptsConfig(config={"scripts": {"defaults": {"deps": None, "priority": "7"}}})
    assert cfg.defaults == {"deps": [], "inline": "", "priority": 7, "in_footer": True}
    assert cfg.resource_conditional_filter == "scriptgate_{handle}_conditional"
    assert cfg.global_conditional_filter == "scriptgate__conditional"
    assert cfg.assets == {"base_dir": ".", "base_url": "/", "debug": False}


def test_scripts_config_from_project_file(isolated_project_env):
    path = isolated_project_env / ".scriptgate" / "config" / "scripts.yaml"
    path.write_text(
        yaml.safe_dump({"scripts": {"filters": {"global_conditional": "site_scripts"}}}),
        encoding="utf-8",
    )
    cfg = ScriptsConfig(repo_root=isolated_project_env)
    assert cfg.global_conditional_filter == "site_scripts"
    assert cfg.defaults["priority"] == 25


def test_logging_config_resolves_relative_paths(isolated_project_env):
    cfg = LoggingConfig(
        repo_root=isolated_project_env,
        config={"logging": {"level": "debug", "file": "logs/app.log", "audit": {"enabled": True}}},
    )
    assert cfg.level == "DEBUG"
    assert cfg.log_file == isolated_project_env / "logs" / "app.log"
    assert cfg.audit_enabled is True
    assert cfg.audit_path == isolated_project_env / ".scriptgate" / "logs" / "audit.jsonl"


def test_logging_config_absolute_paths_kept(tmp_path):
    target = tmp_path / "abs.log"
    cfg = LoggingConfig(repo_root=Path("/unused"), config={"logging": {"file": str(target)}})
    assert cfg.log_file == target
    assert cfg.audit_enabled is False
