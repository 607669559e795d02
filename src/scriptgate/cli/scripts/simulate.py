"""
scriptgate scripts simulate command.

SUMMARY: Run a script manifest through a simulated host lifecycle

Builds an in-memory host, constructs every script the manifest declares,
fires the remaining lifecycle phases in order and reports what the host saw:
registrations, activations, inline code, localized data and any phase
callback failures.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from scriptgate.cli import OutputFormatter, add_json_flag, add_repo_root_flag, get_repo_root
from scriptgate.core.config import LifecycleConfig, ScriptsConfig
from scriptgate.core.exceptions import ScriptGateError
from scriptgate.core.host import InMemoryHost
from scriptgate.core.scripts import ScriptRegistry, apply_manifest, load_manifest, prepare_host

SUMMARY = "Run a script manifest through a simulated host lifecycle"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument("manifest", help="Path to the script manifest (YAML)")
    parser.add_argument(
        "--admin",
        action="store_true",
        help="Simulate an administrative request regardless of the manifest context",
    )
    add_json_flag(parser)
    add_repo_root_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        repo_root = get_repo_root(args)
        lifecycle = LifecycleConfig(repo_root=repo_root)
        scripts_config = ScriptsConfig(repo_root=repo_root)

        manifest = load_manifest(Path(args.manifest))
        host = InMemoryHost(phases=lifecycle.phase_order)
        prepare_host(manifest, host)
        if args.admin:
            host.administrative = True

        registry = ScriptRegistry(
            host,
            lifecycle=lifecycle,
            scripts_config=scripts_config,
            repo_root=repo_root,
        )
        scripts = apply_manifest(manifest, registry)
        host.run_lifecycle()
    except ScriptGateError as e:
        formatter.error(e, error_code="simulate_error")
        return 1

    snapshot = host.snapshot()
    snapshot["scripts"] = [
        {
            "handle": s.handle,
            "version": s.version,
            "priority": s.priority,
            "registered": s.registered,
            "activated": s.activated,
        }
        for s in scripts
    ]
    ok = not host.failures

    if formatter.json_mode:
        formatter.success(snapshot, "", status="success" if ok else "failed")
    else:
        formatter.text(f"Manifest: {manifest.path}")
        formatter.text(
            "Phases: " + ", ".join(f"{p}={n}" for p, n in snapshot["phases"].items())
        )
        for entry in snapshot["scripts"]:
            state = "active" if entry["activated"] else ("registered" if entry["registered"] else "pending")
            formatter.text(f"  {entry['handle']}: {state} (priority {entry['priority']})")
        for handle, codes in snapshot["inline"].items():
            formatter.text_kv(f"{handle} inline", len(codes))
        for handle, objects in snapshot["localized"].items():
            formatter.text_kv(f"{handle} localized", ", ".join(sorted(objects)))
        for failure in snapshot["failures"]:
            formatter.text(f"  FAILED {failure['phase']} {failure['callback']}: {failure['error']}")

    return 0 if ok else 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
