"""
scriptgate config show command.

SUMMARY: Show current configuration

Displays the merged configuration from bundled defaults, project overrides
(``.scriptgate/config/*.yaml``) and ``SCRIPTGATE_*`` environment variables.
"""

from __future__ import annotations

import argparse
import sys
from typing import Any

import yaml

from scriptgate.cli import OutputFormatter, add_json_flag, add_repo_root_flag, get_repo_root
from scriptgate.core.config import ConfigManager
from scriptgate.core.exceptions import ScriptGateError

SUMMARY = "Show current configuration"


def _nest_key(key: str, value: Any) -> Any:
    """Nest a dot-notation key into a YAML-friendly mapping."""
    out = value
    for part in reversed([p for p in str(key).split(".") if p]):
        out = {part: out}
    return out


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument(
        "key",
        nargs="?",
        help="Specific configuration key to show (e.g., 'lifecycle.render_phase')",
    )
    parser.add_argument(
        "--format",
        choices=["json", "yaml", "table"],
        default="table",
        help="Output format (default: table)",
    )
    add_json_flag(parser)
    add_repo_root_flag(parser)


def _format_value(value: Any, indent: int = 0) -> str:
    """Format a value for table display."""
    prefix = "  " * indent
    if isinstance(value, dict):
        lines = []
        for k, v in value.items():
            formatted = _format_value(v, indent + 1)
            if "\n" in formatted or isinstance(v, dict):
                lines.append(f"{prefix}{k}:")
                lines.append(formatted)
            else:
                lines.append(f"{prefix}{k}: {formatted}")
        return "\n".join(lines)
    if isinstance(value, list):
        if not value:
            return "[]"
        if all(isinstance(v, (str, int, float, bool)) for v in value):
            return f"[{', '.join(str(v) for v in value)}]"
        return "\n".join(f"{prefix}- {_format_value(v, indent + 1)}" for v in value)
    return str(value)


def _dump_yaml(data: Any) -> str:
    return yaml.safe_dump(data, default_flow_style=False, sort_keys=True, allow_unicode=True).rstrip()


def main(args: argparse.Namespace) -> int:
    """Show configuration - delegates to ConfigManager."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        manager = ConfigManager(get_repo_root(args))
        output_format = "json" if args.json else args.format

        if args.key:
            value = manager.get(args.key)
            if value is None:
                formatter.error(KeyError(args.key), f"Key not found: {args.key}", error_code="key_not_found")
                return 1
            if output_format == "json":
                formatter.json_output({args.key: value})
            elif output_format == "yaml":
                formatter.text(_dump_yaml(_nest_key(args.key, value)))
            else:
                formatter.text(f"{args.key}:" if isinstance(value, (dict, list)) else f"{args.key}: {value}")
                if isinstance(value, (dict, list)):
                    formatter.text(_format_value(value, indent=1))
            return 0

        config_data = manager.load_config()
        if output_format == "json":
            formatter.json_output(config_data)
        elif output_format == "yaml":
            formatter.text(_dump_yaml(config_data))
        else:
            formatter.text("scriptgate configuration")
            formatter.text("=" * 60)
            for section in sorted(config_data):
                formatter.text("")
                formatter.text(f"[{section}]")
                value = config_data[section]
                if isinstance(value, dict):
                    formatter.text(_format_value(value, indent=1))
                else:
                    formatter.text(f"  {_format_value(value)}")
        return 0

    except ScriptGateError as e:
        formatter.error(e, error_code="config_show_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
