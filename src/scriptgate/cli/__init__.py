"""
scriptgate CLI package.

Commands are auto-discovered from domain subfolders (config/, scripts/).

Framework utilities for building CLI commands:
- _output: Output formatting (JSON/text modes)
- _args: Common argument registration helpers
- _utils: Shared CLI utilities
"""
from ._output import OutputFormatter, format_json, print_error
from ._args import add_json_flag, add_repo_root_flag, add_standard_flags
from ._utils import get_repo_root

__all__ = [
    "OutputFormatter",
    "format_json",
    "print_error",
    "add_json_flag",
    "add_repo_root_flag",
    "add_standard_flags",
    "get_repo_root",
]
