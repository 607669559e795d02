"""Shared utilities for scriptgate."""
from .io import ensure_directory, iter_yaml_files, read_yaml
from .merge import deep_merge, merge_arrays, parse_args
from .paths import get_project_config_dir, resolve_project_root

__all__ = [
    "deep_merge",
    "merge_arrays",
    "parse_args",
    "ensure_directory",
    "iter_yaml_files",
    "read_yaml",
    "get_project_config_dir",
    "resolve_project_root",
]
