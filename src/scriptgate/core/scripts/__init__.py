"""Script descriptors, the Script base class, the per-type registry and manifests."""
from .assets import AssetLocator
from .descriptor import (
    REQUIRED_FIELDS,
    Localization,
    ScriptDescriptor,
    build_descriptor,
    file_version,
    merge_script_args,
)
from .manifest import Manifest, ManifestScript, apply_manifest, load_manifest, prepare_host
from .registry import ScriptRegistry
from .script import Script

__all__ = [
    "AssetLocator",
    "REQUIRED_FIELDS",
    "Localization",
    "ScriptDescriptor",
    "build_descriptor",
    "file_version",
    "merge_script_args",
    "Manifest",
    "ManifestScript",
    "apply_manifest",
    "load_manifest",
    "prepare_host",
    "ScriptRegistry",
    "Script",
]
