from __future__ import annotations

import dataclasses

import pytest

from scriptgate.core.exceptions import ConfigurationError
from scriptgate.core.scripts import (
    Localization,
    ScriptDescriptor,
    build_descriptor,
    file_version,
    merge_script_args,
)

DEFAULTS = {"handle": "", "src": "/", "file": "/", "deps": [], "inline": "", "priority": 25, "in_footer": True}


def test_merge_applies_defaults_under_args():
    merged = merge_script_args({"handle": "a", "src": "/a.js", "file": "/a.js", "deps": ["b"]}, DEFAULTS)

    assert merged["deps"] == ["b"]
    assert merged["priority"] == 25
    assert merged["in_footer"] is True


def test_merge_treats_none_as_unset():
    merged = merge_script_args({"handle": "a", "src": "/a.js", "file": "/a.js", "priority": None}, DEFAULTS)
    assert merged["priority"] == 25


def test_merge_keeps_unknown_keys():
    merged = merge_script_args({"handle": "a", "src": "/a.js", "file": "/a.js", "extra": 1}, DEFAULTS)
    assert merged["extra"] == 1


@pytest.mark.parametrize("value", [None, "", "   "])
def test_required_fields_checked_before_defaults(value):
    # Defaults carry non-empty src/file, but they never satisfy a missing arg.
    with pytest.raises(ConfigurationError) as excinfo:
        merge_script_args({"handle": "a", "src": value, "file": value}, DEFAULTS)
    assert excinfo.value.context["missing"] == ["src", "file"]
    assert "Missing a required property" in str(excinfo.value)


def test_file_version_is_mtime_in_seconds(script_file):
    assert file_version(str(script_file)) == 1_700_000_000


def test_file_version_missing_file(tmp_path):
    with pytest.raises(ConfigurationError) as excinfo:
        file_version(str(tmp_path / "nope.js"))
    assert excinfo.value.context["file"].endswith("nope.js")


def test_build_descriptor_derives_version(script_file):
    descriptor = build_descriptor(
        {"handle": "a", "src": "/a.js", "file": str(script_file), "deps": ["b", "c"], "priority": 3}
    )
    assert descriptor == ScriptDescriptor(
        handle="a", src="/a.js", file=str(script_file), version=1_700_000_000, deps=("b", "c"), priority=3
    )


def test_build_descriptor_priority_fallback(script_file):
    descriptor = build_descriptor(
        {"handle": "a", "src": "/a.js", "file": str(script_file)}, fallback_priority=42
    )
    assert descriptor.priority == 42
    assert descriptor.in_footer is True


def test_build_descriptor_rejects_string_deps(script_file):
    with pytest.raises(ConfigurationError):
        build_descriptor({"handle": "a", "src": "/a.js", "file": str(script_file), "deps": "jquery"})


def test_descriptor_is_immutable(script_file):
    descriptor = build_descriptor({"handle": "a", "src": "/a.js", "file": str(script_file)})
    with pytest.raises(dataclasses.FrozenInstanceError):
        descriptor.handle = "b"  # type: ignore[misc]


def test_descriptor_rejects_empty_handle():
    with pytest.raises(ConfigurationError):
        ScriptDescriptor(handle="", src="/a.js", file="/a.js", version=0)


def test_localization_from_mapping():
    assert Localization.from_mapping(None) == Localization()
    assert Localization.from_mapping({"name": "x", "object": {"a": 1}}).data == {"a": 1}
    with pytest.raises(ConfigurationError):
        Localization.from_mapping({"name": "x", "data": ["not", "a", "mapping"]})
