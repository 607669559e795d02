import os
import sys
from pathlib import Path

import pytest

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'scriptgate' and tests/ importable for helpers.
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from scriptgate.core.host import InMemoryHost
from helpers.cache_utils import reset_scriptgate_caches
from helpers.scripts import write_script_file

# Project env vars that change config resolution when leaked from a developer shell.
_LEAK_PRONE_ENV_PREFIX = "SCRIPTGATE_"


@pytest.fixture(autouse=True)
def _reset_scriptgate_state(monkeypatch):
    """Fresh caches, logging and environment for each test."""
    for key in list(os.environ):
        if key.startswith(_LEAK_PRONE_ENV_PREFIX):
            monkeypatch.delenv(key, raising=False)
    reset_scriptgate_caches()
    yield
    reset_scriptgate_caches()


@pytest.fixture
def isolated_project_env(tmp_path, monkeypatch):
    """
    Isolated project environment for tests.

    The project root is ``tmp_path`` with an empty ``.scriptgate/config``
    directory for project-level overrides.
    """
    monkeypatch.setenv("SCRIPTGATE_PROJECT_ROOT", str(tmp_path))
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".scriptgate" / "config").mkdir(parents=True, exist_ok=True)
    reset_scriptgate_caches()
    return tmp_path


@pytest.fixture
def host():
    return InMemoryHost()


@pytest.fixture
def admin_host():
    return InMemoryHost(administrative=True)


@pytest.fixture
def script_file(isolated_project_env):
    """A script file on disk with a fixed modification time."""
    return write_script_file(isolated_project_env / "assets" / "widget.js", mtime=1_700_000_000)
