"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports (``src/`` and the test helpers).
- Build session and project fixtures shared by the resolver and pass tests.
"""

import json
import sys
from pathlib import Path
from typing import Any, Callable, Dict

import pytest

# Add src to path so we can import 'expo_router_babel' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))
# Test helpers (babel_trees)
sys.path.insert(0, str(Path(__file__).parent))

from expo_router_babel.project_config import ProjectConfig  # noqa: E402
from expo_router_babel.session import BuildSession  # noqa: E402
from expo_router_babel.utils.console import reset_console  # noqa: E402


@pytest.fixture
def session() -> BuildSession:
  """A session over an empty environment store."""
  return BuildSession({})


@pytest.fixture
def testing_session() -> BuildSession:
  """A session with memoization disabled."""
  return BuildSession({"_EXPO_INTERNAL_TESTING": "1"})


@pytest.fixture
def make_config() -> Callable[..., ProjectConfig]:
  """Builds a ProjectConfig from the raw ``expo`` object."""

  def _make(**exp: Any) -> ProjectConfig:
    return ProjectConfig.model_validate({"exp": exp})

  return _make


@pytest.fixture
def project(tmp_path: Path) -> Path:
  """An empty project directory."""
  root = tmp_path / "project"
  root.mkdir()
  return root


@pytest.fixture
def write_app_json(project: Path) -> Callable[[Dict[str, Any]], Path]:
  """Writes ``app.json`` with the given ``expo`` object into the project."""

  def _write(exp: Dict[str, Any]) -> Path:
    path = project / "app.json"
    path.write_text(json.dumps({"expo": exp}), encoding="utf-8")
    return path

  return _write


@pytest.fixture
def router_entry(project: Path) -> Path:
  """Installs a fake ``expo-router/entry.js`` into the project."""
  entry = project / "node_modules" / "expo-router" / "entry.js"
  entry.parent.mkdir(parents=True)
  entry.write_text("// entry\n", encoding="utf-8")
  return entry


@pytest.fixture(autouse=True)
def restore_console():
  """Ensures console and logging go back to stdout after every test."""
  yield
  reset_console()
