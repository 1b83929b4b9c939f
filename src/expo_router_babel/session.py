"""
Build Session state.

A `BuildSession` carries everything that used to live in process-wide globals:
a snapshot of the environment store and the memoization caches of the
resolvers. One session is created per build and threaded through every
resolver call, so concurrent or repeated builds never share stale values.

Environment-store keys
----------------------
- ``EXPO_PROJECT_ROOT``: read side only, inlined with the project root.
- ``EXPO_PUBLIC_USE_STATIC``: ``"true"`` or ``"1"`` enables static web output.
- ``EXPO_ROUTER_ABS_APP_ROOT``: absolute routes directory override.
- ``EXPO_ROUTER_APP_ROOT``: read side of the relative routes directory.
- ``EXPO_ROUTER_APP_ROOT_2``: relative routes directory override. Versioned so
  values written by older hosts into ``EXPO_ROUTER_APP_ROOT`` are ignored.
- ``EXPO_ROUTER_IMPORT_MODE_<PLATFORM>``: per-platform import mode override.
- ``NODE_ENV`` / ``BABEL_ENV``: active build environment.
- ``_EXPO_INTERNAL_TESTING``: disables memoization.
"""

import os
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Tuple

from expo_router_babel.project_config import ProjectConfig

ENV_PROJECT_ROOT = "EXPO_PROJECT_ROOT"
ENV_USE_STATIC = "EXPO_PUBLIC_USE_STATIC"
ENV_ABS_APP_ROOT = "EXPO_ROUTER_ABS_APP_ROOT"
ENV_APP_ROOT = "EXPO_ROUTER_APP_ROOT"
ENV_APP_ROOT_OVERRIDE = "EXPO_ROUTER_APP_ROOT_2"
ENV_IMPORT_MODE_PREFIX = "EXPO_ROUTER_IMPORT_MODE_"
ENV_TESTING = "_EXPO_INTERNAL_TESTING"


def import_mode_key(platform: str) -> str:
  """``EXPO_ROUTER_IMPORT_MODE_<PLATFORM>`` for `platform`."""
  return ENV_IMPORT_MODE_PREFIX + platform.upper()


@dataclass
class SessionCache:
  """
  Memoized resolver results, keyed by project root. Import modes are keyed
  by ``(project_root, platform, environment)``.
  """

  configs: Dict[str, ProjectConfig] = field(default_factory=dict)
  import_modes: Dict[Tuple[str, str, Optional[str]], str] = field(default_factory=dict)
  absolute_app_roots: Dict[str, str] = field(default_factory=dict)
  relative_app_roots: Dict[str, str] = field(default_factory=dict)


class BuildSession:
  """
  Environment snapshot and caches for one build.

  Args:
      environ: Environment store to read. Defaults to a copy of ``os.environ``
          taken at construction time.
      cache: Pre-populated cache, mostly useful in tests.
  """

  def __init__(self, environ: Optional[Mapping[str, str]] = None, cache: Optional[SessionCache] = None) -> None:
    self.environ: Dict[str, str] = dict(os.environ if environ is None else environ)
    self.cache = cache if cache is not None else SessionCache()

  def get_env(self, key: str) -> Optional[str]:
    """
    Reads an environment entry, treating the empty string as unset.

    Args:
        key: Variable name.

    Returns:
        Optional[str]: The value, or None.
    """
    value = self.environ.get(key)
    return value if value else None

  @property
  def testing(self) -> bool:
    """True when ``_EXPO_INTERNAL_TESTING`` disables memoization."""
    return self.get_env(ENV_TESTING) is not None

  @property
  def node_env(self) -> Optional[str]:
    """The build environment from ``NODE_ENV``, falling back to ``BABEL_ENV``."""
    return self.get_env("NODE_ENV") or self.get_env("BABEL_ENV")

  def export_environ(self, project_root: str, environment: Optional[str] = None) -> Dict[str, str]:
    """
    Returns the values resolved for `project_root` under their environment names.

    A host can merge the result into the environment of worker processes so
    they skip re-resolution.

    Args:
        project_root: The project the values were resolved for.
        environment: Build environment of the import modes to export.
            Defaults to NODE_ENV / BABEL_ENV.

    Returns:
        Dict[str, str]: Import modes per platform and the app roots.
    """
    env = environment or self.node_env
    exported: Dict[str, str] = {}
    for (root, platform, mode_env), mode in self.cache.import_modes.items():
      if root == project_root and mode_env == env:
        exported[import_mode_key(platform)] = mode
    if project_root in self.cache.absolute_app_roots:
      exported[ENV_ABS_APP_ROOT] = self.cache.absolute_app_roots[project_root]
    if project_root in self.cache.relative_app_roots:
      exported[ENV_APP_ROOT_OVERRIDE] = self.cache.relative_app_roots[project_root]
    return exported
