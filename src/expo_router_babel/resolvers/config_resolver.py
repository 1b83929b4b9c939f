"""
Project configuration lookup with per-session memoization.
"""

from typing import Callable

from expo_router_babel.project_config import ProjectConfig, load_project_config
from expo_router_babel.session import BuildSession

ConfigLoader = Callable[[str], ProjectConfig]


class ConfigResolver:
  """
  Loads the `ProjectConfig` of a project root once per session.

  With the session's testing flag set, the loader runs on every call so each
  test can write its own app config.
  """

  def __init__(self, session: BuildSession, loader: ConfigLoader = load_project_config) -> None:
    """
    Args:
        session: The build session owning the cache.
        loader: Reads the config of a project root from disk.
    """
    self.session = session
    self.loader = loader

  def resolve(self, project_root: str) -> ProjectConfig:
    """
    Args:
        project_root: Project directory.

    Returns:
        ProjectConfig: The memoized (or freshly loaded) configuration.
    """
    cache = self.session.cache.configs
    if not self.session.testing and project_root in cache:
      return cache[project_root]

    config = self.loader(project_root)
    cache[project_root] = config
    return config
