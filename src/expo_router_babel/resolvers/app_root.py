"""
Routes directory ("app root") resolution.

The router needs the routes directory twice: as an absolute path, and relative
to the directory of its own entry module (``expo-router/entry``), which is how
the bundler's ``require.context`` call inside the entry refers to it.
"""

import os
from pathlib import PurePosixPath, PureWindowsPath
from typing import Optional

from expo_router_babel.probes import DirectoryProbe, ModuleResolver, directory_exists, resolve_module
from expo_router_babel.resolvers.config_resolver import ConfigResolver
from expo_router_babel.session import ENV_ABS_APP_ROOT, ENV_APP_ROOT_OVERRIDE, BuildSession
from expo_router_babel.utils.console import get_logger

logger = get_logger("router")

ROUTER_ENTRY_REQUEST = "expo-router/entry"

# Most specific first; the last entry is also the fallback.
ROUTER_DIRECTORY_CANDIDATES = ("./src/app", "./app")


def is_absolute_path(path: str) -> bool:
  """
  True for POSIX absolute paths and for Windows drive or UNC paths.

  Both forms are accepted on every host so an app config written on one OS
  resolves the same on another.
  """
  return PurePosixPath(path).is_absolute() or PureWindowsPath(path).is_absolute()


class AppRootResolver:
  """
  Resolves and memoizes the absolute and relative routes directory per project.
  """

  def __init__(
    self,
    session: BuildSession,
    config_resolver: Optional[ConfigResolver] = None,
    directory_probe: DirectoryProbe = directory_exists,
    module_resolver: ModuleResolver = resolve_module,
  ) -> None:
    """
    Args:
        session: The build session owning the cache.
        config_resolver: Source of the ``unstable_src`` router option.
        directory_probe: Checks that a path is an existing directory.
        module_resolver: Resolves ``(from_dir, request)`` to a file path.
    """
    self.session = session
    self.config_resolver = config_resolver or ConfigResolver(session)
    self.directory_probe = directory_probe
    self.module_resolver = module_resolver

  def router_directory(self, project_root: str) -> str:
    """
    Returns the first existing candidate routes directory, relative to the project.

    When none exists the least specific candidate is returned; the directory
    may still be created before the bundle is served.
    """
    for candidate in ROUTER_DIRECTORY_CANDIDATES:
      if self.directory_probe(os.path.join(project_root, candidate)):
        return candidate

    fallback = ROUTER_DIRECTORY_CANDIDATES[-1]
    logger.warning("No routes directory found in %s, defaulting to %s", project_root, fallback)
    return fallback

  def resolve_absolute(self, project_root: str) -> str:
    """
    Args:
        project_root: Project directory.

    Returns:
        str: Absolute routes directory.
    """
    override = self.session.get_env(ENV_ABS_APP_ROOT)
    if override:
      return override

    cache = self.session.cache.absolute_app_roots
    if not self.session.testing and project_root in cache:
      return cache[project_root]

    config = self.config_resolver.resolve(project_root)
    custom_src = config.exp.router.unstable_src or self.router_directory(project_root)
    if is_absolute_path(custom_src):
      app_folder = custom_src
    else:
      app_folder = os.path.normpath(os.path.join(project_root, custom_src))

    logger.debug("Absolute router app root: %s", app_folder)
    cache[project_root] = app_folder
    return app_folder

  def resolve_relative(self, project_root: str) -> str:
    """
    Args:
        project_root: Project directory.

    Returns:
        str: Routes directory relative to the router entry module's directory.

    Raises:
        ModuleResolutionError: If ``expo-router/entry`` is not installed.
    """
    override = self.session.get_env(ENV_APP_ROOT_OVERRIDE)
    if override:
      return override

    cache = self.session.cache.relative_app_roots
    if not self.session.testing and project_root in cache:
      return cache[project_root]

    router_entry = self.module_resolver(project_root, ROUTER_ENTRY_REQUEST)
    app_folder = self.resolve_absolute(project_root)
    app_root = os.path.relpath(app_folder, os.path.dirname(router_entry))

    logger.debug("Router entry %s, app root %s relative to it: %s", router_entry, app_folder, app_root)
    cache[project_root] = app_root
    return app_root
