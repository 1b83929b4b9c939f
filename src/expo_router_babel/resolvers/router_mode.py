"""
Route import mode resolution.

Decides per platform whether route modules are bundled eagerly (``sync``) or
split and fetched on first navigation (``lazy``). The decision comes from the
``asyncRoutes`` router option, which may be:

- absent or false: always ``sync``;
- ``true``: ``lazy`` in every environment;
- an environment name (e.g. ``"development"``): ``lazy`` only in that environment;
- a mapping of platform to one of the above, with a ``default`` entry.

Production builds cannot use lazy routes because bundle splitting is not
available there, so that combination is rejected with `ConfigurationError`.
Static web output needs routes resolved synchronously and always gets ``sync``.
"""

from typing import Dict, Optional, Union

from expo_router_babel.enums import ImportMode, Platform, WebOutput
from expo_router_babel.errors import ConfigurationError
from expo_router_babel.project_config import ProjectConfig
from expo_router_babel.resolvers.config_resolver import ConfigResolver
from expo_router_babel.session import BuildSession, import_mode_key
from expo_router_babel.utils.console import get_logger

logger = get_logger("router")

AsyncRoutesSetting = Union[bool, str, None]

PRODUCTION_LAZY_ERROR = (
  "Async routes are not supported in production yet. Set the `expo-router` Config Plugin "
  "prop `asyncRoutes` to `development`, `false`, or `undefined`."
)


def async_routes_setting(raw: Union[bool, str, Dict[str, AsyncRoutesSetting], None], platform: str) -> AsyncRoutesSetting:
  """
  Picks the ``asyncRoutes`` value that applies to `platform`.

  Args:
      raw: The configured value.
      platform: Platform key.

  Returns:
      The platform entry of a mapping (its ``default`` when the platform has
      none), the value itself otherwise, or None when unset.
  """
  if not raw:
    return None
  if isinstance(raw, dict):
    value = raw.get(platform)
    if value is None:
      value = raw.get("default")
    return value
  return raw


class RouterModeResolver:
  """
  Resolves and memoizes the import mode per (project root, platform).
  """

  def __init__(self, session: BuildSession, config_resolver: Optional[ConfigResolver] = None) -> None:
    self.session = session
    self.config_resolver = config_resolver or ConfigResolver(session)

  def resolve_import_mode(self, project_root: str, platform: str, environment: Optional[str] = None) -> str:
    """
    Args:
        project_root: Project directory.
        platform: Platform key (``ios``, ``android``, ``web``).
        environment: Build environment. Defaults to the session's NODE_ENV / BABEL_ENV.

    Returns:
        str: ``"sync"`` or ``"lazy"``. An override variable is returned verbatim.

    Raises:
        ConfigurationError: If lazy routes are selected for a production build.
    """
    override = self.session.get_env(import_mode_key(platform))
    if override:
      return override

    env = environment or self.session.node_env
    cache = self.session.cache.import_modes
    cache_key = (project_root, platform, env)
    if not self.session.testing and cache_key in cache:
      return cache[cache_key]

    config = self.config_resolver.resolve(project_root)
    mode = self._decide(config, platform, env)

    logger.debug("Router import mode for %s (%s): %s", platform, env, mode.value)
    cache[cache_key] = mode.value
    return mode.value

  @staticmethod
  def _decide(config: ProjectConfig, platform: str, env: Optional[str]) -> ImportMode:
    if platform == Platform.WEB.value and config.exp.web.output == WebOutput.STATIC.value:
      return ImportMode.SYNC

    setting = async_routes_setting(config.exp.router.async_routes, platform)
    enabled = setting is True or (env is not None and setting == env)
    mode = ImportMode.LAZY if enabled else ImportMode.SYNC

    if env == "production" and mode is ImportMode.LAZY:
      raise ConfigurationError(PRODUCTION_LAZY_ERROR)

    return mode
