"""
Exception hierarchy for expo-router-babel.

Every error raised by the resolvers or the passes derives from
``ExpoRouterBabelError`` so a host pipeline can fail the build on a single
exception type. Non-fatal conditions (a missing router directory, an export
shape the enumerator does not recognize) are logged instead of raised.
"""


class ExpoRouterBabelError(Exception):
  """Base class for all transformation failures."""


class ConfigurationError(ExpoRouterBabelError):
  """
  The project configuration requests an unsupported build setup.

  Raised when lazy route loading is selected for a production build.
  """


class ProjectConfigError(ExpoRouterBabelError):
  """The app config file exists but cannot be read or validated."""


class ModuleResolutionError(ExpoRouterBabelError):
  """A bare module request could not be resolved from a directory."""

  def __init__(self, request: str, from_dir: str) -> None:
    """
    Args:
        request: The module specifier (e.g. ``expo-router/entry``).
        from_dir: Directory the lookup started from.
    """
    self.request = request
    self.from_dir = from_dir
    super().__init__(f"Cannot find module '{request}' from '{from_dir}'")


class MalformedTreeError(ExpoRouterBabelError):
  """The input is not a Babel ``File`` or ``Program`` node."""
