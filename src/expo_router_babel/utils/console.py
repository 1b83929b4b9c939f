"""
Logging and Console Utilities.

All output of expo-router-babel goes through the standard `logging` library,
rendered by a `rich` handler. The console behind that handler sits in a small
proxy so a host (or a test) can redirect output into a buffer with
`set_console` without re-importing anything.

Library modules log through `get_logger`, which namespaces loggers under
``expo_router_babel``. Resolver decisions are emitted at DEBUG level and only
show up when the CLI runs with ``--verbose``.

Attributes:
    console (_ConsoleProxy): Stable reference to the active Rich Console.
"""

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

LOGGER_NAMESPACE = "expo_router_babel"

# Between INFO (20) and WARNING (30)
SUCCESS_LEVEL_NUM = 25
logging.addLevelName(SUCCESS_LEVEL_NUM, "SUCCESS")

_THEME = Theme(
  {
    "logging.level.success": "green",
    "info": "dim cyan",
    "warning": "yellow",
    "error": "bold red",
    "success": "green",
    "path": "bold blue",
    "mode": "bold magenta",
  }
)


class _ConsoleProxy:
  """
  Forwards printing to a swappable `rich.console.Console` backend.

  Swapping the backend also re-binds the package logger's `RichHandler`, so
  `logging` records follow the console to its new destination.

  Attributes:
      _backend (Console): The active Rich Console instance.
  """

  def __init__(self) -> None:
    self._backend: Console = Console(theme=_THEME)
    self._configure_logging()

  def set_backend(self, new_console: Console) -> None:
    """
    Injects a new Console backend and rebinds logging.

    Args:
        new_console (Console): The Rich Console to write to.
    """
    self._backend = new_console
    self._configure_logging()

  def reset(self, stderr: bool = False) -> None:
    """
    Restores a fresh console.

    Args:
        stderr (bool): Write to standard error instead of standard output.
    """
    self._backend = Console(theme=_THEME, stderr=stderr)
    self._configure_logging()

  @property
  def backend(self) -> Console:
    """The currently active Console."""
    return self._backend

  def _configure_logging(self) -> None:
    """Replaces the root logger's RichHandler with one bound to the backend."""
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
      if isinstance(handler, RichHandler):
        root_logger.removeHandler(handler)

    rich_handler = RichHandler(
      console=self._backend,
      show_time=False,
      show_path=False,
      markup=True,
      rich_tracebacks=True,
    )
    root_logger.setLevel(logging.INFO)
    root_logger.addHandler(rich_handler)

  def print(self, *args: Any, **kwargs: Any) -> None:
    """Forwards `print` calls to the backend."""
    self._backend.print(*args, **kwargs)

  def export_text(self, **kwargs: Any) -> str:
    """
    Forwards `export_text`, used to read back a recording console.

    Returns:
        str: The captured text output.
    """
    return self._backend.export_text(**kwargs)

  def __getattr__(self, name: str) -> Any:
    return getattr(self._backend, name)


console = _ConsoleProxy()


def set_console(new_console: Console) -> None:
  """
  Redirects console output and log records to `new_console`.

  Args:
      new_console (Console): The configured Rich console to use globally.
  """
  console.set_backend(new_console)


def reset_console() -> None:
  """Resets logging and console output to standard output."""
  console.reset()


def use_stderr_console() -> None:
  """Sends logging and console output to standard error, keeping stdout for data."""
  console.reset(stderr=True)


def get_console() -> Console:
  """
  Returns:
      Console: The active Rich Console.
  """
  return console.backend


def get_logger(name: str) -> logging.Logger:
  """
  Returns a logger nested under the package namespace.

  Args:
      name (str): Dotted suffix, e.g. ``"router"``.

  Returns:
      logging.Logger: ``logging.getLogger("expo_router_babel.<name>")``.
  """
  return logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")


def set_verbosity(verbose: bool) -> None:
  """
  Switches the package logger between INFO and DEBUG.

  Args:
      verbose (bool): True to show resolver debug output.
  """
  logging.getLogger(LOGGER_NAMESPACE).setLevel(logging.DEBUG if verbose else logging.INFO)


def log_info(msg: str) -> None:
  """
  Logs an informational message.

  Args:
      msg (str): The message content. May include rich markup.
  """
  logging.getLogger(LOGGER_NAMESPACE).info(f"ℹ️  {msg}", extra={"markup": True})


def log_success(msg: str) -> None:
  """
  Logs a message at the custom SUCCESS level.

  Args:
      msg (str): The message content.
  """
  logging.getLogger(LOGGER_NAMESPACE).log(SUCCESS_LEVEL_NUM, f"✅ {msg}", extra={"markup": True})


def log_warning(msg: str) -> None:
  """
  Logs a warning.

  Args:
      msg (str): The message content.
  """
  logging.getLogger(LOGGER_NAMESPACE).warning(f"⚠️  {msg}", extra={"markup": True})


def log_error(msg: str) -> None:
  """
  Logs an error.

  Args:
      msg (str): The message content.
  """
  logging.getLogger(LOGGER_NAMESPACE).error(f"❌ {msg}", extra={"markup": True})
