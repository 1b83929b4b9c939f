"""
Resolve Command Handler.

Implements ``expo-router-babel resolve``: shows the values the environment
pass would inline for a project, one row per platform.
"""

import os
from pathlib import Path
from typing import Dict, List, Optional

from rich.table import Table

from expo_router_babel.enums import Platform
from expo_router_babel.errors import ExpoRouterBabelError
from expo_router_babel.resolvers import AppRootResolver, ConfigResolver, RouterModeResolver
from expo_router_babel.session import BuildSession
from expo_router_babel.utils.console import console, log_error


def handle_resolve(
  project_root: Path,
  platforms: Optional[List[str]],
  environment: Optional[str],
  env: Dict[str, str],
) -> int:
  """
  Handles the 'resolve' command execution.

  Args:
      project_root: Project directory.
      platforms: Platforms to resolve (default: all).
      environment: Build environment override.
      env: Extra environment-store entries.

  Returns:
      int: Exit code (0 for success, 1 if any value failed to resolve).
  """
  if not project_root.is_dir():
    log_error(f"Project root not found: {project_root}")
    return 1

  root = str(project_root.resolve())
  session = BuildSession({**os.environ, **env})
  config_resolver = ConfigResolver(session)
  router_modes = RouterModeResolver(session, config_resolver)
  app_roots = AppRootResolver(session, config_resolver)
  exit_code = 0

  table = Table(title=f"Router settings for {root}")
  table.add_column("Platform", style="cyan")
  table.add_column("Import mode", style="mode")

  for platform in platforms or [p.value for p in Platform]:
    try:
      mode = router_modes.resolve_import_mode(root, platform, environment)
    except ExpoRouterBabelError as e:
      mode = f"[error]{e}[/error]"
      exit_code = 1
    table.add_row(platform, mode)

  console.print(table)

  try:
    console.print(f"[bold]Absolute app root:[/bold] [path]{app_roots.resolve_absolute(root)}[/path]")
    console.print(f"[bold]Relative app root:[/bold] [path]{app_roots.resolve_relative(root)}[/path]")
  except ExpoRouterBabelError as e:
    log_error(str(e))
    exit_code = 1

  return exit_code
