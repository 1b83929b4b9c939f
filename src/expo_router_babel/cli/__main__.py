"""
Main Entry Point for the expo-router-babel CLI.

This module handles argument parsing and dispatches to the command handlers
defined in `expo_router_babel.cli.commands`.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from expo_router_babel import __version__
from expo_router_babel.cli import commands
from expo_router_babel.config import parse_cli_key_values
from expo_router_babel.enums import Platform
from expo_router_babel.utils.console import set_verbosity


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  parser = argparse.ArgumentParser(description="expo-router-babel: build-time router and client boundary passes")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
  parser.add_argument("-v", "--verbose", action="store_true", help="Show resolver debug output")

  subparsers = parser.add_subparsers(dest="command", required=True)
  platform_choices = [p.value for p in Platform]

  # --- Command: TRANSFORM ---
  cmd_tf = subparsers.add_parser("transform", help="Run the passes over a Babel AST JSON file or directory")
  cmd_tf.add_argument("path", type=Path, help="Input JSON file or directory")
  cmd_tf.add_argument("--out", type=Path, default=None, help="Output file (or directory for directory input)")
  cmd_tf.add_argument("--platform", choices=platform_choices, default=None, help="Target platform (default: from toml)")
  cmd_tf.add_argument("--environment", default=None, help="Build environment (default: NODE_ENV / BABEL_ENV)")
  cmd_tf.add_argument(
    "--server",
    action="store_true",
    default=None,
    help="Produce server (RSC) output: replace 'use client' modules with references",
  )
  cmd_tf.add_argument("--project-root", type=Path, default=None, help="Project root directory")
  cmd_tf.add_argument("--server-root", type=Path, default=None, help="Root for client reference ids")
  cmd_tf.add_argument("--filename", default=None, help="Source file name of a single input tree")
  cmd_tf.add_argument("--manifest", type=Path, default=None, help="Write aggregated client references to this file")
  cmd_tf.add_argument("--env", nargs="*", help="Environment entries in KEY=VALUE format")

  # --- Command: RESOLVE ---
  cmd_res = subparsers.add_parser("resolve", help="Show import modes and app roots for a project")
  cmd_res.add_argument("project_root", type=Path, help="Project root directory")
  cmd_res.add_argument("--platform", nargs="+", choices=platform_choices, default=None, help="Platforms to resolve")
  cmd_res.add_argument("--environment", default=None, help="Build environment (default: NODE_ENV / BABEL_ENV)")
  cmd_res.add_argument("--env", nargs="*", help="Environment entries in KEY=VALUE format")

  args = parser.parse_args(argv)
  set_verbosity(args.verbose)
  env = parse_cli_key_values(args.env)

  if args.command == "transform":
    return commands.handle_transform(
      args.path,
      args.out,
      args.platform,
      args.environment,
      args.server,
      args.project_root,
      args.server_root,
      env,
      filename=args.filename,
      manifest_path=args.manifest,
    )

  elif args.command == "resolve":
    return commands.handle_resolve(args.project_root, args.platform, args.environment, env)

  return 0


if __name__ == "__main__":
  sys.exit(main())
