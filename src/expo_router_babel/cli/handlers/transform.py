"""
Transform Command Handler.

Implements ``expo-router-babel transform``. It:
1. Loads configuration (``[tool.expo_router_babel]`` plus CLI overrides).
2. Builds one `TransformEngine` for the whole run, so resolver results are
   shared between files.
3. Transforms a Babel-AST JSON file, or every ``*.json`` file of a directory.
4. Writes the transformed trees and, optionally, the aggregated client
   reference manifest.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from rich.table import Table

from expo_router_babel.config import RuntimeConfig
from expo_router_babel.core.conversion_result import TransformResult
from expo_router_babel.core.engine import TransformEngine
from expo_router_babel.core.manifest import collect_manifest
from expo_router_babel.session import BuildSession
from expo_router_babel.utils.console import console, log_error, log_info, log_success, log_warning, use_stderr_console


def handle_transform(
  input_path: Path,
  output_path: Optional[Path],
  platform: Optional[str],
  environment: Optional[str],
  is_server: Optional[bool],
  project_root: Optional[Path],
  server_root: Optional[Path],
  env: Dict[str, str],
  filename: Optional[str] = None,
  manifest_path: Optional[Path] = None,
) -> int:
  """
  Handles the 'transform' command execution.

  Args:
      input_path: A Babel-AST JSON file or a directory of them.
      output_path: Destination file (or directory, for directory input).
          Single-file results go to stdout when omitted, with logs moved to stderr.
      platform: Target platform override.
      environment: Build environment override.
      is_server: Server (RSC) output override.
      project_root: Project root override.
      server_root: Server root override.
      env: Extra environment-store entries.
      filename: Source file name for single-file input.
      manifest_path: Where to write the aggregated client reference manifest.

  Returns:
      int: Exit code (0 for success, 1 for failure).
  """
  if not input_path.exists():
    log_error(f"Input not found: {input_path}")
    return 1

  try:
    config = RuntimeConfig.load(
      platform=platform,
      environment=environment,
      is_server=is_server,
      project_root=project_root,
      server_root=server_root,
      env=env,
      search_path=input_path if input_path.is_dir() else input_path.parent,
    )
  except ValueError as e:
    log_error(f"Invalid configuration: {e}")
    return 1

  session = BuildSession({**os.environ, **config.env})
  engine = TransformEngine(config.build_target(), session=session)
  batch_results: Dict[str, TransformResult] = {}

  if input_path.is_file():
    if not output_path:
      # stdout carries the JSON tree
      use_stderr_console()
    result = _transform_single_file(input_path, output_path, engine, filename)
    batch_results[input_path.name] = result

  else:
    if not output_path:
      log_error("Directory input requires an --out destination directory.")
      return 1

    json_files = sorted(input_path.rglob("*.json"))
    if not json_files:
      log_warning(f"No .json files found in {input_path}")
      return 0

    log_info(f"Processing {len(json_files)} files from {input_path}...")
    for src_file in json_files:
      rel_path = src_file.relative_to(input_path)
      result = _transform_single_file(src_file, output_path / rel_path, engine)
      batch_results[str(rel_path)] = result

  if manifest_path:
    entries = collect_manifest(r.metadata for r in batch_results.values() if r.success)
    manifest_path.parent.mkdir(parents=True, exist_ok=True)
    with open(manifest_path, "wt", encoding="utf-8") as f:
      json.dump([entry.to_metadata() for entry in entries], f, indent=2)
    log_info(f"Manifest with {len(entries)} client references saved to [path]{manifest_path}[/path]")

  _print_batch_summary(batch_results)
  return 0 if all(r.success for r in batch_results.values()) else 1


def source_filename(json_path: Path, tree: Dict[str, Any], project_root: Optional[str]) -> str:
  """
  Works out the source file a serialized tree was parsed from.

  ``File.loc.filename`` (set by Babel's ``sourceFileName`` option) wins,
  resolved against the project root when relative. Otherwise the JSON path
  with its ``.json`` suffix stripped is used (``Foo.js.json`` -> ``Foo.js``).

  Args:
      json_path: Path of the JSON document.
      tree: The loaded tree.
      project_root: Project root for relative ``loc.filename`` values.

  Returns:
      str: Absolute source file path.
  """
  loc = tree.get("loc") if isinstance(tree, dict) else None
  recorded = loc.get("filename") if isinstance(loc, dict) else None
  if recorded:
    if os.path.isabs(recorded) or not project_root:
      return os.path.abspath(recorded)
    return os.path.join(project_root, recorded)
  return str(json_path.resolve().with_suffix(""))


def _transform_single_file(
  input_path: Path,
  output_path: Optional[Path],
  engine: TransformEngine,
  filename: Optional[str] = None,
) -> TransformResult:
  """
  Transforms one JSON tree file.

  Args:
      input_path: Babel-AST JSON file.
      output_path: Destination, or None to print to stdout.
      engine: The shared engine.
      filename: Explicit source file name.

  Returns:
      TransformResult: Result object containing status and tree.
  """
  try:
    with open(input_path, "rt", encoding="utf-8") as f:
      tree = json.load(f)
  except (OSError, json.JSONDecodeError) as e:
    log_error(f"Failed to read {input_path}: {e}")
    return TransformResult(success=False, errors=[str(e)])

  source = filename or source_filename(input_path, tree, engine.target.project_root)
  result = engine.run(tree, filename=source)
  if not result.success:
    log_error(f"Failed to transform {input_path}: {'; '.join(result.errors)}")
    return result

  if output_path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "wt", encoding="utf-8") as f:
      json.dump(result.tree, f, indent=2)
    log_success(f"Transformed: [path]{input_path}[/path] -> [path]{output_path}[/path]")
  else:
    print(json.dumps(result.tree, indent=2))

  return result


def _print_batch_summary(results: Dict[str, TransformResult]) -> None:
  """
  Renders a summary table of failed files.

  Args:
      results: Dictionary mapping filenames to results.
  """
  total = len(results)
  failures = {name: r for name, r in results.items() if not r.success}

  if not failures:
    log_success(f"Batch Complete: {total}/{total} files transformed.")
    return

  table = Table(title="Transformation Report")
  table.add_column("File", style="cyan")
  table.add_column("Issues", style="red")
  for name, res in failures.items():
    table.add_row(name, "; ".join(res.errors) or "Unknown Error")

  console.print(table)
  console.print(f"\n[bold]Summary:[/bold] {total - len(failures)} Passed, {len(failures)} Failed.")
