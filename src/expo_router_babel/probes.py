"""
Filesystem and module-resolution probes.

The resolvers reach the disk only through these two functions, and accept
replacements for both so tests and hosts with virtual filesystems can stub
them.
"""

import os
from typing import Callable, Iterator

from expo_router_babel.errors import ModuleResolutionError

DirectoryProbe = Callable[[str], bool]
ModuleResolver = Callable[[str, str], str]

RESOLVE_EXTENSIONS = (".js", ".jsx", ".ts", ".tsx", ".mjs", ".cjs", ".json")


def directory_exists(path: str) -> bool:
  """True only if `path` exists and is a directory."""
  return os.path.isdir(path)


def _node_modules_dirs(from_dir: str) -> Iterator[str]:
  current = os.path.abspath(from_dir)
  while True:
    if os.path.basename(current) != "node_modules":
      yield os.path.join(current, "node_modules")
    parent = os.path.dirname(current)
    if parent == current:
      return
    current = parent


def _as_file(candidate: str) -> str:
  if os.path.isfile(candidate):
    return candidate
  for ext in RESOLVE_EXTENSIONS:
    if os.path.isfile(candidate + ext):
      return candidate + ext
  return ""


def resolve_module(from_dir: str, request: str) -> str:
  """
  Resolves a bare module request the way Node's ``require.resolve`` would.

  Each ``node_modules`` directory from `from_dir` up to the filesystem root is
  tried in turn. Inside one, the request is tried as a file (as-is, then with
  each of `RESOLVE_EXTENSIONS`) and then as a directory holding an ``index``
  file.

  Args:
      from_dir: Directory the lookup starts from (the project root).
      request: Bare specifier, e.g. ``expo-router/entry``.

  Returns:
      str: Absolute path of the resolved file.

  Raises:
      ModuleResolutionError: If no candidate exists.
  """
  for modules_dir in _node_modules_dirs(from_dir):
    candidate = os.path.join(modules_dir, *request.split("/"))
    found = _as_file(candidate)
    if not found and os.path.isdir(candidate):
      found = _as_file(os.path.join(candidate, "index"))
    if found:
      return os.path.abspath(found)

  raise ModuleResolutionError(request, from_dir)
