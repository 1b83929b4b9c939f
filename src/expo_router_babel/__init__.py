"""
expo-router-babel Package.

Build-time syntax tree passes for a file-system router with a split
client/server component model. Trees are Babel-AST JSON documents.

Usage
-----

.. code-block:: python

    import json
    import expo_router_babel as erb

    tree = json.load(open("Foo.js.json"))
    result = erb.transform(
      tree,
      platform="web",
      is_server=True,
      filename="/app/components/Foo.js",
      project_root="/app",
    )
    print(result.tree)

For many files of one build, create a `TransformEngine` once so resolver
results are shared through its `BuildSession`.
"""

from typing import Optional

from expo_router_babel.config import BuildTarget, RuntimeConfig
from expo_router_babel.core.conversion_result import TransformResult
from expo_router_babel.core.engine import TransformEngine
from expo_router_babel.core.manifest import ExportManifestEntry
from expo_router_babel.errors import ConfigurationError, ExpoRouterBabelError
from expo_router_babel.session import BuildSession
from expo_router_babel.tree.nodes import Node

__version__ = "0.1.0"


def transform(
  tree: Node,
  platform: Optional[str] = None,
  is_server: bool = False,
  filename: Optional[str] = None,
  project_root: Optional[str] = None,
  server_root: Optional[str] = None,
  environment: Optional[str] = None,
  session: Optional[BuildSession] = None,
) -> TransformResult:
  """
  Runs both passes over a single tree.

  Args:
      tree: Babel ``File`` or ``Program`` node. Not mutated.
      platform: ``ios``, ``android`` or ``web``.
      is_server: True for the server (RSC) graph.
      filename: Path of the file, required for ``"use client"`` modules.
      project_root: Project directory.
      server_root: Root for client reference ids. Defaults to `project_root`.
      environment: Build environment. Defaults to NODE_ENV / BABEL_ENV.
      session: Build session to reuse. A fresh one if None.

  Returns:
      TransformResult: The rewritten tree and file metadata.

  Raises:
      ExpoRouterBabelError: If the transformation fails (e.g. `ConfigurationError`).
  """
  target = BuildTarget(
    platform=platform,
    is_server=is_server,
    project_root=project_root,
    server_root=server_root,
    environment=environment,
  )
  engine = TransformEngine(target, session=session)
  return engine.apply(tree, filename=filename)


__all__ = [
  "BuildSession",
  "BuildTarget",
  "ConfigurationError",
  "ExpoRouterBabelError",
  "ExportManifestEntry",
  "RuntimeConfig",
  "TransformEngine",
  "TransformResult",
  "transform",
  "__version__",
]
