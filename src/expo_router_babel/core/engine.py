"""
Orchestration Engine for tree transformations.

`TransformEngine` is what a host pipeline drives once per file. It owns the
resolvers for the build (so their caches live as long as the session) and
runs the default pipeline:

1.  **EnvInliningPass**: inline router build settings.
2.  **ClientBoundaryPass**: stub or record ``"use client"`` modules.

The two passes do not depend on each other's output; the order is fixed only
so results are reproducible.
"""

from typing import List, Optional

from expo_router_babel.config import BuildTarget
from expo_router_babel.core.conversion_result import TransformResult
from expo_router_babel.core.rewriter import (
  ClientBoundaryPass,
  EnvInliningPass,
  RewriterContext,
  RewriterPass,
  RewriterPipeline,
)
from expo_router_babel.errors import ExpoRouterBabelError
from expo_router_babel.probes import DirectoryProbe, ModuleResolver, directory_exists, resolve_module
from expo_router_babel.resolvers import AppRootResolver, ConfigResolver, RouterModeResolver
from expo_router_babel.resolvers.config_resolver import ConfigLoader
from expo_router_babel.project_config import load_project_config
from expo_router_babel.session import BuildSession
from expo_router_babel.tree.nodes import Node, unwrap_program
from expo_router_babel.utils.console import get_logger

logger = get_logger("engine")


def default_passes() -> List[RewriterPass]:
  return [EnvInliningPass(), ClientBoundaryPass()]


class TransformEngine:
  """
  Runs the pass pipeline over individual files of one build.
  """

  def __init__(
    self,
    target: BuildTarget,
    session: Optional[BuildSession] = None,
    passes: Optional[List[RewriterPass]] = None,
    config_loader: ConfigLoader = load_project_config,
    directory_probe: DirectoryProbe = directory_exists,
    module_resolver: ModuleResolver = resolve_module,
  ) -> None:
    """
    Args:
        target: The bundle being produced.
        session: Build session. A fresh one (reading ``os.environ``) if None.
        passes: Passes to run instead of the default pipeline.
        config_loader: Reads the app config of a project root.
        directory_probe: Checks for existing directories.
        module_resolver: Resolves the router entry module.
    """
    self.target = target
    self.session = session or BuildSession()
    self.pipeline = RewriterPipeline(passes if passes is not None else default_passes())

    config_resolver = ConfigResolver(self.session, loader=config_loader)
    self.router_modes = RouterModeResolver(self.session, config_resolver)
    self.app_roots = AppRootResolver(
      self.session,
      config_resolver,
      directory_probe=directory_probe,
      module_resolver=module_resolver,
    )

  def make_context(self, filename: Optional[str] = None, root: Optional[str] = None) -> RewriterContext:
    return RewriterContext(
      self.target,
      self.session,
      filename=filename,
      root=root,
      router_modes=self.router_modes,
      app_roots=self.app_roots,
    )

  def apply(self, tree: Node, filename: Optional[str] = None, root: Optional[str] = None) -> TransformResult:
    """
    Transforms one file, letting fatal errors propagate.

    Args:
        tree: Babel ``File`` or ``Program`` node. Not mutated.
        filename: Path of the file.
        root: The host's root option.

    Returns:
        TransformResult: The new tree and the file metadata.

    Raises:
        ExpoRouterBabelError: On unsupported configuration or malformed input.
    """
    unwrap_program(tree)
    context = self.make_context(filename=filename, root=root)
    new_tree = self.pipeline.run(tree, context)
    return TransformResult(tree=new_tree, metadata=context.metadata)

  def run(self, tree: Node, filename: Optional[str] = None, root: Optional[str] = None) -> TransformResult:
    """
    Transforms one file, reporting fatal errors in the result.

    Args:
        tree: Babel ``File`` or ``Program`` node. Not mutated.
        filename: Path of the file.
        root: The host's root option.

    Returns:
        TransformResult: ``success=False`` and no tree if a pass failed.
    """
    try:
      return self.apply(tree, filename=filename, root=root)
    except ExpoRouterBabelError as e:
      logger.debug("Transformation of %s failed: %s", filename or "<tree>", e)
      return TransformResult(success=False, errors=[str(e)])
