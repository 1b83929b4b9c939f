"""
Rewriter Context Module.

`RewriterContext` is the per-file state shared by the passes: the build target,
the build session with its caches, the file options the host passed in, and
the metadata dict the host collects after the run.
"""

from typing import Any, Dict, Optional

from expo_router_babel.config import BuildTarget
from expo_router_babel.resolvers import AppRootResolver, ConfigResolver, RouterModeResolver
from expo_router_babel.session import BuildSession


class RewriterContext:
  """
  Shared state container for one file's transformation.
  """

  def __init__(
    self,
    target: BuildTarget,
    session: BuildSession,
    filename: Optional[str] = None,
    root: Optional[str] = None,
    router_modes: Optional[RouterModeResolver] = None,
    app_roots: Optional[AppRootResolver] = None,
  ) -> None:
    """
    Args:
        target: The bundle being produced.
        session: Environment snapshot and resolver caches.
        filename: Absolute path of the file being transformed.
        root: The host's root option, used when the target has no project root.
        router_modes: Import mode resolver. Built on `session` if omitted.
        app_roots: App root resolver. Built on `session` if omitted.
    """
    self.target = target
    self.session = session
    self.filename = filename
    self.root = root

    config_resolver = ConfigResolver(session)
    self.router_modes = router_modes or RouterModeResolver(session, config_resolver)
    self.app_roots = app_roots or AppRootResolver(session, config_resolver)

    # Side channel read by the host after the pipeline finished.
    self.metadata: Dict[str, Any] = {}

  @property
  def platform(self) -> Optional[str]:
    return self.target.platform

  @property
  def project_root(self) -> str:
    """The target's project root, else the file root option, else ``""``."""
    return self.target.project_root or self.root or ""

  @property
  def server_root(self) -> str:
    """Root that client reference ids are relative to."""
    return self.target.server_root or self.project_root

  @property
  def environment(self) -> Optional[str]:
    """The target's environment, else NODE_ENV / BABEL_ENV."""
    return self.target.environment or self.session.node_env

  @property
  def is_test_environment(self) -> bool:
    return self.environment == "test"
