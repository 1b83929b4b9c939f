"""
Environment Inlining Pass.

Replaces reads of router build settings from ``process.env`` with literals so
the bundled router never consults the environment at runtime:

- ``process.env.EXPO_PROJECT_ROOT`` -> project root string.
- ``process.env.EXPO_PUBLIC_USE_STATIC`` -> ``true`` only on web with static
  rendering enabled in the build environment.
- ``process.env.EXPO_ROUTER_ABS_APP_ROOT`` -> absolute routes directory.
- ``process.env.EXPO_ROUTER_APP_ROOT`` -> routes directory relative to the
  router entry.
- ``process.env.EXPO_ROUTER_IMPORT_MODE_<PLATFORM>`` -> ``"sync"`` / ``"lazy"``
  for the platform being bundled.

Both app roots are left alone in the ``test`` environment, where the testing
utilities provide them. Write targets (``process.env.X = ...``) are never
rewritten.
"""

from typing import Optional

from expo_router_babel.core.rewriter.context import RewriterContext
from expo_router_babel.core.rewriter.interface import RewriterPass
from expo_router_babel.enums import Platform
from expo_router_babel.session import (
  ENV_ABS_APP_ROOT,
  ENV_APP_ROOT,
  ENV_PROJECT_ROOT,
  ENV_USE_STATIC,
  import_mode_key,
)
from expo_router_babel.tree import NodeTransformer
from expo_router_babel.tree.nodes import (
  Node,
  boolean_literal,
  is_identifier,
  is_member_expression,
  member_property_name,
  string_literal,
)
from expo_router_babel.utils.console import get_logger

logger = get_logger("router")

STATIC_ENABLED_VALUES = ("true", "1")


class EnvInliningPass(RewriterPass):
  """
  Pass inlining router build settings read from ``process.env``.
  """

  name = "expo-router"

  def transform(self, tree: Node, context: RewriterContext) -> Node:
    """
    Args:
        tree: The file's syntax tree.
        context: Shared per-file state.

    Returns:
        The tree with matching reads replaced by literals.
    """
    return EnvInliningTransformer(context).transform(tree)


class EnvInliningTransformer(NodeTransformer):
  """
  Transformer over ``process.env.<NAME>`` member expressions.
  """

  def __init__(self, context: RewriterContext) -> None:
    super().__init__()
    self.context = context

  @staticmethod
  def env_variable_name(node: Node) -> Optional[str]:
    """
    Returns ``NAME`` if `node` is ``process.env.NAME`` (or ``process.env["NAME"]``).
    """
    env_bag = node.get("object")
    if not is_member_expression(env_bag):
      return None
    if not is_identifier(env_bag.get("object"), "process") or member_property_name(env_bag) != "env":
      return None
    return member_property_name(node)

  def _is_write_target(self) -> bool:
    parent = self.parent
    if parent is None:
      return False
    parent_node, field = parent
    parent_type = parent_node["type"]
    if parent_type == "AssignmentExpression":
      return field == "left"
    if parent_type == "UpdateExpression":
      return True
    if parent_type == "UnaryExpression":
      return parent_node.get("operator") == "delete"
    return False

  def leave_MemberExpression(self, original_node: Node, updated_node: Node) -> Node:
    """Swaps a matching read for its literal value."""
    name = self.env_variable_name(updated_node)
    if name is None or self._is_write_target():
      return updated_node

    replacement = self._inline_value(name)
    if replacement is None:
      return updated_node

    logger.debug("Inlined process.env.%s", name)
    return replacement

  def _inline_value(self, name: str) -> Optional[Node]:
    ctx = self.context
    project_root = ctx.project_root

    if name == ENV_PROJECT_ROOT:
      return string_literal(project_root)

    if name == ENV_USE_STATIC:
      is_static = ctx.platform == Platform.WEB.value and ctx.session.environ.get(ENV_USE_STATIC) in STATIC_ENABLED_VALUES
      return boolean_literal(is_static)

    if name == ENV_ABS_APP_ROOT:
      if ctx.is_test_environment:
        return None
      return string_literal(ctx.app_roots.resolve_absolute(project_root))

    if name == ENV_APP_ROOT:
      if ctx.is_test_environment:
        return None
      return string_literal(ctx.app_roots.resolve_relative(project_root))

    if ctx.platform and name == import_mode_key(ctx.platform):
      mode = ctx.router_modes.resolve_import_mode(project_root, ctx.platform, ctx.environment)
      return string_literal(mode)

    return None
