"""
Client Boundary Pass.

Handles modules that start with the ``"use client"`` directive. Their exports
are enumerated and, depending on the graph being bundled:

- **server**: the module is replaced by client reference stubs (see
  ``expo_router_babel.core.stubs``);
- **client**: the module is kept and an ``ExportManifestEntry`` is stored in
  ``context.metadata["clientReferences"]``.

Both views are produced from the same enumeration, so the stub ids and the
manifest exports always list the same names in the same order.
"""

import os
from pathlib import PurePath
from typing import List

from expo_router_babel.core.exports import enumerate_exports
from expo_router_babel.core.manifest import METADATA_KEY, ExportManifestEntry
from expo_router_babel.core.rewriter.context import RewriterContext
from expo_router_babel.core.rewriter.interface import RewriterPass
from expo_router_babel.core.stubs import build_client_reference_module
from expo_router_babel.errors import ExpoRouterBabelError
from expo_router_babel.tree import NodeTransformer
from expo_router_babel.tree.nodes import Node, is_node, is_string_literal, is_type
from expo_router_babel.utils.console import get_logger

logger = get_logger("client_references")

USE_CLIENT_DIRECTIVE = "use client"


def module_directives(program: Node) -> List[str]:
  """
  Returns the directive prologue of a program.

  Reads Babel's ``directives`` list, and the leading ``ExpressionStatement``
  nodes carrying a ``directive`` field in ESTree-shaped trees.
  """
  values = []
  for directive in program.get("directives") or []:
    literal = directive.get("value")
    if is_type(literal, "DirectiveLiteral") or is_string_literal(literal):
      values.append(literal["value"])

  for statement in program.get("body") or []:
    if not (is_type(statement, "ExpressionStatement") and isinstance(statement.get("directive"), str)):
      break
    values.append(statement["directive"])
  return values


def entry_point_for(filename: str, server_root: str) -> str:
  """
  Root-relative POSIX path of `filename` with a leading ``/``.

  Args:
      filename: Path of the transformed file.
      server_root: Root the path is made relative to.

  Returns:
      str: e.g. ``/components/Foo.js``.
  """
  relative = os.path.relpath(filename, server_root) if server_root else filename
  return "/" + PurePath(relative).as_posix().lstrip("/")


class ClientBoundaryPass(RewriterPass):
  """
  Pass turning ``"use client"`` modules into references or manifest entries.
  """

  name = "expo-rsc-client-references"

  def transform(self, tree: Node, context: RewriterContext) -> Node:
    """
    Args:
        tree: The file's syntax tree.
        context: Shared per-file state; receives the manifest entry.

    Returns:
        The stub module (server), or the unchanged tree.
    """
    return ClientBoundaryTransformer(context).transform(tree)


class ClientBoundaryTransformer(NodeTransformer):
  """
  Acts on the ``Program`` node only; never descends into statements.
  """

  def __init__(self, context: RewriterContext) -> None:
    super().__init__()
    self.context = context

  def visit_Program(self, node: Node) -> bool:
    return False

  def leave_Program(self, original_node: Node, updated_node: Node) -> Node:
    """Dispatches on the build target once the directive is found."""
    if USE_CLIENT_DIRECTIVE not in module_directives(original_node):
      return updated_node

    if not self.context.filename:
      raise ExpoRouterBabelError("Client reference ids require the file name of the module being transformed")

    entry_point = entry_point_for(self.context.filename, self.context.server_root)
    exports = enumerate_exports(original_node)

    if self.context.target.is_server:
      logger.debug("Replacing %s with %d client references", entry_point, len(exports))
      return build_client_reference_module(entry_point, exports, original_node.get("sourceType", "module"))

    entry = ExportManifestEntry(entry_point=entry_point, exports=exports)
    self.context.metadata[METADATA_KEY] = entry.to_metadata()
    logger.debug("Recorded client reference %s: %s", entry_point, exports)
    return updated_node
