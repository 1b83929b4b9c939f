"""
Interface definition for Rewriter Passes.

This module defines the abstract base class every transformation pass
implements to run inside the ``RewriterPipeline``.
"""

from abc import ABC, abstractmethod

from expo_router_babel.core.rewriter.context import RewriterContext
from expo_router_babel.tree.nodes import Node


class RewriterPass(ABC):
  """
  Abstract contract for one transformation pass.

  A pass must leave its input tree untouched and return the rewritten tree
  (or the input itself when nothing applies).
  """

  name: str = "pass"

  @abstractmethod
  def transform(self, tree: Node, context: RewriterContext) -> Node:
    """
    Executes the pass on one file's tree.

    Args:
        tree: Babel ``File`` or ``Program`` node.
        context: The per-file context (target, session, metadata).

    Returns:
        The transformed tree.
    """
    pass
