"""
Orchestration logic for executing sequential rewriter passes.
"""

from typing import List

from expo_router_babel.core.rewriter.context import RewriterContext
from expo_router_babel.core.rewriter.interface import RewriterPass
from expo_router_babel.tree.nodes import Node


class RewriterPipeline:
  """
  Runs a sequence of passes over one file, feeding each the previous output.
  """

  def __init__(self, passes: List[RewriterPass]) -> None:
    """
    Args:
        passes: Sequenced list of passes to execute.
    """
    self.passes = passes

  def run(self, tree: Node, context: RewriterContext) -> Node:
    """
    Executes all registered passes in order.

    Args:
        tree: The file's syntax tree.
        context: Shared per-file state.

    Returns:
        The fully transformed tree.
    """
    current = tree
    for pass_instance in self.passes:
      current = pass_instance.transform(current, context)
    return current
