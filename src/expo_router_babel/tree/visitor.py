"""
Copy-on-write transformer for Babel-AST JSON trees.

`NodeTransformer` walks a tree depth-first and dispatches to optional
``visit_<Type>(node)`` and ``leave_<Type>(original_node, updated_node)``
methods, in the manner of a LibCST ``CSTTransformer``:

- ``visit_<Type>`` returning ``False`` skips the node's children.
- ``leave_<Type>`` returns the node that takes the original's place, or
  ``REMOVE`` to drop it from its parent.

The input tree is never mutated. A node whose subtree changed is shallow-copied
with the new children; untouched subtrees are shared with the input.
"""

from typing import List, Optional, Tuple

from expo_router_babel.tree.nodes import Node, children, is_node


class _RemovalSentinel:
  """Marker returned from a leave hook to delete the node."""

  def __repr__(self) -> str:
    return "REMOVE"


REMOVE = _RemovalSentinel()


class NodeTransformer:
  """
  Base class for tree rewrites.

  Attributes:
      parent_stack: ``(parent_node, field_name)`` pairs from the root down to
          the node currently being visited. Parent nodes are the originals.
  """

  def __init__(self) -> None:
    self.parent_stack: List[Tuple[Node, str]] = []

  @property
  def parent(self) -> Optional[Tuple[Node, str]]:
    """The ``(parent_node, field_name)`` of the node being visited, if any."""
    return self.parent_stack[-1] if self.parent_stack else None

  def transform(self, node: Node) -> Node:
    """
    Runs the transformer over `node`.

    Args:
        node: Root of the tree to walk.

    Returns:
        The rewritten tree (`node` itself when nothing changed).
    """
    self.parent_stack = []
    result = self._visit(node)
    if result is REMOVE:
      raise ValueError("The root node cannot be removed")
    return result

  def _visit(self, node: Node):
    node_type = node["type"]

    visit = getattr(self, f"visit_{node_type}", None)
    descend = True
    if visit is not None and visit(node) is False:
      descend = False

    updated = self._visit_children(node) if descend else node

    leave = getattr(self, f"leave_{node_type}", None)
    if leave is not None:
      return leave(node, updated)
    return updated

  def _visit_children(self, node: Node) -> Node:
    changes = {}
    for field in list(children(node)):
      value = node[field]
      self.parent_stack.append((node, field))
      try:
        if isinstance(value, list):
          new_items = []
          changed = False
          for item in value:
            if not is_node(item):
              new_items.append(item)
              continue
            new_item = self._visit(item)
            if new_item is not item:
              changed = True
            if new_item is not REMOVE:
              new_items.append(new_item)
          if changed:
            changes[field] = new_items
        else:
          new_value = self._visit(value)
          if new_value is not value:
            changes[field] = None if new_value is REMOVE else new_value
      finally:
        self.parent_stack.pop()

    if not changes:
      return node
    return {**node, **changes}
