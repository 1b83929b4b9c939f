"""
Babel AST node helpers.

Trees are plain Babel-AST JSON: every node is a ``dict`` with a ``"type"`` key.
This module provides the predicates and builders the passes use, named after
their ``@babel/types`` counterparts (``isIdentifier`` -> ``is_identifier``,
``stringLiteral`` -> ``string_literal``).
"""

from typing import Any, Dict, Iterable, List, Optional

from expo_router_babel.errors import MalformedTreeError

Node = Dict[str, Any]

# Keys that never hold traversable children.
NON_CHILD_KEYS = frozenset(
  {
    "type",
    "loc",
    "start",
    "end",
    "range",
    "extra",
    "comments",
    "leadingComments",
    "trailingComments",
    "innerComments",
    "tokens",
  }
)


def is_node(value: Any) -> bool:
  """True if `value` looks like an AST node."""
  return isinstance(value, dict) and isinstance(value.get("type"), str)


def is_type(node: Any, type_name: str) -> bool:
  """True if `node` is an AST node of the given type."""
  return is_node(node) and node["type"] == type_name


def is_identifier(node: Any, name: Optional[str] = None) -> bool:
  """
  Checks for an ``Identifier``, optionally with a specific name.

  Args:
      node: Candidate node.
      name: Required identifier name, or None to accept any.

  Returns:
      bool: Whether the node matches.
  """
  if not is_type(node, "Identifier"):
    return False
  return name is None or node.get("name") == name


def is_string_literal(node: Any, value: Optional[str] = None) -> bool:
  """Checks for a ``StringLiteral`` (or an ESTree ``Literal`` holding a string)."""
  if is_type(node, "StringLiteral") or (is_type(node, "Literal") and isinstance(node.get("value"), str)):
    return value is None or node.get("value") == value
  return False


def is_member_expression(node: Any) -> bool:
  return is_type(node, "MemberExpression")


def member_property_name(node: Node) -> Optional[str]:
  """
  Returns the static property name of a member expression.

  ``a.b`` and ``a["b"]`` both yield ``"b"``; ``a[b]`` yields None.
  """
  prop = node.get("property")
  if node.get("computed"):
    if is_string_literal(prop):
      return prop["value"]
    return None
  if is_identifier(prop):
    return prop["name"]
  return None


def children(node: Node) -> Iterable[str]:
  """Yields the field names of `node` that may hold child nodes."""
  for key, value in node.items():
    if key in NON_CHILD_KEYS:
      continue
    if is_node(value) or isinstance(value, list):
      yield key


def unwrap_program(tree: Node) -> Node:
  """
  Returns the ``Program`` node of a ``File`` or the tree itself.

  Raises:
      MalformedTreeError: If neither shape matches.
  """
  if is_type(tree, "File") and is_type(tree.get("program"), "Program"):
    return tree["program"]
  if is_type(tree, "Program"):
    return tree
  found = tree.get("type") if isinstance(tree, dict) else type(tree).__name__
  raise MalformedTreeError(f"Expected a Babel File or Program node, got {found!r}")


# --- Builders ---


def identifier(name: str) -> Node:
  return {"type": "Identifier", "name": name}


def string_literal(value: str) -> Node:
  return {"type": "StringLiteral", "value": value}


def boolean_literal(value: bool) -> Node:
  return {"type": "BooleanLiteral", "value": bool(value)}


def object_property(key: str, value: Node) -> Node:
  return {
    "type": "ObjectProperty",
    "key": identifier(key),
    "value": value,
    "computed": False,
    "shorthand": False,
  }


def object_expression(properties: List[Node]) -> Node:
  return {"type": "ObjectExpression", "properties": properties}


def export_default_declaration(declaration: Node) -> Node:
  return {"type": "ExportDefaultDeclaration", "declaration": declaration}


def export_named_const(name: str, init: Node) -> Node:
  """Builds ``export const <name> = <init>;``."""
  declaration = {
    "type": "VariableDeclaration",
    "kind": "const",
    "declarations": [{"type": "VariableDeclarator", "id": identifier(name), "init": init}],
  }
  return {
    "type": "ExportNamedDeclaration",
    "declaration": declaration,
    "specifiers": [],
    "source": None,
  }


def program(body: List[Node], source_type: str = "module", directives: Optional[List[Node]] = None) -> Node:
  return {
    "type": "Program",
    "sourceType": source_type,
    "body": body,
    "directives": directives or [],
  }
