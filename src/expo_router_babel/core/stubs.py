"""
Client reference stub modules.

On the server graph, a ``"use client"`` module is replaced by a module that
exports one client reference descriptor per original export::

    export default {
      $$typeof: "react.client.reference",
      $$async: false,
      $$id: "/components/Foo.js#default",
      name: "default",
    };
    export const Bar = { ..., $$id: "/components/Foo.js#Bar", name: "Bar" };

The renderer meets these placeholders instead of the component code and
defers to the client bundle by ``$$id``.
"""

from typing import Iterable, List

from expo_router_babel.core.exports import DEFAULT_EXPORT_NAME
from expo_router_babel.tree import nodes
from expo_router_babel.tree.nodes import Node

CLIENT_REFERENCE_TYPE = "react.client.reference"


def reference_id(entry_point: str, export_name: str) -> str:
  """``<entryPoint>#<exportName>``, unique across the whole build."""
  return f"{entry_point}#{export_name}"


def client_reference_descriptor(entry_point: str, export_name: str) -> Node:
  """
  Builds the object literal standing in for one export.

  Args:
      entry_point: Root-relative path of the module.
      export_name: Exported name, ``"default"`` for the default export.

  Returns:
      Node: An ``ObjectExpression``.
  """
  return nodes.object_expression(
    [
      nodes.object_property("$$typeof", nodes.string_literal(CLIENT_REFERENCE_TYPE)),
      nodes.object_property("$$async", nodes.boolean_literal(False)),
      nodes.object_property("$$id", nodes.string_literal(reference_id(entry_point, export_name))),
      nodes.object_property("name", nodes.string_literal(export_name)),
    ]
  )


def client_reference_statement(entry_point: str, export_name: str) -> Node:
  """``export default <descriptor>`` or ``export const <name> = <descriptor>``."""
  descriptor = client_reference_descriptor(entry_point, export_name)
  if export_name == DEFAULT_EXPORT_NAME:
    return nodes.export_default_declaration(descriptor)
  return nodes.export_named_const(export_name, descriptor)


def build_client_reference_module(entry_point: str, exports: Iterable[str], source_type: str = "module") -> Node:
  """
  Builds the server-side replacement ``Program`` for a client module.

  The result depends only on its arguments; the original body and directives
  are not carried over.

  Args:
      entry_point: Root-relative path of the module.
      exports: Exported names in declaration order.
      source_type: ``sourceType`` of the original program.

  Returns:
      Node: A new ``Program`` with one export statement per name.
  """
  body: List[Node] = [client_reference_statement(entry_point, name) for name in exports]
  return nodes.program(body, source_type=source_type)
