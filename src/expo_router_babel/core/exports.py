"""
Export surface enumeration.

Every top-level export statement of a module is classified into one of a
closed set of shapes:

- ``BindingExport``: ``export const a = 1, { b } = o``, ``export function f() {}``,
  ``export class C {}``. One name per bound identifier.
- ``SpecifierExport``: ``export { a, b as c }``, ``export { x } from "./m"``,
  ``export * as ns from "./m"``. One name per exported (public) name.
- ``DefaultValueExport``: ``export default <expression>``.
- ``DefaultDeclarationExport``: ``export default function () {}`` and classes.
- ``TypeOnlyExport``: TypeScript ``export type`` / ``export interface``. Erased
  at runtime, so contributes no names.
- ``UnrecognizedExport``: anything else (``export * from "./m"``, a default
  export without a declaration). Contributes no names and is logged.

Names are returned in source order, default exports as ``"default"``.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from expo_router_babel.tree.nodes import Node, is_identifier, is_node, is_string_literal, is_type
from expo_router_babel.utils.console import get_logger

logger = get_logger("client_references")

DEFAULT_EXPORT_NAME = "default"

DEFAULT_DECLARATION_TYPES = frozenset(
  {
    "FunctionDeclaration",
    "ClassDeclaration",
    "TSDeclareFunction",
  }
)

TYPE_ONLY_DECLARATION_TYPES = frozenset(
  {
    "TSTypeAliasDeclaration",
    "TSInterfaceDeclaration",
  }
)


@dataclass(frozen=True)
class BindingExport:
  names: Tuple[str, ...]


@dataclass(frozen=True)
class SpecifierExport:
  names: Tuple[str, ...]


@dataclass(frozen=True)
class DefaultValueExport:
  @property
  def names(self) -> Tuple[str, ...]:
    return (DEFAULT_EXPORT_NAME,)


@dataclass(frozen=True)
class DefaultDeclarationExport:
  @property
  def names(self) -> Tuple[str, ...]:
    return (DEFAULT_EXPORT_NAME,)


@dataclass(frozen=True)
class TypeOnlyExport:
  @property
  def names(self) -> Tuple[str, ...]:
    return ()


@dataclass(frozen=True)
class UnrecognizedExport:
  node_type: str
  reason: str

  @property
  def names(self) -> Tuple[str, ...]:
    return ()


ExportShape = Union[
  BindingExport,
  SpecifierExport,
  DefaultValueExport,
  DefaultDeclarationExport,
  TypeOnlyExport,
  UnrecognizedExport,
]


def binding_names(pattern: Optional[Node]) -> List[str]:
  """
  Collects the identifiers bound by a declaration target, in source order.

  Handles plain identifiers and destructuring (object, array, defaults, rest).

  Args:
      pattern: The ``id`` of a declarator, or a nested pattern.

  Returns:
      List[str]: Bound names.
  """
  if not is_node(pattern):
    return []

  if is_identifier(pattern):
    return [pattern["name"]]

  if is_type(pattern, "ObjectPattern"):
    names: List[str] = []
    for prop in pattern.get("properties", []):
      if is_type(prop, "RestElement"):
        names.extend(binding_names(prop.get("argument")))
      else:
        names.extend(binding_names(prop.get("value")))
    return names

  if is_type(pattern, "ArrayPattern"):
    names = []
    for element in pattern.get("elements", []):
      names.extend(binding_names(element))
    return names

  if is_type(pattern, "AssignmentPattern"):
    return binding_names(pattern.get("left"))

  if is_type(pattern, "RestElement"):
    return binding_names(pattern.get("argument"))

  return []


def _specifier_name(specifier: Node) -> Optional[str]:
  if specifier.get("exportKind") == "type":
    return None
  exported = specifier.get("exported")
  if is_identifier(exported):
    return exported["name"]
  if is_string_literal(exported):
    return exported["value"]
  return None


def _classify_named(node: Node) -> ExportShape:
  if node.get("exportKind") == "type":
    return TypeOnlyExport()

  declaration = node.get("declaration")
  if is_node(declaration):
    if declaration["type"] in TYPE_ONLY_DECLARATION_TYPES or declaration.get("declare"):
      return TypeOnlyExport()
    if is_type(declaration, "VariableDeclaration"):
      names: List[str] = []
      for declarator in declaration.get("declarations", []):
        names.extend(binding_names(declarator.get("id")))
      return BindingExport(tuple(names))
    if is_identifier(declaration.get("id")):
      return BindingExport((declaration["id"]["name"],))
    return UnrecognizedExport(declaration["type"], "declaration has no identifier")

  specifiers = node.get("specifiers") or []
  names = []
  for specifier in specifiers:
    name = _specifier_name(specifier)
    if name is not None:
      names.append(name)
  return SpecifierExport(tuple(names))


def _classify_default(node: Node) -> ExportShape:
  declaration = node.get("declaration")
  if not is_node(declaration):
    return UnrecognizedExport(node["type"], "default export without a declaration")
  if declaration["type"] in TYPE_ONLY_DECLARATION_TYPES:
    return TypeOnlyExport()
  if declaration["type"] in DEFAULT_DECLARATION_TYPES:
    return DefaultDeclarationExport()
  return DefaultValueExport()


def classify_export(statement: Node) -> Optional[ExportShape]:
  """
  Classifies one top-level statement.

  Args:
      statement: A node from ``Program.body``.

  Returns:
      The export shape, or None if the statement is not an export.
  """
  statement_type = statement.get("type")
  if statement_type == "ExportNamedDeclaration":
    return _classify_named(statement)
  if statement_type == "ExportDefaultDeclaration":
    return _classify_default(statement)
  if statement_type == "ExportAllDeclaration":
    if statement.get("exportKind") == "type":
      return TypeOnlyExport()
    exported = statement.get("exported")
    if is_identifier(exported):
      # ESTree form of `export * as ns from "./m"`
      return SpecifierExport((exported["name"],))
    return UnrecognizedExport(statement_type, "star re-exports cannot be enumerated")
  return None


def enumerate_exports(program: Node) -> List[str]:
  """
  Lists the exported names of a module in declaration order.

  Shapes the enumerator does not recognize are skipped so one odd export does
  not abort the file.

  Args:
      program: Babel ``Program`` node.

  Returns:
      List[str]: Exported names, ``"default"`` for the default export.
  """
  exports: List[str] = []
  for statement in program.get("body", []):
    if not is_node(statement):
      continue
    shape = classify_export(statement)
    if shape is None:
      continue
    if isinstance(shape, UnrecognizedExport):
      logger.debug("Skipping %s export: %s", shape.node_type, shape.reason)
      continue
    exports.extend(shape.names)
  return exports
