"""
Tests for export surface enumeration.

Each export statement shape is classified explicitly; unrecognized shapes are
skipped without failing the module.
"""

import logging

import pytest

from babel_trees import (
  class_decl,
  export_all,
  export_const,
  export_default,
  export_named,
  export_specifiers,
  function_decl,
  ident,
  program,
  string,
)
from expo_router_babel.core.exports import (
  BindingExport,
  DefaultDeclarationExport,
  DefaultValueExport,
  SpecifierExport,
  TypeOnlyExport,
  UnrecognizedExport,
  binding_names,
  classify_export,
  enumerate_exports,
)


def test_declaration_order_is_preserved():
  prog = program([export_const("a", "b"), export_default(function_decl("Foo"))])
  assert enumerate_exports(prog) == ["a", "b", "default"]


def test_default_in_the_middle_keeps_position():
  prog = program([export_const("a"), export_default(ident("x")), export_named(function_decl("z"))])
  assert enumerate_exports(prog) == ["a", "default", "z"]


def test_non_export_statements_are_ignored():
  prog = program([{"type": "ImportDeclaration", "specifiers": [], "source": string("react")}, export_const("a")])
  assert enumerate_exports(prog) == ["a"]


def test_function_and_class_declarations():
  assert classify_export(export_named(function_decl("run"))) == BindingExport(("run",))
  assert classify_export(export_named(class_decl("Widget"))) == BindingExport(("Widget",))


def test_specifiers_use_public_names():
  stmt = export_specifiers("a", ("b", "renamed"), source="./other")
  assert classify_export(stmt) == SpecifierExport(("a", "renamed"))


def test_string_literal_export_name():
  stmt = export_specifiers("a")
  stmt["specifiers"][0]["exported"] = string("a-b")
  assert classify_export(stmt).names == ("a-b",)


def test_namespace_reexport():
  stmt = {
    "type": "ExportNamedDeclaration",
    "specifiers": [{"type": "ExportNamespaceSpecifier", "exported": ident("ns")}],
    "source": string("./m"),
    "declaration": None,
  }
  assert classify_export(stmt).names == ("ns",)


def test_estree_namespace_reexport():
  stmt = {"type": "ExportAllDeclaration", "exported": ident("ns"), "source": string("./m")}
  assert classify_export(stmt) == SpecifierExport(("ns",))


def test_default_value_and_declaration():
  assert classify_export(export_default(ident("Foo"))) == DefaultValueExport()
  assert classify_export(export_default({"type": "ArrowFunctionExpression"})) == DefaultValueExport()
  assert classify_export(export_default(function_decl(None))) == DefaultDeclarationExport()
  assert classify_export(export_default(class_decl("C"))) == DefaultDeclarationExport()


def test_default_without_declaration_is_unrecognized():
  shape = classify_export(export_default(None))
  assert isinstance(shape, UnrecognizedExport)
  assert shape.names == ()


def test_star_reexport_is_skipped_and_logged(caplog):
  prog = program([export_all("./m"), export_const("a")])
  with caplog.at_level(logging.DEBUG, logger="expo_router_babel"):
    assert enumerate_exports(prog) == ["a"]
  assert "star re-exports" in caplog.text


def test_type_only_exports_contribute_nothing():
  type_alias = export_named({"type": "TSTypeAliasDeclaration", "id": ident("Props")})
  interface = export_named({"type": "TSInterfaceDeclaration", "id": ident("State")})
  type_specifiers = export_specifiers("T")
  type_specifiers["exportKind"] = "type"

  for stmt in (type_alias, interface, type_specifiers):
    assert classify_export(stmt) == TypeOnlyExport()

  mixed = export_specifiers("value", "T")
  mixed["specifiers"][1]["exportKind"] = "type"
  assert classify_export(mixed).names == ("value",)


def test_empty_specifier_list():
  assert classify_export(export_specifiers()) == SpecifierExport(())


def test_destructuring_bindings():
  pattern = {
    "type": "ObjectPattern",
    "properties": [
      {"type": "ObjectProperty", "key": ident("a"), "value": ident("a")},
      {"type": "ObjectProperty", "key": ident("b"), "value": {"type": "AssignmentPattern", "left": ident("c")}},
      {"type": "RestElement", "argument": ident("rest")},
    ],
  }
  array = {"type": "ArrayPattern", "elements": [ident("x"), None, {"type": "RestElement", "argument": ident("ys")}]}
  assert binding_names(pattern) == ["a", "c", "rest"]
  assert binding_names(array) == ["x", "ys"]
  assert binding_names(None) == []


def test_destructuring_export_declaration():
  stmt = export_const("placeholder")
  stmt["declaration"]["declarations"][0]["id"] = {
    "type": "ArrayPattern",
    "elements": [ident("first"), ident("second")],
  }
  assert enumerate_exports(program([stmt])) == ["first", "second"]


@pytest.mark.parametrize("node_type", ["ExpressionStatement", "ImportDeclaration", "VariableDeclaration"])
def test_classify_returns_none_for_non_exports(node_type):
  assert classify_export({"type": node_type}) is None
