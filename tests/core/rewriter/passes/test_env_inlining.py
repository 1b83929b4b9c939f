"""
Tests for the environment inlining pass.

Verifies that reads of ``process.env.<NAME>`` are replaced by literals for
each recognized variable, that write targets and unknown names are left
alone, and that the pass is idempotent.
"""

import copy
from unittest.mock import MagicMock

import pytest

from babel_trees import assign, const, env_read, expr_stmt, file, find_all, ident, member, program, string
from expo_router_babel.config import BuildTarget
from expo_router_babel.core.engine import TransformEngine
from expo_router_babel.core.rewriter import EnvInliningPass
from expo_router_babel.errors import ConfigurationError
from expo_router_babel.project_config import ProjectConfig
from expo_router_babel.session import BuildSession

ENTRY = "/p/node_modules/expo-router/entry.js"


def make_engine(platform="web", environment="development", environ=None, config=None, project_root="/p"):
  target = BuildTarget(platform=platform, project_root=project_root, environment=environment)
  return TransformEngine(
    target,
    session=BuildSession(environ or {}),
    passes=[EnvInliningPass()],
    config_loader=lambda root: config or ProjectConfig(),
    directory_probe=lambda path: False,
    module_resolver=MagicMock(return_value=ENTRY),
  )


def inline(expression, **engine_kwargs):
  """Runs the pass over ``x = <expression>`` and returns the new right side."""
  tree = file(program([const("x", expression)]))
  result = make_engine(**engine_kwargs).apply(tree)
  return result.tree["program"]["body"][0]["declarations"][0]["init"]


def test_project_root():
  assert inline(env_read("EXPO_PROJECT_ROOT")) == string("/p")


def test_computed_string_key():
  assert inline(env_read("EXPO_PROJECT_ROOT", computed=True)) == string("/p")


def test_project_root_falls_back_to_file_root():
  tree = program([expr_stmt(env_read("EXPO_PROJECT_ROOT"))])
  engine = make_engine(project_root=None)
  result = engine.apply(tree, root="/from/file/opts")
  assert result.tree["body"][0]["expression"] == string("/from/file/opts")


@pytest.mark.parametrize(
  "platform, value, expected",
  [
    ("web", "true", True),
    ("web", "1", True),
    ("web", "yes", False),
    ("web", None, False),
    ("ios", "true", False),
    ("android", "1", False),
  ],
)
def test_static_rendering_flag(platform, value, expected):
  environ = {} if value is None else {"EXPO_PUBLIC_USE_STATIC": value}
  node = inline(env_read("EXPO_PUBLIC_USE_STATIC"), platform=platform, environ=environ)
  assert node == {"type": "BooleanLiteral", "value": expected}


def test_absolute_app_root():
  assert inline(env_read("EXPO_ROUTER_ABS_APP_ROOT")) == string("/p/app")


def test_relative_app_root():
  assert inline(env_read("EXPO_ROUTER_APP_ROOT")) == string("../../app")


@pytest.mark.parametrize("name", ["EXPO_ROUTER_ABS_APP_ROOT", "EXPO_ROUTER_APP_ROOT"])
def test_app_roots_are_left_in_test_environment(name):
  assert inline(env_read(name), environment="test") == env_read(name)


def test_test_environment_from_node_env():
  node = inline(env_read("EXPO_ROUTER_APP_ROOT"), environment=None, environ={"NODE_ENV": "test"})
  assert node == env_read("EXPO_ROUTER_APP_ROOT")


def test_import_mode_for_active_platform():
  config = ProjectConfig.model_validate({"exp": {"extra": {"router": {"asyncRoutes": "development"}}}})
  assert inline(env_read("EXPO_ROUTER_IMPORT_MODE_WEB"), config=config) == string("lazy")
  assert inline(env_read("EXPO_ROUTER_IMPORT_MODE_IOS"), platform="ios") == string("sync")


def test_import_mode_for_other_platform_is_untouched():
  assert inline(env_read("EXPO_ROUTER_IMPORT_MODE_IOS"), platform="web") == env_read("EXPO_ROUTER_IMPORT_MODE_IOS")


def test_import_mode_without_platform_is_untouched():
  node = inline(env_read("EXPO_ROUTER_IMPORT_MODE_WEB"), platform=None)
  assert node == env_read("EXPO_ROUTER_IMPORT_MODE_WEB")


def test_production_lazy_routes_fail_the_file():
  config = ProjectConfig.model_validate({"exp": {"extra": {"router": {"asyncRoutes": True}}}})
  engine = make_engine(environment="production", config=config)
  tree = program([expr_stmt(env_read("EXPO_ROUTER_IMPORT_MODE_WEB"))])

  with pytest.raises(ConfigurationError):
    engine.apply(tree)

  result = engine.run(tree)
  assert not result.success
  assert result.tree is None
  assert "production" in result.errors[0]


@pytest.mark.parametrize(
  "name", ["EXPO_PROJECT_ROOT", "EXPO_ROUTER_APP_ROOT", "EXPO_ROUTER_ABS_APP_ROOT", "EXPO_PUBLIC_USE_STATIC"]
)
def test_assignment_target_is_not_rewritten(name):
  tree = program([assign(env_read(name), string("x"))])
  result = make_engine().apply(tree)
  assert result.tree == program([assign(env_read(name), string("x"))])


def test_assignment_value_is_rewritten():
  tree = program([assign(ident("root"), env_read("EXPO_PROJECT_ROOT"))])
  result = make_engine().apply(tree)
  assert result.tree["body"][0]["expression"]["right"] == string("/p")


def test_update_and_delete_are_not_rewritten():
  update = expr_stmt({"type": "UpdateExpression", "operator": "++", "prefix": False, "argument": env_read("EXPO_PROJECT_ROOT")})
  delete = expr_stmt({"type": "UnaryExpression", "operator": "delete", "prefix": True, "argument": env_read("EXPO_PROJECT_ROOT")})
  negate = expr_stmt({"type": "UnaryExpression", "operator": "!", "prefix": True, "argument": env_read("EXPO_PUBLIC_USE_STATIC")})
  tree = program([update, delete, negate])

  result = make_engine().apply(tree)
  assert result.tree["body"][0] == update
  assert result.tree["body"][1] == delete
  assert result.tree["body"][2]["expression"]["argument"] == {"type": "BooleanLiteral", "value": False}


def test_unknown_names_and_other_objects_are_untouched():
  tree = program(
    [
      expr_stmt(env_read("NODE_ENV")),
      expr_stmt(member(member(ident("config"), "env"), "EXPO_PROJECT_ROOT")),
      expr_stmt(member(ident("process"), "EXPO_PROJECT_ROOT")),
      expr_stmt({"type": "MemberExpression", "object": member(ident("process"), "env"), "property": ident("key"), "computed": True}),
    ]
  )
  before = copy.deepcopy(tree)
  result = make_engine().apply(tree)
  assert result.tree == before


def test_nested_reads_are_all_rewritten():
  call = {
    "type": "CallExpression",
    "callee": ident("require_context"),
    "arguments": [env_read("EXPO_ROUTER_APP_ROOT"), {"type": "BooleanLiteral", "value": True}, env_read("EXPO_ROUTER_IMPORT_MODE_WEB")],
  }
  result = make_engine().apply(program([expr_stmt(call)]))
  args = result.tree["body"][0]["expression"]["arguments"]
  assert args[0] == string("../../app")
  assert args[2] == string("sync")


def test_idempotent_and_input_not_mutated():
  tree = file(
    program(
      [
        const("a", env_read("EXPO_PROJECT_ROOT")),
        const("b", env_read("EXPO_ROUTER_ABS_APP_ROOT")),
        const("c", env_read("EXPO_ROUTER_IMPORT_MODE_WEB")),
        const("d", env_read("EXPO_PUBLIC_USE_STATIC")),
      ]
    )
  )
  before = copy.deepcopy(tree)
  engine = make_engine()

  once = engine.apply(tree).tree
  twice = engine.apply(once).tree

  assert tree == before
  assert twice == once
  assert EnvInliningPass().transform(once, engine.make_context()) is once
  assert not find_all(once, "MemberExpression")


def test_override_variables_are_inlined_verbatim():
  environ = {"EXPO_ROUTER_ABS_APP_ROOT": "/custom/app", "EXPO_ROUTER_APP_ROOT_2": "../custom", "EXPO_ROUTER_IMPORT_MODE_WEB": "lazy"}
  assert inline(env_read("EXPO_ROUTER_ABS_APP_ROOT"), environ=environ) == string("/custom/app")
  assert inline(env_read("EXPO_ROUTER_APP_ROOT"), environ=environ) == string("../custom")
  assert inline(env_read("EXPO_ROUTER_IMPORT_MODE_WEB"), environ=environ) == string("lazy")
