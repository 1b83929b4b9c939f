"""
Tests for routes directory resolution.

Verifies:
1. Override variables are returned verbatim.
2. ``unstable_src`` handling for absolute and relative values.
3. The ``src/app`` -> ``app`` probe order and its fallback.
4. The path relative to the router entry module.
5. Memoization and idempotence.
"""

import logging
import os
from unittest.mock import MagicMock

import pytest

from expo_router_babel.errors import ModuleResolutionError
from expo_router_babel.resolvers import AppRootResolver, ConfigResolver
from expo_router_babel.resolvers.app_root import is_absolute_path
from expo_router_babel.session import BuildSession

ENTRY = "/p/node_modules/expo-router/entry.js"


def make_resolver(session, config, existing=(), entry=ENTRY):
  probe = MagicMock(side_effect=lambda path: os.path.normpath(path) in {os.path.normpath(p) for p in existing})
  module_resolver = MagicMock(return_value=entry)
  resolver = AppRootResolver(
    session,
    ConfigResolver(session, loader=lambda root: config),
    directory_probe=probe,
    module_resolver=module_resolver,
  )
  return resolver, probe, module_resolver


def test_nested_source_directory_is_preferred(session, make_config):
  resolver, _, _ = make_resolver(session, make_config(), existing=["/p/src/app", "/p/app"])
  assert resolver.resolve_absolute("/p") == "/p/src/app"


def test_top_level_app_directory(session, make_config):
  resolver, _, _ = make_resolver(session, make_config(), existing=["/p/app"])
  assert resolver.resolve_absolute("/p") == "/p/app"


def test_missing_directories_fall_back_to_app(session, make_config, caplog):
  resolver, _, _ = make_resolver(session, make_config())
  with caplog.at_level(logging.WARNING, logger="expo_router_babel"):
    assert resolver.resolve_absolute("/p") == "/p/app"
  assert "No routes directory found" in caplog.text


def test_relative_custom_source_is_joined(session, make_config):
  config = make_config(extra={"router": {"unstable_src": "./routes"}})
  resolver, probe, _ = make_resolver(session, config)

  assert resolver.resolve_absolute("/p") == "/p/routes"
  probe.assert_not_called()


def test_absolute_custom_source_is_used_verbatim(session, make_config):
  config = make_config(extra={"router": {"unstable_src": "/elsewhere/routes"}})
  resolver, _, _ = make_resolver(session, config)
  assert resolver.resolve_absolute("/p") == "/elsewhere/routes"


def test_windows_drive_path_is_absolute(session, make_config):
  config = make_config(extra={"router": {"unstable_src": "C:\\work\\routes"}})
  resolver, _, _ = make_resolver(session, config)
  assert resolver.resolve_absolute("/p") == "C:\\work\\routes"


@pytest.mark.parametrize(
  "path, expected",
  [
    ("/abs", True),
    ("C:\\abs", True),
    ("C:/abs", True),
    ("\\\\server\\share\\abs", True),
    ("./rel", False),
    ("rel/dir", False),
    ("C:rel", False),
  ],
)
def test_is_absolute_path(path, expected):
  assert is_absolute_path(path) is expected


def test_absolute_override_wins(make_config):
  session = BuildSession({"EXPO_ROUTER_ABS_APP_ROOT": "/override/app"})
  resolver, probe, _ = make_resolver(session, make_config())
  assert resolver.resolve_absolute("/p") == "/override/app"
  probe.assert_not_called()


def test_relative_to_router_entry(session, make_config):
  resolver, _, module_resolver = make_resolver(session, make_config(), existing=["/p/app"])
  assert resolver.resolve_relative("/p") == "../../app"
  module_resolver.assert_called_once_with("/p", "expo-router/entry")


def test_relative_uses_nested_source_directory(session, make_config):
  resolver, _, _ = make_resolver(session, make_config(), existing=["/p/src/app"])
  assert resolver.resolve_relative("/p") == "../../src/app"


def test_relative_override_wins(make_config):
  session = BuildSession({"EXPO_ROUTER_APP_ROOT_2": "../custom"})
  resolver, _, module_resolver = make_resolver(session, make_config())
  assert resolver.resolve_relative("/p") == "../custom"
  module_resolver.assert_not_called()


def test_legacy_relative_variable_is_ignored(make_config):
  session = BuildSession({"EXPO_ROUTER_APP_ROOT": "../stale"})
  resolver, _, _ = make_resolver(session, make_config(), existing=["/p/app"])
  assert resolver.resolve_relative("/p") == "../../app"


def test_repeated_calls_are_identical_and_cached(session, make_config):
  resolver, probe, module_resolver = make_resolver(session, make_config(), existing=["/p/src/app"])

  first = (resolver.resolve_absolute("/p"), resolver.resolve_relative("/p"))
  second = (resolver.resolve_absolute("/p"), resolver.resolve_relative("/p"))

  assert first == second
  assert probe.call_count == 1
  module_resolver.assert_called_once()
  assert session.cache.absolute_app_roots == {"/p": "/p/src/app"}
  assert session.cache.relative_app_roots == {"/p": "../../src/app"}


def test_testing_flag_recomputes(testing_session, make_config):
  resolver, probe, _ = make_resolver(testing_session, make_config(), existing=["/p/src/app"])
  resolver.resolve_absolute("/p")
  resolver.resolve_absolute("/p")
  assert probe.call_count == 2


def test_real_filesystem_resolution(session, project, router_entry):
  (project / "src" / "app").mkdir(parents=True)
  resolver = AppRootResolver(session)

  assert resolver.resolve_absolute(str(project)) == str(project / "src" / "app")
  assert resolver.resolve_relative(str(project)) == os.path.join("..", "..", "src", "app")


def test_missing_router_entry_raises(session, project):
  (project / "app").mkdir()
  resolver = AppRootResolver(session)
  with pytest.raises(ModuleResolutionError, match="expo-router/entry"):
    resolver.resolve_relative(str(project))
