"""
Runtime Configuration Store.

Holds the per-invocation build target (which platform, server or client bundle,
which project) and the CLI/`pyproject.toml` layer used to assemble it.
"""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from expo_router_babel.enums import Platform
from expo_router_babel.utils.console import log_warning

if sys.version_info >= (3, 11):
  import tomllib
else:
  try:
    import tomli as tomllib
  except ImportError:
    tomllib = None  # type: ignore

TOOL_SECTION = "expo_router_babel"


def _validate_platform(value: Optional[str]) -> Optional[str]:
  if value is None:
    return None
  clean = str(value).lower().strip()
  if not clean:
    return None
  known = [p.value for p in Platform]
  if clean not in known:
    raise ValueError(f"Unknown platform: '{clean}'. Supported platforms: {known}")
  return clean


class BuildTarget(BaseModel):
  """
  Describes the bundle being produced for one file transformation.

  Supplied by the host per invocation and never mutated by the passes.
  """

  model_config = ConfigDict(frozen=True)

  platform: Optional[str] = Field(None, description="Target platform: 'ios', 'android' or 'web'.")
  is_server: bool = Field(False, description="True when bundling for the React Server Components graph.")
  project_root: Optional[str] = Field(None, description="Absolute project root. Falls back to the file root.")
  server_root: Optional[str] = Field(None, description="Root client reference ids are relative to.")
  environment: Optional[str] = Field(None, description="Build environment. Defaults to NODE_ENV / BABEL_ENV.")

  @field_validator("platform")
  @classmethod
  def validate_platform(cls, v: Optional[str]) -> Optional[str]:
    """
    Normalizes and checks the platform name.

    Args:
        v (Optional[str]): Raw platform value.

    Returns:
        Optional[str]: The lowercase platform key, or None.

    Raises:
        ValueError: If the platform is not one of `Platform`.
    """
    return _validate_platform(v)


class RuntimeConfig(BaseModel):
  """
  Settings for a CLI run, merged from ``[tool.expo_router_babel]`` and flags.
  """

  platform: Optional[str] = Field(None, description="Target platform key.")
  environment: Optional[str] = Field(None, description="Build environment override (e.g. 'production').")
  is_server: bool = Field(False, description="Produce server (RSC) output.")
  project_root: Optional[Path] = Field(None, description="Project root directory.")
  server_root: Optional[Path] = Field(None, description="Server root for client reference ids.")
  env: Dict[str, str] = Field(default_factory=dict, description="Extra environment-store entries.")

  @field_validator("platform")
  @classmethod
  def validate_platform(cls, v: Optional[str]) -> Optional[str]:
    """Normalizes and checks the platform name."""
    return _validate_platform(v)

  def build_target(self) -> BuildTarget:
    """
    Returns:
        BuildTarget: The per-file target descriptor for this configuration.
    """
    return BuildTarget(
      platform=self.platform,
      is_server=self.is_server,
      project_root=str(self.project_root) if self.project_root else None,
      server_root=str(self.server_root) if self.server_root else None,
      environment=self.environment,
    )

  @classmethod
  def load(
    cls,
    platform: Optional[str] = None,
    environment: Optional[str] = None,
    is_server: Optional[bool] = None,
    project_root: Optional[Path] = None,
    server_root: Optional[Path] = None,
    env: Optional[Dict[str, str]] = None,
    search_path: Optional[Path] = None,
  ) -> "RuntimeConfig":
    """
    Loads configuration from pyproject.toml and overrides it with CLI arguments.

    Relative roots in the TOML file are resolved against the directory holding
    that file.

    Args:
        platform: Override for the target platform.
        environment: Override for the build environment.
        is_server: Override for server output.
        project_root: Override for the project root.
        server_root: Override for the server root.
        env: Extra environment entries, merged over the TOML ``env`` table.
        search_path: Directory to start searching for pyproject.toml.

    Returns:
        RuntimeConfig: The resolved configuration.
    """
    start_dir = search_path or Path.cwd()
    toml_config, toml_dir = _load_toml_settings(start_dir)

    def _toml_path(key: str) -> Optional[Path]:
      raw = toml_config.get(key)
      if not raw:
        return None
      path = Path(raw)
      if toml_dir and not path.is_absolute():
        path = (toml_dir / path).resolve()
      return path

    final_server = is_server if is_server is not None else bool(toml_config.get("server", False))
    final_env = {str(k): str(v) for k, v in toml_config.get("env", {}).items()}
    final_env.update(env or {})

    return cls(
      platform=platform or toml_config.get("platform"),
      environment=environment or toml_config.get("environment"),
      is_server=final_server,
      project_root=project_root or _toml_path("project_root"),
      server_root=server_root or _toml_path("server_root"),
      env=final_env,
    )


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Searches `start_path` and its parents for a 'pyproject.toml' tool section.

  Args:
      start_path (Path): Directory to start the search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The section and the directory it was found in.
  """
  if not tomllib:
    return {}, None

  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.is_file():
      try:
        with open(toml_path, "rb") as f:
          data = tomllib.load(f)
      except (OSError, tomllib.TOMLDecodeError) as e:
        log_warning(f"Ignoring unreadable {toml_path}: {e}")
        return {}, None
      return data.get("tool", {}).get(TOOL_SECTION, {}), parent

  return {}, None


def parse_cli_key_values(items: Optional[List[str]]) -> Dict[str, str]:
  """
  Parses a list of 'KEY=VALUE' strings into a dictionary.

  Values stay strings, as they are environment-store entries.

  Args:
      items (Optional[List[str]]): Raw strings from argparse.

  Returns:
      Dict[str, str]: Parsed mapping.
  """
  if not items:
    return {}

  parsed = {}
  for item in items:
    if "=" not in item:
      log_warning(f"Ignoring invalid entry: '{item}'. Expected 'KEY=VALUE'.")
      continue
    key, value = item.split("=", 1)
    parsed[key.strip()] = value.strip()

  return parsed
