"""
Pydantic schemas for the app configuration.

Only the settings the router passes read are modelled; every other key in
``app.json`` is kept as an extra field and ignored.

Example ``app.json``::

    {
      "expo": {
        "web": {"output": "static"},
        "extra": {"router": {"asyncRoutes": {"web": "development", "default": false}}}
      }
    }
"""

import json
from pathlib import Path
from typing import Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from expo_router_babel.errors import ProjectConfigError

AsyncRoutesValue = Union[bool, str, None]

CONFIG_FILENAMES = ("app.json", "app.config.json")


class RouterOptions(BaseModel):
  """``expo.extra.router``: the router config plugin props."""

  model_config = ConfigDict(extra="allow", populate_by_name=True)

  async_routes: Union[bool, str, Dict[str, AsyncRoutesValue], None] = Field(
    None,
    alias="asyncRoutes",
    description="Environment name, boolean, or per-platform mapping with a 'default' key.",
  )
  unstable_src: Optional[str] = Field(None, description="Custom routes directory, absolute or project-relative.")


class ExtraConfig(BaseModel):
  model_config = ConfigDict(extra="allow")

  router: Optional[RouterOptions] = None


class WebOptions(BaseModel):
  model_config = ConfigDict(extra="allow")

  output: Optional[str] = Field(None, description="'single', 'static' or 'server'.")


class ExpoConfig(BaseModel):
  """The ``expo`` object of the app config."""

  model_config = ConfigDict(extra="allow")

  extra: ExtraConfig = Field(default_factory=ExtraConfig)
  web: WebOptions = Field(default_factory=WebOptions)

  @property
  def router(self) -> RouterOptions:
    """Router options, empty when not configured."""
    return self.extra.router or RouterOptions()


class ProjectConfig(BaseModel):
  """
  Resolved configuration of one project root.
  """

  model_config = ConfigDict(frozen=True)

  exp: ExpoConfig = Field(default_factory=ExpoConfig)


def load_project_config(project_root: str) -> ProjectConfig:
  """
  Reads the app config of a project.

  The first existing file of ``app.json`` and ``app.config.json`` is used. Its
  ``expo`` key holds the config; a document without one is taken as the
  config itself. A project with neither file gets an empty config.

  Args:
      project_root: Project directory.

  Returns:
      ProjectConfig: The validated configuration.

  Raises:
      ProjectConfigError: If the file is not valid JSON or fails validation.
  """
  for filename in CONFIG_FILENAMES:
    path = Path(project_root, filename)
    if not path.is_file():
      continue
    try:
      raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
      raise ProjectConfigError(f"Failed to read {path}: {e}") from e

    if not isinstance(raw, dict):
      raise ProjectConfigError(f"{path} must contain a JSON object")

    exp = raw.get("expo", raw)
    try:
      return ProjectConfig(exp=ExpoConfig.model_validate(exp))
    except ValidationError as e:
      raise ProjectConfigError(f"Invalid app config in {path}: {e}") from e

  return ProjectConfig()
