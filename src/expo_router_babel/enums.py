"""
Enumerations for expo-router-babel.

This module defines the closed value sets shared by the resolvers and the
rewriting passes: build platforms, route import modes and web output modes.
"""

from enum import Enum


class Platform(str, Enum):
  """
  Build platforms a bundler caller can request.

  The value doubles as the suffix of the per-platform import-mode variable
  (``EXPO_ROUTER_IMPORT_MODE_<PLATFORM>``) once upper-cased.
  """

  IOS = "ios"
  ANDROID = "android"
  WEB = "web"


class ImportMode(str, Enum):
  """
  How route modules are loaded by the router.
  """

  SYNC = "sync"  # Eager, bundled with the entry
  LAZY = "lazy"  # On first navigation


class WebOutput(str, Enum):
  """
  Values of the ``web.output`` app config setting.
  """

  SINGLE = "single"
  STATIC = "static"
  SERVER = "server"
