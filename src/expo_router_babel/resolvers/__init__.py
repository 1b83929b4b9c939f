"""
Resolvers Package.

Build-time values inlined by the environment pass:
- ``ConfigResolver``: memoized app config per project root.
- ``RouterModeResolver``: ``sync`` / ``lazy`` route loading per platform.
- ``AppRootResolver``: absolute and entry-relative routes directory.
"""

from expo_router_babel.resolvers.config_resolver import ConfigResolver
from expo_router_babel.resolvers.router_mode import RouterModeResolver
from expo_router_babel.resolvers.app_root import AppRootResolver

__all__ = ["AppRootResolver", "ConfigResolver", "RouterModeResolver"]
