"""
CLI Command Handlers Facade.

Re-exports the handlers from `expo_router_babel.cli.handlers` so the
dispatcher and tests have a single import point.
"""

from expo_router_babel.cli.handlers.transform import handle_transform
from expo_router_babel.cli.handlers.resolve import handle_resolve

__all__ = [
  "handle_resolve",
  "handle_transform",
]
