from .transform import handle_transform
from .resolve import handle_resolve

__all__ = [
  "handle_resolve",
  "handle_transform",
]
