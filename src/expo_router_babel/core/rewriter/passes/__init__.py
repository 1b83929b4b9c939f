"""
Transformation Passes Package.
"""

from expo_router_babel.core.rewriter.passes.env_inlining import EnvInliningPass, EnvInliningTransformer
from expo_router_babel.core.rewriter.passes.client_boundary import ClientBoundaryPass, ClientBoundaryTransformer

__all__ = [
  "ClientBoundaryPass",
  "ClientBoundaryTransformer",
  "EnvInliningPass",
  "EnvInliningTransformer",
]
