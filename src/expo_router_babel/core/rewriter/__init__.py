"""
Rewriter Package.

Pass interface, per-file context and the pipeline that runs the passes:
- ``EnvInliningPass``: inlines router build settings read from ``process.env``.
- ``ClientBoundaryPass``: handles ``"use client"`` modules.
"""

from expo_router_babel.core.rewriter.context import RewriterContext
from expo_router_babel.core.rewriter.interface import RewriterPass
from expo_router_babel.core.rewriter.pipeline import RewriterPipeline
from expo_router_babel.core.rewriter.passes import ClientBoundaryPass, EnvInliningPass

__all__ = [
  "ClientBoundaryPass",
  "EnvInliningPass",
  "RewriterContext",
  "RewriterPass",
  "RewriterPipeline",
]
