"""
Syntax Tree Package.

Helpers for Babel-AST JSON trees:
- ``nodes``: predicates and builders for individual nodes.
- ``visitor``: the copy-on-write ``NodeTransformer`` used by the passes.
"""

from expo_router_babel.tree.visitor import NodeTransformer, REMOVE

__all__ = ["NodeTransformer", "REMOVE"]
