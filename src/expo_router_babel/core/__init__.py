"""
Core Package.

Contains the transformation logic:
- ``engine``: runs the pass pipeline over one file.
- ``rewriter``: pass interface, context, pipeline and the two passes.
- ``exports`` / ``stubs`` / ``manifest``: export enumeration and the two views
  (server stubs, client manifest) of a client boundary's export surface.
"""
