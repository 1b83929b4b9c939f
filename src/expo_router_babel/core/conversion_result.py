"""
Data structures representing the output of the transformation pipeline.

This module defines the `TransformResult` Pydantic model, which carries the
rewritten tree, the file metadata for the host, and any errors.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from expo_router_babel.core.manifest import METADATA_KEY, ExportManifestEntry


class TransformResult(BaseModel):
  """
  Container for the result of transforming one file.

  A failed transformation carries no tree, so no partially rewritten output
  can reach the bundle.
  """

  tree: Optional[Dict[str, Any]] = Field(default=None, description="The transformed Babel AST.")
  metadata: Dict[str, Any] = Field(default_factory=dict, description="Side-channel metadata for the host.")
  errors: List[str] = Field(default_factory=list, description="Error messages of a failed run.")
  success: bool = Field(default=True, description="False if a pass raised a fatal error.")

  @property
  def client_references(self) -> Optional[ExportManifestEntry]:
    """The manifest entry recorded for a client module, if any."""
    record = self.metadata.get(METADATA_KEY)
    if record is None:
      return None
    return ExportManifestEntry.model_validate(record)
