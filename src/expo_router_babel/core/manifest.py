"""
Client reference manifest entries.

On the client graph a ``"use client"`` module is left intact and its export
surface is recorded under ``metadata["clientReferences"]``. The host
aggregates the entries of all files into the client reference map.
"""

from typing import Any, Dict, Iterable, List

from pydantic import BaseModel, ConfigDict, Field

METADATA_KEY = "clientReferences"


class ExportManifestEntry(BaseModel):
  """
  Export surface of one client module.

  Serialized with the host's camelCase keys (``entryPoint``).
  """

  model_config = ConfigDict(frozen=True, populate_by_name=True)

  entry_point: str = Field(..., alias="entryPoint", description="Root-relative POSIX path with a leading '/'.")
  exports: List[str] = Field(default_factory=list, description="Exported names in declaration order.")

  def to_metadata(self) -> Dict[str, Any]:
    return self.model_dump(by_alias=True)


def collect_manifest(metadata_records: Iterable[Dict[str, Any]]) -> List[ExportManifestEntry]:
  """
  Gathers the manifest entries out of per-file metadata dicts.

  Files without an entry are skipped. The result is sorted by entry point so
  the aggregated manifest does not depend on file processing order.

  Args:
      metadata_records: The ``metadata`` of each transformed file.

  Returns:
      List[ExportManifestEntry]: One entry per client module.
  """
  entries = [
    ExportManifestEntry.model_validate(record[METADATA_KEY]) for record in metadata_records if METADATA_KEY in record
  ]
  return sorted(entries, key=lambda entry: entry.entry_point)
