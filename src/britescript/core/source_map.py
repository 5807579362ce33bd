"""
Source Map Emission.

Produces a structurally valid version 3 source map for a compiled file. The
``mappings`` table is left empty: hosts get the original content for display
but position fidelity is best-effort only.
"""

import json

SOURCE_MAP_VERSION = 3


def generate_source_map(identifier: str, original_code: str) -> str:
  """
  Generates a placeholder source map.

  Args:
      identifier: File identifier, used for both ``file`` and ``sources``.
      original_code: The text before compilation (embedded as ``sourcesContent``).

  Returns:
      str: Compact JSON encoding of the map.
  """
  payload = {
    "version": SOURCE_MAP_VERSION,
    "file": identifier,
    "sources": [identifier],
    "sourcesContent": [original_code],
    "names": [],
    "mappings": "",
  }
  return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
