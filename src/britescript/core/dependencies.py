"""
Import Dependency Extraction.

Scans compiled text for static import statements and reports the module
specifiers they reference, so the host can watch and pre-bundle them.
"""

import re
from typing import List

# import X from 'm' / import { a, b } from "m" / import type T from 'm' / import 'm'
_IMPORT_RE = re.compile(
  r"""(?<![\w$.])import\s+(?:[^;'"`()]*?\bfrom\s*)?(?P<quote>['"])(?P<spec>[^'"\r\n]+)(?P=quote)""",
)


def extract_dependencies(code: str) -> List[str]:
  """
  Extracts import dependencies from code.

  Specifiers are returned in order of appearance; a module imported twice is
  listed twice. Dynamic ``import(...)`` expressions are not reported.

  Args:
      code: The source text to scan.

  Returns:
      List[str]: Module specifiers.
  """
  return [match.group("spec") for match in _IMPORT_RE.finditer(code)]
