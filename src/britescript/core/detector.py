"""
Extended Syntax Detector.

A cheap pre-scan deciding whether a file contains any Britescript construct at
all. Files without a marker skip tokenization and rewriting entirely and are
returned byte-identical.

The scan is deliberately conservative: a marker inside a comment or string
still counts as a hit. The rewriter is lossless for text it does not change,
so a false positive only costs time.
"""

import re
from typing import Dict, List, Pattern

from britescript.enums import Construct

_GENERICS = r"(?:<[^{};]*?>)?"
_NAME = r"[A-Za-z_$][\w$]*"
# Whitespace or comments between the words of a declaration head.
_GAP = r"(?:\s|/\*.*?\*/|//[^\n]*)+"

MARKERS: Dict[Construct, Pattern[str]] = {
  Construct.STRUCT: re.compile(r"\bstruct" + _GAP + _NAME, re.S),
  Construct.TRAIT: re.compile(r"\btrait" + _GAP + _NAME, re.S),
  Construct.IMPL: re.compile(r"\bimpl" + _GAP + _NAME + _GENERICS + _GAP + r"for" + _GAP + _NAME, re.S),
  Construct.LET: re.compile(r"\blet\s+(?:[^\W\d]|[$\[{])"),
  Construct.PIPE: re.compile(r"\|>"),
}


def marker_present(construct: Construct, text: str) -> bool:
  """
  Checks a single construct marker.

  Args:
      construct: The construct to look for.
      text: Raw source text.

  Returns:
      bool: True if the marker occurs at least once.
  """
  return MARKERS[construct].search(text) is not None


def detected_constructs(text: str) -> List[Construct]:
  """
  Lists the constructs whose markers occur in the text, in rewrite order.

  Args:
      text: Raw source text.

  Returns:
      List[Construct]: Detected constructs.
  """
  return [construct for construct in MARKERS if marker_present(construct, text)]


def contains_extended_syntax(text: str) -> bool:
  """
  Checks if code contains Britescript-specific syntax.

  Args:
      text: Raw source text.

  Returns:
      bool: True if any recognised marker is present.
  """
  return any(pattern.search(text) for pattern in MARKERS.values())
