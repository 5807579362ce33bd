"""
File Eligibility Filter.

Decides which host identifiers the compiler should see. An identifier is
eligible iff it matches at least one include pattern and no exclude pattern.
An empty include list admits every identifier.
"""

import re
from typing import Callable, Iterable

from britescript.config import CompilerOptions, PatternLike

VIRTUAL_MODULE_MARKER = "\0"


def _normalize_identifier(identifier: str) -> str:
  return identifier.replace("\\", "/")


def matches_pattern(identifier: str, pattern: PatternLike) -> bool:
  """
  Tests one pattern against an identifier.

  Args:
      identifier: Normalized file identifier.
      pattern: Compiled regex (searched) or literal substring.

  Returns:
      bool: True on match.
  """
  if isinstance(pattern, re.Pattern):
    return pattern.search(identifier) is not None
  return pattern in identifier


def _matches_any(identifier: str, patterns: Iterable[PatternLike]) -> bool:
  return any(matches_pattern(identifier, p) for p in patterns)


def create_filter(options: CompilerOptions) -> Callable[[str], bool]:
  """
  Creates a filter function for determining which files to transform.

  Identifiers containing a NUL byte denote virtual modules owned by other
  plugins and are always rejected.

  Args:
      options: Compiler options providing include/exclude patterns.

  Returns:
      Callable[[str], bool]: Predicate over file identifiers.
  """
  include = list(options.include_patterns)
  exclude = list(options.exclude_patterns)

  def _filter(identifier: str) -> bool:
    if VIRTUAL_MODULE_MARKER in identifier:
      return False
    normalized = _normalize_identifier(identifier)
    if exclude and _matches_any(normalized, exclude):
      return False
    if not include:
      return True
    return _matches_any(normalized, include)

  return _filter
