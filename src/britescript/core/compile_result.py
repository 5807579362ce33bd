"""
Data structures representing the input and output of a compilation.

This module defines the `SourceUnit` describing one file handed over by the host,
the `CompileRequest` wrapping it with host flags, and the `CompileResult` returned
for every invocation.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from britescript.config import CompilerOptions

MARKUP_SUFFIX = ".bsx"
SOURCE_SUFFIX = ".bs"


class SourceUnit(BaseModel):
  """
  Immutable description of a single file to compile.
  """

  model_config = ConfigDict(frozen=True)

  identifier: str = Field(description="Host identifier of the file (usually its path).")
  text: str = Field(description="Raw source text.")
  is_markup_variant: bool = Field(False, description="True for .bsx files, which may embed markup.")

  @classmethod
  def from_identifier(cls, identifier: str, text: str) -> "SourceUnit":
    """
    Builds a unit, deriving the markup flag from the identifier's suffix.

    Args:
        identifier: File identifier.
        text: Source text.

    Returns:
        SourceUnit: The unit.
    """
    return cls(identifier=identifier, text=text, is_markup_variant=identifier.endswith(MARKUP_SUFFIX))


class CompileRequest(BaseModel):
  """
  A compilation request as issued by the build-tool collaborator.
  """

  identifier: str
  source_text: str
  options: CompilerOptions = Field(default_factory=CompilerOptions)
  build_mode: bool = False
  is_ssr: bool = False


class CompileResult(BaseModel):
  """
  Container for the results of a compilation.

  Either ``code`` carries the output or ``errors`` explains why there is none.
  """

  code: str = Field(default="", description="The generated source code.")
  map: Optional[str] = Field(default=None, description="Serialized version 3 source map.")
  dependencies: List[str] = Field(default_factory=list, description="Import specifiers in first-seen order.")
  warnings: List[str] = Field(default_factory=list, description="Non-fatal diagnostics.")
  errors: List[str] = Field(default_factory=list, description="Fatal diagnostics; code is empty when present.")
  trace_events: List[Dict[str, Any]] = Field(default_factory=list, description="Execution trace log data.")

  @property
  def success(self) -> bool:
    """
    True when the compilation produced code.

    Returns:
        True if no errors were recorded.
    """
    return not self.errors

  @property
  def has_errors(self) -> bool:
    """
    Check if the result contains any error messages.

    Returns:
        True if errors are present.
    """
    return len(self.errors) > 0

  @property
  def has_warnings(self) -> bool:
    return len(self.warnings) > 0
