"""
Rewriter Context Module.

This module provides the `RewriterContext` container, which holds the state
shared by the passes of one compilation: the source unit, the options, the
trace logger and the accumulated warnings. A context is created per
compilation and discarded afterwards.
"""

from typing import List, Optional

from britescript.config import CompilerOptions
from britescript.core.compile_result import SourceUnit
from britescript.core.tracer import TraceLogger


class RewriterContext:
  """
  Shared state container for the rewriting pipeline.
  """

  def __init__(
    self,
    unit: SourceUnit,
    options: CompilerOptions,
    tracer: Optional[TraceLogger] = None,
    build_mode: bool = False,
    is_ssr: bool = False,
  ):
    """
    Initializes the context.

    Args:
        unit: The file being compiled.
        options: The compiler options for the compilation.
        tracer: Trace logger of the compilation (a fresh one if omitted).
        build_mode: True when the host is producing a production build.
        is_ssr: True when the host compiles for server-side rendering.
    """
    self.unit = unit
    self.options = options
    self.tracer = tracer or TraceLogger()
    self.build_mode = build_mode
    self.is_ssr = is_ssr
    self.warnings: List[str] = []

  def warn(self, message: str) -> None:
    """
    Records a non-fatal diagnostic.

    Args:
        message: Human readable warning.
    """
    self.warnings.append(message)
    self.tracer.log_warning(message)
