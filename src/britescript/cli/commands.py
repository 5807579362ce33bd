"""
CLI Command Handlers Facade.

This module re-exports handlers from `britescript.cli.handlers` so the
dispatcher and tests share one import location.
"""

from britescript.cli.handlers.compile import (
  handle_compile,
  _compile_single_file,
  _print_batch_summary,
)
from britescript.cli.handlers.scan import handle_scan

__all__ = [
  "handle_compile",
  "handle_scan",
  "_compile_single_file",
  "_print_batch_summary",
]
