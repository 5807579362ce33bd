"""
Transformation Passes Package.
"""

from britescript.core.rewriter.passes.struct import StructPass
from britescript.core.rewriter.passes.trait import TraitPass
from britescript.core.rewriter.passes.impl import ImplPass
from britescript.core.rewriter.passes.let import LetPass
from britescript.core.rewriter.passes.pipe import PipePass

__all__ = [
  "StructPass",
  "TraitPass",
  "ImplPass",
  "LetPass",
  "PipePass",
]
