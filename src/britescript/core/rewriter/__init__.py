"""
Rewriter Package.

Holds the declared pass pipeline that turns the parsed syntax tree into plain
TypeScript:

- Struct: `struct` declarations to type aliases.
- Trait: `trait` declarations to interfaces.
- Impl: `impl ... for` blocks to classes.
- Let: `let` to `const`.
- Pipe: `|>` chains to nested calls.
"""

from britescript.core.rewriter.context import RewriterContext
from britescript.core.rewriter.interface import NodeRewriterPass, RewriterPass
from britescript.core.rewriter.pipeline import RewriterPipeline, default_pipeline

__all__ = [
  "RewriterContext",
  "RewriterPass",
  "NodeRewriterPass",
  "RewriterPipeline",
  "default_pipeline",
]
