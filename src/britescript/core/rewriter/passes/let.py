"""
Let Binding Pass.

Substitutes every `let` binding keyword with `const`. No reassignment
analysis is performed: a `let` binding that is later reassigned compiles to a
`const` the downstream compiler rejects.
"""

from typing import Optional

from britescript.core.rewriter.context import RewriterContext
from britescript.core.rewriter.interface import NodeRewriterPass
from britescript.core.syntax.nodes import LetBinding, Node, Verbatim
from britescript.enums import Construct

CONST_KEYWORD = "const"


class LetPass(NodeRewriterPass):
  """Rewrites `let` to `const`."""

  construct = Construct.LET
  node_type = LetBinding

  def rewrite_node(self, node: Node, context: RewriterContext) -> Optional[Node]:
    if not isinstance(node, LetBinding):
      return None
    context.tracer.log_rewrite(self.name, str(node), CONST_KEYWORD)
    return Verbatim(CONST_KEYWORD)
