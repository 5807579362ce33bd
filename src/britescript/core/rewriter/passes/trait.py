"""
Trait Declaration Pass.

Rewrites `trait Name<G> { members }` into `interface Name<G> { members }`.
The body is copied verbatim: unlike struct fields, trait members are not
normalized.
"""

from typing import Optional

from britescript.core.rewriter.context import RewriterContext
from britescript.core.rewriter.interface import NodeRewriterPass
from britescript.core.syntax.nodes import Node, Sequence, TraitDecl, Verbatim
from britescript.enums import Construct


class TraitPass(NodeRewriterPass):
  """Rewrites trait declarations into interfaces."""

  construct = Construct.TRAIT
  node_type = TraitDecl

  def rewrite_node(self, node: Node, context: RewriterContext) -> Optional[Node]:
    if not isinstance(node, TraitDecl):
      return None

    result = Sequence([Verbatim(f"interface {node.name}{node.generics} {{"), *node.body.children, Verbatim("}")])
    context.tracer.log_rewrite(self.name, str(node), str(result))
    return result
