"""
Implementation Block Pass.

Rewrites `impl Trait<G> for Struct { body }` into a class binding the trait to
the struct:

```typescript
class StructTraitImpl<G> implements Trait<G> {
  constructor(private data: Struct) {}
  body
}
```

The binding is nominal only; the body is not checked against the members
the trait declares.
"""

from typing import Optional

from britescript.core.rewriter.context import RewriterContext
from britescript.core.rewriter.interface import NodeRewriterPass
from britescript.core.syntax.nodes import ImplDecl, Node, Sequence, Verbatim
from britescript.enums import Construct


def class_name(node: ImplDecl) -> str:
  """Returns the generated class name, e.g. `UserDisplayableImpl`."""
  return f"{node.target}{node.trait}Impl"


class ImplPass(NodeRewriterPass):
  """Rewrites impl blocks into classes."""

  construct = Construct.IMPL
  node_type = ImplDecl

  def rewrite_node(self, node: Node, context: RewriterContext) -> Optional[Node]:
    if not isinstance(node, ImplDecl):
      return None

    head = (
      f"class {class_name(node)}{node.generics} implements {node.trait}{node.generics} {{\n"
      f"  constructor(private data: {node.target}{node.target_generics}) {{}}"
    )
    # The body stays as nodes so that the let and pipe passes still reach it.
    result = Sequence([Verbatim(head), *node.body.children, Verbatim("}")])
    context.tracer.log_rewrite(self.name, str(node), str(result))
    return result
