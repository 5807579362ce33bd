"""
Pipe Chain Pass.

Folds `value |> f |> g(a)` into nested calls, left to right:

- `value |> f` becomes `f(value)`.
- `value |> f(a, b)` becomes `f(value, a, b)`.
- `value |> (x => x * 2)` becomes `(x => x * 2)(value)`.

Stage operands and argument lists are rendered after the children have been
rewritten, so pipes nested inside arguments are folded first.
"""

from typing import Optional

from britescript.core.rewriter.context import RewriterContext
from britescript.core.rewriter.interface import NodeRewriterPass
from britescript.core.syntax.nodes import Node, PipeExpr, PipeStage, Verbatim, render
from britescript.enums import Construct


def apply_stage(value: str, stage: PipeStage) -> str:
  """
  Applies one pipe stage to an already rendered value.

  Args:
      value: The rendered left operand.
      stage: The stage to apply.

  Returns:
      str: The call expression.
  """
  callee = render(stage.callee)
  if stage.args is None:
    return f"{callee}({value})"
  args = render(stage.args.children).strip()
  if not args:
    return f"{callee}({value})"
  return f"{callee}({value}, {args})"


class PipePass(NodeRewriterPass):
  """Rewrites pipe chains into nested calls."""

  construct = Construct.PIPE
  node_type = PipeExpr

  def rewrite_node(self, node: Node, context: RewriterContext) -> Optional[Node]:
    if not isinstance(node, PipeExpr):
      return None

    value = render(node.operand)
    for stage in node.stages:
      value = apply_stage(value, stage)

    context.tracer.log_rewrite(self.name, str(node), value)
    return Verbatim(value)
