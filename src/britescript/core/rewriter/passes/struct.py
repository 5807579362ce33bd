"""
Struct Declaration Pass.

Rewrites `struct Name<G> { field; field }` into the type alias
`type Name<G> = {\n  field;\n  field;\n};`.

The body is split on top-level `;` separators only, so object types nested in
a field (`meta: { a: string; b: number }`) stay attached to their field.
Blank fields are dropped and every field is re-terminated with `;`.
"""

from typing import List, Optional

from britescript.core.rewriter.context import RewriterContext
from britescript.core.rewriter.interface import NodeRewriterPass
from britescript.core.syntax.nodes import Leaf, Node, Sequence, StructDecl, Verbatim
from britescript.core.syntax.tokens import TokenKind
from britescript.enums import Construct


def _is_whitespace(node: Node) -> bool:
  return isinstance(node, Leaf) and node.kind == TokenKind.WHITESPACE


def _strip(nodes: List[Node]) -> List[Node]:
  start, end = 0, len(nodes)
  while start < end and _is_whitespace(nodes[start]):
    start += 1
  while end > start and _is_whitespace(nodes[end - 1]):
    end -= 1
  return nodes[start:end]


def split_fields(children: List[Node]) -> List[List[Node]]:
  """
  Splits a struct body into its non-blank fields.

  Args:
      children: Nodes between the braces of the body.

  Returns:
      List of fields, each a node list without surrounding whitespace.
  """
  fields: List[List[Node]] = []
  current: List[Node] = []
  for child in children:
    if isinstance(child, Leaf) and child.token.is_punct(";"):
      fields.append(current)
      current = []
    else:
      current.append(child)
  fields.append(current)

  return [f for f in (_strip(segment) for segment in fields) if f]


class StructPass(NodeRewriterPass):
  """Rewrites struct declarations into type aliases."""

  construct = Construct.STRUCT
  node_type = StructDecl

  def rewrite_node(self, node: Node, context: RewriterContext) -> Optional[Node]:
    if not isinstance(node, StructDecl):
      return None

    fields = split_fields(node.body.children)
    head = f"type {node.name}{node.generics} = {{"
    if not fields:
      result = Sequence([Verbatim(f"{head}}};")])
    else:
      parts: List[Node] = [Verbatim(head)]
      for field_nodes in fields:
        parts.append(Verbatim("\n  "))
        parts.extend(field_nodes)
        parts.append(Verbatim(";"))
      parts.append(Verbatim("\n};"))
      result = Sequence(parts)

    context.tracer.log_rewrite(self.name, str(node), str(result))
    return result
